from __future__ import annotations


# TOML file containing the advisory database
ADVISORY_DB_URL = "https://raw.githubusercontent.com/RustSec/advisory-db/master/Advisories.toml"


def get_crate_url(package: str) -> str:
	return f"https://crates.io/crates/{package}"
