"""tests/rustsec/conftest.py

Common fixtures for the entire test suite.
"""

import json
from pathlib import Path

import httpx
import pytest
from typer.testing import CliRunner


SAMPLE_TOML = '''
[[advisory]]
id = "RUSTSEC-2017-0001"
package = "sodiumoxide"
date = "2017-01-26"
title = "scalarmult() vulnerable to degenerate public keys"
description = """
The `scalarmult()` function included in previous versions of this crate
accepted all-zero public keys, for which the resulting Diffie-Hellman shared
secret will always be zero regardless of the private key used.
"""
patched_versions = [">= 0.0.14"]
url = "https://github.com/dnaq/sodiumoxide/issues/154"

[[advisory]]
id = "RUSTSEC-2018-0003"
package = "smallvec"
date = "2018-07-19"
title = "Possible double free during unwinding in SmallVec::insert_many"
categories = ["memory-corruption"]
keywords = ["double free", "unwind"]
patched_versions = [">= 0.6.3"]
unaffected_versions = ["< 0.3.2"]
url = "https://github.com/servo/rust-smallvec/issues/96"

[[advisory]]
id = "RUSTSEC-2019-0009"
package = "smallvec"
date = "2019-06-06"
title = "Double-free and use-after-free in SmallVec::grow()"
aliases = ["CVE-2019-15551"]
categories = ["memory-corruption"]
cvss = "CVSS:3.1/AV:N/AC:L/PR:N/UI:N/S:U/C:H/I:H/A:H"
patched_versions = [">= 0.6.10"]
unaffected_versions = ["< 0.6.5"]

[[advisory]]
id = "RUSTSEC-2020-0036"
package = "failure"
date = 2020-05-02
title = "failure is officially deprecated/unmaintained"
informational = "unmaintained"
references = ["RUSTSEC-2019-0036"]

[[advisory]]
id = "RUSTSEC-2016-0001"
package = "openssl"
date = "2016-07-20"
title = "SSL/TLS MitM vulnerability due to insecure defaults"
obsolete = true
patched_versions = [">= 0.9.0"]
'''


@pytest.fixture(scope="session")
def runner() -> CliRunner:
    """Provides a Typer CliRunner instance."""
    return CliRunner()


@pytest.fixture
def sample_toml() -> str:
    return SAMPLE_TOML


@pytest.fixture
def sample_db_file(tmp_path: Path) -> Path:
    path = tmp_path / "Advisories.toml"
    path.write_text(SAMPLE_TOML, encoding="utf-8")
    return path


@pytest.fixture(autouse=True)
def tmp_cache_dir(tmp_path: Path, monkeypatch):
    """
    Redirects the document cache to a temporary location for test isolation.
    This fixture runs automatically for every test function.
    """
    cache_dir = tmp_path / "cache"
    cache_dir.mkdir()
    monkeypatch.setenv("RUSTSEC_CACHE_DIR", str(cache_dir))
    yield cache_dir


@pytest.fixture
def mock_httpx_client(monkeypatch):
    """
    Replaces httpx.Client with a mock that uses a MockTransport.

    Returns a handler function that tests can use to register mock responses.
    """
    responses = {}
    calls_log: list[tuple[str, str]] = []
    original_client = httpx.Client

    def add_response(
        url: str,
        method: str = "GET",
        status_code: int = 200,
        json_payload: dict | None = None,
        content: bytes | None = None,
    ):
        """Register a mock response for a given URL and method."""
        if json_payload is not None:
            body = json.dumps(json_payload).encode("utf-8")
        else:
            body = content if content is not None else b""
        responses[(method.upper(), url)] = (status_code, body)

    def mock_transport(request: httpx.Request) -> httpx.Response:
        """The transport logic that returns registered responses or a 404."""
        key = (request.method, str(request.url))
        calls_log.append(key)
        if key in responses:
            status, body = responses[key]
            headers = {"Content-Length": str(len(body))}
            return httpx.Response(status, content=body, headers=headers)

        return httpx.Response(404, text=f"Mock URL not found: {request.method} {request.url}")

    def patched_client(*args, **kwargs):
        kwargs["transport"] = httpx.MockTransport(mock_transport)
        return original_client(*args, **kwargs)

    monkeypatch.setattr(httpx, "Client", patched_client)
    add_response.calls = calls_log  # type: ignore[attr-defined]
    return add_response
