from __future__ import annotations

import logging

from rustsec.app.cli import app


def test_fetch(runner, sample_db_file):
    result = runner.invoke(app, ["--db", str(sample_db_file), "fetch"])
    assert result.exit_code == 0, result.output
    assert "Loaded 5 advisories for 4 packages" in result.output


def test_show(runner, sample_db_file):
    result = runner.invoke(app, ["--db", str(sample_db_file), "show", "RUSTSEC-2019-0009"])
    assert result.exit_code == 0, result.output
    assert "Package:  smallvec" in result.output
    assert "CVE-2019-15551" in result.output
    assert "CRITICAL" in result.output
    assert "https://rustsec.org/advisories/RUSTSEC-2019-0009" in result.output


def test_show_not_found(runner, sample_db_file):
    result = runner.invoke(app, ["--db", str(sample_db_file), "show", "RUSTSEC-2099-0001"])
    assert result.exit_code == 1
    assert "Not found" in result.output


def test_package(runner, sample_db_file):
    result = runner.invoke(app, ["--db", str(sample_db_file), "package", "smallvec"])
    assert result.exit_code == 0, result.output
    lines = result.output.splitlines()
    assert lines[0].startswith("ID")
    assert lines[1].startswith("RUSTSEC-2018-0003")
    assert lines[2].startswith("RUSTSEC-2019-0009")


def test_package_obsolete_needs_all(runner, sample_db_file):
    result = runner.invoke(app, ["--db", str(sample_db_file), "package", "openssl"])
    assert result.exit_code == 0
    assert "No advisories for openssl (https://crates.io/crates/openssl)" in result.output

    result = runner.invoke(app, ["--db", str(sample_db_file), "package", "openssl", "--all"])
    assert "RUSTSEC-2016-0001" in result.output


def test_list_with_filter_and_limit(runner, sample_db_file):
    result = runner.invoke(app, ["--db", str(sample_db_file), "list", "-f", "year >= 2018", "--limit", "2"])
    assert result.exit_code == 0, result.output
    assert "RUSTSEC-2018-0003" in result.output
    assert "RUSTSEC-2019-0009" in result.output
    assert "RUSTSEC-2020-0036" not in result.output


def test_list_shows_informational_kind(runner, sample_db_file):
    result = runner.invoke(app, ["--db", str(sample_db_file), "list"])
    assert result.exit_code == 0
    line = next(l for l in result.output.splitlines() if l.startswith("RUSTSEC-2020-0036"))
    assert "unmaintained" in line


def test_list_filter_error(runner, sample_db_file):
    result = runner.invoke(app, ["--db", str(sample_db_file), "list", "-f", "bogus > 1"])
    assert result.exit_code == 1
    assert "Filter error" in result.output


def test_missing_database_file(runner, tmp_path):
    result = runner.invoke(app, ["--db", str(tmp_path / "missing.toml"), "fetch"])
    assert result.exit_code == 1
    assert "Advisory data unavailable" in result.output


def test_invalid_database_file(runner, tmp_path):
    path = tmp_path / "Advisories.toml"
    path.write_text('[[advisory]]\npackage = "foo"\ndate = "2021-01-01"\n', encoding="utf-8")
    result = runner.invoke(app, ["--db", str(path), "fetch"])
    assert result.exit_code == 1
    assert "missing required attribute" in result.output


def test_clear(runner):
    result = runner.invoke(app, ["clear"])
    assert result.exit_code == 0
    assert "Cache cleared" in result.output


def test_log_level_option(runner, sample_db_file):
    logger = logging.getLogger("rustsec")
    handlers = list(logger.handlers)
    try:
        result = runner.invoke(app, ["--log-level", "DEBUG", "--db", str(sample_db_file), "fetch"])
        assert result.exit_code == 0, result.output
        assert logger.level == logging.DEBUG
    finally:
        logger.handlers = handlers
        logger.propagate = True
        logger.setLevel(logging.NOTSET)
