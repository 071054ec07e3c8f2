from __future__ import annotations

import json
import os
import re
import subprocess
import sys

from fqnkit import cli as cli_mod


def _run_cli(
    *args: str,
    stdin: str | None = None,
    env: dict[str, str] | None = None,
) -> subprocess.CompletedProcess[str]:
    merged_env = os.environ.copy()
    merged_env.pop("FQNKIT_LOG_MODE", None)
    if env:
        merged_env.update(env)

    return subprocess.run(
        [sys.executable, "-m", "fqnkit.cli", *args],
        check=False,
        capture_output=True,
        text=True,
        input=stdin,
        env=merged_env,
    )


def test_cli_no_args_shows_start_card() -> None:
    result = _run_cli()

    assert result.returncode == 0, result.stderr
    assert "Start here:" in result.stdout
    assert "fqnkit check" in result.stdout


def test_cli_help_examples() -> None:
    result = _run_cli("help", "examples")

    assert result.returncode == 0, result.stderr
    assert "Quick examples:" in result.stdout


def test_cli_version_short_flag() -> None:
    result = _run_cli("-v")

    assert result.returncode == 0, result.stderr
    assert re.match(r"^fqnkit\s+\S+\s*$", result.stdout)


def test_cli_check_valid_names() -> None:
    result = _run_cli("check", "a.b.c.Name", "solo")

    assert result.returncode == 0, result.stderr
    lines = result.stdout.strip().splitlines()
    assert lines[0] == "a.b.c.Name\tok\t4 parts\tleaf=Name"
    assert lines[1] == "solo\tok\tsimple\tleaf=solo"


def test_cli_check_invalid_name_fails() -> None:
    result = _run_cli("check", "a..b", "ok")

    assert result.returncode == 1
    assert "a..b\tinvalid" in result.stdout
    assert "ok\tok" in result.stdout


def test_cli_check_json() -> None:
    result = _run_cli("check", "pkg.Type", "1abc", "--json")

    assert result.returncode == 1
    payload = json.loads(result.stdout)
    assert payload[0] == {
        "valid": True,
        "name": "pkg.Type",
        "parts": ["pkg", "Type"],
        "leaf": "Type",
        "simple": False,
    }
    assert payload[1]["valid"] is False
    assert "1abc" in payload[1]["error"]


def test_cli_scan_file_reports_positions(tmp_path) -> None:
    source = tmp_path / "source.txt"
    source.write_text("x = pkg.mod.build(1)\n  other.Name\n", encoding="utf-8")

    result = _run_cli("scan", str(source), "--json")

    assert result.returncode == 0, result.stderr
    payload = json.loads(result.stdout)
    assert payload == [
        {"name": "x", "line": 1, "column": 1},
        {"name": "pkg.mod.build", "line": 1, "column": 5},
        {"name": "other.Name", "line": 2, "column": 3},
    ]


def test_cli_scan_stdin_unique() -> None:
    result = _run_cli("scan", "--unique", stdin="a.b a.b c\na.b\n")

    assert result.returncode == 0, result.stderr
    assert result.stdout.strip().splitlines() == ["1:1\ta.b", "1:9\tc"]


def test_cli_scan_missing_file_reports_error(tmp_path) -> None:
    result = _run_cli("scan", str(tmp_path / "missing.txt"))

    assert result.returncode == 1
    assert "fqnkit error:" in result.stderr


def test_cli_debug_logs_go_to_stderr() -> None:
    result = _run_cli("-d", "scan", stdin="a.b\n")

    assert result.returncode == 0, result.stderr
    assert result.stdout.strip() == "1:1\ta.b"
    assert "scan" in result.stderr


def test_main_check_in_process(capsys) -> None:
    assert cli_mod.main(["check", "alpha.beta"]) == 0
    captured = capsys.readouterr()
    assert "alpha.beta\tok" in captured.out
