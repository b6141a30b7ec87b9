# SPDX-License-Identifier: MIT
"""End-to-end tests for the clawscan command line."""

import json
import os
import subprocess
import sys
from pathlib import Path

import pytest

from clawscan import __version__
from clawscan.cli import EXIT_ERROR, EXIT_FINDINGS, EXIT_OK, main

project_root = Path(__file__).parent.parent.parent

MEDIUM_ONLY_COMPOSE = "services:\n  app:\n    image: app:1.0\n    read_only: true\n"


@pytest.fixture
def leaky_repo(make_tree, keys):
    return make_tree({".git/": None, ".env": f"OPENAI_KEY={keys.openai}\n"})


def test_version_command(capsys):
    assert main(["version"]) == EXIT_OK
    assert capsys.readouterr().out.strip() == __version__


def test_version_flag(capsys):
    assert main(["--version"]) == EXIT_OK
    assert capsys.readouterr().out.strip() == __version__


def test_clean_directory_exits_zero(tmp_path, capsys):
    (tmp_path / "main.py").write_text("print('hello')\n")

    assert main(["scan", str(tmp_path), "--no-color"]) == EXIT_OK

    captured = capsys.readouterr()
    assert "No security issues found!" in captured.out
    assert "Scanning" in captured.err


def test_findings_exit_one_with_json(leaky_repo, capsys):
    assert main(["scan", str(leaky_repo), "--format", "json"]) == EXIT_FINDINGS

    captured = capsys.readouterr()
    payload = json.loads(captured.out)
    titles = {f["title"] for f in payload["findings"]}
    assert "Exposed OpenAI API Key" in titles
    assert "Missing .gitignore File" in titles
    assert "Scanning" not in captured.err


def test_fail_on_threshold(make_tree, capsys):
    root = make_tree({"docker-compose.yml": MEDIUM_ONLY_COMPOSE})

    assert main(["scan", str(root), "-f", "json"]) == EXIT_OK
    assert main(["scan", str(root), "-f", "json", "--fail-on", "medium"]) == EXIT_FINDINGS


def test_severity_filter(leaky_repo, capsys):
    main(["scan", str(leaky_repo), "-f", "json", "-s", "critical"])

    payload = json.loads(capsys.readouterr().out)
    assert {f["severity"] for f in payload["findings"]} == {"critical"}


def test_scanner_selection(leaky_repo, capsys):
    main(["scan", str(leaky_repo), "-f", "json", "--scanners", "gitignore"])

    payload = json.loads(capsys.readouterr().out)
    assert {f["scanner"] for f in payload["findings"]} == {"gitignore"}


def test_unknown_scanner_is_usage_error(leaky_repo, capsys):
    assert main(["scan", str(leaky_repo), "--scanners", "api-keys,bogus"]) == EXIT_ERROR
    assert "Unknown scanner: bogus" in capsys.readouterr().err


def test_missing_root_is_usage_error(tmp_path, capsys):
    assert main(["scan", str(tmp_path / "nowhere")]) == EXIT_ERROR
    assert "Error during scan" in capsys.readouterr().err


def test_invalid_severity_rejected_by_parser(tmp_path):
    with pytest.raises(SystemExit) as exc:
        main(["scan", str(tmp_path), "--severity", "urgent"])
    assert exc.value.code == 2


def test_bad_config_is_usage_error(tmp_path, capsys):
    (tmp_path / ".clawscan.yml").write_text("min_severity: urgent\n")

    assert main(["scan", str(tmp_path)]) == EXIT_ERROR
    assert "Error loading config" in capsys.readouterr().err


def test_config_file_applies(leaky_repo, capsys):
    (leaky_repo / ".clawscan.yml").write_text("scanners: [api-keys]\nfail_on: critical\n")

    assert main(["scan", str(leaky_repo), "-f", "json"]) == EXIT_FINDINGS

    payload = json.loads(capsys.readouterr().out)
    assert {f["scanner"] for f in payload["findings"]} == {"api-keys"}


def test_cli_flags_override_config(leaky_repo, capsys):
    (leaky_repo / ".clawscan.yml").write_text("scanners: [api-keys]\n")

    main(["scan", str(leaky_repo), "-f", "json", "--scanners", "gitignore"])

    payload = json.loads(capsys.readouterr().out)
    assert {f["scanner"] for f in payload["findings"]} == {"gitignore"}


def test_output_file(leaky_repo, capsys):
    out = leaky_repo / "report.sarif"

    assert main(["scan", str(leaky_repo), "-f", "sarif", "-o", str(out)]) == EXIT_FINDINGS

    assert capsys.readouterr().out == ""
    sarif = json.loads(out.read_text())
    assert sarif["runs"][0]["results"]


def test_unwritable_output_is_usage_error(leaky_repo, capsys):
    out = leaky_repo / "missing-dir" / "report.json"

    assert main(["scan", str(leaky_repo), "-f", "json", "-o", str(out)]) == EXIT_ERROR

    captured = capsys.readouterr()
    assert "Error writing report" in captured.err
    assert captured.out == ""
    assert not out.exists()


def test_init_writes_config(tmp_path, capsys):
    assert main(["init", str(tmp_path)]) == EXIT_OK
    config = tmp_path / ".clawscan.yml"
    assert config.exists()

    assert main(["init", str(tmp_path)]) == EXIT_ERROR
    assert "already exists" in capsys.readouterr().err

    config.write_text("fail_on: low\n")
    assert main(["init", str(tmp_path), "--force"]) == EXIT_OK
    assert "fail_on: high" in config.read_text()


def test_module_entry_point():
    env = os.environ.copy()
    env["PYTHONPATH"] = str(project_root / "src")

    result = subprocess.run(
        [sys.executable, "-m", "clawscan", "version"],
        cwd=project_root,
        capture_output=True,
        text=True,
        env=env,
    )

    assert result.returncode == 0
    assert result.stdout.strip() == __version__
