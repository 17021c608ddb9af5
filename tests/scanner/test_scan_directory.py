"""End-to-end tests for directory scans."""

import dataclasses
import os
from pathlib import Path

import pytest

from keyhunter.core.exceptions import InvalidDirectoryError
from keyhunter.risk.score import RiskLevel
from keyhunter.scanner import scan_directory
from keyhunter.scanner.config import get_default_scanner_config

OPENAI_KEY = "sk-" + "a" * 48


@pytest.fixture
def strict_config():
    config = get_default_scanner_config()
    config["broad_patterns"] = False
    return config


def _assert_totals(report):
    assert report.total_issues == (
        len(report.api_keys) + len(report.sensitive_files) + len(report.code_issues)
    )
    assert report.summary.total_issues == report.total_issues


def test_openai_key_strict(tmp_path, strict_config):
    (tmp_path / "app.txt").write_text("OPENAI_KEY=" + OPENAI_KEY)

    report = scan_directory(str(tmp_path), strict_config)

    assert [(f.service, f.line) for f in report.api_keys] == [("OpenAI", 1)]
    # "KEY" in the variable name is also a credential-like word
    assert [c.pattern for c in report.code_issues] == ["Hardcoded Credentials"]
    assert report.total_files_scanned == 1
    assert report.total_issues == 2
    assert report.risk_level is RiskLevel.MEDIUM
    _assert_totals(report)


def test_openai_key_default_catalog_reports_broad_matches(tmp_path):
    (tmp_path / "app.txt").write_text("OPENAI_KEY=" + OPENAI_KEY)

    report = scan_directory(str(tmp_path))

    assert [f.service for f in report.api_keys] == ["OpenAI", "Cohere", "AI21", "Azure OpenAI"]
    assert report.risk_level is RiskLevel.HIGH
    _assert_totals(report)


def test_empty_secrets_json(tmp_path):
    (tmp_path / "secrets.json").write_text("")

    report = scan_directory(str(tmp_path))

    assert len(report.sensitive_files) == 1
    assert report.sensitive_files[0].line is None
    assert report.api_keys == ()
    assert report.code_issues == ()
    assert report.total_issues == 1
    assert report.risk_level is RiskLevel.MEDIUM


def test_empty_directory(tmp_path):
    report = scan_directory(str(tmp_path))

    assert report.total_files_scanned == 0
    assert report.total_issues == 0
    assert report.risk_level is RiskLevel.LOW


def test_missing_directory_raises(tmp_path):
    with pytest.raises(InvalidDirectoryError):
        scan_directory(str(tmp_path / "missing"))


def test_nul_byte_path_raises_invalid_directory(tmp_path):
    with pytest.raises(InvalidDirectoryError, match="Directory does not exist"):
        scan_directory(str(tmp_path) + "/a\x00b")


def test_skipped_paths_never_counted(tmp_path):
    (tmp_path / "node_modules").mkdir()
    (tmp_path / "node_modules" / "lib.js").write_text("key = '" + OPENAI_KEY + "'")
    (tmp_path / ".git").mkdir()
    (tmp_path / ".git" / "config").write_text("token")
    (tmp_path / "image.png").write_bytes(b"\x89PNG secret")
    (tmp_path / "readme.txt").write_text("nothing to see\n")

    report = scan_directory(str(tmp_path))

    assert report.total_files_scanned == 1
    files = {f.file for f in report.findings()}
    assert not any("node_modules" in f or ".git" in f or f.endswith(".png") for f in files)
    assert report.total_issues == 0


def test_unreadable_file_counts_and_is_recorded(tmp_path):
    (tmp_path / ".env").write_bytes(b"\xff\xfe API_TOKEN=\xff")
    (tmp_path / "ok.txt").write_text("fine\n")

    report = scan_directory(str(tmp_path))

    assert report.total_files_scanned == 2
    assert [e.file for e in report.errors] == [".env"]
    # filename check still applies to the unreadable file
    assert [f.file for f in report.sensitive_files] == [".env"]
    assert report.code_issues == ()


def test_issue_thresholds(tmp_path):
    # four sensitive files, nothing else
    for name in ("config.json", "settings.json", "credentials.json", "secrets.json"):
        (tmp_path / name).write_text("{}")

    report = scan_directory(str(tmp_path))

    assert report.total_issues == 4
    assert report.risk_level is RiskLevel.HIGH

    (tmp_path / "secrets.json").unlink()
    report = scan_directory(str(tmp_path))

    assert report.total_issues == 3
    assert report.risk_level is RiskLevel.MEDIUM


def test_report_shape(tmp_path):
    (tmp_path / "settings.json").write_text('{"debug": true}')

    report = scan_directory(str(tmp_path))
    data = report.to_dict()

    assert set(data) == {"api_keys", "sensitive_files", "code_issues", "errors", "summary"}
    summary = data["summary"]
    assert summary["scanned_directory"] == str(tmp_path.resolve())
    assert summary["total_files_scanned"] == 1
    assert summary["total_issues"] == 1
    assert summary["risk_level"] == "MEDIUM"
    assert summary["scan_started_at"].endswith("Z")
    assert summary["scan_completed_at"] >= summary["scan_started_at"]
    assert data["sensitive_files"][0]["line"] is None


def test_report_is_immutable(tmp_path):
    report = scan_directory(str(tmp_path))

    with pytest.raises(dataclasses.FrozenInstanceError):
        report.total_files_scanned = 10
    with pytest.raises(AttributeError):
        report.total_issues = 3


def test_repo_config_skip_dirs(tmp_path):
    (tmp_path / "vendor").mkdir()
    (tmp_path / "vendor" / "secrets.json").write_text("")
    config = get_default_scanner_config()
    config["skip_dirs"].append("vendor")

    report = scan_directory(str(tmp_path), config)

    assert report.total_files_scanned == 0


def test_dangling_env_symlink_counts_and_is_flagged(tmp_path):
    os.symlink(tmp_path / "missing-target", tmp_path / ".env")

    report = scan_directory(str(tmp_path))

    assert report.total_files_scanned == 1
    assert [f.file for f in report.sensitive_files] == [".env"]
    assert [e.file for e in report.errors] == [".env"]


def test_permission_denied_file_is_recorded(tmp_path, monkeypatch):
    (tmp_path / "a.txt").write_text("fine\n")
    (tmp_path / "b.txt").write_text("token = 1\n")
    real_read_text = Path.read_text

    def read_text(self, *args, **kwargs):
        if self.name == "a.txt":
            raise PermissionError(13, "Permission denied", str(self))
        return real_read_text(self, *args, **kwargs)

    monkeypatch.setattr(Path, "read_text", read_text)

    report = scan_directory(str(tmp_path))

    assert report.total_files_scanned == 2
    assert [e.file for e in report.errors] == ["a.txt"]
    assert "Permission denied" in report.errors[0].error
    # the walk went on to the next file
    assert [(c.file, c.pattern) for c in report.code_issues] == [("b.txt", "Hardcoded Credentials")]


def test_unlistable_subdirectory_is_recorded_not_counted(tmp_path, monkeypatch):
    (tmp_path / "locked").mkdir()
    (tmp_path / "locked" / "secrets.json").write_text("")
    (tmp_path / "open").mkdir()
    (tmp_path / "open" / "config.json").write_text("{}")
    real_scandir = os.scandir

    def scandir(path):
        if Path(path).name == "locked":
            raise PermissionError(13, "Permission denied", str(path))
        return real_scandir(path)

    monkeypatch.setattr(os, "scandir", scandir)

    report = scan_directory(str(tmp_path))

    assert report.total_files_scanned == 1
    assert [f.file for f in report.sensitive_files] == [str(Path("open") / "config.json")]
    assert [e.file for e in report.errors] == ["locked"]
    assert report.total_issues == 1
