"""Tests for SARIF export."""

from keyhunter.sarif.export import SENSITIVE_FILE_RULE, build_sarif
from keyhunter.scanner import scan_directory

OPENAI_KEY = "sk-" + "a" * 48


def _sarif_for(tmp_path):
    (tmp_path / "app.js").write_text("const x = 1;\nconst k = '" + OPENAI_KEY + "';\n")
    (tmp_path / ".env").write_text("")
    return build_sarif(scan_directory(str(tmp_path), {"broad_patterns": False}))


def test_sarif_structure(tmp_path):
    sarif = _sarif_for(tmp_path)

    assert sarif["version"] == "2.1.0"
    run = sarif["runs"][0]
    assert run["tool"]["driver"]["name"] == "KeyHunter"
    assert run["properties"]["riskLevel"] == "MEDIUM"
    rule_ids = [r["id"] for r in run["tool"]["driver"]["rules"]]
    assert rule_ids == ["OpenAI", SENSITIVE_FILE_RULE]


def test_sarif_results(tmp_path):
    run = _sarif_for(tmp_path)["runs"][0]
    by_rule = {r["ruleId"]: r for r in run["results"]}

    api = by_rule["OpenAI"]
    assert api["level"] == "error"
    location = api["locations"][0]["physicalLocation"]
    assert location["artifactLocation"]["uri"] == "app.js"
    assert location["region"]["startLine"] == 2

    sensitive = by_rule[SENSITIVE_FILE_RULE]
    assert sensitive["level"] == "warning"
    assert "region" not in sensitive["locations"][0]["physicalLocation"]


def test_empty_report(tmp_path):
    run = build_sarif(scan_directory(str(tmp_path)))["runs"][0]
    assert run["results"] == []
    assert run["tool"]["driver"]["rules"] == []
    assert run["properties"]["riskLevel"] == "LOW"
