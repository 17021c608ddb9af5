from __future__ import annotations

import os
from typing import Any, Dict, List

from keyhunter import __version__
from keyhunter.core.findings import ApiKeyFinding, CodeIssueFinding, Finding
from keyhunter.core.report import ScanReport

SARIF_SCHEMA = "https://json.schemastore.org/sarif-2.1.0.json"
SENSITIVE_FILE_RULE = "Sensitive File"


def _rule_id(finding: Finding) -> str:
    if isinstance(finding, ApiKeyFinding):
        return finding.service
    if isinstance(finding, CodeIssueFinding):
        return finding.pattern
    return SENSITIVE_FILE_RULE


def _level(finding: Finding) -> str:
    return "error" if isinstance(finding, ApiKeyFinding) else "warning"


def build_sarif(report: ScanReport) -> Dict[str, Any]:
    findings = report.findings()

    # Collect rules by service / code pattern name
    rule_ids: Dict[str, int] = {}
    rules: List[Dict[str, Any]] = []
    for f in findings:
        k = _rule_id(f)
        if k not in rule_ids:
            rule_ids[k] = len(rules)
            rules.append(
                {
                    "id": k,
                    "name": k,
                    "shortDescription": {"text": f.issue},
                    "help": {"text": f.recommendation},
                    "defaultConfiguration": {"level": _level(f)},
                }
            )

    results = []
    for f in findings:
        k = _rule_id(f)
        location: Dict[str, Any] = {"artifactLocation": {"uri": f.file}}
        if f.line is not None:
            location["region"] = {"startLine": max(1, f.line)}
        results.append(
            {
                "ruleId": k,
                "ruleIndex": rule_ids[k],
                "level": _level(f),
                "message": {"text": f.issue},
                "locations": [{"physicalLocation": location}],
            }
        )

    # Make this upload unique per job by setting automationDetails.id
    auto_id = "keyhunter-{run}-{job}-{attempt}".format(
        run=os.getenv("GITHUB_RUN_ID", "local"),
        job=os.getenv("GITHUB_JOB", "job"),
        attempt=os.getenv("GITHUB_RUN_ATTEMPT", "1"),
    )

    return {
        "version": "2.1.0",
        "$schema": SARIF_SCHEMA,
        "runs": [
            {
                "automationDetails": {"id": auto_id},
                "tool": {
                    "driver": {
                        "name": "KeyHunter",
                        "version": __version__,
                        "rules": rules,
                    }
                },
                "results": results,
                "properties": {
                    "riskLevel": report.risk_level.value,
                    "totalFilesScanned": report.total_files_scanned,
                },
            }
        ],
    }
