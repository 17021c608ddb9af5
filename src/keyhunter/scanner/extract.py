# SPDX-License-Identifier: MIT
"""
Run the pattern catalog against one content unit.

Each secret or code pattern contributes at most one finding per unit, located
at the line of its first match. Overlapping matches from different patterns
are all reported.
"""
from __future__ import annotations

import os
from typing import List, Optional

from keyhunter.core.content import ContentUnit, SourceKind
from keyhunter.core.findings import (
    ApiKeyFinding,
    CodeIssueFinding,
    Finding,
    SensitiveFileFinding,
)
from keyhunter.detectors import PatternCatalog, PatternSpec, DEFAULT_CATALOG

CODE_ISSUE = "Potential sensitive data handling in code"
CODE_RECOMMENDATION = "Review security practices and implement proper data handling"


def find_line_number(content: str, match: str) -> int:
    """
    Return the 1-based line of the first line containing *match*.

    This is a plain substring search, not a regex re-match, so an earlier
    line that happens to contain the same literal text wins. Matches that
    span a newline are not found on any single line and resolve to 1.
    """
    for number, line in enumerate(content.split("\n"), start=1):
        if match in line:
            return number
    return 1


def _first_match(spec: PatternSpec, text: str) -> Optional[str]:
    m = spec.matcher.search(text)
    return m.group(0) if m else None


def extract_findings(unit: ContentUnit, catalog: PatternCatalog = DEFAULT_CATALOG) -> List[Finding]:
    """Return the findings for *unit*; neither the unit nor the catalog is modified."""
    findings: List[Finding] = []
    is_url = unit.source is SourceKind.URL

    if unit.text is not None:
        findings.extend(_api_key_findings(unit, catalog, is_url))
        findings.extend(_code_findings(unit, catalog))

    findings.extend(_sensitive_file_findings(unit, catalog, is_url))
    return findings


def _api_key_findings(unit: ContentUnit, catalog: PatternCatalog, is_url: bool) -> List[ApiKeyFinding]:
    storage = "secure storage methods" if is_url else "environment variables"
    out = []
    for spec in catalog.secret_patterns:
        match = _first_match(spec, unit.text)
        if match is None:
            continue
        out.append(
            ApiKeyFinding(
                file=unit.logical_path,
                service=spec.name,
                line=find_line_number(unit.text, match),
                issue=f"Potential {spec.name} API key found",
                recommendation=f"Remove hardcoded {spec.name} API key and use {storage}",
            )
        )
    return out


def _code_findings(unit: ContentUnit, catalog: PatternCatalog) -> List[CodeIssueFinding]:
    text = unit.code_text
    if not text:
        return []
    out = []
    for spec in catalog.code_patterns:
        match = _first_match(spec, text)
        if match is None:
            continue
        out.append(
            CodeIssueFinding(
                file=unit.logical_path,
                line=find_line_number(text, match),
                pattern=spec.name,
                issue=CODE_ISSUE,
                recommendation=CODE_RECOMMENDATION,
            )
        )
    return out


def _sensitive_file_findings(
    unit: ContentUnit, catalog: PatternCatalog, is_url: bool
) -> List[SensitiveFileFinding]:
    if is_url:
        # Pages are checked for references to any listed file.
        return [
            SensitiveFileFinding(
                file=unit.logical_path,
                issue=f'Reference to sensitive file "{name}" found',
                recommendation="Ensure sensitive files are not exposed or referenced in public URLs",
            )
            for name in catalog.sensitive_files
            if unit.text and name in unit.text
        ]

    basename = os.path.basename(unit.logical_path).lower()
    if basename in catalog.sensitive_files:
        return [
            SensitiveFileFinding(
                file=unit.logical_path,
                issue="Potentially sensitive configuration file found",
                recommendation="Move sensitive data to secure storage or environment variables",
            )
        ]
    return []
