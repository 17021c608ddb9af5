# SPDX-License-Identifier: MIT
"""
Risk tiering for scan reports.

The tier is a coarse classification derived only from the total number of
findings in a report:

- no findings is LOW
- one to three findings is MEDIUM
- more than three findings is HIGH
"""
from __future__ import annotations

from enum import Enum
from typing import Any, Dict


class RiskLevel(Enum):
    """Risk level categories."""

    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"


# Highest issue count still rated MEDIUM
MEDIUM_MAX_ISSUES = 3


def get_risk_level(total_issues: int) -> RiskLevel:
    """Convert a total issue count to a risk level."""
    if total_issues < 0:
        raise ValueError(f"Issue count cannot be negative: {total_issues}")
    if total_issues == 0:
        return RiskLevel.LOW
    elif total_issues <= MEDIUM_MAX_ISSUES:
        return RiskLevel.MEDIUM
    else:
        return RiskLevel.HIGH


def risk_summary(report: Any) -> Dict[str, Any]:
    """
    Generate a risk summary for a scan report.

    Returns:
        Dictionary with level, total and the per-category breakdown
    """
    breakdown = {
        "api_keys": len(report.api_keys),
        "sensitive_files": len(report.sensitive_files),
        "code_issues": len(report.code_issues),
    }
    total = sum(breakdown.values())
    return {
        "level": get_risk_level(total).value,
        "total_issues": total,
        "breakdown": breakdown,
    }
