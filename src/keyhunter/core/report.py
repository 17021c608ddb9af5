"""Scan report model and the aggregator that assembles it."""

from __future__ import annotations
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional, Tuple

from keyhunter.core.content import ContentUnit
from keyhunter.core.findings import (
    ApiKeyFinding,
    CodeIssueFinding,
    Finding,
    SensitiveFileFinding,
)
from keyhunter.risk.score import RiskLevel, get_risk_level

logger = logging.getLogger(__name__)


def _iso(ts: datetime) -> str:
    return ts.isoformat(timespec="milliseconds").replace("+00:00", "Z")


class TargetKind(Enum):
    DIRECTORY = "directory"
    URL = "url"


@dataclass(frozen=True)
class ScanTarget:
    """The directory or URL a scan was run against."""

    kind: TargetKind
    location: str

    @property
    def summary_key(self) -> str:
        return "scanned_url" if self.kind is TargetKind.URL else "scanned_directory"


@dataclass(frozen=True)
class ReadFailure:
    """A file that was counted but could not be read."""

    file: str
    error: str

    def to_dict(self) -> Dict[str, Any]:
        return {"file": self.file, "error": self.error}


@dataclass(frozen=True)
class Summary:
    total_files_scanned: int
    total_issues: int
    risk_level: RiskLevel
    target: ScanTarget
    scan_started_at: datetime
    scan_completed_at: datetime

    @property
    def duration_seconds(self) -> float:
        return (self.scan_completed_at - self.scan_started_at).total_seconds()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total_files_scanned": self.total_files_scanned,
            "total_issues": self.total_issues,
            "risk_level": self.risk_level.value,
            self.target.summary_key: self.target.location,
            "scan_started_at": _iso(self.scan_started_at),
            "scan_completed_at": _iso(self.scan_completed_at),
        }


@dataclass(frozen=True)
class ScanReport:
    """Immutable result of one scan.

    ``total_issues`` and ``risk_level`` are always derived from the finding
    tuples and cannot be set on their own.
    """

    target: ScanTarget
    total_files_scanned: int
    scan_started_at: datetime
    scan_completed_at: datetime
    api_keys: Tuple[ApiKeyFinding, ...] = ()
    sensitive_files: Tuple[SensitiveFileFinding, ...] = ()
    code_issues: Tuple[CodeIssueFinding, ...] = ()
    errors: Tuple[ReadFailure, ...] = ()

    @property
    def total_issues(self) -> int:
        return len(self.api_keys) + len(self.sensitive_files) + len(self.code_issues)

    @property
    def risk_level(self) -> RiskLevel:
        return get_risk_level(self.total_issues)

    @property
    def summary(self) -> Summary:
        return Summary(
            total_files_scanned=self.total_files_scanned,
            total_issues=self.total_issues,
            risk_level=self.risk_level,
            target=self.target,
            scan_started_at=self.scan_started_at,
            scan_completed_at=self.scan_completed_at,
        )

    def findings(self) -> List[Finding]:
        """All findings in report order: api keys, sensitive files, code issues."""
        return [*self.api_keys, *self.sensitive_files, *self.code_issues]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "api_keys": [f.to_dict() for f in self.api_keys],
            "sensitive_files": [f.to_dict() for f in self.sensitive_files],
            "code_issues": [f.to_dict() for f in self.code_issues],
            "errors": [e.to_dict() for e in self.errors],
            "summary": self.summary.to_dict(),
        }


@dataclass
class ScanAggregator:
    """Folds per-unit findings into a single :class:`ScanReport`.

    The start timestamp is captured on construction, so build the aggregator
    before acquisition begins.
    """

    target: ScanTarget
    started_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    files_scanned: int = 0
    _api_keys: List[ApiKeyFinding] = field(default_factory=list)
    _sensitive_files: List[SensitiveFileFinding] = field(default_factory=list)
    _code_issues: List[CodeIssueFinding] = field(default_factory=list)
    _errors: List[ReadFailure] = field(default_factory=list)

    def add(self, unit: ContentUnit, findings: Iterable[Finding]) -> None:
        self.files_scanned += 1
        if unit.read_error is not None:
            self._errors.append(ReadFailure(file=unit.logical_path, error=unit.read_error))
        for finding in findings:
            if isinstance(finding, ApiKeyFinding):
                self._api_keys.append(finding)
            elif isinstance(finding, SensitiveFileFinding):
                self._sensitive_files.append(finding)
            elif isinstance(finding, CodeIssueFinding):
                self._code_issues.append(finding)
            else:
                raise TypeError(f"Unknown finding type: {type(finding).__name__}")

    def record_error(self, path: str, error: str) -> None:
        """Record a failure that is not tied to a counted unit (e.g. an unlistable directory)."""
        self._errors.append(ReadFailure(file=path, error=error))

    def finish(self, completed_at: Optional[datetime] = None) -> ScanReport:
        report = ScanReport(
            target=self.target,
            total_files_scanned=self.files_scanned,
            scan_started_at=self.started_at,
            scan_completed_at=completed_at or datetime.now(timezone.utc),
            api_keys=tuple(self._api_keys),
            sensitive_files=tuple(self._sensitive_files),
            code_issues=tuple(self._code_issues),
            errors=tuple(self._errors),
        )
        logger.debug(
            "Scan of %s finished: %d files, %d issues, risk %s",
            self.target.location,
            report.total_files_scanned,
            report.total_issues,
            report.risk_level.value,
        )
        return report
