"""Finding data structures for KeyHunter."""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, Optional, Union


@dataclass(frozen=True)
class ApiKeyFinding:
    """A string shaped like a provider API key."""

    file: str  # relative path or URL
    service: str  # provider name from the pattern catalog
    line: int  # 1-based line of the first match
    issue: str
    recommendation: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "file": self.file,
            "service": self.service,
            "line": self.line,
            "issue": self.issue,
            "recommendation": self.recommendation,
        }


@dataclass(frozen=True)
class SensitiveFileFinding:
    """A sensitive configuration file, or a reference to one in a page.

    These findings are not line-addressable, so ``line`` is always ``None``.
    """

    file: str
    issue: str
    recommendation: str
    line: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "file": self.file,
            "line": self.line,
            "issue": self.issue,
            "recommendation": self.recommendation,
        }


@dataclass(frozen=True)
class CodeIssueFinding:
    """A risky code shape such as debug flags or credential-like words."""

    file: str
    line: int
    pattern: str  # code pattern name from the catalog
    issue: str
    recommendation: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "file": self.file,
            "line": self.line,
            "issue": self.issue,
            "pattern": self.pattern,
            "recommendation": self.recommendation,
        }


Finding = Union[ApiKeyFinding, SensitiveFileFinding, CodeIssueFinding]
