"""Pattern catalog for KeyHunter.

The catalog is plain data: adding a provider means adding one entry to
:data:`SECRET_PATTERNS`. Nothing here is mutated after import.
"""

from __future__ import annotations
import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Pattern, Tuple


class PatternKind(Enum):
    SECRET = "secret"
    CODE = "code"


@dataclass(frozen=True)
class PatternSpec:
    """A named matcher for either a secret shape or a risky code shape."""

    name: str
    kind: PatternKind
    matcher: Pattern[str]
    # Generic enough to match ordinary hashes and identifiers.
    broad: bool = False


def _secret(name: str, pattern: str, broad: bool = False) -> PatternSpec:
    return PatternSpec(name, PatternKind.SECRET, re.compile(pattern), broad)


def _code(name: str, pattern: str, flags: int = 0) -> PatternSpec:
    return PatternSpec(name, PatternKind.CODE, re.compile(pattern, flags))


SECRET_PATTERNS: Tuple[PatternSpec, ...] = (
    _secret("OpenAI", r"sk-[a-zA-Z0-9]{48}"),
    _secret("Anthropic", r"sk-ant-[a-zA-Z0-9]{32}"),
    # Cohere, AI21 and Azure OpenAI keys have no prefix, so these also hit
    # commit hashes, UUIDs without dashes and long identifiers.
    _secret("Cohere", r"[a-zA-Z0-9]{40}", broad=True),
    _secret("AI21", r"[a-zA-Z0-9]{32}", broad=True),
    _secret("Google AI", r"AIza[0-9A-Za-z\-_]{35}"),
    _secret("Azure OpenAI", r"[a-f0-9]{32}", broad=True),
    _secret("Hugging Face", r"hf_[a-zA-Z0-9]{34}"),
)

CODE_PATTERNS: Tuple[PatternSpec, ...] = (
    _code("API Calls", r"\.create\(|\.generate\(|\.complete\(|\.predict\("),
    _code("Debug Mode", r"debug:\s*true|DEBUG\s*=\s*true", re.IGNORECASE),
    _code("Hardcoded Credentials", r"password|secret|key|token|auth", re.IGNORECASE),
)

# Compared case-insensitively against file basenames.
SENSITIVE_FILES: Tuple[str, ...] = (
    ".env",
    "config.json",
    "settings.json",
    "credentials.json",
    "secrets.json",
)


@dataclass(frozen=True)
class PatternCatalog:
    secret_patterns: Tuple[PatternSpec, ...]
    code_patterns: Tuple[PatternSpec, ...]
    sensitive_files: Tuple[str, ...]

    def secret_names(self) -> Tuple[str, ...]:
        return tuple(p.name for p in self.secret_patterns)

    def code_names(self) -> Tuple[str, ...]:
        return tuple(p.name for p in self.code_patterns)


def build_catalog(include_broad: bool = True) -> PatternCatalog:
    """Build a catalog, optionally dropping the broad secret patterns."""
    secrets = tuple(p for p in SECRET_PATTERNS if include_broad or not p.broad)
    return PatternCatalog(
        secret_patterns=secrets,
        code_patterns=CODE_PATTERNS,
        sensitive_files=SENSITIVE_FILES,
    )


DEFAULT_CATALOG = build_catalog(include_broad=True)
STRICT_CATALOG = build_catalog(include_broad=False)


def get_catalog(config: Optional[Dict[str, Any]] = None) -> PatternCatalog:
    """Pick the shared catalog matching the ``broad_patterns`` config flag."""
    if config is not None and not config.get("broad_patterns", True):
        return STRICT_CATALOG
    return DEFAULT_CATALOG
