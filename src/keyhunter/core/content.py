"""Units of text handed from the acquirers to the extractor."""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Optional


class SourceKind(Enum):
    """Where a content unit came from."""

    FILE = "file"
    URL = "url"


@dataclass(frozen=True)
class ContentUnit:
    """One file or fetched page subjected to pattern extraction.

    ``text`` is ``None`` when a file could not be read; ``read_error`` then
    holds the reason. ``script_text`` is only set for fetched pages and holds
    the concatenated inline script contents.
    """

    logical_path: str
    text: Optional[str]
    source: SourceKind = SourceKind.FILE
    script_text: Optional[str] = None
    read_error: Optional[str] = None

    @property
    def code_text(self) -> Optional[str]:
        """Text the code-risk patterns run against."""
        if self.source is SourceKind.URL:
            return self.script_text or ""
        return self.text
