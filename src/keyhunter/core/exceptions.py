"""KeyHunter custom exceptions."""

from __future__ import annotations

from typing import Optional


class KeyHunterError(Exception):
    """Base class for all KeyHunter errors."""


class KeyHunterConfigError(KeyHunterError):
    """Raised when configuration is missing or invalid."""

    def __init__(self, message: str, config_path: str = None):
        self.config_path = config_path
        super().__init__(message)

    def __str__(self):
        msg = super().__str__()
        if self.config_path:
            msg += f" (config: {self.config_path})"
        return msg


class ScanError(KeyHunterError):
    """A scan could not be started or had to be aborted."""


class InvalidDirectoryError(ScanError):
    """The scan root does not exist or is not a directory."""

    def __init__(self, message: str, path: str):
        self.path = path
        super().__init__(message)


class InvalidUrlError(ScanError):
    """The URL is empty or does not use an http(s) scheme."""

    def __init__(self, message: str, url: Optional[str] = None):
        self.url = url
        super().__init__(message)


class FetchError(ScanError):
    """The remote page could not be fetched."""

    def __init__(self, message: str, url: str, status_code: Optional[int] = None):
        self.url = url
        self.status_code = status_code
        super().__init__(message)
