"""Version reporting."""

import importlib.metadata
import re
from pathlib import Path

import pytest

from keyhunter import __version__

PYPROJECT = Path(__file__).resolve().parents[1] / "pyproject.toml"


def _declared_version():
    match = re.search(r'^version\s*=\s*"([^"]+)"', PYPROJECT.read_text(), re.MULTILINE)
    assert match, "pyproject.toml declares no version"
    return match.group(1)


def test_version_matches_pyproject():
    assert __version__ == _declared_version()


def test_installed_metadata_agrees():
    try:
        installed = importlib.metadata.version("keyhunter")
    except importlib.metadata.PackageNotFoundError:
        pytest.skip("keyhunter is not installed")
    assert installed == __version__


def test_version_is_semver():
    assert re.match(r"^\d+\.\d+\.\d+$", __version__)
