"""KeyHunter package metadata."""
from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("keyhunter")
except PackageNotFoundError:
    __version__ = "1.0.0"
