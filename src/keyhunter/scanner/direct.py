"""Directory acquisition: walk a source tree and yield its files as content units."""

from __future__ import annotations
import logging
import os
from pathlib import Path
from typing import Callable, Iterable, Iterator, Optional

from keyhunter.core.content import ContentUnit, SourceKind
from keyhunter.core.exceptions import InvalidDirectoryError
from keyhunter.scanner.config import DEFAULT_SKIP_DIRS, DEFAULT_SKIP_EXTENSIONS

logger = logging.getLogger(__name__)

ErrorCallback = Callable[[str, str], None]


def validate_directory(path: str) -> Path:
    """Resolve *path* and make sure it is an existing directory."""
    try:
        root = Path(path).resolve()
        exists = root.exists()
    except (OSError, ValueError) as e:
        logger.debug("Cannot resolve scan root %r: %s", path, e)
        raise InvalidDirectoryError("Directory does not exist", path=str(path)) from e
    if not exists:
        raise InvalidDirectoryError("Directory does not exist", path=str(root))
    if not root.is_dir():
        raise InvalidDirectoryError("Path is not a directory", path=str(root))
    return root


def iter_directory(
    root: Path,
    skip_dirs: Optional[Iterable[str]] = None,
    skip_extensions: Optional[Iterable[str]] = None,
    on_error: Optional[ErrorCallback] = None,
) -> Iterator[ContentUnit]:
    """
    Depth-first walk of *root* yielding one unit per eligible file.

    Args:
        root: Validated scan root
        skip_dirs: Directory names never descended into
        skip_extensions: File extensions excluded from every check
        on_error: Called with (relative path, message) for directories that
            cannot be listed

    Yields:
        ContentUnit per file. Unreadable files are still yielded with
        ``text=None`` and ``read_error`` set so they count as scanned.
    """
    skip_dirs = frozenset(DEFAULT_SKIP_DIRS if skip_dirs is None else skip_dirs)
    skip_exts = frozenset(
        ext.lower() for ext in (DEFAULT_SKIP_EXTENSIONS if skip_extensions is None else skip_extensions)
    )
    yield from _walk(root, root, skip_dirs, skip_exts, on_error)


def _walk(
    directory: Path,
    root: Path,
    skip_dirs: frozenset,
    skip_exts: frozenset,
    on_error: Optional[ErrorCallback],
) -> Iterator[ContentUnit]:
    try:
        with os.scandir(directory) as it:
            entries = sorted(it, key=lambda e: e.name)
    except OSError as e:
        rel = _relative(Path(directory), root)
        logger.warning("Error walking directory %s: %s", directory, e)
        if on_error is not None:
            on_error(rel, str(e))
        return

    for entry in entries:
        path = Path(entry.path)
        if entry.is_dir(follow_symlinks=False):
            if entry.name not in skip_dirs:
                yield from _walk(path, root, skip_dirs, skip_exts, on_error)
            continue
        # dangling symlinks are read (and fail) like any other file;
        # symlinked directories are not followed
        if entry.is_dir() or not (entry.is_file() or entry.is_symlink()):
            continue
        if path.suffix.lower() in skip_exts:
            continue
        yield _read_unit(path, root)


def _read_unit(path: Path, root: Path) -> ContentUnit:
    rel = _relative(path, root)
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.warning("Error reading file %s: %s", path, e)
        return ContentUnit(logical_path=rel, text=None, source=SourceKind.FILE, read_error=str(e))
    return ContentUnit(logical_path=rel, text=text, source=SourceKind.FILE)


def _relative(path: Path, root: Path) -> str:
    try:
        return str(path.relative_to(root))
    except ValueError:
        return str(path)
