"""
Write-if-changed synchronisation of generated scripts.

Each script is first written to a scratch file and only copied over the
destination when the bytes differ.  An unchanged destination is never
opened for writing, so its modification time survives and incremental
builds downstream see nothing new.

Manifesto:
    - **Byte-exact:** UTF-8, no newline translation, byte comparison
    - **Idempotent directories:** Concurrent creation of the destination
      tree is success, not failure
    - **No silent I/O failures:** Every OS error surfaces as
      :class:`~ddlgen.core.errors.DdlIOError` carrying the path

Architecture::

    sync(dialect, text, destination_dir, scratch_dir=...)
        │
        ├── ensure_directory(destination_dir)
        ├── <scratch>/<stem>.sql      ◄── text (utf-8)
        └── <destination>/<stem>.sql
                missing    → copy                 changed=True
                same bytes → untouched            changed=False
                different  → delete + copy        changed=True

Tags:
    sync, write-if-changed, filesystem, ddlgen

Doc-Types:
    - API Reference
"""

from __future__ import annotations

import filecmp
import shutil
import tempfile
from dataclasses import dataclass
from pathlib import Path

from ddlgen.core.dialect import DialectDescriptor
from ddlgen.core.errors import DdlIOError, DestinationConflictError
from ddlgen.core.logging import get_logger

logger = get_logger(__name__)

SCRATCH_PREFIX = "ddlgen-"
SCRIPT_SUFFIX = ".sql"


@dataclass(frozen=True, slots=True)
class SyncOutcome:
    """Where a script was synchronised to and whether the file changed."""

    path: Path
    changed: bool


def ensure_directory(path: str | Path) -> Path:
    """Create ``path`` (with parents) unless it already is a directory.

    Raises:
        DestinationConflictError: If something other than a directory
            occupies ``path``.
        DdlIOError: If the directory cannot be created.
    """
    path = Path(path)
    if path.exists() and not path.is_dir():
        raise DestinationConflictError(path)
    try:
        path.mkdir(parents=True, exist_ok=True)
    except FileExistsError as exc:
        raise DestinationConflictError(path) from exc
    except OSError as exc:
        raise DdlIOError(f"Cannot create output directory {path}: {exc}", path=path, cause=exc) from exc
    return path


def script_name(dialect: DialectDescriptor) -> str:
    """File name of ``dialect``'s script, e.g. ``postgresql9.sql``."""
    return f"{dialect.file_stem}{SCRIPT_SUFFIX}"


def _write_scratch(scratch_dir: Path, dialect: DialectDescriptor, text: str) -> Path:
    scratch = scratch_dir / script_name(dialect)
    try:
        scratch.write_bytes(text.encode("utf-8"))
    except OSError as exc:
        raise DdlIOError(
            f"Cannot write scratch file {scratch}: {exc}",
            path=scratch,
            dialect=dialect.identifier,
            cause=exc,
        ) from exc
    return scratch


def _synchronise(
    dialect: DialectDescriptor, text: str, destination_dir: Path, scratch_dir: Path
) -> SyncOutcome:
    ensure_directory(destination_dir)
    scratch = _write_scratch(scratch_dir, dialect, text)
    destination = destination_dir / script_name(dialect)

    try:
        if destination.exists():
            if filecmp.cmp(scratch, destination, shallow=False):
                logger.info("ddl_file_unchanged", dialect=dialect.identifier, path=str(destination))
                return SyncOutcome(path=destination, changed=False)
            destination.unlink()
        shutil.copyfile(scratch, destination)
    except OSError as exc:
        raise DdlIOError(
            f"Cannot update {destination}: {exc}",
            path=destination,
            dialect=dialect.identifier,
            cause=exc,
        ) from exc

    logger.info("ddl_file_written", dialect=dialect.identifier, path=str(destination))
    return SyncOutcome(path=destination, changed=True)


def sync(
    dialect: DialectDescriptor,
    text: str,
    destination_dir: str | Path,
    *,
    scratch_dir: str | Path | None = None,
) -> SyncOutcome:
    """Synchronise ``text`` into ``<destination_dir>/<dialect>.sql``.

    Args:
        dialect: Dialect the script was generated for; names the file.
        text: Generated script.
        destination_dir: Output directory, created when missing.
        scratch_dir: Directory for the scratch copy.  A private temporary
            directory is used (and removed) when omitted.

    Returns:
        The destination path and whether its content changed.
    """
    destination_dir = Path(destination_dir)
    if scratch_dir is not None:
        return _synchronise(dialect, text, destination_dir, Path(scratch_dir))
    try:
        with tempfile.TemporaryDirectory(prefix=SCRATCH_PREFIX) as tmp:
            return _synchronise(dialect, text, destination_dir, Path(tmp))
    except OSError as exc:
        raise DdlIOError(f"Cannot create scratch directory: {exc}", dialect=dialect.identifier, cause=exc) from exc


__all__ = [
    "SCRATCH_PREFIX",
    "SyncOutcome",
    "ensure_directory",
    "script_name",
    "sync",
]
