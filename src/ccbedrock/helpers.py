"""
CCBEDROCK Shared Utility Functions.

This module contains utility functions used across the writer, rc editor and
AWS checks to avoid circular imports.
"""

import logging
import os
import shutil
import tempfile
from datetime import datetime
from pathlib import Path
from typing import Callable, Optional

log = logging.getLogger(__name__)

BACKUP_STAMP_FORMAT = "%Y%m%d-%H%M%S"


class ExecutableNotFoundError(Exception):
    """Raised when executable cannot be found in system PATH."""
    pass


def get_app_path(exe_name: str = 'aws', which: Optional[Callable[[str], Optional[str]]] = None) -> str:
    """Find the full path to an executable in a cross-platform way.

    On Windows, prefers .cmd and .exe versions when multiple variants exist.

    Args:
        exe_name: Name of the executable to find
        which: PATH lookup function, replaceable in tests

    Returns:
        Full path to the executable

    Raises:
        ExecutableNotFoundError: If executable is not found in PATH
        ValueError: If executable name is invalid
    """
    if not exe_name or not exe_name.strip():
        raise ValueError(f'Invalid executable name provided: {exe_name!r}')

    which = which or shutil.which
    app_path = which(exe_name)
    if app_path is None:
        raise ExecutableNotFoundError(f'{exe_name} not found in system PATH. Please ensure it is installed and in your PATH.')

    if os.name == 'nt':
        preferred_extensions = ['.cmd', '.exe']
        for ext in preferred_extensions:
            if not exe_name.lower().endswith(ext):
                preferred_path = which(exe_name + ext)
                if preferred_path:
                    log.debug("Found multiple %s executables, using: %s", exe_name, preferred_path)
                    return preferred_path

    log.debug("Using executable: %s", app_path)
    return app_path


def backup_stamp(now: Optional[datetime] = None) -> str:
    """Return the YYYYMMDD-HHMMSS suffix used for backup file names."""
    return (now or datetime.now()).strftime(BACKUP_STAMP_FORMAT)


def backup_path_for(path: Path, stamp: str) -> Path:
    """Return a free `<path>.backup.<stamp>` path.

    A same-second rerun would collide with an earlier backup, so a numeric
    suffix is added until the name is unused.
    """
    candidate = path.with_name(f"{path.name}.backup.{stamp}")
    counter = 1
    while candidate.exists():
        candidate = path.with_name(f"{path.name}.backup.{stamp}-{counter}")
        counter += 1
    return candidate


def backup_file(path: Path, stamp: str) -> Path:
    """Copy path byte-for-byte to its backup location and return that location."""
    backup = backup_path_for(path, stamp)
    shutil.copy2(path, backup)
    log.debug("Backed up %s to %s", path, backup)
    return backup


def _current_umask() -> int:
    mask = os.umask(0)
    os.umask(mask)
    return mask


def atomic_write_text(path: Path, text: str, errors: str = "strict") -> None:
    """Replace path with text via a temp file in the same directory.

    A symlinked path is resolved first so the link survives and its target is
    rewritten. An existing file keeps its mode; a new one gets the usual
    0o666 minus umask instead of the 0o600 tempfile default.
    """
    path = Path(os.path.realpath(path))
    existed = path.exists()
    path.parent.mkdir(parents=True, exist_ok=True)
    temp_path: Optional[Path] = None
    try:
        with tempfile.NamedTemporaryFile(
            mode="w",
            encoding="utf-8",
            errors=errors,
            newline="",
            dir=str(path.parent),
            prefix=path.name + ".",
            suffix=".tmp",
            delete=False,
        ) as tmp:
            temp_path = Path(tmp.name)
            tmp.write(text)
            tmp.flush()
            os.fsync(tmp.fileno())
        if existed:
            shutil.copymode(path, temp_path)
        else:
            os.chmod(temp_path, 0o666 & ~_current_umask())
        os.replace(temp_path, path)
    finally:
        if temp_path is not None and temp_path.exists():
            temp_path.unlink()
