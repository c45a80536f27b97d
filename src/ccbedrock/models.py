"""
CCBEDROCK Result Models.

Every step of an install or uninstall returns one of these values so the
command layer can aggregate backups and warnings for the final summary.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional


@dataclass(frozen=True)
class WriteResult:
    """Outcome of rendering one artifact to disk (or not, in a dry run)."""

    path: Path
    content: str
    backup_path: Optional[Path] = None
    dry_run: bool = False


@dataclass(frozen=True)
class RemoveResult:
    path: Path
    existed: bool
    dry_run: bool = False


@dataclass(frozen=True)
class RcResult:
    """Outcome of touching the shell rc file.

    action is one of: appended, already-present, removed, absent, missing,
    dry-run.
    """

    path: Path
    action: str
    backup_path: Optional[Path] = None
    block: str = ""
    dry_run: bool = False


@dataclass(frozen=True)
class ProcessResult:
    exit_code: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.exit_code == 0


@dataclass(frozen=True)
class ProbeReport:
    """Advisory result of an AWS CLI check; status is ok, failed or skipped."""

    status: str
    message: str
    details: list[str] = field(default_factory=list)
    hints: list[str] = field(default_factory=list)


@dataclass
class InstallReport:
    settings: WriteResult
    env_snippet: WriteResult
    rc: Optional[RcResult] = None
    probes: list[ProbeReport] = field(default_factory=list)
    dry_run: bool = False

    @property
    def backups(self) -> list[Path]:
        paths = [self.settings.backup_path, self.env_snippet.backup_path]
        if self.rc is not None:
            paths.append(self.rc.backup_path)
        return [p for p in paths if p is not None]


@dataclass
class UninstallReport:
    removed: list[RemoveResult] = field(default_factory=list)
    rc: Optional[RcResult] = None
    dry_run: bool = False

    @property
    def backups(self) -> list[Path]:
        if self.rc is not None and self.rc.backup_path is not None:
            return [self.rc.backup_path]
        return []
