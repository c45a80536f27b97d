"""
CCBEDROCK Uninstall Command.

Removes the env snippet and settings file, then strips the source block from
the shell rc file. Anything already absent is skipped silently.
"""

import logging
from datetime import datetime
from typing import Optional

from ccbedrock.config import InstallPaths
from ccbedrock.helpers import backup_stamp
from ccbedrock.models import RemoveResult, UninstallReport
from ccbedrock.rcfile import ShellTarget, remove_block
from ccbedrock.ui import console, render_status
from ccbedrock.writer import remove_artifact

log = logging.getLogger(__name__)


def run_uninstall(
    paths: InstallPaths,
    rc_target: ShellTarget,
    dry_run: bool = False,
    now: Optional[datetime] = None,
) -> UninstallReport:
    """Reverse an install. Filesystem errors propagate to the caller."""
    render_status("Uninstalling Claude Code Bedrock configuration...")
    report = UninstallReport(dry_run=dry_run)

    for path in (paths.env_snippet_path, paths.settings_path):
        result = remove_artifact(path, dry_run)
        _report_removal(result)
        report.removed.append(result)

    report.rc = remove_block(
        rc_target.rc_path, paths.env_snippet_path, dry_run, backup_stamp(now)
    )
    rc = report.rc
    if rc.action == "dry-run":
        render_status(f"[DRY RUN] Would remove source line from: {rc.path}")
    elif rc.action == "removed":
        render_status(f"Removed source line from: {rc.path}")
        render_status(f"Backed up shell rc to: {rc.backup_path}")
    elif rc.action == "absent":
        log.debug("No source block found in %s", rc.path)
    return report


def _report_removal(result: RemoveResult) -> None:
    if not result.existed:
        log.debug("Nothing to remove at %s", result.path)
    elif result.dry_run:
        render_status(f"[DRY RUN] Would remove: {result.path}")
    else:
        render_status(f"Removed: {result.path}")


def render_uninstall_summary(report: UninstallReport) -> None:
    console.print()
    if report.dry_run:
        render_status("Dry run complete. No changes were made.", level="success")
        return
    render_status("Uninstall complete.", level="success")
    render_status("You may need to restart your shell or run: unset CLAUDE_CODE_USE_BEDROCK")
