"""
CCBEDROCK Install Command.

Writes settings.json and the env snippet, optionally wires the snippet into
the shell rc file, then runs the advisory AWS checks.
"""

import logging
from datetime import datetime
from typing import Callable, Optional

from ccbedrock.aws_utils import ProcessRunner, check_credentials, check_model_access
from ccbedrock.config import InstallPaths, ResolvedConfig
from ccbedrock.helpers import backup_stamp
from ccbedrock.models import InstallReport, ProbeReport, WriteResult
from ccbedrock.rcfile import ShellTarget, ensure_present
from ccbedrock.ui import console, render_content, render_lines, render_status
from ccbedrock.writer import render_env_snippet, render_settings, write_artifact

log = logging.getLogger(__name__)


def run_install(
    config: ResolvedConfig,
    paths: InstallPaths,
    rc_target: ShellTarget,
    auto_source: bool = False,
    dry_run: bool = False,
    runner: Optional[ProcessRunner] = None,
    which: Optional[Callable[[str], Optional[str]]] = None,
    now: Optional[datetime] = None,
) -> InstallReport:
    """Install the Bedrock configuration and return what was done.

    Files are written before any AWS check runs, so a failing check can never
    undo or block a successful write. Filesystem errors propagate.
    """
    now = now or datetime.now()
    stamp = backup_stamp(now)

    render_status(f"Writing settings: {paths.settings_path}")
    settings = write_artifact(paths.settings_path, render_settings(config), dry_run, stamp)
    _report_write(settings, "settings")

    render_status(f"Writing shell snippet: {paths.env_snippet_path}")
    snippet = write_artifact(
        paths.env_snippet_path, render_env_snippet(config, now), dry_run, stamp
    )
    _report_write(snippet, "shell snippet")

    report = InstallReport(settings=settings, env_snippet=snippet, dry_run=dry_run)

    if auto_source:
        report.rc = ensure_present(
            rc_target.rc_path, paths.env_snippet_path, dry_run, rc_target.kind, now.date()
        )
        _report_rc(report)
    else:
        render_status("Skipping shell rc modification (use --auto-source to enable)")

    console.print()
    render_status("Checking AWS credentials...")
    credentials = check_credentials(config, runner=runner, which=which)
    _render_probe(credentials)
    report.probes.append(credentials)

    if credentials.status != "skipped":
        render_status("Checking Bedrock model access...")
    models = check_model_access(config, runner=runner, which=which)
    _render_probe(models)
    report.probes.append(models)

    log.debug("Install finished, %d backup(s) taken", len(report.backups))
    return report


def _report_write(result: WriteResult, label: str) -> None:
    if result.dry_run:
        render_status(f"[DRY RUN] Would write {label} to: {result.path}")
        render_content(result.content)
    elif result.backup_path is not None:
        render_status(f"Backed up existing {label} to: {result.backup_path}")


def _report_rc(report: InstallReport) -> None:
    rc = report.rc
    if rc.action == "dry-run":
        render_status(f"[DRY RUN] Would append source line to: {rc.path}")
        render_content(rc.block)
    elif rc.action == "already-present":
        render_status(f"Shell rc already sources env snippet: {rc.path}")
    else:
        render_status(f"Appended source line to: {rc.path}", level="success")


def _render_probe(probe: ProbeReport) -> None:
    if probe.status == "skipped":
        if probe.message:
            render_status(probe.message)
        return
    if probe.status == "ok":
        render_status(probe.message, level="success")
        render_lines(probe.details)
        return

    render_status(probe.message, level="warning")
    render_lines(probe.details, muted=True)
    if probe.hints:
        console.print()
        console.print("  To authenticate, try one of:")
        render_lines(probe.hints)
        console.print()


def render_install_summary(report: InstallReport, config: ResolvedConfig, auto_source: bool) -> None:
    """Print files written, backups taken and profile-aware next steps."""
    console.print()
    if report.dry_run:
        render_status("Dry run complete. No changes were made.", level="success")
        return

    render_status("Setup complete!", level="success")
    console.print()
    console.print("Files created:")
    render_lines([str(report.settings.path), str(report.env_snippet.path)], indent=2)

    if report.backups:
        console.print()
        console.print("Backups:")
        render_lines([str(p) for p in report.backups], indent=2)

    console.print()
    console.print("[bold]Next steps:[/bold]")
    steps: list[tuple[str, str]] = []
    if config.profile:
        steps.append(("Log in to AWS SSO:", config.auth_refresh_command))
    steps.extend([
        ("Activate in your current shell:", f'source "{report.env_snippet.path}"'),
        ("Or reload your shell:", "exec $SHELL"),
        ("Start Claude Code:", "claude"),
    ])
    for number, (title, command) in enumerate(steps, start=1):
        console.print(f"  {number}. {title}", highlight=False)
        render_lines([command], indent=5)

    if not auto_source:
        console.print()
        console.print("[yellow]TIP:[/yellow] To auto-load in new terminals, rerun with --auto-source")

    console.print()
    console.print("If you encounter Bedrock throughput errors, use an Inference Profile ARN:")
    render_lines(['--model "arn:aws:bedrock:REGION:ACCOUNT:inference-profile/..."'], indent=2)
