# Copyright (c) 2025 Mahmood Khordoo
#
# This software is licensed under the MIT License.
# See the LICENSE file in the root directory for details.

"""
CCBEDROCK Command Line Interface.

This module provides the single-command CLI for CCBEDROCK. It resolves the
Bedrock settings, selects the install or uninstall flow, and maps fatal
filesystem errors and unknown flags to exit code 1.

Modes:
    install (default): write settings.json and the env snippet, optionally
        wire the snippet into the shell rc file, then verify AWS access
    --uninstall: remove both files and the shell rc block
    --dry-run: combinable with either mode; prints instead of writing
"""

import logging
import sys
from pathlib import Path
from typing import Optional

import click
import typer

from ccbedrock import TOOL_NAME, __version__
from ccbedrock.commands import (
    render_install_summary,
    render_uninstall_summary,
    run_install,
    run_uninstall,
)
from ccbedrock.config import InstallPaths, auto_source_enabled, debug_enabled, resolve_config
from ccbedrock.rcfile import detect_shell_rc, target_for_path
from ccbedrock.ui import err_console, render_banner, render_card, render_status


app = typer.Typer(
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)


def configure_logging() -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug_enabled() else logging.WARNING,
        format="%(levelname)s: %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"{TOOL_NAME} {__version__}")
        raise typer.Exit()


def setup(
    region: Optional[str] = typer.Option(None, "--region", "-r", help="AWS region (default: us-east-1)"),
    profile: Optional[str] = typer.Option(None, "--profile", "-p", help="AWS profile to use for Bedrock and SSO refresh"),
    model: Optional[str] = typer.Option(None, "--model", "-m", help="Primary model ID or Inference Profile ARN"),
    small_model: Optional[str] = typer.Option(None, "--small-model", "-s", help="Small/fast model ID"),
    max_output_tokens: Optional[str] = typer.Option(None, "--max-output-tokens", help="Max output tokens (default: 16000)"),
    max_thinking_tokens: Optional[str] = typer.Option(None, "--max-thinking-tokens", help="Max thinking tokens (default: 10000)"),
    auto_source: bool = typer.Option(False, "--auto-source", help="Add a source line for the env snippet to your shell rc"),
    rc_file: Optional[Path] = typer.Option(None, "--rc-file", help="Shell rc file to use instead of auto-detecting one"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Show what would be done without making changes"),
    uninstall: bool = typer.Option(False, "--uninstall", help="Remove the Claude Code Bedrock configuration"),
    version: bool = typer.Option(False, "--version", callback=_version_callback, is_eager=True, help="Show version and exit"),
):
    """
    Configure Claude Code to use AWS Bedrock as its model provider.

    Creates ~/.claude/settings.json and ~/.claude/claude-code-bedrock.env,
    backing up any existing copies first, and optionally sources the env
    file from your shell rc (~/.zshrc, ~/.bashrc or config.fish).

    Environment variables are used when the matching option is not given:
    AWS_REGION, AWS_PROFILE, BEDROCK_MODEL_ID, BEDROCK_SMALL_MODEL_ID,
    CLAUDE_CODE_MAX_OUTPUT_TOKENS, MAX_THINKING_TOKENS, AUTO_SOURCE_RC=1
    and DEBUG=1 for verbose diagnostics.

    Claude Code uses the AWS SDK credential chain; verify it with
    aws sts get-caller-identity. If you hit throughput errors, pass an
    Inference Profile ARN to --model instead of a foundation model ID.
    """
    configure_logging()

    config = resolve_config({
        "region": region,
        "profile": profile,
        "primary_model": model,
        "small_model": small_model,
        "max_output_tokens": max_output_tokens,
        "max_thinking_tokens": max_thinking_tokens,
    })
    paths = InstallPaths.default()
    rc_target = target_for_path(rc_file.expanduser()) if rc_file else detect_shell_rc()

    mode = "Uninstall" if uninstall else "Install"
    render_banner(
        f"Claude Code + AWS Bedrock Setup v{__version__}",
        f"{mode} (dry run)" if dry_run else mode,
    )
    if dry_run:
        render_status("Running in DRY RUN mode - no changes will be made", level="warning", gap=True)

    try:
        if uninstall:
            report = run_uninstall(paths, rc_target, dry_run=dry_run)
            render_uninstall_summary(report)
            return

        auto = auto_source_enabled(auto_source)
        render_card(
            "Configuration",
            "\n".join([
                f"AWS Region:    {config.region}",
                f"AWS Profile:   {config.profile or '(default credential chain)'}",
                f"Primary Model: {config.primary_model}",
                f"Small Model:   {config.small_model}",
                f"Max Tokens:    {config.max_output_tokens}",
                f"Think Tokens:  {config.max_thinking_tokens}",
                f"Shell rc:      {rc_target.rc_path if auto else '(not modified)'}",
            ]),
        )
        report = run_install(config, paths, rc_target, auto_source=auto, dry_run=dry_run)
        render_install_summary(report, config, auto)
    except OSError as e:
        render_status(str(e), level="error")
        raise typer.Exit(1)


app.command()(setup)


def main(argv: Optional[list[str]] = None) -> int:
    """Run the CLI and return its exit code; usage errors map to 1."""
    command = typer.main.get_command(app)
    try:
        result = command.main(args=argv, prog_name=TOOL_NAME, standalone_mode=False)
    except click.UsageError as e:
        render_status(e.format_message(), level="error")
        err_console.print("Use --help for usage information")
        return 1
    except click.Abort:
        render_status("Aborted.", level="error")
        return 1
    return result if isinstance(result, int) else 0


def run() -> None:
    sys.exit(main())


if __name__ == "__main__":
    run()
