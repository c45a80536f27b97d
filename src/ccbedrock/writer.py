# Copyright (c) 2025 Mahmood Khordoo
#
# This software is licensed under the MIT License.
# See the LICENSE file in the root directory for details.

"""
Artifact rendering and writing for CCBEDROCK.

Renders a ResolvedConfig into the two files this tool owns:

    settings.json            Claude Code settings with the Bedrock env block
    claude-code-bedrock.env  shell snippet exporting the same variables

Writes always fully replace the target. An existing file is copied to a
timestamped backup first, and a failed backup aborts before the overwrite.
"""

import json
import logging
import shlex
from datetime import datetime
from pathlib import Path
from typing import Optional

from ccbedrock import TOOL_NAME, __version__
from ccbedrock.config import ResolvedConfig
from ccbedrock.helpers import atomic_write_text, backup_file, backup_stamp
from ccbedrock.models import RemoveResult, WriteResult

log = logging.getLogger(__name__)

ENABLE_FLAG = "CLAUDE_CODE_USE_BEDROCK"
SNIPPET_HEADER = "# Claude Code + Bedrock environment (global)"


def settings_env(config: ResolvedConfig) -> dict[str, str]:
    """Return the flat env mapping shared by both artifacts, in output order."""
    env = {
        ENABLE_FLAG: "1",
        "AWS_REGION": config.region,
    }
    if config.profile:
        env["AWS_PROFILE"] = config.profile
    env.update({
        "ANTHROPIC_MODEL": config.primary_model,
        "ANTHROPIC_SMALL_FAST_MODEL": config.small_model,
        "CLAUDE_CODE_MAX_OUTPUT_TOKENS": config.max_output_tokens,
        "MAX_THINKING_TOKENS": config.max_thinking_tokens,
    })
    return env


def render_settings(config: ResolvedConfig) -> str:
    """Render settings.json content. AWS_PROFILE appears only when a profile is set."""
    document = {
        "awsAuthRefresh": config.auth_refresh_command,
        "env": settings_env(config),
    }
    return json.dumps(document, indent=2) + "\n"


def render_env_snippet(config: ResolvedConfig, generated_at: Optional[datetime] = None) -> str:
    """Render the shell-sourceable env snippet."""
    stamp = (generated_at or datetime.now()).strftime("%Y-%m-%d %H:%M:%S")
    lines = [
        SNIPPET_HEADER,
        f"# Generated by {TOOL_NAME} v{__version__} on {stamp}",
    ]
    lines.extend(
        f"export {key}={shlex.quote(value)}" for key, value in settings_env(config).items()
    )
    return "\n".join(lines) + "\n"


def write_artifact(path: Path, content: str, dry_run: bool = False, stamp: Optional[str] = None) -> WriteResult:
    """Write content to path, backing up any existing file first.

    Args:
        path: Destination file
        content: Full replacement content
        dry_run: Render only; the filesystem is not touched
        stamp: Backup timestamp suffix shared across one run

    Returns:
        WriteResult carrying the content and any backup path

    Raises:
        OSError: Directory creation, backup or write failed
    """
    if dry_run:
        log.debug("Dry run, not writing %s", path)
        return WriteResult(path=path, content=content, dry_run=True)

    path.parent.mkdir(parents=True, exist_ok=True)

    backup = None
    if path.exists():
        backup = backup_file(path, stamp or backup_stamp())

    atomic_write_text(path, content)
    log.debug("Wrote %d bytes to %s", len(content), path)
    return WriteResult(path=path, content=content, backup_path=backup)


def remove_artifact(path: Path, dry_run: bool = False) -> RemoveResult:
    """Delete path if it exists. A missing file is not an error."""
    if not path.exists():
        return RemoveResult(path=path, existed=False, dry_run=dry_run)
    if not dry_run:
        path.unlink()
        log.debug("Removed %s", path)
    return RemoveResult(path=path, existed=True, dry_run=dry_run)
