# Copyright (c) 2025 Mahmood Khordoo
#
# This software is licensed under the MIT License.
# See the LICENSE file in the root directory for details.

"""
Shell rc wiring for CCBEDROCK.

Inserts and removes a single marked block in the user's shell startup file:

    <blank line>
    # Claude Code + Bedrock (added by ccbedrock on 2025-01-31)
    if [ -f "/home/me/.claude/claude-code-bedrock.env" ]; then . "/home/me/.claude/claude-code-bedrock.env"; fi

Insertion is append-only and guarded by a literal search for the snippet path,
raw or in its escaped double-quoted spelling.
Removal drops the marker, the directive line after it and the blank separator
before it, plus any stray source line for the snippet. Every other line is
kept verbatim.
"""

import logging
import os
import platform
from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import Mapping, Optional

from ccbedrock import TOOL_NAME
from ccbedrock.helpers import atomic_write_text, backup_file, backup_stamp
from ccbedrock.models import RcResult

log = logging.getLogger(__name__)

MARKER_PREFIX = "# Claude Code + Bedrock (added by"
POSIX_SPECIALS = "\\\"$`"
FISH_SPECIALS = "\\\"$"
_SOURCE_PREFIXES = ("source ", ". ", "if [ -f", "if test -f", "[ -f", "test -f")
# surrogateescape keeps undecodable bytes intact across read and rewrite
_ENCODING = {"encoding": "utf-8", "errors": "surrogateescape", "newline": ""}


@dataclass(frozen=True)
class ShellTarget:
    """Startup file to wire, and the shell dialect of its directive."""

    kind: str
    rc_path: Path


def detect_shell_rc(
    environ: Optional[Mapping[str, str]] = None,
    home: Optional[Path] = None,
    system: Optional[str] = None,
) -> ShellTarget:
    """Pick the rc file for the user's shell.

    $SHELL decides first. Without a recognised shell, the first existing file
    among .zshrc, .bashrc and .bash_profile wins, falling back to ~/.bashrc.
    """
    environ = os.environ if environ is None else environ
    home = home or Path.home()
    system = system or platform.system()
    shell_path = environ.get("SHELL", "")

    if shell_path.endswith("zsh"):
        return ShellTarget("posix", home / ".zshrc")
    if shell_path.endswith("bash"):
        # login shells on macOS read .bash_profile, not .bashrc
        if system == "Darwin" and (home / ".bash_profile").exists():
            return ShellTarget("posix", home / ".bash_profile")
        return ShellTarget("posix", home / ".bashrc")
    if shell_path.endswith("fish"):
        return ShellTarget("fish", home / ".config" / "fish" / "config.fish")

    for name in (".zshrc", ".bashrc", ".bash_profile"):
        if (home / name).exists():
            return ShellTarget("posix", home / name)
    return ShellTarget("posix", home / ".bashrc")


def target_for_path(rc_path: Path) -> ShellTarget:
    """Build a ShellTarget for an explicitly chosen rc file."""
    kind = "fish" if rc_path.suffix == ".fish" else "posix"
    return ShellTarget(kind, rc_path)


def marker_line(today: Optional[date] = None) -> str:
    return f"{MARKER_PREFIX} {TOOL_NAME} on {(today or date.today()):%Y-%m-%d})"


def _double_quote(path: Path, kind: str = "posix") -> str:
    """Double-quote path so the raw path text survives in the rc file."""
    specials = FISH_SPECIALS if kind == "fish" else POSIX_SPECIALS
    escaped = "".join("\\" + ch if ch in specials else ch for ch in str(path))
    return f'"{escaped}"'


def _path_forms(snippet_path: Path) -> tuple[str, ...]:
    """Every spelling of snippet_path a ccbedrock directive may contain."""
    raw = str(snippet_path)
    forms = {raw, _double_quote(snippet_path)[1:-1], _double_quote(snippet_path, "fish")[1:-1]}
    return tuple(sorted(forms))


def _references(text: str, snippet_path: Path) -> bool:
    return any(form in text for form in _path_forms(snippet_path))


def source_directive(snippet_path: Path, kind: str = "posix") -> str:
    """Return a one-line directive that sources the snippet only if it exists."""
    quoted = _double_quote(snippet_path, kind)
    if kind == "fish":
        return f"if test -f {quoted}; source {quoted}; end"
    return f"if [ -f {quoted} ]; then . {quoted}; fi"


def render_block(snippet_path: Path, kind: str = "posix", today: Optional[date] = None) -> str:
    return f"\n{marker_line(today)}\n{source_directive(snippet_path, kind)}\n"


def _read(rc_path: Path) -> str:
    with open(rc_path, "r", **_ENCODING) as fh:
        return fh.read()


def _is_marker(line: str) -> bool:
    return line.strip().startswith(MARKER_PREFIX)


def _is_source_directive(line: str, snippet_path: Path) -> bool:
    stripped = line.strip()
    return _references(stripped, snippet_path) and stripped.startswith(_SOURCE_PREFIXES)


def strip_block(content: str, snippet_path: Path) -> str:
    """Return content with every ccbedrock block for snippet_path removed."""
    lines = content.splitlines(keepends=True)
    kept: list[str] = []
    i = 0
    while i < len(lines):
        line = lines[i]
        if _is_marker(line):
            # the blank separator written ahead of the marker
            if kept and not kept[-1].strip():
                kept.pop()
            if i + 1 < len(lines) and _references(lines[i + 1], snippet_path):
                i += 2
            else:
                i += 1
            continue
        if not _is_source_directive(line, snippet_path):
            kept.append(line)
        i += 1
    return "".join(kept)


def ensure_present(
    rc_path: Path,
    snippet_path: Path,
    dry_run: bool = False,
    kind: str = "posix",
    today: Optional[date] = None,
) -> RcResult:
    """Append the source block to rc_path unless the snippet path is already there.

    Args:
        rc_path: Shell startup file; created along with its parent if missing
        snippet_path: Env snippet the block should source
        dry_run: Return the block without touching disk
        kind: "posix" or "fish" directive dialect
        today: Date stamped on the marker line

    Returns:
        RcResult with action appended, already-present or dry-run

    Raises:
        OSError: The rc file could not be created, read or appended to
    """
    block = render_block(snippet_path, kind, today)
    if dry_run:
        return RcResult(path=rc_path, action="dry-run", block=block, dry_run=True)

    rc_path.parent.mkdir(parents=True, exist_ok=True)
    rc_path.touch(exist_ok=True)

    content = _read(rc_path)
    if _references(content, snippet_path):
        log.debug("%s already references %s", rc_path, snippet_path)
        return RcResult(path=rc_path, action="already-present")

    if content and not content.endswith(("\n", "\r")):
        block = "\n" + block
    with open(rc_path, "a", **_ENCODING) as fh:
        fh.write(block)
    log.debug("Appended source block to %s", rc_path)
    return RcResult(path=rc_path, action="appended", block=block)


def remove_block(
    rc_path: Path,
    snippet_path: Path,
    dry_run: bool = False,
    stamp: Optional[str] = None,
) -> RcResult:
    """Remove the source block from rc_path, backing the file up first.

    Args:
        rc_path: Shell startup file
        snippet_path: Env snippet the block sources
        dry_run: Report intent only
        stamp: Backup timestamp suffix shared across one run

    Returns:
        RcResult with action missing, dry-run, removed or absent

    Raises:
        OSError: Backup or rewrite failed; the rc file is left untouched if
            the backup fails
    """
    if not rc_path.exists():
        return RcResult(path=rc_path, action="missing", dry_run=dry_run)
    if dry_run:
        return RcResult(path=rc_path, action="dry-run", dry_run=True)

    backup = backup_file(rc_path, stamp or backup_stamp())
    content = _read(rc_path)
    stripped = strip_block(content, snippet_path)
    if stripped == content:
        return RcResult(path=rc_path, action="absent", backup_path=backup)

    atomic_write_text(rc_path, stripped, errors="surrogateescape")
    log.debug("Removed source block from %s", rc_path)
    return RcResult(path=rc_path, action="removed", backup_path=backup)
