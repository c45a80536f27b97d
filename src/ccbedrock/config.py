# Copyright (c) 2025 Mahmood Khordoo
#
# This software is licensed under the MIT License.
# See the LICENSE file in the root directory for details.

"""
Configuration resolution for CCBEDROCK.

Settings are resolved once per run from three layers, highest priority first:
explicit CLI flags, environment variables, then built-in defaults. The first
non-empty value wins for each field. The result is immutable and is only ever
serialized into the two output artifacts, never persisted as an object.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from pydantic import BaseModel, ConfigDict, computed_field

DEFAULT_REGION = "us-east-1"
DEFAULT_PRIMARY_MODEL = "us.anthropic.claude-opus-4-5-20251101-v1:0"
DEFAULT_SMALL_MODEL = "us.anthropic.claude-haiku-4-5-20251001-v1:0"
DEFAULT_MAX_OUTPUT_TOKENS = "16000"
DEFAULT_MAX_THINKING_TOKENS = "10000"

SSO_LOGIN_COMMAND = "aws sso login"

# field name -> environment variable consulted when no flag is given
ENV_VARS = {
    "region": "AWS_REGION",
    "profile": "AWS_PROFILE",
    "primary_model": "BEDROCK_MODEL_ID",
    "small_model": "BEDROCK_SMALL_MODEL_ID",
    "max_output_tokens": "CLAUDE_CODE_MAX_OUTPUT_TOKENS",
    "max_thinking_tokens": "MAX_THINKING_TOKENS",
}
AUTO_SOURCE_ENV = "AUTO_SOURCE_RC"
DEBUG_ENV = "DEBUG"

DEFAULTS = {
    "region": DEFAULT_REGION,
    "profile": None,
    "primary_model": DEFAULT_PRIMARY_MODEL,
    "small_model": DEFAULT_SMALL_MODEL,
    "max_output_tokens": DEFAULT_MAX_OUTPUT_TOKENS,
    "max_thinking_tokens": DEFAULT_MAX_THINKING_TOKENS,
}

SETTINGS_FILENAME = "settings.json"
ENV_SNIPPET_FILENAME = "claude-code-bedrock.env"


class ResolvedConfig(BaseModel):
    """Fully-resolved Bedrock settings for a single run."""

    model_config = ConfigDict(frozen=True)

    region: str = DEFAULT_REGION
    profile: Optional[str] = None
    primary_model: str = DEFAULT_PRIMARY_MODEL
    small_model: str = DEFAULT_SMALL_MODEL
    max_output_tokens: str = DEFAULT_MAX_OUTPUT_TOKENS
    max_thinking_tokens: str = DEFAULT_MAX_THINKING_TOKENS

    @computed_field
    @property
    def auth_refresh_command(self) -> str:
        """Command Claude Code re-runs when cached AWS credentials expire."""
        if self.profile:
            return f"{SSO_LOGIN_COMMAND} --profile {self.profile}"
        return SSO_LOGIN_COMMAND


@dataclass(frozen=True)
class InstallPaths:
    """Locations of the two artifacts this tool owns."""

    claude_home: Path
    settings_path: Path
    env_snippet_path: Path

    @classmethod
    def default(cls, home: Optional[Path] = None) -> "InstallPaths":
        claude_home = (home or Path.home()) / ".claude"
        return cls(
            claude_home=claude_home,
            settings_path=claude_home / SETTINGS_FILENAME,
            env_snippet_path=claude_home / ENV_SNIPPET_FILENAME,
        )


def _first_non_empty(*values: Optional[str]) -> Optional[str]:
    for value in values:
        if value is not None and value.strip():
            return value
    return None


def resolve_config(
    flags: Optional[Mapping[str, Optional[str]]] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> ResolvedConfig:
    """Resolve a ResolvedConfig from flags, environment and defaults.

    Args:
        flags: Explicit CLI values keyed by field name; None or blank means unset
        environ: Environment mapping (defaults to os.environ)

    Returns:
        ResolvedConfig with every required field populated
    """
    flags = flags or {}
    environ = os.environ if environ is None else environ

    values = {}
    for field, default in DEFAULTS.items():
        resolved = _first_non_empty(flags.get(field), environ.get(ENV_VARS[field]))
        values[field] = resolved if resolved is not None else default
    return ResolvedConfig(**values)


def auto_source_enabled(flag: bool = False, environ: Optional[Mapping[str, str]] = None) -> bool:
    """Return True when rc-file wiring was requested by flag or AUTO_SOURCE_RC=1."""
    environ = os.environ if environ is None else environ
    return flag or environ.get(AUTO_SOURCE_ENV, "0") == "1"


def debug_enabled(environ: Optional[Mapping[str, str]] = None) -> bool:
    environ = os.environ if environ is None else environ
    return environ.get(DEBUG_ENV, "0") == "1"
