# Copyright (c) 2025 Mahmood Khordoo
#
# This software is licensed under the MIT License.
# See the LICENSE file in the root directory for details.

"""
AWS utilities for CCBEDROCK.

This module provides best-effort checks against the AWS CLI: verifying that
the configured credentials resolve to a caller identity, and counting the
Claude models Bedrock exposes in the configured region. Both checks are
advisory; they never raise and never affect the exit code of an install.

Functions:
    run_process: Default process runner wrapping subprocess.run
    check_credentials: Verify credentials via `aws sts get-caller-identity`
    check_model_access: Count Claude models via `aws bedrock list-foundation-models`
"""

import logging
import subprocess
from typing import Callable, Optional, Protocol, Sequence

from ccbedrock.config import SSO_LOGIN_COMMAND, ResolvedConfig
from ccbedrock.helpers import ExecutableNotFoundError, get_app_path
from ccbedrock.models import ProbeReport, ProcessResult

log = logging.getLogger(__name__)

AWS_CLI = "aws"
MODEL_QUERY = "modelSummaries[?contains(modelId, 'claude')].modelId"


class ProcessRunner(Protocol):
    def __call__(self, args: Sequence[str]) -> ProcessResult: ...


def run_process(args: Sequence[str], timeout: Optional[float] = None) -> ProcessResult:
    """Run a command and capture its output without raising on failure."""
    log.debug("Running: %s", " ".join(args))
    try:
        result = subprocess.run(
            list(args), capture_output=True, text=True, check=False, timeout=timeout
        )
    except subprocess.TimeoutExpired:
        return ProcessResult(exit_code=124, stderr=f"Timed out after {timeout}s")
    except OSError as e:
        return ProcessResult(exit_code=127, stderr=str(e))
    log.debug("Exit code %d", result.returncode)
    return ProcessResult(exit_code=result.returncode, stdout=result.stdout, stderr=result.stderr)


def _profile_args(config: ResolvedConfig) -> list[str]:
    return ["--profile", config.profile] if config.profile else []


def _aws_available(which: Optional[Callable[[str], Optional[str]]]) -> bool:
    try:
        get_app_path(AWS_CLI, which=which)
        return True
    except ExecutableNotFoundError:
        return False


def auth_hints(config: ResolvedConfig) -> list[str]:
    """Remediation commands for a failed credential check."""
    if config.profile:
        return [
            config.auth_refresh_command,
            f"aws configure sso --profile {config.profile}",
        ]
    return [
        f"{SSO_LOGIN_COMMAND} --profile <your-profile>",
        "export AWS_PROFILE=<your-profile>",
        "aws configure",
    ]


def check_credentials(
    config: ResolvedConfig,
    runner: Optional[ProcessRunner] = None,
    which: Optional[Callable[[str], Optional[str]]] = None,
) -> ProbeReport:
    """Check that the AWS credential chain resolves to a caller identity.

    Args:
        config: Resolved settings; the profile, if any, is passed through
        runner: Process runner, replaceable in tests
        which: PATH lookup used to detect the AWS CLI

    Returns:
        ProbeReport with status ok (identity lines in details), failed
        (remediation hints) or skipped (AWS CLI not installed)
    """
    if not _aws_available(which):
        return ProbeReport(
            status="skipped",
            message="AWS CLI not found (optional). Install for easier auth verification.",
        )

    runner = runner or run_process
    result = runner([AWS_CLI, "sts", "get-caller-identity", *_profile_args(config)])
    if not result.ok:
        return ProbeReport(
            status="failed",
            message="AWS auth check failed. This is OK if you haven't logged in yet.",
            details=[line for line in result.stderr.strip().splitlines() if line.strip()],
            hints=auth_hints(config),
        )

    identity = [
        line.strip()
        for line in result.stdout.splitlines()
        if "Account" in line or "Arn" in line
    ]
    return ProbeReport(status="ok", message="AWS auth successful!", details=identity)


def check_model_access(
    config: ResolvedConfig,
    runner: Optional[ProcessRunner] = None,
    which: Optional[Callable[[str], Optional[str]]] = None,
) -> ProbeReport:
    """Count the Claude models Bedrock lists in the configured region."""
    if not _aws_available(which):
        return ProbeReport(status="skipped", message="")

    runner = runner or run_process
    result = runner([
        AWS_CLI, "bedrock", "list-foundation-models",
        "--region", config.region,
        "--by-provider", "anthropic",
        "--query", MODEL_QUERY,
        "--output", "text",
        *_profile_args(config),
    ])
    if not result.ok:
        error = (result.stderr or result.stdout).strip()
        return ProbeReport(
            status="failed",
            message="Could not list Bedrock models. Check your permissions.",
            details=[f"Error: {error}"],
        )

    model_count = len(result.stdout.split())
    return ProbeReport(
        status="ok",
        message=f"Found {model_count} Claude models available in Bedrock ({config.region})",
    )
