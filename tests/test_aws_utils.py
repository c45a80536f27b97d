"""Unit tests for aws_utils.py."""

import subprocess

from ccbedrock.aws_utils import (
    auth_hints,
    check_credentials,
    check_model_access,
    run_process,
)
from ccbedrock.config import ResolvedConfig
from ccbedrock.models import ProcessResult

IDENTITY_JSON = """{
    "UserId": "AROAEXAMPLE:me@example.com",
    "Account": "123456789012",
    "Arn": "arn:aws:sts::123456789012:assumed-role/Dev/me@example.com"
}
"""


class FakeRunner:
    """Records invocations and replays a canned ProcessResult."""

    def __init__(self, result: ProcessResult):
        self.result = result
        self.calls: list[list[str]] = []

    def __call__(self, args):
        self.calls.append(list(args))
        return self.result


def aws_found(name):
    return "/usr/local/bin/aws" if name == "aws" else None


def aws_missing(name):
    return None


def test_check_credentials_skipped_without_aws_cli():
    """Test a missing AWS CLI yields an informational skip, not an error."""
    runner = FakeRunner(ProcessResult(exit_code=0))

    report = check_credentials(ResolvedConfig(), runner=runner, which=aws_missing)

    assert report.status == "skipped"
    assert "AWS CLI not found" in report.message
    assert runner.calls == []


def test_check_credentials_success_keeps_identity_lines():
    """Test only Account and Arn lines are surfaced on success."""
    runner = FakeRunner(ProcessResult(exit_code=0, stdout=IDENTITY_JSON))

    report = check_credentials(ResolvedConfig(), runner=runner, which=aws_found)

    assert report.status == "ok"
    assert report.details == [
        '"Account": "123456789012",',
        '"Arn": "arn:aws:sts::123456789012:assumed-role/Dev/me@example.com"',
    ]
    assert runner.calls == [["aws", "sts", "get-caller-identity"]]


def test_check_credentials_passes_profile():
    """Test the configured profile is forwarded to the AWS CLI."""
    runner = FakeRunner(ProcessResult(exit_code=0, stdout=IDENTITY_JSON))

    check_credentials(ResolvedConfig(profile="acme"), runner=runner, which=aws_found)

    assert runner.calls == [["aws", "sts", "get-caller-identity", "--profile", "acme"]]


def test_check_credentials_failure_with_profile_hints():
    """Test a failed check suggests an SSO login for the configured profile."""
    runner = FakeRunner(ProcessResult(exit_code=255, stderr="Error loading SSO Token\n"))

    report = check_credentials(ResolvedConfig(profile="acme"), runner=runner, which=aws_found)

    assert report.status == "failed"
    assert report.details == ["Error loading SSO Token"]
    assert report.hints[0] == "aws sso login --profile acme"


def test_check_credentials_failure_without_profile_hints():
    """Test generic remediation hints when no profile is configured."""
    runner = FakeRunner(ProcessResult(exit_code=255, stderr="Unable to locate credentials"))

    report = check_credentials(ResolvedConfig(), runner=runner, which=aws_found)

    assert report.status == "failed"
    assert report.hints == auth_hints(ResolvedConfig())
    assert "export AWS_PROFILE=<your-profile>" in report.hints


def test_check_model_access_counts_models():
    """Test the number of listed model ids is reported."""
    stdout = "anthropic.claude-3-haiku-20240307-v1:0\tanthropic.claude-sonnet-4-20250514-v1:0\n"
    runner = FakeRunner(ProcessResult(exit_code=0, stdout=stdout))

    report = check_model_access(ResolvedConfig(region="eu-west-1"), runner=runner, which=aws_found)

    assert report.status == "ok"
    assert report.message.startswith("Found 2 Claude models")
    args = runner.calls[0]
    assert args[:3] == ["aws", "bedrock", "list-foundation-models"]
    assert args[args.index("--region") + 1] == "eu-west-1"
    assert "--profile" not in args


def test_check_model_access_failure_carries_error_text():
    """Test a listing failure is a warning with the raw error."""
    runner = FakeRunner(ProcessResult(exit_code=254, stderr="AccessDeniedException: not authorized"))

    report = check_model_access(ResolvedConfig(), runner=runner, which=aws_found)

    assert report.status == "failed"
    assert report.details == ["Error: AccessDeniedException: not authorized"]


def test_check_model_access_silent_without_aws_cli():
    report = check_model_access(ResolvedConfig(), runner=FakeRunner(ProcessResult(0)), which=aws_missing)

    assert report.status == "skipped"
    assert report.message == ""


def test_run_process_captures_output(mocker):
    """Test run_process maps a completed process to a ProcessResult."""
    mocker.patch(
        "subprocess.run",
        return_value=subprocess.CompletedProcess(args=["aws"], returncode=0, stdout="out", stderr=""),
    )

    result = run_process(["aws", "--version"])

    assert result == ProcessResult(exit_code=0, stdout="out", stderr="")
    assert result.ok


def test_run_process_timeout_is_not_fatal(mocker):
    """Test a timeout becomes a failed result instead of an exception."""
    mocker.patch("subprocess.run", side_effect=subprocess.TimeoutExpired(cmd="aws", timeout=5))

    result = run_process(["aws", "sts", "get-caller-identity"], timeout=5)

    assert result.exit_code == 124
    assert not result.ok


def test_run_process_missing_binary_is_not_fatal(mocker):
    mocker.patch("subprocess.run", side_effect=FileNotFoundError("aws"))

    assert run_process(["aws"]).exit_code == 127
