"""Unit tests for commands/install.py and commands/uninstall.py."""

from datetime import datetime

from ccbedrock.commands import run_install, run_uninstall
from ccbedrock.config import InstallPaths, ResolvedConfig
from ccbedrock.models import ProcessResult
from ccbedrock.rcfile import ShellTarget

NOW = datetime(2025, 11, 24, 9, 30, 0)


def _no_aws(name):
    return None


def test_uninstall_with_nothing_installed_is_noop(tmp_path):
    """Test uninstalling a clean home removes nothing and creates nothing."""
    paths = InstallPaths.default(home=tmp_path)
    target = ShellTarget("posix", tmp_path / ".bashrc")

    report = run_uninstall(paths, target, now=NOW)

    assert [r.existed for r in report.removed] == [False, False]
    assert report.rc.action == "missing"
    assert report.backups == []
    assert list(tmp_path.iterdir()) == []


def test_uninstall_dry_run_keeps_files(tmp_path):
    """Test an uninstall dry run reports but deletes nothing."""
    paths = InstallPaths.default(home=tmp_path)
    target = ShellTarget("posix", tmp_path / ".bashrc")
    run_install(ResolvedConfig(), paths, target, auto_source=True, which=_no_aws, now=NOW)
    rc_before = target.rc_path.read_text()

    report = run_uninstall(paths, target, dry_run=True, now=NOW)

    assert all(r.existed and r.dry_run for r in report.removed)
    assert paths.settings_path.exists()
    assert paths.env_snippet_path.exists()
    assert target.rc_path.read_text() == rc_before


def test_uninstall_removes_snippet_before_settings(tmp_path):
    paths = InstallPaths.default(home=tmp_path)
    target = ShellTarget("posix", tmp_path / ".bashrc")
    run_install(ResolvedConfig(), paths, target, which=_no_aws, now=NOW)

    report = run_uninstall(paths, target, now=NOW)

    assert [r.path for r in report.removed] == [paths.env_snippet_path, paths.settings_path]


def test_install_report_collects_backups(tmp_path):
    """Test every backup taken during an install is listed in the report."""
    paths = InstallPaths.default(home=tmp_path)
    target = ShellTarget("posix", tmp_path / ".bashrc")
    run_install(ResolvedConfig(), paths, target, which=_no_aws, now=NOW)

    report = run_install(
        ResolvedConfig(region="eu-west-1"), paths, target, which=_no_aws, now=NOW
    )

    assert sorted(p.name for p in report.backups) == [
        "claude-code-bedrock.env.backup.20251124-093000",
        "settings.json.backup.20251124-093000",
    ]


def test_install_writes_files_before_probing(tmp_path):
    """Test the AWS checks run only after both files exist."""
    paths = InstallPaths.default(home=tmp_path)
    target = ShellTarget("posix", tmp_path / ".bashrc")
    seen = []

    def runner(args):
        seen.append((paths.settings_path.exists(), paths.env_snippet_path.exists()))
        return ProcessResult(exit_code=0, stdout='"Account": "123456789012"\n')

    report = run_install(
        ResolvedConfig(), paths, target, runner=runner, which=lambda name: "/usr/bin/aws", now=NOW
    )

    assert seen == [(True, True), (True, True)]
    assert [p.status for p in report.probes] == ["ok", "ok"]
