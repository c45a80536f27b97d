"""Shared fixtures: an isolated HOME and a clean Bedrock environment."""

import pytest

from ccbedrock.config import AUTO_SOURCE_ENV, DEBUG_ENV, ENV_VARS


@pytest.fixture
def home(tmp_path, monkeypatch):
    """Point HOME at an empty directory and clear every variable we read."""
    home_dir = tmp_path / "home"
    home_dir.mkdir()
    monkeypatch.setenv("HOME", str(home_dir))
    monkeypatch.setenv("SHELL", "/bin/zsh")
    for var in [*ENV_VARS.values(), AUTO_SOURCE_ENV, DEBUG_ENV]:
        monkeypatch.delenv(var, raising=False)
    return home_dir


@pytest.fixture
def no_aws_cli(mocker):
    """Make the AWS CLI look uninstalled so no real process is spawned."""
    return mocker.patch("ccbedrock.helpers.shutil.which", return_value=None)
