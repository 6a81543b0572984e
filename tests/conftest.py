"""Shared test fixtures and configuration."""

import tempfile
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from reposcope.git.runner import CommandResult, CommandRunner


class FakeRunner(CommandRunner):
    """CommandRunner that returns canned output instead of running git.

    Outputs are keyed by the subcommand fragment joined with spaces, so
    tests do not depend on the compiled global options.
    """

    def __init__(self, outputs=None, **kwargs):
        super().__init__(**kwargs)
        self.outputs = dict(outputs or {})
        self.invocations = []

    def _invoke(self, command, args):
        self.invocations.append(command)
        fragment = " ".join(args[1 + len(self.compiled_options()):])
        return CommandResult(
            command=command,
            args=tuple(args),
            output=self.outputs.get(fragment, ""),
            returncode=0,
        )


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def mock_repo_root(temp_dir):
    """Create a mock git repository root directory."""
    # Create .git directory to simulate a git repo
    git_dir = temp_dir / ".git"
    git_dir.mkdir()
    return temp_dir


@pytest.fixture
def fake_runner():
    """Factory for FakeRunner instances with canned outputs."""
    def _make(outputs=None):
        return FakeRunner(outputs)
    return _make


@pytest.fixture
def sample_describe_output():
    """Sample git describe --tags --long output."""
    return "v1.2.0-5-gabc1234"


@pytest.fixture
def sample_log_output():
    """Sample git log -1 output in the reposcope field format."""
    return (
        "Jane---jane@x.com---Mon Jan 1---fix bug---"
        "abcdef1234567890---abcdef1---Jane---jane@x.com"
    )


@pytest.fixture
def completed_process():
    """Factory for subprocess.run return values."""
    def _make(stdout="", returncode=0, stderr=""):
        result = MagicMock()
        result.stdout = stdout
        result.stderr = stderr
        result.returncode = returncode
        return result
    return _make


@pytest.fixture
def mock_git_commands(mocker):
    """Mock subprocess.run for git commands."""
    mock_run = mocker.patch("subprocess.run")
    return mock_run
