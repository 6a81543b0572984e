"""Tests for reposcope.git.runner module."""

import pytest

from reposcope.git.exceptions import GitCommandError, ToolNotFoundError
from reposcope.git.runner import CommandRunner


class TestExecute:
    """Tests for CommandRunner.execute."""

    def test_successful_command(self, mock_git_commands, completed_process):
        """Test that stripped stdout is returned."""
        mock_git_commands.return_value = completed_process("output\n")

        result = CommandRunner().execute(["status"])
        assert result == "output"

    def test_builds_argument_list(self, mock_git_commands, completed_process):
        """Test that tool path, options and fragment are passed as a list."""
        mock_git_commands.return_value = completed_process("")
        runner = CommandRunner("/usr/bin/git")
        runner.set_option("work-tree", "/repo")
        runner.set_option("git-dir", "/repo/.git")

        runner.execute("describe --tags --long")

        args = mock_git_commands.call_args[0][0]
        assert args == [
            "/usr/bin/git",
            "--work-tree=/repo",
            "--git-dir=/repo/.git",
            "describe",
            "--tags",
            "--long",
        ]
        assert "shell" not in mock_git_commands.call_args[1]

    def test_string_fragment_respects_quotes(self, mock_git_commands, completed_process):
        """Test that string fragments are split with shell-like rules."""
        mock_git_commands.return_value = completed_process("")

        CommandRunner().execute('log -1 "--pretty=format:%an %ae"')

        args = mock_git_commands.call_args[0][0]
        assert args == ["git", "log", "-1", "--pretty=format:%an %ae"]

    def test_second_call_is_cached(self, mock_git_commands, completed_process):
        """Test that the same fragment runs git at most once."""
        mock_git_commands.return_value = completed_process("v1.0-0-gabc\n")
        runner = CommandRunner()

        first = runner.execute(["describe", "--tags", "--long"])
        second = runner.execute(["describe", "--tags", "--long"])

        assert first == second == "v1.0-0-gabc"
        assert mock_git_commands.call_count == 1

    def test_string_and_list_fragments_share_cache(self, mock_git_commands, completed_process):
        """Test that equivalent fragments hit the same cache entry."""
        mock_git_commands.return_value = completed_process("main\n")
        runner = CommandRunner()

        runner.execute("name-rev --name-only HEAD")
        runner.execute(["name-rev", "--name-only", "HEAD"])

        assert mock_git_commands.call_count == 1

    def test_distinct_fragments_run_separately(self, mock_git_commands, completed_process):
        """Test that different commands are cached independently."""
        mock_git_commands.return_value = completed_process("x\n")
        runner = CommandRunner()

        runner.execute(["status"])
        runner.execute(["log"])

        assert mock_git_commands.call_count == 2
        assert len(runner.cache) == 2

    def test_force_reset_runs_again(self, mock_git_commands, completed_process):
        """Test that force_reset bypasses the cache."""
        mock_git_commands.side_effect = [
            completed_process("old\n"),
            completed_process("new\n"),
        ]
        runner = CommandRunner()

        assert runner.execute(["describe"]) == "old"
        assert runner.execute(["describe"], force_reset=True) == "new"
        assert mock_git_commands.call_count == 2

    def test_force_reset_clears_other_entries(self, mock_git_commands, completed_process):
        """Test that a forced reset drops the whole cache."""
        mock_git_commands.return_value = completed_process("x\n")
        runner = CommandRunner()

        runner.execute(["status"])
        runner.execute(["log"], force_reset=True)

        assert list(runner.cache) == ["git log"]

    def test_failed_command_returns_empty(self, mock_git_commands, completed_process):
        """Test that a non-zero exit is not raised."""
        mock_git_commands.return_value = completed_process(
            "", returncode=128, stderr="fatal: No names found"
        )

        assert CommandRunner().execute(["describe", "--tags"]) == ""

    def test_missing_git_returns_empty(self, mock_git_commands):
        """Test that a missing executable is not raised."""
        mock_git_commands.side_effect = FileNotFoundError()

        assert CommandRunner("/nope/git").execute(["status"]) == ""

    def test_unexecutable_tool_returns_empty(self, mock_git_commands):
        """Test that a tool path that cannot be executed is not raised."""
        mock_git_commands.side_effect = PermissionError(13, "Permission denied")

        result = CommandRunner("/tmp").run(["status"])

        assert result.output == ""
        assert result.tool_missing

    def test_unexecutable_tool_raises_with_check(self, mock_git_commands):
        """Test that check=True reports an unusable tool as ToolNotFoundError."""
        mock_git_commands.side_effect = PermissionError(13, "Permission denied")

        with pytest.raises(ToolNotFoundError):
            CommandRunner("/tmp").run(["status"], check=True)

    def test_decodes_output_leniently(self, mock_git_commands, completed_process):
        """Test that output is decoded as UTF-8 with undecodable bytes replaced."""
        mock_git_commands.return_value = completed_process("caf\ufffd fix\n")

        assert CommandRunner().execute(["log", "-1"]) == "caf\ufffd fix"

        kwargs = mock_git_commands.call_args[1]
        assert kwargs["encoding"] == "utf-8"
        assert kwargs["errors"] == "replace"


class TestRun:
    """Tests for CommandRunner.run."""

    def test_exposes_exit_status(self, mock_git_commands, completed_process):
        """Test that the result carries returncode and stderr."""
        mock_git_commands.return_value = completed_process(
            "", returncode=128, stderr="fatal: not a git repository\n"
        )

        result = CommandRunner().run(["rev-parse", "--git-dir"])

        assert not result.ok
        assert result.returncode == 128
        assert result.stderr == "fatal: not a git repository"
        assert result.command == "git rev-parse --git-dir"

    def test_check_raises_on_failure(self, mock_git_commands, completed_process):
        """Test that check=True raises GitCommandError."""
        mock_git_commands.return_value = completed_process(
            "", returncode=1, stderr="error"
        )

        with pytest.raises(GitCommandError) as exc_info:
            CommandRunner().run(["invalid"], check=True)

        assert "Git command failed" in str(exc_info.value)
        assert exc_info.value.returncode == 1

    def test_check_raises_when_git_missing(self, mock_git_commands):
        """Test that check=True raises ToolNotFoundError."""
        mock_git_commands.side_effect = FileNotFoundError()

        with pytest.raises(ToolNotFoundError) as exc_info:
            CommandRunner().run(["status"], check=True)

        assert "not installed" in str(exc_info.value)

    def test_check_passes_on_success(self, mock_git_commands, completed_process):
        """Test that check=True returns successful results."""
        mock_git_commands.return_value = completed_process("ok\n")

        result = CommandRunner().run(["status"], check=True)
        assert result.ok
        assert result.output == "ok"


class TestOptions:
    """Tests for option handling on CommandRunner."""

    def test_set_then_get(self):
        """Test that an option round-trips by name."""
        runner = CommandRunner()
        runner.set_option("namespace", "feature")
        assert runner.get_option("namespace") == "feature"

    def test_set_twice_keeps_last(self):
        """Test that the last write for a name wins."""
        runner = CommandRunner()
        runner.set_option("namespace", "one")
        runner.set_option("namespace", "two")
        assert runner.get_option("namespace") == "two"
        assert runner.compiled_options() == ["--namespace=two"]

    def test_get_unknown_returns_none(self):
        """Test that unknown options read as None."""
        assert CommandRunner().get_option("missing") is None

    def test_compiled_options_memoized(self, mocker):
        """Test that options are compiled once until they change."""
        compile_spy = mocker.patch(
            "reposcope.git.runner.compile_options", return_value=["--bare"]
        )
        runner = CommandRunner()

        first = runner.compiled_options()
        second = runner.compiled_options()

        assert first == second == ["--bare"]
        assert compile_spy.call_count == 1

    def test_compiled_options_recomputed_after_reset(self, mocker):
        """Test that reset forces recompilation."""
        compile_spy = mocker.patch(
            "reposcope.git.runner.compile_options", return_value=[]
        )
        runner = CommandRunner()

        runner.compiled_options()
        runner.reset()
        runner.compiled_options()

        assert compile_spy.call_count == 2

    def test_set_option_updates_compiled_options(self):
        """Test that changed options reach later commands."""
        runner = CommandRunner()
        assert runner.compiled_options() == []

        runner.set_option("p")
        assert runner.compiled_options() == ["-p"]

    def test_set_tool_path(self, mock_git_commands, completed_process):
        """Test that the tool path is used for later commands."""
        mock_git_commands.return_value = completed_process("")
        runner = CommandRunner()
        runner.set_tool_path("/opt/git/bin/git")

        runner.execute(["status"])

        assert runner.tool_path == "/opt/git/bin/git"
        assert mock_git_commands.call_args[0][0][0] == "/opt/git/bin/git"
