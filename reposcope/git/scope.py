"""Repository scope: cached access to git repository metadata.

Contains:
- RepoScope: Protocol describing the repository metadata interface
- RecordState: Lifecycle state of a cached parsed record
- GitScope: git-backed implementation of RepoScope
"""

import logging
import os
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, Any, Mapping, Optional, Protocol, Union, runtime_checkable

from reposcope.git.exceptions import InvalidRepositoryError
from reposcope.git.options import GIT_DIR, WORK_TREE
from reposcope.git.parsing import (
    COMMIT_INFO_COMMAND,
    DESCRIBE_COMMAND,
    CommitInfo,
    DescribeInfo,
    parse_commit_info,
    parse_describe,
)
from reposcope.git.runner import DEFAULT_TOOL_PATH, CommandRunner

if TYPE_CHECKING:
    from reposcope.config import ReposcopeConfig

logger = logging.getLogger(__name__)

Context = Union[None, str, os.PathLike, Mapping[str, Any]]


@runtime_checkable
class RepoScope(Protocol):
    """Read-only repository metadata interface.

    GitScope satisfies it structurally; an alternate backend only needs to
    expose the same methods.
    """

    def is_repository(self) -> bool:
        ...

    def current_branch(self, force_reset: bool = False) -> Optional[str]:
        ...

    def last_tag(self, force_reset: bool = False) -> Optional[str]:
        ...

    def commits_since_tag(self, force_reset: bool = False) -> Optional[int]:
        ...

    def commit_info(self, field: Optional[str] = None, force_reset: bool = False) -> Any:
        ...


class RecordState(Enum):
    """Lifecycle of a cached parsed record."""

    UNPOPULATED = "unpopulated"
    EMPTY = "empty"
    POPULATED = "populated"


def _resolve_context_path(context: Context) -> Optional[str]:
    """Extract the repository path from a context value."""
    if isinstance(context, Mapping):
        context = context.get("path")
    if not context:
        return None
    return os.fspath(context)


class GitScope:
    """Cached access to the metadata of a single git repository.

    Args:
        context: Repository root as a path, or a mapping with a "path" key.
            When empty, git runs against the current working directory.
        tool_path: The git executable to run.
        runner: Command runner to use instead of a freshly created one.

    Raises:
        InvalidRepositoryError: If a path is given and is not a directory.
    """

    def __init__(
        self,
        context: Context = None,
        tool_path: str = DEFAULT_TOOL_PATH,
        runner: Optional[CommandRunner] = None,
    ):
        self.runner = runner if runner is not None else CommandRunner(tool_path)
        self.path = _resolve_context_path(context)

        if self.path:
            if not Path(self.path).is_dir():
                raise InvalidRepositoryError(self.path)
            self.runner.set_option(WORK_TREE, self.path)
            self.runner.set_option(GIT_DIR, str(Path(self.path) / ".git"))

        self._describe: Optional[DescribeInfo] = None
        self._describe_state = RecordState.UNPOPULATED
        self._commit: Optional[CommitInfo] = None
        self._commit_state = RecordState.UNPOPULATED

    @classmethod
    def from_config(cls, config: "ReposcopeConfig", context: Context = None) -> "GitScope":
        """Build a scope from loaded user configuration.

        An explicit context takes precedence over the configured path.
        """
        runner = CommandRunner(config.tool_path)
        for name, value in config.options.items():
            runner.set_option(name, value)
        return cls(context or config.path, runner=runner)

    @property
    def describe_state(self) -> RecordState:
        return self._describe_state

    @property
    def commit_state(self) -> RecordState:
        return self._commit_state

    def reset(self) -> None:
        """Drop all cached records and command output."""
        self._describe = None
        self._describe_state = RecordState.UNPOPULATED
        self._commit = None
        self._commit_state = RecordState.UNPOPULATED
        self.runner.reset()

    def is_repository(self) -> bool:
        """Check whether the scope points at a git repository.

        An explicitly configured path with a .git directory is accepted
        without running git. Otherwise ``git rev-parse --git-dir`` decides.
        """
        git_dir = self.runner.get_option(GIT_DIR)
        if git_dir and Path(git_dir).is_dir():
            return True
        return bool(self.runner.execute(["rev-parse", "--git-dir"]))

    def describe(self, field: Optional[str] = None, force_reset: bool = False) -> Any:
        """Get ``git describe --tags --long`` information.

        All describe fields come from a single git call.

        Args:
            field: One of "full", "last_tag", "commits_since_tag" or
                "commit_id". Defaults to the full describe string.
            force_reset: Re-run git instead of using cached results.

        Returns:
            The requested value, or None if the repository has no tags or
            the field is unknown.

        Raises:
            UnparsableOutputError: If git output is not a describe string.
        """
        if force_reset or self._describe_state is RecordState.UNPOPULATED:
            output = self.runner.execute(DESCRIBE_COMMAND, force_reset=force_reset)
            self._describe = parse_describe(output)
            self._describe_state = (
                RecordState.POPULATED if self._describe is not None else RecordState.EMPTY
            )
            if self._describe is None:
                logger.debug("No tags reachable from HEAD")

        if self._describe is None:
            return None
        if field is None:
            return self._describe.full
        if field not in DescribeInfo.model_fields:
            return None
        return getattr(self._describe, field)

    def last_tag(self, force_reset: bool = False) -> Optional[str]:
        """Get the most recent tag."""
        return self.describe("last_tag", force_reset)

    def commits_since_tag(self, force_reset: bool = False) -> Optional[int]:
        """Get the number of commits since the most recent tag."""
        return self.describe("commits_since_tag", force_reset)

    def commit_info(self, field: Optional[str] = None, force_reset: bool = False) -> Any:
        """Get information about the latest commit.

        Args:
            field: One of the CommitInfo field names. When omitted, the
                whole record is returned.
            force_reset: Re-run git instead of using cached results.

        Returns:
            The CommitInfo record, a single field value, or None if there
            are no commits or the field is unknown.

        Raises:
            UnparsableOutputError: If git output does not have all fields.
        """
        if force_reset or self._commit_state is RecordState.UNPOPULATED:
            output = self.runner.execute(COMMIT_INFO_COMMAND, force_reset=force_reset)
            self._commit = parse_commit_info(output)
            self._commit_state = (
                RecordState.POPULATED if self._commit is not None else RecordState.EMPTY
            )

        if self._commit is None:
            return None
        if field is None:
            return self._commit
        if field not in CommitInfo.model_fields:
            return None
        return getattr(self._commit, field)

    def current_branch(self, force_reset: bool = False) -> Optional[str]:
        """Get the current branch name."""
        return self.name_of_ref("HEAD", force_reset)

    def name_of_ref(self, ref: str, force_reset: bool = False) -> Optional[str]:
        """Get the symbolic name git gives to a ref or other treeish.

        Refs starting with "-" would be read by git as options and are
        treated as unresolvable.
        """
        if ref.startswith("-"):
            logger.warning("Refusing ref that looks like an option: %s", ref)
            return None
        name = self.runner.execute(["name-rev", "--name-only", ref], force_reset=force_reset)
        return name or None
