"""Git command runner with per-instance result caching.

Contains:
- CommandResult: Captured outcome of a single git invocation
- CommandRunner: Builds, executes and memoizes git invocations
"""

import logging
import shlex
import subprocess
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Optional, Sequence, Union

from reposcope.git.exceptions import GitCommandError, ToolNotFoundError
from reposcope.git.options import GitOptions, compile_options, format_command

logger = logging.getLogger(__name__)

DEFAULT_TOOL_PATH = "git"

# Exit status reported when the executable itself could not be started
TOOL_NOT_FOUND_RETURNCODE = 127

Fragment = Union[str, Sequence[str]]


@dataclass(frozen=True)
class CommandResult:
    """Captured outcome of a git invocation."""

    command: str
    args: tuple[str, ...]
    output: str
    returncode: int
    stderr: str = ""
    tool_missing: bool = False

    @property
    def ok(self) -> bool:
        return self.returncode == 0


class CommandRunner:
    """Run git subcommands against a fixed set of global options.

    Results are cached per compiled command string for the lifetime of the
    instance. The cache is cleared only by ``reset()`` or by passing
    ``force_reset=True`` to ``execute``/``run``.

    Instances are not thread-safe; use one runner per thread.
    """

    def __init__(
        self,
        tool_path: str = DEFAULT_TOOL_PATH,
        options: Optional[GitOptions] = None,
    ):
        self._tool_path = tool_path or DEFAULT_TOOL_PATH
        self._options = options if options is not None else GitOptions()
        self._cache: dict[str, CommandResult] = {}
        self._compiled: Optional[list[str]] = None

    @property
    def tool_path(self) -> str:
        return self._tool_path

    @property
    def options(self) -> GitOptions:
        return self._options

    @property
    def cache(self) -> Mapping[str, CommandResult]:
        """Read-only view of the command cache."""
        return MappingProxyType(self._cache)

    def set_tool_path(self, path: str) -> None:
        """Set the git executable used for subsequent commands."""
        self._tool_path = path
        self._compiled = None

    def set_option(self, name: str, value: str = "") -> None:
        """Set a global option. An empty value marks a boolean flag."""
        self._options.set(name, value)
        self._compiled = None

    def get_option(self, name: str) -> Optional[str]:
        """Get a global option value, or None if it is not set."""
        return self._options.get(name)

    def compiled_options(self) -> list[str]:
        """Get the compiled global options, memoized until they change."""
        if self._compiled is None:
            self._compiled = compile_options(self._options)
        return list(self._compiled)

    def reset(self) -> None:
        """Clear the command cache and the compiled options."""
        self._cache.clear()
        self._compiled = None

    def build_args(self, fragment: Fragment) -> list[str]:
        """Build the full argument list for a subcommand fragment.

        Args:
            fragment: Subcommand as an argument list, or as a string that
                is split with shell-like syntax.

        Returns:
            The tool path, then the compiled options, then the fragment.
        """
        if isinstance(fragment, str):
            fragment = shlex.split(fragment)
        return [self._tool_path, *self.compiled_options(), *fragment]

    def run(
        self,
        fragment: Fragment,
        force_reset: bool = False,
        check: bool = False,
    ) -> CommandResult:
        """Run a git subcommand and return the captured result.

        Args:
            fragment: The subcommand and its arguments.
            force_reset: Reset all cached state before running.
            check: Raise instead of returning a failed result.

        Returns:
            The cached or freshly captured result.

        Raises:
            ToolNotFoundError: If check is set and git cannot be started.
            GitCommandError: If check is set and git exits non-zero.
        """
        if force_reset:
            self.reset()

        args = self.build_args(fragment)
        command = format_command(args)

        result = self._cache.get(command)
        if result is None:
            result = self._invoke(command, args)
            self._cache[command] = result
        else:
            logger.debug("Cache hit: %s", command)

        if check and not result.ok:
            if result.tool_missing:
                raise ToolNotFoundError(self._tool_path)
            raise GitCommandError(command, result.returncode, result.stderr)
        return result

    def execute(self, fragment: Fragment, force_reset: bool = False) -> str:
        """Run a git subcommand and return its stripped standard output.

        Failures are not raised: a failed or missing git yields whatever
        output was captured, usually the empty string.
        """
        return self.run(fragment, force_reset=force_reset).output

    def _invoke(self, command: str, args: list[str]) -> CommandResult:
        logger.debug("Running: %s", command)
        try:
            proc = subprocess.run(
                args,
                capture_output=True,
                encoding="utf-8",
                errors="replace",
                check=False,
            )
        except OSError as e:
            logger.warning("Git is not installed or not in PATH: %s (%s)", self._tool_path, e)
            return CommandResult(
                command=command,
                args=tuple(args),
                output="",
                returncode=TOOL_NOT_FOUND_RETURNCODE,
                tool_missing=True,
            )

        stderr = (proc.stderr or "").strip()
        if proc.returncode != 0:
            logger.debug("Exit %d from %s: %s", proc.returncode, command, stderr)
        return CommandResult(
            command=command,
            args=tuple(args),
            output=(proc.stdout or "").strip(),
            returncode=proc.returncode,
            stderr=stderr,
        )
