"""Global git options and the option-to-argument compiler.

Contains:
- GitOptions: Global options applied to every git invocation of a runner
- compile_options: Compile options into a list of command-line arguments
- format_command: Render an argument list as a single printable command string
"""

import shlex
from dataclasses import dataclass, field
from typing import Iterator, Optional, Sequence

WORK_TREE = "work-tree"
GIT_DIR = "git-dir"


@dataclass
class GitOptions:
    """Global options applied to every git invocation.

    The two options git needs to target a repository outside the current
    working directory get their own fields. Anything else goes into
    ``extra``, which keeps insertion order.

    An empty value marks a boolean flag rather than a key-value option.
    """

    work_tree: Optional[str] = None
    git_dir: Optional[str] = None
    extra: dict[str, str] = field(default_factory=dict)

    def set(self, name: str, value: str = "") -> None:
        """Set an option, overwriting any earlier value for the same name."""
        if name == WORK_TREE:
            self.work_tree = value
        elif name == GIT_DIR:
            self.git_dir = value
        else:
            self.extra[name] = value

    def get(self, name: str) -> Optional[str]:
        """Get an option value, or None if it was never set."""
        if name == WORK_TREE:
            return self.work_tree
        if name == GIT_DIR:
            return self.git_dir
        return self.extra.get(name)

    def items(self) -> Iterator[tuple[str, str]]:
        """Yield (name, value) pairs in the order they are compiled."""
        if self.work_tree is not None:
            yield WORK_TREE, self.work_tree
        if self.git_dir is not None:
            yield GIT_DIR, self.git_dir
        yield from self.extra.items()


def compile_options(options: GitOptions) -> list[str]:
    """Compile global options into git command-line arguments.

    Flags become ``-n`` for single-character names and ``--name`` otherwise.
    Valued options become a single ``--name=value`` argument, so no quoting
    is required.

    Args:
        options: The options to compile.

    Returns:
        List of arguments to place between the tool path and the subcommand.
    """
    args = []
    for name, value in options.items():
        if not value:
            args.append(f"-{name}" if len(name) == 1 else f"--{name}")
        else:
            args.append(f"--{name}={value}")
    return args


def format_command(args: Sequence[str]) -> str:
    """Render an argument list as a shell-quoted command string.

    The result is used both as the command cache key and in log and error
    messages. It is never passed to a shell.
    """
    return shlex.join(args)
