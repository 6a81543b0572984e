"""Parsers for the git output shapes reposcope consumes.

Contains:
- DescribeInfo: Parsed ``git describe --tags --long`` output
- CommitInfo: Parsed ``git log -1`` output for the last commit
- parse_describe: Parse describe output into a DescribeInfo
- parse_commit_info: Parse formatted log output into a CommitInfo
"""

import re
from typing import Optional

from pydantic import BaseModel, ConfigDict

from reposcope.git.exceptions import UnparsableOutputError

DESCRIBE_COMMAND = ["describe", "--tags", "--long"]

# Greedy tag so that tags containing dashes keep everything up to the
# final -<count>-<abbrev> suffix.
DESCRIBE_PATTERN = re.compile(r"^(?P<tag>.+)-(?P<count>\d+)-(?P<abbrev>[0-9A-Za-z]+)$")

FIELD_DELIMITER = "---"

# (field name, git pretty-format placeholder) in output order
COMMIT_FIELD_FORMATS = [
    ("author", "%an"),
    ("author_email", "%ae"),
    ("date", "%ad"),
    ("message", "%s"),
    ("commit_id_long", "%H"),
    ("commit_id_short", "%h"),
    ("committer", "%cn"),
    ("committer_email", "%ce"),
]

COMMIT_FIELDS = [name for name, _ in COMMIT_FIELD_FORMATS]

MESSAGE_INDEX = COMMIT_FIELDS.index("message")

LOG_FORMAT = FIELD_DELIMITER.join(placeholder for _, placeholder in COMMIT_FIELD_FORMATS)

COMMIT_INFO_COMMAND = ["log", "-1", f"--pretty=format:{LOG_FORMAT}"]


class DescribeInfo(BaseModel):
    """Nearest tag information from ``git describe --tags --long``.

    Attributes:
        full: The raw describe string (e.g., "v1.2.0-5-gabc1234").
        last_tag: The nearest reachable tag.
        commits_since_tag: Number of commits on top of that tag.
        commit_id: Abbreviated id of the described commit, without the "g" prefix.
    """

    model_config = ConfigDict(frozen=True)

    full: str
    last_tag: str
    commits_since_tag: int
    commit_id: str


class CommitInfo(BaseModel):
    """Details of the most recent commit."""

    model_config = ConfigDict(frozen=True)

    author: str
    author_email: str
    date: str
    message: str
    commit_id_long: str
    commit_id_short: str
    committer: str
    committer_email: str


def parse_describe(output: str) -> Optional[DescribeInfo]:
    """Parse ``git describe --tags --long`` output.

    Args:
        output: Raw command output.

    Returns:
        The parsed info, or None if the output is empty (no tags yet).

    Raises:
        UnparsableOutputError: If the output is not a long describe string.
    """
    output = output.strip()
    if not output:
        return None

    match = DESCRIBE_PATTERN.match(output)
    if match is None:
        raise UnparsableOutputError(
            " ".join(DESCRIBE_COMMAND), output, "expected <tag>-<count>-<abbrev>"
        )

    abbrev = match.group("abbrev")
    if abbrev.startswith("g"):
        abbrev = abbrev[1:]

    return DescribeInfo(
        full=output,
        last_tag=match.group("tag"),
        commits_since_tag=int(match.group("count")),
        commit_id=abbrev,
    )


def parse_commit_info(output: str) -> Optional[CommitInfo]:
    """Parse ``git log -1`` output produced with LOG_FORMAT.

    Args:
        output: Raw command output.

    Returns:
        The parsed commit, or None if the output is empty (no commits yet).

    Raises:
        UnparsableOutputError: If the output has fewer fields than expected.
    """
    output = output.strip()
    if not output:
        return None

    # The message is the only free-text field, so split the fixed fields
    # off both ends and keep any delimiter inside the message.
    values = output.split(FIELD_DELIMITER, MESSAGE_INDEX)
    if len(values) == MESSAGE_INDEX + 1:
        rest = values.pop()
        values.extend(rest.rsplit(FIELD_DELIMITER, len(COMMIT_FIELDS) - MESSAGE_INDEX - 1))
    if len(values) != len(COMMIT_FIELDS):
        raise UnparsableOutputError(
            "log -1",
            output,
            f"expected {len(COMMIT_FIELDS)} fields separated by "
            f"{FIELD_DELIMITER!r}, got {len(output.split(FIELD_DELIMITER))}",
        )

    return CommitInfo(**dict(zip(COMMIT_FIELDS, values)))
