"""
Commit object parsing.

Only the fields gitcontext publishes are interpreted: author (identity and
date) and parent. Other header fields such as tree, committer, encoding or
gpgsig are read and ignored.
"""

import logging
import re
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import List, Optional, Tuple

from .domain import CommitInfo, HeadInfo
from .errors import MalformedObjectError
from .hashes import is_valid_hash
from .infra.filesystem import PathLike
from .infra.object_reader import LooseObjectReader
from .refs import OBJECTS_DIRECTORY_NAME

logger = logging.getLogger(__name__)

AUTHOR_PATTERN = re.compile(
    r'^(?P<name>.*) <(?P<email>.*)> (?P<seconds>\d+) (?P<offset>[+-]?\d{4})$'
)


def parse_offset(offset: str) -> timezone:
    """
    Convert a git "+HHMM" / "-HHMM" offset into a fixed timezone.

    Raises:
        MalformedObjectError: If minutes are out of range
    """
    sign = -1 if offset.startswith('-') else 1
    digits = offset.lstrip('+-')
    hours, minutes = int(digits[:2]), int(digits[2:])
    if minutes >= 60 or hours >= 24:
        raise MalformedObjectError(f"Invalid timezone offset: {offset!r}")
    return timezone(sign * timedelta(hours=hours, minutes=minutes))


def parse_author(value: str) -> Tuple[str, datetime]:
    """
    Parse the value of an author line.

    Example:
        parse_author("A U Thor <a@b.c> 1700000000 +0200")
        -> ("A U Thor <a@b.c>", datetime(2023, 11, 15, 0, 13, 20, tzinfo=UTC+02:00))

    The date is the recorded instant reported at the author's own offset.

    Raises:
        MalformedObjectError: If the value does not match the author format
    """
    match = AUTHOR_PATTERN.match(value)
    if not match:
        raise MalformedObjectError(f"Invalid author format: {value!r}")

    author = f"{match.group('name')} <{match.group('email')}>"
    tz = parse_offset(match.group('offset'))
    try:
        date = datetime.fromtimestamp(int(match.group('seconds')), tz=tz)
    except (OverflowError, OSError, ValueError) as e:
        raise MalformedObjectError(f"Invalid author timestamp: {value!r}") from e

    return author, date


async def read_commit(git_dir: PathLike, head: HeadInfo) -> CommitInfo:
    """
    Decode the commit HEAD points at.

    Args:
        git_dir: The .git directory
        head: Resolved HEAD

    Returns:
        CommitInfo with author, date, message and parents

    Raises:
        ObjectNotFoundError: If the commit object is not a loose object
        MalformedObjectError: If the object is not a commit or lacks an author
    """
    objects_dir = Path(git_dir) / OBJECTS_DIRECTORY_NAME
    author: Optional[str] = None
    date: Optional[datetime] = None
    parents: List[str] = []

    async with LooseObjectReader(objects_dir, head.commit_hash) as obj:
        object_type = await obj.read_header()
        if object_type != "commit":
            raise MalformedObjectError(
                f"Invalid commit object type for {head.commit_hash}: {object_type!r}"
            )

        while (field := await obj.read_field()) is not None:
            key, value = field
            if key == "author":
                author, date = parse_author(value)
            elif key == "parent":
                if not is_valid_hash(value):
                    raise MalformedObjectError(f"Invalid parent hash: {value!r}")
                parents.append(value)

        message = await obj.read_body()

    if author is None or date is None:
        raise MalformedObjectError(f"Commit {head.commit_hash} has no author")

    logger.debug(f"Read commit {head.commit_hash} by {author} with {len(parents)} parent(s)")
    return CommitInfo(
        hash=head.commit_hash,
        author=author,
        date=date,
        message=message,
        parents=tuple(parents),
    )
