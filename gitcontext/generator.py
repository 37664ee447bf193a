"""
Build-time constants generator.

Collects the eight published fields from a GitReader into a GitContext
snapshot and renders it as an importable Python module:

    # Generated by gitcontext. Do not edit.
    import datetime

    #: The commit author
    AUTHOR = 'A U Thor <a@b.c>'
    #: The branch name
    BRANCH = 'main'
    ...
    DATE = datetime.datetime.fromtimestamp(1700000000, tz=datetime.timezone(datetime.timedelta(seconds=7200)))
"""

import asyncio
import logging
import os
import tempfile
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

from .infra.filesystem import PathLike
from .reader import GitReader

logger = logging.getLogger(__name__)

HEADER = "# Generated by gitcontext. Do not edit.\n"

# Constant name, field name, description (sorted by constant name)
PROPERTIES: Tuple[Tuple[str, str, str], ...] = (
    ("AUTHOR", "author", "The commit author"),
    ("BRANCH", "branch", "The branch name"),
    ("DATE", "date", "The commit date"),
    ("HASH", "hash", "The commit hash"),
    ("IS_DETACHED", "is_detached", "Whether the repository is in detached HEAD state"),
    ("MESSAGE", "message", "The commit message"),
    ("PARENTS", "parents", "The commit parents"),
    ("TAGS", "tags", "The tags"),
)


@dataclass(frozen=True)
class GitContext:
    """Snapshot of every published field, with accessor defaults for absent values."""
    hash: Optional[str] = None
    branch: Optional[str] = None
    is_detached: bool = False
    author: Optional[str] = None
    date: Optional[datetime] = None
    message: Optional[str] = None
    parents: Tuple[str, ...] = ()
    tags: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            'hash': self.hash,
            'branch': self.branch,
            'is_detached': self.is_detached,
            'author': self.author,
            'date': self.date.isoformat() if self.date else None,
            'message': self.message,
            'parents': list(self.parents),
            'tags': list(self.tags),
        }


async def collect(reader: GitReader) -> GitContext:
    """Await all eight accessors of reader and snapshot the results."""
    return GitContext(
        hash=await reader.get_commit_hash(),
        branch=await reader.get_branch(),
        is_detached=await reader.get_is_detached(),
        author=await reader.get_commit_author(),
        date=await reader.get_commit_date(),
        message=await reader.get_commit_message(),
        parents=tuple(await reader.get_commit_parents()),
        tags=tuple(await reader.get_tags()),
    )


def collect_sync(initial_directory: Optional[PathLike] = None, throw_on_error: bool = False) -> GitContext:
    """Build a reader for initial_directory and collect it from synchronous code."""
    reader = GitReader(initial_directory, throw_on_error=throw_on_error)
    return asyncio.run(collect(reader))


def format_value(value: Any) -> str:
    """Render a field value as a Python literal expression."""
    if value is None or isinstance(value, (bool, str)):
        return repr(value)
    if isinstance(value, datetime):
        offset = int(value.utcoffset().total_seconds()) if value.utcoffset() is not None else 0
        return (
            f"datetime.datetime.fromtimestamp({int(value.timestamp())}, "
            f"tz=datetime.timezone(datetime.timedelta(seconds={offset})))"
        )
    if isinstance(value, (list, tuple)):
        return repr(tuple(value))
    raise TypeError(f"Cannot render {type(value).__name__} as a constant")


def render_module(context: GitContext) -> str:
    """Render context as Python source defining one constant per field."""
    lines = [HEADER, "import datetime\n", "\n"]
    for constant, field_name, description in PROPERTIES:
        lines.append(f"#: {description}\n")
        lines.append(f"{constant} = {format_value(getattr(context, field_name))}\n")
    return "".join(lines)


def write_module(path: PathLike, context: GitContext) -> Path:
    """
    Write the rendered module to path atomically.

    Args:
        path: Destination .py file (parent directories are created)
        context: Snapshot to render

    Returns:
        The resolved destination path
    """
    path = Path(path).expanduser().resolve()
    path.parent.mkdir(parents=True, exist_ok=True)
    source = render_module(context)

    fd, temp_path = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, 'w', encoding='utf-8') as f:
            f.write(source)
        os.replace(temp_path, path)
    except Exception:
        try:
            os.unlink(temp_path)
        except OSError:
            pass
        raise

    logger.info(f"Wrote git context to {path}")
    return path
