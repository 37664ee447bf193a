"""
CommitInfo domain object for gitcontext.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Tuple, Dict, Any


@dataclass(frozen=True)
class CommitInfo:
    """
    Metadata of the commit HEAD points at.

    Attributes:
        hash: Commit hash
        author: Author as "name <email>"
        date: Authorship time, aware datetime carrying the author's UTC offset
        message: Commit message exactly as stored (may be empty)
        parents: Parent hashes in the order they appear in the object
    """

    hash: str
    author: str
    date: datetime
    message: str
    parents: Tuple[str, ...] = ()

    @property
    def first_parent(self):
        return self.parents[0] if self.parents else None

    @property
    def is_merge(self) -> bool:
        return len(self.parents) > 1

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            'hash': self.hash,
            'author': self.author,
            'date': self.date.isoformat(),
            'message': self.message,
            'parents': list(self.parents),
        }

    def __repr__(self) -> str:
        return f"CommitInfo(hash={self.hash[:8]!r}, author={self.author!r}, date={self.date.isoformat()!r})"
