"""
TagInfo domain object for gitcontext.

A tag is either lightweight (the ref file holds the commit hash) or
annotated (the ref file holds the hash of a tag object with a message).
"""

from dataclasses import dataclass
from typing import Optional, Dict, Any


@dataclass(frozen=True)
class TagInfo:
    """
    A tag pointing at a commit.

    Attributes:
        commit: Hash of the tagged commit
        tag: Tag name, taken from the ref file name
        message: Tag message for annotated tags, None for lightweight tags
    """

    commit: str
    tag: str
    message: Optional[str] = None

    @property
    def is_annotated(self) -> bool:
        return self.message is not None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            'commit': self.commit,
            'tag': self.tag,
            'message': self.message,
        }

    def __str__(self) -> str:
        return self.tag
