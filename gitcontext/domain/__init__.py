"""
Domain layer for gitcontext.

Contains pure domain objects with no I/O or side effects:
- HeadInfo: Resolved HEAD (branch or detached commit)
- CommitInfo: Author, date, message and parents of the HEAD commit
- TagInfo: A tag pointing at the HEAD commit

These objects are immutable and provide to_dict() for JSON output.
"""

from .head import HeadInfo
from .commit import CommitInfo
from .tag import TagInfo

__all__ = [
    'HeadInfo',
    'CommitInfo',
    'TagInfo',
]
