"""
Repository reader for gitcontext.

GitReader reads HEAD, the HEAD commit and the tags on it straight from the
.git directory, without running git. Each of the three is computed at most
once per reader, no matter how many accessors ask for it or how many callers
ask concurrently.

Error handling is chosen once, at construction:
- lenient (default): failures are logged and accessors return defaults
  (None, False or an empty list)
- strict (throw_on_error=True): the failure is raised to every caller of an
  accessor backed by the failed value

Example:
    reader = GitReader()
    commit_hash = await reader.get_commit_hash()
    tags = await reader.get_tags()
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Optional, TypeVar

from .commit import read_commit
from .domain import CommitInfo, HeadInfo, TagInfo
from .errors import NotFoundError
from .infra.filesystem import FileSystem, LOCAL_FS, PathLike
from .lazy import AsyncLazy
from .refs import find_git_directory, resolve_head
from .tags import read_tags

logger = logging.getLogger(__name__)

T = TypeVar('T')


class GitReader:
    """
    Lazily evaluated view of a repository's current commit.

    Args:
        initial_directory: Directory to start searching for .git from
            (default: current working directory)
        throw_on_error: Raise failures instead of returning defaults
        fs: Existence checks used for .git discovery
    """

    def __init__(
        self,
        initial_directory: Optional[PathLike] = None,
        throw_on_error: bool = False,
        fs: FileSystem = LOCAL_FS,
    ):
        self.throw_on_error = throw_on_error
        self.git_directory: Optional[Path] = find_git_directory(initial_directory, fs)

        self._head: AsyncLazy[HeadInfo] = AsyncLazy(self._read_head, name="HEAD")
        self._commit: AsyncLazy[CommitInfo] = AsyncLazy(self._read_commit, name="commit")
        self._tags: AsyncLazy[List[TagInfo]] = AsyncLazy(self._read_tags, name="tags")
        self._reported: set = set()

    @property
    def computations(self) -> Dict[str, int]:
        """How many times each cached value has been computed (each is 0 or 1)."""
        return {
            'head': self._head.computations,
            'commit': self._commit.computations,
            'tags': self._tags.computations,
        }

    # -------------------------------------------------------------------------
    # Computations
    # -------------------------------------------------------------------------

    async def _read_head(self) -> HeadInfo:
        return await resolve_head(self.git_directory)

    async def _require_head(self) -> HeadInfo:
        outcome = await self._head.get()
        if not outcome.ok:
            raise NotFoundError("HEAD info not found") from outcome.error
        return outcome.value

    async def _read_commit(self) -> CommitInfo:
        head = await self._require_head()
        return await read_commit(self.git_directory, head)

    async def _read_tags(self) -> List[TagInfo]:
        head = await self._require_head()
        return await read_tags(self.git_directory, head)

    async def _settle(self, lazy: AsyncLazy[T]) -> Optional[T]:
        """Apply the strict/lenient policy to a cached value's outcome."""
        outcome = await lazy.get()
        if outcome.ok:
            return outcome.value

        if self.throw_on_error:
            raise outcome.error

        if lazy.name not in self._reported:
            self._reported.add(lazy.name)
            logger.warning(f"Could not read {lazy.name}: {outcome.error}")
        return None

    # -------------------------------------------------------------------------
    # Domain objects
    # -------------------------------------------------------------------------

    async def get_head_info(self) -> Optional[HeadInfo]:
        return await self._settle(self._head)

    async def get_commit_info(self) -> Optional[CommitInfo]:
        return await self._settle(self._commit)

    async def get_tag_infos(self) -> List[TagInfo]:
        return list(await self._settle(self._tags) or [])

    # -------------------------------------------------------------------------
    # Published fields
    # -------------------------------------------------------------------------

    async def get_commit_hash(self) -> Optional[str]:
        head = await self.get_head_info()
        return head.commit_hash if head else None

    async def get_branch(self) -> Optional[str]:
        head = await self.get_head_info()
        return head.branch if head else None

    async def get_is_detached(self) -> bool:
        head = await self.get_head_info()
        return head.is_detached if head else False

    async def get_commit_author(self) -> Optional[str]:
        commit = await self.get_commit_info()
        return commit.author if commit else None

    async def get_commit_date(self) -> Optional[datetime]:
        commit = await self.get_commit_info()
        return commit.date if commit else None

    async def get_commit_message(self) -> Optional[str]:
        commit = await self.get_commit_info()
        return commit.message if commit else None

    async def get_commit_parents(self) -> List[str]:
        commit = await self.get_commit_info()
        return list(commit.parents) if commit else []

    async def get_tags(self) -> List[str]:
        return [tag.tag for tag in await self.get_tag_infos()]

    def __repr__(self) -> str:
        mode = "strict" if self.throw_on_error else "lenient"
        return f"GitReader({str(self.git_directory)!r}, {mode})"
