"""
HeadInfo domain object for gitcontext.

HeadInfo is the resolved content of .git/HEAD: either a branch and the
commit its ref points at, or a detached commit hash.
"""

from dataclasses import dataclass
from typing import Optional, Dict, Any


@dataclass(frozen=True)
class HeadInfo:
    """
    Resolved HEAD reference.

    Attributes:
        ref: Trimmed raw content of the HEAD file (e.g., "ref: refs/heads/main")
        branch: Branch name, or None when HEAD is detached
        commit_hash: 40 character hash of the checked out commit
        is_detached: True when HEAD holds a commit hash instead of a branch ref
    """

    ref: str
    branch: Optional[str]
    commit_hash: str
    is_detached: bool

    def __post_init__(self):
        if self.is_detached == (self.branch is not None):
            raise ValueError("branch must be set if and only if HEAD is attached")

    @classmethod
    def attached(cls, ref: str, branch: str, commit_hash: str) -> 'HeadInfo':
        return cls(ref=ref, branch=branch, commit_hash=commit_hash, is_detached=False)

    @classmethod
    def detached(cls, commit_hash: str) -> 'HeadInfo':
        return cls(ref=commit_hash, branch=None, commit_hash=commit_hash, is_detached=True)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            'ref': self.ref,
            'branch': self.branch,
            'commit_hash': self.commit_hash,
            'is_detached': self.is_detached,
        }

    def __str__(self) -> str:
        if self.is_detached:
            return f"(detached) {self.commit_hash[:8]}"
        return f"{self.branch} {self.commit_hash[:8]}"
