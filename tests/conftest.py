"""
Shared fixtures for gitcontext tests.

GitRepoBuilder writes a minimal .git directory by hand: real zlib
compressed, SHA-1 addressed loose objects plus HEAD and ref files. No git
executable is needed to run the suite.
"""

import hashlib
import zlib
from pathlib import Path
from typing import Iterable, Optional

import pytest

EMPTY_TREE = "4b825dc642cb6eb9a060e54bf8d69288fbee4904"
DEFAULT_AUTHOR = "A U Thor <a@b.c> 1700000000 +0200"


class GitRepoBuilder:
    """Builds a repository under root, one file at a time."""

    def __init__(self, root: Path, branch: str = "main"):
        self.root = Path(root)
        self.git_dir = self.root / ".git"
        self.objects_dir = self.git_dir / "objects"
        self.objects_dir.mkdir(parents=True)
        (self.git_dir / "refs" / "heads").mkdir(parents=True)
        (self.git_dir / "refs" / "tags").mkdir(parents=True)
        self.point_head_at_branch(branch)

    def write_raw_object(self, data: bytes) -> str:
        """Store already framed object bytes, returning their hash."""
        object_hash = hashlib.sha1(data).hexdigest()
        path = self.objects_dir / object_hash[:2] / object_hash[2:]
        path.parent.mkdir(exist_ok=True)
        path.write_bytes(zlib.compress(data))
        return object_hash

    def write_object(self, object_type: str, body: bytes) -> str:
        return self.write_raw_object(f"{object_type} {len(body)}".encode() + b"\0" + body)

    def commit(
        self,
        message: str = "Initial commit\n",
        parents: Iterable[str] = (),
        author: Optional[str] = DEFAULT_AUTHOR,
        extra_lines: Iterable[str] = (),
        branch: Optional[str] = "main",
    ) -> str:
        """Write a commit object and, if branch is set, point the branch at it."""
        lines = [f"tree {EMPTY_TREE}"]
        lines += [f"parent {parent}" for parent in parents]
        if author is not None:
            lines.append(f"author {author}")
        lines.append(f"committer {author or DEFAULT_AUTHOR}")
        lines += list(extra_lines)
        body = "\n".join(lines) + "\n\n" + message

        commit_hash = self.write_object("commit", body.encode())
        if branch is not None:
            self.set_branch(branch, commit_hash)
        return commit_hash

    def annotated_tag(
        self,
        name: str,
        target: str,
        message: str = "Release\n",
        target_type: str = "commit",
        ref_name: Optional[str] = None,
    ) -> str:
        """Write a tag object and a ref pointing at it."""
        body = (
            f"object {target}\n"
            f"type {target_type}\n"
            f"tag {name}\n"
            f"tagger {DEFAULT_AUTHOR}\n"
            f"\n"
            f"{message}"
        )
        tag_hash = self.write_object("tag", body.encode())
        self.write_ref(f"refs/tags/{ref_name or name}", tag_hash)
        return tag_hash

    def lightweight_tag(self, name: str, target: str) -> None:
        self.write_ref(f"refs/tags/{name}", target)

    def set_branch(self, branch: str, commit_hash: str) -> None:
        self.write_ref(f"refs/heads/{branch}", commit_hash)

    def write_ref(self, ref_path: str, content: str) -> None:
        path = self.git_dir / ref_path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content + "\n")

    def point_head_at_branch(self, branch: str) -> None:
        (self.git_dir / "HEAD").write_text(f"ref: refs/heads/{branch}\n")

    def detach_head(self, commit_hash: str) -> None:
        (self.git_dir / "HEAD").write_text(commit_hash + "\n")


@pytest.fixture
def repo(tmp_path):
    """An empty repository at tmp_path/project with HEAD on main."""
    return GitRepoBuilder(tmp_path / "project")
