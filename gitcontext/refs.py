"""
Metadata directory discovery and HEAD resolution.
"""

import logging
import os
from pathlib import Path
from typing import Optional

from .domain import HeadInfo
from .errors import MalformedObjectError, NotFoundError, RepositoryNotFoundError
from .hashes import is_valid_hash
from .infra.filesystem import FileSystem, LOCAL_FS, PathLike, read_text

logger = logging.getLogger(__name__)

GIT_DIRECTORY_NAME = ".git"
HEAD_FILE_NAME = "HEAD"
OBJECTS_DIRECTORY_NAME = "objects"
HEADS_PREFIX = "refs/heads/"
TAGS_DIRECTORY = "refs/tags"
REF_PREFIX = "ref: "


def is_git_directory(path: Path, fs: FileSystem = LOCAL_FS) -> bool:
    """Check that path is a directory holding a HEAD file and an objects directory."""
    return (
        fs.is_dir(path)
        and fs.is_file(path / HEAD_FILE_NAME)
        and fs.is_dir(path / OBJECTS_DIRECTORY_NAME)
    )


def find_git_directory(start: Optional[PathLike] = None, fs: FileSystem = LOCAL_FS) -> Optional[Path]:
    """
    Find the .git directory for start or the closest parent that has one.

    Args:
        start: Directory to start from (default: current working directory)
        fs: Existence checks to use

    Returns:
        Path to the .git directory, or None if the filesystem root is reached
    """
    directory = Path(os.path.abspath(start if start is not None else os.getcwd()))

    for candidate in (directory, *directory.parents):
        git_dir = candidate / GIT_DIRECTORY_NAME
        if is_git_directory(git_dir, fs):
            logger.debug(f"Found git directory {git_dir}")
            return git_dir

    logger.debug(f"No git directory above {directory}")
    return None


def branch_from_ref(ref_path: str) -> str:
    """
    Extract the branch name from a refs/heads/... path.

    Raises:
        MalformedObjectError: If the path is outside refs/heads or has empty/.. components
    """
    if not ref_path.startswith(HEADS_PREFIX):
        raise MalformedObjectError(f"Invalid HEAD format: {ref_path!r} is not a branch ref")

    branch = ref_path[len(HEADS_PREFIX):]
    if not branch or any(part in ("", ".", "..") for part in branch.split("/")):
        raise MalformedObjectError(f"Invalid branch name in HEAD: {branch!r}")

    return branch


async def resolve_head(git_dir: Optional[PathLike]) -> HeadInfo:
    """
    Resolve HEAD to a branch and commit, or a detached commit.

    Args:
        git_dir: The .git directory (None if discovery failed)

    Returns:
        HeadInfo for the current checkout

    Raises:
        RepositoryNotFoundError: If git_dir is None
        NotFoundError: If HEAD or the branch ref file is missing
        MalformedObjectError: If HEAD or the ref file has unexpected content
    """
    if git_dir is None:
        raise RepositoryNotFoundError()

    git_dir = Path(git_dir)
    head_path = git_dir / HEAD_FILE_NAME
    if not head_path.is_file():
        raise NotFoundError(f"HEAD file not found in {git_dir}")

    head_content = (await read_text(head_path)).strip()

    if head_content.startswith(REF_PREFIX):
        ref_path = head_content[len(REF_PREFIX):].strip()
        branch = branch_from_ref(ref_path)

        ref_file = git_dir / ref_path
        if not ref_file.is_file():
            raise NotFoundError(f"Branch ref not found: {ref_path}")

        commit_hash = (await read_text(ref_file)).strip()
        if not is_valid_hash(commit_hash):
            raise MalformedObjectError(f"Invalid commit hash in {ref_path}: {commit_hash!r}")

        logger.debug(f"HEAD is branch {branch} at {commit_hash}")
        return HeadInfo.attached(ref=head_content, branch=branch, commit_hash=commit_hash)

    if not is_valid_hash(head_content):
        raise MalformedObjectError(f"Invalid HEAD content: {head_content!r}")

    logger.debug(f"HEAD is detached at {head_content}")
    return HeadInfo.detached(head_content)
