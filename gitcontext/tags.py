"""
Tag resolution.

Only tags pointing at the HEAD commit are published. A tag ref file holds
either the commit hash itself (lightweight tag) or the hash of an annotated
tag object whose "object" field names the commit.

Tags unrelated to HEAD are the normal case, so unresolvable or mismatched
tag refs are dropped without error.

Only direct children of refs/tags are considered; tags in nested namespaces
(refs/tags/release/1.0) are not listed.
"""

import asyncio
import logging
import os
from pathlib import Path
from typing import List, Optional

from .domain import HeadInfo, TagInfo
from .errors import GitContextError, MalformedObjectError, NotFoundError
from .hashes import is_valid_hash
from .infra.filesystem import PathLike, read_text
from .infra.object_reader import LooseObjectReader
from .refs import OBJECTS_DIRECTORY_NAME, TAGS_DIRECTORY

logger = logging.getLogger(__name__)


async def read_tag(git_dir: PathLike, tag_name: str, commit_match: Optional[str] = None) -> Optional[TagInfo]:
    """
    Resolve a single tag ref.

    Args:
        git_dir: The .git directory
        tag_name: Name of the file under refs/tags
        commit_match: Commit the tag must point at (None accepts any commit)

    Returns:
        TagInfo, or None if the tag does not point at commit_match or does
        not tag a commit

    Raises:
        NotFoundError: If the tag ref file or its object is missing
        MalformedObjectError: If the ref or tag object is malformed
    """
    git_dir = Path(git_dir)
    tag_path = git_dir / TAGS_DIRECTORY / tag_name
    if not tag_path.is_file():
        raise NotFoundError(f"Tag ref not found: {tag_name}")

    tag_content = (await read_text(tag_path)).strip()

    if commit_match is not None and tag_content == commit_match:
        return TagInfo(commit=commit_match, tag=tag_name)

    if not is_valid_hash(tag_content):
        raise MalformedObjectError(f"Invalid hash in tag {tag_name}: {tag_content!r}")

    commit: Optional[str] = None
    objects_dir = git_dir / OBJECTS_DIRECTORY_NAME

    async with LooseObjectReader(objects_dir, tag_content) as obj:
        if await obj.read_header() != "tag":
            return None

        while (field := await obj.read_field()) is not None:
            key, value = field
            if key == "object":
                if not is_valid_hash(value):
                    raise MalformedObjectError(f"Invalid object hash in tag {tag_name}: {value!r}")
                if commit_match is not None and value != commit_match:
                    return None
                commit = value
            elif key == "type":
                if value != "commit":
                    return None

        message = await obj.read_body()

    if commit is None:
        raise MalformedObjectError(f"Tag {tag_name} has no object field")

    return TagInfo(commit=commit, tag=tag_name, message=message)


def list_tag_names(git_dir: PathLike) -> List[str]:
    """Names of the regular files directly under refs/tags, sorted."""
    tags_dir = Path(git_dir) / TAGS_DIRECTORY
    if not tags_dir.is_dir():
        return []
    return sorted(entry.name for entry in os.scandir(tags_dir) if entry.is_file())


async def read_tags(git_dir: PathLike, head: HeadInfo) -> List[TagInfo]:
    """
    List the tags pointing at the HEAD commit.

    Args:
        git_dir: The .git directory
        head: Resolved HEAD

    Returns:
        TagInfo for every matching tag, ordered by tag name
    """
    tag_names = await asyncio.to_thread(list_tag_names, git_dir)

    tags = []
    for tag_name in tag_names:
        try:
            tag = await read_tag(git_dir, tag_name, head.commit_hash)
        except (GitContextError, OSError) as e:
            logger.debug(f"Skipping tag {tag_name}: {e}")
            continue
        if tag is not None:
            tags.append(tag)

    logger.debug(f"Found {len(tags)} tag(s) on {head.commit_hash}")
    return tags
