"""
Filesystem access for gitcontext.

Directory discovery only needs to ask "is this a directory?" and "is this a
file?", so it takes a FileSystem capability instead of calling os.path
directly. Tests can pass an in-memory implementation.

Reads of small text files (HEAD, ref files) go through read_text, which runs
the blocking read in a worker thread so the event loop can interleave callers.
"""

import asyncio
import os
from pathlib import Path
from typing import Protocol, Union

PathLike = Union[str, os.PathLike]


class FileSystem(Protocol):
    """Existence checks needed to locate a metadata directory."""

    def is_dir(self, path: Path) -> bool:
        ...

    def is_file(self, path: Path) -> bool:
        ...


class LocalFileSystem:
    """FileSystem backed by the real disk."""

    def is_dir(self, path: Path) -> bool:
        return os.path.isdir(path)

    def is_file(self, path: Path) -> bool:
        return os.path.isfile(path)

    def __repr__(self) -> str:
        return "LocalFileSystem()"


LOCAL_FS = LocalFileSystem()


def _read_text(path: PathLike) -> str:
    with open(path, 'r', encoding='utf-8', errors='replace') as f:
        return f.read()


async def read_text(path: PathLike) -> str:
    """Read a text file without blocking the event loop."""
    return await asyncio.to_thread(_read_text, path)
