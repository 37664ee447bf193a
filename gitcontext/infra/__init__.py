"""
Infrastructure layer for gitcontext.

Contains the pieces that touch the disk:
- FileSystem / LocalFileSystem: existence checks used by directory discovery
- read_text: non-blocking text file read
- LooseObjectReader: streaming decoder for zlib-compressed loose objects

These provide clean interfaces that can be replaced in tests.
"""

from .filesystem import FileSystem, LocalFileSystem, LOCAL_FS, read_text
from .object_reader import LooseObjectReader, object_path

__all__ = [
    'FileSystem',
    'LocalFileSystem',
    'LOCAL_FS',
    'read_text',
    'LooseObjectReader',
    'object_path',
]
