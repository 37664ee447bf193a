"""
Loose object decoder.

A loose object lives at objects/<first 2 hex chars>/<remaining 38> and is a
zlib stream holding:

    <type> <size>\\0
    <key> <value>\\n        (commit and tag objects, repeated)
    \\n
    <body>

LooseObjectReader inflates the stream incrementally and exposes it as three
sequential reads: read_header(), read_field() until it returns None, then
read_body(). The file handle and the inflater are released when the
``async with`` block exits, whether or not an exception was raised.

Example:
    async with LooseObjectReader(objects_dir, commit_hash) as obj:
        if await obj.read_header() != "commit":
            ...
        while (field := await obj.read_field()) is not None:
            key, value = field
        message = await obj.read_body()
"""

import asyncio
import logging
import zlib
from pathlib import Path
from typing import Optional, Tuple

from ..errors import MalformedObjectError, ObjectNotFoundError
from ..hashes import is_valid_hash
from .filesystem import PathLike

logger = logging.getLogger(__name__)

CHUNK_SIZE = 8192


def object_path(objects_dir: PathLike, object_hash: str) -> Path:
    """Path of a loose object inside the object store."""
    return Path(objects_dir) / object_hash[:2] / object_hash[2:]


class LooseObjectReader:
    """
    Streaming reader for a single loose object.

    Args:
        objects_dir: The repository's .git/objects directory
        object_hash: Hash of the object to read (validated before use)

    Raises:
        MalformedObjectError: If the hash is not a valid object id
        ObjectNotFoundError: On entering the context, if the file is missing
    """

    def __init__(self, objects_dir: PathLike, object_hash: str):
        if not is_valid_hash(object_hash):
            raise MalformedObjectError(f"Invalid object hash: {object_hash!r}")

        self.object_hash = object_hash
        self.path = object_path(objects_dir, object_hash)

        self._file = None
        self._inflater = None
        self._buffer = b""
        self._eof = False
        self._header_read = False
        self._fields_done = False

    async def __aenter__(self) -> 'LooseObjectReader':
        try:
            self._file = await asyncio.to_thread(open, self.path, 'rb')
        except (FileNotFoundError, NotADirectoryError):
            raise ObjectNotFoundError(self.object_hash) from None
        self._inflater = zlib.decompressobj()
        logger.debug(f"Reading object {self.object_hash} from {self.path}")
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        self.close()

    def close(self) -> None:
        """Release the file handle and the inflater. Safe to call twice."""
        file, self._file = self._file, None
        self._inflater = None
        self._buffer = b""
        if file is not None:
            file.close()

    @property
    def closed(self) -> bool:
        return self._file is None

    async def _fill(self) -> None:
        """Inflate the next compressed chunk into the buffer."""
        if self._file is None:
            raise RuntimeError("LooseObjectReader used outside of 'async with'")
        if self._eof:
            return

        chunk = await asyncio.to_thread(self._file.read, CHUNK_SIZE)
        if not chunk:
            # The file ended before the zlib stream did
            raise MalformedObjectError(f"Truncated object {self.object_hash}")

        try:
            data = self._inflater.decompress(chunk)
        except zlib.error as e:
            raise MalformedObjectError(f"Corrupt object {self.object_hash}: {e}") from e

        # Bytes after the end of the zlib stream are not part of the object
        if self._inflater.eof:
            self._eof = True
        self._buffer += data

    async def _read_until(self, separator: bytes) -> Tuple[bytes, bool]:
        """Consume the buffer up to separator. Returns (data, found)."""
        while separator not in self._buffer and not self._eof:
            await self._fill()

        data, sep, rest = self._buffer.partition(separator)
        self._buffer = rest
        return data, bool(sep)

    async def _peek(self) -> bytes:
        """Return the next undecoded byte without consuming it (b"" at end)."""
        while not self._buffer and not self._eof:
            await self._fill()
        return self._buffer[:1]

    async def read_header(self) -> str:
        """
        Read the "<type> <size>" header and return the object type.

        Raises:
            MalformedObjectError: If the header is unterminated or has no space
        """
        if self._header_read:
            raise RuntimeError("Object header has already been read")

        header, found = await self._read_until(b"\0")
        self._header_read = True
        if not found:
            raise MalformedObjectError(f"Unterminated header in object {self.object_hash}")

        space = header.find(b" ")
        if space <= 0:
            raise MalformedObjectError(f"Invalid header in object {self.object_hash}")

        return header[:space].decode('utf-8', errors='replace')

    async def read_field(self) -> Optional[Tuple[str, str]]:
        """
        Read the next "<key> <value>" header line.

        Continuation lines (lines starting with a space, as used by gpgsig and
        mergetag) are folded into the value with newlines.

        Returns:
            (key, value), or None when the blank line before the body is reached

        Raises:
            MalformedObjectError: If a line has no space or the stream ends early
        """
        if not self._header_read:
            raise RuntimeError("read_header must be called before read_field")
        if self._fields_done:
            raise RuntimeError("All fields have already been read")

        line, found = await self._read_until(b"\n")
        if not line:
            if not found:
                raise MalformedObjectError(f"Unexpected end of object {self.object_hash}")
            self._fields_done = True
            return None

        space = line.find(b" ")
        if space <= 0:
            raise MalformedObjectError(f"Invalid field line in object {self.object_hash}")

        key = line[:space].decode('utf-8', errors='replace')
        value = line[space + 1:]

        while found and await self._peek() == b" ":
            continuation, found = await self._read_until(b"\n")
            value += b"\n" + continuation[1:]

        return key, value.decode('utf-8', errors='replace')

    async def read_body(self) -> str:
        """Read and return everything after the header fields."""
        if not self._fields_done:
            raise RuntimeError("read_field must return None before read_body")

        while not self._eof:
            await self._fill()

        body, self._buffer = self._buffer, b""
        return body.decode('utf-8', errors='replace')

    def __repr__(self) -> str:
        return f"LooseObjectReader({self.object_hash[:8]!r})"
