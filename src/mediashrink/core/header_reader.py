"""Pooled readers for peeking at the first bytes of a file.

Type sniffing and the PNG fast path only ever need the first 64 bytes of a
file. HeaderReader buffers that window so it can be inspected without
losing it for a later read, and HeaderReaderPool keeps released readers on
a free list so their buffers are reused across many identification calls.
"""

from __future__ import annotations

import logging
import os
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import BinaryIO

logger = logging.getLogger(__name__)

# Largest window any header consumer needs
MAX_HEADER_SIZE = 64


class HeaderReader:
    """Buffered reader that can peek up to its buffer size.

    Peeked bytes stay in the buffer and are returned first by read(), so
    peeking never hides data from a caller that reads the source afterwards.
    """

    def __init__(self, size: int = MAX_HEADER_SIZE) -> None:
        self._buffer = bytearray(size)
        self._source: BinaryIO | None = None
        self._start = 0
        self._end = 0

    @property
    def size(self) -> int:
        """Capacity of the peek window in bytes."""
        return len(self._buffer)

    def reset(self, source: BinaryIO | None) -> None:
        """Discard buffered data and read from source from now on."""
        self._source = source
        self._start = 0
        self._end = 0

    def _fill(self, want: int) -> None:
        if self._source is None:
            raise ValueError("reader has no source")
        if self._start > 0:
            # Compact so the window starts at the beginning of the buffer
            pending = self._end - self._start
            self._buffer[:pending] = self._buffer[self._start : self._end]
            self._start, self._end = 0, pending
        while self._end < want:
            view = memoryview(self._buffer)[self._end : want]
            count = self._source.readinto(view)
            if not count:
                break
            self._end += count

    def peek(self, n: int = MAX_HEADER_SIZE) -> bytes:
        """Return up to n bytes without consuming them.

        n is clamped to the buffer size. Fewer bytes are returned when the
        source is shorter; that is not an error.
        """
        n = max(0, min(n, len(self._buffer)))
        if self._end - self._start < n:
            self._fill(n)
        available = min(n, self._end - self._start)
        return bytes(self._buffer[self._start : self._start + available])

    def read(self, n: int = -1) -> bytes:
        """Read and consume up to n bytes (all remaining bytes if n < 0)."""
        buffered = bytes(self._buffer[self._start : self._end])
        if n >= 0 and n <= len(buffered):
            self._start += n
            return buffered[:n]

        self._start = self._end = 0
        if self._source is None:
            return buffered
        rest = self._source.read() if n < 0 else self._source.read(n - len(buffered))
        return buffered + (rest or b"")


class HeaderReaderPool:
    """Thread-safe free list of HeaderReader instances.

    A reader returned by acquire() belongs to the caller until it is handed
    back with release(). Readers carry no identity; the pool only exists to
    reuse their buffers.

    Example:
        pool = HeaderReaderPool()
        with open(path, "rb") as f, pool.reader(f) as reader:
            header = reader.peek(64)
    """

    def __init__(self, size: int = MAX_HEADER_SIZE) -> None:
        self._size = size
        self._free: list[HeaderReader] = []
        self._in_use: set[int] = set()
        self._lock = threading.Lock()

    def acquire(self, source: BinaryIO) -> HeaderReader:
        """Take a reader from the pool (or create one) bound to source."""
        with self._lock:
            reader = self._free.pop() if self._free else HeaderReader(self._size)
            self._in_use.add(id(reader))
        reader.reset(source)
        return reader

    def release(self, reader: HeaderReader) -> None:
        """Return a reader to the pool.

        Raises:
            ValueError: If the reader is not currently acquired from this pool.
        """
        with self._lock:
            if id(reader) not in self._in_use:
                raise ValueError("reader was not acquired from this pool")
            self._in_use.discard(id(reader))
        reader.reset(None)
        with self._lock:
            self._free.append(reader)

    @contextmanager
    def reader(self, source: BinaryIO) -> Iterator[HeaderReader]:
        """Context manager pairing acquire() with release()."""
        reader = self.acquire(source)
        try:
            yield reader
        finally:
            self.release(reader)

    @property
    def idle_count(self) -> int:
        """Number of readers waiting on the free list."""
        with self._lock:
            return len(self._free)


_default_pool = HeaderReaderPool()


def get_default_pool() -> HeaderReaderPool:
    """Return the process-wide reader pool."""
    return _default_pool


def read_file_header(
    path: Path | str,
    size: int = MAX_HEADER_SIZE,
    pool: HeaderReaderPool | None = None,
) -> bytes:
    """Read the first bytes of a file through a pooled reader.

    The peek is clamped to the file size, so short and empty files return
    whatever they contain.

    Args:
        path: File to read.
        size: Number of bytes wanted (at most MAX_HEADER_SIZE).
        pool: Reader pool to use; defaults to the process-wide pool.

    Returns:
        Up to size bytes from the start of the file.

    Raises:
        OSError: If the file cannot be opened or stat'ed.
    """
    pool = pool or _default_pool
    with open(path, "rb") as f:
        file_size = os.fstat(f.fileno()).st_size
        with pool.reader(f) as reader:
            header = reader.peek(min(size, file_size))
    logger.debug("Read %d header bytes from %s", len(header), path)
    return header
