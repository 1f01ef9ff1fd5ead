"""Pooled gzip response writers.

A ``GzipResponseWriter`` compresses whatever is written to it into a
single gzip member. Writers are expensive to create relative to a small
static file, so they are pooled: ``acquire_gzip_writer()`` hands out an
exclusive writer, ``release_gzip_writer()`` resets it and returns it.

Usage::

    writer = acquire_gzip_writer()
    try:
        writer.write(body)
        compressed = writer.close()
    finally:
        release_gzip_writer(writer)
"""

import queue
import zlib

# wbits=31 selects the gzip container (16) with a 32K window (15)
_GZIP_WBITS = 16 + zlib.MAX_WBITS

DEFAULT_LEVEL = zlib.Z_DEFAULT_COMPRESSION


class GzipResponseWriter:
    """Accumulates gzip-compressed output for one response body."""

    __slots__ = ("_chunks", "_compressor", "level", "written")

    def __init__(self, level: int = DEFAULT_LEVEL) -> None:
        self.level = level
        self.reset()

    def reset(self) -> None:
        """Discard any output and start a fresh gzip member."""
        self._compressor = zlib.compressobj(self.level, zlib.DEFLATED, _GZIP_WBITS)
        self._chunks: list[bytes] = []
        self.written = 0

    def write(self, data: bytes) -> int:
        """Compress *data*. Returns the number of uncompressed bytes taken."""
        if data:
            chunk = self._compressor.compress(data)
            if chunk:
                self._chunks.append(chunk)
            self.written += len(data)
        return len(data)

    def close(self) -> bytes:
        """Finish the gzip member and return the complete compressed body."""
        self._chunks.append(self._compressor.flush(zlib.Z_FINISH))
        return b"".join(self._chunks)


class GzipWriterPool:
    """Thread-safe free list of ``GzipResponseWriter`` objects.

    ``acquire`` never fails: an empty pool creates a new writer.
    """

    __slots__ = ("_free", "level")

    def __init__(self, level: int = DEFAULT_LEVEL) -> None:
        self.level = level
        self._free: queue.SimpleQueue[GzipResponseWriter] = queue.SimpleQueue()

    def acquire(self) -> GzipResponseWriter:
        try:
            return self._free.get_nowait()
        except queue.Empty:
            return GzipResponseWriter(self.level)

    def release(self, writer: GzipResponseWriter) -> None:
        writer.reset()
        self._free.put(writer)

    def __len__(self) -> int:
        return self._free.qsize()


_pool = GzipWriterPool()


def acquire_gzip_writer() -> GzipResponseWriter:
    """Take an exclusive writer from the shared pool."""
    return _pool.acquire()


def release_gzip_writer(writer: GzipResponseWriter) -> None:
    """Reset *writer* and return it to the shared pool."""
    _pool.release(writer)
