import logging
from typing import Any

from bitio.binary import _Binary, check_width, mask
from bitio.errors import ShortWriteError
from bitio.stream import as_sink, bulk_writer, finalizer


log = logging.getLogger(__name__)


# -----------------------------------------------------------------------------

class BitWriter(_Binary):
    """
    Write MSB-first bit fields to a byte sink.

    The low cached_bits bits of the cache have been written but do not make up
    a full byte yet. They only reach the sink once the byte is completed, by
    align() or by close(), so a writer that is never closed loses them.

    Once the sink has raised, every further operation raises
    BrokenStreamError. Operations after close() raise ValueError.
    """

    def __init__(self, sink: Any):
        super().__init__()
        self._sink = as_sink(sink)
        self._write_byte = self._sink.write_byte
        self._write = bulk_writer(self._sink)
        self._finalize = finalizer(self._sink)
        self._closed = False

    def __enter__(self) -> 'BitWriter':
        return self

    def __exit__(self, *args):
        self.close()

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def bits_until_alignment(self) -> int:
        "Return the number of padding bits align() would write."
        return (8 - self._cached_bits) % 8

    def _check(self):
        if self._closed:
            raise ValueError("I/O operation on closed writer.")
        self._check_stream()

    def _write1(self, x: int):
        try:
            self._write_byte(x)
        except Exception as e:
            log.debug("Sink failed: %r", e)
            self._fail(e)
            raise

    def write_bits(self, x: int, n: int):
        check_width(n)
        self._check()

        size = self._cached_bits + n
        w = (self._cache << n) | (x & mask(n))

        # Flush every completed byte, most significant first.
        while size >= 8:
            size -= 8
            self._write1((w >> size) & 0xFF)

        self._cache = w & mask(size)
        self._cached_bits = size

    def write_sint(self, x: int, n: int):
        check_width(n)
        if not -(1 << (n - 1)) <= x < (1 << (n - 1)):
            raise ValueError(f"Cannot encode {x} as a {n}-bit signed value.")
        self.write_bits(x, n)

    def write_bool(self, x: bool):
        self.write_bits(1 if x else 0, 1)

    def write_byte(self, x: int):
        if not 0 <= x < 256:
            raise ValueError(f"Byte value out of range: {x}")
        self._check()

        if self._cached_bits == 0:
            self._write1(x)
            return

        self.write_bits(x, 8)

    def write(self, bs: Any) -> int:
        """
        Write every byte of bs and return how many were written.

        Raise ShortWriteError, carrying the number of bytes that did reach the
        sink, if the sink fails part way.
        """
        self._check()
        view = memoryview(bs).cast('B')
        n = len(view)

        if self._cached_bits == 0 and self._write is not None:
            count = 0
            while count < n:
                try:
                    written = self._write(view[count:])
                except Exception as e:
                    # BlockingIOError reports a partial write this way.
                    count += getattr(e, 'characters_written', 0)
                    log.debug("Sink failed: %r", e)
                    self._fail(e)
                    raise ShortWriteError(count) from e
                if written == 0:
                    error = ShortWriteError(count)
                    log.debug("Sink accepted no bytes after %d", count)
                    self._fail(error)
                    raise error
                count += written
            return n

        for i in range(n):
            try:
                self.write_byte(view[i])
            except Exception as e:
                raise ShortWriteError(i) from e
        return n

    def align(self) -> int:
        """
        Zero pad the pending bits up to a byte boundary and flush them.

        Return the number of padding bits written, 0 if already aligned, in
        which case nothing is written at all.
        """
        self._check()

        if self._cached_bits == 0:
            return 0

        n = 8 - self._cached_bits
        self._write1((self._cache << n) & 0xFF)
        self._cache = 0
        self._cached_bits = 0
        return n

    def close(self):
        """
        Flush any pending bits, then close the sink if it can be closed.

        A flush failure is raised in preference to a close failure; the sink is
        closed either way.
        """
        if self._closed:
            return

        flush_error = None
        try:
            self.align()
        except Exception as e:
            flush_error = e

        self._closed = True

        if self._finalize is not None:
            try:
                self._finalize()
            except Exception as e:
                if flush_error is None:
                    raise
                log.warning("Ignoring close error after failed flush: %r", e)

        if flush_error is not None:
            raise flush_error
