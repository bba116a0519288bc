import logging
from typing import Any

from bitio.binary import _Binary, check_width, extract, mask, sign_extend
from bitio.errors import ShortReadError
from bitio.stream import as_source, bulk_reader


log = logging.getLogger(__name__)


# -----------------------------------------------------------------------------

class BitReader(_Binary):
    """
    Read MSB-first bit fields from a byte source.

    The cache holds the last byte pulled from the source; its low cached_bits
    bits have not been handed out yet.
    """

    def __init__(self, source: Any):
        super().__init__()
        self._source = as_source(source)
        self._read_byte = self._source.read_byte
        self._readinto = bulk_reader(self._source)

    @property
    def bits_until_alignment(self) -> int:
        "Return the number of bits align() would discard."
        return self._cached_bits

    def _read1(self) -> int:
        try:
            return self._read_byte()
        except EOFError:
            raise
        except Exception as e:
            log.debug("Source failed: %r", e)
            self._fail(e)
            raise

    def read_bits(self, n: int) -> int:
        check_width(n)
        self._check_stream()

        # If all bits that must be read are already in the cache.
        if n <= self._cached_bits:
            x = extract(self._cache, self._cached_bits, 0, n)
            self._cached_bits -= n
            return x

        x = self._cache & mask(self._cached_bits)
        size = self._cached_bits
        while size < n:
            x = (x << 8) | self._read1()
            size += 8

        # The cache is only updated once every byte has been read.
        left = size - n
        self._cache = x & 0xFF
        self._cached_bits = left
        return x >> left

    def read_sint(self, n: int) -> int:
        return sign_extend(self.read_bits(n), n)

    def read_bool(self) -> bool:
        return self.read_bits(1) == 1

    def read_byte(self) -> int:
        self._check_stream()

        if self._cached_bits == 0:
            return self._read1()

        b = self._read1()
        x = ((self._cache << 8) | b) >> self._cached_bits
        self._cache = b
        return x & 0xFF

    def readinto(self, buffer: Any) -> int:
        """
        Fill buffer completely and return its length.

        Raise ShortReadError, carrying the number of bytes actually filled,
        if the source runs out first.
        """
        self._check_stream()
        view = memoryview(buffer).cast('B')
        n = len(view)

        if self._cached_bits == 0 and self._readinto is not None:
            count = 0
            while count < n:
                try:
                    got = self._readinto(view[count:])
                except EOFError as e:
                    raise ShortReadError(count) from e
                except Exception as e:
                    log.debug("Source failed: %r", e)
                    self._fail(e)
                    raise
                if got == 0:
                    raise ShortReadError(count)
                count += got
            return n

        for i in range(n):
            try:
                view[i] = self.read_byte()
            except EOFError as e:
                raise ShortReadError(i) from e
        return n

    def read_bytes(self, n: int) -> bytes:
        if n < 0:
            raise ValueError("n must not be negative.")
        bs = bytearray(n)
        self.readinto(bs)
        return bytes(bs)

    def align(self) -> int:
        "Drop the cached bits and return how many were dropped."
        n = self._cached_bits
        self._cached_bits = 0
        return n
