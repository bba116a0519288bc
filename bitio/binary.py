from typing import Optional

from bitio.errors import BrokenStreamError


MAX_WIDTH = 64


# -----------------------------------------------------------------------------

def mask(n: int) -> int:
    """
    >>> bin(mask(0))
    '0b0'
    >>> bin(mask(1))
    '0b1'
    >>> bin(mask(3))
    '0b111'
    """
    return (1 << n) - 1


def extract(x: int, size: int, start: int, stop: int) -> int:
    """
    Return bits [start, stop) of the size-bit value x, counting from the most
    significant bit.

    >>> bin(extract(0b1, 1, 0, 1))
    '0b1'
    >>> bin(extract(0b10101010, 8, 0, 8))
    '0b10101010'
    >>> bin(extract(0b10101010, 8, 2, 5))
    '0b101'
    """
    return (x >> (size - stop)) & mask(stop - start)


def check_width(n: int):
    """
    >>> check_width(64)
    >>> check_width(0)
    Traceback (most recent call last):
        ...
    ValueError: Bit width must be between 1 and 64, got 0.
    """
    if not 1 <= n <= MAX_WIDTH:
        raise ValueError(
            f"Bit width must be between 1 and {MAX_WIDTH}, got {n}."
        )


def sign_extend(x: int, n: int) -> int:
    """
    >>> sign_extend(0b111, 3)
    -1
    >>> sign_extend(0b011, 3)
    3
    >>> sign_extend(0b100, 3)
    -4
    """
    x &= mask(n)
    return x - ((x >> (n - 1)) << n)


# -----------------------------------------------------------------------------

class _Binary:
    def __init__(self):
        self._cache: int = 0
        self._cached_bits: int = 0
        self._error: Optional[BaseException] = None

    @property
    def is_aligned(self) -> bool:
        "Return True if no bits are pending in the cache."
        return self._cached_bits == 0

    @property
    def cached_bits(self) -> int:
        "Return the number of bits pending in the cache (0 to 7)."
        return self._cached_bits

    def _fail(self, e: BaseException):
        self._error = e

    def _check_stream(self):
        if self._error is not None:
            raise BrokenStreamError(
                "The underlying stream failed during an earlier operation."
            ) from self._error
