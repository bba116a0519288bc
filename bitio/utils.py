from io import BytesIO
from typing import Iterable

from bitio.reader import BitReader
from bitio.writer import BitWriter


def pack(fields: Iterable[tuple[int, int]]) -> bytes:
    """
    Pack (value, width) pairs MSB-first, zero padding the last byte.

    >>> pack([(0b1, 1), (0b01, 2), (0b010, 3), (0b10, 2)]).hex()
    'aa'
    >>> pack([(0b101, 3)]).hex()
    'a0'
    """
    buffer = BytesIO()
    with BitWriter(buffer) as w:
        for x, n in fields:
            w.write_bits(x, n)
    return buffer.getvalue()


def unpack(bs: bytes, widths: Iterable[int]) -> list[int]:
    """
    >>> unpack(bytes([0xc1, 0x01]), [1, 8])
    [1, 130]
    """
    r = BitReader(BytesIO(bs))
    return [r.read_bits(n) for n in widths]
