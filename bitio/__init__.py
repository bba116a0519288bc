from bitio.errors import (
    BitIOError, BrokenStreamError, ShortReadError, ShortWriteError
)
from bitio.reader import BitReader
from bitio.utils import pack, unpack
from bitio.writer import BitWriter

__all__ = [
    'BitIOError', 'BrokenStreamError', 'ShortReadError', 'ShortWriteError',
    'BitReader', 'BitWriter',
    'pack', 'unpack'
]
