"""
Byte stream capabilities wrapped by the bit reader and writer.

A source only has to hand out one byte at a time and raise EOFError once it
is exhausted; a sink only has to accept one byte at a time. Bulk transfer and
finalization are optional and are looked up once, when a reader or writer is
built, so the hot paths never inspect the stream again.

Regular binary file objects (io.BytesIO, open(..., 'rb'), sockets' makefile)
are adapted through FileSource and FileSink.
"""

from typing import Any, Callable, Optional, Protocol, runtime_checkable


# -----------------------------------------------------------------------------

@runtime_checkable
class ByteSource(Protocol):
    def read_byte(self) -> int:
        ...


@runtime_checkable
class BulkSource(Protocol):
    def readinto(self, buffer: Any) -> int:
        ...


@runtime_checkable
class ByteSink(Protocol):
    def write_byte(self, x: int) -> None:
        ...


@runtime_checkable
class BulkSink(Protocol):
    def write(self, bs: Any) -> int:
        ...


@runtime_checkable
class Finalizer(Protocol):
    def close(self) -> None:
        ...


# -----------------------------------------------------------------------------

def read1(buffer: Any) -> int:
    bs = buffer.read(1)
    if not bs:
        raise EOFError()
    return bs[0]


def write1(buffer: Any, x: int) -> int:
    if not 0 <= x < 256:
        raise ValueError(f"Byte value out of range: {x}")
    return buffer.write(x.to_bytes(1, byteorder='big'))


# -----------------------------------------------------------------------------

class FileSource:
    "Adapt an object with a read(n) method to ByteSource and BulkSource."

    def __init__(self, buffer: Any):
        self._buffer = buffer
        self._readinto = getattr(buffer, 'readinto', None)

    def read_byte(self) -> int:
        return read1(self._buffer)

    def readinto(self, buffer: Any) -> int:
        if self._readinto is not None:
            return self._readinto(buffer) or 0

        view = memoryview(buffer).cast('B')
        bs = self._buffer.read(len(view))
        if not bs:
            return 0
        view[:len(bs)] = bs
        return len(bs)


class FileSink:
    """
    Adapt an object with a write(b) method to ByteSink, BulkSink and
    Finalizer.

    close() only flushes the wrapped object. The file stays open and remains
    the caller's to close, so an io.BytesIO can still be inspected with
    getvalue() once the writer is finished.
    """

    def __init__(self, buffer: Any):
        self._buffer = buffer
        self._flush = getattr(buffer, 'flush', None)

    def write_byte(self, x: int) -> None:
        if write1(self._buffer, x) != 1:
            raise OSError("The wrapped stream did not accept the byte.")

    def write(self, bs: Any) -> int:
        n = self._buffer.write(bs)
        return 0 if n is None else n

    def close(self) -> None:
        if self._flush is not None:
            self._flush()


# -----------------------------------------------------------------------------

def as_source(x: Any) -> ByteSource:
    if isinstance(x, ByteSource):
        return x
    if callable(getattr(x, 'read', None)):
        return FileSource(x)
    raise TypeError(f"Cannot read bytes from {type(x).__name__}")


def as_sink(x: Any) -> ByteSink:
    if isinstance(x, ByteSink):
        return x
    if callable(getattr(x, 'write', None)):
        return FileSink(x)
    raise TypeError(f"Cannot write bytes to {type(x).__name__}")


def bulk_reader(source: ByteSource) -> Optional[Callable[[Any], int]]:
    if isinstance(source, BulkSource):
        return source.readinto
    return None


def bulk_writer(sink: ByteSink) -> Optional[Callable[[Any], int]]:
    if isinstance(sink, BulkSink):
        return sink.write
    return None


def finalizer(sink: ByteSink) -> Optional[Callable[[], None]]:
    if isinstance(sink, Finalizer):
        return sink.close
    return None
