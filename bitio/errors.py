class BitIOError(Exception):
    pass


class ShortReadError(BitIOError, EOFError):
    "The source ran out of data before a bulk read could fill its buffer."

    def __init__(self, count: int):
        super().__init__(f"Source exhausted after {count} bytes.")
        self.count = count


class ShortWriteError(BitIOError):
    "The sink failed before a bulk write completed."

    def __init__(self, count: int):
        super().__init__(f"Sink failed after {count} bytes.")
        self.count = count


class BrokenStreamError(BitIOError):
    pass
