from io import BytesIO
from random import Random

from bitio.reader import BitReader
from bitio.utils import pack, unpack
from bitio.writer import BitWriter


# -----------------------------------------------------------------------------

def random_fields(seed: int, n: int) -> list[tuple[int, int]]:
    rng = Random(seed)
    fields = []
    for _ in range(n):
        width = rng.randint(1, 64)
        fields.append((rng.getrandbits(64) & ((1 << width) - 1), width))
    return fields


def test_chain():
    fields = random_fields(0x5eed, 20000)

    buffer = BytesIO()
    with BitWriter(buffer) as w:
        for x, n in fields:
            w.write_bits(x, n)

    total = sum(n for _, n in fields)
    assert len(buffer.getvalue()) == (total + 7) // 8

    r = BitReader(BytesIO(buffer.getvalue()))
    for x, n in fields:
        assert r.read_bits(n) == x


def test_chain_mixed():
    rng = Random(42)
    ops = []

    buffer = BytesIO()
    w = BitWriter(buffer)
    for _ in range(5000):
        match rng.randint(0, 3):
            case 0:
                x = rng.getrandbits(13)
                w.write_bits(x, 13)
                ops.append(('bits', x))
            case 1:
                x = rng.random() < 0.5
                w.write_bool(x)
                ops.append(('bool', x))
            case 2:
                x = rng.getrandbits(8)
                w.write_byte(x)
                ops.append(('byte', x))
            case 3:
                x = rng.randbytes(rng.randint(0, 5))
                w.write(x)
                ops.append(('bytes', x))
    w.close()

    r = BitReader(BytesIO(buffer.getvalue()))
    for op, x in ops:
        match op:
            case 'bits':
                assert r.read_bits(13) == x
            case 'bool':
                assert r.read_bool() is x
            case 'byte':
                assert r.read_byte() == x
            case 'bytes':
                assert r.read_bytes(len(x)) == x


# -----------------------------------------------------------------------------

def test_pack_unpack():
    fields = random_fields(7, 500)
    bs = pack(fields)
    assert unpack(bs, [n for _, n in fields]) == [x for x, _ in fields]


def test_pack_empty():
    assert pack([]) == b''
