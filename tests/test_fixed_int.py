import pytest

from bincodec import Config, InvalidValueError, Writer, decode, encode
from bincodec.serializer import Serializer
from bincodec.shapes import I8, I16, I32, I64, I128, U8, U16, U32, U64, U128, Shape


@pytest.mark.parametrize('shape, value, expected', [
    (U8, 0xab, 'ab'),
    (U16, 0x0102, '0201'),
    (U32, 0x01020304, '04030201'),
    (U64, 1, '0100000000000000'),
    (U128, 1, '01' + '00' * 15),
    (I8, -1, 'ff'),
    (I16, -2, 'feff'),
    (I32, -1, 'ffffffff'),
    (I64, -(2**63), '0000000000000080'),
    (I128, -1, 'ff' * 16),
])
def test_little_endian(shape: Shape, value: int, expected: str) -> None:
    assert encode(value, shape=shape).hex() == expected
    assert decode(bytes.fromhex(expected), shape) == value


@pytest.mark.parametrize('shape, value, expected', [
    (U16, 0x0102, '0102'),
    (U32, 0x01020304, '01020304'),
    (I32, -2, 'fffffffe'),
])
def test_big_endian(shape: Shape, value: int, expected: str) -> None:
    config = Config().with_big_endian()
    assert encode(value, config, shape=shape).hex() == expected
    assert decode(bytes.fromhex(expected), shape, config) == value


@pytest.mark.parametrize('method, value', [
    ('write_u8', 256),
    ('write_u8', -1),
    ('write_i8', 128),
    ('write_i8', -129),
    ('write_u16', 2**16),
    ('write_i32', 2**31),
    ('write_u64', 2**64),
    ('write_i128', -(2**127) - 1),
])
def test_out_of_range(method: str, value: int) -> None:
    writer = Writer(Serializer.build_bytes_serializer())
    with pytest.raises(InvalidValueError):
        getattr(writer, method)(value)
    with pytest.raises(ValueError):
        getattr(Writer(Serializer.build_bytes_serializer(), Config().with_variable_int_encoding()), method)(value)


def test_floats() -> None:
    from bincodec.shapes import F32, F64
    assert encode(1.0, shape=F32).hex() == '0000803f'
    assert encode(1.0, shape=F64).hex() == '000000000000f03f'
    assert encode(1.0, Config().with_big_endian(), shape=F64).hex() == '3ff0000000000000'
    assert decode(bytes.fromhex('0000803f'), F32) == 1.0
    # floats are never affected by the int encoding
    assert encode(1.5, Config().with_variable_int_encoding()).hex() == '000000000000f83f'
