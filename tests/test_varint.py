import pytest

from bincodec import Config, InvalidTagEncodingError, Reader, Writer
from bincodec.deserializer import Deserializer
from bincodec.serializer import Serializer

VARINT = Config().with_variable_int_encoding()
VARINT_BE = VARINT.with_big_endian()


def _write(config: Config, method: str, value: int) -> bytes:
    se = Serializer.build_bytes_serializer()
    getattr(Writer(se, config), method)(value)
    return bytes(se.finalize())


def _read(config: Config, method: str, data: bytes) -> int:
    de = Deserializer.build_bytes_deserializer(data)
    value = getattr(Reader(de, config), method)()
    de.finalize()
    return value


@pytest.mark.parametrize('value, expected', [
    (0, '00'),
    (1, '01'),
    (250, 'fa'),
    (251, 'fbfb00'),
    (0xffff, 'fbffff'),
    (0x10000, 'fc00000100'),
    (70000, 'fc70110100'),
    (2**32 - 1, 'fcffffffff'),
    (2**32, 'fd0000000001000000'),
    (2**64 - 1, 'fdffffffffffffffff'),
])
def test_unsigned_uses_smallest_tag(value: int, expected: str) -> None:
    assert _write(VARINT, 'write_u64', value).hex() == expected
    assert _read(VARINT, 'read_u64', bytes.fromhex(expected)) == value


def test_u128_tag() -> None:
    value = 2**64
    data = _write(VARINT, 'write_u128', value)
    assert data[0] == 0xfe
    assert len(data) == 17
    assert _read(VARINT, 'read_u128', data) == value


@pytest.mark.parametrize('value, expected', [
    (0, '00'),
    (-1, '01'),
    (1, '02'),
    (-2, '03'),
    (125, 'fa'),
    (-126, 'fbfb00'),
    (-(2**63), 'fdffffffffffffffff'),
])
def test_signed_uses_zigzag(value: int, expected: str) -> None:
    assert _write(VARINT, 'write_i64', value).hex() == expected
    assert _read(VARINT, 'read_i64', bytes.fromhex(expected)) == value


def test_big_endian_affects_payload_only() -> None:
    assert _write(VARINT_BE, 'write_u32', 251).hex() == 'fb00fb'
    assert _write(VARINT_BE, 'write_u32', 70000).hex() == 'fc00011170'
    assert _read(VARINT_BE, 'read_u32', bytes.fromhex('fb00fb')) == 251


def test_single_byte_integers_are_not_tagged() -> None:
    # u8/i8 are always one raw byte, even when the value is above the single-byte varint range
    assert _write(VARINT, 'write_u8', 255).hex() == 'ff'
    assert _write(VARINT, 'write_i8', -1).hex() == 'ff'
    assert _read(VARINT, 'read_u8', b'\xfb') == 0xfb


def test_non_minimal_encoding_is_accepted() -> None:
    assert _read(VARINT, 'read_u32', bytes.fromhex('fb0500')) == 5
    assert _read(VARINT, 'read_u64', bytes.fromhex('fc05000000')) == 5


def test_reserved_tag_is_rejected() -> None:
    with pytest.raises(InvalidTagEncodingError) as exc_info:
        _read(VARINT, 'read_u64', bytes.fromhex('ff'))
    assert exc_info.value.tag == 0xff


def test_tag_wider_than_target_is_rejected() -> None:
    with pytest.raises(InvalidTagEncodingError):
        _read(VARINT, 'read_u16', bytes.fromhex('fc70110100'))
    with pytest.raises(InvalidTagEncodingError):
        _read(VARINT, 'read_u32', bytes.fromhex('fd0000000001000000'))


@pytest.mark.parametrize('value', [0, 1, 250, 251, 2**16, 2**32 - 1])
def test_fixed_u32_is_always_four_bytes(value: int) -> None:
    fixed = _write(Config(), 'write_u32', value)
    assert len(fixed) == 4
    varint = _write(VARINT, 'write_u32', value)
    assert 1 <= len(varint) <= 5
