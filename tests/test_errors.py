from dataclasses import dataclass
from typing import Annotated, Optional

import pytest

from bincodec import (
    Config,
    InvalidBoolEncodingError,
    InvalidCharValueError,
    InvalidTagEncodingError,
    InvalidUtf8Error,
    InvalidValueError,
    InvalidVariantIndexError,
    SequenceMustHaveLengthError,
    SerializationError,
    TrailingBytesError,
    UnexpectedEndOfInputError,
    Writer,
    decode,
    encode,
)
from bincodec.serializer import Serializer
from bincodec.shapes import CHAR, U8, U32, Array


@dataclass
class Pair:
    a: Annotated[int, U32]
    b: Annotated[int, U32]


def test_every_error_is_a_serialization_error() -> None:
    for error_class in (
        InvalidBoolEncodingError,
        InvalidCharValueError,
        InvalidTagEncodingError,
        InvalidUtf8Error,
        InvalidValueError,
        InvalidVariantIndexError,
        SequenceMustHaveLengthError,
        TrailingBytesError,
        UnexpectedEndOfInputError,
    ):
        assert issubclass(error_class, SerializationError)


def test_truncated_input() -> None:
    data = encode(Pair(1, 2))
    assert len(data) == 8
    with pytest.raises(UnexpectedEndOfInputError):
        decode(data[:5], Pair)


def test_empty_input() -> None:
    with pytest.raises(UnexpectedEndOfInputError):
        decode(b'', int)


def test_invalid_bool() -> None:
    with pytest.raises(InvalidBoolEncodingError) as exc_info:
        decode(b'\x02', bool)
    assert exc_info.value.tag == 2
    assert isinstance(exc_info.value, InvalidTagEncodingError)


def test_invalid_option_tag() -> None:
    with pytest.raises(InvalidTagEncodingError) as exc_info:
        decode(b'\x02\x05', Optional[Annotated[int, U8]])
    assert exc_info.value.tag == 2


def test_option_tags() -> None:
    shape = Optional[Annotated[int, U8]]
    assert encode(5, shape=shape).hex() == '0105'
    assert encode(None, shape=shape).hex() == '00'
    assert decode(b'\x01\x05', shape) == 5
    assert decode(b'\x00', shape) is None


def test_invalid_utf8() -> None:
    data = bytes.fromhex('0200000000000000fffe')
    with pytest.raises(InvalidUtf8Error) as exc_info:
        decode(data, str)
    assert isinstance(exc_info.value.__cause__, UnicodeDecodeError)


@pytest.mark.parametrize('code_point', [0xd800, 0xdfff, 0x110000])
def test_invalid_char(code_point: int) -> None:
    data = code_point.to_bytes(4, 'little')
    with pytest.raises(InvalidCharValueError) as exc_info:
        decode(data, Annotated[str, CHAR])
    assert exc_info.value.code_point == code_point


def test_char() -> None:
    assert encode('A', shape=CHAR).hex() == '41000000'
    assert encode('😎', Config().with_variable_int_encoding(), shape=CHAR).hex() == 'fc0ef60100'
    assert decode(bytes.fromhex('41000000'), CHAR) == 'A'
    with pytest.raises(InvalidValueError):
        encode('ab', shape=CHAR)


def test_trailing_bytes() -> None:
    data = encode(1, shape=U8) + b'\x00'
    with pytest.raises(TrailingBytesError):
        decode(data, Annotated[int, U8])
    assert decode(data, Annotated[int, U8], Config().allow_trailing()) == 1


def test_sequence_without_length() -> None:
    writer = Writer(Serializer.build_bytes_serializer())
    with pytest.raises(SequenceMustHaveLengthError):
        writer.write_seq((i for i in range(3)), Writer.write_u8)


def test_wrong_value_for_shape() -> None:
    with pytest.raises(InvalidValueError):
        encode('not a pair', shape=Pair)
    with pytest.raises(InvalidValueError):
        encode((1, 2, 3), shape=tuple[int, int])
    with pytest.raises(InvalidValueError):
        encode(object())


@pytest.mark.parametrize('value,shape', [
    ('abc', bytes),
    (5, bytes),
    ('ab', Annotated[bytes, Array(2)]),
    (5, tuple[int, int]),
    ('ab', tuple[str, str]),
    (True, U8),
    (False, int),
    (1.0, U32),
])
def test_wrong_type_for_shape(value, shape) -> None:
    with pytest.raises(InvalidValueError):
        encode(value, shape=shape)


def test_bool_is_not_an_integer() -> None:
    writer = Writer(Serializer.build_bytes_serializer())
    with pytest.raises(InvalidValueError):
        writer.write_u64(True)
    assert encode(True) == b'\x01'
