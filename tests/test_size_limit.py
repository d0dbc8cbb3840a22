import io
from dataclasses import dataclass
from typing import Annotated

import pytest

from bincodec import (
    Config,
    SizeLimitExceededError,
    UnexpectedEndOfInputError,
    decode,
    decode_from_stream,
    encode,
    encode_into,
    encoded_size,
)
from bincodec.shapes import F32, U8, U64, Array, make_shape

LIMIT_4 = Config().with_variable_int_encoding().with_limit(4)


def test_encode_within_limit() -> None:
    assert encode('abc', LIMIT_4).hex() == '03616263'


def test_encode_over_limit() -> None:
    # 1 byte of length prefix + 5 bytes of payload
    with pytest.raises(SizeLimitExceededError):
        encode('abcde', LIMIT_4)
    with pytest.raises(SizeLimitExceededError):
        encoded_size('abcde', LIMIT_4)


def test_encode_into_writes_nothing_past_the_limit() -> None:
    stream = io.BytesIO()
    with pytest.raises(SizeLimitExceededError):
        encode_into(b'abcdef', stream, LIMIT_4)
    assert len(stream.getvalue()) <= 4


def test_fixed_width_counts_full_width() -> None:
    config = Config().with_limit(4)
    with pytest.raises(SizeLimitExceededError):
        encode(1, config, shape=U64)
    assert encode(1, config.with_variable_int_encoding(), shape=U64) == b'\x01'


def test_decode_over_limit() -> None:
    data = encode('abcde', Config().with_variable_int_encoding())
    with pytest.raises(SizeLimitExceededError):
        decode(data, str, LIMIT_4)


def test_length_prefix_is_checked_before_allocating() -> None:
    # the prefix claims 2**40 items, but only a handful of bytes are allowed
    data = bytes.fromhex('fd0000000000010000')
    config = Config().with_variable_int_encoding().with_limit(16)
    with pytest.raises(SizeLimitExceededError):
        decode(data, list[int], config)
    with pytest.raises(SizeLimitExceededError):
        decode(data, bytes, config)


def test_nested_sequences_share_the_budget() -> None:
    config = Config().with_variable_int_encoding()
    value = [[1, 2, 3], [4, 5, 6]]
    data = encode(value, config, shape=list[list[U8]])
    assert len(data) == 9
    assert decode(data, list[list[U8]], config.with_limit(9)) == value
    with pytest.raises(SizeLimitExceededError):
        decode(data, list[list[U8]], config.with_limit(8))


def test_stream_decoding_honors_limit() -> None:
    stream = io.BytesIO(encode(b'abcdef', Config().with_variable_int_encoding()))
    with pytest.raises(SizeLimitExceededError):
        decode_from_stream(stream, bytes, LIMIT_4)


@dataclass
class Empty:
    pass


LIMIT_16 = Config().with_limit(16)


@pytest.mark.parametrize('shape,item', [
    (list[None], None),
    (list[Empty], Empty()),
    (list[Annotated[list[U8], Array(0)]], []),
])
def test_items_that_take_no_space_round_trip_under_limit(shape, item) -> None:
    value = [item] * 8
    data = encode(value, LIMIT_16, shape=shape)
    # the fixed width length prefix and nothing else
    assert len(data) == 8
    assert decode(data, shape, LIMIT_16) == value


def test_items_that_take_no_space_count_against_the_limit() -> None:
    # 8 bytes of prefix leave room for 8 items, each item counts as one byte when checking the prefix
    with pytest.raises(SizeLimitExceededError):
        encode([None] * 9, LIMIT_16, shape=list[None])
    data = encode([None] * 9, shape=list[None])
    with pytest.raises(SizeLimitExceededError):
        decode(data, list[None], LIMIT_16)
    assert decode(data, list[None], LIMIT_16.with_limit(17)) == [None] * 9


def test_length_prefix_is_checked_with_the_item_size() -> None:
    # claims 3 f64 items (24 bytes), only 2 are present, the prefix alone is refused
    data = b'\x03' + encode([1.0, 2.0], shape=Annotated[list[float], Array(2)])
    config = Config().with_variable_int_encoding().with_limit(20)
    with pytest.raises(SizeLimitExceededError):
        decode(data, list[float], config)
    with pytest.raises(UnexpectedEndOfInputError):
        decode(data, list[float], config.with_no_limit())


def test_min_size() -> None:
    assert make_shape(None).min_size == 0
    assert make_shape(Empty).min_size == 0
    assert make_shape(U8).min_size == 1
    assert make_shape(float).min_size == 8
    assert make_shape(tuple[float, None, Annotated[float, F32]]).min_size == 12
    assert make_shape(Annotated[bytes, Array(4)]).min_size == 4
    assert make_shape(Annotated[list[float], Array(3)]).min_size == 24
    assert make_shape(list[float]).min_size == 1
