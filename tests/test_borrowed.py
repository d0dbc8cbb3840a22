import io
from dataclasses import dataclass
from typing import Annotated

import pytest

from bincodec import (
    Config,
    IoFailureError,
    Reader,
    UnexpectedEndOfInputError,
    decode,
    decode_borrowed,
    decode_from_stream,
    encode,
    encode_into,
)
from bincodec.deserializer import Deserializer
from bincodec.shapes import U8, Array

VARINT = Config().with_variable_int_encoding()


@dataclass
class Message:
    kind: Annotated[int, U8]
    payload: bytes
    digest: Annotated[bytes, Array(2)]
    text: str


MESSAGE = Message(1, b'hello', b'\xaa\xbb', 'hi')


def test_owned_decoding_copies() -> None:
    data = bytearray(encode(MESSAGE, VARINT))
    message = decode(data, Message, VARINT)
    assert type(message.payload) is bytes
    assert type(message.digest) is bytes
    data[3] = ord('j')
    assert message.payload == b'hello'


def test_borrowed_decoding_shares_the_input() -> None:
    data = bytearray(encode(MESSAGE, VARINT))
    message = decode_borrowed(data, Message, VARINT)
    assert isinstance(message.payload, memoryview)
    assert isinstance(message.digest, memoryview)
    assert isinstance(message.text, str)
    assert message.payload == b'hello'
    # the view reflects the underlying buffer
    data[2] = ord('j')
    assert bytes(message.payload) == b'jello'


def test_borrowing_needs_a_slice_source() -> None:
    deserializer = Deserializer.build_stream_deserializer(io.BytesIO(b''))
    with pytest.raises(TypeError):
        Reader(deserializer, borrow=True)


def test_stream_reads_exactly_one_value() -> None:
    stream = io.BytesIO(encode(MESSAGE, VARINT) + encode(MESSAGE, VARINT) + b'rest')
    assert decode_from_stream(stream, Message, VARINT) == MESSAGE
    assert decode_from_stream(stream, Message, VARINT) == MESSAGE
    assert stream.read() == b'rest'


def test_stream_decoding_is_owned() -> None:
    message = decode_from_stream(io.BytesIO(encode(MESSAGE)), Message)
    assert type(message.payload) is bytes


def test_encode_into_stream() -> None:
    stream = io.BytesIO()
    encode_into(MESSAGE, stream, VARINT)
    assert stream.getvalue() == encode(MESSAGE, VARINT)


class _BrokenStream(io.RawIOBase):
    def readable(self) -> bool:
        return True

    def writable(self) -> bool:
        return True

    def readinto(self, buffer) -> int:
        raise OSError('disk on fire')

    def write(self, data) -> int:
        raise OSError('disk on fire')


def test_io_failures_are_wrapped() -> None:
    with pytest.raises(IoFailureError) as exc_info:
        decode_from_stream(_BrokenStream(), Message)
    assert isinstance(exc_info.value.__cause__, OSError)
    with pytest.raises(IoFailureError):
        encode_into(MESSAGE, _BrokenStream())


def test_borrowed_views_are_read_only() -> None:
    data = bytearray(encode(MESSAGE, VARINT))
    message = decode_borrowed(data, Message, VARINT)
    assert message.payload.readonly
    with pytest.raises(TypeError):
        message.payload[0] = ord('j')
    assert data == encode(MESSAGE, VARINT)


def test_borrowed_bytes_can_be_hashed() -> None:
    keys = encode(frozenset({b'a', b'b'}), shape=frozenset[bytes])
    assert decode_borrowed(bytearray(keys), frozenset[bytes]) == frozenset({b'a', b'b'})
    mapping = encode({b'a': 1, b'b': 2}, shape=dict[bytes, int])
    decoded = decode_borrowed(bytearray(mapping), dict[bytes, int])
    assert decoded == {b'a': 1, b'b': 2}
    assert all(isinstance(key, memoryview) for key in decoded)


def test_truncated_stream() -> None:
    data = encode(MESSAGE, VARINT)
    with pytest.raises(UnexpectedEndOfInputError):
        decode_from_stream(io.BytesIO(data[:-1]), Message, VARINT)
    with pytest.raises(UnexpectedEndOfInputError):
        decode_from_stream(io.BytesIO(b''), Message, VARINT)
