# Copyright 2025 Hathor Labs
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#    http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

r"""
A collection is basically any value that has a known size and is iterable.

Layout: [N: length prefix][value_0]...[value_N-1]

>>> from bincodec.deserializer import Deserializer
>>> from bincodec.serializer import Serializer
>>> from bincodec.config import Config
>>> config = Config().with_variable_int_encoding()
>>> w = Writer(Serializer.build_bytes_serializer(), config)
>>> value = ['foobar', 'π', '😎', 'test']
>>> encode_collection(w, value, Writer.write_str)
>>> bytes(w.serializer.finalize()).hex()
'0406666f6f62617202cf8004f09f988e0474657374'

Breakdown of the result:

    04: 4 as a varint, the total length
    06666f6f626172: 'foobar' (with length prefix)
    02cf80: 'π' (with length prefix)
    04f09f988e: '😎' (with length prefix)
    0474657374: 'test' (with length prefix)

When decoding, the builder can be any compabile collection, in the previous example a `list` was encoded, but when
decoding a `tuple` could be used, it only matters that the collection can be initialized with an `Iterable[T]`.

>>> data = bytes.fromhex('0406666f6f62617202cf8004f09f988e0474657374')
>>> r = Reader(Deserializer.build_bytes_deserializer(data), config)
>>> decode_collection(r, Reader.read_str, tuple)
('foobar', 'π', '😎', 'test')
>>> r.deserializer.finalize()

With the default config the length prefix is a fixed 8-byte integer:

>>> w = Writer(Serializer.build_bytes_serializer())
>>> encode_collection(w, [1, 2], Writer.write_u8)
>>> bytes(w.serializer.finalize()).hex()
'02000000000000000102'

Arrays have a length that is known by both sides, so there is no prefix:

>>> w = Writer(Serializer.build_bytes_serializer())
>>> encode_array(w, [1, 2], Writer.write_u8, length=2)
>>> bytes(w.serializer.finalize()).hex()
'0102'
>>> decode_array(Reader(Deserializer.build_bytes_deserializer(b'\x01\x02')), Reader.read_u8, list, length=2)
[1, 2]
"""

from collections.abc import Callable, Iterable, Sized
from typing import TypeVar

from bincodec.exceptions import InvalidValueError, SequenceMustHaveLengthError
from bincodec.reader import Reader
from bincodec.writer import Writer

from . import Decoder, Encoder

T = TypeVar('T')
R = TypeVar('R')


def encode_collection(writer: Writer, values: Iterable[T], encoder: Encoder[T]) -> None:
    if not isinstance(values, Sized):
        raise SequenceMustHaveLengthError(f'{type(values).__name__} has no length')
    with writer.nested():
        writer.write_len(len(values))
        for value in values:
            encoder(writer, value)


def decode_collection(
    reader: Reader,
    decoder: Decoder[T],
    builder: Callable[[Iterable[T]], R],
    *,
    min_item_size: int = 1,
) -> R:
    with reader.nested():
        length = reader.read_len(min_item_size=min_item_size)
        return builder(decoder(reader) for _ in range(length))


def encode_array(writer: Writer, values: Iterable[T], encoder: Encoder[T], *, length: int) -> None:
    if not isinstance(values, Sized):
        raise SequenceMustHaveLengthError(f'{type(values).__name__} has no length')
    if len(values) != length:
        raise InvalidValueError(f'expected {length} items, got {len(values)}')
    with writer.nested():
        for value in values:
            encoder(writer, value)


def decode_array(reader: Reader, decoder: Decoder[T], builder: Callable[[Iterable[T]], R], *, length: int) -> R:
    with reader.nested():
        return builder(decoder(reader) for _ in range(length))
