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
Encoding a mapping is equivalent to encoding a collection of 2-tuples.

Layout: [N: length prefix][key_0][value_0]...[key_N-1][value_N-1]

>>> from bincodec.deserializer import Deserializer
>>> from bincodec.serializer import Serializer
>>> from bincodec.config import Config
>>> config = Config().with_variable_int_encoding()
>>> w = Writer(Serializer.build_bytes_serializer(), config)
>>> value = {
...     'foo': False,
...     'bar': True,
...     'foobar': True,
...     'baz': False,
... }
>>> encode_mapping(w, value, Writer.write_str, Writer.write_bool)
>>> bytes(w.serializer.finalize()).hex()
'0403666f6f00036261720106666f6f626172010362617a00'

Breakdown of the result:

    04: 4 as a varint, the total length
    03666f6f: 'foo' with length prefix
    00: False
    03626172: 'bar' with length prefix
    01: True
    06666f6f626172: 'foobar' with length prefix
    01: True
    0362617a: 'baz' with length prefix
    00: False

>>> data = bytes.fromhex('0403666f6f00036261720106666f6f626172010362617a00')
>>> r = Reader(Deserializer.build_bytes_deserializer(data), config)
>>> decode_mapping(r, Reader.read_str, Reader.read_bool, dict)
{'foo': False, 'bar': True, 'foobar': True, 'baz': False}
>>> r.deserializer.finalize()
"""

from collections.abc import Callable, Iterable, Mapping
from typing import TypeVar

from bincodec.reader import Reader
from bincodec.writer import Writer

from . import Decoder, Encoder

KT = TypeVar('KT')
VT = TypeVar('VT')
R = TypeVar('R', bound=Mapping)


def encode_mapping(
    writer: Writer,
    values_mapping: Mapping[KT, VT],
    key_encoder: Encoder[KT],
    value_encoder: Encoder[VT],
) -> None:
    with writer.nested():
        writer.write_len(len(values_mapping))
        for key, value in values_mapping.items():
            key_encoder(writer, key)
            value_encoder(writer, value)


def decode_mapping(
    reader: Reader,
    key_decoder: Decoder[KT],
    value_decoder: Decoder[VT],
    mapping_builder: Callable[[Iterable[tuple[KT, VT]]], R],
    *,
    min_item_size: int = 1,
) -> R:
    with reader.nested():
        size = reader.read_len(min_item_size=min_item_size)
        return mapping_builder(
            (key_decoder(reader), value_decoder(reader))
            for _ in range(size)
        )
