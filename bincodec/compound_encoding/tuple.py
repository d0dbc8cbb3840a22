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
There actually isn't a "format" per-se, the encoding of a fixed shape `(A, B, C)` is just the encoding of A
concatenated with B concatenated with C. The number of items is known by both sides, so it is not written.

Records (dataclasses, named tuples) are encoded the same way, their fields in declaration order.

>>> from bincodec.deserializer import Deserializer
>>> from bincodec.serializer import Serializer
>>> w = Writer(Serializer.build_bytes_serializer())
>>> values = ('foobar', False, b'test')
>>> encode_tuple(w, values, (Writer.write_str, Writer.write_bool, Writer.write_bytes))
>>> bytes(w.serializer.finalize()).hex()
'0600000000000000666f6f62617200040000000000000074657374'

Breakdown of the result:

    0600000000000000666f6f626172: 'foobar'
    00: False
    040000000000000074657374: b'test'

>>> data = bytes.fromhex('0600000000000000666f6f62617200040000000000000074657374')
>>> r = Reader(Deserializer.build_bytes_deserializer(data))
>>> decode_tuple(r, (Reader.read_str, Reader.read_bool, Reader.read_bytes))
('foobar', False, b'test')
"""

from collections.abc import Sequence
from typing import Any

from bincodec.exceptions import InvalidValueError
from bincodec.reader import Reader
from bincodec.writer import Writer

from . import Decoder, Encoder


def encode_tuple(writer: Writer, values: Sequence[Any], encoders: Sequence[Encoder[Any]]) -> None:
    if len(values) != len(encoders):
        raise InvalidValueError(f'expected {len(encoders)} items, got {len(values)}')
    with writer.nested():
        for value, encoder in zip(values, encoders):
            encoder(writer, value)


def decode_tuple(reader: Reader, decoders: Sequence[Decoder[Any]]) -> tuple[Any, ...]:
    with reader.nested():
        return tuple(decoder(reader) for decoder in decoders)
