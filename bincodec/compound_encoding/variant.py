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
A tagged union (enum) is the index of its variant followed by the payload of that variant, if it has one.

Layout: [index: u32 as per the active int encoding][payload]

>>> from bincodec.deserializer import Deserializer
>>> from bincodec.exceptions import InvalidTagEncodingError
>>> from bincodec.serializer import Serializer
>>> w = Writer(Serializer.build_bytes_serializer())
>>> encode_variant(w, 1, 'foo', Writer.write_str)
>>> bytes(w.serializer.finalize()).hex()
'010000000300000000000000666f6f'

Decoding needs one decoder per variant, the index picks which one builds the value:

>>> decoders = [lambda r: 'nothing', Reader.read_str, Reader.read_u8]
>>> r = Reader(Deserializer.build_bytes_deserializer(bytes.fromhex('010000000300000000000000666f6f')))
>>> decode_variant(r, decoders)
'foo'

>>> r = Reader(Deserializer.build_bytes_deserializer(bytes.fromhex('63000000')))
>>> try:
...     decode_variant(r, decoders)
... except InvalidTagEncodingError as e:
...     print(e)
variant index 99 out of range for 3 variants
"""

from collections.abc import Sequence
from typing import Optional, TypeVar

from bincodec.reader import Reader
from bincodec.writer import Writer

from . import Decoder, Encoder

T = TypeVar('T')


def encode_variant(writer: Writer, index: int, value: Optional[T], encoder: Optional[Encoder[T]]) -> None:
    writer.write_variant_index(index)
    if encoder is not None:
        with writer.nested():
            encoder(writer, value)  # type: ignore[arg-type]


def decode_variant(reader: Reader, decoders: Sequence[Decoder[T]]) -> T:
    index = reader.read_variant_index(len(decoders))
    with reader.nested():
        return decoders[index](reader)
