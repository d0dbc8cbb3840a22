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
An optional value is a 1-byte discriminant followed by the value when there is one.

Layout:

    [0x00] when None
    [0x01][value] when not None

Any other discriminant is invalid.

>>> from bincodec.deserializer import Deserializer
>>> from bincodec.serializer import Serializer
>>> from bincodec.config import Config
>>> config = Config().with_variable_int_encoding()
>>> w = Writer(Serializer.build_bytes_serializer(), config)
>>> encode_optional(w, 'foobar', Writer.write_str)
>>> bytes(w.serializer.finalize()).hex()
'0106666f6f626172'

>>> w = Writer(Serializer.build_bytes_serializer(), config)
>>> encode_optional(w, None, Writer.write_str)
>>> bytes(w.serializer.finalize()).hex()
'00'

>>> r = Reader(Deserializer.build_bytes_deserializer(bytes.fromhex('0106666f6f626172')), config)
>>> decode_optional(r, Reader.read_str)
'foobar'
>>> r.deserializer.finalize()

>>> r = Reader(Deserializer.build_bytes_deserializer(bytes.fromhex('00')), config)
>>> str(decode_optional(r, Reader.read_str))
'None'
>>> r.deserializer.finalize()

>>> r = Reader(Deserializer.build_bytes_deserializer(bytes.fromhex('02')), config)
>>> try:
...     decode_optional(r, Reader.read_str)
... except InvalidTagEncodingError as e:
...     print(e)
invalid option tag: 0x2
"""

from typing import Optional, TypeVar

from bincodec.exceptions import InvalidTagEncodingError
from bincodec.reader import Reader
from bincodec.writer import Writer

from . import Decoder, Encoder

T = TypeVar('T')

NONE_TAG = 0x00
SOME_TAG = 0x01


def encode_optional(writer: Writer, value: Optional[T], encoder: Encoder[T]) -> None:
    if value is None:
        writer.write_u8(NONE_TAG)
    else:
        writer.write_u8(SOME_TAG)
        with writer.nested():
            encoder(writer, value)


def decode_optional(reader: Reader, decoder: Decoder[T]) -> Optional[T]:
    tag = reader.read_u8()
    if tag == NONE_TAG:
        return None
    elif tag == SOME_TAG:
        with reader.nested():
            return decoder(reader)
    else:
        raise InvalidTagEncodingError(tag, f'invalid option tag: {tag:#x}')
