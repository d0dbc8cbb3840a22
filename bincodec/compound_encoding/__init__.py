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

"""
This module was made to hold compound encoding implementations.

Compound encoders are encoders that are generic in some way and will delegate the encoding of some portion to another
encoder. For example a `value: Optional[T]` encoder is prepared to encode the value and delegate the rest to an encoder
that knows how to encode `T`.

Unlike the simple encoders in `bincodec.encoding`, compound encoders work on a `Writer`/`Reader` instead of a bare
`Serializer`/`Deserializer`, because length prefixes and variant indexes follow the active `Config`, and because they
take part in the nesting depth accounting.

The general organization should be that each submodule `x` deals with a single kind of composite and look like this:

    def encode_x(writer: Writer, value: ValueType, ...encoders...) -> None:
        ...

    def decode_x(reader: Reader, ...decoders...) -> ValueType:
        ...

Any callable with the right signature is an encoder/decoder, including the unbound `Writer.write_*` and
`Reader.read_*` methods, for example `Writer.write_str` and `Reader.read_str`.
"""

from typing import Protocol, TypeVar

from bincodec.reader import Reader
from bincodec.writer import Writer

T_co = TypeVar('T_co', covariant=True)
T_contra = TypeVar('T_contra', contravariant=True)


class Decoder(Protocol[T_co]):
    def __call__(self, reader: Reader, /) -> T_co:
        ...


class Encoder(Protocol[T_contra]):
    def __call__(self, writer: Writer, value: T_contra, /) -> None:
        ...
