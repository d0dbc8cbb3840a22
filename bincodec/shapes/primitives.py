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
Shapes for the leaf entities of the wire format.

The module-level instances (`BOOL`, `U8`, ..., `F64`, `CHAR`, `STR`, `BYTES`, `UNIT`) are also the markers used with
`typing.Annotated` to pick a width other than the default one:

>>> from typing import Annotated
>>> from bincodec.shapes import make_shape
>>> make_shape(Annotated[int, U16]) is U16
True
>>> make_shape(int) is I64
True
"""

from typing import ClassVar

from typing_extensions import override

from bincodec.reader import Reader
from bincodec.types import Buffer
from bincodec.writer import Writer

from .shape import Shape


class BoolShape(Shape[bool]):
    @override
    def _write(self, writer: Writer, value: bool, /) -> None:
        writer.write_bool(value)

    @override
    def _read(self, reader: Reader, /) -> bool:
        return reader.read_bool()


class _IntShape(Shape[int]):
    """ Base class for integers with a fixed declared width and signedness.
    """

    # XXX: subclass must define these values:
    _bits: ClassVar[int]
    _signed: ClassVar[bool]

    @override
    def _write(self, writer: Writer, value: int, /) -> None:
        writer.write_int(value, bits=self._bits, signed=self._signed)

    @override
    def _read(self, reader: Reader, /) -> int:
        return reader.read_int(bits=self._bits, signed=self._signed)

    def __repr__(self) -> str:
        return f'{"I" if self._signed else "U"}{self._bits}'


class U8Shape(_IntShape):
    _bits = 8
    _signed = False


class U16Shape(_IntShape):
    _bits = 16
    _signed = False


class U32Shape(_IntShape):
    _bits = 32
    _signed = False


class U64Shape(_IntShape):
    _bits = 64
    _signed = False


class U128Shape(_IntShape):
    _bits = 128
    _signed = False


class I8Shape(_IntShape):
    _bits = 8
    _signed = True


class I16Shape(_IntShape):
    _bits = 16
    _signed = True


class I32Shape(_IntShape):
    _bits = 32
    _signed = True


class I64Shape(_IntShape):
    _bits = 64
    _signed = True


class I128Shape(_IntShape):
    _bits = 128
    _signed = True


class F32Shape(Shape[float]):
    @property
    @override
    def min_size(self) -> int:
        return 4

    @override
    def _write(self, writer: Writer, value: float, /) -> None:
        writer.write_f32(value)

    @override
    def _read(self, reader: Reader, /) -> float:
        return reader.read_f32()


class F64Shape(Shape[float]):
    @property
    @override
    def min_size(self) -> int:
        return 8

    @override
    def _write(self, writer: Writer, value: float, /) -> None:
        writer.write_f64(value)

    @override
    def _read(self, reader: Reader, /) -> float:
        return reader.read_f64()


class CharShape(Shape[str]):
    """ A single-character string, use as `Annotated[str, CHAR]`.
    """

    @override
    def _write(self, writer: Writer, value: str, /) -> None:
        writer.write_char(value)

    @override
    def _read(self, reader: Reader, /) -> str:
        return reader.read_char()


class StrShape(Shape[str]):
    @override
    def _write(self, writer: Writer, value: str, /) -> None:
        writer.write_str(value)

    @override
    def _read(self, reader: Reader, /) -> str:
        return reader.read_str()


class BytesShape(Shape[Buffer]):
    """ Byte blobs, decoded as `bytes`, or as a `memoryview` of the input when decoding with borrowing.
    """

    @override
    def _write(self, writer: Writer, value: Buffer, /) -> None:
        writer.write_bytes(value)

    @override
    def _read(self, reader: Reader, /) -> Buffer:
        return reader.read_bytes()


class UnitShape(Shape[None]):
    """ `None` as a value on its own (not as the absent case of an option), it takes no space.
    """

    @property
    @override
    def min_size(self) -> int:
        return 0

    @override
    def _write(self, writer: Writer, value: None, /) -> None:
        writer.write_unit()

    @override
    def _read(self, reader: Reader, /) -> None:
        return reader.read_unit()


BOOL = BoolShape()
U8 = U8Shape()
U16 = U16Shape()
U32 = U32Shape()
U64 = U64Shape()
U128 = U128Shape()
I8 = I8Shape()
I16 = I16Shape()
I32 = I32Shape()
I64 = I64Shape()
I128 = I128Shape()
F32 = F32Shape()
F64 = F64Shape()
CHAR = CharShape()
STR = StrShape()
BYTES = BytesShape()
UNIT = UnitShape()
