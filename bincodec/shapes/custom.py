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
Classes that know how to drive the `Writer`/`Reader` roles themselves.

A class implements `Encodable` by calling the writer/reader operations that match its shape, in a fixed order:

>>> from bincodec import decode, encode
>>> class Version:
...     def __init__(self, major: int, minor: int) -> None:
...         self.major = major
...         self.minor = minor
...     def encode_to(self, writer: Writer) -> None:
...         writer.write_u16(self.major)
...         writer.write_u16(self.minor)
...     @classmethod
...     def decode_from(cls, reader: Reader) -> 'Version':
...         return cls(reader.read_u16(), reader.read_u16())
>>> encode(Version(1, 2)).hex()
'01000200'
>>> version = decode(bytes.fromhex('01000200'), Version)
>>> version.major, version.minor
(1, 2)
"""

from __future__ import annotations

from typing import Protocol, TypeVar, runtime_checkable

from typing_extensions import Self, override

from bincodec.exceptions import InvalidValueError
from bincodec.reader import Reader
from bincodec.writer import Writer

from .shape import Shape

C = TypeVar('C', bound='Encodable')


@runtime_checkable
class Encodable(Protocol):
    def encode_to(self, writer: Writer, /) -> None:
        ...

    @classmethod
    def decode_from(cls, reader: Reader, /) -> Self:
        ...


def is_encodable_class(type_: object) -> bool:
    return (
        isinstance(type_, type)
        and callable(getattr(type_, 'encode_to', None))
        and callable(getattr(type_, 'decode_from', None))
    )


class EncodableShape(Shape[C]):
    __slots__ = ('_class',)

    _class: type[C]

    def __init__(self, class_: type[C]) -> None:
        if not is_encodable_class(class_):
            raise TypeError(f'{class_} does not implement encode_to/decode_from')
        self._class = class_

    @property
    @override
    def min_size(self) -> int:
        # nothing is known about what the class writes
        return 0

    @override
    def _check_value(self, value: C, /) -> None:
        if not isinstance(value, self._class):
            raise InvalidValueError(f'expected {self._class.__name__} instance, got {type(value).__name__}')

    @override
    def _write(self, writer: Writer, value: C, /) -> None:
        value.encode_to(writer)

    @override
    def _read(self, reader: Reader, /) -> C:
        return self._class.decode_from(reader)

    def __repr__(self) -> str:
        return f'EncodableShape({self._class.__name__})'
