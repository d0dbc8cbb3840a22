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
Records are classes with named fields in a fixed order: dataclasses and `NamedTuple` classes.

Fields are written one after the other in declaration order, nothing else is written, so adding, removing or
reordering fields changes the format.

>>> from dataclasses import dataclass
>>> from typing import Annotated
>>> from bincodec.shapes import U8, make_shape
>>> @dataclass
... class Point:
...     x: Annotated[int, U8]
...     y: Annotated[int, U8]
>>> shape = make_shape(Point)
>>> shape.encode(Point(1, 2)).hex()
'0102'
>>> shape.decode(b'\\x03\\x04')
Point(x=3, y=4)
"""

from __future__ import annotations

from typing import Any, TypeVar

from typing_extensions import override

from bincodec.exceptions import InvalidValueError
from bincodec.reader import Reader
from bincodec.writer import Writer

from .shape import Shape

R = TypeVar('R')


class RecordShape(Shape[R]):
    __slots__ = ('_class', '_fields')

    _class: type[R]
    # XXX: the order is important, `dict` keeps insertion order
    _fields: dict[str, Shape]

    def __init__(self, class_: type[R], fields: dict[str, Shape] | None = None) -> None:
        self._class = class_
        self._fields = {} if fields is None else dict(fields)

    def _set_fields(self, fields: dict[str, Shape]) -> None:
        """ Used when building a shape for a recursive type, the record is created before its fields are known.
        """
        self._fields = dict(fields)

    @property
    def record_class(self) -> type[R]:
        return self._class

    @property
    @override
    def min_size(self) -> int:
        return sum(field_shape.min_size for field_shape in self._fields.values())

    @override
    def _check_value(self, value: R, /) -> None:
        if not isinstance(value, self._class):
            raise InvalidValueError(f'expected {self._class.__name__} instance, got {type(value).__name__}')

    @override
    def _write(self, writer: Writer, value: R, /) -> None:
        with writer.nested():
            for field_name, field_shape in self._fields.items():
                field_shape.write(writer, getattr(value, field_name))

    @override
    def _read(self, reader: Reader, /) -> R:
        kwargs: dict[str, Any] = {}
        with reader.nested():
            for field_name, field_shape in self._fields.items():
                kwargs[field_name] = field_shape.read(reader)
        return self._class(**kwargs)

    def __repr__(self) -> str:
        return f'RecordShape({self._class.__name__})'
