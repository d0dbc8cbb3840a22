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
Tagged unions: the variant index (0-based, in declaration order) followed by the payload of the variant.

Python doesn't have a native tagged union, two forms are supported:

- `Enum` classes, where every member is a variant without payload;
- unions of classes, like `Circle | Square`, where the class of the value picks the variant and the value itself is
  the payload.

>>> from enum import Enum
>>> from bincodec.shapes import make_shape
>>> class Color(Enum):
...     RED = 'red'
...     GREEN = 'green'
...     BLUE = 'blue'
>>> shape = make_shape(Color)
>>> shape.encode(Color.BLUE).hex()
'02000000'
>>> shape.decode(bytes.fromhex('01000000'))
<Color.GREEN: 'green'>
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from enum import Enum
from typing import Any, TypeVar

from typing_extensions import override

from bincodec.exceptions import InvalidValueError
from bincodec.reader import Reader
from bincodec.writer import Writer

from .shape import Shape

E = TypeVar('E', bound=Enum)


class EnumShape(Shape[E]):
    """ Enum members are unit variants, the payload is empty and only the index is written.
    """

    __slots__ = ('_enum_class', '_members', '_indexes')

    _enum_class: type[E]
    _members: tuple[E, ...]
    _indexes: dict[E, int]

    def __init__(self, enum_class: type[E]) -> None:
        self._enum_class = enum_class
        # XXX: iterating an Enum skips aliases, so each index maps to exactly one member
        self._members = tuple(enum_class)
        self._indexes = {member: index for index, member in enumerate(self._members)}

    @override
    def _check_value(self, value: E, /) -> None:
        if not isinstance(value, self._enum_class):
            raise InvalidValueError(f'expected {self._enum_class.__name__}, got {type(value).__name__}')

    @override
    def _write(self, writer: Writer, value: E, /) -> None:
        writer.write_variant(self._indexes[value])

    @override
    def _read(self, reader: Reader, /) -> E:
        index = reader.read_variant_index(len(self._members))
        return self._members[index]

    def __repr__(self) -> str:
        return f'EnumShape({self._enum_class.__name__})'


class UnionShape(Shape[Any]):
    """ Union of distinct classes, each class is a variant and its shape encodes the payload.
    """

    __slots__ = ('_classes', '_variants')

    _classes: tuple[type, ...]
    _variants: tuple[Shape, ...]

    def __init__(self, variants: Iterable[tuple[type, Shape]]) -> None:
        pairs = list(variants)
        self._classes = tuple(class_ for class_, _ in pairs)
        self._variants = tuple(shape for _, shape in pairs)
        if len(set(self._classes)) != len(self._classes):
            raise TypeError('union variants must have distinct classes')

    @property
    def variant_classes(self) -> Sequence[type]:
        return self._classes

    def _index_of(self, value: Any) -> int:
        value_class = type(value)
        # exact match first, so that `bool` is not taken for `int` when both are variants
        for index, class_ in enumerate(self._classes):
            if value_class is class_:
                return index
        for index, class_ in enumerate(self._classes):
            if isinstance(value, class_):
                return index
        raise InvalidValueError(f'{value_class.__name__} is not a variant of this union')

    @override
    def _write(self, writer: Writer, value: Any, /) -> None:
        index = self._index_of(value)
        writer.write_variant(index, value, self._variants[index].write)

    @override
    def _read(self, reader: Reader, /) -> Any:
        return reader.read_variant([variant.read for variant in self._variants])

    def __repr__(self) -> str:
        return f'UnionShape({[class_.__name__ for class_ in self._classes]!r})'
