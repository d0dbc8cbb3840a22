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

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Any

from typing_extensions import override

from bincodec.exceptions import InvalidValueError
from bincodec.reader import Reader
from bincodec.writer import Writer

from .shape import Shape


class TupleShape(Shape[tuple[Any, ...]]):
    """ Heterogeneous fixed-size tuple, like `tuple[int, str, bool]`, no length is written.
    """

    __slots__ = ('_items',)

    _items: tuple[Shape, ...]

    def __init__(self, items: Iterable[Shape]) -> None:
        self._items = tuple(items)

    @property
    @override
    def min_size(self) -> int:
        return sum(item.min_size for item in self._items)

    @override
    def _check_value(self, value: tuple[Any, ...], /) -> None:
        if not isinstance(value, Sequence) or isinstance(value, (str, bytes)):
            raise InvalidValueError(f'expected a tuple, got {type(value).__name__}')

    @override
    def _write(self, writer: Writer, value: tuple[Any, ...], /) -> None:
        writer.write_tuple(value, tuple(item.write for item in self._items))

    @override
    def _read(self, reader: Reader, /) -> tuple[Any, ...]:
        return reader.read_tuple(tuple(item.read for item in self._items))

    def __repr__(self) -> str:
        return f'TupleShape({list(self._items)!r})'
