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

from collections.abc import Callable, Iterable, Mapping
from typing import TypeVar

from typing_extensions import override

from bincodec.exceptions import InvalidValueError
from bincodec.reader import Reader
from bincodec.writer import Writer

from .shape import Shape

K = TypeVar('K')
V = TypeVar('V')


class MapShape(Shape[Mapping[K, V]]):
    """ Length prefix followed by key/value pairs in iteration order.

    When decoding, a key that shows up more than once keeps its last value (like building a `dict`).
    """

    __slots__ = ('_key', '_value', '_builder')

    _key: Shape[K]
    _value: Shape[V]
    _builder: Callable[[Iterable[tuple[K, V]]], Mapping[K, V]]

    def __init__(
        self,
        key: Shape[K],
        value: Shape[V],
        builder: Callable[[Iterable[tuple[K, V]]], Mapping[K, V]] = dict,
    ) -> None:
        self._key = key
        self._value = value
        self._builder = builder

    @override
    def _check_value(self, value: Mapping[K, V], /) -> None:
        if not isinstance(value, Mapping):
            raise InvalidValueError(f'expected a mapping, got {type(value).__name__}')

    @override
    def _write(self, writer: Writer, value: Mapping[K, V], /) -> None:
        writer.write_map(value, self._key.write, self._value.write)

    @override
    def _read(self, reader: Reader, /) -> Mapping[K, V]:
        min_item_size = self._key.min_size + self._value.min_size
        return reader.read_map(self._key.read, self._value.read, self._builder, min_item_size=min_item_size)

    def __repr__(self) -> str:
        return f'MapShape({self._key!r}, {self._value!r})'
