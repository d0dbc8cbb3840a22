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

from typing import TypeVar

from typing_extensions import override

from bincodec.reader import Reader
from bincodec.writer import Writer

from .shape import Shape

V = TypeVar('V')


class OptionShape(Shape[V | None]):
    """ Represents a value that is either `V` or `None`.
    """

    __slots__ = ('_value',)

    _value: Shape[V]

    def __init__(self, shape: Shape[V]) -> None:
        self._value = shape

    @override
    def _write(self, writer: Writer, value: V | None, /) -> None:
        writer.write_option(value, self._value.write)

    @override
    def _read(self, reader: Reader, /) -> V | None:
        return reader.read_option(self._value.read)

    def __repr__(self) -> str:
        return f'OptionShape({self._value!r})'
