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

from collections.abc import Callable, Collection, Iterable
from typing import Any, NamedTuple, TypeVar

from typing_extensions import override

from bincodec.exceptions import InvalidValueError
from bincodec.reader import Reader
from bincodec.writer import Writer

from .shape import Shape

T = TypeVar('T')


class Array(NamedTuple):
    """ Marker for fixed-size arrays, used as `Annotated[list[T], Array(4)]` or `Annotated[bytes, Array(32)]`.
    """
    length: int


class SeqShape(Shape[Collection[T]]):
    """ Variable length sequence: a length prefix and the items in iteration order.

    The `builder` is used to build the concrete collection when decoding (list, tuple, set, deque...).
    """

    __slots__ = ('_item', '_builder')

    _item: Shape[T]
    _builder: Callable[[Iterable[T]], Collection[T]]

    def __init__(self, item: Shape[T], builder: Callable[[Iterable[T]], Collection[T]] = list) -> None:
        self._item = item
        self._builder = builder

    @override
    def _check_value(self, value: Collection[T], /) -> None:
        if isinstance(value, (str, bytes)):
            raise InvalidValueError(f'expected a collection of items, got {type(value).__name__}')

    @override
    def _write(self, writer: Writer, value: Collection[T], /) -> None:
        writer.write_seq(value, self._item.write)

    @override
    def _read(self, reader: Reader, /) -> Collection[T]:
        return reader.read_seq(self._item.read, self._builder, min_item_size=self._item.min_size)

    def __repr__(self) -> str:
        return f'SeqShape({self._item!r})'


class ArrayShape(Shape[Collection[T]]):
    """ Fixed length sequence, the length is part of the shape and is not written.
    """

    __slots__ = ('_item', '_length', '_builder')

    _item: Shape[T]
    _length: int
    _builder: Callable[[Iterable[T]], Collection[T]]

    def __init__(self, item: Shape[T], length: int, builder: Callable[[Iterable[T]], Collection[T]] = list) -> None:
        if length < 0:
            raise ValueError('length cannot be negative')
        self._item = item
        self._length = length
        self._builder = builder

    @property
    @override
    def min_size(self) -> int:
        return self._length * self._item.min_size

    @override
    def _write(self, writer: Writer, value: Collection[T], /) -> None:
        writer.write_array(value, self._item.write, length=self._length)

    @override
    def _read(self, reader: Reader, /) -> Collection[T]:
        return reader.read_array(self._item.read, length=self._length, builder=self._builder)

    def __repr__(self) -> str:
        return f'ArrayShape({self._item!r}, {self._length})'


class FixedBytesShape(Shape[bytes]):
    """ Byte string with a fixed length, written as raw bytes without a prefix.
    """

    __slots__ = ('_length',)

    _length: int

    def __init__(self, length: int) -> None:
        self._length = length

    @property
    @override
    def min_size(self) -> int:
        return self._length

    @override
    def _check_value(self, value: Any, /) -> None:
        if not isinstance(value, (bytes, bytearray, memoryview)):
            raise InvalidValueError(f'expected a bytes-like value, got {type(value).__name__}')
        size = memoryview(value).nbytes
        if size != self._length:
            raise InvalidValueError(f'expected {self._length} bytes, got {size}')

    @override
    def _write(self, writer: Writer, value: bytes, /) -> None:
        writer.serializer.write_bytes(value)

    @override
    def _read(self, reader: Reader, /) -> bytes:
        data = reader.deserializer.read_bytes(self._length)
        if reader.borrow:
            return data  # type: ignore[return-value]
        return bytes(data)

    def __repr__(self) -> str:
        return f'FixedBytesShape({self._length})'
