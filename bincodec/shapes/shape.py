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

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Generic, TypeVar, final

from bincodec.reader import Reader
from bincodec.writer import Writer

if TYPE_CHECKING:
    from bincodec.config import Config

T = TypeVar('T')


class Shape(ABC, Generic[T]):
    """ This class is used to model how values of a known Python type are driven through the `Writer`/`Reader` roles.

    A shape is the "type declares how its fields map onto the traversal" collaborator: the core only ever sees the
    visit calls that `_write` and `_read` make, it has no knowledge of the Python types involved.

    Shapes are immutable and can be shared freely.
    """

    # XXX: subclasses must override this if they need any properties
    __slots__ = ()

    @final
    @staticmethod
    def from_type(type_: Any, /) -> Shape:
        """ Build a shape for the given type annotation, see `bincodec.shapes.make_shape`.
        """
        from bincodec.shapes.resolve import make_shape
        return make_shape(type_)

    @property
    def min_size(self) -> int:
        """ Least number of bytes a value of this shape can take under any config.

        Used to check length prefixes against the size limit before decoding the items, shapes that can take no space
        at all (unit, empty tuples and records, or whatever a hand-written driver does) must return 0.
        """
        return 1

    @final
    def write(self, writer: Writer, value: T, /) -> None:
        """ Drive the writer with the given value.

        Can be used directly as an `Encoder`, which is how compound shapes delegate to their inner shapes.
        """
        # XXX: subclasses must implement Shape._write, not Shape.write
        self._check_value(value)
        self._write(writer, value)

    @final
    def read(self, reader: Reader, /) -> T:
        """ Rebuild a value by asking the reader for exactly what `write` produces.

        Can be used directly as a `Decoder`.
        """
        # XXX: subclasses must implement Shape._read, not Shape.read
        return self._read(reader)

    @final
    def encode(self, value: T, /, config: Config | None = None) -> bytes:
        """ Shortcut for `bincodec.encode(value, config, shape=self)`.
        """
        from bincodec.api import encode
        return encode(value, config, shape=self)

    @final
    def decode(self, data: bytes, /, config: Config | None = None) -> T:
        """ Shortcut for `bincodec.decode(data, self, config)`.
        """
        from bincodec.api import decode
        return decode(data, self, config)

    def _check_value(self, value: T, /) -> None:
        """ Shallow check that the value can be written, should raise `InvalidValueError` otherwise.

        Primitive writes already validate their input, so only shapes that rely on the Python type of the value (for
        example to pick a variant or read attributes) need to implement this.
        """
        pass

    @abstractmethod
    def _write(self, writer: Writer, value: T, /) -> None:
        raise NotImplementedError

    @abstractmethod
    def _read(self, reader: Reader, /) -> T:
        raise NotImplementedError

    def __repr__(self) -> str:
        return type(self).__name__
