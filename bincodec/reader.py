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

from collections.abc import Callable, Iterable, Iterator, Mapping, Sequence
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any, Optional, TypeVar

from .config import DEFAULT_CONFIG, Config
from .deserializer import Deserializer
from .encoding.bool import decode_bool
from .encoding.char import code_point_to_char
from .encoding.float import decode_float
from .encoding.int import decode_int
from .encoding.utf8 import from_utf8
from .encoding.varint import decode_varint, zigzag_decode
from .exceptions import DepthLimitExceededError, InvalidVariantIndexError
from .types import Buffer

if TYPE_CHECKING:
    from .compound_encoding import Decoder

T = TypeVar('T')
KT = TypeVar('KT')
VT = TypeVar('VT')
R = TypeVar('R')


class Reader:
    """ Reader role: the mirror of `bincodec.Writer`, it consumes bytes in the order the caller asks for values.

    For sequences and maps the length prefix is decoded and checked against the size limit before any item is decoded.
    For tagged unions the variant index is decoded and checked against the number of variants before dispatching.

    When `borrow=True` byte payloads are returned as `memoryview` slices of the input buffer instead of copies, this
    requires a deserializer that supports it (decoding from a byte slice). Strings are always new `str` objects.
    """

    __slots__ = ('deserializer', 'config', 'borrow', '_depth')

    def __init__(self, deserializer: Deserializer, config: Config = DEFAULT_CONFIG, *, borrow: bool = False) -> None:
        if borrow and not deserializer.supports_borrowing:
            raise TypeError(f'{type(deserializer).__name__} cannot lend its buffer, use borrow=False')
        self.deserializer = deserializer
        self.config = config
        self.borrow = borrow
        self._depth = 0

    def is_empty(self) -> bool:
        return self.deserializer.is_empty()

    @contextmanager
    def nested(self) -> Iterator[None]:
        """Used by composite values around their contents, so the nesting depth can be bounded."""
        max_depth = self.config.max_depth
        if max_depth is not None and self._depth >= max_depth:
            raise DepthLimitExceededError(f'nesting deeper than {max_depth} levels')
        self._depth += 1
        try:
            yield
        finally:
            self._depth -= 1

    # primitives

    def read_bool(self) -> bool:
        return decode_bool(self.deserializer)

    def read_int(self, *, bits: int, signed: bool) -> int:
        if bits == 8 or not self.config.is_varint:
            return decode_int(self.deserializer, length=bits // 8, signed=signed, byteorder=self.config.byteorder)
        value = decode_varint(self.deserializer, byteorder=self.config.byteorder, max_bits=bits)
        return zigzag_decode(value) if signed else value

    def read_u8(self) -> int:
        return self.read_int(bits=8, signed=False)

    def read_u16(self) -> int:
        return self.read_int(bits=16, signed=False)

    def read_u32(self) -> int:
        return self.read_int(bits=32, signed=False)

    def read_u64(self) -> int:
        return self.read_int(bits=64, signed=False)

    def read_u128(self) -> int:
        return self.read_int(bits=128, signed=False)

    def read_i8(self) -> int:
        return self.read_int(bits=8, signed=True)

    def read_i16(self) -> int:
        return self.read_int(bits=16, signed=True)

    def read_i32(self) -> int:
        return self.read_int(bits=32, signed=True)

    def read_i64(self) -> int:
        return self.read_int(bits=64, signed=True)

    def read_i128(self) -> int:
        return self.read_int(bits=128, signed=True)

    def read_f32(self) -> float:
        return decode_float(self.deserializer, length=4, byteorder=self.config.byteorder)

    def read_f64(self) -> float:
        return decode_float(self.deserializer, length=8, byteorder=self.config.byteorder)

    def read_char(self) -> str:
        return code_point_to_char(self.read_u32())

    def read_len(self, *, min_item_size: int = 1) -> int:
        """Read a length prefix, refusing it if its items would need more than the remaining size budget.

        `min_item_size` is the least number of bytes an item takes, items that take no space still count as one byte.
        """
        length = self.read_u64()
        self.deserializer.check_allocation(length * max(min_item_size, 1))
        return length

    def read_str(self) -> str:
        length = self.read_len()
        return from_utf8(self.deserializer.read_bytes(length))

    def read_bytes(self) -> Buffer:
        """Read a byte blob, a borrowed `memoryview` when this reader borrows, a new `bytes` otherwise."""
        length = self.read_len()
        data = self.deserializer.read_bytes(length)
        if self.borrow:
            return data
        return bytes(data)

    def read_byte_buf(self) -> bytes:
        """Read a byte blob that is always an owned copy, regardless of borrowing."""
        length = self.read_len()
        return bytes(self.deserializer.read_bytes(length))

    def read_unit(self) -> None:
        return None

    def read_variant_index(self, variant_count: int) -> int:
        index = self.read_u32()
        if index >= variant_count:
            raise InvalidVariantIndexError(index, variant_count)
        return index

    # composites

    def read_option(self, decoder: Decoder[T]) -> Optional[T]:
        from .compound_encoding.optional import decode_optional
        return decode_optional(self, decoder)

    def read_seq(
        self,
        decoder: Decoder[T],
        builder: Callable[[Iterable[T]], R] = list,  # type: ignore[assignment]
        *,
        min_item_size: int = 1,
    ) -> R:
        from .compound_encoding.collection import decode_collection
        return decode_collection(self, decoder, builder, min_item_size=min_item_size)

    def read_array(
        self,
        decoder: Decoder[T],
        *,
        length: int,
        builder: Callable[[Iterable[T]], R] = list,  # type: ignore[assignment]
    ) -> R:
        from .compound_encoding.collection import decode_array
        return decode_array(self, decoder, builder, length=length)

    def read_map(
        self,
        key_decoder: Decoder[KT],
        value_decoder: Decoder[VT],
        builder: Callable[[Iterable[tuple[KT, VT]]], Mapping[KT, VT]] = dict,
        *,
        min_item_size: int = 1,
    ) -> Mapping[KT, VT]:
        from .compound_encoding.mapping import decode_mapping
        return decode_mapping(self, key_decoder, value_decoder, builder, min_item_size=min_item_size)

    def read_tuple(self, decoders: Sequence[Decoder[Any]]) -> tuple[Any, ...]:
        from .compound_encoding.tuple import decode_tuple
        return decode_tuple(self, decoders)

    def read_variant(self, decoders: Sequence[Decoder[T]]) -> T:
        """Read a variant index and dispatch to the decoder of that variant, which builds the final value."""
        from .compound_encoding.variant import decode_variant
        return decode_variant(self, decoders)
