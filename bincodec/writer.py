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

from collections.abc import Iterable, Iterator, Mapping, Sequence
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any, Optional, TypeVar

from .config import DEFAULT_CONFIG, Config
from .encoding.bool import encode_bool
from .encoding.char import char_to_code_point
from .encoding.float import encode_float
from .encoding.int import encode_int, int_bounds
from .encoding.utf8 import to_utf8
from .encoding.varint import encode_varint, zigzag_encode
from .exceptions import DepthLimitExceededError, InvalidValueError
from .serializer import Serializer
from .types import Buffer

if TYPE_CHECKING:
    from .compound_encoding import Encoder

T = TypeVar('T')
KT = TypeVar('KT')
VT = TypeVar('VT')


class Writer:
    """ Writer role: turns a sequence of visit calls into bytes, according to a `Config`.

    Application values drive the writer by calling exactly the operations that match their shape, in a fixed order.
    The writer doesn't reorder or buffer anything, each call goes straight to the underlying `Serializer`, which is
    where the size limit (if any) is enforced.

    Integers are written with their full width when the config uses fixed int encoding, with the variable-length
    encoding (see `bincodec.encoding.varint`) otherwise. 8-bit integers are always written as a single byte. Length
    prefixes are u64 and variant indexes are u32, both follow the active int encoding.
    """

    __slots__ = ('serializer', 'config', '_depth')

    def __init__(self, serializer: Serializer, config: Config = DEFAULT_CONFIG) -> None:
        self.serializer = serializer
        self.config = config
        self._depth = 0

    def cur_pos(self) -> int:
        return self.serializer.cur_pos()

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

    def write_bool(self, value: bool) -> None:
        encode_bool(self.serializer, value)

    def write_int(self, value: int, *, bits: int, signed: bool) -> None:
        if not isinstance(value, int) or isinstance(value, bool):
            raise InvalidValueError(f'expected int, got {type(value).__name__}')
        lower, upper = int_bounds(bits=bits, signed=signed)
        if not lower <= value <= upper:
            kind = 'i' if signed else 'u'
            raise InvalidValueError(f'{value} is out of range for {kind}{bits}')
        if bits == 8 or not self.config.is_varint:
            encode_int(self.serializer, value, length=bits // 8, signed=signed, byteorder=self.config.byteorder)
        else:
            unsigned_value = zigzag_encode(value) if signed else value
            encode_varint(self.serializer, unsigned_value, byteorder=self.config.byteorder)

    def write_u8(self, value: int) -> None:
        self.write_int(value, bits=8, signed=False)

    def write_u16(self, value: int) -> None:
        self.write_int(value, bits=16, signed=False)

    def write_u32(self, value: int) -> None:
        self.write_int(value, bits=32, signed=False)

    def write_u64(self, value: int) -> None:
        self.write_int(value, bits=64, signed=False)

    def write_u128(self, value: int) -> None:
        self.write_int(value, bits=128, signed=False)

    def write_i8(self, value: int) -> None:
        self.write_int(value, bits=8, signed=True)

    def write_i16(self, value: int) -> None:
        self.write_int(value, bits=16, signed=True)

    def write_i32(self, value: int) -> None:
        self.write_int(value, bits=32, signed=True)

    def write_i64(self, value: int) -> None:
        self.write_int(value, bits=64, signed=True)

    def write_i128(self, value: int) -> None:
        self.write_int(value, bits=128, signed=True)

    def write_f32(self, value: float) -> None:
        encode_float(self.serializer, value, length=4, byteorder=self.config.byteorder)

    def write_f64(self, value: float) -> None:
        encode_float(self.serializer, value, length=8, byteorder=self.config.byteorder)

    def write_char(self, value: str) -> None:
        self.write_u32(char_to_code_point(value))

    def write_len(self, length: int) -> None:
        """Write a length prefix, it is always followed by that many bytes or items.

        Each item is counted as at least one byte against the size limit, the same check `Reader.read_len` makes.
        """
        self.write_u64(length)
        self.serializer.check_allocation(length)

    def write_str(self, value: str) -> None:
        data = to_utf8(value)
        self.write_len(len(data))
        self.serializer.write_bytes(data)

    def write_bytes(self, value: Buffer) -> None:
        if not isinstance(value, (bytes, bytearray, memoryview)):
            raise InvalidValueError(f'expected a bytes-like value, got {type(value).__name__}')
        view = memoryview(value)
        self.write_len(view.nbytes)
        self.serializer.write_bytes(view)

    def write_unit(self) -> None:
        """Unit values (`None`, empty records) take no space."""
        pass

    def write_variant_index(self, index: int) -> None:
        self.write_u32(index)

    # composites

    def write_option(self, value: Optional[T], encoder: Encoder[T]) -> None:
        from .compound_encoding.optional import encode_optional
        encode_optional(self, value, encoder)

    def write_seq(self, values: Iterable[T], encoder: Encoder[T]) -> None:
        from .compound_encoding.collection import encode_collection
        encode_collection(self, values, encoder)

    def write_array(self, values: Sequence[T], encoder: Encoder[T], *, length: int) -> None:
        from .compound_encoding.collection import encode_array
        encode_array(self, values, encoder, length=length)

    def write_map(self, values: Mapping[KT, VT], key_encoder: Encoder[KT], value_encoder: Encoder[VT]) -> None:
        from .compound_encoding.mapping import encode_mapping
        encode_mapping(self, values, key_encoder, value_encoder)

    def write_tuple(self, values: Sequence[Any], encoders: Sequence[Encoder[Any]]) -> None:
        from .compound_encoding.tuple import encode_tuple
        encode_tuple(self, values, encoders)

    def write_variant(self, index: int, value: T | None = None, encoder: Encoder[T] | None = None) -> None:
        """Write a variant index followed by its payload, a variant without payload takes no encoder."""
        from .compound_encoding.variant import encode_variant
        encode_variant(self, index, value, encoder)
