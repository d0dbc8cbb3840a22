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
Size-limit tracking, implemented as adapters that wrap any serializer or deserializer.

Every byte goes through the adapter, so the accounting naturally covers nested values: a sequence of sequences is
checked at every level. Checks happen before the inner serializer/deserializer is touched, so a write that would go
over the limit writes nothing and a read that would go over the limit reads nothing.

Length prefixes are checked as soon as they are known: `check_allocation(n)` refuses a prefix for `n` items when fewer
than `n` bytes are left. Both sides make the same check at the same position, so whatever was written under a limit
can be read back under that limit, including sequences of items that take no space.

>>> se = Serializer.build_bytes_serializer().with_max_bytes(4)
>>> se.write_bytes(b'abc')
>>> try:
...     se.write_bytes(b'de')
... except SizeLimitExceededError as e:
...     print(e)
size limit of 4 bytes exceeded
>>> bytes(se.finalize())
b'abc'

>>> de = Deserializer.build_bytes_deserializer(b'abcdef').with_max_bytes(4)
>>> bytes(de.read_bytes(2))
b'ab'
>>> try:
...     de.check_allocation(3)
... except SizeLimitExceededError as e:
...     print(e)
size limit of 4 bytes exceeded
"""

from typing import TypeVar

from structlog import get_logger
from typing_extensions import override

from bincodec.deserializer import Deserializer
from bincodec.exceptions import SizeLimitExceededError
from bincodec.serializer import Serializer

from ..types import Buffer
from .generic_adapter import GenericDeserializerAdapter, GenericSerializerAdapter

logger = get_logger()

S = TypeVar('S', bound=Serializer)
D = TypeVar('D', bound=Deserializer)


class MaxBytesSerializer(GenericSerializerAdapter[S]):
    def __init__(self, serializer: S, max_bytes: int) -> None:
        super().__init__(serializer)
        self._max_bytes = max_bytes
        self._bytes_left = max_bytes

    def _check_update_exceeds(self, write_size: int) -> None:
        if write_size > self._bytes_left:
            logger.debug('size limit exceeded on write', limit=self._max_bytes, requested=write_size)
            raise SizeLimitExceededError(f'size limit of {self._max_bytes} bytes exceeded')
        self._bytes_left -= write_size

    @override
    def write_byte(self, data: int) -> None:
        self._check_update_exceeds(1)
        super().write_byte(data)

    @override
    def write_bytes(self, data: Buffer) -> None:
        data_view = memoryview(data)
        self._check_update_exceeds(data_view.nbytes)
        super().write_bytes(data_view)

    @override
    def check_allocation(self, n: int) -> None:
        super().check_allocation(n)
        if n > self._bytes_left:
            logger.debug('size limit exceeded on write', limit=self._max_bytes, requested=n)
            raise SizeLimitExceededError(f'size limit of {self._max_bytes} bytes exceeded')


class MaxBytesDeserializer(GenericDeserializerAdapter[D]):
    def __init__(self, deserializer: D, max_bytes: int) -> None:
        super().__init__(deserializer)
        self._max_bytes = max_bytes
        self._bytes_left = max_bytes

    def _raise_exceeded(self, requested: int) -> None:
        logger.debug('size limit exceeded on read', limit=self._max_bytes, requested=requested)
        raise SizeLimitExceededError(f'size limit of {self._max_bytes} bytes exceeded')

    def _check_update_exceeds(self, read_size: int) -> None:
        if read_size > self._bytes_left:
            self._raise_exceeded(read_size)
        self._bytes_left -= read_size

    @override
    def read_byte(self) -> int:
        self._check_update_exceeds(1)
        return super().read_byte()

    @override
    def read_bytes(self, n: int, *, exact: bool = True) -> Buffer:
        if not exact:
            n = min(n, self._bytes_left)
        self._check_update_exceeds(n)
        return super().read_bytes(n, exact=exact)

    @override
    def read_all(self) -> Buffer:
        result = super().read_bytes(self._bytes_left, exact=False)
        self._bytes_left -= len(memoryview(result))
        if not self.is_empty():
            self._raise_exceeded(1)
        return result

    @override
    def check_allocation(self, n: int) -> None:
        super().check_allocation(n)
        if n > self._bytes_left:
            self._raise_exceeded(n)
