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

from typing_extensions import override

from .serializer import Serializer
from .types import Buffer


class CountingSerializer(Serializer):
    """Serializer that only counts how many bytes would have been written, nothing is stored.

    Driving the same writes through this and through `BytesSerializer` always yields `cur_pos() == len(finalize())`.
    """

    def __init__(self) -> None:
        self._pos: int = 0

    @override
    def cur_pos(self) -> int:
        return self._pos

    @override
    def write_byte(self, data: int) -> None:
        if not 0 <= data <= 0xff:
            raise OverflowError('int too big to convert')
        self._pos += 1

    @override
    def write_bytes(self, data: Buffer) -> None:
        self._pos += memoryview(data).nbytes
