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

from typing import IO

from typing_extensions import override

from .exceptions import IoFailureError
from .serializer import Serializer
from .types import Buffer


class StreamSerializer(Serializer):
    """Serializer that writes straight to a binary stream (file, socket file, pipe...).

    Errors reported by the stream are raised as `IoFailureError`, the stream itself is neither flushed nor closed.
    """

    def __init__(self, stream: IO[bytes]) -> None:
        self._stream = stream
        self._pos: int = 0

    @override
    def cur_pos(self) -> int:
        return self._pos

    @override
    def write_byte(self, data: int) -> None:
        self.write_bytes(int.to_bytes(data, length=1, byteorder='big'))

    @override
    def write_bytes(self, data: Buffer) -> None:
        view = memoryview(data)
        try:
            # XXX: raw streams are allowed to do partial writes
            written = 0
            while written < view.nbytes:
                n = self._stream.write(view[written:])
                if n is None:
                    raise BlockingIOError('stream would block')
                written += n
        except OSError as e:
            raise IoFailureError('failed to write to stream') from e
        self._pos += view.nbytes
