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

from .deserializer import Deserializer
from .exceptions import IoFailureError, TrailingBytesError, UnexpectedEndOfInputError

# reads are split in chunks so a big length prefix doesn't make the stream preallocate everything at once
_MAX_CHUNK_SIZE = 64 * 1024


class StreamDeserializer(Deserializer):
    """Deserializer that pulls bytes from a binary stream on demand.

    Only the bytes that are asked for are read from the stream, except for `peek_*` and `is_empty`, which have to read
    ahead, the bytes read ahead are kept in a small internal buffer and consumed first by the next reads. Every
    returned byte sequence is a fresh `bytes` object, nothing is borrowed since there is no stable backing buffer.
    """

    def __init__(self, stream: IO[bytes]) -> None:
        self._stream = stream
        self._lookahead = bytearray()

    def _fill(self, n: int) -> None:
        """Try to have at least n bytes in the lookahead buffer, stops early on end of stream."""
        try:
            while len(self._lookahead) < n:
                chunk = self._stream.read(min(n - len(self._lookahead), _MAX_CHUNK_SIZE))
                if not chunk:
                    break
                self._lookahead += chunk
        except OSError as e:
            raise IoFailureError('failed to read from stream') from e

    @override
    def finalize(self) -> None:
        if not self.is_empty():
            raise TrailingBytesError('trailing data')
        del self._stream

    @override
    def is_empty(self) -> bool:
        self._fill(1)
        return not self._lookahead

    @override
    def peek_byte(self) -> int:
        self._fill(1)
        if not self._lookahead:
            raise UnexpectedEndOfInputError('not enough bytes to read')
        return self._lookahead[0]

    @override
    def peek_bytes(self, n: int, *, exact: bool = True) -> bytes:
        if n < 0:
            raise ValueError('value cannot be negative')
        self._fill(n)
        if exact and len(self._lookahead) < n:
            raise UnexpectedEndOfInputError('not enough bytes to read')
        return bytes(self._lookahead[:n])

    @override
    def read_byte(self) -> int:
        b = self.peek_byte()
        del self._lookahead[:1]
        return b

    @override
    def read_bytes(self, n: int, *, exact: bool = True) -> bytes:
        b = self.peek_bytes(n, exact=exact)
        del self._lookahead[:len(b)]
        return b

    @override
    def read_all(self) -> bytes:
        b = bytes(self._lookahead)
        self._lookahead.clear()
        try:
            rest = self._stream.read()
        except OSError as e:
            raise IoFailureError('failed to read from stream') from e
        return b + (rest or b'')
