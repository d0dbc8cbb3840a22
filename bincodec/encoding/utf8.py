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

r"""
Conversion between `str` and the UTF-8 payload of a string, the length prefix is written by `bincodec.Writer`.

>>> to_utf8('π')
b'\xcf\x80'
>>> from_utf8(memoryview(b'\xcf\x80'))
'π'
>>> try:
...     from_utf8(b'\xff\xfe')
... except InvalidUtf8Error as e:
...     print(e)
invalid utf-8 string
"""

from bincodec.exceptions import InvalidUtf8Error, InvalidValueError
from bincodec.types import Buffer


def to_utf8(value: str) -> bytes:
    if not isinstance(value, str):
        raise InvalidValueError(f'expected str, got {type(value).__name__}')
    try:
        return value.encode('utf-8')
    except UnicodeEncodeError as e:
        # only lone surrogates can get here
        raise InvalidValueError('string is not valid unicode') from e


def from_utf8(data: Buffer) -> str:
    try:
        return str(data, 'utf-8')
    except UnicodeDecodeError as e:
        raise InvalidUtf8Error('invalid utf-8 string') from e
