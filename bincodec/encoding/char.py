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
A char is a single Unicode scalar value, on the wire it is its code point as an unsigned 32-bit integer.

The integer itself is written by whatever integer encoding is active, this module only deals with mapping between
single-character strings and valid code points.

>>> char_to_code_point('a')
97
>>> code_point_to_char(0x1f60e)
'😎'
>>> try:
...     code_point_to_char(0xd800)
... except InvalidCharValueError as e:
...     print(e)
invalid char code point: 0xd800
>>> try:
...     char_to_code_point('ab')
... except InvalidValueError as e:
...     print(e)
expected a single character, got 2
"""

from bincodec.exceptions import InvalidCharValueError, InvalidValueError

MAX_CODE_POINT = 0x10ffff
SURROGATES = range(0xd800, 0xe000)


def is_scalar_value(code_point: int) -> bool:
    return 0 <= code_point <= MAX_CODE_POINT and code_point not in SURROGATES


def char_to_code_point(value: str) -> int:
    if not isinstance(value, str):
        raise InvalidValueError(f'expected str, got {type(value).__name__}')
    if len(value) != 1:
        raise InvalidValueError(f'expected a single character, got {len(value)}')
    code_point = ord(value)
    if not is_scalar_value(code_point):
        raise InvalidValueError(f'{code_point:#x} is not a unicode scalar value')
    return code_point


def code_point_to_char(code_point: int) -> str:
    if not is_scalar_value(code_point):
        raise InvalidCharValueError(code_point)
    return chr(code_point)
