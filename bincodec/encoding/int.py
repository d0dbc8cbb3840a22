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
This module implements encoding of integers with a fixed size, the size, signedness and byte order are parametrized.

The byte order defaults to little-endian, which is the default of `bincodec.Config`.

>>> se = Serializer.build_bytes_serializer()
>>> encode_int(se, 0, length=1, signed=True)  # writes 00
>>> encode_int(se, 255, length=1, signed=False)  # writes ff
>>> encode_int(se, 1234, length=2, signed=True)  # writes d204
>>> encode_int(se, -1234, length=2, signed=True, byteorder='big')  # writes fb2e
>>> bytes(se.finalize()).hex()
'00ffd204fb2e'

>>> de = Deserializer.build_bytes_deserializer(bytes.fromhex('00ffd204fb2e'))
>>> decode_int(de, length=1, signed=True)  # reads 00
0
>>> decode_int(de, length=1, signed=False)  # reads ff
255
>>> decode_int(de, length=2, signed=True)  # reads d204
1234
>>> decode_int(de, length=2, signed=True, byteorder='big')  # reads fb2e
-1234
>>> de.finalize()

>>> se = Serializer.build_bytes_serializer()
>>> try:
...     encode_int(se, 256, length=1, signed=False)
... except InvalidValueError as e:
...     print(e)
256 does not fit in 1 unsigned byte(s)
"""

from typing import Literal

from bincodec.deserializer import Deserializer
from bincodec.exceptions import InvalidValueError
from bincodec.serializer import Serializer

ByteOrder = Literal['little', 'big']


def int_bounds(*, bits: int, signed: bool) -> tuple[int, int]:
    """ Smallest and largest value of an integer with the given width and signedness.

    >>> int_bounds(bits=8, signed=True)
    (-128, 127)
    >>> int_bounds(bits=16, signed=False)
    (0, 65535)
    """
    if signed:
        return -(1 << (bits - 1)), (1 << (bits - 1)) - 1
    else:
        return 0, (1 << bits) - 1


def encode_int(
    serializer: Serializer,
    number: int,
    *,
    length: int,
    signed: bool,
    byteorder: ByteOrder = 'little',
) -> None:
    """ Encode an int using the given byte-length, signedness and byte order.

    This module's docstring has more details and examples.
    """
    try:
        data = int.to_bytes(number, length, byteorder=byteorder, signed=signed)
    except OverflowError:
        kind = 'signed' if signed else 'unsigned'
        raise InvalidValueError(f'{number} does not fit in {length} {kind} byte(s)')
    serializer.write_bytes(data)


def decode_int(deserializer: Deserializer, *, length: int, signed: bool, byteorder: ByteOrder = 'little') -> int:
    """ Decode an int using the given byte-length, signedness and byte order.

    This module's docstring has more details and examples.
    """
    data = deserializer.read_bytes(length)
    return int.from_bytes(data, byteorder=byteorder, signed=signed)
