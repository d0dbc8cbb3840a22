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
This module implements encoding of IEEE-754 floats with 4 (single precision) or 8 (double precision) bytes.

The bit pattern is written as is, so NaN payloads and negative zero survive a round trip.

>>> se = Serializer.build_bytes_serializer()
>>> encode_float(se, 1.5, length=4)  # writes 0000c03f
>>> encode_float(se, -2.0, length=8, byteorder='big')  # writes c000000000000000
>>> bytes(se.finalize()).hex()
'0000c03fc000000000000000'

>>> de = Deserializer.build_bytes_deserializer(bytes.fromhex('0000c03fc000000000000000'))
>>> decode_float(de, length=4)
1.5
>>> decode_float(de, length=8, byteorder='big')
-2.0
>>> de.finalize()
"""

import struct

from bincodec.deserializer import Deserializer
from bincodec.exceptions import InvalidValueError
from bincodec.serializer import Serializer

from .int import ByteOrder

_LENGTH_TO_FORMAT = {
    4: 'f',
    8: 'd',
}


def _struct_format(length: int, byteorder: ByteOrder) -> str:
    try:
        code = _LENGTH_TO_FORMAT[length]
    except KeyError:
        raise ValueError(f'unsupported float length: {length}')
    return ('<' if byteorder == 'little' else '>') + code


def encode_float(serializer: Serializer, value: float, *, length: int, byteorder: ByteOrder = 'little') -> None:
    """ Encode a float using the given byte-length and byte order.

    This module's docstring has more details and examples.
    """
    if not isinstance(value, (float, int)) or isinstance(value, bool):
        raise InvalidValueError(f'expected float, got {type(value).__name__}')
    try:
        serializer.write_struct((value,), _struct_format(length, byteorder))
    except (OverflowError, struct.error) as e:
        raise InvalidValueError(f'{value} does not fit in a {length * 8}-bit float') from e


def decode_float(deserializer: Deserializer, *, length: int, byteorder: ByteOrder = 'little') -> float:
    """ Decode a float using the given byte-length and byte order.

    This module's docstring has more details and examples.
    """
    value, = deserializer.read_struct(_struct_format(length, byteorder))
    return value
