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
This module implements the tagged variable-length encoding for unsigned integers.

The first byte either is the value itself or a tag announcing the width of the value that follows it:

- `0x00` to `0xfa`: the value itself, no more bytes follow
- `0xfb`: the value follows as a 2-byte integer
- `0xfc`: the value follows as a 4-byte integer
- `0xfd`: the value follows as an 8-byte integer
- `0xfe`: the value follows as a 16-byte integer
- `0xff`: reserved, always invalid

The encoder always picks the smallest width that holds the value, the decoder also accepts wider than needed widths.
The byte order of the value that follows the tag is configurable, like every other fixed-width integer.

Signed integers are mapped to unsigned ones with zig-zag encoding first (0, -1, 1, -2, 2, ... maps to 0, 1, 2, 3, 4,
...), so values with a small magnitude have a short encoding regardless of their sign.

>>> se = Serializer.build_bytes_serializer()
>>> encode_varint(se, 250)  # writes fa
>>> encode_varint(se, 251)  # writes fb fb00
>>> encode_varint(se, 251, byteorder='big')  # writes fb 00fb
>>> encode_varint(se, 70000)  # writes fc 70110100
>>> bytes(se.finalize()).hex()
'fafbfb00fb00fbfc70110100'

>>> de = Deserializer.build_bytes_deserializer(bytes.fromhex('fafbfb00fb00fbfc70110100'))
>>> decode_varint(de)
250
>>> decode_varint(de)
251
>>> decode_varint(de, byteorder='big')
251
>>> decode_varint(de)
70000
>>> de.finalize()

Non-minimal encodings are accepted:

>>> decode_varint(Deserializer.build_bytes_deserializer(bytes.fromhex('fb0500')))
5

But the value that follows the tag must fit in the requested width:

>>> try:
...     decode_varint(Deserializer.build_bytes_deserializer(bytes.fromhex('fc70110100')), max_bits=16)
... except InvalidTagEncodingError as e:
...     print(e)
tag 0xfc is too wide for a 16-bit integer

>>> [zigzag_encode(n) for n in (0, -1, 1, -2, 2)]
[0, 1, 2, 3, 4]
>>> [zigzag_decode(n) for n in (0, 1, 2, 3, 4)]
[0, -1, 1, -2, 2]
"""

from bincodec.deserializer import Deserializer
from bincodec.exceptions import InvalidTagEncodingError, InvalidValueError
from bincodec.serializer import Serializer

from .int import ByteOrder, decode_int, encode_int

SINGLE_BYTE_MAX = 0xfa
U16_TAG = 0xfb
U32_TAG = 0xfc
U64_TAG = 0xfd
U128_TAG = 0xfe
RESERVED_TAG = 0xff

# tag -> byte length of the value that follows
_TAG_TO_LENGTH = {
    U16_TAG: 2,
    U32_TAG: 4,
    U64_TAG: 8,
    U128_TAG: 16,
}


def zigzag_encode(value: int) -> int:
    return 2 * value if value >= 0 else -2 * value - 1


def zigzag_decode(value: int) -> int:
    return (value >> 1) ^ -(value & 1)


def _tag_for(value: int) -> int | None:
    if value < 0:
        raise InvalidValueError('cannot encode value <0 as unsigned varint')
    if value <= SINGLE_BYTE_MAX:
        return None
    if value < 1 << 16:
        return U16_TAG
    if value < 1 << 32:
        return U32_TAG
    if value < 1 << 64:
        return U64_TAG
    if value < 1 << 128:
        return U128_TAG
    raise InvalidValueError(f'{value} is too big for a 128-bit varint')


def varint_size(value: int) -> int:
    """ How many bytes `encode_varint` writes for the given unsigned value.

    >>> [varint_size(n) for n in (0, 250, 251, 65535, 65536, 2**32, 2**64)]
    [1, 1, 3, 3, 5, 9, 17]
    """
    tag = _tag_for(value)
    if tag is None:
        return 1
    return 1 + _TAG_TO_LENGTH[tag]


def encode_varint(serializer: Serializer, value: int, *, byteorder: ByteOrder = 'little') -> None:
    """ Encodes an unsigned integer using the smallest tag that fits it.

    This module's docstring has more details and examples.
    """
    tag = _tag_for(value)
    if tag is None:
        serializer.write_byte(value)
        return
    serializer.write_byte(tag)
    encode_int(serializer, value, length=_TAG_TO_LENGTH[tag], signed=False, byteorder=byteorder)


def decode_varint(deserializer: Deserializer, *, byteorder: ByteOrder = 'little', max_bits: int = 128) -> int:
    """ Decodes an unsigned integer of at most `max_bits` bits.

    A tag announcing a width bigger than `max_bits` is rejected even if the value would fit, otherwise a too big
    value is rejected after decoding.

    This module's docstring has more details and examples.
    """
    tag = deserializer.read_byte()
    if tag <= SINGLE_BYTE_MAX:
        value = tag
    elif tag == RESERVED_TAG:
        raise InvalidTagEncodingError(tag, 'tag 0xff is reserved')
    else:
        length = _TAG_TO_LENGTH[tag]
        if length * 8 > max_bits:
            raise InvalidTagEncodingError(tag, f'tag {tag:#x} is too wide for a {max_bits}-bit integer')
        value = decode_int(deserializer, length=length, signed=False, byteorder=byteorder)
    if value >> max_bits:
        raise InvalidTagEncodingError(tag, f'value does not fit in a {max_bits}-bit integer')
    return value
