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
Binary encoding of structured values in the bincode 1.0 format.

This module exports the entry points, the configuration and the building blocks for driving the encoder by hand.
"""

from bincodec.api import decode, decode_borrowed, decode_from_stream, encode, encode_into, encoded_size
from bincodec.config import DEFAULT_CONFIG, Config, Endianness, IntEncoding, get_global_config, load_config_yaml
from bincodec.deserializer import Deserializer
from bincodec.exceptions import (
    ApplicationError,
    DepthLimitExceededError,
    InvalidBoolEncodingError,
    InvalidCharValueError,
    InvalidTagEncodingError,
    InvalidUtf8Error,
    InvalidValueError,
    InvalidVariantIndexError,
    IoFailureError,
    SequenceMustHaveLengthError,
    SerializationError,
    SizeLimitExceededError,
    TrailingBytesError,
    UnexpectedEndOfInputError,
)
from bincodec.reader import Reader
from bincodec.serializer import Serializer
from bincodec.shapes import Encodable, Shape, make_shape
from bincodec.writer import Writer

__version__ = '0.1.0'

__all__ = [
    'ApplicationError',
    'Config',
    'DEFAULT_CONFIG',
    'DepthLimitExceededError',
    'Deserializer',
    'Encodable',
    'Endianness',
    'IntEncoding',
    'InvalidBoolEncodingError',
    'InvalidCharValueError',
    'InvalidTagEncodingError',
    'InvalidUtf8Error',
    'InvalidValueError',
    'InvalidVariantIndexError',
    'IoFailureError',
    'Reader',
    'SequenceMustHaveLengthError',
    'SerializationError',
    'Serializer',
    'Shape',
    'SizeLimitExceededError',
    'TrailingBytesError',
    'UnexpectedEndOfInputError',
    'Writer',
    'decode',
    'decode_borrowed',
    'decode_from_stream',
    'encode',
    'encode_into',
    'encoded_size',
    'get_global_config',
    'load_config_yaml',
    'make_shape',
]
