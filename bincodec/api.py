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
Entry points: encode a value into bytes (or a stream) and decode it back.

>>> from typing import Annotated
>>> from bincodec.shapes import U16
>>> encode(7, shape=U16).hex()
'0700'
>>> decode(bytes.fromhex('0700'), Annotated[int, U16])
7
>>> encoded_size([1, 2, 3], DEFAULT_CONFIG.with_variable_int_encoding())
4
>>> decode(bytes.fromhex('070000'), U16)
Traceback (most recent call last):
...
bincodec.exceptions.TrailingBytesError: 1 trailing byte(s) after the decoded value
"""

from typing import IO, Any, Optional

from structlog import get_logger

from bincodec.config import DEFAULT_CONFIG, Config, get_global_config
from bincodec.deserializer import Deserializer
from bincodec.exceptions import TrailingBytesError
from bincodec.reader import Reader
from bincodec.serializer import Serializer
from bincodec.shapes import Shape, make_shape, shape_for_value
from bincodec.types import Buffer
from bincodec.writer import Writer

logger = get_logger()


__all__ = [
    'DEFAULT_CONFIG',
    'decode',
    'decode_borrowed',
    'decode_from_stream',
    'encode',
    'encode_into',
    'encoded_size',
]


def _get_config(config: Optional[Config]) -> Config:
    return get_global_config() if config is None else config


def _get_write_shape(value: Any, shape: Any) -> Shape:
    if shape is None:
        return shape_for_value(value)
    return make_shape(shape)


def encode(value: Any, config: Optional[Config] = None, *, shape: Any = None) -> bytes:
    """ Encode a value into a new `bytes` object.

    The `shape` can be a `Shape` or a type annotation, when omitted it is picked from the class of the value.
    """
    config = _get_config(config)
    serializer = Serializer.build_bytes_serializer()
    writer = Writer(serializer.with_optional_max_bytes(config.size_limit), config)
    _get_write_shape(value, shape).write(writer, value)
    return bytes(serializer.finalize())


def encode_into(value: Any, stream: IO[bytes], config: Optional[Config] = None, *, shape: Any = None) -> None:
    """ Encode a value directly into a binary stream.

    Bytes are written as they are produced, if an error is raised part of the value might already be in the stream.
    """
    config = _get_config(config)
    serializer = Serializer.build_stream_serializer(stream)
    writer = Writer(serializer.with_optional_max_bytes(config.size_limit), config)
    _get_write_shape(value, shape).write(writer, value)


def encoded_size(value: Any, config: Optional[Config] = None, *, shape: Any = None) -> int:
    """ Number of bytes `encode` would produce for the same arguments, without producing them.
    """
    config = _get_config(config)
    serializer = Serializer.build_counting_serializer()
    writer = Writer(serializer.with_optional_max_bytes(config.size_limit), config)
    _get_write_shape(value, shape).write(writer, value)
    return serializer.cur_pos()


def decode(data: Buffer, type_: Any, config: Optional[Config] = None) -> Any:
    """ Decode a value of the given type (or shape) from a byte slice, byte payloads are returned as new `bytes`.
    """
    return _decode_bytes(data, type_, _get_config(config), borrow=False)


def decode_borrowed(data: Buffer, type_: Any, config: Optional[Config] = None) -> Any:
    """ Like `decode`, but byte payloads are returned as `memoryview` slices of `data`, no copy is made.

    The returned views keep `data` alive and reflect changes made to it if it is mutable.
    """
    return _decode_bytes(data, type_, _get_config(config), borrow=True)


def _decode_bytes(data: Buffer, type_: Any, config: Config, *, borrow: bool) -> Any:
    shape = make_shape(type_)
    deserializer = Deserializer.build_bytes_deserializer(data)
    reader = Reader(deserializer.with_optional_max_bytes(config.size_limit), config, borrow=borrow)
    value = shape.read(reader)
    if not config.allow_trailing_bytes and not deserializer.is_empty():
        remaining = deserializer.remaining()
        log = logger.new()
        log.debug('trailing bytes rejected', shape=repr(shape), remaining=remaining)
        raise TrailingBytesError(f'{remaining} trailing byte(s) after the decoded value')
    return value


def decode_from_stream(stream: IO[bytes], type_: Any, config: Optional[Config] = None) -> Any:
    """ Decode a value from a binary stream, consuming exactly the bytes that make up the value.

    Anything after the value is left in the stream for the caller, so the trailing bytes policy does not apply.
    """
    config = _get_config(config)
    shape = make_shape(type_)
    deserializer = Deserializer.build_stream_deserializer(stream)
    reader = Reader(deserializer.with_optional_max_bytes(config.size_limit), config)
    return shape.read(reader)
