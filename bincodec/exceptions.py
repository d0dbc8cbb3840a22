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
Every error raised by bincodec while encoding or decoding is a `SerializationError`.

Errors are terminal for the call that raised them: the partially written output or partially consumed input should be
discarded by the caller.
"""


class SerializationError(Exception):
    """Base class for all encoding/decoding errors."""
    pass


class UnexpectedEndOfInputError(SerializationError):
    """The source ran out of bytes before a read could be completed."""
    pass


class IoFailureError(SerializationError):
    """The underlying stream reported an error, the original `OSError` is kept as `__cause__`."""
    pass


class InvalidUtf8Error(SerializationError):
    """String payload is not valid UTF-8."""
    pass


class InvalidCharValueError(SerializationError):
    """Decoded code point is not a Unicode scalar value."""

    def __init__(self, code_point: int) -> None:
        super().__init__(f'invalid char code point: {code_point:#x}')
        self.code_point = code_point


class InvalidTagEncodingError(SerializationError):
    """A discriminant byte (option, variant index, varint tag) is outside of its valid set."""

    def __init__(self, tag: int, message: str | None = None) -> None:
        super().__init__(message or f'invalid tag encoding: {tag:#x}')
        self.tag = tag


class InvalidBoolEncodingError(InvalidTagEncodingError):
    def __init__(self, tag: int) -> None:
        super().__init__(tag, f'{bytes([tag])!r} is not a valid boolean')


class InvalidVariantIndexError(InvalidTagEncodingError):
    def __init__(self, tag: int, variant_count: int) -> None:
        super().__init__(tag, f'variant index {tag} out of range for {variant_count} variants')
        self.variant_count = variant_count


class SizeLimitExceededError(SerializationError):
    """ This error is raised when the configured size limit would be exceeded by a write, a read or an allocation.

    After this exception is raised the adapted serializer/deserializer cannot be used anymore. Handlers of this
    exception are expected to either bubble up the exception (or an equivalent exception), or return an error. Handlers
    should not try to write or read again on the same object.
    """
    pass


class DepthLimitExceededError(SerializationError):
    """Nesting of composite values went beyond `Config.max_depth`."""
    pass


class TrailingBytesError(SerializationError):
    """Decoding finished but the input still had unconsumed bytes."""
    pass


class InvalidValueError(SerializationError, ValueError):
    """The value cannot be represented by the requested encoding (for example 300 as an u8)."""
    pass


class SequenceMustHaveLengthError(SerializationError):
    """A sequence was handed to the writer without a known length, the length prefix must come first."""
    pass


class ApplicationError(SerializationError):
    """ Escape hatch for application reconstruction logic to reject decoded data.

    The message is passed through unmodified.
    """

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message
