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
Encoding rules shared by every encode/decode call.

A `Config` is immutable, every builder method returns a new instance, so the same object can be shared by any number
of concurrent calls:

>>> config = Config().with_big_endian().with_variable_int_encoding().with_limit(1024)
>>> config.endianness, config.int_encoding, config.size_limit
(<Endianness.BIG: 'big'>, <IntEncoding.VARIABLE: 'variable'>, 1024)
>>> DEFAULT_CONFIG.byteorder
'little'
"""

import os
from enum import Enum
from pathlib import Path
from typing import Literal, NamedTuple, Optional, Union

from pydantic import Field
from structlog import get_logger

from bincodec.utils.pydantic import BaseModel

logger = get_logger()

CONFIG_YAML_ENV_VAR = 'BINCODEC_CONFIG_YAML'


class Endianness(str, Enum):
    LITTLE = 'little'
    BIG = 'big'


class IntEncoding(str, Enum):
    # every integer is written with its full declared width
    FIXED = 'fixed'
    # integers wider than 8 bits use the tagged variable-length encoding
    VARIABLE = 'variable'


class Config(BaseModel):
    endianness: Endianness = Endianness.LITTLE
    int_encoding: IntEncoding = IntEncoding.FIXED

    # Maximum number of bytes that a single encode or decode call may produce or consume, `None` means no limit.
    size_limit: Optional[int] = Field(default=None, ge=0)

    # When False, decoding from a byte slice fails if bytes are left after the value is complete.
    allow_trailing_bytes: bool = False

    # Maximum nesting of composite values (sequences, maps, options, tuples, variants, records), `None` means no limit.
    max_depth: Optional[int] = Field(default=None, ge=1)

    @property
    def byteorder(self) -> Literal['little', 'big']:
        return 'big' if self.endianness is Endianness.BIG else 'little'

    @property
    def is_varint(self) -> bool:
        return self.int_encoding is IntEncoding.VARIABLE

    def with_little_endian(self) -> 'Config':
        return self.model_copy(update=dict(endianness=Endianness.LITTLE))

    def with_big_endian(self) -> 'Config':
        return self.model_copy(update=dict(endianness=Endianness.BIG))

    def with_fixed_int_encoding(self) -> 'Config':
        return self.model_copy(update=dict(int_encoding=IntEncoding.FIXED))

    def with_variable_int_encoding(self) -> 'Config':
        return self.model_copy(update=dict(int_encoding=IntEncoding.VARIABLE))

    def with_limit(self, size_limit: int) -> 'Config':
        # model_copy does not validate, so go through the constructor to keep the constraints
        return Config(**{**self.model_dump(), 'size_limit': size_limit})

    def with_no_limit(self) -> 'Config':
        return self.model_copy(update=dict(size_limit=None))

    def allow_trailing(self) -> 'Config':
        return self.model_copy(update=dict(allow_trailing_bytes=True))

    def reject_trailing(self) -> 'Config':
        return self.model_copy(update=dict(allow_trailing_bytes=False))

    def with_max_depth(self, max_depth: int) -> 'Config':
        return Config(**{**self.model_dump(), 'max_depth': max_depth})

    def with_no_max_depth(self) -> 'Config':
        return self.model_copy(update=dict(max_depth=None))


DEFAULT_CONFIG = Config()


def load_config_yaml(filepath: Union[Path, str]) -> Config:
    """Build a `Config` from a yaml file, the file may extend another one through the `extends` key.

    Raises pydantic's `ValidationError` if the file has unknown keys or invalid values.
    """
    from bincodec.utils.yaml import dict_from_extended_yaml
    log = logger.new()
    config_dict = dict_from_extended_yaml(filepath=filepath)
    config = Config.model_validate(config_dict)
    log.info('loaded bincodec config', source=str(filepath), config=config.model_dump(mode='json'))
    return config


class _ConfigMetadata(NamedTuple):
    source: Optional[str]
    config: Config


_config_singleton: Optional[_ConfigMetadata] = None


def get_global_config() -> Config:
    """
    Returns the process-wide default configuration.

    It is loaded from the yaml filepath in the 'BINCODEC_CONFIG_YAML' env var, or `DEFAULT_CONFIG` if it isn't set.
    Once loaded, changing the env var to point to a different file is an error.
    """
    global _config_singleton

    source = os.environ.get(CONFIG_YAML_ENV_VAR) or None

    if _config_singleton is not None:
        if _config_singleton.source != source:
            raise Exception('loading config twice with a different file')
        return _config_singleton.config

    config = DEFAULT_CONFIG if source is None else load_config_yaml(source)
    _config_singleton = _ConfigMetadata(source=source, config=config)
    return config


def _reset_global_config() -> None:
    """Only meant to be used by tests."""
    global _config_singleton
    _config_singleton = None
