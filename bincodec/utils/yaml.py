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

from pathlib import Path
from typing import Any, Union

import yaml

_EXTENDS_KEY = 'extends'


def _load_mapping(path: Path) -> dict[str, Any]:
    if not path.is_file():
        raise ValueError(f"'{path}' is not a file")
    with path.open('r') as file:
        contents = yaml.safe_load(file)
    if contents is None:
        return {}
    if not isinstance(contents, dict):
        raise ValueError(f"'{path}' cannot be parsed as a dictionary")
    return contents


def dict_from_extended_yaml(*, filepath: Union[Path, str]) -> dict[str, Any]:
    """
    Read a yaml mapping, following the 'extends' key to a base file (relative to the extending file).

    Keys of the extending file override those of its base, bases can extend further files. The 'extends' key itself
    is not part of the result.
    """
    path = Path(filepath)
    seen: set[Path] = set()
    layers: list[dict[str, Any]] = []
    while True:
        resolved = path.resolve()
        if resolved in seen:
            raise ValueError(f"'{path}' is extended more than once")
        seen.add(resolved)
        contents = _load_mapping(path)
        base_file = contents.pop(_EXTENDS_KEY, None)
        layers.append(contents)
        if not base_file:
            break
        path = path.parent / str(base_file)

    result: dict[str, Any] = {}
    for layer in reversed(layers):
        result.update(layer)
    return result
