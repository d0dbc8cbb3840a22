#!/usr/bin/env python
"""
Copyright 2025 Hathor Labs

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at

   http://www.apache.org/licenses/LICENSE-2.0

Unless required by applicable law or agreed to in writing, software
distributed under the License is distributed on an "AS IS" BASIS,
WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
See the License for the specific language governing permissions and
limitations under the License.
"""

import re
from pathlib import Path

from setuptools import find_packages, setup

# XXX: the version is parsed instead of imported, importing bincodec would require its dependencies at build time
_init_source = (Path(__file__).parent / 'bincodec' / '__init__.py').read_text()
__version__ = re.search(r"^__version__ = '([^']+)'$", _init_source, re.MULTILINE).group(1)  # type: ignore[union-attr]

install_requires = [
    'pydantic>=2.0',
    'PyYAML>=6.0',
    'structlog>=22.3',
    'typing_extensions>=4.6',
]

setup(
    name='bincodec',
    version=__version__,
    description='Compact binary encoding of structured values, compatible with bincode 1.0',
    author='Hathor Team',
    author_email='contact@hathor.network',
    url='https://hathor.network/',
    license='Apache License 2.0',
    classifiers=[
        'Programming Language :: Python :: 3',
        'Operating System :: OS Independent',
        'License :: OSI Approved :: Apache Software License',
    ],
    python_requires='>=3.11',
    packages=find_packages(exclude=('tests', 'tests.*')),
    install_requires=install_requires,
    extras_require={
        'test': ['pytest>=7.0'],
    },
)
