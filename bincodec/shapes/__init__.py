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

from bincodec.shapes.collection import Array, ArrayShape, FixedBytesShape, SeqShape
from bincodec.shapes.custom import Encodable, EncodableShape
from bincodec.shapes.map import MapShape
from bincodec.shapes.option import OptionShape
from bincodec.shapes.primitives import (
    BOOL,
    BYTES,
    CHAR,
    F32,
    F64,
    I8,
    I16,
    I32,
    I64,
    I128,
    STR,
    U8,
    U16,
    U32,
    U64,
    U128,
    UNIT,
)
from bincodec.shapes.record import RecordShape
from bincodec.shapes.resolve import INFERRED, InferredShape, make_shape, shape_for_value
from bincodec.shapes.shape import Shape
from bincodec.shapes.tuple import TupleShape
from bincodec.shapes.union import EnumShape, UnionShape

__all__ = [
    'Array',
    'ArrayShape',
    'BOOL',
    'BYTES',
    'CHAR',
    'Encodable',
    'EncodableShape',
    'EnumShape',
    'F32',
    'F64',
    'FixedBytesShape',
    'I8',
    'I16',
    'I32',
    'I64',
    'I128',
    'INFERRED',
    'InferredShape',
    'MapShape',
    'OptionShape',
    'RecordShape',
    'STR',
    'SeqShape',
    'Shape',
    'TupleShape',
    'U8',
    'U16',
    'U32',
    'U64',
    'U128',
    'UNIT',
    'UnionShape',
    'make_shape',
    'shape_for_value',
]
