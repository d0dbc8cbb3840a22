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
Build shapes from Python type annotations.

>>> from typing import Annotated, Optional
>>> from bincodec.shapes import U8
>>> make_shape(int)
I64
>>> make_shape(Optional[Annotated[int, U8]])
OptionShape(U8)
>>> make_shape(dict[str, list[bool]])
MapShape(StrShape, SeqShape(BoolShape))
>>> make_shape(Annotated[list[float], Array(3)])
ArrayShape(F64Shape, 3)
>>> make_shape(object)
Traceback (most recent call last):
...
TypeError: type <class 'object'> is not supported
"""

from __future__ import annotations

from collections import OrderedDict, deque
from collections.abc import Callable, Iterable, Mapping, MutableSequence, Sequence, Set
from dataclasses import fields, is_dataclass
from enum import Enum
from types import NoneType, UnionType
from typing import Annotated, Any, Union, get_args, get_origin, get_type_hints

from typing_extensions import override

from bincodec.exceptions import InvalidValueError
from bincodec.reader import Reader
from bincodec.writer import Writer

from .collection import Array, ArrayShape, FixedBytesShape, SeqShape
from .custom import EncodableShape, is_encodable_class
from .map import MapShape
from .option import OptionShape
from .primitives import BOOL, BYTES, F64, I64, STR, UNIT
from .record import RecordShape
from .shape import Shape
from .tuple import TupleShape
from .union import EnumShape, UnionShape

# origin class -> builder used when decoding
_SEQUENCE_BUILDERS: dict[Any, Callable[[Iterable[Any]], Any]] = {
    list: list,
    set: set,
    frozenset: frozenset,
    deque: deque,
    Sequence: tuple,
    MutableSequence: list,
    Set: frozenset,
}

_MAPPING_BUILDERS: dict[Any, Callable[[Iterable[Any]], Any]] = {
    dict: dict,
    OrderedDict: OrderedDict,
    Mapping: dict,
}

_BYTES_TYPES = (bytes, bytearray, memoryview)


def make_shape(type_: Any, /) -> Shape:
    """ Build the shape that drives the writer/reader for values of the given type annotation.

    Raises `TypeError` if the annotation (or any annotation nested in it) is not supported.
    """
    return _make_shape(type_, {})


def _make_shape(type_: Any, building: dict[type, RecordShape]) -> Shape:
    """ Implementation of make_shape, `building` holds the records whose fields are still being resolved.
    """
    if isinstance(type_, Shape):
        return type_
    if type_ is None or type_ is NoneType:
        return UNIT

    origin = get_origin(type_)

    if origin is Annotated:
        return _from_annotated(type_, building)
    if origin is Union or origin is UnionType:
        return _from_union(type_, building)
    if origin is not None:
        return _from_generic(type_, origin, building)

    if not isinstance(type_, type):
        raise TypeError(f'type {type_!r} is not supported')

    if type_ in building:
        return building[type_]
    if is_encodable_class(type_):
        return EncodableShape(type_)
    if issubclass(type_, Enum):
        return EnumShape(type_)
    if is_dataclass(type_) or _is_namedtuple(type_):
        return _from_record(type_, building)

    # XXX: bool must come before int because bool is a subclass of int
    if issubclass(type_, bool):
        return BOOL
    if issubclass(type_, int):
        return I64
    if issubclass(type_, float):
        return F64
    if issubclass(type_, str):
        return STR
    if issubclass(type_, _BYTES_TYPES):
        return BYTES
    if type_ in _SEQUENCE_BUILDERS or type_ in _MAPPING_BUILDERS or type_ is tuple:
        raise TypeError(f'type {type_!r} needs type arguments, like {type_.__name__}[int]')
    raise TypeError(f'type {type_!r} is not supported')


def _is_namedtuple(type_: type) -> bool:
    return issubclass(type_, tuple) and hasattr(type_, '_fields')


def _from_annotated(type_: Any, building: dict[type, RecordShape]) -> Shape:
    base, *metadata = get_args(type_)
    for marker in metadata:
        if isinstance(marker, Shape):
            return marker
        if isinstance(marker, Array):
            base_origin = get_origin(base) or base
            if base_origin in _BYTES_TYPES:
                return FixedBytesShape(marker.length)
            if base_origin is tuple:
                item_type, _ = _homogeneous_tuple_args(base)
                return ArrayShape(_make_shape(item_type, building), marker.length, tuple)
            if base_origin in _SEQUENCE_BUILDERS:
                item_type, = _expect_args(base, 1)
                item = _make_shape(item_type, building)
                return ArrayShape(item, marker.length, _SEQUENCE_BUILDERS[base_origin])
            raise TypeError(f'Array marker cannot be used with {base!r}')
    # unrelated metadata is ignored, like Annotated is meant to be used
    return _make_shape(base, building)


def _from_union(type_: Any, building: dict[type, RecordShape]) -> Shape:
    args = get_args(type_)
    variants = [arg for arg in args if arg is not NoneType]
    if len(variants) == 1:
        inner = _make_shape(variants[0], building)
    else:
        for variant in variants:
            if not isinstance(variant, type):
                raise TypeError(f'union variants must be plain classes, got {variant!r}')
        inner = UnionShape((variant, _make_shape(variant, building)) for variant in variants)
    if len(variants) != len(args):
        return OptionShape(inner)
    return inner


def _from_generic(type_: Any, origin: Any, building: dict[type, RecordShape]) -> Shape:
    if origin is tuple:
        args = get_args(type_)
        if len(args) == 2 and args[1] is Ellipsis:
            return SeqShape(_make_shape(args[0], building), tuple)
        # XXX: tuple[()] has no args and is the empty tuple
        return TupleShape(_make_shape(arg, building) for arg in args)
    if origin in _SEQUENCE_BUILDERS:
        item_type, = _expect_args(type_, 1)
        return SeqShape(_make_shape(item_type, building), _SEQUENCE_BUILDERS[origin])
    if origin in _MAPPING_BUILDERS:
        key_type, value_type = _expect_args(type_, 2)
        return MapShape(_make_shape(key_type, building), _make_shape(value_type, building), _MAPPING_BUILDERS[origin])
    raise TypeError(f'type {type_!r} is not supported')


def _expect_args(type_: Any, count: int) -> tuple[Any, ...]:
    args = get_args(type_)
    if len(args) != count:
        raise TypeError(f'expected {count} type argument(s) in {type_!r}')
    return args


def _homogeneous_tuple_args(type_: Any) -> tuple[Any, Any]:
    args = get_args(type_)
    if len(args) != 2 or args[1] is not Ellipsis:
        raise TypeError(f'expected tuple[T, ...], got {type_!r}')
    return args[0], args[1]


def _from_record(class_: type, building: dict[type, RecordShape]) -> RecordShape:
    # the record is registered before its fields so that recursive references resolve to the same shape
    record = RecordShape(class_)
    building[class_] = record
    try:
        hints = get_type_hints(class_, localns={class_.__name__: class_}, include_extras=True)
        field_names: Iterable[str]
        if is_dataclass(class_):
            field_names = [field.name for field in fields(class_)]
        else:
            field_names = class_._fields  # type: ignore[attr-defined]
        record._set_fields({name: _make_shape(hints[name], building) for name in field_names})
    finally:
        del building[class_]
    return record


class InferredShape(Shape[Any]):
    """ Picks the shape of each value from its class when writing, it cannot read.

    Used for the items of collections when encoding without an explicit shape.
    """

    __slots__ = ()

    @property
    @override
    def min_size(self) -> int:
        return 0

    @override
    def _write(self, writer: Writer, value: Any, /) -> None:
        shape_for_value(value).write(writer, value)

    @override
    def _read(self, reader: Reader, /) -> Any:
        raise TypeError('an explicit type is needed to decode, the shape cannot be inferred from the input')

    def __repr__(self) -> str:
        return 'InferredShape'


INFERRED = InferredShape()


def shape_for_value(value: Any, /) -> Shape:
    """ Pick a shape for a value from its class, used when encoding without an explicit shape.

    Tuples are written as fixed tuples, other collections as sequences or maps where each item picks its own shape.

    >>> shape_for_value(1)
    I64
    >>> shape_for_value((True, 'a'))
    TupleShape([BoolShape, StrShape])
    """
    if value is None:
        return UNIT
    if isinstance(value, Shape):
        raise InvalidValueError('shapes cannot be encoded')
    value_class = type(value)
    if isinstance(value, tuple) and not _is_namedtuple(value_class):
        return TupleShape(shape_for_value(item) for item in value)
    if isinstance(value, (list, set, frozenset, deque)):
        return SeqShape(INFERRED, value_class)
    if isinstance(value, Mapping):
        return MapShape(INFERRED, INFERRED)
    if isinstance(value, _BYTES_TYPES):
        return BYTES
    try:
        return make_shape(value_class)
    except TypeError as e:
        raise InvalidValueError(f'cannot encode {value_class.__name__} without an explicit shape') from e
