from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import Annotated, NamedTuple, Optional, Union

import pytest

from bincodec import (
    ApplicationError,
    Config,
    DepthLimitExceededError,
    InvalidValueError,
    InvalidVariantIndexError,
    Reader,
    Writer,
    decode,
    encode,
    encoded_size,
    make_shape,
)
from bincodec.shapes import (
    I64,
    U8,
    U16,
    U32,
    Array,
    ArrayShape,
    EnumShape,
    FixedBytesShape,
    MapShape,
    OptionShape,
    RecordShape,
    SeqShape,
    TupleShape,
    UnionShape,
)

CONFIGS = [
    Config(),
    Config().with_big_endian(),
    Config().with_variable_int_encoding(),
    Config().with_variable_int_encoding().with_big_endian(),
]


class Color(Enum):
    RED = 'red'
    GREEN = 'green'
    BLUE = 'blue'


@dataclass(frozen=True)
class Circle:
    radius: float


@dataclass(frozen=True)
class Rectangle:
    width: float
    height: float


class Point(NamedTuple):
    x: Annotated[int, U16]
    y: Annotated[int, U16]


@dataclass
class Tree:
    value: Annotated[int, U8]
    children: list[Tree]


@dataclass
class LinkedList:
    value: int
    next: Optional[LinkedList]


@dataclass
class Everything:
    flag: bool
    number: int
    small: Annotated[int, U8]
    ratio: float
    name: str
    blob: bytes
    digest: Annotated[bytes, Array(4)]
    tags: list[str]
    unique: frozenset[int]
    queue: deque[int]
    scores: dict[str, Annotated[int, U32]]
    pair: tuple[int, str]
    many: tuple[int, ...]
    triple: Annotated[list[int], Array(3)]
    maybe: Optional[str]
    color: Color
    shape: Union[Circle, Rectangle]
    point: Point


EVERYTHING = Everything(
    flag=True,
    number=-123456789,
    small=200,
    ratio=0.25,
    name='héllo',
    blob=b'\x00\x01\x02',
    digest=b'abcd',
    tags=['a', 'bb', ''],
    unique=frozenset({1, 2, 3}),
    queue=deque([3, 2, 1]),
    scores={'x': 1, 'y': 70000},
    pair=(7, 'seven'),
    many=(1, 2, 3, 4),
    triple=[9, 8, 7],
    maybe=None,
    color=Color.GREEN,
    shape=Rectangle(1.5, 2.5),
    point=Point(1, 2),
)


@pytest.mark.parametrize('config', CONFIGS)
def test_round_trip(config: Config) -> None:
    data = encode(EVERYTHING, config)
    assert encoded_size(EVERYTHING, config) == len(data)
    assert decode(data, Everything, config) == EVERYTHING


@pytest.mark.parametrize('config', CONFIGS)
def test_recursive_round_trip(config: Config) -> None:
    tree = Tree(1, [Tree(2, []), Tree(3, [Tree(4, [])])])
    assert decode(encode(tree, config), Tree, config) == tree
    linked = LinkedList(1, LinkedList(2, LinkedList(3, None)))
    assert decode(encode(linked, config), LinkedList, config) == linked


def test_make_shape() -> None:
    assert make_shape(int) is I64
    assert isinstance(make_shape(list[int]), SeqShape)
    assert isinstance(make_shape(tuple[int, ...]), SeqShape)
    assert isinstance(make_shape(tuple[int, str]), TupleShape)
    assert isinstance(make_shape(dict[str, int]), MapShape)
    assert isinstance(make_shape(Optional[int]), OptionShape)
    assert isinstance(make_shape(int | None), OptionShape)
    assert isinstance(make_shape(Annotated[list[int], Array(2)]), ArrayShape)
    assert isinstance(make_shape(Annotated[bytes, Array(2)]), FixedBytesShape)
    assert isinstance(make_shape(Color), EnumShape)
    assert isinstance(make_shape(Circle | Rectangle), UnionShape)
    assert isinstance(make_shape(Point), RecordShape)
    assert isinstance(make_shape(Tree), RecordShape)


@pytest.mark.parametrize('type_', [object, list, dict, complex, Annotated[int, Array(2)]])
def test_unsupported_types(type_: object) -> None:
    with pytest.raises(TypeError):
        make_shape(type_)


def test_record_has_no_framing() -> None:
    assert encode(Point(1, 2)).hex() == '01000200'
    assert decode(bytes.fromhex('01000200'), Point) == Point(1, 2)


def test_enum_variant_index() -> None:
    assert encode(Color.RED).hex() == '00000000'
    assert encode(Color.BLUE, Config().with_variable_int_encoding()).hex() == '02'
    assert decode(bytes.fromhex('01000000'), Color) is Color.GREEN
    with pytest.raises(InvalidVariantIndexError) as exc_info:
        decode(bytes.fromhex('63000000'), Color)
    assert exc_info.value.tag == 99
    assert exc_info.value.variant_count == 3


def test_union_variant_index() -> None:
    shape = Circle | Rectangle
    data = encode(Circle(1.0), shape=shape)
    assert data.hex() == '00000000' + '000000000000f03f'
    assert decode(data, shape) == Circle(1.0)
    assert encode(Rectangle(1.0, 1.0), shape=shape)[:4] == b'\x01\x00\x00\x00'
    with pytest.raises(InvalidValueError):
        encode(Point(1, 2), shape=shape)


def test_sequence_layout() -> None:
    assert encode([1, 2], shape=list[Annotated[int, U8]]).hex() == '02000000000000000102'
    assert encode([], shape=list[int]).hex() == '0000000000000000'
    assert decode(bytes.fromhex('02000000000000000102'), set[Annotated[int, U8]]) == {1, 2}


def test_map_layout() -> None:
    config = Config().with_variable_int_encoding()
    shape = dict[str, Annotated[int, U8]]
    assert encode({'a': 1}, config, shape=shape).hex() == '01016101'
    assert decode(bytes.fromhex('01016101'), shape, config) == {'a': 1}


def test_array_length_mismatch() -> None:
    with pytest.raises(InvalidValueError):
        encode([1, 2], shape=Annotated[list[int], Array(3)])
    with pytest.raises(InvalidValueError):
        encode(b'abc', shape=Annotated[bytes, Array(4)])


def test_inferred_shapes() -> None:
    config = Config().with_variable_int_encoding()
    assert encode(None) == b''
    assert encode(True).hex() == '01'
    assert encode('hi', config).hex() == '026869'
    assert encode(b'hi', config).hex() == '026869'
    assert encode((1, 'a'), config).hex() == '020161'
    assert encode([1, 2], config).hex() == '020204'
    assert encode({'a': True}, config).hex() == '01016101'


def test_depth_limit() -> None:
    tree = Tree(0, [Tree(1, [])])
    # record > list > record > list
    config = Config().with_max_depth(4)
    data = encode(tree, config)
    assert decode(data, Tree, config) == tree

    shallow = Config().with_max_depth(3)
    with pytest.raises(DepthLimitExceededError):
        encode(tree, shallow)
    with pytest.raises(DepthLimitExceededError):
        decode(data, Tree, shallow)


def test_depth_limit_on_deep_input() -> None:
    # a long chain of `Some` tags must fail on depth, not on recursion
    data = b'\x01' * 10_000 + b'\x00'
    config = Config().with_max_depth(64)
    shape = make_shape(LinkedList)
    with pytest.raises(DepthLimitExceededError):
        decode(data, OptionShape(shape), config)


class Version:
    def __init__(self, major: int, minor: int) -> None:
        self.major = major
        self.minor = minor

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Version) and (self.major, self.minor) == (other.major, other.minor)

    def encode_to(self, writer: Writer) -> None:
        writer.write_u16(self.major)
        writer.write_u16(self.minor)

    @classmethod
    def decode_from(cls, reader: Reader) -> Version:
        major = reader.read_u16()
        minor = reader.read_u16()
        if major == 0 and minor == 0:
            raise ApplicationError('version 0.0 does not exist')
        return cls(major, minor)


def test_encodable() -> None:
    assert encode(Version(1, 2)).hex() == '01000200'
    assert decode(bytes.fromhex('01000200'), Version) == Version(1, 2)
    assert decode(encode([Version(3, 4)]), list[Version]) == [Version(3, 4)]


def test_application_error_passes_through() -> None:
    with pytest.raises(ApplicationError) as exc_info:
        decode(bytes.fromhex('00000000'), Version)
    assert exc_info.value.message == 'version 0.0 does not exist'
