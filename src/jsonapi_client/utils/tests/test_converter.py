import dataclasses
import datetime
import decimal
import enum
import typing

import pytest
from typing_extensions import TypeVar

from ..converter import (
    ALIAS,
    EXTENSIONS,
    CustomConverterFuncAdapter,
    ErrorCollectingConverterContext,
    JsonicDataValidationError,
    dataclass_field_types,
    resolve_type_var,
)
from ..jsonpointer import JSONPointer


@dataclasses.dataclass
class Point:
    x: int
    y: int = 0
    label: typing.Optional[str] = None


@dataclasses.dataclass
class Polygon:
    points: typing.List[Point]
    closed_: bool = dataclasses.field(default=False, metadata={ALIAS: "closed"})


@dataclasses.dataclass
class Bag:
    name: str
    rest: typing.Dict[str, int] = dataclasses.field(default_factory=dict, metadata={EXTENSIONS: True})


TItem = TypeVar("TItem", default=int)


@dataclasses.dataclass
class Box(typing.Generic[TItem]):
    item: TItem


class Color(enum.Enum):
    RED = "red"
    BLUE = "blue"


@pytest.fixture
def target():
    from ..converter import PyTypedJsonicDataConverter

    return PyTypedJsonicDataConverter


def test_scalars(target):
    conv = target()
    ctx = ErrorCollectingConverterContext()
    assert conv.convert(ctx, str, "a") == "a"
    assert conv.convert(ctx, int, 1) == 1
    assert conv.convert(ctx, float, 1) == 1.0
    assert conv.convert(ctx, bool, False) is False
    assert conv.convert(ctx, typing.Any, {"a": [1]}) == {"a": [1]}
    assert conv.convert(ctx, decimal.Decimal, "1.50") == decimal.Decimal("1.50")
    assert conv.convert(ctx, datetime.date, "2024-01-02") == datetime.date(2024, 1, 2)
    assert conv.convert(ctx, datetime.datetime, "2024-01-02T03:04:05Z") == datetime.datetime(
        2024, 1, 2, 3, 4, 5, tzinfo=datetime.timezone.utc
    )
    assert conv.convert(ctx, Color, "blue") is Color.BLUE
    assert ctx.errors == []


def test_scalar_mismatch(target):
    conv = target()
    ctx = ErrorCollectingConverterContext()
    conv.convert(ctx, int, True)
    conv.convert(ctx, str, 1)
    conv.convert(ctx, datetime.date, "yesterday")
    assert [e.message for e in ctx.errors] == [
        "value has type boolean (true) where integer expected",
        "value has type integer (1) where string expected",
        'value has type string ("yesterday") where date string expected',
    ]


def test_union(target):
    conv = target()
    ctx = ErrorCollectingConverterContext()
    v = conv.convert(ctx, typing.Union[int, float], 1)
    assert v == 1 and isinstance(v, int)
    v = conv.convert(ctx, typing.Union[float, int], 1)
    assert v == 1 and isinstance(v, int)
    assert conv.convert(ctx, typing.Union[int, float], 1.5) == 1.5
    assert conv.convert(ctx, typing.Optional[str], None) is None
    assert conv.convert(ctx, typing.Optional[str], "a") == "a"
    assert ctx.errors == []

    conv.convert(ctx, typing.Union[int, str], None)
    assert ctx.errors == [
        JsonicDataValidationError(
            JSONPointer(), "value has type null (null) where integer or string expected"
        )
    ]


def test_optional_reports_inner_error(target):
    conv = target()
    ctx = ErrorCollectingConverterContext()
    conv.convert(ctx, typing.Optional[Point], {"y": 1})
    assert ctx.errors == [
        JsonicDataValidationError(JSONPointer("/x"), 'value must have a property "x"')
    ]


def test_dataclass(target):
    conv = target()
    ctx = ErrorCollectingConverterContext()
    result = conv.convert(
        ctx,
        Polygon,
        {"points": [{"x": 1}, {"x": 2, "y": 3, "label": "b", "unknown": True}], "closed": True},
    )
    assert ctx.errors == []
    assert result == Polygon(points=[Point(x=1), Point(x=2, y=3, label="b")], closed_=True)


def test_dataclass_errors(target):
    conv = target()
    ctx = ErrorCollectingConverterContext()
    result = conv.convert(ctx, Polygon, {"points": [{"x": "1"}, {}]})
    assert result is None
    assert [(str(e.pointer), e.message) for e in ctx.errors] == [
        ("/points/0/x", 'value has type string ("1") where integer expected'),
        ("/points/1/x", 'value must have a property "x"'),
    ]

    ctx = ErrorCollectingConverterContext()
    conv.convert(ctx, Point, [1, 2])
    assert ctx.errors[0].message == "value has type array ([1, 2]) where Point object expected"


def test_max_errors(target):
    conv = target()
    ctx = ErrorCollectingConverterContext(max_errors=1)
    conv.convert(ctx, typing.List[int], ["a", "b", "c"])
    assert len(ctx.errors) == 1
    assert ctx.stopped


def test_extensions(target):
    conv = target()
    ctx = ErrorCollectingConverterContext()
    assert conv.convert(ctx, Bag, {"name": "a", "b": 1, "c": 2}) == Bag(name="a", rest={"b": 1, "c": 2})
    assert conv.convert(ctx, Bag, {"name": "a"}) == Bag(name="a")
    assert ctx.errors == []

    conv.convert(ctx, Bag, {"name": "a", "b": "x"})
    assert [str(e.pointer) for e in ctx.errors] == ["/b"]


def test_generic_dataclass(target):
    conv = target()
    ctx = ErrorCollectingConverterContext()
    assert conv.convert(ctx, Box[str], {"item": "x"}) == Box(item="x")
    assert conv.convert(ctx, Box[Point], {"item": {"x": 1}}) == Box(item=Point(x=1))
    assert conv.convert(ctx, Box, {"item": 1}) == Box(item=1)
    assert ctx.errors == []

    conv.convert(ctx, Box, {"item": "x"})
    assert ctx.errors[0].message == 'value has type string ("x") where integer expected'


def test_dataclass_field_types():
    assert dataclass_field_types(Box[str]) == {"item": str}
    assert dataclass_field_types(Box) == {"item": int}


def test_resolve_type_var():
    assert resolve_type_var(TItem) is int
    assert resolve_type_var(typing.TypeVar("B", bound=str)) is str
    assert resolve_type_var(typing.TypeVar("U")) is typing.Any


def test_custom_converter(target):
    conv = target(
        {
            Point: CustomConverterFuncAdapter(
                lambda typ: "coordinate pair",
                lambda converter, ctx, pointer, typ, value: (Point(x=value[0], y=value[1]), 1.0),
            )
        }
    )
    ctx = ErrorCollectingConverterContext()
    assert conv.convert(ctx, typing.List[Point], [[1, 2]]) == [Point(x=1, y=2)]
    assert conv.type_repr(typing.Optional[Point]) == "coordinate pair or null"


def test_unsupported_type(target):
    conv = target()
    with pytest.raises(TypeError):
        conv.convert(ErrorCollectingConverterContext(), complex, 1)
