"""
:py:mod:`jsonapi_client.utils.converter` turns plain JSON values into typed Python values, guided by type hints.

Supported targets are ``typing.Any``, ``None``, the JSON scalars, :py:class:`datetime.datetime`,
:py:class:`datetime.date`, :py:class:`decimal.Decimal`, :py:class:`enum.Enum` subclasses, ``Optional`` / ``Union``,
sequences, string-keyed mappings, and dataclasses (generic ones included).  Anything else can be plugged in through
a :py:class:`CustomConverter`.

Dataclass fields understand two metadata keys:

``alias``
    the JSON member name, when it differs from the attribute name.

``extensions``
    marks a mapping-typed field that receives every member not claimed by another field.
"""

import abc
import collections.abc
import dataclasses
import datetime
import decimal
import enum
import json
import math
import types
import typing

from typing_extensions import NoDefault

from .formatting import english_enumerate
from .jsonpointer import JSONPointer

JsonicScalar = typing.Union[bool, int, float, str, None]
JsonicArray = typing.Sequence[typing.Any]
JsonicObject = typing.Mapping[str, typing.Any]
JsonicValue = typing.Any
JsonicType = typing.Any

ALIAS = "alias"
EXTENSIONS = "extensions"

NoneType = type(None)
UnionType = getattr(types, "UnionType", None)

_SEQUENCE_ORIGINS = (
    list,
    tuple,
    collections.abc.Sequence,
    collections.abc.MutableSequence,
)
_MAPPING_ORIGINS = (
    dict,
    collections.abc.Mapping,
    collections.abc.MutableMapping,
)


@dataclasses.dataclass(frozen=True)
class JsonicDataValidationError:
    pointer: JSONPointer
    message: str

    def __str__(self) -> str:
        return f"{self.pointer or '(root)'}: {self.message}"


class ConverterContext(metaclass=abc.ABCMeta):
    @property
    @abc.abstractmethod
    def stopped(self) -> bool:
        ...  # pragma: nocover

    @property
    @abc.abstractmethod
    def error_count(self) -> int:
        ...  # pragma: nocover

    @abc.abstractmethod
    def validation_error_occurred(self, error: JsonicDataValidationError) -> None:
        ...  # pragma: nocover


class ErrorCollectingConverterContext(ConverterContext):
    errors: typing.List[JsonicDataValidationError]
    max_errors: typing.Optional[int]

    @property
    def stopped(self) -> bool:
        return self.max_errors is not None and len(self.errors) >= self.max_errors

    @property
    def error_count(self) -> int:
        return len(self.errors)

    def validation_error_occurred(self, error: JsonicDataValidationError) -> None:
        self.errors.append(error)

    def __init__(self, max_errors: typing.Optional[int] = None):
        self.errors = []
        self.max_errors = max_errors


class CustomConverter(typing.Protocol):
    def type_repr(self, typ: JsonicType) -> str:
        ...  # pragma: nocover

    def __call__(
        self,
        converter: "PyTypedJsonicDataConverter",
        ctx: ConverterContext,
        pointer: JSONPointer,
        typ: JsonicType,
        value: JsonicValue,
    ) -> typing.Tuple[JsonicValue, float]:
        ...  # pragma: nocover


class CustomConverterFuncAdapter:
    _type_repr: typing.Callable[[JsonicType], str]
    _convert: typing.Callable[..., typing.Tuple[JsonicValue, float]]

    def type_repr(self, typ: JsonicType) -> str:
        return self._type_repr(typ)

    def __call__(
        self,
        converter: "PyTypedJsonicDataConverter",
        ctx: ConverterContext,
        pointer: JSONPointer,
        typ: JsonicType,
        value: JsonicValue,
    ) -> typing.Tuple[JsonicValue, float]:
        return self._convert(converter, ctx, pointer, typ, value)

    def __init__(
        self,
        type_repr: typing.Callable[[JsonicType], str],
        convert: typing.Callable[..., typing.Tuple[JsonicValue, float]],
    ):
        self._type_repr = type_repr
        self._convert = convert


def resolve_type_var(tv: typing.TypeVar) -> JsonicType:
    """
    Returns the type an unbound type variable stands for: its default, then its bound, then ``Any``.
    """
    default = getattr(tv, "__default__", NoDefault)
    if default is not NoDefault and default is not None:
        return default
    if tv.__bound__ is not None:
        return tv.__bound__
    return typing.Any


def is_union(typ: JsonicType) -> bool:
    origin = typing.get_origin(typ)
    return origin is typing.Union or (UnionType is not None and origin is UnionType)


def substitute_type_vars(
    typ: JsonicType, mapping: typing.Mapping[typing.TypeVar, JsonicType]
) -> JsonicType:
    if isinstance(typ, typing.TypeVar):
        return mapping.get(typ, typ)
    origin = typing.get_origin(typ)
    args = typing.get_args(typ)
    if origin is None or not args:
        return typ
    new_args = tuple(substitute_type_vars(a, mapping) for a in args)
    if new_args == args:
        return typ
    if is_union(typ):
        return typing.Union[new_args]
    return origin[new_args]


def dataclass_field_types(typ: JsonicType) -> typing.Dict[str, JsonicType]:
    """
    Returns the resolved type of each field of a (possibly parameterized) dataclass.
    Type parameters the caller left out fall back to :py:func:`resolve_type_var`.
    """
    origin = typing.get_origin(typ) or typ
    args = typing.get_args(typ) if typing.get_origin(typ) is not None else ()
    params = getattr(origin, "__parameters__", ())
    mapping: typing.Dict[typing.TypeVar, JsonicType] = {}
    for i, param in enumerate(params):
        mapping[param] = args[i] if i < len(args) else resolve_type_var(param)
    hints = typing.get_type_hints(origin)
    return {
        f.name: substitute_type_vars(hints[f.name], mapping) for f in dataclasses.fields(origin)
    }


class PyTypedJsonicDataConverter:
    """
    Each conversion step yields a pair of the converted value and its cost.  The cost is used to
    pick the best alternative of a union: the cheapest one that converts without errors wins,
    and the first one wins a tie.  A failed step costs ``math.inf``.
    """

    _custom_converters: typing.Mapping[JsonicType, CustomConverter]

    _py_type_names: typing.ClassVar[typing.Mapping[type, str]] = {
        dict: "object",
        list: "array",
        tuple: "array",
        str: "string",
        bool: "boolean",
        int: "integer",
        float: "number",
        NoneType: "null",
    }

    _type_names: typing.ClassVar[typing.Mapping[type, str]] = {
        str: "string",
        bool: "boolean",
        int: "integer",
        float: "number",
        datetime.datetime: "date-time string",
        datetime.date: "date string",
        decimal.Decimal: "decimal number",
        NoneType: "null",
    }

    def _lookup_custom_converter(self, typ: JsonicType) -> typing.Optional[CustomConverter]:
        conv = self._custom_converters.get(typ)
        if conv is None:
            origin = typing.get_origin(typ)
            if origin is not None:
                conv = self._custom_converters.get(origin)
        return conv

    def py_type_repr(self, typ: type) -> str:
        for k, v in self._py_type_names.items():
            if issubclass(typ, k):
                return v
        if issubclass(typ, collections.abc.Mapping):
            return "object"
        return typ.__name__

    def type_repr(self, typ: JsonicType) -> str:
        if typ is typing.Any:
            return "any value"
        if isinstance(typ, typing.TypeVar):
            return self.type_repr(resolve_type_var(typ))
        if typ is None:
            typ = NoneType
        conv = self._lookup_custom_converter(typ)
        if conv is not None:
            return conv.type_repr(typ)
        if is_union(typ):
            return english_enumerate(self.type_repr(a) for a in typing.get_args(typ))
        origin = typing.get_origin(typ)
        if origin in _SEQUENCE_ORIGINS:
            args = typing.get_args(typ)
            return f"array of {self.type_repr(args[0])}" if args else "array"
        if origin in _MAPPING_ORIGINS or typ in _MAPPING_ORIGINS:
            return "object"
        if origin is None and typ in _SEQUENCE_ORIGINS:
            return "array"
        if dataclasses.is_dataclass(origin or typ):
            return f"{(origin or typ).__name__} object"
        if isinstance(typ, type) and issubclass(typ, enum.Enum):
            return english_enumerate((repr(m.value) for m in typ), conj=", or ")
        name = self._type_names.get(typ)
        if name is not None:
            return name
        return repr(typ)

    def type_mismatch(
        self, ctx: ConverterContext, pointer: JSONPointer, typ: JsonicType, value: JsonicValue
    ) -> typing.Tuple[JsonicValue, float]:
        ctx.validation_error_occurred(
            JsonicDataValidationError(
                pointer,
                f"value has type {self.py_type_repr(type(value))} ({json.dumps(value, default=str)}) where {self.type_repr(typ)} expected",
            )
        )
        return (None, math.inf)

    def _convert_union(
        self, ctx: ConverterContext, pointer: JSONPointer, typ: JsonicType, value: JsonicValue
    ) -> typing.Tuple[JsonicValue, float]:
        args = typing.get_args(typ)
        if value is not None and NoneType in args:
            rest = tuple(a for a in args if a is not NoneType)
            if len(rest) == 1:
                return self._convert(ctx, pointer, rest[0], value)

        best: typing.Optional[typing.Tuple[JsonicValue, float]] = None
        for alt in args:
            sub_ctx = ErrorCollectingConverterContext()
            result = self._convert(sub_ctx, pointer, alt, value)
            if sub_ctx.errors:
                continue
            if best is None or result[1] < best[1]:
                best = result
        if best is None:
            return self.type_mismatch(ctx, pointer, typ, value)
        return best

    def _convert_sequence(
        self, ctx: ConverterContext, pointer: JSONPointer, typ: JsonicType, value: JsonicValue
    ) -> typing.Tuple[JsonicValue, float]:
        if isinstance(value, (str, bytes)) or not isinstance(value, collections.abc.Sequence):
            return self.type_mismatch(ctx, pointer, typ, value)
        args = typing.get_args(typ)
        item_type = args[0] if args else typing.Any
        if len(args) > 1 and args[1] is not Ellipsis:
            raise TypeError(f"fixed-length tuples are not supported: {typ!r}")
        items = []
        for i, item in enumerate(value):
            items.append(self._convert(ctx, pointer[i], item_type, item)[0])
            if ctx.stopped:
                break
        origin = typing.get_origin(typ) or typ
        return (tuple(items) if origin is tuple else items, 1.0)

    def _convert_mapping(
        self, ctx: ConverterContext, pointer: JSONPointer, typ: JsonicType, value: JsonicValue
    ) -> typing.Tuple[JsonicValue, float]:
        if not isinstance(value, collections.abc.Mapping):
            return self.type_mismatch(ctx, pointer, typ, value)
        args = typing.get_args(typ)
        value_type = args[1] if len(args) == 2 else typing.Any
        result: typing.Dict[str, JsonicValue] = {}
        for k, v in value.items():
            result[k] = self._convert(ctx, pointer / k, value_type, v)[0]
            if ctx.stopped:
                break
        return (result, 1.0)

    def _convert_dataclass(
        self, ctx: ConverterContext, pointer: JSONPointer, typ: JsonicType, value: JsonicValue
    ) -> typing.Tuple[JsonicValue, float]:
        if not isinstance(value, collections.abc.Mapping):
            return self.type_mismatch(ctx, pointer, typ, value)
        origin = typing.get_origin(typ) or typ
        field_types = dataclass_field_types(typ)
        errors_before = ctx.error_count
        kwargs: typing.Dict[str, JsonicValue] = {}
        claimed: typing.Set[str] = set()
        extensions_field: typing.Optional[dataclasses.Field] = None

        for f in dataclasses.fields(origin):
            if not f.init:
                continue
            if f.metadata.get(EXTENSIONS):
                extensions_field = f
                continue
            key = f.metadata.get(ALIAS, f.name)
            claimed.add(key)
            if key in value:
                kwargs[f.name] = self._convert(ctx, pointer / key, field_types[f.name], value[key])[0]
            elif f.default is dataclasses.MISSING and f.default_factory is dataclasses.MISSING:  # type: ignore
                ctx.validation_error_occurred(
                    JsonicDataValidationError(pointer / key, f'value must have a property "{key}"')
                )
            if ctx.stopped:
                break

        if extensions_field is not None and not ctx.stopped:
            leftovers = {k: v for k, v in value.items() if k not in claimed}
            if leftovers:
                kwargs[extensions_field.name] = self._convert(
                    ctx, pointer, field_types[extensions_field.name], leftovers
                )[0]

        if ctx.error_count > errors_before:
            return (None, math.inf)
        return (origin(**kwargs), 1.0)

    def _convert_scalar(
        self, ctx: ConverterContext, pointer: JSONPointer, typ: JsonicType, value: JsonicValue
    ) -> typing.Tuple[JsonicValue, float]:
        if typ is bool:
            if isinstance(value, bool):
                return (value, 1.0)
        elif typ is int:
            if isinstance(value, int) and not isinstance(value, bool):
                return (value, 1.0)
        elif typ is float:
            if isinstance(value, (int, float)) and not isinstance(value, bool):
                return (float(value), 1.0 if isinstance(value, float) else 1.5)
        elif typ is str:
            if isinstance(value, str):
                return (value, 1.0)
        elif typ is datetime.datetime:
            if isinstance(value, str):
                try:
                    return (datetime.datetime.fromisoformat(_normalize_utc_designator(value)), 1.0)
                except ValueError:
                    pass
        elif typ is datetime.date:
            if isinstance(value, str):
                try:
                    return (datetime.date.fromisoformat(value), 1.0)
                except ValueError:
                    pass
        elif typ is decimal.Decimal:
            if isinstance(value, (str, int, float)) and not isinstance(value, bool):
                try:
                    return (decimal.Decimal(str(value)), 1.0)
                except decimal.InvalidOperation:
                    pass
        elif isinstance(typ, type) and issubclass(typ, enum.Enum):
            try:
                return (typ(value), 1.0)
            except ValueError:
                pass
        else:
            raise TypeError(f"{pointer}: unsupported type {typ!r}")
        return self.type_mismatch(ctx, pointer, typ, value)

    def _convert(
        self, ctx: ConverterContext, pointer: JSONPointer, typ: JsonicType, value: JsonicValue
    ) -> typing.Tuple[JsonicValue, float]:
        if typ is typing.Any or typ is object:
            return (value, 1.0)
        if isinstance(typ, typing.TypeVar):
            return self._convert(ctx, pointer, resolve_type_var(typ), value)
        if typ is None or typ is NoneType:
            if value is None:
                return (None, 1.0)
            return self.type_mismatch(ctx, pointer, NoneType, value)

        conv = self._lookup_custom_converter(typ)
        if conv is not None:
            return conv(self, ctx, pointer, typ, value)

        if is_union(typ):
            return self._convert_union(ctx, pointer, typ, value)

        origin = typing.get_origin(typ)
        if origin in _SEQUENCE_ORIGINS or (origin is None and typ in _SEQUENCE_ORIGINS):
            return self._convert_sequence(ctx, pointer, typ, value)
        if origin in _MAPPING_ORIGINS or (origin is None and typ in _MAPPING_ORIGINS):
            return self._convert_mapping(ctx, pointer, typ, value)
        if dataclasses.is_dataclass(origin or typ):
            return self._convert_dataclass(ctx, pointer, typ, value)
        return self._convert_scalar(ctx, pointer, typ, value)

    def convert(
        self,
        ctx: ConverterContext,
        typ: JsonicType,
        value: JsonicValue,
        pointer: typing.Optional[JSONPointer] = None,
    ) -> JsonicValue:
        return self._convert(ctx, JSONPointer() if pointer is None else pointer, typ, value)[0]

    def __init__(
        self, custom_converters: typing.Optional[typing.Mapping[JsonicType, CustomConverter]] = None
    ):
        self._custom_converters = dict(custom_converters or {})


def _normalize_utc_designator(value: str) -> str:
    # datetime.fromisoformat() accepts a trailing "Z" only since Python 3.11
    if value.endswith(("Z", "z")):
        return value[:-1] + "+00:00"
    return value
