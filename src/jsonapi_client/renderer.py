"""
:py:mod:`jsonapi_client.renderer` turns the entities of :py:mod:`jsonapi_client.models` back into plain JSON values.

Synopsis
--------

.. code-block:: python

   import json

   from jsonapi_client.models import Document, Link, LinksObject, Payload
   from jsonapi_client.renderer import ReprRenderer

   renderer = ReprRenderer()

   doc = Document(
       links=LinksObject(self_=Link(href="/articles/1")),
       data=Payload.from_json({"type": "articles", "id": "1"}),
   )

   print(json.dumps(renderer(doc)))

"""

import base64
import collections.abc
import dataclasses
import datetime
import decimal
import enum
import typing
from collections import OrderedDict

from .link import render_link
from .models import ENTITY_TYPES, Link, Payload
from .types import JSONScalar, JSONValue
from .utils import ALIAS, EXTENSIONS, JSONPointer


class TZLocalizer(typing.Protocol):
    def localize(self, dt: datetime.datetime) -> datetime.datetime:
        ...  # pragma: nocover


class ReprRendererContext:
    parent: typing.Optional["ReprRendererContext"]
    path: JSONPointer

    def __truediv__(self, component: str) -> "ReprRendererContext":
        return ReprRendererContext(parent=self, path=(self.path / component))

    def __getitem__(self, index: int) -> "ReprRendererContext":
        return ReprRendererContext(parent=self, path=(self.path[index]))

    def __init__(
        self,
        parent: typing.Optional["ReprRendererContext"],
        path: typing.Optional[JSONPointer] = None,
    ):
        self.parent = parent
        self.path = JSONPointer() if path is None else path


class ReprRenderer:
    _render_decimal_as_str: bool = True
    _assume_naive_timezone_as: typing.Optional[datetime.tzinfo] = None

    def _dict_factory(self, items: typing.Iterable[typing.Tuple[str, typing.Any]]):
        return OrderedDict(items)

    def _render_datetime(self: "ReprRenderer", ctx: ReprRendererContext, value: typing.Any) -> JSONScalar:
        _value = typing.cast(datetime.datetime, value)
        if _value.tzinfo is None:
            if self._assume_naive_timezone_as is None:
                raise ValueError(f"{ctx.path}: naive datetime {_value}")
            else:
                if hasattr(self._assume_naive_timezone_as, "localize"):
                    _value = typing.cast(TZLocalizer, self._assume_naive_timezone_as).localize(_value)
                else:
                    _value = _value.replace(tzinfo=self._assume_naive_timezone_as)
        return _value.astimezone(datetime.timezone.utc).isoformat()

    def _render_date(self: "ReprRenderer", ctx: ReprRendererContext, value: typing.Any) -> JSONScalar:
        return typing.cast(datetime.date, value).isoformat()

    def _render_decimal(self: "ReprRenderer", ctx: ReprRendererContext, value: typing.Any) -> JSONScalar:
        _value = typing.cast(decimal.Decimal, value)
        return str(_value) if self._render_decimal_as_str else float(_value)

    def _render_bytes(self: "ReprRenderer", ctx: ReprRendererContext, value: typing.Any) -> JSONScalar:
        return base64.b64encode(typing.cast(bytes, value)).decode("ascii")

    def _render_enum(self: "ReprRenderer", ctx: ReprRendererContext, value: typing.Any) -> JSONValue:
        return self._render_value(ctx, typing.cast(enum.Enum, value).value)

    def _render_passthrough(self: "ReprRenderer", ctx: ReprRendererContext, value: typing.Any) -> JSONScalar:
        return typing.cast(JSONScalar, value)

    _supported_types: typing.ClassVar[typing.Dict[type, typing.Callable]] = {
        datetime.datetime: _render_datetime,
        datetime.date: _render_date,
        decimal.Decimal: _render_decimal,
        bytes: _render_bytes,
        enum.Enum: _render_enum,
        str: _render_passthrough,
        int: _render_passthrough,
        float: _render_passthrough,
        bool: _render_passthrough,
        None.__class__: _render_passthrough,
    }

    def _render_scalar(self, ctx: ReprRendererContext, value: typing.Any) -> JSONValue:
        # fast pass
        r = self._supported_types.get(type(value))
        if r is not None:
            return r(self, ctx, value)

        for type_, r in self._supported_types.items():
            if isinstance(value, type_):
                return r(self, ctx, value)

        raise TypeError(f"{ctx.path}: unsupported type {value!r}")

    def _render_dataclass(self, ctx: ReprRendererContext, value: typing.Any) -> JSONValue:
        members: typing.List[typing.Tuple[str, JSONValue]] = []
        extensions: typing.Mapping[str, typing.Any] = {}
        # members of user-defined attribute or relationship classes keep explicit nulls
        omit_none = isinstance(value, ENTITY_TYPES)
        for f in dataclasses.fields(value):
            v = getattr(value, f.name)
            if f.metadata.get(EXTENSIONS):
                extensions = v or {}
                continue
            if v is None and omit_none:
                continue
            key = f.metadata.get(ALIAS, f.name)
            members.append((key, self._render_value(ctx / key, v)))
        for k, v in extensions.items():
            members.append((k, self._render_value(ctx / k, v)))
        return self._dict_factory(members)

    def _render_value(self, ctx: ReprRendererContext, value: typing.Any) -> JSONValue:
        if isinstance(value, Link):
            return render_link(value)
        if isinstance(value, Payload):
            return value.value
        if dataclasses.is_dataclass(value) and not isinstance(value, type):
            return self._render_dataclass(ctx, value)
        if isinstance(value, collections.abc.Mapping):
            return self._dict_factory((k, self._render_value(ctx / k, v)) for k, v in value.items())
        if isinstance(value, collections.abc.Sequence) and not isinstance(value, (str, bytes)):
            return [self._render_value(ctx[i], v) for i, v in enumerate(value)]
        return self._render_scalar(ctx, value)

    def __call__(self, value: typing.Any) -> JSONValue:
        """
        Renders a document, or any other entity, to a JSON value ready for :py:func:`json.dumps`.
        """
        return self._render_value(ReprRendererContext(None), value)

    def __init__(
        self,
        render_decimal_as_str: bool = True,
        assume_naive_timezone_as: typing.Optional[datetime.tzinfo] = None,
    ):
        self._render_decimal_as_str = render_decimal_as_str
        self._assume_naive_timezone_as = assume_naive_timezone_as
