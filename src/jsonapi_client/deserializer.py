import typing

from .exceptions import DeserializationError
from .link import parse_link
from .models import Link, Payload
from .types import JSONValue
from .utils import (
    ConverterContext,
    CustomConverter,
    CustomConverterFuncAdapter,
    ErrorCollectingConverterContext,
    JsonicType,
    JsonicValue,
    PyTypedJsonicDataConverter,
)
from .utils.jsonpointer import JSONPointer

T = typing.TypeVar("T")


class Deserializer:
    """
    Decodes parsed JSON into the entities of :py:mod:`jsonapi_client.models`, or into any dataclass built from them.

    .. code-block:: python

       deser = Deserializer()
       doc = deser(Document, {"data": {"type": "articles", "id": "1"}})
       article = deser(Resource[ArticleAttributes], doc.data.value)
    """

    _converter: PyTypedJsonicDataConverter
    _max_errors: typing.Optional[int]

    def _convert_link(
        self,
        converter: PyTypedJsonicDataConverter,
        ctx: ConverterContext,
        pointer: JSONPointer,
        typ: JsonicType,
        value: JSONValue,
    ) -> typing.Tuple[JsonicValue, float]:
        # MalformedLinkError is not collected; it aborts the whole decode
        return (parse_link(value, pointer), 1.0)

    def _convert_payload(
        self,
        converter: PyTypedJsonicDataConverter,
        ctx: ConverterContext,
        pointer: JSONPointer,
        typ: JsonicType,
        value: JSONValue,
    ) -> typing.Tuple[JsonicValue, float]:
        return (Payload.from_json(value), 1.0)

    def __call__(self, result_type: typing.Type[T], value: JSONValue) -> T:
        """
        :param result_type: the type to decode into.
        :param value: a parsed JSON value.
        :raises DeserializationError: listing every structural problem found in ``value``.
        :raises MalformedLinkError: on the first malformed link.
        """
        ctx = ErrorCollectingConverterContext(self._max_errors)
        retval = self._converter.convert(ctx, result_type, value)
        if ctx.errors:
            raise DeserializationError(value, ctx.errors)
        return typing.cast(T, retval)

    def __init__(
        self,
        custom_converters: typing.Optional[typing.Mapping[JsonicType, CustomConverter]] = None,
        max_errors: typing.Optional[int] = None,
    ):
        """
        :param custom_converters: extra converters keyed by the type they produce; they take precedence
            over the built-in ones.
        :param max_errors: stop decoding once this many problems have been found.
        """
        converters: typing.Dict[JsonicType, CustomConverter] = {
            Link: CustomConverterFuncAdapter(
                lambda typ: "link",
                self._convert_link,
            ),
            Payload: CustomConverterFuncAdapter(
                lambda typ: "any value",
                self._convert_payload,
            ),
        }
        if custom_converters is not None:
            converters.update(custom_converters)
        self._converter = PyTypedJsonicDataConverter(converters)
        self._max_errors = max_errors


DEFAULT_DESERIALIZER = Deserializer()
