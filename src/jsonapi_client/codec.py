"""
:py:mod:`jsonapi_client.codec` is the text-level entry point: JSON:API documents in, entities out, and back.

.. code-block:: python

   from jsonapi_client import codec
   from jsonapi_client.models import Resource

   doc = codec.parse_document(text)
   if doc is not None and doc.has_collection_resource:
       for article in doc.get_resource_collection(Resource[ArticleAttributes]):
           ...

   text = codec.dumps(doc)
"""

import json
import logging
import typing

from .deserializer import DEFAULT_DESERIALIZER, Deserializer
from .models import (
    Document,
    Resource,
    collection_document_type,
    single_document_type,
)
from .renderer import ReprRenderer
from .types import JSONValue

logger = logging.getLogger(__name__)

T = typing.TypeVar("T")

Text = typing.Union[str, bytes, bytearray]


class JSONAPICodec:
    _deserializer: Deserializer
    _renderer: ReprRenderer
    _loads: typing.Callable[[Text], JSONValue]
    _dumps: typing.Callable[..., str]
    _dumps_kwargs: typing.Mapping[str, typing.Any]

    def loads(self, text: Text) -> JSONValue:
        """
        Tokenizes ``text``; bytes are read as UTF-8, with or without a BOM.  Blank text reads as ``null``.

        :raises json.JSONDecodeError: if ``text`` is not well-formed JSON.
        """
        if isinstance(text, (bytes, bytearray)):
            text = text.decode("utf-8-sig")
        if not text.strip():
            return None
        return self._loads(text)

    def parse(self, text: Text, result_type: typing.Type[T]) -> typing.Optional[T]:
        """
        Parses ``text`` into ``result_type``.

        :return: the entity, or ``None`` if ``text`` is blank or the literal ``null``.
        :raises json.JSONDecodeError: if ``text`` is not well-formed JSON.
        :raises DeserializationError: if the JSON does not have the structure of ``result_type``.
        :raises MalformedLinkError: if a link is malformed.
        """
        value = self.loads(text)
        if value is None:
            logger.debug("no %s in empty input", getattr(result_type, "__name__", result_type))
            return None
        retval = self._deserializer(result_type, value)
        logger.debug("parsed %r", type(retval).__name__)
        return retval

    def parse_document(self, text: Text) -> typing.Optional[Document]:
        """
        Parses ``text`` into a :py:class:`Document` whose ``data`` is left undecoded.
        """
        return self.parse(text, Document)

    def parse_single_document(
        self, text: Text, resource_type: typing.Any = Resource
    ) -> typing.Optional[Document]:
        """
        Parses ``text`` into a document whose ``data`` is decoded as a single ``resource_type``.
        """
        return self.parse(text, single_document_type(resource_type))

    def parse_collection_document(
        self, text: Text, resource_type: typing.Any = Resource
    ) -> typing.Optional[Document]:
        """
        Parses ``text`` into a document whose ``data`` is decoded as a list of ``resource_type``.
        """
        return self.parse(text, collection_document_type(resource_type))

    def render(self, entity: typing.Any) -> JSONValue:
        return self._renderer(entity)

    def dumps(self, entity: typing.Any) -> str:
        return self._dumps(self.render(entity), **self._dumps_kwargs)

    def __init__(
        self,
        deserializer: typing.Optional[Deserializer] = None,
        renderer: typing.Optional[ReprRenderer] = None,
        loads: typing.Callable[[Text], JSONValue] = json.loads,
        dumps: typing.Callable[..., str] = json.dumps,
        **dumps_kwargs: typing.Any,
    ):
        """
        :param Optional[Deserializer] deserializer: decodes parsed JSON; the shared default one if omitted.
        :param Optional[ReprRenderer] renderer: encodes entities; a default :py:class:`ReprRenderer` if omitted.
        :param loads: the JSON tokenizer.
        :param dumps: the JSON writer.
        :param dumps_kwargs: passed on to ``dumps``, e.g. ``indent=2`` or ``ensure_ascii=False``.
        """
        self._deserializer = deserializer if deserializer is not None else DEFAULT_DESERIALIZER
        self._renderer = renderer if renderer is not None else ReprRenderer()
        self._loads = loads
        self._dumps = dumps
        self._dumps_kwargs = dumps_kwargs


default_codec = JSONAPICodec()

parse = default_codec.parse
parse_document = default_codec.parse_document
parse_single_document = default_codec.parse_single_document
parse_collection_document = default_codec.parse_collection_document
render = default_codec.render
dumps = default_codec.dumps
