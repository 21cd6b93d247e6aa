"""
Classes in :py:mod:`jsonapi_client.models` represent the elements of a JSON:API document.

The ``data`` member of a document or a relationship is kept as a :py:class:`Payload`, an
undecoded JSON tree tagged with its shape, until the caller decides what to decode it into.
Generic variants such as ``Resource[ArticleAttributes, ArticleRelationships]`` or
``Document[Resource[ArticleAttributes]]`` decode those regions eagerly instead.
"""

import collections.abc
import dataclasses
import enum
import typing

from typing_extensions import TypeVar

from .types import JSONValue
from .utils import ALIAS, EXTENSIONS

if typing.TYPE_CHECKING:
    from .deserializer import Deserializer

T = typing.TypeVar("T")

Meta = typing.Dict[str, typing.Any]


@dataclasses.dataclass(frozen=True)
class Link:
    """
    A `Link <https://jsonapi.org/format/#document-links-link-object>`_.

    On the wire a link is either the bare URI or an object carrying ``href`` and the optional members below.
    A link with no optional member is always rendered as the bare URI.

    Links are hashable; ``meta`` takes part in equality but not in the hash.
    """

    href: str
    rel: typing.Optional[str] = None
    describedby: typing.Optional["Link"] = None
    title: typing.Optional[str] = None
    type: typing.Optional[str] = None
    hreflang: typing.Optional[str] = None
    meta: typing.Optional[Meta] = dataclasses.field(default=None, hash=False)


@dataclasses.dataclass
class LinksObject:
    """
    A ``links`` member of a document or a relationship.  Links under non-standard names end up in :py:attr:`extensions`.
    """

    self_: typing.Optional[Link] = dataclasses.field(default=None, metadata={ALIAS: "self"})
    related: typing.Optional[Link] = None
    describedby: typing.Optional[Link] = None
    first: typing.Optional[Link] = None
    last: typing.Optional[Link] = None
    prev: typing.Optional[Link] = None
    next: typing.Optional[Link] = None
    extensions: typing.Dict[str, typing.Optional[Link]] = dataclasses.field(
        default_factory=dict, metadata={EXTENSIONS: True}
    )


@dataclasses.dataclass
class ErrorLinksObject:
    about: typing.Optional[Link] = None
    type: typing.Optional[Link] = None
    extensions: typing.Dict[str, typing.Optional[Link]] = dataclasses.field(
        default_factory=dict, metadata={EXTENSIONS: True}
    )


@dataclasses.dataclass
class ErrorSource:
    pointer: typing.Optional[str] = None
    parameter: typing.Optional[str] = None
    header: typing.Optional[str] = None


@dataclasses.dataclass
class Error:
    """
    An `Error Object <https://jsonapi.org/format/#error-objects>`_.
    """

    id: typing.Optional[str] = None
    links: typing.Optional[ErrorLinksObject] = None
    status: typing.Optional[str] = None
    code: typing.Optional[str] = None
    title: typing.Optional[str] = None
    detail: typing.Optional[str] = None
    source: typing.Optional[ErrorSource] = None
    meta: typing.Optional[Meta] = None


@dataclasses.dataclass
class JsonApiInfo:
    version: typing.Optional[str] = None
    ext: typing.Optional[typing.List[str]] = None
    profile: typing.Optional[typing.List[str]] = None
    meta: typing.Optional[Meta] = None


class PayloadKind(enum.Enum):
    NULL = "null"
    SINGLE = "single"
    COLLECTION = "collection"
    SCALAR = "scalar"


@dataclasses.dataclass(frozen=True)
class Payload:
    """
    :py:class:`Payload` holds a ``data`` member as it was read, along with its shape.

    The shape is decided once, from the JSON value alone: an object is :py:attr:`PayloadKind.SINGLE`, an array
    (even an empty one) is :py:attr:`PayloadKind.COLLECTION`.  Other scalars are accepted here and rejected by
    :py:meth:`single` and :py:meth:`collection`.
    """

    kind: PayloadKind
    value: JSONValue = None

    @classmethod
    def from_json(cls, value: JSONValue) -> "Payload":
        if value is None:
            return cls(PayloadKind.NULL)
        elif isinstance(value, collections.abc.Mapping):
            return cls(PayloadKind.SINGLE, value)
        elif isinstance(value, collections.abc.Sequence) and not isinstance(value, str):
            return cls(PayloadKind.COLLECTION, value)
        else:
            return cls(PayloadKind.SCALAR, value)

    @property
    def is_null(self) -> bool:
        return self.kind is PayloadKind.NULL

    @property
    def is_single(self) -> bool:
        return self.kind is PayloadKind.SINGLE

    @property
    def is_collection(self) -> bool:
        return self.kind is PayloadKind.COLLECTION

    def single(
        self,
        resource_type: typing.Optional[typing.Type[T]] = None,
        deserializer: typing.Optional["Deserializer"] = None,
    ) -> typing.Optional[T]:
        """
        Decodes an object payload into ``resource_type`` (:py:class:`Resource` by default).

        :return: the decoded value, or ``None`` if the payload is ``null``.
        :raises ShapeMismatchError: if the payload is not an object.
        :raises DeserializationError: if the object does not fit ``resource_type``.
        """
        from .deserializer import DEFAULT_DESERIALIZER
        from .exceptions import ShapeMismatchError

        if self.kind is PayloadKind.NULL:
            return None
        if self.kind is not PayloadKind.SINGLE:
            raise ShapeMismatchError(
                PayloadKind.SINGLE.value,
                self.kind.value,
                "data is not an object; use the collection projection",
            )
        return (deserializer or DEFAULT_DESERIALIZER)(
            resource_type if resource_type is not None else Resource, self.value
        )

    def collection(
        self,
        resource_type: typing.Optional[typing.Type[T]] = None,
        deserializer: typing.Optional["Deserializer"] = None,
    ) -> typing.Optional[typing.List[T]]:
        """
        Decodes an array payload into a list of ``resource_type`` (:py:class:`Resource` by default).

        :return: the decoded list, or ``None`` if the payload is ``null``.
        :raises ShapeMismatchError: if the payload is not an array.
        :raises DeserializationError: if an item does not fit ``resource_type``.
        """
        from .deserializer import DEFAULT_DESERIALIZER
        from .exceptions import ShapeMismatchError

        if self.kind is PayloadKind.NULL:
            return None
        if self.kind is not PayloadKind.COLLECTION:
            raise ShapeMismatchError(
                PayloadKind.COLLECTION.value,
                self.kind.value,
                "data is not an array; use the single projection",
            )
        item_type = resource_type if resource_type is not None else Resource
        return (deserializer or DEFAULT_DESERIALIZER)(typing.List[item_type], self.value)  # type: ignore


def _erased(data: typing.Any) -> typing.Optional[Payload]:
    if data is None or isinstance(data, Payload):
        return data
    raise TypeError(f"data has already been decoded into {type(data).__name__}")


@dataclasses.dataclass
class ResourceIdentifier:
    """
    A `Resource Identifier Object <https://jsonapi.org/format/#document-resource-identifier-objects>`_.
    Either ``id`` or ``lid`` is expected to be present, which is left to the caller to check.
    """

    type: str
    id: typing.Optional[str] = None
    lid: typing.Optional[str] = None
    meta: typing.Optional[Meta] = None


TLinkage = TypeVar("TLinkage", default=Payload)


@dataclasses.dataclass
class Relationship(typing.Generic[TLinkage]):
    """
    A `Relationship Object <https://jsonapi.org/format/#document-resource-object-relationships>`_.

    ``Relationship`` keeps its linkage as a :py:class:`Payload`; ``Relationship[ResourceIdentifier]`` and
    ``Relationship[List[ResourceIdentifier]]`` decode it into a to-one or a to-many linkage.
    """

    links: typing.Optional[LinksObject] = None
    data: typing.Optional[TLinkage] = None
    meta: typing.Optional[Meta] = None
    extensions: typing.Dict[str, typing.Any] = dataclasses.field(
        default_factory=dict, metadata={EXTENSIONS: True}
    )

    def get_identifier(
        self, deserializer: typing.Optional["Deserializer"] = None
    ) -> typing.Optional[ResourceIdentifier]:
        payload = _erased(self.data)
        if payload is None:
            return None
        return payload.single(ResourceIdentifier, deserializer)

    def get_identifiers(
        self, deserializer: typing.Optional["Deserializer"] = None
    ) -> typing.Optional[typing.List[ResourceIdentifier]]:
        payload = _erased(self.data)
        if payload is None:
            return None
        return payload.collection(ResourceIdentifier, deserializer)


TAttributes = TypeVar("TAttributes", default=typing.Dict[str, typing.Any])
TRelationships = TypeVar("TRelationships", default=typing.Dict[str, Relationship])


@dataclasses.dataclass
class Resource(ResourceIdentifier, typing.Generic[TAttributes, TRelationships]):
    """
    A `Resource Object <https://jsonapi.org/format/#document-resource-objects>`_.

    By default ``attributes`` is a plain dictionary and ``relationships`` maps names to :py:class:`Relationship`.
    Parameterize the class to decode either into a type of your own, e.g. ``Resource[ArticleAttributes]``.
    """

    attributes: typing.Optional[TAttributes] = None
    relationships: typing.Optional[TRelationships] = None
    links: typing.Optional[typing.Dict[str, typing.Optional[Link]]] = None


TData = TypeVar("TData", default=Payload)


@dataclasses.dataclass
class Document(typing.Generic[TData]):
    """
    A JSON:API `top-level document <https://jsonapi.org/format/#document-top-level>`_.

    ``data`` and ``errors`` are reported independently of one another; a document carrying both is not rejected.
    Top-level members this class does not know about are kept in :py:attr:`extensions`.
    """

    jsonapi: typing.Optional[JsonApiInfo] = None
    data: typing.Optional[TData] = None
    errors: typing.Optional[typing.List[Error]] = None
    links: typing.Optional[LinksObject] = None
    included: typing.Optional[typing.List[Resource]] = None
    meta: typing.Optional[Meta] = None
    extensions: typing.Dict[str, typing.Any] = dataclasses.field(
        default_factory=dict, metadata={EXTENSIONS: True}
    )

    @property
    def has_single_resource(self) -> bool:
        if isinstance(self.data, Payload):
            return self.data.is_single
        return self.data is not None and not isinstance(self.data, collections.abc.Sequence)

    @property
    def has_collection_resource(self) -> bool:
        if isinstance(self.data, Payload):
            return self.data.is_collection
        return isinstance(self.data, collections.abc.Sequence)

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)

    def get_resource(
        self,
        resource_type: typing.Optional[typing.Type[T]] = None,
        deserializer: typing.Optional["Deserializer"] = None,
    ) -> typing.Optional[T]:
        """
        Decodes ``data`` as a single resource.  See :py:meth:`Payload.single`.
        """
        payload = _erased(self.data)
        if payload is None:
            return None
        return payload.single(resource_type, deserializer)

    def get_resource_collection(
        self,
        resource_type: typing.Optional[typing.Type[T]] = None,
        deserializer: typing.Optional["Deserializer"] = None,
    ) -> typing.Optional[typing.List[T]]:
        """
        Decodes ``data`` as a resource collection.  See :py:meth:`Payload.collection`.
        """
        payload = _erased(self.data)
        if payload is None:
            return None
        return payload.collection(resource_type, deserializer)


def single_document_type(resource_type: typing.Any = Resource) -> typing.Any:
    """
    Returns the document type whose ``data`` decodes into a single ``resource_type``.
    """
    return Document[resource_type]


def collection_document_type(resource_type: typing.Any = Resource) -> typing.Any:
    """
    Returns the document type whose ``data`` decodes into a list of ``resource_type``.
    """
    return Document[typing.List[resource_type]]  # type: ignore


# the library's own entities; their None members stand for absent JSON members
ENTITY_TYPES = (
    Link,
    LinksObject,
    ErrorLinksObject,
    ErrorSource,
    Error,
    JsonApiInfo,
    ResourceIdentifier,
    Relationship,
    Document,
)
