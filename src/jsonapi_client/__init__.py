from .codec import (  # noqa
    JSONAPICodec,
    dumps,
    parse,
    parse_collection_document,
    parse_document,
    parse_single_document,
    render,
)
from .exceptions import (  # noqa
    DeserializationError,
    InvalidMediaTypeError,
    JSONAPIClientError,
    MalformedLinkError,
    ShapeMismatchError,
)
from .link import parse_link, render_link  # noqa
from .mediatype import MEDIA_TYPE, JSONAPIMediaType, accept_header  # noqa
from .models import (  # noqa
    Document,
    Error,
    ErrorLinksObject,
    ErrorSource,
    JsonApiInfo,
    Link,
    LinksObject,
    Payload,
    PayloadKind,
    Relationship,
    Resource,
    ResourceIdentifier,
    collection_document_type,
    single_document_type,
)
