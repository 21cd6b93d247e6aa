"""
:py:mod:`jsonapi_client.link` reads and writes the two wire forms of a :py:class:`~jsonapi_client.models.Link`.

.. code-block:: python

   >>> parse_link("https://example.com/articles")
   Link(href='https://example.com/articles', rel=None, describedby=None, title=None, type=None, hreflang=None, meta=None)
   >>> render_link(Link(href="https://example.com/articles"))
   'https://example.com/articles'
   >>> render_link(Link(href="https://example.com/articles", title="Articles"))
   {'href': 'https://example.com/articles', 'title': 'Articles'}
"""

import collections.abc
import typing

from .exceptions import MalformedLinkError
from .models import Link
from .types import JSONValue, MutableJSONObject
from .utils import JSONPointer

_STRING_MEMBERS = ("href", "rel", "title", "type", "hreflang")


def parse_link(value: JSONValue, pointer: typing.Optional[JSONPointer] = None) -> typing.Optional[Link]:
    """
    Builds a :py:class:`Link` from either of its wire forms.

    :param value: a string, an object, or ``null``.
    :param pointer: where ``value`` sits in the enclosing document; used in error messages.
    :return: the link, or ``None`` for ``null``.
    :raises MalformedLinkError: if ``value`` is neither a string nor an object, if a member has the wrong type,
        or if an object lacks ``href``.
    """
    pointer = JSONPointer() if pointer is None else pointer

    if value is None:
        return None
    if isinstance(value, str):
        return Link(href=value)
    if not isinstance(value, collections.abc.Mapping):
        raise MalformedLinkError("link must be a string or object", pointer)

    members: typing.Dict[str, typing.Any] = {}
    for k, v in value.items():
        if k in _STRING_MEMBERS:
            if v is not None and not isinstance(v, str):
                raise MalformedLinkError(f'"{k}" must be a string', pointer / k)
            members[k] = v
        elif k == "describedby":
            members[k] = parse_link(v, pointer / k)
        elif k == "meta":
            if v is not None and not isinstance(v, collections.abc.Mapping):
                raise MalformedLinkError('"meta" must be an object', pointer / k)
            members[k] = dict(v) if v is not None else None

    if members.get("href") is None:
        raise MalformedLinkError("href is required for link objects", pointer)
    return Link(**members)


def is_bare(link: Link) -> bool:
    """
    Tells whether ``link`` has nothing but ``href`` and therefore renders as a bare string.
    """
    return bool(link.href) and not (
        link.rel
        or link.describedby is not None
        or link.title
        or link.type
        or link.hreflang
        or link.meta
    )


def render_link(link: Link) -> JSONValue:
    """
    Renders ``link`` in its most compact form: the bare ``href`` when no optional member is set,
    an object otherwise.  Unset members are left out rather than written as ``null``.
    """
    if is_bare(link):
        return link.href

    retval: MutableJSONObject = {}
    if link.href:
        retval["href"] = link.href
    if link.rel:
        retval["rel"] = link.rel
    if link.describedby is not None:
        retval["describedby"] = render_link(link.describedby)
    if link.title:
        retval["title"] = link.title
    if link.type:
        retval["type"] = link.type
    if link.hreflang:
        retval["hreflang"] = link.hreflang
    if link.meta:
        retval["meta"] = link.meta
    return retval
