"""
Async helpers reading JSON:API documents out of :py:class:`httpx.Response` objects.

.. code-block:: python

   async with httpx.AsyncClient(headers={"Accept": accept_header()}) as client:
       response = await client.get("https://example.com/articles")
       doc = await read_collection_document(response, Resource[ArticleAttributes])
"""

import logging
import typing

import httpx

from .codec import JSONAPICodec, default_codec
from .models import Document, Resource

logger = logging.getLogger(__name__)


async def _read_body(response: httpx.Response) -> bytes:
    body = await response.aread()
    logger.debug("read %d bytes of response body (status %d)", len(body), response.status_code)
    return body


async def read_document(
    response: httpx.Response, codec: typing.Optional[JSONAPICodec] = None
) -> typing.Optional[Document]:
    """
    Reads the body of ``response`` as a document whose ``data`` is left undecoded.

    :return: the document, or ``None`` if the body is empty or ``null``.
    """
    body = await _read_body(response)
    return (codec or default_codec).parse_document(body)


async def read_single_document(
    response: httpx.Response,
    resource_type: typing.Any = Resource,
    codec: typing.Optional[JSONAPICodec] = None,
) -> typing.Optional[Document]:
    """
    Reads the body of ``response`` as a document whose ``data`` is a single ``resource_type``.
    """
    body = await _read_body(response)
    return (codec or default_codec).parse_single_document(body, resource_type)


async def read_collection_document(
    response: httpx.Response,
    resource_type: typing.Any = Resource,
    codec: typing.Optional[JSONAPICodec] = None,
) -> typing.Optional[Document]:
    """
    Reads the body of ``response`` as a document whose ``data`` is a list of ``resource_type``.
    """
    body = await _read_body(response)
    return (codec or default_codec).parse_collection_document(body, resource_type)
