"""
:py:mod:`jsonapi_client.mediatype` builds and reads the `JSON:API media type
<https://jsonapi.org/format/#jsonapi-media-type>`_ with its ``ext`` and ``profile`` parameters.

.. code-block:: python

   >>> str(JSONAPIMediaType(ext=["https://jsonapi.org/ext/atomic"]))
   'application/vnd.api+json; ext="https://jsonapi.org/ext/atomic"'
"""

import dataclasses
import typing

from .exceptions import InvalidMediaTypeError

MEDIA_TYPE = "application/vnd.api+json"
EXTENSIONS_PARAMETER = "ext"
PROFILES_PARAMETER = "profile"
QUALITY_PARAMETER = "q"

INVALID_MEDIA_TYPE = "invalid media type; see https://jsonapi.org/format/#jsonapi-media-type"
INVALID_PARAMETERS = (
    "only `ext` and `profile` parameters are allowed; "
    "see https://jsonapi.org/format/#media-type-parameter-rules"
)


def _split_parameters(value: str) -> typing.List[str]:
    return [part.strip() for part in value.split(";") if part.strip()]


def _parse_uri_list(value: str) -> typing.Tuple[str, ...]:
    if len(value) >= 2 and value.startswith('"') and value.endswith('"'):
        value = value[1:-1]
    return tuple(value.split())


@dataclasses.dataclass(frozen=True)
class JSONAPIMediaType:
    ext: typing.Tuple[str, ...] = ()
    profile: typing.Tuple[str, ...] = ()
    quality: typing.Optional[float] = None

    def __post_init__(self):
        # accept any iterable of URIs, store a tuple
        object.__setattr__(self, "ext", tuple(self.ext))
        object.__setattr__(self, "profile", tuple(self.profile))
        if self.quality is not None and not 0.0 <= self.quality <= 1.0:
            raise ValueError(f"quality must be between 0 and 1, got {self.quality}")

    def __str__(self) -> str:
        buf = [MEDIA_TYPE]
        if self.ext:
            buf.append(f'{EXTENSIONS_PARAMETER}="{" ".join(self.ext)}"')
        if self.profile:
            buf.append(f'{PROFILES_PARAMETER}="{" ".join(self.profile)}"')
        if self.quality is not None:
            buf.append(f"{QUALITY_PARAMETER}={self.quality:g}")
        return "; ".join(buf)

    @classmethod
    def parse(cls, value: str) -> "JSONAPIMediaType":
        """
        Reads a single media type as found in a ``Content-Type`` header or one entry of an ``Accept`` header.

        :raises InvalidMediaTypeError: if the media type is not the JSON:API one, or if it carries
            parameters other than ``ext``, ``profile`` and ``q``.
        """
        parts = _split_parameters(value)
        if not parts or parts[0].lower() != MEDIA_TYPE:
            raise InvalidMediaTypeError(value, INVALID_MEDIA_TYPE)

        ext: typing.Tuple[str, ...] = ()
        profile: typing.Tuple[str, ...] = ()
        quality: typing.Optional[float] = None
        for param in parts[1:]:
            name, sep, raw_value = param.partition("=")
            name = name.strip().lower()
            raw_value = raw_value.strip()
            if not sep:
                raise InvalidMediaTypeError(value, INVALID_PARAMETERS)
            if name == EXTENSIONS_PARAMETER:
                ext = _parse_uri_list(raw_value)
            elif name == PROFILES_PARAMETER:
                profile = _parse_uri_list(raw_value)
            elif name == QUALITY_PARAMETER:
                try:
                    quality = float(raw_value)
                except ValueError:
                    raise InvalidMediaTypeError(value, INVALID_PARAMETERS)
            else:
                raise InvalidMediaTypeError(value, INVALID_PARAMETERS)
        try:
            return cls(ext=ext, profile=profile, quality=quality)
        except ValueError:
            raise InvalidMediaTypeError(value, INVALID_PARAMETERS)


def accept_header(*media_types: JSONAPIMediaType) -> str:
    """
    Joins ``media_types`` into an ``Accept`` header value; the bare JSON:API media type if none is given.
    """
    if not media_types:
        return MEDIA_TYPE
    return ", ".join(str(m) for m in media_types)
