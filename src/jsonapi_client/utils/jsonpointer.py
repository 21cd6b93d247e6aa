"""
:py:mod:`jsonapi_client.utils.jsonpointer` implements `RFC 6901 <https://tools.ietf.org/html/rfc6901>`_ JSON pointers,
which are used to locate the offending node when a document fails to decode.
"""

import typing


def _escape(component: str) -> str:
    return component.replace("~", "~0").replace("/", "~1")


def _unescape(component: str) -> str:
    return component.replace("~1", "/").replace("~0", "~")


class JSONPointer:
    """
    An immutable sequence of reference tokens.

    ``pointer / "key"`` appends an object member and ``pointer[0]`` appends an array index.
    """

    _components: typing.Tuple[str, ...]

    @property
    def components(self) -> typing.Tuple[str, ...]:
        return self._components

    @property
    def parent(self) -> "JSONPointer":
        if not self._components:
            raise ValueError("root pointer has no parent")
        return self._from_components(self._components[:-1])

    @classmethod
    def _from_components(cls, components: typing.Tuple[str, ...]) -> "JSONPointer":
        pointer = object.__new__(cls)
        pointer._components = components
        return pointer

    def __truediv__(self, component: typing.Union[str, int]) -> "JSONPointer":
        return self._from_components(self._components + (str(component),))

    def __getitem__(self, index: int) -> "JSONPointer":
        return self / index

    def __len__(self) -> int:
        return len(self._components)

    def __eq__(self, that: typing.Any) -> bool:
        if not isinstance(that, JSONPointer):
            return NotImplemented
        return self._components == that._components

    def __hash__(self) -> int:
        return hash(self._components)

    def __str__(self) -> str:
        return "".join("/" + _escape(c) for c in self._components)

    def __repr__(self) -> str:
        return f"JSONPointer({str(self)!r})"

    def __init__(self, pointer: str = ""):
        if pointer == "":
            self._components = ()
        elif not pointer.startswith("/"):
            raise ValueError(f"invalid JSON pointer: {pointer!r}")
        else:
            self._components = tuple(_unescape(c) for c in pointer[1:].split("/"))
