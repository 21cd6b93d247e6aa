import abc
import typing

from .types import JSONValue
from .utils import JSONPointer, english_enumerate


class JSONAPIClientError(Exception, metaclass=abc.ABCMeta):
    @property
    @abc.abstractmethod
    def message(self) -> str:
        ...  # pragma: nocover

    def __str__(self) -> str:
        return self.message


class DeserializationErrorItem(typing.Protocol):
    pointer: JSONPointer
    message: str


class DeserializationError(JSONAPIClientError):
    """
    Raised when a JSON value does not have the structure of the requested type.
    Every problem found is listed in :py:attr:`errors`, each located by a JSON pointer.
    """

    payload: JSONValue
    errors: typing.Sequence[DeserializationErrorItem]

    @property
    def message(self) -> str:
        return english_enumerate(
            (f"{e.pointer or '(root)'}: {e.message}" for e in self.errors), conj=", and "
        )

    def __init__(self, payload: JSONValue, errors: typing.Sequence[DeserializationErrorItem]):
        super().__init__(payload, errors)
        self.payload = payload
        self.errors = errors


class MalformedLinkError(JSONAPIClientError):
    pointer: JSONPointer
    detail: str

    @property
    def message(self) -> str:
        return f"{self.pointer or '(root)'}: {self.detail}"

    def __init__(self, detail: str, pointer: typing.Optional[JSONPointer] = None):
        super().__init__(detail, pointer)
        self.detail = detail
        self.pointer = JSONPointer() if pointer is None else pointer


class ShapeMismatchError(JSONAPIClientError):
    expected: str
    actual: str
    detail: str

    @property
    def message(self) -> str:
        return self.detail

    def __init__(self, expected: str, actual: str, detail: str):
        super().__init__(expected, actual, detail)
        self.expected = expected
        self.actual = actual
        self.detail = detail


class InvalidMediaTypeError(JSONAPIClientError):
    value: str
    detail: str

    @property
    def message(self) -> str:
        return f"{self.detail}: {self.value!r}"

    def __init__(self, value: str, detail: str):
        super().__init__(value, detail)
        self.value = value
        self.detail = detail
