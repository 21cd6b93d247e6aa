from .jsonpointer import JSONPointer  # noqa
from .formatting import english_enumerate  # noqa

from .converter import (  # noqa
    ALIAS,
    EXTENSIONS,
    ConverterContext,
    CustomConverter,
    CustomConverterFuncAdapter,
    ErrorCollectingConverterContext,
    JsonicDataValidationError,
    JsonicType,
    JsonicValue,
    PyTypedJsonicDataConverter,
)
