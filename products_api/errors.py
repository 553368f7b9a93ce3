# products_api/errors.py
"""Typed failures raised by the handlers.

Handlers only say *what* went wrong (a kind plus a message). The mapping
from kind to HTTP status lives in ``STATUS_BY_KIND`` and is read by the
error translation stage in ``main.py`` and nowhere else.
"""

from enum import Enum
from typing import Dict


class ErrorKind(str, Enum):
    NOT_FOUND = "not_found"
    VALIDATION = "validation"
    UNAUTHORIZED = "unauthorized"
    GENERIC = "generic"


STATUS_BY_KIND: Dict[ErrorKind, int] = {
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.VALIDATION: 400,
    ErrorKind.UNAUTHORIZED: 401,
    ErrorKind.GENERIC: 500,
}

DEFAULT_MESSAGE = "Internal Server Error"


class ProductsError(Exception):
    """Base class for every error the service knows how to render."""

    kind = ErrorKind.GENERIC

    def __init__(self, message: str = DEFAULT_MESSAGE) -> None:
        self.message = message
        super().__init__(message)

    @property
    def status_code(self) -> int:
        return STATUS_BY_KIND[self.kind]


class NotFoundError(ProductsError):
    kind = ErrorKind.NOT_FOUND

    def __init__(self, message: str = "Product not found") -> None:
        super().__init__(message)


class ValidationError(ProductsError):
    kind = ErrorKind.VALIDATION

    def __init__(self, message: str = "Invalid product data") -> None:
        super().__init__(message)


class UnauthorizedError(ProductsError):
    kind = ErrorKind.UNAUTHORIZED

    def __init__(self, message: str = "Unauthorized: Invalid or missing API key") -> None:
        super().__init__(message)
