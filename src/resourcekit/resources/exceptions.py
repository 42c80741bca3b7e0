"""
Errors raised by resources, resolvers and the in-memory registry.

``ResourceError.NotFound`` and ``ResourceError.OutOfSync`` are structured
:class:`ApplicationError` kinds with a ``uri`` payload. The remaining classes
are ordinary exceptions for lookup and registry precondition failures.
"""

from resourcekit.common.application_error import (
    ApplicationError,
    ApplicationErrorLiteral,
)
from resourcekit.common.uri import URI


def _not_found(uri: URI, message: str | None = None) -> ApplicationErrorLiteral:
    return ApplicationErrorLiteral(
        message=message or f"Resource '{uri}' not found.",
        data={"uri": uri},
    )


def _out_of_sync(uri: URI, message: str | None = None) -> ApplicationErrorLiteral:
    return ApplicationErrorLiteral(
        message=message or f"Resource '{uri}' is out of sync.",
        data={"uri": uri},
    )


class ResourceError:
    NotFound = ApplicationError.declare(-40000, _not_found)
    OutOfSync = ApplicationError.declare(-40001, _out_of_sync)


class ResourceProviderError(Exception):
    """Base exception for resource lookup errors."""

    def __init__(self, message: str, uri: URI | None = None):
        self.uri = uri
        super().__init__(message)


class UnregisteredResourceError(ResourceProviderError, LookupError):
    """Raised when no resolver could produce a resource for a URI."""

    def __init__(self, uri: URI):
        super().__init__(f"A resource provider for '{uri}' is not registered.", uri)


class InMemoryResourceError(ResourceProviderError):
    """Base exception for in-memory registry precondition failures."""


class ResourceAlreadyExistsError(InMemoryResourceError):
    """Raised when adding a URI that is already registered."""

    def __init__(self, uri: URI):
        super().__init__(f"Cannot add already existing in-memory resource '{uri}'", uri)


class ResourceDoesNotExistError(InMemoryResourceError, LookupError):
    """Raised when updating or resolving a URI that is not registered."""

    def __init__(self, uri: URI, message: str | None = None):
        super().__init__(message or f"In memory '{uri}' resource does not exist.", uri)
