"""Exceptions raised by the explorer.

Nothing here is retried: every error propagates to the CLI, which reports
it and ends the invocation.
"""

from typing import Any


class ExplorerError(Exception):
    """Base class for all explorer failures."""


class TransportError(ExplorerError):
    """Raised when an operation could not be executed against the endpoint."""


class HTTPError(TransportError):
    """Exception raised for a non-2xx response from the endpoint."""

    def __init__(self, status_code: int, body: str):
        self.status_code = status_code
        self.body = body
        super().__init__(f"HTTP Error {status_code} occurred")


class QueryError(TransportError):
    """Exception raised when the response carries a GraphQL errors array."""

    def __init__(self, message: str, errors: list[dict[str, Any]]):
        self.message = message
        self.errors = errors
        super().__init__(message)


class SchemaResolutionError(ExplorerError):
    """Raised when a field path cannot be resolved against the schema."""


class OperationFileError(ExplorerError):
    """Raised when a loaded .gql file holds neither a query nor a mutation."""


class LoginError(ExplorerError):
    """Raised when a login precondition is not met."""


class ConfigError(ExplorerError):
    """Raised when the persisted config file cannot be read."""
