"""Authentication handlers for the GraphQL transport.

The endpoint authenticates every request with the per-process session
token, which the server binds to a user after the legacy login mutation.
"""

from typing import Dict, Protocol, runtime_checkable

from .config import SessionConfig


@runtime_checkable
class Auth(Protocol):
    """Protocol for authentication handlers.

    Example:
        class StaticAuth:
            def get_headers(self) -> dict[str, str]:
                return {"authorization": "Bearer abc"}
    """

    def get_headers(self) -> Dict[str, str]:
        """Return headers to include in requests."""
        ...


class SessionAuth:
    """Bearer authentication with the session token of a SessionConfig.

    The header is computed on every call, so a reloaded or regenerated
    token is picked up without rebuilding the transport.

    Args:
        config: The live session configuration
    """

    def __init__(self, config: SessionConfig):
        self.config = config

    def get_headers(self) -> Dict[str, str]:
        return {"authorization": f"Bearer {self.config.session_token}"}
