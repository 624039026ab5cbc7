"""GraphQL transport for executing operations against the endpoint.

Handles HTTP communication, error reporting, and response parsing.
"""

import logging
import time
from typing import Any

import httpx

from .auth import Auth, SessionAuth
from .config import SessionConfig
from .errors import HTTPError, QueryError, TransportError
from .models import ExecutionResult

logger = logging.getLogger(__name__)


class GraphQLTransport:
    """Executes GraphQL operations against ``https://<hostname>/apollo``.

    The hostname is read from the session config on every request, so a
    login that changes it takes effect immediately.

    Examples:
        transport = GraphQLTransport(config)
        result = await transport.execute("query { me { id } }")

        # Tests swap the network for an in-process handler
        transport = GraphQLTransport(config, transport=httpx.MockTransport(handler))
    """

    def __init__(
        self,
        config: SessionConfig,
        auth: Auth | None = None,
        *,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Initialize the transport.

        Args:
            config: Session configuration providing hostname and tokens
            auth: Authentication handler (defaults to the session bearer token)
            timeout: Request timeout in seconds
            transport: Optional httpx transport, used by tests
        """
        self.config = config
        self.timeout = timeout
        self._auth = auth if auth is not None else SessionAuth(config)
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @property
    def url(self) -> str:
        return f"https://{self.config.hostname}/apollo"

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self.timeout,
                headers={"Content-Type": "application/json"},
                transport=self._transport,
            )
        return self._client

    async def close(self):
        """Close the HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def execute(
        self,
        query: str,
        variables: dict[str, Any] | None = None,
    ) -> ExecutionResult:
        """Execute a raw GraphQL operation.

        Args:
            query: GraphQL operation document
            variables: Operation variables

        Returns:
            The response data together with timing information

        Raises:
            HTTPError: If the endpoint answers with a non-2xx status
            TransportError: If the endpoint is unreachable or answers with non-JSON
            QueryError: If the response contains errors
        """
        client = await self._get_client()

        started = time.perf_counter()
        try:
            response = await client.post(
                self.url,
                json={"query": query, "variables": variables},
                headers=self._auth.get_headers(),
            )
        except httpx.RequestError as error:
            logger.error("Request to %s failed: %s", self.url, error)
            raise TransportError(f"Request to {self.url} failed: {error}") from error
        elapsed = time.perf_counter() - started

        if not response.is_success:
            logger.error("HTTP Error %s occurred. Message:\n%s", response.status_code, response.text)
            raise HTTPError(response.status_code, response.text)

        try:
            result = response.json()
        except ValueError as error:
            logger.error("Response is not JSON. Message:\n%s", response.text)
            raise TransportError(f"Response from {self.url} is not JSON") from error
        if not isinstance(result, dict):
            raise TransportError(f"Response from {self.url} is not a JSON object")

        if "errors" in result:
            errors = result["errors"] or []
            logger.error("Errors occurred running the query:")
            for error in errors:
                logger.error(" - %s", error.get("message", error))
            error_messages = "; ".join(e.get("message", str(e)) for e in errors)
            raise QueryError(f"GraphQL errors: {error_messages}", errors)

        tracing = (result.get("extensions") or {}).get("tracing") or {}
        return ExecutionResult(
            data=result.get("data") or {},
            elapsed=elapsed,
            tracing_duration=tracing.get("duration"),
        )
