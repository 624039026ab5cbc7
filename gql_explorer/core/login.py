"""Legacy-token login that binds the session token to a user."""

import json
import logging

import click

from .config import ConfigStore, SessionConfig
from .errors import LoginError
from .files import extract_auth_token
from .prompts import Prompter
from .transport import GraphQLTransport

logger = logging.getLogger(__name__)


def login_mutation(auth_token: str) -> str:
    return f"mutation {{ loginLegacy(authToken: {json.dumps(auth_token)}) }}"


class Authenticator:
    """Runs the login flow and persists the resulting config."""

    def __init__(
        self,
        transport: GraphQLTransport,
        store: ConfigStore,
        config: SessionConfig,
        prompter: Prompter,
    ):
        self.transport = transport
        self.store = store
        self.config = config
        self.prompter = prompter

    async def interactive(self) -> None:
        """Prompt for hostname and legacy token, then log in."""
        click.echo(f"Starting Session {self.config.session_token}")

        self.config.hostname = self.prompter.text("Server hostname", default=self.config.hostname)
        self.config.auth_token = self.prompter.text("Login Token", default=self.config.auth_token)

        await self.transport.execute(login_mutation(self.config.auth_token))

        click.secho("Authentication successful", fg="green")
        self.store.save(self.config)

    async def automatic(self, auth_token: str) -> None:
        """Log in silently with ``auth_token`` against the configured host.

        Raises:
            LoginError: If no earlier interactive session configured a hostname
        """
        if not self.store.exists():
            raise LoginError(
                f"No hostname configured at {self.store.path}; log in interactively first"
            )

        logger.debug("Logging in to %s with token from file", self.config.hostname)
        await self.transport.execute(login_mutation(auth_token))

        self.config.auth_token = auth_token
        self.store.save(self.config)

    async def for_document(self, text: str) -> None:
        """Log in automatically when ``text`` carries a token, else ask."""
        auth_token = extract_auth_token(text)
        if auth_token is None:
            await self.interactive()
        else:
            await self.automatic(auth_token)
