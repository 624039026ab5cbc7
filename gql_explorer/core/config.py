"""Session configuration and its JSON persistence.

The config file holds the endpoint hostname, both tokens and the named
query/mutation stores. It is rewritten in full after every change.
"""

import logging
import secrets
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .errors import ConfigError
from .models import OperationKind

logger = logging.getLogger(__name__)

DEFAULT_HOSTNAME = "corona-school-backend-dev.herokuapp.com"
DEFAULT_AUTH_TOKEN = "authtokenS1"


def new_session_token() -> str:
    """Generate a random 20-byte session token, hex encoded."""
    return secrets.token_hex(20)


class SessionConfig(BaseModel):
    """Process-wide session state, persisted with camelCase keys."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    session_token: str = Field(default_factory=new_session_token, alias="sessionToken")
    hostname: str = DEFAULT_HOSTNAME
    auth_token: str = Field(default=DEFAULT_AUTH_TOKEN, alias="authToken")
    queries: dict[str, str] = Field(default_factory=dict)
    mutations: dict[str, str] = Field(default_factory=dict)

    def operations(self, kind: OperationKind) -> dict[str, str]:
        """Return the named-operation store for ``kind``."""
        if kind is OperationKind.QUERY:
            return self.queries
        return self.mutations


class ConfigStore:
    """Loads and saves a SessionConfig at a fixed path.

    Args:
        path: Location of the JSON config file
    """

    def __init__(self, path: Path):
        self.path = Path(path)

    def exists(self) -> bool:
        """Whether a config was persisted by an earlier session."""
        return self.path.is_file()

    def load(self) -> SessionConfig:
        """Read the config, or create a fresh one if the file is absent."""
        if not self.exists():
            logger.info("No config found at %s", self.path)
            return SessionConfig()
        try:
            return SessionConfig.model_validate_json(self.path.read_text(encoding="utf-8"))
        except ValidationError as error:
            raise ConfigError(f"Config at {self.path} is corrupt: {error}") from error

    def save(self, config: SessionConfig) -> None:
        """Write the whole config to disk, replacing the old file in one step."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        staging = self.path.with_name(f"{self.path.name}.tmp")
        staging.write_text(config.model_dump_json(by_alias=True), encoding="utf-8")
        staging.replace(self.path)
        logger.debug("Config written to %s", self.path)

    def store_operation(self, config: SessionConfig, kind: OperationKind, name: str, text: str) -> None:
        """Record a named operation and flush the config immediately."""
        config.operations(kind)[name] = text
        self.save(config)
