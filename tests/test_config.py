"""Tests for session configuration persistence."""

import json
import re

import pytest

from gql_explorer.core.config import (
    DEFAULT_AUTH_TOKEN,
    DEFAULT_HOSTNAME,
    ConfigStore,
    SessionConfig,
)
from gql_explorer.core.errors import ConfigError
from gql_explorer.core.models import OperationKind


class TestSessionConfig:
    """Tests for SessionConfig."""

    def test_fresh_defaults(self):
        config = SessionConfig()
        assert re.fullmatch(r"[0-9a-f]{40}", config.session_token)
        assert config.hostname == DEFAULT_HOSTNAME
        assert config.auth_token == DEFAULT_AUTH_TOKEN
        assert config.queries == {}
        assert config.mutations == {}

    def test_tokens_differ_per_config(self):
        assert SessionConfig().session_token != SessionConfig().session_token

    def test_operations_by_kind(self):
        config = SessionConfig(queries={"q": "query { a }"}, mutations={"m": "mutation { b }"})
        assert config.operations(OperationKind.QUERY) == {"q": "query { a }"}
        assert config.operations(OperationKind.MUTATION) == {"m": "mutation { b }"}


class TestConfigStore:
    """Tests for ConfigStore."""

    def test_missing_file_gives_fresh_config(self, config_store):
        assert not config_store.exists()
        config = config_store.load()
        assert config.hostname == DEFAULT_HOSTNAME
        assert not config_store.exists()

    def test_saved_with_camel_case_keys(self, config_store, config):
        config_store.save(config)

        saved = json.loads(config_store.path.read_text())
        assert saved == {
            "sessionToken": "session-token",
            "hostname": "api.example.com",
            "authToken": "legacy",
            "queries": {},
            "mutations": {},
        }

    def test_reload(self, config_store, config):
        config_store.save(config)
        loaded = config_store.load()
        assert loaded == config

    def test_unknown_keys_ignored(self, config_store):
        config_store.path.write_text(json.dumps({"hostname": "h", "legacy": True}))
        assert config_store.load().hostname == "h"

    def test_store_operation_flushes(self, config_store, config):
        config_store.store_operation(config, OperationKind.MUTATION, "bye", "mutation { logout }")

        assert config.mutations == {"bye": "mutation { logout }"}
        assert config_store.load().mutations == {"bye": "mutation { logout }"}

    def test_corrupt_file(self, config_store):
        config_store.path.write_text("{not json")
        with pytest.raises(ConfigError, match="corrupt"):
            config_store.load()

    def test_save_replaces_in_one_step(self, config_store, config):
        config_store.save(config)
        config.hostname = "next.example.com"
        config_store.save(config)

        assert config_store.load().hostname == "next.example.com"
        assert [p.name for p in config_store.path.parent.iterdir()] == ["config.json"]
