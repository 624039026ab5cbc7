"""Tests for the legacy login flow."""

import pytest

from conftest import FakePrompter, RecordingTransport
from gql_explorer.core.errors import LoginError
from gql_explorer.core.login import Authenticator, login_mutation


def test_login_mutation_escapes_token():
    assert login_mutation('a"b') == 'mutation { loginLegacy(authToken: "a\\"b") }'


class TestInteractive:
    @pytest.mark.asyncio
    async def test_prompts_and_persists(self, config_store, config):
        transport = RecordingTransport()
        prompter = FakePrompter(texts=["staging.example.com", "token-1"])
        authenticator = Authenticator(transport, config_store, config, prompter)

        await authenticator.interactive()

        assert transport.executed == ['mutation { loginLegacy(authToken: "token-1") }']
        saved = config_store.load()
        assert saved.hostname == "staging.example.com"
        assert saved.auth_token == "token-1"
        assert saved.session_token == "session-token"

    @pytest.mark.asyncio
    async def test_defaults_offered(self, config_store, config):
        prompter = FakePrompter(texts=[None, None])
        authenticator = Authenticator(RecordingTransport(), config_store, config, prompter)

        await authenticator.interactive()

        assert config.hostname == "api.example.com"
        assert config.auth_token == "legacy"


class TestAutomatic:
    @pytest.mark.asyncio
    async def test_token_from_document(self, config_store, config):
        """Test a #authToken line logs in without any prompt."""
        config_store.save(config)
        transport = RecordingTransport()
        authenticator = Authenticator(transport, config_store, config, FakePrompter())

        await authenticator.for_document("#authToken: abc123\nquery { a }")

        assert transport.executed == ['mutation { loginLegacy(authToken: "abc123") }']
        assert config_store.load().auth_token == "abc123"

    @pytest.mark.asyncio
    async def test_requires_prior_configuration(self, config_store, config):
        transport = RecordingTransport()
        authenticator = Authenticator(transport, config_store, config, FakePrompter())

        with pytest.raises(LoginError):
            await authenticator.automatic("abc123")
        assert transport.executed == []

    @pytest.mark.asyncio
    async def test_document_without_token_asks(self, config_store, config):
        transport = RecordingTransport()
        prompter = FakePrompter(texts=[None, "typed"])
        authenticator = Authenticator(transport, config_store, config, prompter)

        await authenticator.for_document("query { a }")

        assert prompter.messages == ["Server hostname", "Login Token"]
        assert transport.executed == ['mutation { loginLegacy(authToken: "typed") }']
