"""Shared fakes for the explorer tests."""

import re

import pytest

from gql_explorer.core.config import ConfigStore, SessionConfig
from gql_explorer.core.models import ExecutionResult

_TYPE_NAME = re.compile(r'__type\(name: "(\w+)"\)')


def named(name):
    return {"name": name, "ofType": None}


def non_null(inner):
    return {"name": None, "ofType": inner}


def list_of(inner):
    return {"name": None, "ofType": inner}


# Query -> User -> [User!] cycle plus a few scalars.
TYPES = {
    "Query": {
        "user": non_null(named("User")),
        "version": named("String"),
    },
    "User": {
        "id": non_null(named("ID")),
        "name": named("String"),
        "friends": list_of(non_null(named("User"))),
    },
}

MUTATIONS = {
    "logout": [],
    "rename": ["id", "name"],
    "createUser": ["email", "name", "role"],
}


def introspection_data(query, types=TYPES, mutations=MUTATIONS):
    """Answer an introspection query the way a server would."""
    type_name = _TYPE_NAME.search(query).group(1)
    if type_name == "Mutation":
        fields = [
            {"name": name, "type": named("Boolean"), "args": [{"name": arg} for arg in args]}
            for name, args in mutations.items()
        ]
    elif type_name in types:
        fields = [{"name": name, "type": ref} for name, ref in types[type_name].items()]
    else:
        fields = None
    return {"__type": {"name": type_name, "fields": fields}}


class SchemaExecutor:
    """In-memory stand-in for the transport that only knows introspection."""

    def __init__(self, types=TYPES, mutations=MUTATIONS):
        self.types = types
        self.mutations = mutations
        self.queries = []

    async def execute(self, query, variables=None):
        self.queries.append(query)
        return ExecutionResult(data=introspection_data(query, self.types, self.mutations), elapsed=0.0)


class RecordingTransport:
    """Transport double that records every executed document."""

    def __init__(self, data=None):
        self.data = data if data is not None else {"ok": True}
        self.executed = []

    async def execute(self, query, variables=None):
        self.executed.append(query)
        return ExecutionResult(data=self.data, elapsed=0.002)

    async def close(self):
        pass


class FakePrompter:
    """Scripted answers, consumed in order per prompt type."""

    def __init__(self, selects=(), multi=(), texts=(), confirms=()):
        self.selects = list(selects)
        self.multi = [list(answer) for answer in multi]
        self.texts = list(texts)
        self.confirms = list(confirms)
        self.messages = []
        self.pauses = 0

    def _next(self, queue, message):
        self.messages.append(message)
        if not queue:
            raise AssertionError(f"Unexpected prompt: {message}")
        return queue.pop(0)

    def select(self, message, choices):
        answer = self._next(self.selects, message)
        assert answer in choices, f"{answer!r} not offered in {choices!r}"
        return answer

    def multi_select(self, message, choices):
        answer = self._next(self.multi, message)
        assert set(answer) <= set(choices)
        return answer

    def text(self, message, default=None):
        answer = self._next(self.texts, message)
        return default if answer is None else answer

    def confirm(self, message, default=False):
        return self._next(self.confirms, message)

    def pause(self, message):
        self.pauses += 1


class FakeEditor:
    def __init__(self, result):
        self.result = result
        self.seen = []

    def edit(self, text):
        self.seen.append(text)
        return self.result


@pytest.fixture
def schema_executor():
    return SchemaExecutor()


@pytest.fixture
def config_store(tmp_path):
    return ConfigStore(tmp_path / "config.json")


@pytest.fixture
def config():
    return SessionConfig(sessionToken="session-token", hostname="api.example.com", authToken="legacy")
