"""Post-execution state machine for a built or loaded operation.

An operation starts LOADED, is executed, and then the user picks what to
do with it. Every action is a transition to the next state and the
operation to carry into it, so the session is a flat loop rather than
mutually recursive calls.
"""

import json
import logging
import time
from dataclasses import replace
from enum import Enum
from pathlib import Path

import click

from .config import ConfigStore, SessionConfig
from .files import export_operation
from .models import BenchmarkStats, ExecutionResult, Operation, OperationKind
from .prompts import Editor, Prompter
from .query_builder import MutationBuilder, QueryBuilder
from .transport import GraphQLTransport

logger = logging.getLogger(__name__)

DEFAULT_BENCHMARK_RUNS = 100


class SessionState(Enum):
    LOADED = "loaded"
    EXECUTED = "executed"
    TERMINATED = "terminated"


class SessionAction(str, Enum):
    """Choices offered after an operation has run."""
    RERUN = "rerun"
    EDIT = "edit"
    STORE = "store"
    STORE_TO_FILE = "store to file"
    BENCHMARK = "benchmark"
    NEW = "new"
    EXIT = "exit"

    def label(self, kind: OperationKind) -> str:
        if self is SessionAction.NEW:
            return f"new {kind.value}"
        return self.value


ACTIONS = {
    OperationKind.QUERY: [
        SessionAction.RERUN,
        SessionAction.EDIT,
        SessionAction.STORE,
        SessionAction.STORE_TO_FILE,
        SessionAction.BENCHMARK,
        SessionAction.EXIT,
        SessionAction.NEW,
    ],
    OperationKind.MUTATION: [
        SessionAction.RERUN,
        SessionAction.EDIT,
        SessionAction.STORE,
        SessionAction.EXIT,
        SessionAction.NEW,
    ],
}

Transition = tuple[SessionState, Operation]


class OperationSession:
    """Executes operations and applies the user's post-run actions."""

    def __init__(
        self,
        transport: GraphQLTransport,
        store: ConfigStore,
        config: SessionConfig,
        prompter: Prompter,
        editor: Editor,
        query_builder: QueryBuilder,
        mutation_builder: MutationBuilder,
        *,
        export_dir: Path = Path("."),
        benchmark_runs: int = DEFAULT_BENCHMARK_RUNS,
    ):
        self.transport = transport
        self.store = store
        self.config = config
        self.prompter = prompter
        self.editor = editor
        self.builders = {
            OperationKind.QUERY: query_builder,
            OperationKind.MUTATION: mutation_builder,
        }
        self.export_dir = Path(export_dir)
        self.benchmark_runs = benchmark_runs
        self._transitions = {
            SessionAction.RERUN: self._rerun,
            SessionAction.EDIT: self._edit,
            SessionAction.STORE: self._store,
            SessionAction.STORE_TO_FILE: self._store_to_file,
            SessionAction.BENCHMARK: self._benchmark,
            SessionAction.NEW: self._new,
            SessionAction.EXIT: self._exit,
        }

    async def run(self, operation: Operation) -> None:
        """Drive ``operation`` through the session until the user exits."""
        state = SessionState.LOADED
        while state is not SessionState.TERMINATED:
            if state is SessionState.LOADED:
                await self.execute(operation)
                state = SessionState.EXECUTED
            else:
                action = self.choose_action(operation.kind)
                logger.debug("Session action %s on %s", action.value, operation.name or "<unnamed>")
                state, operation = await self._transitions[action](operation)

    async def execute(self, operation: Operation) -> ExecutionResult:
        """Run the operation once and show the result."""
        click.clear()
        click.echo(f"Starting to run {operation.kind.value}")
        click.secho(operation.text, fg="blue")

        result = await self.transport.execute(operation.text)

        click.secho(f"{operation.kind.value.capitalize()} run successfully in {result.duration_ms}ms:", fg="green")
        click.secho(json.dumps(result.data, indent=2), fg="blue")
        return result

    def choose_action(self, kind: OperationKind) -> SessionAction:
        actions = ACTIONS[kind]
        label = self.prompter.select("next", [action.label(kind) for action in actions])
        return next(action for action in actions if action.label(kind) == label)

    async def _rerun(self, operation: Operation) -> Transition:
        return SessionState.LOADED, operation

    async def _edit(self, operation: Operation) -> Transition:
        text = self.editor.edit(operation.text)
        return SessionState.LOADED, replace(operation, text=text)

    async def _store(self, operation: Operation) -> Transition:
        noun = operation.kind.value.capitalize()
        name = self.prompter.text(f"{noun} Name", default=operation.name)
        self.store.store_operation(self.config, operation.kind, name, operation.text)
        click.secho(f"Stored {operation.kind.value} {name!r}", fg="green")
        return SessionState.EXECUTED, replace(operation, name=name)

    async def _store_to_file(self, operation: Operation) -> Transition:
        name = self.prompter.text("File name (without .gql)", default=operation.name)
        auth_token = None
        if self.prompter.confirm("Include the auth token?"):
            auth_token = self.config.auth_token
        path = export_operation(operation.text, name, self.export_dir, auth_token)
        click.secho(f"Written to {path}", fg="green")
        return SessionState.EXECUTED, replace(operation, name=name)

    async def benchmark(self, operation: Operation) -> BenchmarkStats:
        """Execute ``operation`` repeatedly, one run after another."""
        durations = []
        with click.progressbar(range(self.benchmark_runs), label="Benchmarking") as runs:
            for _ in runs:
                started = time.perf_counter()
                await self.transport.execute(operation.text)
                durations.append(time.perf_counter() - started)
        return BenchmarkStats.from_durations(durations)

    async def _benchmark(self, operation: Operation) -> Transition:
        stats = await self.benchmark(operation)
        click.echo(f"Runs: {stats.runs}")
        click.echo(f"Min: {stats.minimum * 1000:.1f}ms")
        click.echo(f"Max: {stats.maximum * 1000:.1f}ms")
        click.echo(f"Average: {stats.average * 1000:.1f}ms")
        self.prompter.pause("Press enter to continue")
        return SessionState.LOADED, operation

    async def _new(self, operation: Operation) -> Transition:
        text = await self.builders[operation.kind].build()
        return SessionState.LOADED, Operation(kind=operation.kind, text=text)

    async def _exit(self, operation: Operation) -> Transition:
        return SessionState.TERMINATED, operation
