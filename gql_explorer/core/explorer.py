"""Top-level wiring of the explorer.

One ``Explorer`` exists per process. It owns the config, the transport,
the schema cache and the session, and implements the three ways the CLI
can be used: the interactive menu, ``load`` and ``run``.
"""

import logging
from pathlib import Path

import click
import httpx

from .config import ConfigStore
from .files import detect_kind
from .introspection import ROOT_TYPE, SchemaCache
from .login import Authenticator
from .models import Operation, OperationKind
from .prompts import Editor, Prompter
from .query_builder import MutationBuilder, QueryBuilder
from .session import DEFAULT_BENCHMARK_RUNS, OperationSession
from .transport import GraphQLTransport

logger = logging.getLogger(__name__)

MENU = {
    "create query": ("create", OperationKind.QUERY),
    "load query": ("load", OperationKind.QUERY),
    "create mutation": ("create", OperationKind.MUTATION),
    "load mutation": ("load", OperationKind.MUTATION),
}


class Explorer:
    """Interactive GraphQL explorer bound to one config file."""

    def __init__(
        self,
        store: ConfigStore,
        prompter: Prompter,
        editor: Editor,
        *,
        timeout: float = 30.0,
        benchmark_runs: int = DEFAULT_BENCHMARK_RUNS,
        export_dir: Path = Path("."),
        http_transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.store = store
        self.config = store.load()
        self.prompter = prompter
        self.transport = GraphQLTransport(self.config, timeout=timeout, transport=http_transport)
        self.schema = SchemaCache(self.transport)
        self.query_builder = QueryBuilder(self.schema, prompter)
        self.mutation_builder = MutationBuilder(self.schema, prompter)
        self.authenticator = Authenticator(self.transport, store, self.config, prompter)
        self.session = OperationSession(
            self.transport,
            store,
            self.config,
            prompter,
            editor,
            self.query_builder,
            self.mutation_builder,
            export_dir=export_dir,
            benchmark_runs=benchmark_runs,
        )

    async def close(self):
        await self.transport.close()

    async def warm_up(self) -> None:
        """Introspect the mutation list and the query root up front."""
        await self.schema.resolve_mutations()
        await self.schema.resolve_fields(())
        logger.debug("Schema warm-up done for %s", ROOT_TYPE)

    async def interactive(self) -> None:
        """Log in, warm the schema cache and serve the main menu forever."""
        await self.authenticator.interactive()
        await self.warm_up()

        click.clear()
        click.secho("Setup successful, happy hacking!", fg="green")

        while True:
            await self.menu()

    async def menu(self) -> None:
        """Show the main menu once and run the chosen flow to completion."""
        choice = self.prompter.select("What do you want to do?", list(MENU))
        command, kind = MENU[choice]
        if command == "create":
            await self.create(kind)
        else:
            await self.load_stored(kind)

    async def create(self, kind: OperationKind) -> None:
        if kind is OperationKind.QUERY:
            text = await self.query_builder.build()
        else:
            text = await self.mutation_builder.build()
        await self.session.run(Operation(kind=kind, text=text))

    async def load_stored(self, kind: OperationKind) -> None:
        stored = self.config.operations(kind)
        if not stored:
            click.secho(f"Nothing stored under {kind.value} yet", fg="yellow")
            return
        name = self.prompter.select(f"Stored {kind.value}", list(stored))
        await self.session.run(Operation(kind=kind, text=stored[name], name=name))

    async def open_file(self, path: Path, *, enter_session: bool = True) -> None:
        """Load a ``.gql`` file, log in for it and run it.

        With ``enter_session`` the operation is handed to the session menu,
        otherwise it is executed exactly once.
        """
        path = Path(path)
        text = path.read_text(encoding="utf-8")
        operation = Operation(kind=detect_kind(text), text=text, name=path.stem)

        await self.authenticator.for_document(text)

        if enter_session:
            await self.session.run(operation)
        else:
            await self.session.execute(operation)
