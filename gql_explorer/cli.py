"""Command-line interface for gql-explorer."""

import asyncio
import logging
from dataclasses import dataclass
from pathlib import Path

import click
from rich.logging import RichHandler

from . import __version__
from .core.config import ConfigStore
from .core.errors import ExplorerError
from .core.explorer import Explorer
from .core.prompts import ClickEditor, ClickPrompter
from .core.session import DEFAULT_BENCHMARK_RUNS

logger = logging.getLogger("gql_explorer")

APP_NAME = "gql-explorer"


def default_config_path() -> Path:
    return Path(click.get_app_dir(APP_NAME)) / "config.json"


def configure_logging(verbose: bool) -> None:
    """Route log records through rich; errors come out in red."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
        force=True,
    )
    if not verbose:
        logging.getLogger("httpx").setLevel(logging.WARNING)


@dataclass
class Settings:
    config_path: Path
    editor: str | None
    timeout: float
    benchmark_runs: int

    def create_explorer(self) -> Explorer:
        return Explorer(
            ConfigStore(self.config_path),
            ClickPrompter(),
            ClickEditor(self.config_path.with_name("scratch.gql"), editor=self.editor),
            timeout=self.timeout,
            benchmark_runs=self.benchmark_runs,
        )


def run_explorer(ctx: click.Context, action) -> None:
    """Run ``action(explorer)`` to completion and report fatal errors."""
    settings: Settings = ctx.obj

    async def runner():
        explorer = settings.create_explorer()
        try:
            await action(explorer)
        finally:
            await explorer.close()

    try:
        asyncio.run(runner())
    except ExplorerError as error:
        logger.error("%s: %s", type(error).__name__, error)
        ctx.exit(1)


@click.group(invoke_without_command=True)
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    envvar="GQL_EXPLORER_CONFIG",
    default=None,
    help="Path to the JSON session config (default: per-user app directory).",
)
@click.option(
    "--editor",
    envvar="GQL_EXPLORER_EDITOR",
    default=None,
    help="Editor command used by the edit action (default: $EDITOR).",
)
@click.option(
    "--timeout",
    type=float,
    default=30.0,
    show_default=True,
    help="HTTP request timeout in seconds.",
)
@click.option(
    "--benchmark-runs",
    type=click.IntRange(min=1),
    default=DEFAULT_BENCHMARK_RUNS,
    show_default=True,
    help="Number of executions per benchmark.",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable debug logging.",
)
@click.version_option(version=__version__)
@click.pass_context
def main(ctx, config_path, editor, timeout, benchmark_runs, verbose):
    """Interactive GraphQL query and mutation builder.

    Without a command, log in and open the interactive menu.

    Examples:

        gql-explorer

        gql-explorer load users.gql

        gql-explorer --config ./dev.json run users.gql
    """
    configure_logging(verbose)
    ctx.obj = Settings(
        config_path=config_path or default_config_path(),
        editor=editor,
        timeout=timeout,
        benchmark_runs=benchmark_runs,
    )
    if ctx.invoked_subcommand is None:
        run_explorer(ctx, lambda explorer: explorer.interactive())


@main.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.pass_context
def load(ctx, file: Path):
    """Open a saved .gql operation in an interactive session."""
    run_explorer(ctx, lambda explorer: explorer.open_file(file, enter_session=True))


@main.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.pass_context
def run(ctx, file: Path):
    """Execute a saved .gql operation once and exit."""
    run_explorer(ctx, lambda explorer: explorer.open_file(file, enter_session=False))


if __name__ == "__main__":
    main()
