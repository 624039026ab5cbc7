"""Terminal interaction: choice prompts and the external editor.

The builders and the session only depend on the ``Prompter`` and
``Editor`` protocols; the click implementations below are what the CLI
wires in.
"""

import re
from pathlib import Path
from typing import Protocol, Sequence, runtime_checkable

import click


@runtime_checkable
class Prompter(Protocol):
    """Asks the user to choose or enter values."""

    def select(self, message: str, choices: Sequence[str]) -> str:
        """Pick exactly one of ``choices``."""
        ...

    def multi_select(self, message: str, choices: Sequence[str]) -> list[str]:
        """Pick any subset of ``choices``; may return an empty list."""
        ...

    def text(self, message: str, default: str | None = None) -> str:
        """Enter a free-form value."""
        ...

    def confirm(self, message: str, default: bool = False) -> bool:
        """Answer yes or no."""
        ...

    def pause(self, message: str) -> None:
        """Block until the user acknowledges."""
        ...


@runtime_checkable
class Editor(Protocol):
    """Lets the user edit text in an external program."""

    def edit(self, text: str) -> str:
        ...


class IndexList(click.ParamType):
    """Parses "1, 3 4" into zero-based indexes below ``count``."""

    name = "index list"

    def __init__(self, count: int):
        self.count = count

    def convert(self, value, param, ctx):
        if isinstance(value, list):
            return value
        indexes = []
        for token in re.split(r"[,\s]+", value.strip()):
            if not token:
                continue
            if not token.isdigit() or not 1 <= int(token) <= self.count:
                self.fail(f"{token!r} is not a number between 1 and {self.count}", param, ctx)
            if int(token) - 1 not in indexes:
                indexes.append(int(token) - 1)
        return indexes


def _echo_choices(choices: Sequence[str]) -> None:
    width = len(str(len(choices)))
    for number, choice in enumerate(choices, start=1):
        click.echo(f"  {number:>{width}}) {choice}")


class ClickPrompter:
    """Numbered-menu prompts on top of ``click.prompt``."""

    def select(self, message: str, choices: Sequence[str]) -> str:
        if not choices:
            raise ValueError(f"Nothing to choose for {message!r}")
        _echo_choices(choices)
        number = click.prompt(message, type=click.IntRange(1, len(choices)))
        return choices[number - 1]

    def multi_select(self, message: str, choices: Sequence[str]) -> list[str]:
        _echo_choices(choices)
        indexes = click.prompt(
            f"{message} (numbers, comma separated)",
            type=IndexList(len(choices)),
            default="",
            show_default=False,
        )
        return [choices[index] for index in indexes]

    def text(self, message: str, default: str | None = None) -> str:
        return click.prompt(message, default=default)

    def confirm(self, message: str, default: bool = False) -> bool:
        return click.confirm(message, default=default)

    def pause(self, message: str) -> None:
        click.prompt(message, default="", show_default=False, prompt_suffix=" ")


class ClickEditor:
    """Edits text through a fixed scratch file with ``click.edit``.

    The editor process owns the terminal until it exits.

    Args:
        scratch_path: File overwritten on every edit cycle
        editor: Editor command; click falls back to ``$EDITOR``
    """

    def __init__(self, scratch_path: Path, editor: str | None = None):
        self.scratch_path = Path(scratch_path)
        self.editor = editor

    def edit(self, text: str) -> str:
        self.scratch_path.parent.mkdir(parents=True, exist_ok=True)
        self.scratch_path.write_text(text, encoding="utf-8")
        click.edit(filename=str(self.scratch_path), editor=self.editor)
        return self.scratch_path.read_text(encoding="utf-8")
