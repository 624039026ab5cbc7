"""Interactive builders for GraphQL operation documents.

Queries are assembled level by level from the fields the user picks;
mutations are a single top-level call whose argument values are filled
into a template.
"""

import logging
from string import Template

from .errors import SchemaResolutionError
from .introspection import SchemaCache
from .models import FieldPath, SelectionSet
from .prompts import Prompter

logger = logging.getLogger(__name__)

INDENT = "  "


def render_query(selection: SelectionSet) -> str:
    """Render a selection tree as a query document.

    Each nesting level is indented by two more spaces. A field without
    children is a bare name, any other field opens a block.
    """
    lines = ["query {"]
    _render_selection(selection, 1, lines)
    lines.append("}")
    return "\n".join(lines)


def _render_selection(selection: SelectionSet, depth: int, lines: list[str]) -> None:
    indent = INDENT * depth
    for name, children in selection.items():
        if children:
            lines.append(f"{indent}{name} {{")
            _render_selection(children, depth + 1, lines)
            lines.append(f"{indent}}}")
        else:
            lines.append(f"{indent}{name}")


def render_mutation_template(name: str, args: list[str]) -> str:
    """Build a mutation call with a ``${arg}`` placeholder per argument."""
    if not args:
        return f"mutation {{\n{INDENT}{name}\n}}"
    arg_lines = "".join(f"{INDENT * 2}{arg}: ${{{arg}}}\n" for arg in args)
    return f"mutation {{\n{INDENT}{name}(\n{arg_lines}{INDENT})\n}}"


def fill_template(template: str, fields: list[str], prompter: Prompter, label: str = "") -> str:
    """Ask for a value per placeholder and substitute them into ``template``.

    Values are inserted verbatim, so string arguments need their quotes.
    """
    prefix = f"{label}." if label else ""
    values = {field: prompter.text(f"{prefix}{field}") for field in fields}
    return Template(template).substitute(values)


class QueryBuilder:
    """Walks the schema with the user to build a query document."""

    def __init__(self, schema: SchemaCache, prompter: Prompter):
        self.schema = schema
        self.prompter = prompter

    async def build_selection(self) -> SelectionSet:
        """Collect the selection tree, one prompt per non-scalar path.

        Every chosen field is queued for expansion; paths whose type has no
        fields are scalar leaves and are not prompted for.
        """
        selection: SelectionSet = {}
        pending: list[FieldPath] = [()]

        while pending:
            path = pending.pop()
            node = selection
            for name in path:
                node = node[name]

            fields = await self.schema.resolve_fields(path)
            if not fields:
                continue

            choices = sorted(fields)
            message = f"fields for {' > '.join(path) or 'query'}"
            chosen = self.prompter.multi_select(message, choices)
            while not chosen:
                chosen = self.prompter.multi_select(message, choices)

            for name in chosen:
                pending.append(path + (name,))
                node[name] = {}

        return selection

    async def build(self) -> str:
        """Build a query document interactively."""
        query = render_query(await self.build_selection())
        logger.debug("Built query:\n%s", query)
        return query


class MutationBuilder:
    """Lets the user pick a mutation and fill in its arguments.

    When a mutation takes more than ``subset_threshold`` arguments the user
    picks which ones to pass; an empty pick keeps them all.
    """

    def __init__(self, schema: SchemaCache, prompter: Prompter, subset_threshold: int = 2):
        self.schema = schema
        self.prompter = prompter
        self.subset_threshold = subset_threshold

    async def build(self) -> str:
        """Build a mutation document interactively."""
        mutations = await self.schema.resolve_mutations()
        if not mutations:
            raise SchemaResolutionError("The schema does not expose any mutations")
        name = self.prompter.select("mutation", [mutation.name for mutation in mutations])
        descriptor = next(mutation for mutation in mutations if mutation.name == name)

        args = list(descriptor.args)
        if len(args) > self.subset_threshold:
            chosen = self.prompter.multi_select(f"arguments for {name} (empty for all)", args)
            if chosen:
                args = [arg for arg in args if arg in chosen]

        template = render_mutation_template(name, args)
        mutation = fill_template(template, args, self.prompter, label=name)
        logger.debug("Built mutation:\n%s", mutation)
        return mutation
