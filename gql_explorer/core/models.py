"""Data model shared by the schema cache, builders and session.

These are plain dataclasses; nothing here talks to the network or the
terminal.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

# Ordered field names from the operation root to a field.
FieldPath = tuple[str, ...]

# Nested selection set: field name -> selection of its children.
# A field with no children is a scalar leaf.
SelectionSet = dict[str, "SelectionSet"]


def path_key(path: FieldPath) -> str:
    """Flatten a field path into the string key used by the schema cache."""
    return ",".join(path)


class OperationKind(str, Enum):
    """Kinds of GraphQL operations the explorer builds."""
    QUERY = "query"
    MUTATION = "mutation"


@dataclass
class SchemaCacheEntry:
    """What is known about a field path.

    ``fields`` stays ``None`` until the path itself is expanded; once set it
    is never recomputed.
    """
    type_name: str
    fields: list[str] | None = None


@dataclass(frozen=True)
class MutationDescriptor:
    """A top-level mutation and the names of its arguments."""
    name: str
    args: tuple[str, ...] = ()


@dataclass(frozen=True)
class Operation:
    """An operation document in hand, optionally with its stored name."""
    kind: OperationKind
    text: str
    name: str | None = None


@dataclass
class ExecutionResult:
    """Outcome of a successful request.

    ``elapsed`` is the measured wall-clock time in seconds;
    ``tracing_duration`` is the server-reported duration in nanoseconds
    when the endpoint has tracing enabled.
    """
    data: dict[str, Any]
    elapsed: float
    tracing_duration: int | None = None

    @property
    def duration_ms(self) -> int:
        """Duration in whole milliseconds, preferring the server's figure."""
        if self.tracing_duration is not None:
            return int(self.tracing_duration // 1_000_000)
        return int(self.elapsed * 1000)


@dataclass
class BenchmarkStats:
    """Summary of repeated executions of one operation."""
    runs: int
    minimum: float
    maximum: float
    average: float
    durations: list[float] = field(default_factory=list, repr=False)

    @classmethod
    def from_durations(cls, durations: list[float]) -> "BenchmarkStats":
        """Summarise per-run durations given in seconds."""
        if not durations:
            raise ValueError("At least one duration is required")
        return cls(
            runs=len(durations),
            minimum=min(durations),
            maximum=max(durations),
            average=sum(durations) / len(durations),
            durations=list(durations),
        )
