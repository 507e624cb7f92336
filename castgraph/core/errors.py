from __future__ import annotations
from typing import Optional


class CastGraphError(Exception):
    """Base class for every error raised by castgraph."""


class ArgumentError(CastGraphError, ValueError):
    """Invalid command-line arity, weighting flag or algorithm parameter."""


class MalformedRecord(CastGraphError, ValueError):
    """A credit record could not be parsed; the whole load is aborted."""

    def __init__(self, reason: str, line: Optional[int] = None):
        self.reason, self.line = reason, line
        where = f"line {line}: " if line is not None else ""
        super().__init__(f"{where}{reason}")


class UnknownActor(CastGraphError, KeyError):
    """A query references an actor that is not in the loaded graph."""

    def __init__(self, actor: str):
        self.actor = actor
        super().__init__(actor)

    def __str__(self) -> str:
        return f"Unknown actor: {self.actor!r}"


class NoPathFound(CastGraphError):
    """Start and end actors lie in different components of the graph."""

    def __init__(self, start: str, end: str):
        self.start, self.end = start, end
        super().__init__(f"No path between {start!r} and {end!r}")
