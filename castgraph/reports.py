"""
Readers for query files and writers for the three batch reports.

All files are tab separated with a single header line.
"""
from __future__ import annotations
from typing import IO, Iterable, Iterator, List, Optional, Tuple
from castgraph.core.errors import MalformedRecord
from castgraph.algorithms.pathfinding import PATH_HEADER

ACTORS_HEADER = "Actor"
PREDICTIONS_HEADER = "Actor1,Actor2,Actor3,Actor4"


def _body(lines: Iterable[str]) -> Iterator[Tuple[int, str]]:
    for lineno, raw in enumerate(lines, start=1):
        if lineno > 1: yield lineno, raw.rstrip("\r\n")


def read_pairs(lines: Iterable[str]) -> List[Tuple[str, str]]:
    pairs = []
    for lineno, line in _body(lines):
        fields = line.split("\t")
        if len(fields) != 2: raise MalformedRecord(f"expected 2 fields, got {len(fields)}", lineno)
        pairs.append((fields[0], fields[1]))
    return pairs


def read_actor_names(lines: Iterable[str]) -> List[str]:
    return [line for _, line in _body(lines)]


def write_paths(out: IO[str], paths: Iterable[Optional[str]]) -> None:
    """One formatted path per line; a query without a path leaves its line empty."""
    out.write(PATH_HEADER + "\n")
    for p in paths:
        out.write((p or "") + "\n")


def write_actors(out: IO[str], names: Iterable[str]) -> None:
    out.write(ACTORS_HEADER + "\n")
    for name in names:
        out.write(name + "\n")


def write_predictions(out: IO[str], rows: Iterable[List[str]]) -> None:
    # Comma header over tab separated rows, as the original report format
    out.write(PREDICTIONS_HEADER + "\n")
    for names in rows:
        out.write("\t".join(names) + "\n")
