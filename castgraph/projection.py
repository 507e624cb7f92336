"""
Actor-actor projections of the bipartite credit relation.

Two actors are connected when they share at least one movie. ``projected_edges``
keeps every (pair, movie) edge with its weight; ``AdjacencyMatrix`` collapses
them into a dense, unweighted 0/1 matrix for the structural algorithms.
"""
from __future__ import annotations
import logging
from itertools import combinations
from typing import Dict, Iterable, List, Tuple
import numpy as np
import pyarrow as pa
from castgraph.bipartite import BipartiteGraph
from castgraph.core.connection import DuckDBConnection
from castgraph.core.errors import UnknownActor

logger = logging.getLogger(__name__)


def projected_edges(conn: DuckDBConnection, table_name: str = "credits") -> pa.Table:
    """One row per unordered pair of distinct co-stars per movie, ``source < target``."""
    return conn.query(f"""
        WITH credited AS (SELECT DISTINCT actor, movie_key, weight FROM {table_name})
        SELECT a.actor AS source, b.actor AS target, a.movie_key, a.weight
        FROM credited a
        JOIN credited b ON a.movie_key = b.movie_key AND a.actor < b.actor
        ORDER BY a.movie_key, source, target
    """)


class AdjacencyMatrix:
    """Dense symmetric 0/1 adjacency indexed by first-seen actor ordinal."""

    def __init__(self, names: List[str], edges: Iterable[Tuple[str, str]] = ()):
        self.index_to_name = list(names)
        self.name_to_index: Dict[str, int] = {n: i for i, n in enumerate(self.index_to_name)}
        size = len(self.index_to_name)
        self.matrix = np.zeros((size, size), dtype=np.uint8)
        for a, b in edges:
            if a == b: continue
            i, j = self.name_to_index[a], self.name_to_index[b]
            self.matrix[i, j] = self.matrix[j, i] = 1

    @classmethod
    def from_table(cls, conn: DuckDBConnection, table_name: str = "credits") -> AdjacencyMatrix:
        names = [r[0] for r in conn.fetchall(f"SELECT actor FROM {table_name} GROUP BY actor ORDER BY MIN(seq)")]
        edges = conn.fetchall(f"""
            SELECT DISTINCT a.actor, b.actor
            FROM {table_name} a JOIN {table_name} b ON a.movie_key = b.movie_key AND a.actor < b.actor
        """)
        adj = cls(names, edges)
        logger.info("Built adjacency matrix: %d actors, %d edges", len(adj), adj.edge_count())
        return adj

    @classmethod
    def from_bipartite(cls, graph: BipartiteGraph) -> AdjacencyMatrix:
        edges = (pair for movie in graph.movies.values() for pair in combinations(dict.fromkeys(movie.actors), 2))
        return cls(graph.actors, edges)

    def index(self, name: str) -> int:
        try: return self.name_to_index[name]
        except KeyError: raise UnknownActor(name) from None

    def degrees(self) -> np.ndarray:
        return self.matrix.sum(axis=1, dtype=np.int64)

    def neighbors(self, name: str) -> List[str]:
        return [self.index_to_name[j] for j in np.flatnonzero(self.matrix[self.index(name)])]

    def is_adjacent(self, a: str, b: str) -> bool:
        return bool(self.matrix[self.index(a), self.index(b)])

    def edge_count(self) -> int:
        return int(self.matrix.sum(dtype=np.int64)) // 2

    def __contains__(self, name: str) -> bool:
        return name in self.name_to_index

    def __len__(self) -> int:
        return len(self.index_to_name)

    def __repr__(self) -> str:
        return f"AdjacencyMatrix(actors={len(self)}, edges={self.edge_count()})"
