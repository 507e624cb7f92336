from __future__ import annotations
import logging
from pathlib import Path
from typing import Any, Iterable, List, Optional, Tuple, Union
import pyarrow as pa
from castgraph.core.connection import DuckDBConnection
from castgraph.core.errors import CastGraphError, UnknownActor
from castgraph.core.ingestion import REFERENCE_YEAR, load_credits
from castgraph.bipartite import BipartiteGraph
from castgraph.projection import AdjacencyMatrix, projected_edges
from castgraph.algorithms.pathfinding import ActorPath, PathFinder
from castgraph.algorithms.kcore import k_core
from castgraph.algorithms.prediction import PREDICTION_LIMIT, NeighborPredictor

logger = logging.getLogger(__name__)

_PATHS_SCHEMA = pa.schema([
    ("start", pa.string()), ("end", pa.string()), ("path", pa.string()),
    ("distance", pa.int64()), ("error", pa.string()),
])
_PREDICTIONS_SCHEMA = pa.schema([
    ("actor", pa.string()), ("rank", pa.int32()), ("candidate", pa.string()), ("mutual_count", pa.int64()),
])


class CastGraph:
    """One analysis session over a loaded actor/movie credit dataset."""

    def __init__(
        self,
        database: Union[str, Path] = ":memory:",
        weighted: bool = False,
        reference_year: int = REFERENCE_YEAR,
        memory_limit: Optional[str] = None,
        threads: Optional[int] = None,
    ) -> None:
        self.conn = DuckDBConnection(database=database, memory_limit=memory_limit, threads=threads)
        self.table_name = "credits"
        self.weighted, self.reference_year = weighted, reference_year
        self._reset_models()

    def _reset_models(self) -> None:
        self._bipartite, self._adjacency, self._path_finder, self._predictor = None, None, None, None

    def load(self, data: Any, **kwargs) -> CastGraph:
        self.load_credits(data, **kwargs)
        return self

    def load_credits(self, data: Any, **kwargs) -> int:
        weighted = kwargs.pop("weighted", self.weighted)
        reference_year = kwargs.pop("reference_year", self.reference_year)
        count = load_credits(self.conn, data, weighted=weighted, reference_year=reference_year,
                             table_name=self.table_name, **kwargs)
        # The session describes whatever was staged last
        self.weighted, self.reference_year = weighted, reference_year
        self._reset_models()
        return count

    def _require_loaded(self) -> None:
        if not self.conn.table_exists(self.table_name): raise RuntimeError("Call load() first.")

    @property
    def bipartite(self) -> BipartiteGraph:
        if self._bipartite is None:
            self._require_loaded()
            self._bipartite = BipartiteGraph.from_table(self.conn, self.table_name)
        return self._bipartite

    @property
    def adjacency(self) -> AdjacencyMatrix:
        if self._adjacency is None:
            self._require_loaded()
            self._adjacency = AdjacencyMatrix.from_table(self.conn, self.table_name)
        return self._adjacency

    def projected_edges(self) -> pa.Table:
        self._require_loaded()
        return projected_edges(self.conn, self.table_name)

    def find_path(self, start: str, end: str) -> ActorPath:
        if self._path_finder is None: self._path_finder = PathFinder(self.bipartite)
        return self._path_finder.find_path(start, end)

    def find_paths(self, pairs: Iterable[Tuple[str, str]]) -> pa.Table:
        """Run every query; failures land in the ``error`` column instead of aborting the batch."""
        rows = []
        for start, end in pairs:
            try:
                p = self.find_path(start, end)
                rows.append({"start": start, "end": end, "path": p.format(), "distance": p.distance, "error": None})
            except CastGraphError as e:
                logger.warning("Path query (%s, %s) failed: %s", start, end, e)
                rows.append({"start": start, "end": end, "path": None, "distance": None, "error": str(e)})
        return pa.Table.from_pylist(rows, schema=_PATHS_SCHEMA)

    def popular_actors(self, k: int) -> List[str]:
        return k_core(self.adjacency, k)

    @property
    def predictor(self) -> NeighborPredictor:
        if self._predictor is None: self._predictor = NeighborPredictor(self.adjacency)
        return self._predictor

    def _predict(self, actors: Iterable[str], mode: str, n: int) -> pa.Table:
        rows = []
        for actor in actors:
            try: preds = self.predictor.predict(actor, mode=mode, limit=n)
            except UnknownActor as e:
                logger.warning("Skipping %s query: %s", mode, e)
                continue
            rows.extend({"actor": actor, "rank": r, "candidate": p.name, "mutual_count": p.mutual_count}
                        for r, p in enumerate(preds, start=1))
        return pa.Table.from_pylist(rows, schema=_PREDICTIONS_SCHEMA)

    def predict_interactions(self, actors: Iterable[str], n: int = PREDICTION_LIMIT) -> pa.Table:
        return self._predict(actors, "interaction", n)

    def recommend_collaborations(self, actors: Iterable[str], n: int = PREDICTION_LIMIT) -> pa.Table:
        return self._predict(actors, "collaboration", n)

    def sql(self, query: str) -> pa.Table: return self.conn.query(query)
    def close(self): self.conn.close()
    def __enter__(self): return self
    def __exit__(self, *_): self.close()
    def __repr__(self) -> str: return f"CastGraph(database={self.conn._database!r}, weighted={self.weighted})"
