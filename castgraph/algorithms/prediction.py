from __future__ import annotations
import logging
from typing import List, NamedTuple
import numpy as np
from castgraph.projection import AdjacencyMatrix

logger = logging.getLogger(__name__)

PREDICTION_LIMIT = 4


class Prediction(NamedTuple):
    name: str
    mutual_count: int


class NeighborPredictor:
    """Ranks candidate partners of an actor by mutual-neighbor count."""

    MODES = ("interaction", "collaboration")

    def __init__(self, adjacency: AdjacencyMatrix):
        self.adjacency = adjacency
        self._matrix = adjacency.matrix.astype(np.int64)

    def mutual_counts(self, actor: str) -> np.ndarray:
        """Adjacency-row dot products against ``actor``'s row; the actor's own entry is zero."""
        i = self.adjacency.index(actor)
        counts = self._matrix @ self._matrix[i]
        counts[i] = 0
        return counts

    def predict(self, actor: str, mode: str = "interaction", limit: int = PREDICTION_LIMIT) -> List[Prediction]:
        """
        Top candidates for ``actor``.

        ``interaction`` ranks current neighbors (future interactions),
        ``collaboration`` ranks actors not yet connected (new collaborations).
        Candidates without any mutual neighbor are never returned.
        """
        if mode not in self.MODES:
            raise ValueError(f"mode must be one of {self.MODES}")
        logger.debug("Computing %s candidates for (%s)", mode, actor)
        i = self.adjacency.index(actor)
        counts = self.mutual_counts(actor)
        eligible = self._matrix[i] == (1 if mode == "interaction" else 0)
        eligible[i] = False
        names = self.adjacency.index_to_name
        ranked = sorted(
            (Prediction(names[j], int(counts[j])) for j in np.flatnonzero(eligible & (counts > 0))),
            key=lambda p: (-p.mutual_count, p.name),
        )
        return ranked[:limit]
