from __future__ import annotations
import logging
import numbers
from typing import List
import numpy as np
from castgraph.core.errors import ArgumentError
from castgraph.projection import AdjacencyMatrix

logger = logging.getLogger(__name__)


def core_counts(adjacency: AdjacencyMatrix, k: int) -> np.ndarray:
    """
    Prune the graph down to its k-core and return the final per-vertex counts.

    Every sweep visits all vertices in ordinal order and removes those whose
    count is below ``k``, decrementing their neighbors. Removed vertices are
    marked with the sentinel ``-n``, which decrements can only push further
    down. Sweeps repeat until one removes nothing.
    """
    if isinstance(k, bool) or not isinstance(k, numbers.Integral) or k < 0:
        raise ArgumentError(f"k must be a non-negative integer, got {k!r}")
    matrix = adjacency.matrix.astype(np.int64)
    counts = matrix.sum(axis=1)
    n = len(counts)
    removed_any, sweeps = True, 0
    while removed_any:
        removed_any, sweeps = False, sweeps + 1
        logger.debug("Pruning (sweep %d)...", sweeps)
        for i in range(n):
            if counts[i] < k and counts[i] > -n:
                removed_any = True
                counts -= matrix[i]
                counts[i] = -n
    logger.info("k-core pruning for k=%d finished after %d sweeps", k, sweeps)
    return counts


def k_core(adjacency: AdjacencyMatrix, k: int) -> List[str]:
    """Sorted names of the actors in the k-core."""
    counts = core_counts(adjacency, k)
    return sorted(adjacency.index_to_name[i] for i in np.flatnonzero(counts >= k))
