from .pathfinding import PathFinder, ActorPath, PATH_HEADER
from .kcore import k_core, core_counts
from .prediction import NeighborPredictor, Prediction, PREDICTION_LIMIT

__all__ = [
    "PathFinder", "ActorPath", "PATH_HEADER",
    "k_core", "core_counts",
    "NeighborPredictor", "Prediction", "PREDICTION_LIMIT",
]
