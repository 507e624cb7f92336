from .api import CastGraph
from .core.connection import DuckDBConnection
from .core.errors import CastGraphError, ArgumentError, MalformedRecord, UnknownActor, NoPathFound
from .core.ingestion import REFERENCE_YEAR, load_credits, read_credit_records
from .bipartite import BipartiteGraph, Movie
from .projection import AdjacencyMatrix, projected_edges
from .algorithms import PathFinder, ActorPath, k_core, NeighborPredictor, Prediction
from .datasets import generate_cast_data

def load(data, **kwargs) -> CastGraph:
    engine = CastGraph()
    engine.load(data, **kwargs)
    return engine

def connect(database=":memory:", **kwargs) -> CastGraph:
    return CastGraph(database=database, **kwargs)

__all__ = [
    "CastGraph",
    "load",
    "connect",
    "DuckDBConnection",
    "BipartiteGraph",
    "Movie",
    "AdjacencyMatrix",
    "projected_edges",
    "PathFinder",
    "ActorPath",
    "k_core",
    "NeighborPredictor",
    "Prediction",
    "load_credits",
    "read_credit_records",
    "REFERENCE_YEAR",
    # Errors
    "CastGraphError",
    "ArgumentError",
    "MalformedRecord",
    "UnknownActor",
    "NoPathFound",
    # Datasets
    "generate_cast_data",
]
