from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, Iterator, List, Tuple
from castgraph.core.connection import DuckDBConnection
from castgraph.core.errors import UnknownActor
from castgraph.core.ingestion import Credit, REFERENCE_YEAR, movie_key, movie_weight

logger = logging.getLogger(__name__)


@dataclass
class Movie:
    key: str
    weight: int
    actors: List[str] = field(default_factory=list)


class BipartiteGraph:
    """
    Actor/movie membership maps.

    ``actor_movies`` maps an actor to the movie keys it appeared in and
    ``movies`` maps a movie key to its weight and credited actors. Both keep
    file order and append on re-insertion. ``actor_index`` gives every actor
    a stable ordinal in first-seen order.
    """

    def __init__(self):
        self.actor_movies: Dict[str, List[str]] = {}
        self.movies: Dict[str, Movie] = {}
        self.actor_index: Dict[str, int] = {}

    @property
    def actors(self) -> List[str]:
        return list(self.actor_index)

    def add_credit(self, actor: str, key: str, weight: int) -> None:
        if actor not in self.actor_index:
            self.actor_index[actor] = len(self.actor_index)
            self.actor_movies[actor] = []
        self.actor_movies[actor].append(key)
        # The first credit of a movie fixes its weight
        self.movies.setdefault(key, Movie(key, weight)).actors.append(actor)

    def index(self, actor: str) -> int:
        try: return self.actor_index[actor]
        except KeyError: raise UnknownActor(actor) from None

    def co_stars(self, actor: str) -> Iterator[Tuple[str, str, int]]:
        """Yield ``(co_actor, movie_key, weight)`` for every shared credit of ``actor``."""
        for key in self.actor_movies[actor]:
            movie = self.movies[key]
            for other in movie.actors:
                if other != actor:
                    yield other, key, movie.weight

    @classmethod
    def from_records(cls, records: Iterable[Credit], weighted: bool = False, reference_year: int = REFERENCE_YEAR) -> BipartiteGraph:
        graph = cls()
        for actor, title, year in records:
            graph.add_credit(actor, movie_key(title, year), movie_weight(year, weighted, reference_year))
        return graph

    @classmethod
    def from_table(cls, conn: DuckDBConnection, table_name: str = "credits") -> BipartiteGraph:
        graph = cls()
        for actor, key, weight in conn.fetchall(f"SELECT actor, movie_key, weight FROM {table_name} ORDER BY seq"):
            graph.add_credit(actor, key, weight)
        logger.info("Built bipartite graph: %d actors, %d movies", len(graph.actor_index), len(graph.movies))
        return graph

    def __contains__(self, actor: str) -> bool:
        return actor in self.actor_index

    def __len__(self) -> int:
        return len(self.actor_index)

    def __repr__(self) -> str:
        return f"BipartiteGraph(actors={len(self.actor_index)}, movies={len(self.movies)})"
