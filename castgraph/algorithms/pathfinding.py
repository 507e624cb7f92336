"""
Weighted shortest paths between actors.

Dijkstra's algorithm runs over the implicit projected graph: the neighbors of
an actor are discovered through its movies, and each movie's weight is the
cost of the edge it induces.
"""
from __future__ import annotations
import heapq
import logging
import math
from dataclasses import dataclass, field
from typing import List
from castgraph.bipartite import BipartiteGraph
from castgraph.core.errors import NoPathFound

logger = logging.getLogger(__name__)

PATH_HEADER = "(actor)--[movie#@year]-->(actor)--..."


@dataclass
class Vertex:
    name: str
    dist: float = math.inf
    done: bool = False
    prev: int = -1
    prev_movie: str = ""

    def reset(self) -> None:
        self.dist, self.done, self.prev, self.prev_movie = math.inf, False, -1, ""


@dataclass
class ActorPath:
    actors: List[str]
    movies: List[str] = field(default_factory=list)
    distance: int = 0

    def format(self) -> str:
        parts = [f"({a})--[{m}]-->" for a, m in zip(self.actors, self.movies)]
        return "".join(parts) + f"({self.actors[-1]})"

    def __str__(self) -> str:
        return self.format()


class PathFinder:
    """
    Shortest-path search with reusable per-actor state.

    The vertex arena is allocated once and reset at the start of every query,
    so one finder must not serve two queries at the same time.
    """

    def __init__(self, graph: BipartiteGraph):
        self.graph = graph
        self.vertices = [Vertex(name) for name in graph.actor_index]

    def _reset(self) -> None:
        for v in self.vertices: v.reset()

    def _search(self, start: int, end: int) -> None:
        names = self.graph.actors
        self.vertices[start].dist = 0
        # Entries are (dist, previous actor name, ordinal); equal distances pop the
        # smaller previous actor first. Stale entries are skipped once done.
        heap = [(0, "", start)]
        while heap:
            _, _, i = heapq.heappop(heap)
            if i == end: return
            working = self.vertices[i]
            if working.done: continue
            working.done = True
            for other, key, weight in self.graph.co_stars(working.name):
                j = self.graph.actor_index[other]
                v = self.vertices[j]
                cand = working.dist + weight
                if cand < v.dist or (cand == v.dist and not v.done and working.name < names[v.prev]):
                    v.dist, v.prev, v.prev_movie = cand, i, key
                    heapq.heappush(heap, (cand, working.name, j))
        raise NoPathFound(names[start], names[end])

    def find_path(self, start_name: str, end_name: str) -> ActorPath:
        start, end = self.graph.index(start_name), self.graph.index(end_name)
        self._reset()
        self._search(start, end)

        actors, movies = [], []
        v = self.vertices[end]
        while v.prev != -1:
            actors.append(v.name); movies.append(v.prev_movie)
            v = self.vertices[v.prev]
        actors.append(v.name)
        actors.reverse(); movies.reverse()
        logger.debug("Path %s -> %s: %d hops, distance %s", start_name, end_name, len(movies), self.vertices[end].dist)
        return ActorPath(actors, movies, int(self.vertices[end].dist))
