"""
Command-line entry point with one subcommand per batch report.

    castgraph path    MOVIE_TSV {u,w} PAIRS_TSV OUTPUT
    castgraph popular MOVIE_TSV K OUTPUT
    castgraph predict MOVIE_TSV TARGETS INTERACTIONS_OUT COLLABORATIONS_OUT
"""
from __future__ import annotations
import argparse
import logging
import sys
from typing import List, Optional
from castgraph.api import CastGraph
from castgraph.core.errors import ArgumentError, CastGraphError, UnknownActor
from castgraph.core.ingestion import REFERENCE_YEAR
from castgraph.algorithms.prediction import PREDICTION_LIMIT
from castgraph import reports

logger = logging.getLogger("castgraph")


def parse_weighting(flag: str) -> bool:
    if flag not in ("u", "w"):
        raise ArgumentError(f"Wrong parameter {flag!r}, must be u or w")
    return flag == "w"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="castgraph", description="Shortest paths, k-cores and collaboration predictions over actor/movie credits.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug progress")
    parser.add_argument("--database", default=":memory:", help="DuckDB database used to stage credits")
    parser.add_argument("--reference-year", type=int, default=REFERENCE_YEAR, help="Year that weighted edges are measured from")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("path", help="Shortest path between pairs of actors")
    p.add_argument("movie_tsv", help="Tab delimited actor, movie title, movie year file with a header row")
    p.add_argument("weighting", help="u for unweighted, w to prefer newer movies")
    p.add_argument("pairs_tsv", help="Tab delimited start actor, end actor file with a header row")
    p.add_argument("output", help="File to write the paths to")

    p = sub.add_parser("popular", help="Actors in the k-core of the collaboration graph")
    p.add_argument("movie_tsv")
    p.add_argument("k", type=int, help="Minimum number of collaborators within the core")
    p.add_argument("output")

    p = sub.add_parser("predict", help="Predict future interactions and recommend new collaborations")
    p.add_argument("movie_tsv")
    p.add_argument("targets", help="Actor names to predict for, one per line, with a header row")
    p.add_argument("interactions_out")
    p.add_argument("collaborations_out")
    p.add_argument("-n", type=int, default=PREDICTION_LIMIT, help="Candidates per actor")
    return parser


def _run_path(args) -> None:
    weighted = parse_weighting(args.weighting)
    with CastGraph(database=args.database, weighted=weighted, reference_year=args.reference_year) as g:
        g.load(args.movie_tsv)
        with open(args.pairs_tsv, encoding="utf-8") as f:
            pairs = reports.read_pairs(f)
        results = g.find_paths(pairs)
        with open(args.output, "w", encoding="utf-8") as out:
            reports.write_paths(out, results.column("path").to_pylist())


def _run_popular(args) -> None:
    with CastGraph(database=args.database, reference_year=args.reference_year) as g:
        g.load(args.movie_tsv)
        names = g.popular_actors(args.k)
        with open(args.output, "w", encoding="utf-8") as out:
            reports.write_actors(out, names)
    logger.info("%d actors in the %d-core", len(names), args.k)


def _prediction_rows(g: CastGraph, actors: List[str], mode: str, n: int) -> List[List[str]]:
    rows = []
    for actor in actors:
        try: rows.append([p.name for p in g.predictor.predict(actor, mode=mode, limit=n)])
        except UnknownActor as e:
            logger.warning("%s; writing an empty row", e)
            rows.append([])
    return rows


def _run_predict(args) -> None:
    with CastGraph(database=args.database, reference_year=args.reference_year) as g:
        g.load(args.movie_tsv)
        with open(args.targets, encoding="utf-8") as f:
            actors = reports.read_actor_names(f)
        for mode, path in (("interaction", args.interactions_out), ("collaboration", args.collaborations_out)):
            logger.info("Finding top %s candidates ...", mode)
            with open(path, "w", encoding="utf-8") as out:
                reports.write_predictions(out, _prediction_rows(g, actors, mode, args.n))


COMMANDS = {"path": _run_path, "popular": _run_popular, "predict": _run_predict}


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    try:
        COMMANDS[args.command](args)
    except (CastGraphError, OSError) as e:
        logger.error("%s", e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
