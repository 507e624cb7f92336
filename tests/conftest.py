# ---------------------------------------------------------------------------
# Tests configuration
# ---------------------------------------------------------------------------

import pytest
import pandas as pd

from castgraph.core.connection import DuckDBConnection
from castgraph.datasets import generate_cast_data


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def conn():
    """In-memory DuckDB connection for each test."""
    db = DuckDBConnection()  # :memory:
    yield db
    db.close()


@pytest.fixture
def credits_df():
    """
    Ensemble of four in "Heist", a bridge through Eve to Fay, two equal-hop
    routes from Ava to Gus and a loner (Hal).
    """
    return generate_cast_data()


@pytest.fixture
def credits_polars(credits_df):
    """Polars version of the credit dataset."""
    import polars as pl
    return pl.from_pandas(credits_df)


@pytest.fixture
def trio_df():
    """A, B and C all in one movie M (2000)."""
    return pd.DataFrame({"actor": ["A", "B", "C"], "title": ["M"] * 3, "year": [2000] * 3})


@pytest.fixture
def write_tsv(tmp_path):
    """Write a header plus tab separated rows and return the path."""
    def _write(name, header, rows):
        path = tmp_path / name
        lines = [header] + ["\t".join(str(f) for f in row) for row in rows]
        path.write_text("\n".join(lines) + "\n", encoding="utf-8")
        return path
    return _write


@pytest.fixture
def credits_tsv(write_tsv, credits_df):
    return write_tsv("movie_casts.tsv", "Actor/Actress\tMovie\tYear", credits_df.itertuples(index=False))


@pytest.fixture
def loaded_conn(conn, credits_df):
    """Connection with the credit dataset already staged."""
    from castgraph.core.ingestion import load_credits
    load_credits(conn, credits_df)
    return conn


@pytest.fixture
def cast_graph(credits_df):
    """CastGraph with the credit dataset loaded, unweighted."""
    from castgraph.api import CastGraph
    g = CastGraph()
    g.load(credits_df)
    yield g
    g.close()
