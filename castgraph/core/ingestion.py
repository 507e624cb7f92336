from __future__ import annotations
import logging
import numbers
from pathlib import Path
from typing import Any, Iterable, Iterator, List, Optional, Tuple
import pyarrow as pa
import narwhals as nw
from castgraph.core.connection import DuckDBConnection
from castgraph.core.errors import MalformedRecord

logger = logging.getLogger(__name__)

REFERENCE_YEAR = 2018
MOVIE_KEY_SEPARATOR = "#@"

Credit = Tuple[str, str, int]

_SCHEMA = pa.schema([
    ("seq", pa.int64()), ("actor", pa.string()), ("title", pa.string()),
    ("year", pa.int64()), ("movie_key", pa.string()), ("weight", pa.int64()),
])


def movie_key(title: str, year: int) -> str:
    return f"{title}{MOVIE_KEY_SEPARATOR}{year}"


def movie_weight(year: int, weighted: bool = False, reference_year: int = REFERENCE_YEAR) -> int:
    """Edge weight of a movie: newer movies are cheaper to traverse when weighted."""
    return reference_year - year + 1 if weighted else 1


def _parse_year(value: Any, line: Optional[int]) -> int:
    if isinstance(value, bool) or value is None:
        raise MalformedRecord(f"year must be an integer, got {value!r}", line)
    if isinstance(value, numbers.Integral):
        return int(value)
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str):
        try: return int(value.strip())
        except ValueError: pass
    raise MalformedRecord(f"year must be an integer, got {value!r}", line)


def validate_record(fields: Any, line: Optional[int] = None) -> Credit:
    fields = tuple(fields)
    if len(fields) != 3:
        raise MalformedRecord(f"expected 3 fields, got {len(fields)}", line)
    actor, title, year = fields
    if actor is None or title is None:
        raise MalformedRecord("actor and title must not be null", line)
    return str(actor), str(title), _parse_year(year, line)


def read_credit_records(lines: Iterable[str]) -> Iterator[Credit]:
    """
    Parse tab-separated ``actor, title, year`` lines.

    The first line is a header and is discarded. Every other line must hold
    exactly three tab-separated fields with an integer year, otherwise
    ``MalformedRecord`` is raised with the 1-based line number.
    """
    for lineno, raw in enumerate(lines, start=1):
        if lineno == 1: continue
        yield validate_record(raw.rstrip("\r\n").split("\t"), lineno)


def _decoded_lines(f) -> Iterator[str]:
    for lineno, raw in enumerate(f, start=1):
        try: yield raw.decode("utf-8")
        except UnicodeDecodeError: raise MalformedRecord("invalid UTF-8", lineno) from None


def _records_from_file(path: Path) -> List[Credit]:
    with open(path, "rb") as f:
        records = list(read_credit_records(_decoded_lines(f)))
    logger.info("Finished reading %s (%d credits)", path, len(records))
    return records


def _records_from_frame(df, actor_col: str, title_col: str, year_col: str) -> List[Credit]:
    if isinstance(df, nw.LazyFrame): df = df.collect()
    missing = [c for c in (actor_col, title_col, year_col) if c not in df.columns]
    if missing: raise MalformedRecord(f"Missing columns: {missing}")
    cols = [actor_col, title_col, year_col]
    has_nulls = df.select([nw.col(c).is_null().any() for c in cols]).row(0)
    nulls = [c for c, flag in zip(cols, has_nulls) if flag]
    if nulls: raise MalformedRecord(f"Null values in columns: {nulls}")
    rows = df.select(cols).rows()
    # Frames have no header line, so row i is reported as line i + 1
    return [validate_record(row, i) for i, row in enumerate(rows, start=1)]


def collect_records(
    source: Any,
    actor_col: str = "actor",
    title_col: str = "title",
    year_col: str = "year",
) -> List[Credit]:
    """Turn a TSV path, a dataframe or an iterable of 3-tuples into validated credits."""
    if isinstance(source, (str, Path)):
        return _records_from_file(Path(source))
    try: df = nw.from_native(source)
    except TypeError: df = None
    if df is not None:
        return _records_from_frame(df, actor_col, title_col, year_col)
    return [validate_record(rec, i) for i, rec in enumerate(source, start=1)]


def credits_table(records: Iterable[Credit], weighted: bool = False, reference_year: int = REFERENCE_YEAR) -> pa.Table:
    rows = []
    for seq, (actor, title, year) in enumerate(records):
        weight = movie_weight(year, weighted, reference_year)
        if weight < 1:
            raise MalformedRecord(f"{title!r} ({year}) is after reference year {reference_year}")
        rows.append({"seq": seq, "actor": actor, "title": title, "year": year,
                     "movie_key": movie_key(title, year), "weight": weight})
    return pa.Table.from_pylist(rows, schema=_SCHEMA)


def load_credits(
    conn: DuckDBConnection,
    source: Any,
    weighted: bool = False,
    reference_year: int = REFERENCE_YEAR,
    table_name: str = "credits",
    actor_col: str = "actor",
    title_col: str = "title",
    year_col: str = "year",
) -> int:
    """
    Validate credit records and stage them in ``table_name``.

    Any malformed record aborts the load before the table is touched, so a
    failed load never leaves a partial graph behind. Returns the row count.
    """
    table = credits_table(collect_records(source, actor_col, title_col, year_col), weighted, reference_year)
    count = conn.stage(table_name, table)
    logger.info("Staged %d credits in %s (weighted=%s)", count, table_name, weighted)
    return count
