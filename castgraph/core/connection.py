from __future__ import annotations
import logging
import duckdb
from pathlib import Path
from typing import Union, Optional, List, Tuple
import pyarrow as pa

logger = logging.getLogger(__name__)

Params = Optional[Union[list, dict]]


class DuckDBConnection:
    """
    DuckDB database holding the staged credit tables.

    Defaults to ``:memory:``, so nothing outlives one batch run unless a
    database file is given.
    """

    def __init__(
        self,
        database: Union[str, Path] = ":memory:",
        memory_limit: Optional[str] = None,
        threads: Optional[int] = None,
    ):
        self._database = str(database)
        self.conn = duckdb.connect(self._database)
        settings = {"memory_limit": f"'{memory_limit}'" if memory_limit else None, "threads": threads}
        for name, value in settings.items():
            if value: self.conn.execute(f"SET {name}={value}")
        logger.debug("Opened DuckDB database %s", self._database)

    def execute(self, query: str, params: Params = None) -> duckdb.DuckDBPyConnection:
        return self.conn.execute(query, params)

    def query(self, query: str, params: Params = None) -> pa.Table:
        result = self.execute(query, params).arrow()
        # Newer DuckDB releases hand back a RecordBatchReader
        return result.read_all() if hasattr(result, "read_all") else result

    def fetchall(self, query: str, params: Params = None) -> List[Tuple]:
        return self.execute(query, params).fetchall()

    def row_count(self, table_name: str) -> int:
        return self.execute(f"SELECT COUNT(*) FROM {table_name}").fetchone()[0]

    def table_exists(self, table_name: str) -> bool:
        try:
            self.conn.execute(f"SELECT 1 FROM {table_name} LIMIT 0")
        except duckdb.Error:
            return False
        return True

    def stage(self, table_name: str, data: pa.Table) -> int:
        """Replace ``table_name`` with the rows of ``data`` and return its row count."""
        view = f"_staging_{table_name}"
        self.conn.register(view, data)
        try:
            self.conn.execute(f"CREATE OR REPLACE TABLE {table_name} AS SELECT * FROM {view}")
        finally:
            self.conn.unregister(view)
        return self.row_count(table_name)

    def close(self):
        self.conn.close()

    def __enter__(self):
        return self

    def __exit__(self, *_):
        self.close()

    def __repr__(self) -> str:
        return f"DuckDBConnection(database={self._database!r})"
