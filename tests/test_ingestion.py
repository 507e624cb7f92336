"""Tests for credit record parsing and staging."""

import pytest
import numpy as np
import pandas as pd
import pyarrow as pa

from castgraph.core.errors import MalformedRecord
from castgraph.core.ingestion import (
    REFERENCE_YEAR, load_credits, movie_key, movie_weight, read_credit_records, validate_record,
)


class TestReadCreditRecords:

    def test_header_discarded(self):
        lines = ["Actor\tMovie\tYear\n", "Ava\tHeist\t2010\n"]
        assert list(read_credit_records(lines)) == [("Ava", "Heist", 2010)]

    def test_crlf_line_endings(self):
        lines = ["h\r\n", "Ava\tHeist\t2010\r\n"]
        assert list(read_credit_records(lines)) == [("Ava", "Heist", 2010)]

    def test_wrong_field_count_reports_line(self):
        lines = ["h", "Ava\tHeist\t2010", "Ben\tHeist"]
        with pytest.raises(MalformedRecord, match="line 3: expected 3 fields, got 2") as exc:
            list(read_credit_records(lines))
        assert exc.value.line == 3

    def test_extra_field_rejected(self):
        with pytest.raises(MalformedRecord, match="got 4"):
            list(read_credit_records(["h", "Ava\tHeist\t2010\tx"]))

    def test_non_integer_year(self):
        with pytest.raises(MalformedRecord, match="year must be an integer"):
            list(read_credit_records(["h", "Ava\tHeist\tlast year"]))

    def test_blank_line_is_malformed(self):
        with pytest.raises(MalformedRecord):
            list(read_credit_records(["h", ""]))

    def test_header_only(self):
        assert list(read_credit_records(["Actor\tMovie\tYear"])) == []


class TestValidateRecord:

    def test_numeric_types(self):
        assert validate_record(("Ava", "Heist", 2010.0)) == ("Ava", "Heist", 2010)
        assert validate_record(("Ava", 1917, "2019")) == ("Ava", "1917", 2019)

    @pytest.mark.parametrize("year", [None, True, 2010.5, "20x0"])
    def test_bad_years(self, year):
        with pytest.raises(MalformedRecord):
            validate_record(("Ava", "Heist", year))

    def test_null_actor(self):
        with pytest.raises(MalformedRecord, match="null"):
            validate_record((None, "Heist", 2010))


class TestWeights:

    def test_key_uses_separator(self):
        assert movie_key("Heist", 2010) == "Heist#@2010"

    def test_unweighted(self):
        assert movie_weight(1950) == 1

    def test_weighted(self):
        assert REFERENCE_YEAR == 2018
        assert movie_weight(2018, weighted=True) == 1
        assert movie_weight(2000, weighted=True) == 19
        assert movie_weight(2000, weighted=True, reference_year=2020) == 21


class TestLoadCredits:

    def test_from_dataframe(self, conn, credits_df):
        assert load_credits(conn, credits_df) == len(credits_df)
        assert conn.table_exists("credits")

    def test_staged_columns(self, conn, trio_df):
        load_credits(conn, trio_df, weighted=True)
        rows = conn.query("SELECT * FROM credits ORDER BY seq").to_pylist()
        assert rows[0] == {"seq": 0, "actor": "A", "title": "M", "year": 2000, "movie_key": "M#@2000", "weight": 19}

    def test_from_tsv(self, conn, credits_tsv, credits_df):
        assert load_credits(conn, credits_tsv) == len(credits_df)
        assert load_credits(conn, str(credits_tsv)) == len(credits_df)

    def test_from_polars(self, conn, credits_polars):
        assert load_credits(conn, credits_polars) == credits_polars.height

    def test_from_lazy_polars(self, conn, credits_polars):
        assert load_credits(conn, credits_polars.lazy()) == credits_polars.height

    def test_from_arrow(self, conn, credits_df):
        assert load_credits(conn, pa.Table.from_pandas(credits_df)) == len(credits_df)

    def test_from_records(self, conn):
        assert load_credits(conn, [("A", "M", 2000), ("B", "M", "2000")]) == 2

    def test_custom_columns(self, conn):
        df = pd.DataFrame({"name": ["A"], "movie": ["M"], "released": [2000]})
        load_credits(conn, df, actor_col="name", title_col="movie", year_col="released", table_name="cast_list")
        assert conn.table_exists("cast_list")

    def test_missing_column(self, conn):
        with pytest.raises(MalformedRecord, match="Missing columns"):
            load_credits(conn, pd.DataFrame({"actor": ["A"], "title": ["M"]}))

    def test_replaces_previous_load(self, conn, credits_df, trio_df):
        load_credits(conn, credits_df)
        assert load_credits(conn, trio_df) == 3

    def test_malformed_load_keeps_previous_table(self, conn, trio_df, write_tsv):
        load_credits(conn, trio_df)
        bad = write_tsv("bad.tsv", "h", [("D", "N", 2001), ("E", "N")])
        with pytest.raises(MalformedRecord):
            load_credits(conn, bad)
        assert conn.execute("SELECT COUNT(*) FROM credits").fetchone()[0] == 3

    def test_weighted_future_year_rejected(self, conn):
        with pytest.raises(MalformedRecord, match="after reference year"):
            load_credits(conn, [("A", "M", 2030)], weighted=True)
        assert load_credits(conn, [("A", "M", 2030)], weighted=True, reference_year=2030) == 1

    def test_missing_file(self, conn, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_credits(conn, tmp_path / "nope.tsv")

    def test_empty_source(self, conn):
        assert load_credits(conn, []) == 0

    def test_invalid_utf8_is_malformed(self, conn, trio_df, tmp_path):
        load_credits(conn, trio_df)
        bad = tmp_path / "latin1.tsv"
        bad.write_bytes(b"Actor\tMovie\tYear\nBj\xf6rk\tDancer\t2000\n")
        with pytest.raises(MalformedRecord, match="invalid UTF-8") as exc:
            load_credits(conn, bad)
        assert exc.value.line == 2
        assert conn.row_count("credits") == 3

    def test_pandas_nan_rejected(self, conn, trio_df):
        load_credits(conn, trio_df)
        df = pd.DataFrame({"actor": ["A", np.nan], "title": ["M", "M"], "year": [2000, 2000]})
        with pytest.raises(MalformedRecord, match=r"Null values in columns: \['actor'\]"):
            load_credits(conn, df)
        assert conn.row_count("credits") == 3

    def test_polars_null_rejected(self, conn):
        import polars as pl
        df = pl.DataFrame({"actor": ["A", "B"], "title": ["M", None], "year": [2000, 2000]})
        with pytest.raises(MalformedRecord, match=r"Null values in columns: \['title'\]"):
            load_credits(conn, df)
        assert conn.table_exists("credits") is False
