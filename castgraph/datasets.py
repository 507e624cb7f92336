"""
castgraph.datasets — Small synthetic credit datasets with known structure.
"""
from __future__ import annotations
import pandas as pd


def generate_cast_data() -> pd.DataFrame:
    """
    Generate a tiny actor/movie credit table.

    Structure:
    - **Ensemble**: Ava, Ben, Cal and Dee all star in "Heist" (2010), a
      4-clique, so all four survive the 3-core.
    - **Bridge**: Eve appears with Dee in "Sequel" (2015) and with Fay in
      "Indie" (2017), the only route from the ensemble to Fay.
    - **Two routes**: Ava reaches Gus through Ben in "Old Road" (1990) or
      through Cal in "New Road" (2016); both are two hops, but the weighted
      graph prefers the newer movies.
    - **Loner**: Hal is the only actor in "Solo" (2000) and has no edges.

    Columns: ``actor``, ``title``, ``year``

    Example
    -------
    >>> from castgraph.datasets import generate_cast_data
    >>> df = generate_cast_data()
    >>> sorted(df["actor"].unique())[:3]
    ['Ava', 'Ben', 'Cal']
    """
    data = [
        ("Ava", "Heist", 2010), ("Ben", "Heist", 2010), ("Cal", "Heist", 2010), ("Dee", "Heist", 2010),
        ("Dee", "Sequel", 2015), ("Eve", "Sequel", 2015),
        ("Eve", "Indie", 2017), ("Fay", "Indie", 2017),
        ("Ben", "Old Road", 1990), ("Gus", "Old Road", 1990),
        ("Cal", "New Road", 2016), ("Gus", "New Road", 2016),
        ("Hal", "Solo", 2000),
    ]
    return pd.DataFrame(data, columns=["actor", "title", "year"])
