"""Single derivation point for an item's low-stock flag.

List, detail and report views all go through these helpers so they never
disagree about an item's stock status. A precomputed flag coming from a data
source is never trusted.
"""

import pandas as pd


def is_low_stock(quantity: int, reorder_level: int) -> bool:
    """Return True when stock is at or below the reorder level."""
    return quantity <= reorder_level


def low_stock_mask(df: pd.DataFrame) -> pd.Series:
    """Boolean mask of rows whose ``quantity`` is at or below ``reorder_level``."""
    if df.empty:
        return pd.Series([], dtype=bool, index=df.index)
    return df["quantity"] <= df["reorder_level"]


def annotate_low_stock(df: pd.DataFrame) -> pd.DataFrame:
    """Return a copy of ``df`` with an ``is_low_stock`` column (re)computed."""
    annotated = df.copy()
    annotated["is_low_stock"] = low_stock_mask(annotated).astype(bool)
    return annotated
