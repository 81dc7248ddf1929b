"""
ABC (Pareto) classification by cumulative revenue contribution.

Items are ranked by `total_sale_value` descending. Walking that ranking, each
item's cumulative percentage is its own revenue plus everything ranked above
it, over the total revenue:

    percent <= 70       -> 'A'
    70 < percent <= 90  -> 'B'
    percent > 90        -> 'C'

Classification always runs over the full record set, never over a filtered view.
"""

import logging
from typing import Sequence

import pandas as pd

from . import settings
from .schemas import AbcCategory, InventoryRecord

logger = logging.getLogger(__name__)

# Float sums of decimal revenues land a hair off the exact band edges.
PERCENT_TOLERANCE = 1e-9


def category_for_percent(percent: float) -> AbcCategory:
    if percent <= settings.ABC_A_THRESHOLD + PERCENT_TOLERANCE:
        return "A"
    if percent <= settings.ABC_B_THRESHOLD + PERCENT_TOLERANCE:
        return "B"
    return "C"


def cumulative_revenue_percent(records: Sequence[InventoryRecord]) -> pd.Series:
    """
    Cumulative revenue percentage of each record, indexed by its position in `records`.
    Ties in revenue keep their original relative order in the ranking.
    Returns NaN for every record when total revenue is 0.
    """
    revenue = pd.Series(
        [record.total_sale_value for record in records], dtype="float64"
    )
    if revenue.empty:
        return revenue
    # Ascending stable sort on the negated values == descending with stable ties.
    # The index carries each record's original position through the sort.
    ranking = (-revenue).sort_values(kind="stable")
    cumulative = revenue.loc[ranking.index].cumsum()
    # The running total over the ranking is the total, summed in the same order.
    total_revenue = cumulative.iloc[-1]
    if total_revenue == 0:
        return pd.Series(float("nan"), index=revenue.index)
    return (cumulative * 100 / total_revenue).sort_index()


def classify_abc(records: Sequence[InventoryRecord]) -> list[InventoryRecord]:
    """
    Returns a new list with `abc_category` set on every record, in the same
    order as `records`. The input records are left untouched.
    """
    if not records:
        return []

    percents = cumulative_revenue_percent(records)
    if percents.isna().all():
        logger.info("  > Total revenue is 0. Every item is classified as 'A'.")
        categories = ["A"] * len(records)
    else:
        categories = [category_for_percent(p) for p in percents]

    classified = [
        record.model_copy(update={"abc_category": category})
        for record, category in zip(records, categories)
    ]

    counts = pd.Series(categories).value_counts()
    logger.info(
        "  > ABC classification: "
        + ", ".join(f"{cat}={int(counts.get(cat, 0))}" for cat in ("A", "B", "C"))
    )
    return classified
