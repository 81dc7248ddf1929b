from typing import Sequence

import pandas as pd

from . import settings
from .schemas import CategoryTotal, InventoryRecord, InventorySummary, UnitTotal


def product_category(material: str) -> str:
    """First keyword (in configured order) found in the material text, else OUTROS."""
    text = str(material or "").upper()
    for keyword in settings.CATEGORY_KEYWORDS:
        if keyword in text:
            return keyword
    return settings.OTHER_CATEGORY


def summarize(records: Sequence[InventoryRecord]) -> InventorySummary:
    """
    Totals for the given (usually filtered) records:
    - total revenue,
    - physical quantity per upper-cased unit, in first-seen order,
    - revenue and physical quantity per product category, by revenue descending.
    Never mutates the records.
    """
    if not records:
        return InventorySummary()

    df = pd.DataFrame(
        {
            "unit": [
                (record.unit or settings.DEFAULT_UNIT).upper() for record in records
            ],
            "category": [product_category(record.material) for record in records],
            "revenue": [record.total_sale_value for record in records],
            "quantity": [record.physical_qty for record in records],
        }
    )

    unit_groups = df.groupby("unit", sort=False)["quantity"].sum()
    unit_totals = [
        UnitTotal(unit=unit, quantity=quantity)
        for unit, quantity in unit_groups.items()
    ]

    category_groups = (
        df.groupby("category", sort=False)[["revenue", "quantity"]]
        .sum()
        .sort_values("revenue", ascending=False, kind="stable")
    )
    category_totals = [
        CategoryTotal(category=category, revenue=row.revenue, quantity=row.quantity)
        for category, row in category_groups.iterrows()
    ]

    return InventorySummary(
        total_revenue=df["revenue"].sum(),
        record_count=len(df),
        unit_totals=unit_totals,
        category_totals=category_totals,
    )
