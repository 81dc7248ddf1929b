import logging
from datetime import datetime
from typing import Literal, Optional, Sequence

from pydantic import BaseModel, ConfigDict, Field

from . import parsers
from .aggregation import summarize
from .classification import classify_abc
from .schemas import InventoryRecord, InventorySummary

logger = logging.getLogger(__name__)

SortDirection = Literal["asc", "desc"]


def filter_records(
    records: Sequence[InventoryRecord], term: str = ""
) -> list[InventoryRecord]:
    """Records whose material or code contains `term`, case-insensitively."""
    needle = (term or "").strip().lower()
    if not needle:
        return list(records)
    return [
        record
        for record in records
        if needle in record.material.lower() or needle in record.code.lower()
    ]


def sort_records(
    records: Sequence[InventoryRecord],
    key: str,
    direction: SortDirection = "asc",
) -> list[InventoryRecord]:
    """
    Records sorted by any InventoryRecord field. Missing values (None) always go last.
    The sort is stable, so equal values keep their current order.
    """
    if key not in InventoryRecord.model_fields:
        raise ValueError(f"Unknown sort key: {key!r}")
    if direction not in ("asc", "desc"):
        raise ValueError(f"Unknown sort direction: {direction!r}")

    present = [record for record in records if getattr(record, key) is not None]
    missing = [record for record in records if getattr(record, key) is None]
    present.sort(key=lambda record: getattr(record, key), reverse=direction == "desc")
    return present + missing


class InventoryView(BaseModel):
    """One filtered/sorted window over the loaded records, with its totals."""

    model_config = ConfigDict(frozen=True)

    records: tuple[InventoryRecord, ...] = ()
    summary: InventorySummary = Field(default_factory=InventorySummary)


class InventoryState(BaseModel):
    """
    The classified record set produced by one ingestion.
    Replaced wholesale on the next ingestion, never updated in place.
    """

    model_config = ConfigDict(frozen=True)

    records: tuple[InventoryRecord, ...] = ()
    source: Optional[str] = None
    loaded_at: datetime = Field(default_factory=datetime.now)

    @classmethod
    def from_records(
        cls, records: Sequence[InventoryRecord], source: Optional[str] = None
    ) -> "InventoryState":
        return cls(records=tuple(classify_abc(records)), source=source)

    def view(
        self,
        search: str = "",
        sort_key: Optional[str] = None,
        direction: SortDirection = "asc",
    ) -> InventoryView:
        visible = filter_records(self.records, search)
        if sort_key:
            visible = sort_records(visible, sort_key, direction)
        return InventoryView(records=tuple(visible), summary=summarize(visible))


class InventorySession:
    """Holds the currently loaded inventory. Only `ingest` replaces it."""

    def __init__(self):
        self.state = InventoryState()

    def ingest(self, source: parsers.WorkbookSource) -> InventoryState:
        """
        Reads, normalizes and classifies a workbook, then swaps it in.
        On any failure (e.g. SheetNotFound) the previous state is kept and the error propagates.
        """
        records = parsers.parse_inventory_workbook(source)
        new_state = InventoryState.from_records(records, source=str(source))
        self.state = new_state
        logger.info(f"✅ Loaded {len(new_state.records)} records from {source}.")
        return new_state

    def view(self, **kwargs) -> InventoryView:
        return self.state.view(**kwargs)
