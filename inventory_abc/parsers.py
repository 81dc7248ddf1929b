import logging
from pathlib import Path
from typing import IO, Iterable, Optional, Sequence, Union

import pandas as pd

from . import settings
from .exceptions import SheetNotFound, WorkbookReadError
from .schemas import InventoryRecord
from .utils import clean_text, is_missing

logger = logging.getLogger(__name__)

WorkbookSource = Union[str, Path, IO[bytes]]


def read_sheet_grid(
    source: WorkbookSource, sheet_name: str = settings.SHEET_NAME
) -> pd.DataFrame:
    """
    Reads one sheet as a raw grid: no header, every row in source order.
    Raises SheetNotFound when the workbook has no sheet with that exact name,
    and WorkbookReadError for any other failure to open or read the file.
    """
    try:
        with pd.ExcelFile(source, engine="openpyxl") as workbook:
            if sheet_name not in workbook.sheet_names:
                raise SheetNotFound(sheet_name, workbook.sheet_names)
            return workbook.parse(sheet_name, header=None)
    except SheetNotFound:
        raise
    except FileNotFoundError as e:
        raise WorkbookReadError(f"Workbook not found: {source}") from e
    except Exception as e:
        raise WorkbookReadError(f"Could not read workbook {source}. Reason: {e}") from e


def find_header_row(
    rows: Iterable[Sequence],
    keyword: str = settings.HEADER_KEYWORD,
    max_rows: int = settings.HEADER_SCAN_ROWS,
) -> Optional[int]:
    """
    Returns the index of the first row (within the first `max_rows`) that has a
    cell containing `keyword`, case-insensitively. None when no row qualifies.
    """
    keyword = keyword.lower()
    for index, row in enumerate(rows):
        if index >= max_rows:
            break
        if any(
            keyword in str(cell).lower() for cell in row if not is_missing(cell)
        ):
            return index
    return None


def resolve_header_row(grid: pd.DataFrame) -> int:
    """Header row index for the grid, falling back to the first row."""
    header_row = find_header_row(
        grid.head(settings.HEADER_SCAN_ROWS).itertuples(index=False, name=None)
    )
    if header_row is None:
        logger.warning(
            f"⚠️ No '{settings.HEADER_KEYWORD}' header in the first "
            f"{settings.HEADER_SCAN_ROWS} rows. Using row 0 as header."
        )
        return 0
    logger.info(f"  > Header found on row {header_row}.")
    return header_row


def _header_names(cells: Iterable) -> list[str]:
    """Trimmed field names; repeated names get a numeric suffix (Name, Name_1, ...)."""
    names = []
    seen: dict[str, int] = {}
    for cell in cells:
        name = clean_text(cell)
        if name and name in seen:
            seen[name] += 1
            name = f"{name}_{seen[name]}"
        elif name:
            seen[name] = 0
        names.append(name)
    return names


def records_from_grid(grid: pd.DataFrame, header_row: int) -> pd.DataFrame:
    """
    Re-extracts the table below `header_row`, using that row as field names.
    Columns without a header and fully blank rows are dropped.
    """
    if grid.empty or header_row >= len(grid):
        return pd.DataFrame()

    header = _header_names(grid.iloc[header_row])
    body = grid.iloc[header_row + 1 :].copy()
    body.columns = range(len(header))

    keep = [position for position, name in enumerate(header) if name]
    body = body[keep]
    body.columns = [header[position] for position in keep]

    return body.dropna(how="all").reset_index(drop=True)


def normalize_records(frame: pd.DataFrame) -> list[InventoryRecord]:
    """
    Converts extracted rows into InventoryRecord objects.
    - Trims whitespace from every field name.
    - Drops rows with an empty Material and footer rows whose Material contains "total".
    - Numeric fields that cannot be parsed become 0 (handled by the schema).
    Only the known source columns are read; any other sheet column is dropped.
    """
    if frame.empty:
        return []

    frame = frame.rename(columns=lambda column: str(column).strip())
    if settings.MATERIAL_COLUMN not in frame.columns:
        logger.warning(
            f"⚠️ Column '{settings.MATERIAL_COLUMN}' not found. "
            f"Columns read: {list(frame.columns)}"
        )
        return []

    material = frame[settings.MATERIAL_COLUMN].map(clean_text)
    is_blank = material == ""
    is_total = material.str.lower().str.contains(settings.TOTAL_ROW_TOKEN, regex=False)
    items = frame[~(is_blank | is_total)]

    dropped = len(frame) - len(items)
    if dropped:
        logger.info(f"  > Dropped {dropped} blank/total rows.")

    # A sheet column named like a derived field ("ABC") must not reach the record.
    source_columns = [c for c in settings.SOURCE_COLUMNS if c in items.columns]
    records = [
        InventoryRecord.model_validate(row)
        for row in items[source_columns].to_dict("records")
    ]
    logger.info(f"  > Normalized {len(records)} inventory records.")
    return records


def parse_inventory_workbook(
    source: WorkbookSource, sheet_name: str = settings.SHEET_NAME
) -> list[InventoryRecord]:
    """Reads the workbook and returns the normalized (unclassified) records."""
    grid = read_sheet_grid(source, sheet_name)
    header_row = resolve_header_row(grid)
    return normalize_records(records_from_grid(grid, header_row))


def list_sheet_columns(
    source: WorkbookSource, sheet_name: str = settings.SHEET_NAME
) -> tuple[int, list[str]]:
    """Returns the resolved header row index and the field names found on it."""
    grid = read_sheet_grid(source, sheet_name)
    header_row = resolve_header_row(grid)
    if grid.empty:
        return header_row, []
    return header_row, [name for name in _header_names(grid.iloc[header_row]) if name]
