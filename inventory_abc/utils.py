import math
from datetime import date, datetime
from pathlib import Path
from typing import Optional

import pandas as pd


def get_date_suffix_for_filename() -> str:
    """Returns the current date as a YYYY-MM-DD string for filenames."""
    return datetime.now().strftime("%Y-%m-%d")


def find_latest_report(
    directory: Path, prefix: str, extensions: tuple[str, ...] = (".xlsx",)
) -> tuple[Path, date] | None:
    """
    Finds the most recently modified file in `directory` whose name starts with
    `prefix` and ends with one of `extensions`.
    Returns the path and the file's modification date, or None if nothing matches.
    """
    if not directory.exists():
        return None

    candidates = [
        path
        for path in directory.iterdir()
        if path.is_file()
        and path.name.startswith(prefix)
        and path.suffix.lower() in extensions
        # Excel lock files (~$name.xlsx) are never real workbooks
        and not path.name.startswith("~$")
    ]
    if not candidates:
        return None

    latest = max(candidates, key=lambda p: p.stat().st_mtime)
    return latest, date.fromtimestamp(latest.stat().st_mtime)


def is_missing(value) -> bool:
    """True for None, NaN, NaT and pd.NA cells."""
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False


def to_number(value) -> Optional[float]:
    """
    Best-effort conversion of a spreadsheet cell to a float.
    Returns None for blanks, text that is not a number, booleans and infinities.
    """
    if is_missing(value) or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def clean_text(value) -> str:
    """Cell value as trimmed text; blanks become an empty string."""
    if is_missing(value):
        return ""
    # Codes typed as numbers come back from Excel as floats (1020 -> 1020.0)
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value).strip()
