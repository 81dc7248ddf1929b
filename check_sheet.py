import logging
import sys
from pathlib import Path

from inventory_abc import settings
from inventory_abc.exceptions import InventoryReportError
from inventory_abc.logger import setup_logger
from inventory_abc.parsers import list_sheet_columns

logger = logging.getLogger(__name__)


def check_sheet(workbook_path: Path) -> int:
    """Prints the real column names of the inventory sheet in a workbook."""
    try:
        header_row, columns = list_sheet_columns(workbook_path)
    except InventoryReportError as e:
        logger.error(f"❌ {e}")
        return 1

    logger.info(f"Real columns of {settings.SHEET_NAME} (header on row {header_row}):")
    for column in columns:
        logger.info(f"  - {column}")

    missing = [column for column in settings.SOURCE_COLUMNS if column not in columns]
    if missing:
        logger.warning(f"⚠️ Expected columns not found: {', '.join(missing)}")
    return 0


if __name__ == "__main__":
    setup_logger()
    if len(sys.argv) != 2:
        print("Usage: python check_sheet.py <workbook.xlsx>")
        sys.exit(2)
    sys.exit(check_sheet(Path(sys.argv[1])))
