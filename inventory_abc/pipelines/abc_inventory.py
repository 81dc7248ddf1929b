import logging
from pathlib import Path
from typing import Optional

from inventory_abc import data_handler, parsers, settings, utils
from inventory_abc.aggregation import summarize
from inventory_abc.exceptions import WorkbookReadError
from inventory_abc.pipeline import DataPipeline
from inventory_abc.schemas import InventoryRecord
from inventory_abc.view import InventoryState

logger = logging.getLogger(__name__)


class AbcInventoryPipeline(DataPipeline):
    """
    Reads the inventory workbook, classifies every item (ABC) and exports the
    classified report together with its unit and category totals.
    """

    def __init__(self, workbook_path: Optional[Path] = None, test_mode: bool = False):
        super().__init__("abc_inventory", test_mode=test_mode)
        self.workbook_path = Path(workbook_path) if workbook_path else None

    def locate_workbook(self) -> Path:
        if self.workbook_path is not None:
            return self.workbook_path

        found = utils.find_latest_report(
            settings.INPUT_DIR,
            settings.WORKBOOK_FILENAME_PREFIX,
            settings.WORKBOOK_EXTENSIONS,
        )
        if not found:
            raise WorkbookReadError(
                f"No '{settings.WORKBOOK_FILENAME_PREFIX}*' workbook found in {settings.INPUT_DIR}"
            )
        path, file_date = found
        logger.info(f"  > Found: {path.name} (File Date: {file_date})")
        return path

    def extract(self) -> list[InventoryRecord]:
        logger.info("--- Reading Inventory Workbook ---")
        self.workbook_path = self.locate_workbook()
        return parsers.parse_inventory_workbook(self.workbook_path)

    def transform(self, records: list[InventoryRecord]) -> InventoryState:
        logger.info("\n--- Classifying Items (ABC) ---")
        return InventoryState.from_records(records, source=str(self.workbook_path))

    def load(self, state: InventoryState) -> None:
        records = list(state.records)
        summary = summarize(records)

        logger.info("\n--- Summary ---")
        logger.info(f"Items: {summary.record_count}")
        logger.info(f"Total revenue: {summary.total_revenue:,.2f}")
        for unit_total in summary.unit_totals:
            logger.info(f"  {unit_total.unit}: {unit_total.quantity:,.0f}")
        for category_total in summary.category_totals:
            logger.info(
                f"  {category_total.category}: {category_total.revenue:,.2f} "
                f"({category_total.quantity:,.0f} units)"
            )

        data_handler.save_outputs(records, summary)

        if not self.test_mode:
            data_handler.post_to_webhook(records, summary, report_type=self.report_type)
        else:
            logger.info("🧪 Test Mode: Skipping webhook post.")
