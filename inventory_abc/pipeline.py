import logging
from abc import ABC, abstractmethod
from typing import Any, Optional

from .exceptions import InventoryReportError

logger = logging.getLogger(__name__)


class DataPipeline(ABC):
    """
    Abstract base class for report pipelines.
    Follows an Extract -> Transform -> Load (ETL) pattern.
    """

    def __init__(self, report_type: str, test_mode: bool = False):
        self.report_type = report_type
        self.test_mode = test_mode

    def run(self) -> Optional[Any]:
        """
        Orchestrates the pipeline execution.
        Returns the transformed result, or None when nothing could be produced.
        """
        logger.info(f"🚀 STEP: {self.report_type.upper()} REPORT")
        logger.info("-" * 30)

        try:
            # --- 1. EXTRACT ---
            raw_data = self.extract()
            if not raw_data:
                logger.warning(f"⚠️ No data extracted for {self.report_type}.")
                return None

            # --- 2. TRANSFORM ---
            result = self.transform(raw_data)
        except InventoryReportError as e:
            logger.error(f"❌ {self.report_type.capitalize()} pipeline aborted: {e}")
            return None

        # --- 3. LOAD ---
        self.load(result)

        logger.info(f"✅ {self.report_type.capitalize()} Pipeline Finished.\n")
        logger.info("=" * 60)
        return result

    @abstractmethod
    def extract(self) -> Any:
        """Finds and reads the source, returning the raw normalized data."""
        pass

    @abstractmethod
    def transform(self, data: Any) -> Any:
        """Classification and aggregation over the extracted data."""
        pass

    @abstractmethod
    def load(self, result: Any) -> None:
        """Saves the result to disk and delivers it downstream."""
        pass
