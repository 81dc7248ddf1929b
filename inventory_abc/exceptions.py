class InventoryReportError(Exception):
    """Base class for failures that abort an ingestion."""


class SheetNotFound(InventoryReportError):
    """The workbook does not contain the sheet the inventory export lives on."""

    def __init__(self, sheet_name: str, available: list[str] | None = None):
        self.sheet_name = sheet_name
        self.available = list(available or [])
        message = f'Sheet "{sheet_name}" not found in workbook.'
        if self.available:
            message += f" Available sheets: {', '.join(self.available)}"
        super().__init__(message)


class WorkbookReadError(InventoryReportError):
    """The workbook itself could not be opened or read."""
