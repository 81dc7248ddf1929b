import logging

import check_sheet
import main
from inventory_abc import settings
from inventory_abc.logger import setup_logger


def test_setup_logger_adds_handlers_once(tmp_path, monkeypatch):
    monkeypatch.setattr(settings, "LOG_DIR", tmp_path / "logs")
    logger = setup_logger("inventory_abc.test_logger")
    try:
        assert len(logger.handlers) == 2
        assert setup_logger("inventory_abc.test_logger") is logger
        assert len(logger.handlers) == 2
        assert (tmp_path / "logs" / "inventory_abc.log").exists()
    finally:
        for handler in list(logger.handlers):
            handler.close()
            logger.removeHandler(handler)


def test_main_run_process(output_dirs, write_workbook, inventory_rows):
    path = write_workbook({settings.SHEET_NAME: inventory_rows})
    assert main.run_process(path, test_mode=True) == 0
    assert main.run_process(output_dirs / "missing.xlsx", test_mode=True) == 1


def test_check_sheet_lists_columns(write_workbook, inventory_rows, caplog):
    path = write_workbook({settings.SHEET_NAME: inventory_rows})

    with caplog.at_level(logging.INFO):
        assert check_sheet.check_sheet(path) == 0

    assert "Valor Venda Estoque" in caplog.text
    assert "Expected columns not found" not in caplog.text


def test_check_sheet_missing_sheet(write_workbook, caplog):
    path = write_workbook({"Planilha1": [["Material"]]})
    assert check_sheet.check_sheet(path) == 1
    assert "Planilha4" in caplog.text
