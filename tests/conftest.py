import pytest
from openpyxl import Workbook

from inventory_abc import settings
from inventory_abc.schemas import InventoryRecord


@pytest.fixture
def make_record():
    """Factory for InventoryRecord with sensible defaults."""

    def _make(material="ITEM", total_sale_value=0, code="", **fields):
        return InventoryRecord(
            code=code, material=material, total_sale_value=total_sale_value, **fields
        )

    return _make


@pytest.fixture
def write_workbook(tmp_path):
    """Writes {sheet_name: [rows]} to an .xlsx file and returns its path."""

    def _write(sheets, filename="estoque_test.xlsx"):
        workbook = Workbook()
        workbook.remove(workbook.active)
        for sheet_name, rows in sheets.items():
            sheet = workbook.create_sheet(sheet_name)
            for row in rows:
                sheet.append(row)
        path = tmp_path / filename
        workbook.save(path)
        return path

    return _write


HEADER = [
    "Código",
    "Material ",
    " Quantidade Disponível",
    "Quantidade Física",
    "Unidade",
    "Valor Venda Unitário",
    "Valor Venda Estoque ",
    "Cobertura (Dias)",
]


@pytest.fixture
def inventory_rows():
    """A realistic Planilha4 export: title rows, padded headers, a footer total."""
    return [
        ["Relatório de Estoque"],
        ["Emitido em", "2024-05-01"],
        HEADER,
        [101, "BALDE 20L", 10, 12, "un", 25.0, 500.0, 30],
        [102, "CAIXA DE PAPEL", -3, 5, "CX", 60.0, 300.0, None],
        [103, "FITA ADESIVA", 7, 7, None, "n/d", 200.0, 12],
        [None, None, None, None, None, None, None, None],
        [None, "Total Geral", None, 24, None, None, 1000.0, None],
    ]


@pytest.fixture
def output_dirs(tmp_path, monkeypatch):
    """Points report outputs at a temporary directory."""
    output_dir = tmp_path / "output"
    monkeypatch.setattr(settings, "OUTPUT_DIR", output_dir)
    monkeypatch.setattr(settings, "INPUT_DIR", tmp_path)
    monkeypatch.setattr(settings, "SAVE_JSON_OUTPUT", True)
    monkeypatch.setattr(settings, "WEBHOOK_URL", None)
    monkeypatch.setattr(settings, "LOG_DIR", tmp_path / "logs")
    return output_dir
