import json
import os
import time

import pandas as pd
import pytest
import requests

from inventory_abc import data_handler, settings
from inventory_abc.aggregation import summarize
from inventory_abc.classification import classify_abc
from inventory_abc.pipelines import AbcInventoryPipeline


class _FakeResponse:
    def __init__(self, status_code=200):
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.exceptions.HTTPError(f"{self.status_code} error")


def test_pipeline_exports_classified_report(output_dirs, write_workbook, inventory_rows):
    path = write_workbook({settings.SHEET_NAME: inventory_rows})

    state = AbcInventoryPipeline(workbook_path=path, test_mode=True).run()

    assert [r.abc_category for r in state.records] == ["A", "B", "C"]

    (csv_path,) = output_dirs.glob("*.csv")
    report = pd.read_csv(csv_path, encoding="utf-8-sig", dtype={"Código": str})
    assert report["Material"].tolist() == ["BALDE 20L", "CAIXA DE PAPEL", "FITA ADESIVA"]
    assert report["ABC"].tolist() == ["A", "B", "C"]
    assert report["Código"].tolist() == ["101", "102", "103"]

    (json_path,) = output_dirs.glob("*.json")
    payload = json.loads(json_path.read_text(encoding="utf-8"))
    assert len(payload["reportData"]) == 3
    assert payload["summary"]["total_revenue"] == 1000
    assert [c["category"] for c in payload["summary"]["category_totals"]] == [
        "BALDE",
        "PAPEL",
        "OUTROS",
    ]


def test_pipeline_skips_json_when_disabled(
    output_dirs, monkeypatch, write_workbook, inventory_rows
):
    monkeypatch.setattr(settings, "SAVE_JSON_OUTPUT", False)
    path = write_workbook({settings.SHEET_NAME: inventory_rows})

    AbcInventoryPipeline(workbook_path=path, test_mode=True).run()

    assert list(output_dirs.glob("*.json")) == []
    assert len(list(output_dirs.glob("*.csv"))) == 1


def test_pipeline_picks_latest_workbook_from_input_dir(
    output_dirs, write_workbook, inventory_rows
):
    old = write_workbook(
        {settings.SHEET_NAME: [["Material", "Valor Venda Estoque"], ["OLD", 1]]},
        "estoque_old.xlsx",
    )
    new = write_workbook({settings.SHEET_NAME: inventory_rows}, "estoque_new.xlsx")
    write_workbook({settings.SHEET_NAME: [["Material"], ["OTHER"]]}, "vendas.xlsx")
    stamp = time.time()
    os.utime(old, (stamp - 3600, stamp - 3600))
    os.utime(new, (stamp, stamp))

    pipeline = AbcInventoryPipeline(test_mode=True)
    state = pipeline.run()

    assert pipeline.workbook_path == new
    assert len(state.records) == 3


def test_pipeline_without_workbook_returns_none(output_dirs):
    assert AbcInventoryPipeline(test_mode=True).run() is None
    assert not output_dirs.exists()


def test_pipeline_missing_sheet_aborts_without_outputs(
    output_dirs, write_workbook, inventory_rows
):
    path = write_workbook({"Planilha1": inventory_rows})

    assert AbcInventoryPipeline(workbook_path=path, test_mode=True).run() is None
    assert not output_dirs.exists()


def test_pipeline_posts_to_webhook(output_dirs, monkeypatch, write_workbook, inventory_rows):
    calls = []

    def fake_post(url, json=None, timeout=None):
        calls.append((url, json, timeout))
        return _FakeResponse()

    monkeypatch.setattr(settings, "WEBHOOK_URL", "https://hooks.example.com/abc")
    monkeypatch.setattr(data_handler.requests, "post", fake_post)
    path = write_workbook({settings.SHEET_NAME: inventory_rows})

    AbcInventoryPipeline(workbook_path=path).run()

    (url, payload, timeout) = calls[0]
    assert url == "https://hooks.example.com/abc"
    assert timeout == 15
    assert payload["reportType"] == "abc_inventory"
    assert [row["ABC"] for row in payload["reportData"]] == ["A", "B", "C"]
    assert payload["summary"]["unit_totals"] == [
        {"unit": "UN", "quantity": 19.0},
        {"unit": "CX", "quantity": 5.0},
    ]


def test_post_to_webhook_failure_is_reported(monkeypatch, make_record):
    def failing_post(url, json=None, timeout=None):
        return _FakeResponse(500)

    monkeypatch.setattr(settings, "WEBHOOK_URL", "https://hooks.example.com/abc")
    monkeypatch.setattr(data_handler.requests, "post", failing_post)
    records = classify_abc([make_record("SACO", 10)])

    assert data_handler.post_to_webhook(records, summarize(records)) is False


def test_post_to_webhook_without_url(monkeypatch, make_record):
    monkeypatch.setattr(settings, "WEBHOOK_URL", None)
    records = [make_record("SACO", 10)]
    assert data_handler.post_to_webhook(records, summarize(records)) is False


def test_records_to_dataframe_uses_source_headers(make_record):
    frame = data_handler.records_to_dataframe([make_record("SACO", 10, code="7")])
    assert list(frame.columns) == [
        "Código",
        "Material",
        "Quantidade Disponível",
        "Quantidade Física",
        "Unidade",
        "Valor Venda Unitário",
        "Valor Venda Estoque",
        "Cobertura (Dias)",
        "ABC",
    ]
    assert frame.loc[0, "Valor Venda Estoque"] == pytest.approx(10)


def test_pipeline_classifies_sheet_with_its_own_abc_column(output_dirs, write_workbook):
    rows = [
        ["Material", "Valor Venda Estoque", "ABC"],
        ["BALDE", 500, "Curva A"],
        ["CINTA", 300, "A"],
        ["TAMPA", 200, "A"],
    ]
    path = write_workbook({settings.SHEET_NAME: rows})

    state = AbcInventoryPipeline(workbook_path=path, test_mode=True).run()

    assert [r.abc_category for r in state.records] == ["A", "B", "C"]
