import json
import logging
from pathlib import Path
from typing import Optional

import pandas as pd
import requests

from . import settings
from . import utils
from .schemas import InventoryRecord, InventorySummary

logger = logging.getLogger(__name__)


def records_to_dataframe(records: list[InventoryRecord]) -> pd.DataFrame:
    """Records as a DataFrame with the source column names as headers."""
    columns = [
        info.alias or name for name, info in InventoryRecord.model_fields.items()
    ]
    rows = [record.model_dump(by_alias=True) for record in records]
    return pd.DataFrame(rows, columns=columns)


def save_outputs(
    records: list[InventoryRecord],
    summary: InventorySummary,
    base_name: Optional[str] = None,
) -> dict[str, Path]:
    """
    Saves the classified report to CSV and conditionally the report plus its
    summary to JSON, with dated filenames. Returns the written paths.
    """
    settings.OUTPUT_DIR.mkdir(parents=True, exist_ok=True)
    date_suffix = utils.get_date_suffix_for_filename()
    base_name = base_name or settings.REPORT_FILENAME_BASE

    written = {}

    csv_path = settings.OUTPUT_DIR / f"{base_name}_{date_suffix}.csv"
    records_to_dataframe(records).to_csv(csv_path, index=False, encoding="utf-8-sig")
    written["csv"] = csv_path
    logger.info(f"✅ ABC report saved to: {csv_path}")

    if settings.SAVE_JSON_OUTPUT:
        json_path = settings.OUTPUT_DIR / f"{base_name}_{date_suffix}.json"
        payload = {
            "reportData": [record.model_dump(by_alias=True) for record in records],
            "summary": summary.model_dump(),
        }
        with open(json_path, "w", encoding="utf-8") as f:
            json.dump(payload, f, indent=2, ensure_ascii=False, default=str)
        written["json"] = json_path
        logger.info(f"✅ JSON output saved to: {json_path}")
    else:
        logger.info("INFO: Skipping JSON file save as per configuration.")

    return written


def post_to_webhook(
    records: list[InventoryRecord],
    summary: InventorySummary,
    report_type: str = "abc_inventory",
) -> bool:
    """
    Posts the classified records and their summary to the webhook.
    Returns True when the webhook accepted the payload.
    """
    if not settings.WEBHOOK_URL:
        logger.warning("⚠️ WEBHOOK_URL not set. Skipping webhook post.")
        return False

    logger.info(f"🚀 Posting {report_type} data to webhook: {settings.WEBHOOK_URL}")

    payload = {
        "reportType": report_type,
        "reportData": [
            record.model_dump(mode="json", by_alias=True) for record in records
        ],
        "summary": summary.model_dump(mode="json"),
    }

    try:
        response = requests.post(settings.WEBHOOK_URL, json=payload, timeout=15)
        response.raise_for_status()
        logger.info("✅ Data and summary successfully posted to webhook.")
        return True
    except requests.exceptions.RequestException as e:
        logger.error(f"❌ Error posting to webhook: {e}")
        return False
