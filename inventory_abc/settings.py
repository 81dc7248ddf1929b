import os
from pathlib import Path
from dotenv import load_dotenv

# --- Base Directory ---
BASE_DIR = Path(__file__).resolve().parent.parent

# --- Load Environment Variables ---
load_dotenv(BASE_DIR / ".env")

# --- Path Configuration ---
INPUT_DIR = BASE_DIR / os.getenv("INPUT_DIR", "input")
OUTPUT_DIR = BASE_DIR / os.getenv("OUTPUT_DIR", "output")
LOG_DIR = BASE_DIR / os.getenv("LOG_DIR", "logs")

# --- Filename Configuration ---
WORKBOOK_FILENAME_PREFIX = os.getenv("WORKBOOK_FILENAME_PREFIX", "estoque_")
WORKBOOK_EXTENSIONS = (".xlsx", ".xlsm")
REPORT_FILENAME_BASE = os.getenv("REPORT_FILENAME", "abc_inventory_report")

# --- Output Toggles ---
SAVE_JSON_OUTPUT = os.getenv("SAVE_JSON_OUTPUT", "true").strip().lower() in (
    "1",
    "true",
    "yes",
)

# --- Webhook ---
WEBHOOK_URL = os.getenv("WEBHOOK_URL")

# --- Workbook Layout ---
# The export always ships the inventory on this sheet; anything else is a hard failure.
SHEET_NAME = "Planilha4"

# Title/metadata rows may sit above the real header, so we probe this many rows.
HEADER_SCAN_ROWS = 15
HEADER_KEYWORD = "material"

# Footer and subtotal rows inserted by the spreadsheet carry this token in Material.
TOTAL_ROW_TOKEN = "total"

# --- Source Columns (after whitespace trimming) ---
CODE_COLUMN = "Código"
MATERIAL_COLUMN = "Material"
AVAILABLE_QTY_COLUMN = "Quantidade Disponível"
PHYSICAL_QTY_COLUMN = "Quantidade Física"
UNIT_COLUMN = "Unidade"
UNIT_SALE_PRICE_COLUMN = "Valor Venda Unitário"
TOTAL_SALE_VALUE_COLUMN = "Valor Venda Estoque"
COVERAGE_DAYS_COLUMN = "Cobertura (Dias)"

# Only these columns feed InventoryRecord; anything else in the sheet is dropped.
SOURCE_COLUMNS = [
    CODE_COLUMN,
    MATERIAL_COLUMN,
    AVAILABLE_QTY_COLUMN,
    PHYSICAL_QTY_COLUMN,
    UNIT_COLUMN,
    UNIT_SALE_PRICE_COLUMN,
    TOTAL_SALE_VALUE_COLUMN,
    COVERAGE_DAYS_COLUMN,
]

DEFAULT_UNIT = "UN"

# --- Shared Business Logic ---
# Cumulative revenue percentage bands: <= A is 'A', <= B is 'B', the rest is 'C'.
ABC_A_THRESHOLD = 70
ABC_B_THRESHOLD = 90

# First match wins, so the order here decides the category. Do not sort.
CATEGORY_KEYWORDS = [
    "BALDE",
    "CINTA",
    "TAMPA",
    "PAPEL",
    "BOBINA",
    "SACO",
    "CAIXA",
]
OTHER_CATEGORY = "OUTROS"
