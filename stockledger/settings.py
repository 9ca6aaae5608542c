import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent

# --- Database ---
DB_PATH = os.getenv("STOCKLEDGER_DB_PATH", str(BASE_DIR / "stockledger.db"))
DB_URL = os.getenv("STOCKLEDGER_DB_URL", f"sqlite:///{os.path.abspath(DB_PATH)}")

# --- Logging ---
LOG_LEVEL = os.getenv("STOCKLEDGER_LOG_LEVEL", "INFO").upper()
LOG_DIR = Path(os.getenv("STOCKLEDGER_LOG_DIR", str(BASE_DIR / "logs")))

# --- Uploads ---
MAX_UPLOAD_MB = float(os.getenv("STOCKLEDGER_MAX_UPLOAD_MB", "10"))
ALLOWED_EXTENSIONS = (".xlsx", ".xls")

# --- Column vocabulary ---
# Base columns are matched case-sensitively; day columns are not.
COL_ID = "ID"
COL_NAME = "Product Name"
COL_OPENING = "Opening Inventory"
REQUIRED_COLUMNS = [COL_ID, COL_NAME, COL_OPENING]

# measure key -> label used in "<label> (Day N)"
DAY_MEASURES = {
    "procurement_qty":   "Procurement Qty",
    "procurement_price": "Procurement Price",
    "sales_qty":         "Sales Qty",
    "sales_price":       "Sales Price",
}
QUANTITY_MEASURES = ("procurement_qty", "sales_qty")

MAX_CODE_LEN = 50
MAX_NAME_LEN = 100

# integer columns are 32-bit; prices are Numeric(10, 2)
INT_MAX = 2**31 - 1
PRICE_MAX = 10**8
