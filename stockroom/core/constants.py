# stockroom/core/constants.py

# ─────────────────────────────────────────────────────────
# TRANSACTION TYPE CONSTANTS
# ─────────────────────────────────────────────────────────
TX_IN = "IN"
TX_OUT = "OUT"
TX_ADJUSTMENT = "ADJUSTMENT"
ALL_TX_TYPES = [TX_IN, TX_OUT, TX_ADJUSTMENT]

# ─────────────────────────────────────────────────────────
# USER ROLE CONSTANTS
# ─────────────────────────────────────────────────────────
ROLE_ADMIN = "ADMIN"
ROLE_MANAGER = "MANAGER"
ROLE_VIEWER = "VIEWER"
DEFAULT_ROLE = ROLE_VIEWER

# ─────────────────────────────────────────────────────────
# SESSION STORE KEYS & THEMES
# ─────────────────────────────────────────────────────────
SESSION_KEY_CURRENT_USER = "currentUser"
SESSION_KEY_THEME = "theme"
# URL query parameter carrying the browser session id across reloads
SESSION_ID_PARAM = "sid"
THEME_LIGHT = "light"
THEME_DARK = "dark"

# ─────────────────────────────────────────────────────────
# LIST / PAGINATION DEFAULTS
# ─────────────────────────────────────────────────────────
DEFAULT_PAGE_SIZE = 10
SKU_MIN_LENGTH = 3
STOCK_MOVEMENT_DAYS = 10

# ─────────────────────────────────────────────────────────
# CSV EXPORT / IMPORT
# ─────────────────────────────────────────────────────────
ITEM_EXPORT_HEADERS = ["SKU", "Name", "Category", "Quantity", "Price", "Location"]
ITEM_EXPORT_FILENAME_PREFIX = "items-export-"
LOW_STOCK_EXPORT_HEADERS = ["SKU", "Name", "Category", "Quantity", "Reorder Level"]
IMPORT_ACCEPTED_EXTENSIONS = [".csv", ".xls", ".xlsx"]

# ─────────────────────────────────────────────────────────
# UI PLACEHOLDER & FILTER CONSTANTS
# ─────────────────────────────────────────────────────────
FILTER_ALL_TYPES = "ALL"  # Transaction type filter sentinel
PLACEHOLDER_SELECT_CATEGORY = "Select category"
PLACEHOLDER_SELECT_SUPPLIER = "Select supplier"
PLACEHOLDER_SELECT_ITEM = "-- Select an Item --"
EMPTY_CELL = "-"
