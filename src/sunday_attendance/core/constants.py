"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_IMPORT_CHUNK_SIZE = 50
DEFAULT_IMPORT_THROTTLE_SECONDS = 0.15
MIN_PASSWORD_LENGTH = 6
MIN_GLOBAL_SEARCH_LENGTH = 2
EXCEL_SHEET_NAME_LIMIT = 31
