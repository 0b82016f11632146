from pathlib import Path

DOCUMENTS_DIR = Path(Path.home(), "Documents")
DEFAULT_LOG_FILE = Path(DOCUMENTS_DIR, "amateur_radio", "log.qle")

# Value used for any field that couldn't be found on a log line
PLACEHOLDER = "N/A"

# Column widths of a rendered contact line, in order
COLUMN_WIDTHS = {
    "date": 10,
    "time": 6,
    "band": 7,
    "mode": 6,
    "rst_sent": 11,
    "rst_received": 15,
    "callsign": 10,
    "power": 6,
}

# How often --watch checks the log for changes, in seconds
WATCH_INTERVAL_S = 1.0
