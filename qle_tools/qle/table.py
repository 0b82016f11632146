"""
Fixed-width table rendering of contact records
"""

import logging
from typing import Iterable

from qle_tools.constants import COLUMN_WIDTHS
from qle_tools.qle.record import ContactRecord

logger = logging.getLogger(__name__)

HEADER = (
    "Date      "
    "Time  "
    "Band   "
    "Mode  "
    "RST Sent   "
    "RST Received   "
    "Callsign  "
    "Power"
)

# Where the sort keys live in a rendered line. These come from the column widths so
# changing a width moves the slices along with it.
DATE_SLICE = slice(0, 8)
TIME_SLICE = slice(COLUMN_WIDTHS["date"], COLUMN_WIDTHS["date"] + 4)


def render_line(record: ContactRecord) -> str:
    """
    Render a record as a fixed-width line, like:

    20230501  1400  20M    CW    599        599            W1ABC     100W
    """
    return "".join(
        getattr(record, name).ljust(width) for name, width in COLUMN_WIDTHS.items()
    )


def _line_sort_key(line: str) -> tuple[bool, str, str]:
    # Lines too short to hold a date and time go to the end
    malformed = len(line) < TIME_SLICE.stop
    if malformed:
        logger.debug(f"Line too short to sort, putting it last: {line!r}")
        return (True, "", "")
    return (False, line[DATE_SLICE], line[TIME_SLICE])


def sort_lines(lines: Iterable[str]) -> list[str]:
    """
    Sort rendered lines by date, then time. This is a plain string comparison on the
    fixed date and time columns, and it's stable so lines with the same date and time
    keep their order.
    """
    return sorted(lines, key=_line_sort_key)


def render_table(lines: Iterable[str]) -> str:
    """
    Put the header on top of the already rendered lines
    """
    buf = HEADER + "\n"
    for line in lines:
        buf += line + "\n"
    return buf
