"""
Contact records pulled out of free-form QLE log lines.

A QLE log has one contact per line, with the fields typed in any order and spacing,
like:

    20230501 1400 20M CW 599 599 W1ABC 100W

Each field is searched for independently over the whole line. Anything that can't be
found gets PLACEHOLDER instead.

Power is best written with a W suffix, like 100W. Without one, only a one or two digit
number is taken as power, so a bare "100" is not recognised (it looks like an RST) and
a two digit phone report like "59" is taken as power.
"""

import logging
import re
from dataclasses import dataclass, fields
from typing import Optional

from qle_tools.constants import PLACEHOLDER

logger = logging.getLogger(__name__)

DATE_RE = re.compile(r"\b\d{8}\b")
TIME_RE = re.compile(r"\b\d{4}\b")
BAND_RE = re.compile(r"\b\d+M\b")
MODE_RE = re.compile(r"\b(?:CW|SSB|FT8)\b")
RST_RE = re.compile(r"\b\d{3}\b")
CALLSIGN_RE = re.compile(
    # Prefix: one or two letters, a digit and a letter or two, or a letter and a
    # digit. This keeps things like 20M and 100W from looking like callsigns.
    r"\b(?:[A-Z]{1,2}|\d[A-Z]{1,2}|[A-Z]\d)"
    # Separating numeral
    r"\d"
    # Suffix
    r"[A-Z]{1,4}\b"
)
POWER_W_RE = re.compile(r"\b\d+W\b")
# A bare power number, e.g. "50". Three and four digit numbers are RSTs and times.
POWER_BARE_RE = re.compile(r"\b\d{1,2}\b")

# Patterns tried for each field, in order. The first pattern with a match wins.
#
# Note that RST sent and RST received share a pattern, so they always come out the
# same: the first three digit number on the line.
FIELD_PATTERNS: dict[str, tuple[re.Pattern[str], ...]] = {
    "date": (DATE_RE,),
    "time": (TIME_RE,),
    "band": (BAND_RE,),
    "mode": (MODE_RE,),
    "rst_sent": (RST_RE,),
    "rst_received": (RST_RE,),
    "callsign": (CALLSIGN_RE,),
    "power": (POWER_W_RE, POWER_BARE_RE),
}


@dataclass(frozen=True)
class ContactRecord:
    date: str = PLACEHOLDER
    time: str = PLACEHOLDER
    band: str = PLACEHOLDER
    mode: str = PLACEHOLDER
    rst_sent: str = PLACEHOLDER
    rst_received: str = PLACEHOLDER
    callsign: str = PLACEHOLDER
    power: str = PLACEHOLDER

    @classmethod
    def from_line(cls, line: str) -> "ContactRecord":
        """
        Build a record from a log line. Never fails, missing fields are set to
        PLACEHOLDER.
        """
        values = {f.name: find_field(f.name, line) for f in fields(cls)}
        record = cls(**values)
        logger.debug(f"Parsed {line.strip()!r}: {record}")
        return record

    @property
    def sort_key(self) -> tuple[str, str]:
        return (self.date, self.time)


def find_field(name: str, line: str) -> str:
    """
    Return the first match for the named field anywhere in the line, or PLACEHOLDER
    """
    for pattern in FIELD_PATTERNS[name]:
        m = pattern.search(line)
        if m:
            return m.group(0)
    return PLACEHOLDER


def is_blank(line: str) -> bool:
    return line.strip() == ""


def extract_record(line: str) -> Optional[ContactRecord]:
    """
    Returns the ContactRecord for a line, or None if the line is blank
    """
    if is_blank(line):
        return None
    return ContactRecord.from_line(line)


def extract_records(text: str) -> list[ContactRecord]:
    """
    Extract a record from every non-blank line of the text, in the order they appear
    """
    records = []
    # Only newlines end a line. str.splitlines() would also split on form feeds and
    # other separators that can show up in the middle of a contact.
    for line in text.split("\n"):
        record = extract_record(line.rstrip("\r"))
        if record is not None:
            records.append(record)
    return records
