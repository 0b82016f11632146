"""
Export contacts as an ADIF (.adi) file, for importing into other loggers

Description of the file format: http://www.adif.org/312/ADIF_312.htm#ADI_File_Format
"""

import logging
from datetime import datetime
from io import StringIO
from pathlib import Path
from typing import Iterable, Optional, TextIO

from qle_tools.constants import PLACEHOLDER
from qle_tools.qle.record import ContactRecord
from qle_tools.version import VERSION

logger = logging.getLogger(__name__)

ADIF_VERSION = "3.1.2"
PROGRAM_ID = "qle_tools"

# ContactRecord field -> ADIF field
ADIF_FIELDS = {
    "date": "qso_date",
    "time": "time_on",
    "band": "band",
    "mode": "mode",
    "rst_sent": "rst_sent",
    "rst_received": "rst_rcvd",
    "callsign": "call",
    "power": "tx_pwr",
}


def make_field(name: str, value: str) -> str:
    """
    Return an ADIF field/value, like "<adif_ver:5>value"
    """
    return f"<{name}:{len(value)}>{value}"


def record_to_adif(record: ContactRecord) -> str:
    """
    Returns the ADIF record for a contact, leaving out any fields which weren't found
    """
    buf = ""
    for attr, name in ADIF_FIELDS.items():
        value = getattr(record, attr)
        if value == PLACEHOLDER:
            continue

        # ADIF wants bands lowercase and power as a bare number of watts
        if name == "band":
            value = value.lower()
        elif name == "tx_pwr":
            value = value.rstrip("W")

        buf += make_field(name, value) + " "
    buf += "<eor>"
    return buf


def write_adif(
    f: TextIO, records: Iterable[ContactRecord], created: Optional[datetime] = None
) -> None:
    """
    Write an ADIF file with the given records, sorted by date and time
    """
    if created is None:
        created = datetime.now()

    f.write("QLE log export\n")
    f.write(make_field("adif_ver", ADIF_VERSION) + "\n")
    f.write(make_field("created_timestamp", created.strftime("%Y%m%d %H%M%S")) + "\n")
    f.write(make_field("programid", PROGRAM_ID) + "\n")
    f.write(make_field("programversion", VERSION))
    f.write("<eoh>\n")

    for record in sorted(records, key=lambda r: r.sort_key):
        f.write(record_to_adif(record) + "\n")


def to_adif_string(
    records: Iterable[ContactRecord], created: Optional[datetime] = None
) -> str:
    s = StringIO()
    write_adif(s, records, created)
    return s.getvalue()


def to_adif_file(
    file_path: Path,
    records: Iterable[ContactRecord],
    created: Optional[datetime] = None,
) -> None:
    with file_path.open("w") as f:
        write_adif(f, records, created)
    logger.debug(f"Wrote ADIF export to {file_path}")
