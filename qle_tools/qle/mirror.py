"""
Keeps a contacts table (the "mirror") in sync with a QLE log file.

Hosts call MirrorSync.refresh() whenever the log is opened or saved, and
MirrorSync.commit() when a line is entered in live mode. The pure halves of those,
render() and live_append(), can be used directly by hosts that handle their own files.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from qle_tools.qle.record import extract_records
from qle_tools.qle.table import render_line, render_table, sort_lines

logger = logging.getLogger(__name__)


class MirrorReadOnlyError(RuntimeError):
    pass


@dataclass
class MirrorView:
    """
    The rendered contacts table. Only the MirrorSync that owns it should change it.
    """

    text: str = ""

    # Cursor position within the text
    point: int = 0
    read_only: bool = False

    def insert(self, s: str) -> None:
        """
        Insert text at the current point. Hosts send user edits to the view through
        here, so they get refused once the view is locked.
        """
        if self.read_only:
            raise MirrorReadOnlyError("The contacts view is read-only")
        self.text = self.text[: self.point] + s + self.text[self.point :]
        self.point += len(s)

    def replace(self, text: str) -> None:
        """
        Erase everything and write the new text, then go back to the start and lock
        the view
        """
        self.text = text
        self.point = 0
        self.read_only = True


def render(raw_text: str) -> str:
    """
    Turn the full text of a log into the contacts table
    """
    lines = [render_line(r) for r in extract_records(raw_text)]
    return render_table(sort_lines(lines))


def live_prefix(now: datetime) -> str:
    """
    Returns the "YYYYMMDD HHMM " prefix for a live entry, in UTC. Naive datetimes are
    taken to already be in UTC.
    """
    if now.tzinfo is not None:
        now = now.astimezone(timezone.utc)
    return now.strftime("%Y%m%d %H%M ")


def live_append(line: str, now: datetime) -> str:
    """
    Stamp a live entry with its time
    """
    return live_prefix(now) + line


@dataclass
class MirrorSync:
    source: Path
    mirror: MirrorView

    def refresh(self) -> bool:
        """
        Re-read the log and rebuild the mirror from scratch. If the log can't be read,
        the mirror is left alone and False is returned.
        """
        try:
            raw_text = self.source.read_text()
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(f"Unable to read {self.source}, not refreshing: {e}")
            return False

        self.mirror.replace(render(raw_text))
        logger.debug(f"Refreshed contacts from {self.source}")
        return True

    def commit(self, line: str, now: Optional[datetime] = None) -> str:
        """
        Commit a live entry: stamp it with the current UTC time, save it to the end of
        the log, and refresh the mirror. Returns the line as it was written.
        """
        if now is None:
            now = datetime.now(timezone.utc)
        entry = live_append(line.rstrip("\n"), now)

        # Make sure the entry starts on its own line
        prefix = ""
        if self.source.exists() and self.source.stat().st_size > 0:
            with self.source.open("rb") as f:
                f.seek(-1, 2)
                if f.read(1) != b"\n":
                    prefix = "\n"

        with self.source.open("a") as f:
            f.write(prefix + entry + "\n")
        logger.debug(f"Committed {entry!r} to {self.source}")

        self.refresh()
        return entry
