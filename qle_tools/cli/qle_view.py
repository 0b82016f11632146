"""
Show the contacts in a QLE log as a sorted table.

With --watch, the table is redrawn every time the log file is saved, so you can keep it
open in a terminal next to your editor.
"""

import os
import sys
import time
from argparse import ArgumentParser, Namespace
from pathlib import Path
from typing import Optional

from colorama import Cursor, Style
from colorama.ansi import clear_screen as ansi_clear_screen

from qle_tools.cli.common import add_common_args, setup_logging
from qle_tools.constants import WATCH_INTERVAL_S
from qle_tools.qle.adif import to_adif_file
from qle_tools.qle.mirror import MirrorSync, MirrorView
from qle_tools.qle.record import extract_records


def main() -> None:
    args = parse_args()
    setup_logging(args.v)

    try:
        sync = MirrorSync(args.file, MirrorView())
        if args.adif:
            to_adif_file(args.adif, extract_records(args.file.read_text()))

        if args.watch:
            watch(sync, args.interval)
        else:
            if not sync.refresh():
                raise RuntimeError(f"Could not read {args.file}")
            if args.output:
                args.output.write_text(sync.mirror.text)
            else:
                print(highlight_header(sync.mirror.text), end="")
    except KeyboardInterrupt:
        pass
    except Exception as e:
        if not args.v:
            print(e)
        else:
            raise


def parse_args() -> Namespace:
    parser = ArgumentParser(description=__doc__)
    add_common_args(parser)

    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        metavar="TABLE_FILENAME",
        help="Write the table to this file instead of the terminal",
    )
    parser.add_argument(
        "--adif",
        type=Path,
        metavar="ADIF_FILENAME",
        help="Also export the contacts to this ADIF file",
    )
    parser.add_argument(
        "-w",
        "--watch",
        action="store_true",
        help="Keep running, redrawing the table whenever the log changes",
    )
    parser.add_argument(
        "--interval",
        type=float,
        default=WATCH_INTERVAL_S,
        help=f"Seconds between checks for changes in watch mode, default: "
        f"{WATCH_INTERVAL_S}",
    )
    return parser.parse_args()


def log_mtime(path: Path) -> Optional[float]:
    """
    Modification time of the log, or None if it's not there
    """
    try:
        return path.stat().st_mtime
    except OSError:
        return None


def watch(sync: MirrorSync, interval: float) -> None:
    """
    Redraw the table whenever the log file's modification time changes
    """
    last_mtime = None
    while True:
        mtime = log_mtime(sync.source)
        if mtime is not None and mtime != last_mtime:
            if sync.refresh():
                draw(sync.mirror.text)
            last_mtime = mtime
        time.sleep(interval)


def highlight_header(table: str) -> str:
    """
    Make the header line of the table bright
    """
    header, sep, body = table.partition("\n")
    return Style.BRIGHT + header + Style.RESET_ALL + sep + body


def draw(table: str) -> None:
    clear_screen()
    print(Cursor.POS(), end="")  # move cursor to 0,0
    print(highlight_header(table), end="")


def clear_screen() -> None:
    """
    Clear the screen in a platform-independent way, since colorama doesn't support win32
    for this.
    """
    if sys.platform == "win32":
        os.system("cls")
    else:
        print(ansi_clear_screen(), end="")


if __name__ == "__main__":
    main()
