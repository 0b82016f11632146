import logging
from argparse import ArgumentParser
from pathlib import Path

from qle_tools.constants import DEFAULT_LOG_FILE


def add_common_args(parser: ArgumentParser) -> None:
    parser.add_argument(
        "-v",
        help="Verbose mode",
        action="store_true",
    )
    parser.add_argument(
        "-f",
        "--file",
        help=f"QLE log file, default: {DEFAULT_LOG_FILE}",
        default=DEFAULT_LOG_FILE,
        type=Path,
    )


def setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    )
