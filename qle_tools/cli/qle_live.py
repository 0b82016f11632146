"""
Live logging: type contacts as you make them, and each one is saved to the log with the
current UTC date and time in front of it.
"""

from argparse import ArgumentParser, Namespace

from colorama import Fore, Style

from qle_tools.cli.common import add_common_args, setup_logging
from qle_tools.cli.qle_view import highlight_header
from qle_tools.qle.mirror import MirrorSync, MirrorView


def main() -> None:
    args = parse_args()
    setup_logging(args.v)

    try:
        args.file.parent.mkdir(parents=True, exist_ok=True)
        sync = MirrorSync(args.file, MirrorView())
        repl(sync, show_table=args.table)
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
        "-t",
        "--table",
        action="store_true",
        help="Print the whole contacts table after each entry",
    )
    return parser.parse_args()


def repl(sync: MirrorSync, show_table: bool = False) -> None:
    """
    Read contacts from the user until they enter a blank line or hit Ctrl-D
    """
    print(f"Logging to {sync.source}")
    print("Press Enter on an empty line or Ctrl-D to quit")
    while True:
        try:
            line = input("QLE> ").strip()
        except EOFError:
            print()
            break
        if line == "":
            break

        entry = sync.commit(line)
        if show_table:
            print(highlight_header(sync.mirror.text), end="")
        else:
            print(Fore.GREEN + entry + Style.RESET_ALL)


if __name__ == "__main__":
    main()
