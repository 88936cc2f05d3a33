"""Command line tool for mirroring kubernetes objects into a document store."""

import argparse
import logging
import sys
import traceback

from kube_mirror.exceptions import MirrorException
from . import apply, ensure_indexes

_LOGGER = logging.getLogger(__name__)


def _make_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Command line utility for mirroring kubernetes objects into MongoDB.",
    )
    parser.add_argument(
        "--log-level", choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
    )

    subparsers = parser.add_subparsers(dest="command", help="Command", required=True)

    ensure_indexes.EnsureIndexesAction.register(subparsers)
    apply.ApplyAction.register(subparsers)
    return parser


def main(argv: list[str] | None = None) -> None:
    """Kube-mirror command line tool main entry point."""
    parser = _make_parser()
    args = parser.parse_args(argv)

    if args.log_level:
        logging.basicConfig(level=args.log_level)

    action = args.cls()
    try:
        action.run(**vars(args))
    except MirrorException as err:
        if args.log_level == "DEBUG":
            traceback.print_exc(file=sys.stderr)
        print("kube-mirror error: ", err, file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
