import argparse
import logging
import sys
from typing import List, Optional

from core import config
from core.exceptions import FormatterError, PBError, TraversalException
from core.logger_setup import setup_logger
from storage.pocketbase import PocketBaseClient
from controller.export_controller import ExportController, MODES
from formatters.formatters import FORMATTERS

log = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="taskexport", description="Export PocketBase tasks as an outline.")
    parser.add_argument("--mode", choices=MODES, default=config.EXPORT_MODE,
                        help="projects: folders/projects/tasks; contexts: contexts with flat tasks")
    parser.add_argument("--format", dest="fmt", choices=sorted(FORMATTERS), default=config.EXPORT_FORMAT)
    parser.add_argument("--output", "-o", help="write to this file instead of stdout")
    parser.add_argument("--include-done", action="store_true", help="keep done/cancelled/archived items")
    parser.add_argument("--prune", action="store_true", help="drop folders, projects and contexts left empty")
    parser.add_argument("--no-sort", dest="sort", action="store_false", help="keep backend order")
    parser.add_argument("--max-depth", type=int, default=None, help="do not render nodes deeper than this")
    parser.add_argument("--verbose", "-v", action="store_true")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logger(logging.DEBUG if args.verbose else None)

    # los valores por defecto vienen del entorno y argparse no los valida
    if args.mode not in MODES:
        print(f"Invalid mode {args.mode!r}, expected one of: {', '.join(MODES)}")
        return 2
    if args.fmt.lower() not in FORMATTERS:
        print(f"Invalid format {args.fmt!r}, expected one of: {', '.join(sorted(FORMATTERS))}")
        return 2

    client = PocketBaseClient(config.BASE_URL)
    try:
        client.login(config.IDENTITY, config.PASSWORD)
    except PBError as e:
        print(f"Login error: {e}")
        return 1

    controller = ExportController(client)
    try:
        out = open(args.output, "w", encoding="utf-8") if args.output else sys.stdout
    except OSError as e:
        log.error("Cannot write output: %s", e)
        return 2
    try:
        controller.export(args.mode, args.fmt, out, include_done=args.include_done,
                          prune=args.prune, sort=args.sort, max_depth=args.max_depth)
    except PBError as e:
        log.error("PocketBase error: %s", e)
        return 1
    except (TraversalException, FormatterError, ValueError) as e:
        log.error("Export failed: %s", e)
        return 2
    finally:
        if out is not sys.stdout:
            out.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
