# src/leversguard/cli/app.py
from __future__ import annotations

import logging
import sys
from typing import Callable, Dict, List

from leversguard.cli.codes_handler import handle_codes
from leversguard.cli.scan_handler import handle_scan
from leversguard.cli.watch_handler import handle_watch
from leversguard.managers.config_manager import config_manager
from leversguard.utils.configure_logging import configure_logger

logger = logging.getLogger(__name__)

CommandRegistry: Dict[str, Callable[[List[str]], int]] = {
    "scan": handle_scan,
    "codes": handle_codes,
    "watch": handle_watch,
}

USAGE = """
Usage:
  leversguard scan <path>... [options]   Scan files or directories and print diagnostics.
  leversguard codes                      List every diagnostic code.
  leversguard watch <path> [options]     Re-scan files when they change.

Run 'leversguard <command> --help' for the options of a command.
"""


def main(argv: list[str] | None = None) -> int:
    """Entrypoint for the 'leversguard' console script."""
    args = list(sys.argv[1:] if argv is None else argv)

    configure_logger(config_manager.get_nested("debug.level", "WARNING"))

    if not args or args[0] in ("-h", "--help", "help"):
        print(USAGE)
        return 0 if args else 2

    command, rest = args[0], args[1:]
    handler = CommandRegistry.get(command)
    if handler is None:
        print(f"Unknown command: '{command}'.")
        print(USAGE)
        return 2

    logger.debug("Running command '%s' with %s", command, rest)
    return handler(rest)


if __name__ == "__main__":
    sys.exit(main())
