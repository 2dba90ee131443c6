# src/leversguard/cli/watch_handler.py
import argparse
import logging
import threading
import time
from pathlib import Path
from typing import Dict, List

from leversguard.cli.scan_handler import build_controller, print_report
from leversguard.managers.config_manager import config_manager
from leversguard.utils.debounce import Debouncer

logger = logging.getLogger(__name__)


def snapshot(files: List[Path]) -> Dict[Path, float]:
    """Modification times of the files that still exist."""
    mtimes = {}
    for path in files:
        try:
            mtimes[path] = path.stat().st_mtime
        except OSError:
            continue
    return mtimes


def handle_watch(args: List[str]) -> int:
    """
    Handler for 'leversguard watch'. Polls modification times and re-scans
    changed files, debounced per file.
    """
    parser = argparse.ArgumentParser(prog="leversguard watch", description="Re-scan files when they change.")
    parser.add_argument("paths", nargs="+", help="Files or directories to watch.")
    parser.add_argument("--policy", type=str, default=None, help="Path to a policy JSON file.")
    parser.add_argument("--ignore", action="append", help="Comma separated diagnostic codes to suppress.")
    parser.add_argument("--cycles", type=int, default=None, help="Stop after this many polling cycles.")

    try:
        parsed_args = parser.parse_args(args)
    except SystemExit:
        return 2

    paths = [Path(p) for p in parsed_args.paths]
    controller = build_controller(paths, parsed_args.policy, 1, parsed_args.ignore)
    interval = config_manager.host.watch_interval_s
    debouncer = Debouncer(delay_s=config_manager.host.debounce_ms / 1000)

    lock = threading.Lock()

    def rescan(path: Path) -> None:
        with lock:
            controller.run([path])
            for report in controller.reports:
                print_report(report)

    known = snapshot(controller.discover_files(paths))
    print(f"👀 Watching {len(known)} files. Press Ctrl+C to stop.")

    cycles = 0
    try:
        while parsed_args.cycles is None or cycles < parsed_args.cycles:
            time.sleep(interval)
            cycles += 1
            current = snapshot(controller.discover_files(paths))
            for path, mtime in current.items():
                if known.get(path) != mtime:
                    logger.debug("Change detected: %s", path)
                    debouncer.trigger(path, rescan, path)
            known = current
    except KeyboardInterrupt:
        pass
    finally:
        debouncer.cancel_all()

    print("Bye!")
    return 0
