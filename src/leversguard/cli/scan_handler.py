# src/leversguard/cli/scan_handler.py
import argparse
import logging
import signal
import threading
from pathlib import Path
from typing import List, Optional

from tqdm.auto import tqdm

from leversguard.controllers.scan_controller import ScanController
from leversguard.dom.registry import RuleRegistry
from leversguard.managers.config_manager import config_manager
from leversguard.managers.policy_manager import PolicyManager
from leversguard.model import FileReport, Severity
from leversguard.services.export_service import ExportService
from leversguard.utils.run_timers import RunTimers

logger = logging.getLogger(__name__)

FAIL_ON_CHOICES = ("error", "warning", "info", "never")


def parse_ignore_list(raw: Optional[List[str]]) -> List[str]:
    """'--ignore A,B --ignore C' -> ['A', 'B', 'C'], upper-cased."""
    codes = []
    for chunk in raw or []:
        codes.extend(c.strip().upper() for c in chunk.split(",") if c.strip())
    return codes


def build_controller(
        paths: List[Path],
        policy_file: Optional[str],
        workers: Optional[int],
        ignore: Optional[List[str]],
) -> ScanController:
    """
    Resolves the policy and host settings into a ScanController.
    The policy file is looked up next to the first directory given, or the cwd.
    """
    project_root = next((p for p in paths if p.is_dir()), Path.cwd())
    policy = PolicyManager(project_root=project_root, policy_file=policy_file).resolve()

    ignored = parse_ignore_list(ignore)
    unknown = sorted(set(ignored) - set(RuleRegistry.get_all_possible_codes()))
    if unknown:
        logger.warning("Ignoring unknown diagnostic codes: %s", ", ".join(unknown))

    host = config_manager.host
    return ScanController(
        policy=policy,
        workers=workers if workers is not None else host.workers,
        size_gate_kb=host.size_gate_kb,
        extensions=host.extensions,
        excluded_dirs=host.excluded_dirs,
        max_files=host.max_files,
        ignored_codes=ignored,
    )


def print_report(report: FileReport) -> None:
    if report.skipped:
        print(f"⏭️  {report.path}: skipped ({report.skipped})")
        return
    if report.error:
        print(f"❌ {report.path}: {report.error}")
        return
    for diag, (line, column) in zip(report.diagnostics, report.positions):
        print(f"{report.path}:{line + 1}:{column + 1}: {diag.severity.value} {diag.code} {diag.message}")


def exit_code_for(reports: List[FileReport], fail_on: str) -> int:
    """1 when any diagnostic reaches the fail-on tier, else 0."""
    if fail_on == "never":
        return 0
    threshold = Severity(fail_on.upper()).rank
    for report in reports:
        if any(d.severity.rank >= threshold for d in report.diagnostics):
            return 1
    return 0


def handle_scan(args: List[str]) -> int:
    """
    Handler for 'leversguard scan'.
    """
    parser = argparse.ArgumentParser(prog="leversguard scan", description="Scan web sources for SEO and render-budget risks.")
    parser.add_argument("paths", nargs="+", help="Files or directories to scan.")
    parser.add_argument("--policy", type=str, default=None, help="Path to a policy JSON file.")
    parser.add_argument("--workers", type=int, default=None, help="Worker processes (1 = in-process).")
    parser.add_argument("--export", type=str, default=None, help="Write results to .csv, .json or .xlsx.")
    parser.add_argument("--ignore", action="append", help="Comma separated diagnostic codes to suppress.")
    parser.add_argument("--fail-on", choices=FAIL_ON_CHOICES, default="error", help="Lowest severity that fails the run.")
    parser.add_argument("--quiet", action="store_true", help="Only print the summary.")
    parser.add_argument("--no-progress", action="store_true", help="Disable the progress bar.")

    try:
        parsed_args = parser.parse_args(args)
    except SystemExit:
        return 2

    paths = [Path(p) for p in parsed_args.paths]
    controller = build_controller(paths, parsed_args.policy, parsed_args.workers, parsed_args.ignore)
    files = controller.discover_files(paths)
    if not files:
        print("🤷 No supported files found.")
        return 0

    timer = RunTimers()
    timer.start()

    # Ctrl+C stops handing new files to the engine; finished results are kept.
    cancel_event = threading.Event()
    previous_handler = signal.getsignal(signal.SIGINT)
    if threading.current_thread() is threading.main_thread():
        signal.signal(signal.SIGINT, lambda *_: cancel_event.set())

    try:
        with tqdm(total=len(files), desc="Scanning", unit="file", disable=parsed_args.no_progress) as bar:
            summary = controller.run(
                files,
                progress_callback=lambda done, total: bar.update(1),
                cancel_event=cancel_event,
            )
    finally:
        if threading.current_thread() is threading.main_thread():
            signal.signal(signal.SIGINT, previous_handler)
    timer.stop()

    if not parsed_args.quiet:
        for report in controller.reports:
            print_report(report)

    print(
        f"\n✅ Scanned {summary['scanned_files']}/{summary['total_files']} files in {timer.duration:.2f}s: "
        f"{summary['total_issues']} issues in {summary['files_with_issues']} files "
        f"({summary['skipped_files']} skipped, {summary['failed_files']} failed)."
    )
    if summary["cancelled"]:
        print("⚠️  Scan cancelled.")

    rows = controller.get_results_for_export()
    if rows and not parsed_args.quiet:
        print("\nTop issues:")
        print(ExportService.summarize(rows).head(10).to_string(index=False))

    if parsed_args.export:
        try:
            output = ExportService.export(rows, Path(parsed_args.export))
            print(f"Exported results to {output}")
        except (ValueError, OSError) as e:
            print(f"❌ Export failed: {e}")
            logger.error("Export to %s failed: %s", parsed_args.export, e, exc_info=True)
            return 2

    return exit_code_for(controller.reports, parsed_args.fail_on)
