# src/leversguard/controllers/scan_controller.py
import logging
import os
import threading
from collections import Counter
from concurrent.futures import Future, ProcessPoolExecutor
from functools import partial
from pathlib import Path
from typing import Any, Callable, Dict, FrozenSet, Iterable, Iterator, List, Optional, Sequence, Set

from leversguard.dom.assembler import LineIndex
from leversguard.dom.engine import ScanEngine
from leversguard.model import FileReport
from leversguard.policy import Policy

logger = logging.getLogger(__name__)

DEFAULT_EXTENSIONS = (".js", ".jsx", ".ts", ".tsx", ".html")
DEFAULT_SIZE_GATE_KB = 500
DEFAULT_MAX_FILES = 5000


def _worker_scan_file(
        path_str: str,
        policy: Policy,
        size_gate_bytes: int,
        ignored_codes: FrozenSet[str],
) -> FileReport:
    """
    Scans one file. Runs in a worker process when the batch is parallel.
    Oversized or unreadable files never reach the engine.
    """
    path = Path(path_str)
    try:
        size = path.stat().st_size
        if size > size_gate_bytes:
            logger.info("Skipping large file: %s (%dKB)", path, round(size / 1024))
            return FileReport(path=path_str, skipped=f"larger than {size_gate_bytes // 1024}KB")

        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.error("Could not read %s: %s", path, e)
        return FileReport(path=path_str, error=str(e))

    try:
        diagnostics = ScanEngine().scan(text, path.name, policy)
    except Exception as e:
        logger.error("Scan failed on %s: %s", path, e, exc_info=True)
        return FileReport(path=path_str, error=str(e))

    diagnostics = [d for d in diagnostics if d.code not in ignored_codes]
    index = LineIndex(text)
    return FileReport(
        path=path_str,
        diagnostics=diagnostics,
        positions=[index.position_at(d.start) for d in diagnostics],
    )


class ScanController:
    """
    Orchestrates a batch scan: file discovery, the size gate, optional
    parallel execution, per-file failure isolation and aggregation.
    """

    def __init__(
            self,
            policy: Policy,
            workers: int = 1,
            size_gate_kb: int = DEFAULT_SIZE_GATE_KB,
            extensions: Sequence[str] = DEFAULT_EXTENSIONS,
            excluded_dirs: Sequence[str] = ("node_modules",),
            max_files: int = DEFAULT_MAX_FILES,
            ignored_codes: Iterable[str] = (),
    ):
        self.policy = policy
        self.workers = max(1, workers)
        self.size_gate_bytes = size_gate_kb * 1024
        self.extensions = tuple(ext.lower() for ext in extensions)
        self.excluded_dirs = set(excluded_dirs)
        self.max_files = max_files
        self.ignored_codes = frozenset(ignored_codes)

        # Results Buffers
        self.reports: List[FileReport] = []
        self.stats: Counter = Counter()

    def is_supported(self, path: Path) -> bool:
        return path.suffix.lower() in self.extensions

    def _walk(self, root: Path) -> Iterator[Path]:
        """Supported files under root in sorted order. Excluded directories are never entered."""
        for dirpath, dirnames, filenames in os.walk(root):
            dirnames[:] = sorted(d for d in dirnames if d not in self.excluded_dirs)
            for name in sorted(filenames):
                path = Path(dirpath) / name
                if self.is_supported(path):
                    yield path

    def discover_files(self, paths: Iterable[Path]) -> List[Path]:
        """
        Expands files and directories into a list of supported files,
        skipping excluded directories and stopping at max_files.
        """
        found: List[Path] = []
        seen: Set[Path] = set()
        for root in paths:
            root = Path(root)
            if root.is_file():
                candidates: Iterable[Path] = [root] if self.is_supported(root) else []
            elif root.is_dir():
                candidates = self._walk(root)
            else:
                logger.warning("Path does not exist: %s", root)
                continue

            for path in candidates:
                if path in seen:
                    continue
                seen.add(path)
                found.append(path)
                if len(found) >= self.max_files:
                    logger.warning("File limit of %d reached. Remaining files are not scanned.", self.max_files)
                    return found
        return found

    def run(
            self,
            files: Sequence[Path],
            progress_callback: Optional[Callable[[int, int], None]] = None,
            cancel_event: Optional[threading.Event] = None,
    ) -> Dict[str, Any]:
        """Scans the given files in order and aggregates the results."""
        self.reports = []
        self.stats = Counter()
        total = len(files)

        func = partial(
            _worker_scan_file,
            policy=self.policy,
            size_gate_bytes=self.size_gate_bytes,
            ignored_codes=self.ignored_codes,
        )

        cancelled = False
        if self.workers == 1:
            for i, path in enumerate(files):
                if cancel_event is not None and cancel_event.is_set():
                    cancelled = True
                    break
                self._collect(func(str(path)))
                if progress_callback:
                    progress_callback(i + 1, total)
        else:
            with ProcessPoolExecutor(max_workers=self.workers) as executor:
                futures: List[Future] = [executor.submit(func, str(path)) for path in files]
                for i, future in enumerate(futures):
                    if cancel_event is not None and cancel_event.is_set():
                        cancelled = True
                        for pending in futures[i:]:
                            pending.cancel()
                        break
                    try:
                        report = future.result()
                    except Exception as e:
                        logger.error("Worker failed on %s: %s", files[i], e)
                        report = FileReport(path=str(files[i]), error=str(e))
                    self._collect(report)
                    if progress_callback:
                        progress_callback(i + 1, total)

        if cancelled:
            logger.warning("Scan cancelled after %d of %d files.", len(self.reports), total)

        return self.summary(total, cancelled)

    def _collect(self, report: FileReport) -> None:
        self.reports.append(report)
        for diag in report.diagnostics:
            self.stats[(diag.severity.value, diag.code)] += 1

    def summary(self, total: int, cancelled: bool = False) -> Dict[str, Any]:
        return {
            "total_files": total,
            "scanned_files": sum(1 for r in self.reports if r.ok),
            "skipped_files": sum(1 for r in self.reports if r.skipped),
            "failed_files": sum(1 for r in self.reports if r.error),
            "files_with_issues": sum(1 for r in self.reports if r.diagnostics),
            "total_issues": sum(self.stats.values()),
            "cancelled": cancelled,
            "stats": dict(self.stats),
        }

    # --- Result Getters ---
    def get_results_for_export(self) -> List[Dict[str, Any]]:
        rows = []
        for report in self.reports:
            for diag, (line, column) in zip(report.diagnostics, report.positions):
                rows.append({
                    "File": report.path,
                    "Line": line + 1,
                    "Column": column + 1,
                    "Category": diag.category,
                    "Code": diag.code,
                    "Severity": diag.severity.value,
                    "Message": diag.message,
                })
        return rows
