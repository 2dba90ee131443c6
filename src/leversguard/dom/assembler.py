# src/leversguard/dom/assembler.py
import bisect
import re
from typing import Iterable, List, Tuple

from leversguard.model import Diagnostic, Severity
from .core import Finding

CATEGORY_PREFIXES = ("SEO", "PERF", "WRS")


def category_for(code: str) -> str:
    prefix = code.split("_", 1)[0]
    return prefix if prefix in CATEGORY_PREFIXES else "OTHER"


class DiagnosticAssembler:
    """
    Normalizes raw rule findings into Diagnostic records.

    Offsets are clamped into the bounds of the source text, so every range
    lies inside the document that produced it.
    """

    def __init__(self, text: str):
        self.text_length = len(text)

    def build(self, finding: Finding) -> Diagnostic:
        code, message, severity, start, end = finding
        start = min(max(0, start), self.text_length)
        end = min(max(start, end), self.text_length)
        return Diagnostic(
            start=start,
            end=end,
            message=message,
            code=code,
            severity=Severity(severity),
            category=category_for(code),
        )

    def assemble(self, findings: Iterable[Finding]) -> List[Diagnostic]:
        """Keeps the insertion order of the findings."""
        return [self.build(f) for f in findings]


class LineIndex:
    """Converts character offsets to zero-based (line, column) positions."""

    def __init__(self, text: str):
        self._line_starts = [0] + [m.end() for m in re.finditer("\n", text)]

    def position_at(self, offset: int) -> Tuple[int, int]:
        line = bisect.bisect_right(self._line_starts, offset) - 1
        return line, offset - self._line_starts[line]
