from enum import Enum
from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field


class Severity(str, Enum):
    """Diagnostic tiers. These are the product of a scan, not control flow."""
    ERROR = "ERROR"
    WARNING = "WARNING"
    INFO = "INFO"

    @property
    def rank(self) -> int:
        """Higher is more severe. Used for --fail-on thresholds."""
        return {"ERROR": 3, "WARNING": 2, "INFO": 1}[self.value]


class Diagnostic(BaseModel):
    """
    A single finding produced by a rule.

    Offsets are character offsets into the scanned text (end exclusive).
    The code is stable across versions so downstream tooling can filter on it.
    """
    model_config = ConfigDict(frozen=True)

    start: int
    end: int
    message: str
    code: str
    severity: Severity
    category: str  # 'SEO', 'PERF' or 'WRS'
    source: str = "leversguard"

    @property
    def range(self) -> Tuple[int, int]:
        return self.start, self.end


class FileReport(BaseModel):
    """Outcome of scanning one file in a batch: diagnostics, a skip reason or an error."""
    path: str
    diagnostics: List[Diagnostic] = Field(default_factory=list)
    positions: List[Tuple[int, int]] = Field(default_factory=list)  # (line, column) per diagnostic start
    skipped: Optional[str] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.skipped is None and self.error is None
