# src/leversguard/dom/core.py
from typing import Callable, List, Optional, Set, Tuple

from leversguard.model import Severity

# Type alias for rule findings: (Code, Message, Severity, StartOffset, EndOffset)
Finding = Tuple[str, str, Severity, int, int]


def rule_spec(codes: List[str]):
    """
    Decorator to declare which diagnostic codes a rule function can emit.
    Facilitates auto-discovery by the RuleRegistry.
    """
    def decorator(func):
        func.defined_codes = codes
        return func
    return decorator


class RuleSetDefinition:
    """
    Configuration object binding a group of rule functions to a position in the evaluation order.
    """

    def __init__(
            self,
            name: str,
            order: int,
            rules: Optional[List[Callable[..., List[Finding]]]] = None,
    ):
        self.name = name
        self.order = order
        self.rules = rules or []

        # --- Auto-Discovery of Diagnostic Codes ---
        final_codes: Set[str] = set()
        for rule in self.rules:
            final_codes.update(getattr(rule, "defined_codes", []))

        self.codes = sorted(final_codes)


def document_start(text: str) -> Tuple[int, int]:
    """Range used when no specific construct anchors a finding."""
    return 0, min(1, len(text))
