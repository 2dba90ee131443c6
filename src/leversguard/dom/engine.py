# src/leversguard/dom/engine.py
import logging
from typing import AbstractSet, Callable, List, Mapping, Optional

from leversguard.dependencies import HEAVY_DEPENDENCIES, HeavyDependency
from leversguard.model import Diagnostic
from leversguard.policy import DEFAULT_POLICY, Policy
from .assembler import DiagnosticAssembler
from .core import Finding
from .metrics import compute_metrics
from .models import ScanDocument
from .registry import RuleRegistry
from .tokenizer import VOID_ELEMENTS, tokenize

logger = logging.getLogger(__name__)


class ScanEngine:
    """
    Runs every registered rule over a single document.

    The engine is synchronous and holds no per-document state: text goes in,
    an ordered list of diagnostics comes out. Lookup tables are injected at
    construction so tests can substitute their own.
    """

    def __init__(
            self,
            rules: Optional[List[Callable[[ScanDocument], List[Finding]]]] = None,
            void_elements: AbstractSet[str] = VOID_ELEMENTS,
            heavy_dependencies: Mapping[str, HeavyDependency] = HEAVY_DEPENDENCIES,
    ):
        self.rules = list(rules) if rules is not None else RuleRegistry.get_all_rules()
        self.void_elements = frozenset(void_elements)
        self.heavy_dependencies = dict(heavy_dependencies)

    def prepare(self, text: str, file_name: str, policy: Policy) -> ScanDocument:
        """Tokenizes once and computes the shared metrics every rule reads."""
        tokens = tokenize(text)
        metrics = compute_metrics(
            text,
            file_name,
            tokens,
            head_manager_markers=policy.head_manager_markers,
            component_extensions=policy.component_extensions,
            void_elements=self.void_elements,
        )
        return ScanDocument(
            text=text,
            file_name=file_name,
            tokens=tokens,
            metrics=metrics,
            policy=policy,
            heavy_dependencies=self.heavy_dependencies,
        )

    def scan(self, text: str, file_name: str, policy: Policy = DEFAULT_POLICY) -> List[Diagnostic]:
        """
        Evaluates all rules in registry order.

        Args:
            text (str): The document source.
            file_name (str): Name or path of the document; some heuristics read it.
            policy (Policy): An already resolved policy.

        Returns:
            List[Diagnostic]: Findings in rule evaluation order.
        """
        doc = self.prepare(text, file_name, policy)

        findings: List[Finding] = []
        for rule in self.rules:
            findings.extend(rule(doc))

        logger.debug(
            "Scanned %s: %d tags, depth %d, %d findings",
            file_name, doc.metrics.element_count, doc.metrics.max_depth, len(findings)
        )
        return DiagnosticAssembler(text).assemble(findings)


def scan(text: str, file_name: str, policy: Policy = DEFAULT_POLICY) -> List[Diagnostic]:
    """Convenience entry point using the default rule registry and tables."""
    return ScanEngine().scan(text, file_name, policy)
