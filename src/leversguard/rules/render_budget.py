# src/leversguard/rules/render_budget.py
from typing import List

from leversguard.dom.core import Finding, RuleSetDefinition, document_start, rule_spec
from leversguard.dom.models import ScanDocument
from leversguard.model import Severity

DOM_SIZE_WARNING = 800
DOM_SIZE_LIMIT = 1500
DOM_DEPTH_WARNING = 25
DOM_DEPTH_LIMIT = 32


@rule_spec(codes=["WRS_DOM_SIZE_WARNING", "WRS_DOM_SIZE_EXCEEDED"])
def check_dom_size(doc: ScanDocument) -> List[Finding]:
    """Element budget of the rendering service. Both tiers can fire together."""
    count = doc.metrics.element_count
    start, end = document_start(doc.text)
    res = []
    if count > DOM_SIZE_WARNING:
        res.append((
            "WRS_DOM_SIZE_WARNING",
            f"DOM has {count} elements. Google WRS recommends < {DOM_SIZE_WARNING} for optimal rendering. "
            f"Consider pagination or lazy loading.",
            Severity.INFO, start, end
        ))
    if count > DOM_SIZE_LIMIT:
        res.append((
            "WRS_DOM_SIZE_EXCEEDED",
            f"DOM has {count} elements. Google WRS hard limit is {DOM_SIZE_LIMIT:,}. "
            f"Page may not render correctly in search results.",
            Severity.ERROR, start, end
        ))
    return res


@rule_spec(codes=["WRS_DOM_DEPTH_WARNING", "WRS_DOM_DEPTH_EXCEEDED"])
def check_dom_depth(doc: ScanDocument) -> List[Finding]:
    """Nesting budget of the rendering service. Both tiers can fire together."""
    depth = doc.metrics.max_depth
    start, end = document_start(doc.text)
    res = []
    if depth > DOM_DEPTH_WARNING:
        res.append((
            "WRS_DOM_DEPTH_WARNING",
            f"DOM depth is {depth} levels. Google WRS recommends < {DOM_DEPTH_LIMIT} to avoid rendering issues. "
            f"Flatten your HTML structure.",
            Severity.INFO, start, end
        ))
    if depth > DOM_DEPTH_LIMIT:
        res.append((
            "WRS_DOM_DEPTH_EXCEEDED",
            f"DOM depth is {depth} levels - exceeds Google WRS limit of {DOM_DEPTH_LIMIT}. "
            f"Googlebot may fail to render this page.",
            Severity.ERROR, start, end
        ))
    return res


DEFINITION = RuleSetDefinition(name="render_budget", order=70, rules=[check_dom_size, check_dom_depth])
