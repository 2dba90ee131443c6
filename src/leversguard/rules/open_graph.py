# src/leversguard/rules/open_graph.py
from typing import List

from leversguard.dom.core import Finding, RuleSetDefinition, document_start, rule_spec
from leversguard.dom.models import ScanDocument
from leversguard.model import Severity

OG_TAGS = ("og:title", "og:description", "og:image", "og:url")
MISSING_THRESHOLD = 3


@rule_spec(codes=["SEO_OG_TAGS_MISSING"])
def check_open_graph(doc: ScanDocument) -> List[Finding]:
    """Reports once when most of the core Open Graph tags are absent from a page with a <head>."""
    if not doc.metrics.has_head:
        return []

    present = {
        t.attr("property").strip().lower()
        for t in doc.tags("meta")
        if t.attr("content").strip()
    }
    missing = [tag for tag in OG_TAGS if tag not in present]
    if len(missing) < MISSING_THRESHOLD:
        return []

    start, end = document_start(doc.text)
    return [(
        "SEO_OG_TAGS_MISSING",
        f"Missing {len(missing)}/{len(OG_TAGS)} Open Graph tags: {', '.join(missing)}. "
        f"These improve social media sharing.",
        Severity.INFO, start, end
    )]


DEFINITION = RuleSetDefinition(name="open_graph", order=50, rules=[check_open_graph])
