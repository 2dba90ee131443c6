# src/leversguard/rules/canonical.py
from typing import List

from leversguard.dom.core import Finding, RuleSetDefinition, document_start, rule_spec
from leversguard.dom.metrics import rel_contains
from leversguard.dom.models import ScanDocument
from leversguard.model import Severity


@rule_spec(codes=["SEO_CANONICAL_MISSING"])
def check_canonical(doc: ScanDocument) -> List[Finding]:
    """Ensures a canonical URL is declared anywhere in the text when required."""
    if not doc.policy.require_canonical:
        return []

    if any(rel_contains(t, "canonical") and t.attr("href").strip() for t in doc.tags("link")):
        return []

    start, end = document_start(doc.text)
    return [(
        "SEO_CANONICAL_MISSING",
        'Missing canonical link. Add <link rel="canonical" href="…"> to declare a preferred URL.',
        Severity.WARNING, start, end
    )]


DEFINITION = RuleSetDefinition(name="canonical", order=30, rules=[check_canonical])
