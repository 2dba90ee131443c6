# src/leversguard/rules/meta_description.py
from typing import List

from leversguard.dom.core import Finding, RuleSetDefinition, document_start, rule_spec
from leversguard.dom.models import ScanDocument
from leversguard.model import Severity


@rule_spec(codes=["SEO_META_DESC_LENGTH", "SEO_META_DESC_MISSING"])
def check_meta_description(doc: ScanDocument) -> List[Finding]:
    """Validates presence and length of <meta name="description">."""
    policy = doc.policy
    res = []

    meta = next(
        (t for t in doc.tags("meta") if t.attr_equals("name", "description") and t.attr("content").strip()),
        None
    )
    if meta is None:
        start, end = document_start(doc.text)
        res.append((
            "SEO_META_DESC_MISSING",
            f"Missing meta description. Add a {policy.meta_description_min}–{policy.meta_description_max} "
            f"character description to improve click-through rate.",
            Severity.WARNING, start, end
        ))
        return res

    length = len(meta.attr("content").strip())
    if not policy.meta_description_min <= length <= policy.meta_description_max:
        res.append((
            "SEO_META_DESC_LENGTH",
            f"Meta description is {length} characters; aim for "
            f"{policy.meta_description_min}–{policy.meta_description_max} characters.",
            Severity.INFO, meta.start, meta.end
        ))
    return res


DEFINITION = RuleSetDefinition(name="meta_description", order=20, rules=[check_meta_description])
