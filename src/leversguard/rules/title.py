# src/leversguard/rules/title.py
from typing import List

from leversguard.dom.core import Finding, RuleSetDefinition, document_start, rule_spec
from leversguard.dom.models import ScanDocument
from leversguard.model import Severity


@rule_spec(codes=["SEO_TITLE_LENGTH", "SEO_TITLE_MISSING"])
def check_title(doc: ScanDocument) -> List[Finding]:
    """
    Validates the length of the first closed <title> element.

    A missing title is only reported for plain markup with a <head>: component
    files and pages using a head-management library inject titles at runtime.
    """
    policy = doc.policy
    res = []

    title = next((t for t in doc.tags("title") if doc.find_close(t)), None)
    if title:
        close = doc.find_close(title)
        text = doc.text[title.end:close.start].strip()
        if not policy.title_min <= len(text) <= policy.title_max:
            res.append((
                "SEO_TITLE_LENGTH",
                f"Title length is {len(text)} characters; aim for {policy.title_min}–{policy.title_max} characters.",
                Severity.WARNING, title.start, close.end
            ))
        return res

    metrics = doc.metrics
    if metrics.has_head and not metrics.uses_head_manager and not metrics.is_component_file:
        start, end = document_start(doc.text)
        res.append((
            "SEO_TITLE_MISSING",
            f"Missing <title>. Add a focused, query-matching title ({policy.title_min}–{policy.title_max} characters).",
            Severity.WARNING, start, end
        ))
    return res


DEFINITION = RuleSetDefinition(name="title", order=10, rules=[check_title])
