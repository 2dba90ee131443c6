# src/leversguard/rules/head_order.py
from typing import List

from leversguard.dom.core import Finding, RuleSetDefinition, rule_spec
from leversguard.dom.metrics import CHARSET_NEAR_START
from leversguard.dom.models import ScanDocument
from leversguard.model import Severity


@rule_spec(codes=["SEO_CHARSET_ORDERING", "SEO_TITLE_ORDERING", "SEO_TITLE_SCRIPT_ORDERING"])
def check_head_order(doc: ScanDocument) -> List[Finding]:
    """Ordering of charset, title, stylesheets and scripts inside the first <head>."""
    head = doc.metrics.head
    if head is None:
        return []

    res = []
    if head.charset_offset is not None and head.charset_offset > CHARSET_NEAR_START:
        pos = head.absolute(head.charset_offset)
        res.append((
            "SEO_CHARSET_ORDERING",
            "<meta charset> should be the first element in <head> to prevent re-parsing.",
            Severity.WARNING, pos, pos
        ))

    if head.title_offset is None:
        return res

    title_pos = head.absolute(head.title_offset)
    if head.first_stylesheet_offset is not None and head.title_offset > head.first_stylesheet_offset:
        res.append((
            "SEO_TITLE_ORDERING",
            "<title> should appear before stylesheets for faster discovery by search engines.",
            Severity.INFO, title_pos, title_pos
        ))
    if head.first_script_offset is not None and head.title_offset > head.first_script_offset:
        res.append((
            "SEO_TITLE_SCRIPT_ORDERING",
            "<title> should appear before blocking scripts to avoid crawl delays.",
            Severity.INFO, title_pos, title_pos
        ))
    return res


DEFINITION = RuleSetDefinition(name="head_order", order=80, rules=[check_head_order])
