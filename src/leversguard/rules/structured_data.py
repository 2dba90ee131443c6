# src/leversguard/rules/structured_data.py
import re
from typing import List

from leversguard.dom.core import Finding, RuleSetDefinition, document_start, rule_spec
from leversguard.dom.models import ScanDocument
from leversguard.model import Severity

PRODUCT_TEXT_RE = re.compile(r"(product|pdp|sku|price|add[\s_-]?to[\s_-]?cart)", re.IGNORECASE)
PRODUCT_FILE_RE = re.compile(r"(product|pdp|sku)")
ARTICLE_TEXT_RE = re.compile(r"(blog|article|news|post)", re.IGNORECASE)
ARTICLE_FILE_RE = re.compile(r"(blog|article)")


def has_json_ld(doc: ScanDocument) -> bool:
    return any(t.attr_equals("type", "application/ld+json") for t in doc.tags("script"))


@rule_spec(codes=["SEO_JSONLD_PRODUCT_MISSING", "SEO_JSONLD_ARTICLE_MISSING"])
def check_json_ld_hints(doc: ScanDocument) -> List[Finding]:
    """
    Suggests structured data for pages that look like product or article pages.
    Keyword heuristics on the text and the file name; only for the page types
    listed in the policy.
    """
    required = doc.policy.require_json_ld_for
    if not required or has_json_ld(doc):
        return []

    file_lower = doc.file_name.lower()
    start, end = document_start(doc.text)
    res = []

    if "Product" in required and (PRODUCT_TEXT_RE.search(doc.text) or PRODUCT_FILE_RE.search(file_lower)):
        res.append((
            "SEO_JSONLD_PRODUCT_MISSING",
            "Product page likely missing JSON-LD (Product). Consider adding product structured data.",
            Severity.INFO, start, end
        ))
    if "Article" in required and (ARTICLE_TEXT_RE.search(doc.text) or ARTICLE_FILE_RE.search(file_lower)):
        res.append((
            "SEO_JSONLD_ARTICLE_MISSING",
            "Article page likely missing JSON-LD (Article). Consider adding article structured data.",
            Severity.INFO, start, end
        ))
    return res


DEFINITION = RuleSetDefinition(name="structured_data", order=40, rules=[check_json_ld_hints])
