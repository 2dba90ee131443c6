# src/leversguard/rules/fonts.py
import re
from typing import List

from leversguard.dom.core import Finding, RuleSetDefinition, document_start, rule_spec
from leversguard.dom.metrics import rel_contains
from leversguard.dom.models import ScanDocument
from leversguard.model import Severity

FONT_FACE_RE = re.compile(r"@font-face\s*{[\s\S]*?}", re.IGNORECASE)
FONT_DISPLAY_SWAP_RE = re.compile(r"font-display\s*:\s*swap")
MAX_FONT_PRELOADS = 4


@rule_spec(codes=["PERF_FONT_DISPLAY_MISSING"])
def check_font_display(doc: ScanDocument) -> List[Finding]:
    """Every @font-face block should declare font-display: swap."""
    if not doc.policy.require_font_display_swap:
        return []

    res = []
    for m in FONT_FACE_RE.finditer(doc.text):
        if not FONT_DISPLAY_SWAP_RE.search(m.group(0)):
            res.append((
                "PERF_FONT_DISPLAY_MISSING",
                "Custom font is missing `font-display: swap`. This can block rendering.",
                Severity.WARNING, m.start(), m.end()
            ))
    return res


@rule_spec(codes=["PERF_FONT_PRELOAD_EXCESS"])
def check_font_preloads(doc: ScanDocument) -> List[Finding]:
    preloads = [
        t for t in doc.tags("link")
        if rel_contains(t, "preload") and t.attr_equals("as", "font")
    ]
    if len(preloads) <= MAX_FONT_PRELOADS:
        return []

    start, end = document_start(doc.text)
    return [(
        "PERF_FONT_PRELOAD_EXCESS",
        f"Too many font preloads ({len(preloads)}). Limit preloaded fonts to critical subsets.",
        Severity.INFO, start, end
    )]


DEFINITION = RuleSetDefinition(name="fonts", order=100, rules=[check_font_display, check_font_preloads])
