# src/leversguard/rules/payload.py
from typing import List

from leversguard.dom.core import Finding, RuleSetDefinition, document_start, rule_spec
from leversguard.dom.models import ScanDocument
from leversguard.model import Severity

LARGE_KB = 100
EXCESSIVE_KB = 150
WRS_APPROACHING_KB = 10_000
WRS_CRITICAL_KB = 14_000
WRS_LIMIT_MB = 15


@rule_spec(codes=[
    "PERF_HTML_SIZE_LARGE", "PERF_HTML_SIZE_EXCESSIVE",
    "WRS_HTML_SIZE_APPROACHING_LIMIT", "WRS_HTML_SIZE_CRITICAL",
])
def check_html_size(doc: ScanDocument) -> List[Finding]:
    """
    Byte size of the text as an HTML payload proxy.

    The first three bands are mutually exclusive; the critical band is checked
    on its own and stacks on top of the approaching-limit warning.
    """
    size_kb = doc.metrics.size_kb
    size_mb = round(size_kb / 1024)
    start, end = document_start(doc.text)
    res = []

    if LARGE_KB < size_kb <= EXCESSIVE_KB:
        res.append((
            "PERF_HTML_SIZE_LARGE",
            f"HTML file is {round(size_kb)}KB. Consider code splitting or removing inline data. "
            f"(Web Almanac p90: 147KB)",
            Severity.WARNING, start, end
        ))
    elif EXCESSIVE_KB < size_kb <= WRS_APPROACHING_KB:
        res.append((
            "PERF_HTML_SIZE_EXCESSIVE",
            f"HTML file is {round(size_kb)}KB - larger than 90% of websites. This impacts parsing performance.",
            Severity.ERROR, start, end
        ))
    elif size_kb > WRS_APPROACHING_KB:
        res.append((
            "WRS_HTML_SIZE_APPROACHING_LIMIT",
            f"HTML file is {size_mb}MB. Approaching Google's {WRS_LIMIT_MB}MB WRS limit. "
            f"Consider pagination or dynamic loading.",
            Severity.WARNING, start, end
        ))

    if size_kb > WRS_CRITICAL_KB:
        res.append((
            "WRS_HTML_SIZE_CRITICAL",
            f"HTML file is {size_mb}MB. Google WRS will truncate at {WRS_LIMIT_MB}MB. URGENT: Reduce file size!",
            Severity.ERROR, start, end
        ))
    return res


DEFINITION = RuleSetDefinition(name="payload", order=60, rules=[check_html_size])
