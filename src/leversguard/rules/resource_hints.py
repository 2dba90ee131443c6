# src/leversguard/rules/resource_hints.py
from typing import List
from urllib.parse import urlparse

from leversguard.dom.core import Finding, RuleSetDefinition, document_start, rule_spec
from leversguard.dom.metrics import rel_contains
from leversguard.dom.models import ScanDocument
from leversguard.model import Severity
from .scripts import external_scripts

MAX_LISTED_ORIGINS = 3


def _origin(url: str) -> str:
    """scheme://host[:port] for absolute http(s) URLs, otherwise empty."""
    url = url.strip()
    if not url.startswith("http"):
        return ""
    try:
        parsed = urlparse(url)
        parsed.port  # raises on a malformed port
    except ValueError:
        return ""
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        return ""
    return f"{parsed.scheme}://{parsed.netloc}"


def external_origins(doc: ScanDocument) -> List[str]:
    """Distinct origins of external scripts, then stylesheets, in first-seen order."""
    urls = [t.attr("src") for t in external_scripts(doc)]
    urls += [t.attr("href") for t in doc.tags("link") if rel_contains(t, "stylesheet")]

    origins: List[str] = []
    for url in urls:
        origin = _origin(url)
        if origin and origin not in origins:
            origins.append(origin)
    return origins


@rule_spec(codes=["PERF_PRECONNECT_MISSING"])
def check_preconnect(doc: ScanDocument) -> List[Finding]:
    """Suggests <link rel="preconnect"> when third-party origins are used without any."""
    origins = external_origins(doc)
    if not origins:
        return []
    if any(rel_contains(t, "preconnect") for t in doc.tags("link")):
        return []

    start, end = document_start(doc.text)
    return [(
        "PERF_PRECONNECT_MISSING",
        f'Consider adding <link rel="preconnect"> for external domains: '
        f'{", ".join(origins[:MAX_LISTED_ORIGINS])}. This reduces DNS/TLS overhead.',
        Severity.INFO, start, end
    )]


DEFINITION = RuleSetDefinition(name="resource_hints", order=130, rules=[check_preconnect])
