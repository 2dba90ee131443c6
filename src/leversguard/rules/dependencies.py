# src/leversguard/rules/dependencies.py
from typing import List

from leversguard.dependencies import find_imports, package_identity
from leversguard.dom.core import Finding, RuleSetDefinition, document_start, rule_spec
from leversguard.dom.models import ScanDocument
from leversguard.model import Severity

BUNDLE_WARNING_KB = 500
BUNDLE_LIMIT_KB = 1000


@rule_spec(codes=["WRS_HEAVY_DEPENDENCY", "WRS_JS_BUNDLE_SIZE_WARNING", "WRS_JS_BUNDLE_SIZE_EXCEEDED"])
def check_heavy_dependencies(doc: ScanDocument) -> List[Finding]:
    """
    Estimates script weight from imports of known heavy packages.
    Every matching import statement adds its package weight to the total.
    """
    res = []
    total_kb = 0

    for import_path, start, end in find_imports(doc.text):
        package = package_identity(import_path)
        dep = doc.heavy_dependencies.get(package)
        if dep is None:
            continue

        total_kb += dep.estimated_size_kb
        advice = (
            f"Consider {dep.suggested_alternative}" if dep.suggested_alternative
            else "Use tree-shaking or code splitting."
        )
        res.append((
            "WRS_HEAVY_DEPENDENCY",
            f"Heavy dependency: {package} (~{dep.estimated_size_kb}KB). {advice}",
            Severity.INFO, start, end
        ))

    start, end = document_start(doc.text)
    if total_kb > BUNDLE_WARNING_KB:
        res.append((
            "WRS_JS_BUNDLE_SIZE_WARNING",
            f"Estimated JS bundle size: ~{total_kb}KB from heavy dependencies. "
            f"Google WRS recommends < 1MB total. Consider code splitting.",
            Severity.WARNING, start, end
        ))
    if total_kb > BUNDLE_LIMIT_KB:
        res.append((
            "WRS_JS_BUNDLE_SIZE_EXCEEDED",
            f"Estimated JS bundle size: ~{total_kb}KB - exceeds Google WRS 1MB recommendation. "
            f"This will impact crawl budget and rendering.",
            Severity.ERROR, start, end
        ))
    return res


DEFINITION = RuleSetDefinition(name="dependencies", order=110, rules=[check_heavy_dependencies])
