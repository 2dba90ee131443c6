# src/leversguard/rules/scripts.py
from typing import List

from leversguard.dom.core import Finding, RuleSetDefinition, document_start, rule_spec
from leversguard.dom.models import ScanDocument
from leversguard.dom.tokenizer import TagToken
from leversguard.model import Severity


def external_scripts(doc: ScanDocument) -> List[TagToken]:
    """<script> tags that load a file through a non-empty src."""
    return [t for t in doc.tags("script") if t.attr("src").strip()]


@rule_spec(codes=["PERF_SCRIPT_BLOCKING"])
def check_blocking_scripts(doc: ScanDocument) -> List[Finding]:
    res = []
    for script in external_scripts(doc):
        if not (script.has_attr("async") or script.has_attr("defer")):
            res.append((
                "PERF_SCRIPT_BLOCKING",
                "Script tag without `async` or `defer`. This can block rendering.",
                Severity.WARNING, script.start, script.end
            ))
    return res


@rule_spec(codes=["PERF_SCRIPT_COUNT_EXCEEDED"])
def check_script_budget(doc: ScanDocument) -> List[Finding]:
    count = len(external_scripts(doc))
    budget = doc.policy.max_third_party_scripts_per_page
    if count <= budget:
        return []

    start, end = document_start(doc.text)
    return [(
        "PERF_SCRIPT_COUNT_EXCEEDED",
        f"Document contains {count} script tags. Budget is {budget}.",
        Severity.WARNING, start, end
    )]


DEFINITION = RuleSetDefinition(name="scripts", order=120, rules=[check_blocking_scripts, check_script_budget])
