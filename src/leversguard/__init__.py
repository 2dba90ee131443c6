"""
Static SEO and render-budget analysis for markup and script sources.

Usage:
    from leversguard import ScanEngine, resolve_policy

    engine = ScanEngine()
    diagnostics = engine.scan(text, "index.html", resolve_policy(None))
"""
from leversguard.model import Diagnostic, Severity
from leversguard.policy import Policy, resolve_policy
from leversguard.dom.engine import ScanEngine, scan

__all__ = ["Diagnostic", "Severity", "Policy", "resolve_policy", "ScanEngine", "scan"]

__version__ = "0.3.0"
