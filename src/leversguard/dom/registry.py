# src/leversguard/dom/registry.py
import importlib
import logging
import pkgutil
from typing import Callable, List, Set

from .core import RuleSetDefinition

logger = logging.getLogger(__name__)


class RuleRegistry:
    """
    Central registry for rule sets.

    Discovers RuleSetDefinition objects from the 'leversguard.rules' package and
    exposes the rules in evaluation order, plus every diagnostic code they declare.
    Read-only once loaded.
    """

    _definitions: List[RuleSetDefinition] = []
    _loaded: bool = False

    @classmethod
    def discover(cls) -> None:
        """
        Imports every module of `leversguard.rules` that exposes a `DEFINITION`
        attribute and orders the definitions by their `order` field.
        """
        if cls._loaded:
            return

        import leversguard.rules as rules_pkg

        found: List[RuleSetDefinition] = []
        for _, name, _ in pkgutil.iter_modules(rules_pkg.__path__):
            module = importlib.import_module(f"leversguard.rules.{name}")
            defn = getattr(module, "DEFINITION", None)
            if isinstance(defn, RuleSetDefinition):
                found.append(defn)
                logger.debug("Rule set loaded: %s (%d codes)", defn.name, len(defn.codes))

        cls._definitions = sorted(found, key=lambda d: d.order)
        cls._loaded = True

    @classmethod
    def get_definitions(cls) -> List[RuleSetDefinition]:
        cls.discover()
        return list(cls._definitions)

    @classmethod
    def get_all_rules(cls) -> List[Callable]:
        """Returns every rule function in evaluation order."""
        return [rule for defn in cls.get_definitions() for rule in defn.rules]

    @classmethod
    def get_all_possible_codes(cls) -> List[str]:
        """
        Returns the sorted set of every diagnostic code the rules can emit.
        Used by the CLI for listing and by suppression filters.
        """
        codes: Set[str] = set()
        for defn in cls.get_definitions():
            codes.update(defn.codes)
        return sorted(codes)
