# src/leversguard/dependencies.py
import re
from typing import Dict, Iterator, Mapping, Optional, Tuple

from pydantic import BaseModel, ConfigDict


class HeavyDependency(BaseModel):
    """A known heavyweight package and its approximate uncompressed weight."""
    model_config = ConfigDict(frozen=True)

    package_name: str
    estimated_size_kb: int
    suggested_alternative: Optional[str] = None


def _table(*rows: Tuple[str, int, Optional[str]]) -> Dict[str, HeavyDependency]:
    return {
        name: HeavyDependency(package_name=name, estimated_size_kb=size, suggested_alternative=alt)
        for name, size, alt in rows
    }


# Curated lookup, sizes in KB (uncompressed). Only exact package names match.
HEAVY_DEPENDENCIES: Mapping[str, HeavyDependency] = _table(
    ("moment", 67, "date-fns (2KB)"),
    ("moment-timezone", 190, "date-fns-tz (11KB)"),
    ("lodash", 72, "lodash-es + tree-shaking"),
    ("jquery", 87, "vanilla JS or cash-dom (6KB)"),
    ("@material-ui/core", 350, "@mui/material with tree-shaking"),
    ("rxjs", 166, "rxjs + specific operators only"),
    ("xlsx", 800, "xlsx-populate (smaller)"),
    ("chart.js", 150, "chartist (10KB)"),
    ("three", 580, "three + tree-shaking"),
    ("d3", 250, "d3 + specific modules only"),
)

# ES module imports (static, side-effect and dynamic) and CommonJS require().
# Each alternative has at most one open-ended run so whitespace floods stay linear.
IMPORT_RE = re.compile(
    r"""\bimport(?=[\s{*])[^;'"()]*?\bfrom\s*['"]([^'"]+)['"]"""
    r"""|\bimport\s*(?:\(\s*)?['"]([^'"]+)['"](?:\s*\))?"""
    r"""|\brequire\s*\(\s*['"]([^'"]+)['"]\s*\)"""
)


def package_identity(import_path: str) -> str:
    """
    Collapses an import path to the package it belongs to.

    '@material-ui/core/Button' -> '@material-ui/core'
    'lodash/map'               -> 'lodash'
    """
    parts = import_path.split("/")
    if import_path.startswith("@"):
        return "/".join(parts[:2])
    return parts[0]


def find_imports(text: str) -> Iterator[Tuple[str, int, int]]:
    """Yields (import path, start offset, end offset) for every import statement."""
    for m in IMPORT_RE.finditer(text):
        path = next(g for g in m.groups() if g is not None)
        yield path, m.start(), m.end()
