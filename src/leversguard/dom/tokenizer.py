# src/leversguard/dom/tokenizer.py
import re
from enum import Enum
from functools import cached_property
from typing import Dict, FrozenSet, List, Optional

from pydantic import BaseModel, ConfigDict

VOID_ELEMENTS: FrozenSet[str] = frozenset({
    "area", "base", "br", "col", "embed", "hr", "img", "input",
    "link", "meta", "param", "source", "track", "wbr",
})

# One pass over the raw text. Names allow '.', ':' and '-' for JSX
# member expressions (<head_1.default>) and custom elements.
TAG_RE = re.compile(r"<(/?)([A-Za-z][A-Za-z0-9._:-]*)([^>]*)>")

# name, then an optional value: "double", 'single', {jsx} or bare.
ATTR_RE = re.compile(
    r"""([^\s"'<>/=]+)(?:\s*=\s*(?:"([^"]*)"|'([^']*)'|\{([^}]*)\}|([^\s"'>]+)))?"""
)


class TagKind(str, Enum):
    OPEN = "open"
    CLOSE = "close"
    SELF_CLOSE = "self_close"


class TagToken(BaseModel):
    """
    A single lexical tag. Offsets point into the scanned text (end exclusive).
    """
    model_config = ConfigDict(frozen=True, ignored_types=(cached_property,))

    kind: TagKind
    name: str
    attrs_text: str = ""
    start: int
    end: int

    @property
    def lower_name(self) -> str:
        return self.name.lower()

    @cached_property
    def attributes(self) -> Dict[str, Optional[str]]:
        """
        Attribute names (lowercased) mapped to their value.
        Bare boolean attributes (async, priority) map to None.
        Only the first occurrence of a name is kept.
        """
        attrs: Dict[str, Optional[str]] = {}
        body = self.attrs_text.rstrip("/")
        for m in ATTR_RE.finditer(body):
            key = m.group(1).lower()
            if key in attrs:
                continue
            value = next((g for g in m.groups()[1:] if g is not None), None)
            attrs[key] = value
        return attrs

    def has_attr(self, name: str) -> bool:
        return name in self.attributes

    def attr(self, name: str, default: str = "") -> str:
        value = self.attributes.get(name)
        return default if value is None else value

    def attr_equals(self, name: str, expected: str) -> bool:
        """Case-insensitive comparison of a trimmed attribute value."""
        return self.attr(name).strip().lower() == expected.lower()


def tokenize(text: str) -> List[TagToken]:
    """
    Lexical tag scanner. Produces a flat, ordered token stream.

    This never validates nesting: unbalanced or mismatched tags are simply
    emitted in the order they appear.
    """
    tokens: List[TagToken] = []
    for m in TAG_RE.finditer(text):
        slash, name, attrs_text = m.group(1), m.group(2), m.group(3)
        if slash:
            kind = TagKind.CLOSE
        elif attrs_text.endswith("/"):
            kind = TagKind.SELF_CLOSE
        else:
            kind = TagKind.OPEN
        tokens.append(TagToken(kind=kind, name=name, attrs_text=attrs_text, start=m.start(), end=m.end()))
    return tokens
