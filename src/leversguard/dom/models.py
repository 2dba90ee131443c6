# src/leversguard/dom/models.py
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict

from leversguard.dependencies import HeavyDependency
from leversguard.policy import Policy
from .metrics import StructuralMetrics
from .tokenizer import TagKind, TagToken


class ScanDocument(BaseModel):
    """
    Everything a rule may look at: the raw text, the flat tag stream,
    the shared metrics, the resolved policy and the heavy-dependency table.
    Rules read from it and never modify it.
    """
    model_config = ConfigDict(frozen=True)

    text: str
    file_name: str
    tokens: List[TagToken]
    metrics: StructuralMetrics
    policy: Policy
    heavy_dependencies: Dict[str, HeavyDependency]

    def tags(self, name: str, case_sensitive: bool = False) -> List[TagToken]:
        """Opening and self-closing tags with the given name, in document order."""
        if case_sensitive:
            return [t for t in self.tokens if t.kind is not TagKind.CLOSE and t.name == name]
        lowered = name.lower()
        return [t for t in self.tokens if t.kind is not TagKind.CLOSE and t.lower_name == lowered]

    def find_close(self, open_token: TagToken) -> Optional[TagToken]:
        """The next closing tag with the same name, if the element is closed at all."""
        idx = next(i for i, t in enumerate(self.tokens) if t is open_token)
        for token in self.tokens[idx + 1:]:
            if token.kind is TagKind.CLOSE and token.lower_name == open_token.lower_name:
                return token
        return None
