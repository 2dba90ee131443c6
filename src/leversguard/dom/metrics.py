# src/leversguard/dom/metrics.py
from typing import AbstractSet, List, Optional, Sequence

from pydantic import BaseModel

from .tokenizer import TagKind, TagToken, VOID_ELEMENTS

# Charset declarations further than this into <head> risk a re-parse.
CHARSET_NEAR_START = 100


class HeadSection(BaseModel):
    """
    Span of the first <head>...</head> pair plus the offsets of the elements
    whose ordering matters. Element offsets are relative to content_start.
    """
    open_start: int
    content_start: int
    content_end: int

    charset_offset: Optional[int] = None
    title_offset: Optional[int] = None
    first_stylesheet_offset: Optional[int] = None
    first_script_offset: Optional[int] = None

    def absolute(self, relative_offset: int) -> int:
        return self.content_start + relative_offset


class StructuralMetrics(BaseModel):
    """Shared document metrics, computed once per scan."""
    element_count: int = 0
    max_depth: int = 0
    byte_size: int = 0
    has_head: bool = False
    head: Optional[HeadSection] = None
    uses_head_manager: bool = False
    is_component_file: bool = False

    @property
    def size_kb(self) -> float:
        return self.byte_size / 1024


def is_void(token: TagToken, void_elements: AbstractSet[str] = VOID_ELEMENTS) -> bool:
    return token.kind is TagKind.SELF_CLOSE or token.lower_name in void_elements


def count_elements(tokens: Sequence[TagToken], void_elements: AbstractSet[str] = VOID_ELEMENTS) -> int:
    """Counts opening tags of non-void elements."""
    return sum(1 for t in tokens if t.kind is TagKind.OPEN and t.lower_name not in void_elements)


def max_depth(tokens: Sequence[TagToken], void_elements: AbstractSet[str] = VOID_ELEMENTS) -> int:
    """
    Streaming depth counter. Opening tags push, closing tags pop (floored at 0),
    void and self-closing tags are skipped. Tag names are not matched against
    each other, so <a><b></a> simply nets one level.
    """
    depth = 0
    deepest = 0
    for token in tokens:
        if is_void(token, void_elements):
            continue
        if token.kind is TagKind.CLOSE:
            depth = max(0, depth - 1)
        else:
            depth += 1
            deepest = max(deepest, depth)
    return deepest


def locate_head(tokens: Sequence[TagToken]) -> Optional[HeadSection]:
    """Finds the first head span and the ordering-relevant offsets inside it."""
    open_idx = next(
        (i for i, t in enumerate(tokens) if t.kind is TagKind.OPEN and t.lower_name == "head"),
        None
    )
    if open_idx is None:
        return None

    close_idx = next(
        (i for i in range(open_idx + 1, len(tokens))
         if tokens[i].kind is TagKind.CLOSE and tokens[i].lower_name == "head"),
        None
    )
    if close_idx is None:
        return None

    head_open = tokens[open_idx]
    head = HeadSection(
        open_start=head_open.start,
        content_start=head_open.end,
        content_end=tokens[close_idx].start,
    )

    for token in tokens[open_idx + 1:close_idx]:
        rel = token.start - head.content_start
        name = token.lower_name
        if token.kind is TagKind.CLOSE:
            continue
        if name == "meta" and head.charset_offset is None and token.has_attr("charset"):
            head.charset_offset = rel
        elif name == "title" and head.title_offset is None:
            head.title_offset = rel
        elif name == "link" and head.first_stylesheet_offset is None and rel_contains(token, "stylesheet"):
            head.first_stylesheet_offset = rel
        elif name == "script" and head.first_script_offset is None:
            head.first_script_offset = rel

    return head


def rel_contains(token: TagToken, value: str) -> bool:
    """True when the space separated rel attribute contains the given value."""
    return value in token.attr("rel").lower().split()


def uses_head_manager(text: str, markers: Sequence[str]) -> bool:
    return any(marker in text for marker in markers)


def is_component_file(file_name: str, extensions: Sequence[str]) -> bool:
    lowered = file_name.lower()
    return any(lowered.endswith(ext.lower()) for ext in extensions)


def compute_metrics(
        text: str,
        file_name: str,
        tokens: List[TagToken],
        head_manager_markers: Sequence[str],
        component_extensions: Sequence[str],
        void_elements: AbstractSet[str] = VOID_ELEMENTS,
) -> StructuralMetrics:
    """Derives every shared structural signal in one place."""
    return StructuralMetrics(
        element_count=count_elements(tokens, void_elements),
        max_depth=max_depth(tokens, void_elements),
        byte_size=len(text.encode("utf-8")),
        has_head=any(t.kind is TagKind.OPEN and t.lower_name == "head" for t in tokens),
        head=locate_head(tokens),
        uses_head_manager=uses_head_manager(text, head_manager_markers),
        is_component_file=is_component_file(file_name, component_extensions),
    )
