from __future__ import annotations

from typing import List, Optional, Protocol


class Node(Protocol):
    """One element of the mailbox document, as seen by the engine."""

    def attr(self, name: str) -> Optional[str]: ...
    def has_class(self, name: str) -> bool: ...
    def select(self, css: str) -> List["Node"]: ...
    def select_one(self, css: str) -> Optional["Node"]: ...
    def text(self) -> str: ...
    def font_weight(self) -> Optional[str]: ...


class Document(Protocol):
    def select(self, css: str) -> List[Node]: ...
    def select_one(self, css: str) -> Optional[Node]: ...
    def refresh(self) -> None: ...


def safe_select(scope: Node | Document, css: str) -> List[Node]:
    """Descendant query that treats stale handles and host errors as no match."""
    try:
        return list(scope.select(css))
    except Exception:
        return []


def safe_select_one(scope: Node | Document, css: str) -> Optional[Node]:
    try:
        return scope.select_one(css)
    except Exception:
        return None


def safe_attr(node: Node, name: str) -> str:
    try:
        return node.attr(name) or ""
    except Exception:
        return ""


def safe_text(node: Node) -> str:
    try:
        return node.text() or ""
    except Exception:
        return ""


def is_bold_weight(weight: Optional[str]) -> bool:
    # Computed styles report numbers ("700"), inline styles usually keywords.
    if not weight:
        return False
    value = weight.strip().lower()
    if value in ("bold", "bolder"):
        return True
    try:
        return float(value) >= 700
    except ValueError:
        return False
