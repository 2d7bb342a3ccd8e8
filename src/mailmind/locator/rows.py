from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, List, Optional

from mailmind.config.settings import MAX_ROWS
from mailmind.dom.document import Document, Node, safe_attr, safe_select, safe_text

# Structural signatures for inbox rows, most specific first.
ROW_SIGNATURES = (
    'tr[jsaction*="mouseenter"]',
    'tr[jsaction*="click"]',
    ".zA",
    "[data-legacy-thread-id]",
    ".Cp",
    "tr.zA",
    "tr.yW",
    ".yW",
    '[role="listitem"]',
    '[jsmodel="SzKmE"]',
)

# Text that marks navigation chrome rather than a message.
NON_MESSAGE_MARKERS = ("Compose", "Sent")
MIN_ROW_TEXT = 10

GRID_TABLES = 'table[role="grid"], table.F'
THREAD_ID_NODES = "[data-thread-id], [data-legacy-thread-id]"
LABELLED_NODES = (
    '[aria-label*="email"], [aria-label*="message"], [aria-label*="conversation"]'
)
LABEL_ROW_HINTS = ("@", "unread", "from")


@dataclass(frozen=True)
class RowStrategy:
    name: str
    find: Callable[[Document], List[Node]]


@dataclass
class RowLookup:
    strategy: Optional[str] = None
    rows: List[Node] = field(default_factory=list)


def _looks_like_message(row: Node) -> bool:
    text = safe_text(row)
    return (
        len(text) > MIN_ROW_TEXT
        and not any(marker in text for marker in NON_MESSAGE_MARKERS)
    )


def rows_by_signature(doc: Document) -> List[Node]:
    # The first signature with any hit decides; later ones are not consulted.
    for selector in ROW_SIGNATURES:
        rows = safe_select(doc, selector)
        if rows:
            return [row for row in rows if _looks_like_message(row)]
    return []


def _cell_count(row: Node) -> int:
    return len(safe_select(row, ":scope > td, :scope > th"))


def rows_from_grid(doc: Document) -> List[Node]:
    for table in safe_select(doc, GRID_TABLES):
        rows = safe_select(table, "tr")
        if len(rows) > 1:
            # Skip the header row and single-cell spacers.
            return [row for row in rows[1:] if _cell_count(row) > 2]
    return []


def rows_by_thread_id(doc: Document) -> List[Node]:
    return safe_select(doc, THREAD_ID_NODES)


def rows_by_aria_label(doc: Document) -> List[Node]:
    rows: List[Node] = []
    for node in safe_select(doc, LABELLED_NODES):
        label = safe_attr(node, "aria-label")
        if any(hint in label for hint in LABEL_ROW_HINTS):
            rows.append(node)
    return rows


ROW_STRATEGIES: List[RowStrategy] = [
    RowStrategy("attribute_signature", rows_by_signature),
    RowStrategy("table_grid", rows_from_grid),
    RowStrategy("thread_id", rows_by_thread_id),
    RowStrategy("aria_label", rows_by_aria_label),
]


def find_rows(
    doc: Document,
    *,
    max_rows: int = MAX_ROWS,
    strategies: Optional[List[RowStrategy]] = None,
    log: Optional[Callable[[str], None]] = None,
) -> RowLookup:
    """
    Try each row strategy in order; the first one returning rows wins.

    Results are capped at max_rows. A strategy that raises is skipped.
    """
    for index, strategy in enumerate(strategies or ROW_STRATEGIES, start=1):
        try:
            rows = strategy.find(doc)
        except Exception as exc:
            if log:
                log(f"[rows] Strategy {index} ({strategy.name}) failed: {exc}")
            continue
        if rows:
            if log:
                log(f"[rows] Strategy {index} ({strategy.name}) found {len(rows)} rows")
            return RowLookup(strategy=strategy.name, rows=list(rows)[:max_rows])
    return RowLookup()


def locate_rows(doc: Document, *, max_rows: int = MAX_ROWS) -> List[Node]:
    return find_rows(doc, max_rows=max_rows).rows
