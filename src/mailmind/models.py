from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class MessageRecord:
    sender: str
    subject: str
    preview: str
    time_text: str
    is_unread: bool = False

    def is_noise(self) -> bool:
        # Header rows, compose buttons and spacers carry none of the three.
        return not (self.sender or self.subject or self.preview)


@dataclass(frozen=True)
class ExtractionResult:
    messages: List[MessageRecord] = field(default_factory=list)
    unread_count: int = 0
    diagnostic: str = ""
    rows_scanned: int = 0
    strategy: Optional[str] = None
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class DigestEntry:
    sender: str
    subject: str
    time_text: str
    is_unread: bool
    summary: List[str] = field(default_factory=list)
