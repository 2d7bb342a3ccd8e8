from __future__ import annotations

from typing import Iterable, List

from mailmind.extractors.summary import summarize
from mailmind.models import DigestEntry, MessageRecord

# The presentation layer summarises at most this many messages per refresh.
DIGEST_LIMIT = 10


def build_digest(
    messages: Iterable[MessageRecord], max_items: int = DIGEST_LIMIT
) -> List[DigestEntry]:
    entries: List[DigestEntry] = []
    for record in messages:
        if len(entries) >= max_items:
            break
        entries.append(
            DigestEntry(
                sender=record.sender or "Unknown Sender",
                subject=record.subject or "No Subject",
                time_text=record.time_text,
                is_unread=record.is_unread,
                summary=summarize(record.preview),
            )
        )
    return entries
