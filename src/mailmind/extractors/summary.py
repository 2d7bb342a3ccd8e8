from __future__ import annotations

import re
from typing import List

# Inbox previews are prefixed with a dash separator and cut off with an ellipsis.
_PREVIEW_LEAD_RE = re.compile(r"^[\s\-–—]+")
_PREVIEW_TAIL_RE = re.compile(r"(\.\.\.|…)\s*$")


def summarize(preview: str, body_text: str = "", max_bullets: int = 2) -> List[str]:
    """
    Local, deterministic summary: first sentences of the preview, then of the
    open message body if one is available.
    """
    bullets: List[str] = []

    for source in (clean_preview(preview), _clean_text(body_text)):
        if len(bullets) >= max_bullets:
            break
        if not source:
            continue
        for sent in _split_sentences(source):
            if len(bullets) >= max_bullets:
                break
            if sent not in bullets:
                bullets.append(sent)

    return bullets[:max_bullets]


def clean_preview(preview: str) -> str:
    text = _clean_text(preview)
    text = _PREVIEW_LEAD_RE.sub("", text)
    return _PREVIEW_TAIL_RE.sub("", text).strip()


def _split_sentences(text: str) -> List[str]:
    parts = re.split(r"(?<=[.!?])\s+", text)
    return [p.strip() for p in parts if p.strip()]


def _clean_text(text: str) -> str:
    return re.sub(r"\s+", " ", text or "").strip()
