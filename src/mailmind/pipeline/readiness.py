from __future__ import annotations

import time
from typing import Callable, Optional

from mailmind.config.settings import EngineConfig
from mailmind.dom.document import Document, safe_select_one
from mailmind.pipeline.retry import RetryLoop, RetryState, Sleep, fixed, linear

# Any of these means the mailbox view has rendered.
READY_MARKERS = (
    '[role="main"]',
    ".nH",
    '[gh="tl"]',
    ".aeJ",
    ".AO",
    ".Tm.aeJ",
    '[jscontroller="SoVkNd"]',
)


class ReadinessTimeout(RuntimeError):
    def __init__(self, attempts: int, polls_per_attempt: int):
        super().__init__(
            f"Mailbox view not ready after {attempts} attempts "
            f"({polls_per_attempt} polls each)"
        )
        self.attempts = attempts
        self.polls_per_attempt = polls_per_attempt


def has_ready_marker(doc: Document) -> bool:
    try:
        doc.refresh()
    except Exception:
        return False
    return any(safe_select_one(doc, marker) is not None for marker in READY_MARKERS)


def wait_until_ready(
    doc: Document,
    *,
    config: Optional[EngineConfig] = None,
    sleep: Sleep = time.sleep,
) -> bool:
    """Poll for a ready marker at a fixed interval. False once the polls run out."""
    cfg = config or EngineConfig()
    loop = RetryLoop(
        max_attempts=cfg.ready_max_polls,
        delay=fixed(cfg.ready_poll_interval),
        sleep=sleep,
    )
    return loop.run(lambda: has_ready_marker(doc)) is RetryState.SUCCEEDED


def ensure_ready(
    doc: Document,
    *,
    config: Optional[EngineConfig] = None,
    sleep: Sleep = time.sleep,
    log: Optional[Callable[[str], None]] = None,
) -> RetryLoop:
    """
    Outer readiness loop: repeat wait_until_ready() with linear backoff.

    Returns the finished loop so callers can inspect attempts and time waited.
    Raises ReadinessTimeout when every attempt fails.
    """
    cfg = config or EngineConfig()

    def attempt() -> bool:
        ok = wait_until_ready(doc, config=cfg, sleep=sleep)
        if ok:
            if log:
                log("[ready] Mailbox view detected")
        elif log:
            log(f"[ready] Load attempt {outer.attempts} failed")
        return ok

    outer = RetryLoop(
        max_attempts=cfg.ready_retries,
        delay=linear(cfg.ready_backoff_step),
        sleep=sleep,
    )
    outer.run(attempt)
    if not outer.succeeded:
        raise ReadinessTimeout(outer.attempts, cfg.ready_max_polls)
    return outer
