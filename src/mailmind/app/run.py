# src/mailmind/app/run.py
from __future__ import annotations

import time
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional

from mailmind.config.settings import EngineConfig
from mailmind.dom.document import Document, Node
from mailmind.extractors.fields import extract_record
from mailmind.locator.rows import RowLookup, find_rows
from mailmind.models import ExtractionResult, MessageRecord
from mailmind.pipeline.readiness import ReadinessTimeout, ensure_ready
from mailmind.pipeline.retry import RetryLoop, Sleep, fixed
from mailmind.rules.today import classify_time_text

NO_ROWS_DIAGNOSTIC = "No email rows found in mailbox view"

ProgressCb = Callable[[str, Dict[str, Any]], None]


def locate_with_retry(
    doc: Document,
    *,
    config: EngineConfig,
    sleep: Sleep,
    log: Callable[[str], None],
) -> RowLookup:
    """Locate rows; if none turn up, re-scan exactly once after a short pause."""
    lookup = RowLookup()

    def probe() -> bool:
        nonlocal lookup
        if loop.attempts > 1:
            log("[rows] No rows on first scan, retrying once")
            doc.refresh()
        lookup = find_rows(doc, max_rows=config.max_rows, log=log)
        return bool(lookup.rows)

    loop = RetryLoop(max_attempts=2, delay=fixed(config.empty_retry_delay), sleep=sleep)
    loop.run(probe)
    return lookup


def classify_rows(
    rows: List[Node], *, now: datetime, log: Callable[[str], None]
) -> List[MessageRecord]:
    # Sequential on purpose: the live document may change under us.
    kept: List[MessageRecord] = []
    for row in rows:
        record = extract_record(row, log)
        if record is None:
            continue
        today, rule = classify_time_text(record.time_text, now)
        if today:
            kept.append(record)
        else:
            log(f"[today] Skipped time={record.time_text!r} rule={rule}")
    return kept


def extract_messages_received_today(
    doc: Document,
    *,
    config: Optional[EngineConfig] = None,
    now: Optional[datetime] = None,
    sleep: Optional[Sleep] = None,
    verbose: bool = False,
    progress_cb: Optional[ProgressCb] = None,
) -> ExtractionResult:
    """
    Scan the mailbox document and return the messages received today.

    Args:
        doc: Document host (SoupDocument snapshot or BrowserDocument page).
        config: Timing and cap settings; EngineConfig.from_env() when omitted.
        now: Reference time for the "today" decision (defaults to now).
        sleep: Wait function; a host-provided sleep is used when available.
        verbose: If True, print progress for CLI usage.

    Never raises: failures come back as an empty result with diagnostic/error set.
    """
    def log(msg: str) -> None:
        if verbose:
            print(msg)

    def report(step: str, *, detail: str | None = None, **metrics: Any) -> None:
        if not progress_cb:
            return
        payload: Dict[str, Any] = {"detail": detail}
        if metrics:
            payload["metrics"] = metrics
        try:
            progress_cb(step, payload)
        except Exception as exc:
            # A broken progress consumer must not abort the scan.
            log(f"[error] Progress callback failed at {step}: {type(exc).__name__}: {exc}")

    cfg = config or EngineConfig.from_env()
    wait = sleep or getattr(doc, "sleep", None) or time.sleep
    ref = now or datetime.now()

    try:
        report("wait_ready", detail="Waiting for mailbox view")
        ensure_ready(doc, config=cfg, sleep=wait, log=log)

        report("locate_rows", detail="Locating inbox rows")
        lookup = locate_with_retry(doc, config=cfg, sleep=wait, log=log)
        if not lookup.rows:
            log(f"[rows] {NO_ROWS_DIAGNOSTIC}")
            report("done", detail=NO_ROWS_DIAGNOSTIC, rows=0, messages=0, unread=0)
            return ExtractionResult(diagnostic=NO_ROWS_DIAGNOSTIC)

        rows_scanned = len(lookup.rows)
        report("extract_rows", detail=f"Extracting {rows_scanned} rows", rows=rows_scanned)
        messages = classify_rows(lookup.rows, now=ref, log=log)
    except ReadinessTimeout as exc:
        log(f"[error] {exc}")
        report("error", detail=str(exc))
        return ExtractionResult(diagnostic=str(exc), error=str(exc))
    except Exception as exc:
        err = f"{type(exc).__name__}: {exc}"
        log(f"[error] {err}")
        report("error", detail=err)
        return ExtractionResult(diagnostic=f"Extraction failed: {err}", error=err)

    unread_count = sum(1 for m in messages if m.is_unread)
    diagnostic = (
        f"Processed {rows_scanned} rows, found {len(messages)} messages from today"
    )
    log(f"[run] {diagnostic}, {unread_count} unread")
    report(
        "done",
        detail=diagnostic,
        rows=rows_scanned,
        messages=len(messages),
        unread=unread_count,
    )
    return ExtractionResult(
        messages=messages,
        unread_count=unread_count,
        diagnostic=diagnostic,
        rows_scanned=rows_scanned,
        strategy=lookup.strategy,
    )
