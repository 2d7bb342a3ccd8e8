# backend/app/api/today.py
from __future__ import annotations

from dataclasses import asdict
from datetime import datetime
from typing import Any, Optional

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel
from starlette.concurrency import run_in_threadpool

from backend.app.status import extraction_status_store
from mailmind.app.run import extract_messages_received_today
from mailmind.config.settings import EngineConfig
from mailmind.dom.soup import SoupDocument
from mailmind.pipeline.digest import build_digest

router = APIRouter()


class TodayRequest(BaseModel):
    html: str
    now: Optional[datetime] = None


@router.post("/today")
async def today_endpoint(payload: TodayRequest) -> dict:
    if not payload.html.strip():
        raise HTTPException(status_code=400, detail="Empty HTML snapshot.")
    if not extraction_status_store.try_start("Starting extraction"):
        raise HTTPException(status_code=409, detail="An extraction is already running.")

    def progress_cb(step: str, event: dict[str, Any]) -> None:
        status_update: dict[str, Any] = {
            "state": "running",
            "step": step,
            "detail": event.get("detail"),
        }
        if "metrics" in event:
            status_update["metrics"] = event.get("metrics") or {}
        extraction_status_store.update(**status_update)

    try:
        # Parsing and scanning are blocking; keep the event loop free.
        result = await run_in_threadpool(
            extract_messages_received_today,
            SoupDocument(payload.html),
            config=EngineConfig.snapshot(),
            now=payload.now,
            progress_cb=progress_cb,
        )
    except Exception as exc:
        extraction_status_store.update(state="error", step="error", detail=str(exc))
        raise

    summary = {
        "messages": len(result.messages),
        "unread_count": result.unread_count,
        "rows_scanned": result.rows_scanned,
        "strategy": result.strategy,
    }
    extraction_status_store.update(
        state="error" if result.error else "done",
        step="done",
        detail=result.diagnostic,
        summary=summary,
    )
    return {
        "ok": result.error is None,
        "result": result.to_dict(),
        "digest": [asdict(entry) for entry in build_digest(result.messages)],
    }


@router.get("/today/status")
async def today_status() -> dict:
    return {"ok": True, "status": extraction_status_store.snapshot()}
