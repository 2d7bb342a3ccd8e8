from __future__ import annotations

import argparse
import json
from dataclasses import asdict
from datetime import datetime
from pathlib import Path
from typing import Any, Dict

from mailmind.app.run import extract_messages_received_today
from mailmind.config.settings import LOGS_DIR, EngineConfig
from mailmind.models import ExtractionResult
from mailmind.pipeline.digest import build_digest

GMAIL_URL = "https://mail.google.com/mail/u/0/#inbox"


def run_on_file(path: Path, *, verbose: bool) -> ExtractionResult:
    from mailmind.dom.soup import SoupDocument

    if not path.exists():
        raise FileNotFoundError(f"Missing HTML snapshot: {path}")
    doc = SoupDocument.from_file(path)
    return extract_messages_received_today(
        doc, config=EngineConfig.snapshot(), verbose=verbose
    )


def run_on_browser(url: str, *, headless: bool, user_data_dir: str | None, verbose: bool) -> ExtractionResult:
    from playwright.sync_api import sync_playwright

    from mailmind.dom.browser import BrowserDocument

    with sync_playwright() as p:
        if user_data_dir:
            # Persistent profile keeps the Gmail session between runs.
            context = p.chromium.launch_persistent_context(user_data_dir, headless=headless)
            browser = None
        else:
            browser = p.chromium.launch(headless=headless)
            context = browser.new_context()
        try:
            page = context.pages[0] if context.pages else context.new_page()
            page.goto(url)
            return extract_messages_received_today(
                BrowserDocument(page), config=EngineConfig.from_env(), verbose=verbose
            )
        finally:
            context.close()
            if browser is not None:
                browser.close()


def save_result(payload: Dict[str, Any]) -> Path:
    stamp = datetime.now().strftime("%Y%m%d-%H%M%S")
    out = LOGS_DIR / f"today-{stamp}.json"
    out.write_text(json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8")
    return out


def main() -> None:
    ap = argparse.ArgumentParser(description="List inbox messages received today.")
    source = ap.add_mutually_exclusive_group(required=True)
    source.add_argument("--html", type=Path, help="Saved Gmail inbox page")
    source.add_argument("--url", nargs="?", const=GMAIL_URL, help="Open a live inbox in Chromium")
    ap.add_argument("--headless", action="store_true")
    ap.add_argument("--user-data-dir", default=None, help="Chromium profile with a Gmail login")
    ap.add_argument("--digest", action="store_true", help="Include short per-message summaries")
    ap.add_argument("--save", action="store_true", help="Write the result JSON to the logs dir")
    ap.add_argument("--verbose", action="store_true")
    args = ap.parse_args()

    if args.html:
        result = run_on_file(args.html, verbose=args.verbose)
    else:
        result = run_on_browser(
            args.url,
            headless=args.headless,
            user_data_dir=args.user_data_dir,
            verbose=args.verbose,
        )

    payload: Dict[str, Any] = {"result": result.to_dict()}
    if args.digest:
        payload["digest"] = [asdict(entry) for entry in build_digest(result.messages)]

    print(json.dumps(payload, indent=2, ensure_ascii=False))
    if args.save:
        out = save_result(payload)
        print(f"[save] Wrote {out}")


if __name__ == "__main__":
    main()
