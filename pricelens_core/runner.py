"""
Runner - One detection pass from trigger to status

Wires the pieces the engine does not own: opening the page, capturing the
snapshot, highlighting, the on-page notification, and turning the outcome
into a status the caller can show. Page-level failures are reported in the
returned PassStatus instead of raised.
"""

import json
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Union

from playwright.async_api import async_playwright

from .config import Config, config as default_config
from .detection import DetectionResult, ProductDetector, ProductRecord
from .diagnostics import get_logger
from .dom import PageHighlighter, build_tree, capture_snapshot, load_snapshot, show_notification
from .error_handler import format_error_for_logging, format_user_friendly_error

logger = get_logger(__name__)

NO_PRODUCTS_MESSAGE = "No products were detected."
PAGE_FOUND_MESSAGE = "{count} product(s) detected and highlighted!"
PAGE_EMPTY_MESSAGE = "No products detected on this page."


@dataclass
class PassStatus:
    """Outcome of a detection pass as reported to the trigger."""
    ok: bool
    message: str
    records: List[ProductRecord] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def count(self) -> int:
        return len(self.records)

    @classmethod
    def from_result(cls, result: DetectionResult) -> "PassStatus":
        if not result:
            return cls(ok=False, message=NO_PRODUCTS_MESSAGE)
        return cls(ok=True, message=f"Detected {len(result)} product(s)", records=result.records)

    @classmethod
    def from_error(cls, error: Exception, context: str) -> "PassStatus":
        friendly = format_user_friendly_error(error, context)
        logger.error(format_error_for_logging(error, context))
        return cls(ok=False, message=f"Error: {friendly['message']}", error=friendly["technical"])


async def run_detection(page, config: Optional[Config] = None, run_logger=None) -> PassStatus:
    """
    Detect products on an already loaded Playwright page.

    Highlights the detected nodes and shows the transient notification
    unless config.highlight is off.
    """
    cfg = config or default_config
    started = time.monotonic()
    try:
        result = await _detect_on_page(page, cfg, run_logger)
    except Exception as e:
        status = PassStatus.from_error(e, "detection")
    else:
        status = PassStatus.from_result(result)

    _finalize(run_logger, status, started)
    return status


async def _detect_on_page(page, cfg: Config, run_logger=None) -> DetectionResult:
    snapshot = await capture_snapshot(page)
    if run_logger:
        run_logger.log_heading("Detection")
        run_logger.log_kv("Page", str(snapshot.get("url", "")))
        run_logger.log_kv("Title", str(snapshot.get("title", "")))
    root = build_tree(snapshot["root"])

    highlighter = PageHighlighter(page) if cfg.highlight else None
    result = ProductDetector(cfg, run_logger).detect(root, highlighter=highlighter)

    if highlighter is not None:
        await highlighter.apply()
        if result:
            await show_notification(page, PAGE_FOUND_MESSAGE.format(count=len(result)),
                                    "info", cfg.notification_ms)
        else:
            await show_notification(page, PAGE_EMPTY_MESSAGE, "error", cfg.notification_ms)
    return result


async def run_on_url(url: str, config: Optional[Config] = None, run_logger=None) -> PassStatus:
    """Open url in headless Chromium and run a detection pass on it."""
    cfg = config or default_config
    started = time.monotonic()
    context = "navigation"
    try:
        async with async_playwright() as p:
            browser = await p.chromium.launch(headless=cfg.headless)
            try:
                page = await browser.new_page()
                logger.info(f"Opening {url}")
                await page.goto(url, wait_until="domcontentloaded", timeout=cfg.navigation_timeout_ms)
                if cfg.settle_ms:
                    await page.wait_for_timeout(cfg.settle_ms)
                context = "detection"
                result = await _detect_on_page(page, cfg, run_logger)
            finally:
                await _close_browser(browser)
    except Exception as e:
        status = PassStatus.from_error(e, context)
    else:
        status = PassStatus.from_result(result)

    _finalize(run_logger, status, started)
    return status


async def _close_browser(browser) -> None:
    # A close failure never changes the pass status
    try:
        await browser.close()
    except Exception as e:
        logger.warning(f"Browser close failed: {e}")


async def capture_url(url: str, output: Union[str, Path], config: Optional[Config] = None) -> int:
    """Save a JSON snapshot of url for offline runs; returns the element count."""
    cfg = config or default_config
    async with async_playwright() as p:
        browser = await p.chromium.launch(headless=cfg.headless)
        try:
            page = await browser.new_page()
            await page.goto(url, wait_until="domcontentloaded", timeout=cfg.navigation_timeout_ms)
            if cfg.settle_ms:
                await page.wait_for_timeout(cfg.settle_ms)
            snapshot = await capture_snapshot(page)
        finally:
            await browser.close()
    Path(output).write_text(json.dumps(snapshot, ensure_ascii=False), encoding="utf-8")
    count = sum(1 for _ in build_tree(snapshot["root"]).iter_tree())
    logger.info(f"Saved snapshot of {url} ({count} elements) to {output}")
    return count


def run_on_snapshot(source: Union[str, Path], config: Optional[Config] = None, run_logger=None) -> PassStatus:
    """Run a detection pass on a JSON snapshot file (no browser, no highlighting)."""
    cfg = config or default_config
    started = time.monotonic()
    try:
        root = load_snapshot(source)
        if run_logger:
            run_logger.log_heading("Detection")
            run_logger.log_kv("Snapshot", str(source))
        result = ProductDetector(cfg, run_logger).detect(root)
    except Exception as e:
        status = PassStatus.from_error(e, "snapshot")
    else:
        status = PassStatus.from_result(result)

    _finalize(run_logger, status, started)
    return status


def _finalize(run_logger, status: PassStatus, started: float) -> None:
    logger.info(status.message)
    if not run_logger:
        return
    duration_ms = int((time.monotonic() - started) * 1000)
    if status.ok:
        run_logger.log_success(status.message)
    else:
        run_logger.log_error(status.message)
    run_logger.finalize(status.ok, duration_ms, status.error)
