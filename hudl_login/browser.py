"""
Browser session lifecycle.

Every scenario gets its own Playwright driver, browser and context, opened
for one engine at one viewport and closed when the scenario ends. Nothing is
shared between scenarios.
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from playwright.sync_api import Browser, BrowserContext, Page, Playwright, sync_playwright

from hudl_login.config import DESKTOP, Settings, Viewport
from hudl_login.engines import Engine

logger = logging.getLogger(__name__)


@dataclass
class BrowserSession:
    playwright: Playwright
    browser: Browser
    context: BrowserContext
    page: Page
    engine: Engine
    viewport: Viewport

    def close(self) -> None:
        """Tear down browser cleanly."""
        try:
            self.context.close()
            self.browser.close()
        finally:
            self.playwright.stop()
        logger.info("Closed %s session (%s)", self.engine.value, self.viewport.name)


def open_browser(settings: Settings, engine: Engine = Engine.CHROMIUM, viewport: Viewport = DESKTOP) -> BrowserSession:
    """
    Launch ``engine`` with a fresh context sized to ``viewport``.

    Element waits use ``settings.timeout_ms`` and navigations the (longer)
    ``settings.navigation_timeout_ms``; hitting either fails the scenario.
    """
    p = sync_playwright().start()
    try:
        launch_args = {"headless": settings.headless, "slow_mo": settings.slow_mo}
        if engine is Engine.CHROMIUM:
            # slight hardening to reduce bot-detection flakiness
            launch_args["args"] = ["--disable-blink-features=AutomationControlled"]
        browser = getattr(p, engine.value).launch(**launch_args)
        context = browser.new_context(
            viewport=viewport.as_playwright(),
            ignore_https_errors=True,
        )
        context.set_default_navigation_timeout(settings.navigation_timeout_ms)
        context.set_default_timeout(settings.timeout_ms)
        page = context.new_page()
    except Exception:
        p.stop()
        raise
    logger.info(
        "Opened %s session at %s (%dx%d)", engine.value, viewport.name, viewport.width, viewport.height
    )
    return BrowserSession(p, browser, context, page, engine, viewport)


def artifact_name(nodeid: str) -> str:
    """Filesystem-safe file stem for a pytest node id."""
    return re.sub(r"[^A-Za-z0-9_.-]+", "_", nodeid).strip("_") or "scenario"


def capture_screenshot(page: Page, directory: Path, name: str) -> Optional[Path]:
    """
    Save a full-page screenshot for a failed scenario.

    Returns the written path, or None when the page can no longer be captured
    (the browser may already be gone after a crash).
    """
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / f"{artifact_name(name)}.png"
    try:
        page.screenshot(path=str(path), full_page=True)
    except Exception as exc:
        logger.warning("Could not capture screenshot for %s: %s", name, exc)
        return None
    logger.info("Saved failure screenshot to %s", path)
    return path
