"""
================================================================================
Base Page Object
================================================================================

Foundation class for Page Object Model implementation.

Provides:
    - Navigation and fixed settle waits for canvas-rendered apps
    - Mouse / keyboard primitives (coordinate clicks, typing, key presses)
    - Screenshot capture into a configured artifacts directory
    - Diagnostics: page content, element counts, accessibility snapshot,
      browser console capture

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import allure
import yaml
from loguru import logger
from playwright.async_api import ConsoleMessage, Error, Locator, Page, expect

from e2e_tools.common import ensure_directory
from e2e_tools.report_tools.allure_utils import (
    attach_console_log,
    attach_json,
    attach_png_file,
    attach_text,
)

from .config_loader import ConfigLoader
from .smart_locator import SmartLocator
from .viewport_points import ViewportPoint


# Keep only the most recent console entries
MAX_CONSOLE_ENTRIES = 50


class BasePage:
    """
    Base class for all page objects.

    Usage:
        class LoginPage(BasePage):
            URL_PATH = "/"

            async def submit(self):
                await self.click_at(center_offset(150))
    """

    # Override in subclasses
    URL_PATH: str = "/"
    PAGE_TITLE: str = ""

    def __init__(
        self,
        page: Page,
        base_url: str = "",
        config: Optional[ConfigLoader] = None,
    ):
        """
        Initialize page object.

        Args:
            page: Playwright Page object
            base_url: Base URL for the application (defaults to app.base_url)
            config: Configuration loader (defaults to the shared instance)
        """
        self.page = page
        self.config = config or ConfigLoader()
        if not base_url:
            base_url = self.config.get("app.base_url", "http://localhost:3000")
        self.base_url = base_url.rstrip("/")
        self.smart = SmartLocator(page)

        self.boot_wait_ms = int(self.config.get("app.boot_wait_ms", 3000))
        self.screenshot_dir = self.config.get_path("screenshots.dir", "e2e/screenshots")
        self.timestamped_screenshots = self.config.get("screenshots.timestamped", False)

        self._console_entries: List[Dict[str, Any]] = []
        self._setup_console_capture()

    def _setup_console_capture(self) -> None:
        """Keep browser console output and uncaught page errors for debugging."""

        def on_console(message: ConsoleMessage) -> None:
            self._remember({"type": message.type, "text": message.text})

        def on_page_error(error: Error) -> None:
            self._remember({"type": "pageerror", "text": error.message})

        self.page.on("console", on_console)
        self.page.on("pageerror", on_page_error)

    def _remember(self, entry: Dict[str, Any]) -> None:
        entry["timestamp"] = datetime.now().isoformat()
        self._console_entries.append(entry)
        if len(self._console_entries) > MAX_CONSOLE_ENTRIES:
            self._console_entries.pop(0)

    @property
    def console_entries(self) -> List[Dict[str, Any]]:
        return list(self._console_entries)

    @property
    def url(self) -> str:
        """Get full page URL."""
        return f"{self.base_url}{self.URL_PATH}"

    @property
    def viewport(self) -> Optional[Dict[str, int]]:
        """Current viewport size, or None when the page has none."""
        return self.page.viewport_size

    async def navigate(self, wait_for: str = "load") -> None:
        """
        Navigate to this page.

        Args:
            wait_for: Wait condition - 'load', 'domcontentloaded', 'networkidle'
        """
        with allure.step(f"Navigate to {self.url}"):
            await self.page.goto(self.url, wait_until=wait_for)
            logger.debug(f"Navigated to: {self.url}")

    async def settle(self, ms: int) -> None:
        """Fixed wait for rendering to catch up."""
        logger.debug(f"Waiting {ms}ms for the UI to settle")
        await self.page.wait_for_timeout(ms)

    async def wait_for_app_boot(self) -> None:
        """Wait the configured boot time after navigation."""
        with allure.step(f"Wait {self.boot_wait_ms}ms for app boot"):
            await self.settle(self.boot_wait_ms)

    async def expect_visible(
        self,
        target: Union[str, Locator],
        timeout: int = 5000,
    ) -> None:
        """
        Assert that an element becomes visible.

        Args:
            target: CSS selector or Locator
            timeout: Timeout in milliseconds
        """
        locator = self.page.locator(target) if isinstance(target, str) else target
        with allure.step(f"Expect visible: {target}"):
            await expect(locator).to_be_visible(timeout=timeout)

    # =========================================================================
    # Mouse and Keyboard
    # =========================================================================

    async def click_at(self, point: ViewportPoint) -> None:
        """Click a viewport-relative point."""
        with allure.step(f"Click at {point.label}"):
            await self.smart.click_at(point)

    async def type_text(self, text: str, secret: bool = False) -> None:
        """
        Type into whatever currently has keyboard focus.

        Args:
            text: Text to type
            secret: Mask the value in the report
        """
        shown = "*" * len(text) if secret else text
        with allure.step(f"Type: {shown}"):
            await self.page.keyboard.type(text)

    async def press_key(self, key: str) -> None:
        """Press a keyboard key (e.g. "Tab", "Enter")."""
        with allure.step(f"Press key: {key}"):
            await self.page.keyboard.press(key)

    # =========================================================================
    # Screenshot and Debug Utilities
    # =========================================================================

    def screenshot_path(self, name: str) -> Path:
        """Where a screenshot called `name` is written."""
        if self.timestamped_screenshots:
            timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
            filename = f"{name}_{timestamp}.png"
        else:
            filename = f"{name}.png"
        return self.screenshot_dir / filename

    async def screenshot(
        self,
        name: str,
        full_page: bool = False,
        attach_to_allure: bool = True,
    ) -> Path:
        """
        Take screenshot and optionally attach to Allure.

        Args:
            name: Screenshot name (without extension)
            full_page: Capture full scrollable page
            attach_to_allure: Whether to attach to Allure report

        Returns:
            Path to saved screenshot
        """
        ensure_directory(self.screenshot_dir)
        filepath = self.screenshot_path(name)

        await self.page.screenshot(path=str(filepath), full_page=full_page)

        if attach_to_allure:
            attach_png_file(filepath, name=name)

        logger.debug(f"Screenshot saved: {filepath}")
        return filepath

    async def page_content(self) -> str:
        """Current serialized DOM."""
        return await self.page.content()

    async def count_elements(self, selector: str) -> int:
        """Number of elements matching `selector`."""
        return await self.page.locator(selector).count()

    async def accessibility_snapshot(self, root: str = "body") -> Any:
        """
        Capture the accessibility tree below `root`.

        Playwright returns the ARIA snapshot as YAML; it is parsed so callers
        can serialize or inspect it.

        Returns:
            Parsed snapshot (lists/dicts), or {"raw": text} if it cannot be parsed
        """
        raw = await self.page.locator(root).aria_snapshot()
        try:
            return yaml.safe_load(raw)
        except yaml.YAMLError as e:
            logger.warning(f"Accessibility snapshot is not valid YAML: {e}")
            return {"raw": raw}

    async def log_accessibility_snapshot(self, root: str = "body") -> Any:
        """Log the accessibility snapshot as indented JSON and attach it."""
        snapshot = await self.accessibility_snapshot(root)
        logger.info(f"Accessibility snapshot: {json.dumps(snapshot, indent=2, default=str)}")
        attach_json(snapshot, name="Accessibility snapshot")
        return snapshot

    async def capture_failure(self, test_name: str) -> None:
        """
        Capture debugging information on test failure.

        Saves:
            - Full-page screenshot
            - Current URL
            - Recent browser console output
        """
        with allure.step("Capture failure details"):
            await self.screenshot(f"failure_{test_name}", full_page=True)
            attach_text(self.page.url, name="Current URL")
            if self._console_entries:
                attach_console_log(self._console_entries, name="Browser Console")

    def get_locator_health_report(self) -> str:
        """Get smart locator health report."""
        return self.smart.get_health_report()


__all__ = [
    "BasePage",
    "PageBase",
    "MAX_CONSOLE_ENTRIES",
]

# Alias used by page objects
PageBase = BasePage
