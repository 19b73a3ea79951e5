"""
================================================================================
Browser Manager
================================================================================

Browser lifecycle management for UI automation.

Features:
    - One browser instance per manager
    - Isolated contexts so every test starts from a fresh app boot
    - Viewport presets (coordinate fallbacks depend on a known viewport)

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from loguru import logger
from playwright.async_api import (
    async_playwright,
    Browser,
    BrowserContext,
    Page,
    Playwright,
)

from .config_loader import ConfigLoader


SUPPORTED_BROWSERS = ("chromium", "firefox", "webkit")


class BrowserManager:
    """
    Manages browser instances and contexts for UI testing.

    Usage:
        async with BrowserManager() as manager:
            page = await manager.new_page()
            await page.goto("http://localhost:3000")
    """

    DEFAULT_LAUNCH_OPTIONS: Dict[str, Any] = {
        "headless": True,
        "args": [
            "--ignore-certificate-errors",
        ],
    }

    # Playwright's own default viewport; login coordinates are tuned for it
    DEFAULT_VIEWPORT: Dict[str, int] = {"width": 1280, "height": 720}

    DEFAULT_CONTEXT_OPTIONS: Dict[str, Any] = {
        "ignore_https_errors": True,
    }

    def __init__(
        self,
        headless: bool = True,
        browser_type: str = "chromium",
        viewport: Optional[Dict[str, int]] = None,
    ):
        """
        Initialize browser manager.

        Args:
            headless: Run browser in headless mode
            browser_type: Browser to use - 'chromium', 'firefox', 'webkit'
            viewport: Viewport size for new contexts
        """
        if browser_type not in SUPPORTED_BROWSERS:
            raise ValueError(
                f"Unsupported browser '{browser_type}', expected one of {SUPPORTED_BROWSERS}"
            )

        self.headless = headless
        self.browser_type = browser_type
        self.viewport = viewport or dict(self.DEFAULT_VIEWPORT)

        self._playwright: Optional[Playwright] = None
        self._browser: Optional[Browser] = None
        self._contexts: List[BrowserContext] = []

    @classmethod
    def from_config(cls, config: ConfigLoader) -> "BrowserManager":
        """Build a manager from the browser.* configuration section."""
        return cls(
            headless=config.get("browser.headless", True),
            browser_type=config.get("browser.type", "chromium"),
            viewport={
                "width": int(config.get("browser.viewport.width", cls.DEFAULT_VIEWPORT["width"])),
                "height": int(config.get("browser.viewport.height", cls.DEFAULT_VIEWPORT["height"])),
            },
        )

    async def __aenter__(self) -> "BrowserManager":
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def start(self) -> None:
        """Start Playwright and launch browser."""
        self._playwright = await async_playwright().start()

        browser_launcher = getattr(self._playwright, self.browser_type)

        launch_options = {
            **self.DEFAULT_LAUNCH_OPTIONS,
            "headless": self.headless,
        }
        if self.browser_type != "chromium":
            launch_options.pop("args")

        self._browser = await browser_launcher.launch(**launch_options)
        logger.debug(
            f"Browser started: {self.browser_type} "
            f"(headless={self.headless})"
        )

    async def close(self) -> None:
        """Close all contexts and browser."""
        for context in self._contexts:
            try:
                await context.close()
            except Exception as e:
                logger.debug(f"Context already closed: {e}")
        self._contexts.clear()

        if self._browser:
            await self._browser.close()
            self._browser = None

        if self._playwright:
            await self._playwright.stop()
            self._playwright = None

        logger.debug("Browser closed")

    async def new_context(self, **options: Any) -> BrowserContext:
        """
        Create new browser context.

        Each context is isolated - separate cookies, localStorage, etc.

        Args:
            **options: Additional context options

        Returns:
            New BrowserContext
        """
        if not self._browser:
            raise RuntimeError("Browser not started. Call start() first.")

        context_options = {
            **self.DEFAULT_CONTEXT_OPTIONS,
            "viewport": self.viewport,
            **options,
        }

        context = await self._browser.new_context(**context_options)
        self._contexts.append(context)

        return context

    async def new_page(
        self,
        context: Optional[BrowserContext] = None,
        **context_options: Any,
    ) -> Page:
        """
        Create new page in new or existing context.

        Args:
            context: Existing context to use (creates new if None)
            **context_options: Options for new context

        Returns:
            New Page
        """
        if context is None:
            context = await self.new_context(**context_options)

        return await context.new_page()

    @property
    def browser(self) -> Optional[Browser]:
        """Get browser instance."""
        return self._browser


__all__ = [
    "BrowserManager",
    "SUPPORTED_BROWSERS",
]
