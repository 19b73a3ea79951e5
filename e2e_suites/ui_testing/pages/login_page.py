"""
================================================================================
Login Page Object (Async / Playwright)
================================================================================

Login screen of the notes app (Flutter web build). The form asks for a GitHub
username, a repository name and a personal access token, then a Connect
button.

Flutter paints the form onto a canvas, so most widgets have no DOM node:
  - The app host (`flt-glass-pane`) is the only reliable selector
  - Fields are reached by clicking their expected position and tabbing
  - Connect is looked up by accessibility role first, by position second

NOTE:
  Offsets are tuned for the default 1280x720 viewport.

================================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict

import allure
from loguru import logger

from e2e_suites.ui_testing.framework.config_loader import ConfigLoader
from e2e_suites.ui_testing.framework.page_base import PageBase
from e2e_suites.ui_testing.framework.smart_locator import LocateOutcome
from e2e_suites.ui_testing.framework.viewport_points import (
    ViewportUnavailableError,
    center_offset,
)


@dataclass
class LoginFormData:
    """Values typed into the login form."""
    username: str = "testuser"
    repository: str = "my-notes-repo"
    token: str = "ghp_test123456789"

    @classmethod
    def from_config(cls, config: ConfigLoader) -> "LoginFormData":
        defaults = cls()
        return cls(
            username=config.get("login.username", defaults.username),
            repository=config.get("login.repository", defaults.repository),
            token=config.get("login.token", defaults.token),
        )


class LoginPage(PageBase):
    """Login page object (async)."""

    URL_PATH = ""
    PAGE_TITLE = "Login"

    # Expected widget positions relative to the viewport centre
    USERNAME_FIELD = center_offset(-100, name="username_field")
    FIRST_FIELD = center_offset(-80, name="first_form_field")
    CONNECT_BUTTON = center_offset(150, name="connect_button")

    CONNECT_ROLE = "button"
    CONNECT_NAME = r"connect"
    # Canvas builds without semantics have no button node; do not linger
    CONNECT_LOOKUP_MS = 500

    # Settle times between interactions (ms)
    FOCUS_SETTLE_MS = 500
    TAB_SETTLE_MS = 300
    SUBMIT_SETTLE_MS = 1000

    @allure.step("Open login screen")
    async def open(self) -> "LoginPage":
        """Navigate to the app and wait for the Flutter engine to boot."""
        await self.navigate()
        await self.wait_for_app_boot()
        return self

    @allure.step("Verify Flutter app loaded")
    async def verify_app_loaded(self, timeout: int = 10000) -> None:
        """Assert the Flutter host element is visible within `timeout` ms."""
        content = await self.page_content()
        logger.info(f"Page loaded ({len(content)} bytes). Checking for Flutter content...")
        # One wait covering every host selector, not one wait per selector
        pane = self.page.locator(self.smart.selector_group("glass_pane")).first
        await self.expect_visible(pane, timeout=timeout)
        logger.info("Flutter glass pane found!")

    async def count_inputs(self) -> int:
        """Count DOM input elements (Flutter creates them lazily on focus)."""
        count = await self.count_elements("input")
        logger.info(f"Found {count} input elements")
        return count

    @allure.step("Enable Flutter semantics")
    async def enable_semantics(self) -> bool:
        """
        Ask Flutter to build its semantics tree.

        Flutter web only emits accessibility nodes after its hidden
        placeholder button is activated. Returns False when no placeholder
        is present (semantics already on, or a non-Flutter build).
        """
        if not await self.smart.is_visible("semantics_toggle", timeout=1000):
            return False
        toggle = await self.smart.locate("semantics_toggle", timeout=1000)
        await toggle.dispatch_event("click")
        logger.info("Flutter semantics enabled")
        return True

    def require_viewport(self) -> Dict[str, int]:
        """Viewport size, or ViewportUnavailableError for coordinate steps."""
        viewport = self.viewport
        if not viewport:
            raise ViewportUnavailableError(
                "Login form positions are viewport-relative; page has no viewport"
            )
        return viewport

    @allure.step("Fill username field")
    async def fill_username(self, username: str) -> None:
        """Click where the username field is expected and type into it."""
        self.require_viewport()
        await self.click_at(self.USERNAME_FIELD)
        await self.settle(self.FOCUS_SETTLE_MS)
        await self.type_text(username)
        await self.settle(self.FOCUS_SETTLE_MS)

    @allure.step("Fill login form")
    async def fill_form(self, data: LoginFormData) -> None:
        """Focus the first field, then tab through username, repository, token."""
        self.require_viewport()
        await self.click_at(self.FIRST_FIELD)
        await self.settle(self.TAB_SETTLE_MS)
        await self.type_text(data.username)

        await self.press_key("Tab")
        await self.settle(self.TAB_SETTLE_MS)
        await self.type_text(data.repository)

        await self.press_key("Tab")
        await self.settle(self.TAB_SETTLE_MS)
        await self.type_text(data.token, secret=True)

    @allure.step("Click Connect")
    async def click_connect(self) -> LocateOutcome:
        """Click Connect by role, falling back to its expected position."""
        self.require_viewport()
        outcome = await self.smart.click_with_fallback(
            self.CONNECT_ROLE,
            self.CONNECT_NAME,
            self.CONNECT_BUTTON,
            element_name="connect_button",
            timeout=self.CONNECT_LOOKUP_MS,
        )
        await self.settle(self.SUBMIT_SETTLE_MS)
        return outcome

    @allure.step("Submit empty form")
    async def submit_empty(self) -> None:
        """Click where Connect is expected without filling any field."""
        self.require_viewport()
        await self.click_at(self.CONNECT_BUTTON)
        await self.settle(self.SUBMIT_SETTLE_MS)


__all__ = [
    "LoginFormData",
    "LoginPage",
]
