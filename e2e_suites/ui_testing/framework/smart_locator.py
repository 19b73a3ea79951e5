"""
================================================================================
Smart Locator with Coordinate Fallback
================================================================================

Element location for canvas-rendered UIs:
    - Selector maps with primary + fallback CSS selectors
    - Accessibility (role + name) lookup for semantic widgets
    - Viewport-relative coordinate clicks when no semantic node exists
    - Health tracking of every fallback so selectors can be improved

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Pattern, Tuple, Union

from loguru import logger
from playwright.async_api import Locator, Page

from .viewport_points import ViewportPoint


class ElementNotFoundError(Exception):
    """Raised when all locator strategies fail to find element."""
    pass


@dataclass
class LocatorHealth:
    """
    Tracks locator health and usage statistics.

    Attributes:
        element_name: Human-readable element name
        primary_selector: The preferred selector
        used_fallback: Whether a fallback was used
        fallback_name: Name of fallback used (if any)
        fallback_selector: The fallback selector or point used (if any)
    """
    element_name: str
    primary_selector: str
    used_fallback: bool = False
    fallback_name: Optional[str] = None
    fallback_selector: Optional[str] = None


@dataclass
class LocateOutcome:
    """Result of a click that may have fallen back to coordinates."""
    strategy: str
    target: str
    point: Optional[Tuple[float, float]] = None

    @property
    def used_coordinates(self) -> bool:
        return self.strategy == "coordinates"


class SmartLocator:
    """
    Smart element locator with fallback strategies.

    Locator Priority Order:
        1. Host / DOM selectors (flt-glass-pane, input)
        2. role + accessible name (requires Flutter semantics)
        3. Viewport-relative coordinates (last resort)

    Usage:
        >>> smart = SmartLocator(page)
        >>> await smart.locate("glass_pane", timeout=10000)
        >>> await smart.click_with_fallback(
        ...     "button", r"connect", center_offset(150), element_name="connect_button"
        ... )
    """

    # Format: element_name -> {strategy_name: selector}
    LOCATORS: Dict[str, Dict[str, str]] = {
        "glass_pane": {
            "primary": "flt-glass-pane",
            "fallback_1": "flutter-view",
        },
        "text_input": {
            "primary": "input",
            "fallback_1": "textarea",
            "fallback_2": "[contenteditable='true']",
        },
        "semantics_toggle": {
            "primary": "flt-semantics-placeholder",
            "fallback_1": "[aria-label='Enable accessibility']",
        },
    }

    def __init__(self, page: Page):
        """
        Initialize SmartLocator with Playwright page.

        Args:
            page: Playwright Page object
        """
        self.page = page
        self._locators: Dict[str, Dict[str, str]] = dict(self.LOCATORS)
        self._health_records: List[LocatorHealth] = []
        self._fallback_used: Dict[str, LocatorHealth] = {}

    async def locate(
        self,
        target: Union[str, Dict[str, str]],
        timeout: int = 5000,
        element_name: Optional[str] = None,
    ) -> Locator:
        """
        Locate element using smart fallback strategy.

        Tries each selector in order until one becomes visible.

        Args:
            target: Element key (str) in the locator map, or an explicit
                strategy -> selector map (dict)
            timeout: Timeout in milliseconds for each attempt
            element_name: Optional display name when `target` is a dict

        Returns:
            Playwright Locator for the found element

        Raises:
            ElementNotFoundError: When all strategies fail
        """
        if isinstance(target, dict):
            locators = target
            display_name = element_name or "custom_element"
        else:
            locators = self._locators.get(target, {})
            display_name = target

        if not locators:
            raise ElementNotFoundError(
                f"No locators defined for element: {display_name}"
            )

        errors = []

        for strategy_name, selector in locators.items():
            try:
                locator = self.page.locator(selector).first
                await locator.wait_for(state="visible", timeout=timeout)

                self._record(
                    display_name,
                    locators.get("primary", selector),
                    None if strategy_name == "primary" else strategy_name,
                    selector,
                )

                if strategy_name != "primary":
                    logger.warning(
                        f"⚠️ Element '{display_name}' used fallback: "
                        f"{strategy_name} -> {selector}"
                    )
                else:
                    logger.debug(f"✅ Element '{display_name}' found: {selector}")

                return locator

            except Exception as e:
                errors.append(f"{strategy_name}: {selector} -> {str(e)[:50]}")
                continue

        error_msg = (
            f"❌ All locators failed for '{display_name}':\n" +
            "\n".join(f"  - {err}" for err in errors)
        )
        logger.error(error_msg)
        raise ElementNotFoundError(error_msg)

    async def locate_role(
        self,
        role: str,
        name: Union[str, Pattern[str]],
        timeout: int = 2000,
    ) -> Locator:
        """
        Locate a widget through the accessibility tree.

        Args:
            role: ARIA role, e.g. "button" or "textbox"
            name: Accessible name; strings are matched case-insensitively
            timeout: Visibility timeout in milliseconds

        Raises:
            ElementNotFoundError: When no visible node matches
        """
        pattern = re.compile(name, re.IGNORECASE) if isinstance(name, str) else name
        locator = self.page.get_by_role(role, name=pattern).first
        try:
            await locator.wait_for(state="visible", timeout=timeout)
        except Exception as e:
            raise ElementNotFoundError(
                f"No visible {role} named /{pattern.pattern}/: {str(e)[:80]}"
            ) from e
        return locator

    async def click_at(self, point: ViewportPoint) -> Tuple[float, float]:
        """Click a viewport-relative point and return the absolute coordinates."""
        x, y = point.resolve(self.page.viewport_size)
        logger.debug(f"Clicking '{point.label}' at ({x:.0f}, {y:.0f})")
        await self.page.mouse.click(x, y)
        return x, y

    async def click_with_fallback(
        self,
        role: str,
        name: Union[str, Pattern[str]],
        point: ViewportPoint,
        element_name: Optional[str] = None,
        timeout: int = 2000,
        **kwargs: Any,
    ) -> LocateOutcome:
        """
        Click a widget by role, or at `point` when the role lookup fails.

        Args:
            role: ARIA role of the widget
            name: Accessible name (regex string or compiled pattern)
            point: Where the widget is expected on screen
            element_name: Display name for logs and the health report
            timeout: Visibility timeout for the role lookup
            **kwargs: Passed to Locator.click()

        Returns:
            LocateOutcome describing which strategy was used
        """
        display_name = element_name or point.label or role
        role_desc = f"role={role} name={name if isinstance(name, str) else name.pattern}"

        try:
            locator = await self.locate_role(role, name, timeout=timeout)
            await locator.click(**kwargs)
            self._record(display_name, role_desc, None, role_desc)
            logger.info(f"Clicked '{display_name}' via role")
            return LocateOutcome(strategy="role", target=role_desc)
        except Exception as e:
            logger.warning(
                f"Could not click '{display_name}' via role, trying coordinates: "
                f"{str(e)[:80]}"
            )

        x, y = await self.click_at(point)
        self._record(display_name, role_desc, "coordinates", f"{point.label} -> ({x:.0f}, {y:.0f})")
        return LocateOutcome(strategy="coordinates", target=point.label, point=(x, y))

    async def is_visible(
        self,
        target: Union[str, Dict[str, str]],
        timeout: int = 2000,
        element_name: Optional[str] = None,
    ) -> bool:
        """
        Check if element is visible.

        Returns:
            True if element is visible, False otherwise
        """
        try:
            locator = await self.locate(target, timeout=timeout, element_name=element_name)
            return await locator.is_visible()
        except ElementNotFoundError:
            return False

    def _record(
        self,
        element_name: str,
        primary: str,
        fallback_name: Optional[str],
        fallback_selector: str,
    ) -> None:
        health = LocatorHealth(
            element_name=element_name,
            primary_selector=primary,
            used_fallback=fallback_name is not None,
            fallback_name=fallback_name,
            fallback_selector=fallback_selector if fallback_name else None,
        )
        self._health_records.append(health)
        if health.used_fallback:
            self._fallback_used[element_name] = health

    def get_health_report(self) -> str:
        """
        Generate locator health report.

        Lists elements that needed a fallback (CSS fallback or coordinates).

        Returns:
            Formatted health report string
        """
        if not self._fallback_used:
            return "✅ All elements used primary locators. No maintenance needed."

        report_lines = [
            "⚠️ Locator Health Report - Fallbacks Used:",
            "",
            "The following elements used fallback locators.",
            "Consider adding semantics labels or updating the primary selectors:",
            "",
        ]

        for element_name, health in self._fallback_used.items():
            report_lines.extend([
                f"  [{element_name}]",
                f"    Failed primary: {health.primary_selector}",
                f"    Used: {health.fallback_name} -> {health.fallback_selector}",
                "",
            ])

        return "\n".join(report_lines)

    def selector_group(self, element_name: str) -> str:
        """All selectors for `element_name` as one CSS selector list."""
        locators = self._locators.get(element_name)
        if not locators:
            raise ElementNotFoundError(f"No locators defined for element: {element_name}")
        return ", ".join(locators.values())

    def register_locator(
        self,
        element_name: str,
        locators: Dict[str, str],
    ) -> None:
        """
        Register new locator at runtime.

        Args:
            element_name: Unique name for the element
            locators: Dictionary of strategy -> selector
        """
        self._locators[element_name] = locators
        logger.debug(f"Registered new locator: {element_name}")


__all__ = [
    "SmartLocator",
    "ElementNotFoundError",
    "LocatorHealth",
    "LocateOutcome",
]
