"""
================================================================================
UI Testing Framework
================================================================================

Playwright-based UI automation framework for canvas-rendered web apps.

Components:
    - config_loader: YAML + environment configuration
    - browser_manager: Browser lifecycle management
    - viewport_points: Viewport-relative click targets
    - smart_locator: Element location with role and coordinate fallbacks
    - page_base: Base page object (waits, input, screenshots, diagnostics)

Author: Automation Team
License: MIT
================================================================================
"""

from .config_loader import ConfigLoader, ConfigurationError
from .viewport_points import ViewportPoint, ViewportUnavailableError, center_offset
from .smart_locator import SmartLocator, ElementNotFoundError, LocateOutcome
from .page_base import BasePage
from .browser_manager import BrowserManager

__all__ = [
    "ConfigLoader",
    "ConfigurationError",
    "ViewportPoint",
    "ViewportUnavailableError",
    "center_offset",
    "SmartLocator",
    "ElementNotFoundError",
    "LocateOutcome",
    "BasePage",
    "BrowserManager",
]
