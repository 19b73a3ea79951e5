"""
================================================================================
UI Testing Pytest Configuration
================================================================================

Fixtures for browser management, page objects and test setup/teardown.

Key Features:
- Reachability check: UI tests are skipped when the app is not running
- Fresh browser context per test (every test boots the app from scratch)
- Failure capture: screenshot + browser console attached to Allure

================================================================================
"""

from typing import AsyncGenerator

import httpx
import pytest
from loguru import logger
from playwright.async_api import Page

from e2e_suites.ui_testing.framework.browser_manager import BrowserManager
from e2e_suites.ui_testing.framework.config_loader import ConfigLoader
from e2e_suites.ui_testing.pages.login_page import LoginFormData, LoginPage


# ================================================================================
# Configuration Fixtures
# ================================================================================

@pytest.fixture(scope="session")
def config() -> ConfigLoader:
    """Session-scoped configuration loader."""
    return ConfigLoader()


@pytest.fixture(scope="session")
def base_url(config: ConfigLoader) -> str:
    """Application under test."""
    return config.get("app.base_url", "http://localhost:3000")


@pytest.fixture(scope="session")
def app_available(config: ConfigLoader, base_url: str) -> str:
    """
    Skip UI tests when the application is not reachable.

    Any HTTP response counts as reachable; only connection errors skip.
    """
    timeout = float(config.get("app.reachability_timeout", 5))
    try:
        response = httpx.get(base_url, timeout=timeout, follow_redirects=True)
    except httpx.HTTPError as e:
        pytest.skip(f"Application not reachable at {base_url}: {e}")
    logger.info(f"Application reachable at {base_url} (HTTP {response.status_code})")
    return base_url


@pytest.fixture
def form_data(config: ConfigLoader) -> LoginFormData:
    """Values typed into the login form."""
    return LoginFormData.from_config(config)


# ================================================================================
# Browser Fixtures
# ================================================================================

@pytest.fixture
async def browser_manager(
    config: ConfigLoader,
    app_available: str,
) -> AsyncGenerator[BrowserManager, None]:
    """Browser per test; closed even when the test fails."""
    manager = BrowserManager.from_config(config)
    await manager.start()
    yield manager
    await manager.close()


@pytest.fixture
async def page(browser_manager: BrowserManager) -> AsyncGenerator[Page, None]:
    """New page in a fresh, isolated context."""
    page = await browser_manager.new_page()
    yield page
    await page.close()


# ================================================================================
# Page Object Fixtures
# ================================================================================

@pytest.fixture
async def login_page(
    request: pytest.FixtureRequest,
    page: Page,
    config: ConfigLoader,
    base_url: str,
) -> AsyncGenerator[LoginPage, None]:
    """
    LoginPage already navigated to the app and past the boot wait.

    On test failure a full-page screenshot and the browser console are
    attached to the Allure report.
    """
    login = LoginPage(page, base_url=base_url, config=config)
    await login.open()
    yield login

    report = getattr(request.node, "rep_call", None)
    if report is not None and report.failed:
        try:
            await login.capture_failure(request.node.name)
        except Exception as e:
            logger.warning(f"Failed to capture failure details: {e}")

    logger.debug(login.get_locator_health_report())


# ================================================================================
# Test Lifecycle Hooks
# ================================================================================

@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_makereport(item, call):
    """Expose each phase's report on the item (rep_setup / rep_call / rep_teardown)."""
    outcome = yield
    report = outcome.get_result()
    setattr(item, f"rep_{report.when}", report)
