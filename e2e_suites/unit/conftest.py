"""
Fixtures for browser-free framework tests.

`FakePage` mimics the small slice of the Playwright Page API the framework
uses and records every mouse, keyboard and wait call so tests can assert the
exact interaction sequence.
"""

import os
import re
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple

import pytest
import yaml

from e2e_suites.ui_testing.framework import page_base
from e2e_suites.ui_testing.framework.config_loader import ConfigLoader


PNG_BYTES = b"\x89PNG\r\n\x1a\nfake"


class FakeTimeoutError(Exception):
    pass


class FakeLocator:
    def __init__(self, page: "FakePage", key: str, visible: bool, count: int = 0, broken: bool = False):
        self.page = page
        self.key = key
        self.visible = visible
        self._count = count
        self.broken = broken

    @property
    def first(self) -> "FakeLocator":
        return self

    async def wait_for(self, state: str = "visible", timeout: Optional[int] = None) -> None:
        self.page.waits.append((self.key, timeout))
        if self.broken:
            raise RuntimeError(f"driver error for {self.key}")
        if state == "visible" and not self.visible:
            raise FakeTimeoutError(f"Timeout {timeout}ms waiting for {self.key}")

    async def is_visible(self) -> bool:
        return self.visible

    async def count(self) -> int:
        return self._count

    async def click(self, **kwargs) -> None:
        self.page.actions.append(("locator_click", self.key))

    async def dispatch_event(self, event: str) -> None:
        self.page.actions.append(("dispatch", self.key, event))

    async def aria_snapshot(self) -> str:
        return self.page.aria_yaml


class FakeMouse:
    def __init__(self, page: "FakePage"):
        self.page = page

    async def click(self, x: float, y: float) -> None:
        self.page.actions.append(("mouse_click", x, y))


class FakeKeyboard:
    def __init__(self, page: "FakePage"):
        self.page = page

    async def type(self, text: str) -> None:
        self.page.actions.append(("type", text))

    async def press(self, key: str) -> None:
        self.page.actions.append(("press", key))


class FakeConsoleMessage:
    def __init__(self, type: str, text: str):
        self.type = type
        self.text = text


class FakePage:
    def __init__(
        self,
        visible: Iterable[str] = (),
        roles: Iterable[Tuple[str, str]] = (),
        broken: Iterable[str] = (),
        counts: Optional[Dict[str, int]] = None,
        viewport: Optional[Dict[str, int]] = None,
        aria_yaml: str = "",
    ):
        self.visible = set(visible)
        self.roles = list(roles)
        self.broken = set(broken)
        self.counts = counts or {}
        self.viewport_size = viewport
        self.aria_yaml = aria_yaml
        self.url = "about:blank"
        self.actions: List[tuple] = []
        self.waits: List[Tuple[str, Optional[int]]] = []
        self.handlers: Dict[str, list] = {}
        self.mouse = FakeMouse(self)
        self.keyboard = FakeKeyboard(self)

    def locator(self, selector: str) -> FakeLocator:
        # "a, b" selector lists match when any member matches
        parts = [part.strip() for part in selector.split(",")]
        return FakeLocator(
            self,
            selector,
            visible=any(part in self.visible for part in parts),
            count=self.counts.get(selector, 0),
            broken=selector in self.broken,
        )

    def get_by_role(self, role: str, name=None) -> FakeLocator:
        key = f"role={role}"
        if role in self.broken:
            return FakeLocator(self, key, visible=False, broken=True)
        pattern = name if isinstance(name, re.Pattern) else re.compile(re.escape(name or ""))
        for r, n in self.roles:
            if r == role and pattern.search(n):
                return FakeLocator(self, f"{key}[{n}]", visible=True)
        return FakeLocator(self, key, visible=False)

    def on(self, event: str, handler) -> None:
        self.handlers.setdefault(event, []).append(handler)

    def emit(self, event: str, payload) -> None:
        for handler in self.handlers.get(event, []):
            handler(payload)

    async def goto(self, url: str, wait_until: str = "load") -> None:
        self.url = url
        self.actions.append(("goto", url))

    async def wait_for_timeout(self, ms: int) -> None:
        self.actions.append(("wait", ms))

    async def screenshot(self, path: str, full_page: bool = False) -> bytes:
        Path(path).write_bytes(PNG_BYTES)
        self.actions.append(("screenshot", Path(path).name, full_page))
        return PNG_BYTES

    async def content(self) -> str:
        return "<html><body><flt-glass-pane></flt-glass-pane></body></html>"


@pytest.fixture
def fake_page_factory():
    """Build FakePage instances; default viewport is 1280x720."""
    def factory(**kwargs) -> FakePage:
        kwargs.setdefault("viewport", {"width": 1280, "height": 720})
        return FakePage(**kwargs)
    return factory


@pytest.fixture
def config(tmp_path: Path, monkeypatch):
    """Fresh ConfigLoader reading a temp YAML; screenshots go to tmp_path."""
    clear_config_env(monkeypatch)
    config_path = tmp_path / "config.yaml"
    config_path.write_text(
        yaml.dump(
            {
                "app": {"base_url": "http://localhost:3000/", "boot_wait_ms": 3000},
                "screenshots": {"dir": str(tmp_path / "shots"), "timestamped": False},
                "login": {"username": "octocat", "repository": "notes", "token": "ghp_abc"},
            }
        ),
        encoding="utf-8",
    )
    ConfigLoader.reset()
    loader = ConfigLoader(config_path=config_path)
    yield loader
    ConfigLoader.reset()


@pytest.fixture
def png_bytes() -> bytes:
    return PNG_BYTES


@pytest.fixture
def console_message():
    """Build console message stand-ins (type, text)."""
    return FakeConsoleMessage


class FakeExpectation:
    def __init__(self, locator: FakeLocator):
        self.locator = locator

    async def to_be_visible(self, timeout: Optional[float] = None) -> None:
        self.locator.page.waits.append((self.locator.key, timeout))
        if not self.locator.visible:
            raise AssertionError(f"Locator expected to be visible: {self.locator.key}")


@pytest.fixture
def fake_expect(monkeypatch):
    """Route page_base's Playwright `expect` to FakeExpectation."""
    monkeypatch.setattr(page_base, "expect", FakeExpectation)
    return FakeExpectation


# Env vars the runner exports to steer ConfigLoader (app.base_url -> APP_BASE_URL)
CONFIG_ENV_PREFIXES = ("APP_", "BROWSER_", "SCREENSHOTS_", "LOGIN_", "LOGGING_")


def clear_config_env(monkeypatch) -> None:
    monkeypatch.delenv("E2E_CONFIG", raising=False)
    for key in list(os.environ):
        if key.startswith(CONFIG_ENV_PREFIXES):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture(autouse=True)
def _isolated_config_env(monkeypatch):
    """Unit tests see only the YAML they write, never runner overrides."""
    clear_config_env(monkeypatch)
