"""
================================================================================
Root Pytest Configuration
================================================================================

This module provides the root pytest configuration for the entire test suite.
It registers common markers and tags tests by directory.

================================================================================
"""

from pathlib import Path

import pytest


def pytest_configure(config):
    """Configure pytest with project-wide custom markers."""

    # Priority markers
    config.addinivalue_line(
        "markers", "P0: Critical priority tests - must pass for deployment"
    )
    config.addinivalue_line(
        "markers", "P1: High priority tests - important functionality"
    )
    config.addinivalue_line(
        "markers", "P2: Medium priority tests - edge cases and minor features"
    )
    config.addinivalue_line(
        "markers", "P3: Low priority tests - extensive validation"
    )

    # Test type markers
    config.addinivalue_line(
        "markers", "smoke: Quick verification tests"
    )
    config.addinivalue_line(
        "markers", "regression: Full regression test suite"
    )
    config.addinivalue_line(
        "markers", "e2e: End-to-end tests simulating user flows"
    )

    # Domain markers
    config.addinivalue_line(
        "markers", "ui: Browser-driven tests (need the app running)"
    )
    config.addinivalue_line(
        "markers", "unit: Framework tests that run without a browser"
    )

    # Feature markers
    config.addinivalue_line(
        "markers", "login: Tests related to the login screen"
    )


def pytest_collection_modifyitems(config, items):
    """Tag tests with 'ui' / 'unit' based on their directory."""
    for item in items:
        parts = Path(str(item.fspath)).parts
        if "ui_testing" in parts:
            item.add_marker(pytest.mark.ui)
        elif "unit" in parts:
            item.add_marker(pytest.mark.unit)


def pytest_report_header(config):
    """Add custom header to pytest output."""
    return [
        "",
        "=" * 60,
        "Notes App Login Screen - E2E Automation",
        "=" * 60,
        "",
    ]
