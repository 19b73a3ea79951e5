"""
================================================================================
E2E Tools
================================================================================

Support utilities shared by the login screen automation suite.

Modules:
    - common: Loguru logger initialisation and filesystem helpers
    - report_tools: Allure attachment helpers for screenshots and diagnostics

Example:
    from e2e_tools.common import init_logger
    from e2e_tools.report_tools.allure_utils import attach_json

    init_logger(level="DEBUG")
    attach_json({"inputs": 3}, name="Form inputs")

================================================================================
"""

__version__ = "1.0.0"

__all__ = [
    "common",
    "report_tools",
]
