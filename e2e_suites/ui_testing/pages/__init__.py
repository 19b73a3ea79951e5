"""
================================================================================
Page Objects
================================================================================

Page Object Model implementations for application screens.

Each page class encapsulates:
    - Element locators and expected widget positions
    - Screen-specific actions
    - Verification methods

Author: Automation Team
License: MIT
================================================================================
"""

from .login_page import LoginFormData, LoginPage

__all__ = [
    "LoginFormData",
    "LoginPage",
]
