"""Allure reporting helpers."""

from .allure_utils import (
    attach_console_log,
    attach_json,
    attach_png,
    attach_png_file,
    attach_text,
)

__all__ = [
    "attach_console_log",
    "attach_json",
    "attach_png",
    "attach_png_file",
    "attach_text",
]
