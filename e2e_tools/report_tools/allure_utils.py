"""
================================================================================
Allure Report Utilities
================================================================================

Attachment helpers used by page objects and pytest hooks.

Features:
- JSON / text attachments
- PNG screenshot attachments from files or raw bytes
- Console log attachments

================================================================================
"""

import json
from pathlib import Path
from typing import Any, Dict, List, Union

import allure


# ================================================================================
# Attachment Helpers
# ================================================================================

def attach_json(data: Any, name: str = "Data"):
    """
    Attach JSON data to Allure report.

    Args:
        data: Data to attach (will be JSON serialized)
        name: Attachment name
    """
    json_str = json.dumps(data, indent=2, default=str)
    allure.attach(
        json_str,
        name=name,
        attachment_type=allure.attachment_type.JSON
    )


def attach_text(text: str, name: str = "Text"):
    """
    Attach text content to Allure report.

    Args:
        text: Text to attach
        name: Attachment name
    """
    allure.attach(
        text,
        name=name,
        attachment_type=allure.attachment_type.TEXT
    )


def attach_png(data: bytes, name: str = "Screenshot"):
    """Attach raw PNG bytes."""
    allure.attach(
        data,
        name=name,
        attachment_type=allure.attachment_type.PNG
    )


def attach_png_file(path: Union[str, Path], name: str = "Screenshot"):
    """
    Attach a PNG file from disk.

    Args:
        path: Path to the PNG file
        name: Attachment name
    """
    with open(path, "rb") as f:
        attach_png(f.read(), name=name)


def attach_console_log(entries: List[Dict[str, Any]], name: str = "Browser Console"):
    """
    Attach captured browser console entries as plain text.

    Args:
        entries: Items with "type" and "text" keys
        name: Attachment name
    """
    lines = [f"[{entry.get('type', 'log')}] {entry.get('text', '')}" for entry in entries]
    attach_text("\n".join(lines) or "<empty>", name=name)


__all__ = [
    "attach_json",
    "attach_text",
    "attach_png",
    "attach_png_file",
    "attach_console_log",
]
