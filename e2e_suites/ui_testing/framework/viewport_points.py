"""
================================================================================
Viewport-Relative Points
================================================================================

Canvas-rendered apps (Flutter web) expose no DOM for most widgets, so the
last-resort strategy is to click where a widget is expected to be. Points are
declared as offsets from a viewport anchor and resolved against the live
viewport size right before the click.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, Tuple


class ViewportUnavailableError(Exception):
    """Raised when the page reports no viewport size."""
    pass


ANCHORS = ("center", "top_left", "top_center", "bottom_center")


@dataclass(frozen=True)
class ViewportPoint:
    """
    Offset from a viewport anchor.

    Attributes:
        dx: Horizontal offset in CSS pixels (positive = right)
        dy: Vertical offset in CSS pixels (positive = down)
        anchor: One of ANCHORS
        name: Human-readable label used in logs and reports
    """
    dx: float = 0
    dy: float = 0
    anchor: str = "center"
    name: str = ""

    def __post_init__(self) -> None:
        if self.anchor not in ANCHORS:
            raise ValueError(f"Unknown viewport anchor: {self.anchor}")

    def resolve(self, viewport: Optional[Dict[str, int]]) -> Tuple[float, float]:
        """
        Convert to absolute page coordinates.

        Args:
            viewport: Playwright viewport dict ({"width": w, "height": h})

        Returns:
            (x, y) tuple

        Raises:
            ViewportUnavailableError: If viewport is None
        """
        if not viewport:
            raise ViewportUnavailableError(
                f"Cannot resolve point '{self.label}': page has no viewport size"
            )

        width = viewport["width"]
        height = viewport["height"]

        if self.anchor == "center":
            base_x, base_y = width / 2, height / 2
        elif self.anchor == "top_left":
            base_x, base_y = 0, 0
        elif self.anchor == "top_center":
            base_x, base_y = width / 2, 0
        else:  # bottom_center
            base_x, base_y = width / 2, height

        return base_x + self.dx, base_y + self.dy

    @property
    def label(self) -> str:
        return self.name or f"{self.anchor}{self.dx:+g},{self.dy:+g}"


def center_offset(dy: float, dx: float = 0, name: str = "") -> ViewportPoint:
    """Shortcut for the common 'centre of the screen, shifted vertically' case."""
    return ViewportPoint(dx=dx, dy=dy, anchor="center", name=name)


__all__ = [
    "ANCHORS",
    "ViewportPoint",
    "ViewportUnavailableError",
    "center_offset",
]
