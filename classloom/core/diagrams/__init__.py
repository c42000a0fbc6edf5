"""Diagram text export.

Public API:
    render_plantuml(diagram) -> str
"""

from .plantuml import ARROWS, render_plantuml

__all__ = ["render_plantuml", "ARROWS"]
