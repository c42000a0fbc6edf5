"""Deterministic grid placement for classifiers.

Classifiers are laid out left to right in insertion order, wrapping to a
new row once the cursor passes ``max_row_width``.
"""

from .models import Diagram


def apply_grid_layout(
    diagram: Diagram,
    origin_x: float = 50.0,
    origin_y: float = 50.0,
    horizontal_gap: float = 50.0,
    vertical_gap: float = 50.0,
    max_row_width: float = 800.0,
) -> Diagram:
    """Position every classifier of ``diagram`` on a simple row grid.

    Modifies classifier coordinates in place and returns the diagram.
    """
    x = origin_x
    y = origin_y
    row_height = 0.0

    for classifier in diagram.classifiers():
        if x > max_row_width:
            x = origin_x
            y += row_height + vertical_gap
            row_height = 0.0

        classifier.x = x
        classifier.y = y

        x += classifier.width + horizontal_gap
        row_height = max(row_height, classifier.height)

    return diagram
