"""Flow layout for tag chips.

Places variable-width items left to right and wraps to a new line when the
next item would overflow the available width. An item wider than the line
still gets placed, alone on its own line.
"""

from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple

DEFAULT_SPACING = 8.0


@dataclass(frozen=True, slots=True)
class Size:
    width: float
    height: float


@dataclass(frozen=True, slots=True)
class Placement:
    """Where one item landed."""

    index: int
    x: float
    y: float
    width: float
    height: float
    line: int


@dataclass(frozen=True)
class FlowLayout:
    """Result of a flow layout pass."""

    placements: Tuple[Placement, ...]
    width: float
    height: float

    @property
    def line_count(self) -> int:
        if not self.placements:
            return 0
        return self.placements[-1].line + 1

    def lines(self) -> List[List[Placement]]:
        """Group placements by line, preserving order."""
        grouped: List[List[Placement]] = [[] for _ in range(self.line_count)]
        for placement in self.placements:
            grouped[placement.line].append(placement)
        return grouped


def flow_layout(
    sizes: Sequence[Size],
    max_width: Optional[float] = None,
    spacing: float = DEFAULT_SPACING,
) -> FlowLayout:
    """Greedy first-fit placement of items into lines.

    Args:
        sizes: Item sizes in display order.
        max_width: Available line width; None means unbounded.
        spacing: Gap between items on a line and between lines.

    Returns:
        FlowLayout: Item placements, the widest line's width and the total
        height (line heights plus spacing between lines).
    """
    limit = float("inf") if max_width is None else max_width
    placements: List[Placement] = []

    line = 0
    y = 0.0
    line_width = 0.0
    line_height = 0.0
    line_items = 0
    widest = 0.0

    for index, size in enumerate(sizes):
        x = line_width + spacing if line_items else 0.0
        if x + size.width > limit and line_items:
            y += line_height + spacing
            line += 1
            line_width = 0.0
            line_height = 0.0
            line_items = 0
            x = 0.0

        placements.append(Placement(index=index, x=x, y=y, width=size.width, height=size.height, line=line))
        line_width = x + size.width
        line_items += 1
        line_height = max(line_height, size.height)
        widest = max(widest, line_width)

    height = y + line_height if placements else 0.0
    return FlowLayout(placements=tuple(placements), width=widest, height=height)


def measure_tags(
    tags: Iterable[str],
    char_width: float = 7.0,
    horizontal_padding: float = 10.0,
    height: float = 20.0,
) -> List[Size]:
    """Estimate chip sizes from tag text for fixed-width rendering."""
    return [Size(width=len(tag) * char_width + 2 * horizontal_padding, height=height) for tag in tags]
