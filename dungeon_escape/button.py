"""A clickable rectangle with a label and a colour for each state."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field

Color = tuple[int, ...]
Point = tuple[float, float]


@dataclass
class Button:
    """A labelled button that runs its callback when clicked inside."""

    x: float
    y: float
    width: float
    height: float
    label: str
    idle_color: Color
    hover_color: Color
    active_color: Color
    callback: Callable[[], object]
    hovered: bool = field(default=False, init=False)
    pressed: bool = field(default=False, init=False)
    color: Color = field(init=False)

    def __post_init__(self) -> None:
        self.color = self.idle_color

    def contains(self, pos: Point) -> bool:
        """True if the point lies inside; the right and bottom edges are outside."""
        px, py = pos
        return (
            self.x <= px < self.x + self.width
            and self.y <= py < self.y + self.height
        )

    def update(self, mouse_pos: Point, pressed: bool) -> None:
        """Refresh hover and press state and the colour to draw with."""
        self.hovered = self.contains(mouse_pos)
        self.pressed = self.hovered and pressed
        if self.pressed:
            self.color = self.active_color
        elif self.hovered:
            self.color = self.hover_color
        else:
            self.color = self.idle_color

    def handle_click(self, pos: Point) -> bool:
        """Run the callback if a completed click landed on the button."""
        if not self.contains(pos):
            return False
        self.callback()
        return True