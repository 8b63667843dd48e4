"""
Core data types for the message board.
Defines contracts between modules to ensure stable interfaces.
"""
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Optional, Tuple
import colorsys


class BoardError(Enum):
    """Non-fatal conditions reported by the store and drag controllers."""
    INVALID_INPUT = "invalid_input"  # Empty author or text after trimming
    NOT_FOUND = "not_found"  # Commit for an unknown note id
    LAYOUT_UNAVAILABLE = "layout_unavailable"  # Board not measurable yet


@dataclass(frozen=True)
class Point:
    """
    A position in a 2D coordinate space (top-left origin, y grows downward).
    """
    x: float
    y: float

    def __add__(self, other: "Point") -> "Point":
        return Point(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Point") -> "Point":
        return Point(self.x - other.x, self.y - other.y)

    def as_tuple(self) -> Tuple[float, float]:
        return (self.x, self.y)


@dataclass(frozen=True)
class Size:
    """Width/height pair. Negative dimensions are rejected."""
    width: float
    height: float

    def __post_init__(self):
        if self.width < 0 or self.height < 0:
            raise ValueError("Size dimensions must not be negative")


@dataclass(frozen=True)
class ContentRect:
    """
    Measured board content rectangle.

    `origin` is the top-left corner of the visible board in pointer (client)
    coordinates, `scroll` the current scroll offset of the board surface, and
    `size` the full scrollable content size in board-local units.
    """
    size: Size
    origin: Point = Point(0.0, 0.0)
    scroll: Point = Point(0.0, 0.0)

    @property
    def width(self) -> float:
        return self.size.width

    @property
    def height(self) -> float:
        return self.size.height


@dataclass(frozen=True)
class HSLColor:
    """
    Pastel card color.

    hue in degrees [0, 360), saturation and lightness in percent.
    """
    hue: int
    saturation: int = 70
    lightness: int = 80

    @property
    def css(self) -> str:
        return f"hsl({self.hue}, {self.saturation}%, {self.lightness}%)"

    def to_rgb(self) -> Tuple[int, int, int]:
        """Convert to 8-bit RGB."""
        # colorsys uses HLS ordering and unit ranges
        r, g, b = colorsys.hls_to_rgb(
            (self.hue % 360) / 360.0,
            self.lightness / 100.0,
            self.saturation / 100.0
        )
        return (round(r * 255), round(g * 255), round(b * 255))

    def to_bgr(self) -> Tuple[int, int, int]:
        """Convert to OpenCV channel order."""
        r, g, b = self.to_rgb()
        return (b, g, r)

    def to_hex(self) -> str:
        """Convert to a Tk color string (#rrggbb)."""
        return "#{:02x}{:02x}{:02x}".format(*self.to_rgb())


@dataclass
class Note:
    """
    A posted message rendered as a card on the board.

    Only `position` changes after creation (drag-commit).
    """
    id: int
    author: str
    text: str
    created_date: date
    rotation_degrees: float
    position: Point
    color: HSLColor

    @property
    def date_label(self) -> str:
        """Creation day as shown on the card (YYYY-MM-DD)."""
        return self.created_date.isoformat()

    def contains(self, point: Point, card_size: Size) -> bool:
        """Hit-test against the unrotated card rectangle."""
        return (
            self.position.x <= point.x <= self.position.x + card_size.width
            and self.position.y <= point.y <= self.position.y + card_size.height
        )


def optional_size(width: Optional[float], height: Optional[float]) -> Optional[Size]:
    """Build a Size from possibly-missing measurements."""
    if width is None or height is None:
        return None
    return Size(max(0.0, float(width)), max(0.0, float(height)))
