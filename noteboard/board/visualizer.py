"""
Board rendering with OpenCV.
"""
import cv2
import numpy as np
import textwrap
from typing import Dict, List, Optional, Tuple
import logging

from noteboard.core import Note, Point, Size, card_corners

logger = logging.getLogger(__name__)


class BoardRenderer:
    """
    Renders note cards onto a BGR image.

    Each card is drawn as a rotated, filled polygon at its position with the
    author, message and date on top. Live drag positions can override the
    committed ones so a dragged card follows the pointer before commit.
    """

    # Color scheme (BGR)
    COLORS = {
        "background": (249, 249, 249),
        "shadow": (200, 200, 200),
        "border": (150, 150, 150),
        "text": (20, 20, 20),
        "date": (102, 102, 102),
        "title": (0, 0, 0),
    }

    SHADOW_OFFSET = 3
    PADDING = 14
    LINE_HEIGHT = 20
    WRAP_CHARS = 24

    def __init__(self, card_size: Size):
        """
        Initialize renderer.

        Args:
            card_size: Card width/height in board units (1 unit = 1 pixel)
        """
        self.card_size = card_size

    def render(
            self,
            notes: List[Note],
            board_size: Size,
            live_positions: Optional[Dict[int, Point]] = None,
            title: Optional[str] = None,
            dragging_id: Optional[int] = None
    ) -> np.ndarray:
        """
        Render the board.

        Args:
            notes: Notes to draw, bottom to top
            board_size: Board content size (image size)
            live_positions: Per-note positions overriding note.position
            title: Optional heading (e.g. active author filter)
            dragging_id: Note drawn last so it stays on top while dragged

        Returns:
            BGR image of shape (height, width, 3)
        """
        width = max(1, int(round(board_size.width)))
        height = max(1, int(round(board_size.height)))
        image = np.full((height, width, 3), self.COLORS["background"], dtype=np.uint8)

        if title:
            cv2.putText(
                image,
                title,
                (16, 36),
                cv2.FONT_HERSHEY_SIMPLEX,
                0.9,
                self.COLORS["title"],
                2
            )

        live_positions = live_positions or {}
        ordered = [n for n in notes if n.id != dragging_id]
        ordered += [n for n in notes if n.id == dragging_id]

        for note in ordered:
            position = live_positions.get(note.id, note.position)
            self.draw_card(image, note, position)

        return image

    def draw_card(self, image: np.ndarray, note: Note, position: Point) -> np.ndarray:
        """
        Draw a single card in place.

        Args:
            image: Target image (modified)
            note: Note to draw
            position: Top-left of the unrotated card

        Returns:
            The same image
        """
        corners = card_corners(position, self.card_size, note.rotation_degrees)

        shadow = np.round(corners + self.SHADOW_OFFSET).astype(np.int32)
        polygon = np.round(corners).astype(np.int32)

        cv2.fillPoly(image, [shadow], self.COLORS["shadow"], lineType=cv2.LINE_AA)
        cv2.fillPoly(image, [polygon], note.color.to_bgr(), lineType=cv2.LINE_AA)
        cv2.polylines(image, [polygon], True, self.COLORS["border"], 1, cv2.LINE_AA)

        for text, origin, scale, color, thickness in self._text_lines(note, position):
            cv2.putText(
                image,
                text,
                origin,
                cv2.FONT_HERSHEY_SIMPLEX,
                scale,
                color,
                thickness,
                cv2.LINE_AA
            )

        return image

    def _text_lines(
            self,
            note: Note,
            position: Point
    ) -> List[Tuple[str, Tuple[int, int], float, Tuple[int, int, int], int]]:
        """Layout author, wrapped message and date inside the card."""
        x = int(position.x) + self.PADDING
        y = int(position.y) + self.PADDING + self.LINE_HEIGHT
        bottom = int(position.y + self.card_size.height) - self.PADDING

        lines = [(note.author, (x, y), 0.7, self.COLORS["text"], 2)]
        y += self.LINE_HEIGHT + 6

        for chunk in textwrap.wrap(note.text, self.WRAP_CHARS):
            if y > bottom - self.LINE_HEIGHT:
                break
            lines.append((chunk, (x, y), 0.5, self.COLORS["text"], 1))
            y += self.LINE_HEIGHT

        lines.append((note.date_label, (x, bottom), 0.45, self.COLORS["date"], 1))
        return lines
