"""
Coordinate transforms and boundary clamping for board cards.
"""
import numpy as np
from typing import Tuple

from .types import ContentRect, Note, Point, Size


def clamp(value: float, low: float, high: float) -> float:
    """
    Restrict value to the closed interval [low, high].

    Out-of-range values snap to the nearest bound.
    """
    return float(np.clip(value, low, high))


def max_offset(board_size: Size, card_size: Size) -> Tuple[float, float]:
    """
    Largest card position that keeps the card inside the board.

    Floored at 0 on each axis so a board smaller than a card pins the card
    to the origin instead of producing a negative range.
    """
    return (
        max(0.0, board_size.width - card_size.width),
        max(0.0, board_size.height - card_size.height),
    )


def clamp_position(raw: Point, board_size: Size, card_size: Size) -> Point:
    """
    Clamp a card position into the board, each axis independently.

    Clamping per axis (not as a vector) lets a card dragged past a corner
    slide along the edge.

    Args:
        raw: Unconstrained card position (board-local)
        board_size: Board content size
        card_size: Card size

    Returns:
        Clamped position
    """
    max_x, max_y = max_offset(board_size, card_size)
    x, y = np.clip(
        np.array([raw.x, raw.y], dtype=np.float64),
        0.0,
        np.array([max_x, max_y], dtype=np.float64)
    )
    return Point(float(x), float(y))


def to_board_coords(client_point: Point, rect: ContentRect) -> Point:
    """
    Convert a pointer position from client space to board-local space.

    Args:
        client_point: Pointer position as delivered by the windowing system
        rect: Measured board content rectangle

    Returns:
        Position relative to the top-left of the scrollable board surface
    """
    return client_point - rect.origin + rect.scroll


def random_position(
        rng: np.random.Generator,
        board_size: Size,
        card_size: Size
) -> Point:
    """Uniformly random card position that fits on the board."""
    max_x, max_y = max_offset(board_size, card_size)
    return Point(float(rng.uniform(0.0, max_x)), float(rng.uniform(0.0, max_y)))


def card_corners(
        position: Point,
        card_size: Size,
        rotation_degrees: float
) -> np.ndarray:
    """
    Corners of a card rotated about its centre.

    Args:
        position: Top-left of the unrotated card
        card_size: Card size
        rotation_degrees: Clockwise rotation on screen (y axis down)

    Returns:
        (4, 2) float array: top-left, top-right, bottom-right, bottom-left
    """
    w, h = card_size.width, card_size.height
    center = np.array([position.x + w / 2, position.y + h / 2])

    corners = np.array([
        [-w / 2, -h / 2],
        [w / 2, -h / 2],
        [w / 2, h / 2],
        [-w / 2, h / 2],
    ])

    theta = np.radians(rotation_degrees)
    rotation = np.array([
        [np.cos(theta), -np.sin(theta)],
        [np.sin(theta), np.cos(theta)],
    ])

    return corners @ rotation.T + center


def card_transform(note: Note) -> str:
    """CSS-style transform composing a card's position and rotation."""
    return (
        f"translate({note.position.x:.1f}px, {note.position.y:.1f}px) "
        f"rotate({note.rotation_degrees:.2f}deg)"
    )
