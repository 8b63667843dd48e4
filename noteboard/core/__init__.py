"""
Core module - shared data types, geometry utilities, and configuration.
"""
from .types import (
    BoardError,
    Point,
    Size,
    ContentRect,
    HSLColor,
    Note,
    optional_size,
)
from .geometry import (
    clamp,
    clamp_position,
    to_board_coords,
    random_position,
    card_corners,
    card_transform,
)
from .io_utils import load_yaml
from .config_loader import (
    BoardConfig,
    ColorConfig,
    UIConfig,
    build_board_config,
    load_board_config,
    load_board_settings,
)

__all__ = [
    # Types
    "BoardError",
    "Point",
    "Size",
    "ContentRect",
    "HSLColor",
    "Note",
    "optional_size",
    # Geometry
    "clamp",
    "clamp_position",
    "to_board_coords",
    "random_position",
    "card_corners",
    "card_transform",
    # I/O
    "load_yaml",
    # Config
    "BoardConfig",
    "ColorConfig",
    "UIConfig",
    "build_board_config",
    "load_board_config",
    "load_board_settings",
]
