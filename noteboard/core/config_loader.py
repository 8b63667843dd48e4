"""
Utilities to load board configuration from YAML files.

Card dimensions, color tone and window layout live in
`config/default_config.yaml` so they can be tuned without touching code.
Unknown keys are ignored to keep the loader backwards compatible.
"""
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional
import logging

from .io_utils import load_yaml
from .types import Size

logger = logging.getLogger(__name__)

# Default location for the application-wide settings
DEFAULT_CONFIG_PATH = Path("config/default_config.yaml")


@dataclass
class ColorConfig:
    """Saturation/lightness shared by all generated author colors."""
    saturation: int = 70  # Percent
    lightness: int = 80  # Percent, light enough for dark text

    def __post_init__(self):
        if not (0 <= self.saturation <= 100 and 0 <= self.lightness <= 100):
            raise ValueError("Saturation and lightness must be in [0, 100]")


@dataclass
class UIConfig:
    """Window layout for the desktop front end."""
    window_width: int = 1280
    window_height: int = 800
    sidebar_width: int = 250
    background: str = "#f9f9f9"


@dataclass
class BoardConfig:
    """Card geometry and nested color/UI settings."""
    card_width: float = 250.0
    card_height: float = 250.0
    max_rotation_deg: float = 3.0  # Rotation drawn from [-max, +max]

    colors: ColorConfig = field(default_factory=ColorConfig)
    ui: UIConfig = field(default_factory=UIConfig)

    def __post_init__(self):
        if self.card_width <= 0 or self.card_height <= 0:
            raise ValueError("Card dimensions must be positive")
        if self.max_rotation_deg < 0:
            raise ValueError("max_rotation_deg must not be negative")

    @property
    def card_size(self) -> Size:
        return Size(float(self.card_width), float(self.card_height))


def _apply_overrides(target: Any, overrides: Dict[str, Any]) -> None:
    """
    Apply dictionary overrides to a dataclass-like object.

    Unknown keys are ignored to remain forward compatible with new YAML fields.
    """
    for key, value in overrides.items():
        if hasattr(target, key):
            setattr(target, key, value)
        else:
            logger.debug("Ignoring unknown config key: %s", key)


def load_board_settings(config_path: Optional[Path] = None) -> Dict[str, Any]:
    """
    Load raw configuration dictionary from YAML.

    Args:
        config_path: Optional path to YAML file (defaults to DEFAULT_CONFIG_PATH)

    Returns:
        Dictionary with configuration values (empty dict on failure)
    """
    path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH

    if not path.exists():
        logger.info("Board config not found at %s, using defaults", path)
        return {}

    try:
        return load_yaml(path) or {}
    except Exception as exc:  # YAML/IO errors fall back to safe defaults
        logger.warning("Failed to load board config from %s: %s", path, exc)
        return {}


def build_board_config(settings: Optional[Dict[str, Any]] = None) -> BoardConfig:
    """
    Construct BoardConfig (including color/UI configs) from settings.

    Args:
        settings: Raw settings dictionary (e.g., from load_board_settings)

    Returns:
        Populated BoardConfig instance

    Raises:
        ValueError: If overridden values are out of range
    """
    settings = settings or {}
    board_overrides = settings.get("board") or {}
    color_overrides = settings.get("colors") or {}
    ui_overrides = settings.get("ui") or {}

    color_config = ColorConfig()
    ui_config = UIConfig()
    board_config = BoardConfig(colors=color_config, ui=ui_config)

    _apply_overrides(color_config, color_overrides)
    _apply_overrides(ui_config, ui_overrides)
    _apply_overrides(board_config, board_overrides)

    # Re-run validation on the overridden values
    color_config.__post_init__()
    board_config.__post_init__()

    return board_config


def load_board_config(config_path: Optional[Path] = None) -> BoardConfig:
    """
    Convenience wrapper to load and build a board config in one call.
    """
    settings = load_board_settings(config_path)
    return build_board_config(settings)
