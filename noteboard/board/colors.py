"""
Per-author pastel colors.
"""
import numpy as np
from typing import Dict, Optional
import logging

from noteboard.core import ColorConfig, HSLColor

logger = logging.getLogger(__name__)


def generate_pastel_color(
        rng: np.random.Generator,
        config: Optional[ColorConfig] = None
) -> HSLColor:
    """
    Random hue with fixed saturation/lightness.

    No collision avoidance: two authors may end up with the same hue.
    """
    config = config or ColorConfig()
    hue = int(rng.integers(0, 360))
    return HSLColor(hue=hue, saturation=config.saturation, lightness=config.lightness)


class AuthorColorMap:
    """
    Lazily populated author -> color mapping.

    A color is generated the first time an author is seen and never
    overwritten afterwards.
    """

    def __init__(
            self,
            rng: Optional[np.random.Generator] = None,
            config: Optional[ColorConfig] = None
    ):
        self.rng = rng if rng is not None else np.random.default_rng()
        self.config = config or ColorConfig()
        self._colors: Dict[str, HSLColor] = {}

    def get(self, author: str) -> Optional[HSLColor]:
        """Stored color, or None for an unknown author."""
        return self._colors.get(author)

    def get_or_assign(self, author: str) -> HSLColor:
        """Insert-if-absent: return the stored color, generating it once."""
        color = self._colors.get(author)
        if color is None:
            color = generate_pastel_color(self.rng, self.config)
            self._colors[author] = color
            logger.debug(f"Assigned {color.css} to {author!r}")
        return color

    def __contains__(self, author: str) -> bool:
        return author in self._colors

    def __len__(self) -> int:
        return len(self._colors)
