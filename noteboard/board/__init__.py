"""
Board module - note storage, author colors, and rendering.
"""
from .colors import AuthorColorMap, generate_pastel_color
from .store import BoardStore
from .visualizer import BoardRenderer

__all__ = [
    "AuthorColorMap",
    "generate_pastel_color",
    "BoardStore",
    "BoardRenderer",
]
