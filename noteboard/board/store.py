"""
Board state management.

Holds the notes, the author registry, per-author colors and the author
filter. All transitions are synchronous and invoked from user-action
handlers only.
"""
from datetime import date
from typing import Callable, Dict, List, Optional
import numpy as np
import logging

from noteboard.core import (
    BoardConfig,
    BoardError,
    HSLColor,
    Note,
    Point,
    Size,
    random_position,
)
from .colors import AuthorColorMap

logger = logging.getLogger(__name__)


class BoardStore:
    """
    Authoritative board state.

    Notes are kept in creation order; filtering never reorders them.
    """

    def __init__(
            self,
            config: Optional[BoardConfig] = None,
            rng: Optional[np.random.Generator] = None,
            today: Callable[[], date] = date.today
    ):
        """
        Initialize an empty board.

        Args:
            config: Card geometry and color settings
            rng: Random generator for colors, positions and rotations
            today: Clock used for note creation dates
        """
        self.config = config or BoardConfig()
        self.rng = rng if rng is not None else np.random.default_rng()
        self.today = today

        self._notes: List[Note] = []
        self._index: Dict[int, Note] = {}
        self._authors: List[str] = []
        self.colors = AuthorColorMap(self.rng, self.config.colors)
        self._selection: Optional[str] = None
        self._next_id = 1

        self.last_error: Optional[BoardError] = None

        logger.info(
            f"BoardStore initialized: card={self.config.card_width}x"
            f"{self.config.card_height}, rotation=±{self.config.max_rotation_deg}°"
        )

    @property
    def card_size(self) -> Size:
        return self.config.card_size

    @property
    def notes(self) -> List[Note]:
        """All notes in creation order (copy of the list)."""
        return list(self._notes)

    @property
    def authors(self) -> List[str]:
        """Author registry in first-seen order (copy of the list)."""
        return list(self._authors)

    @property
    def selection(self) -> Optional[str]:
        return self._selection

    @property
    def note_count(self) -> int:
        return len(self._notes)

    def post_message(self, author: str, text: str, board_content_size: Size) -> Optional[Note]:
        """
        Create a note at a random position on the board.

        Args:
            author: Author name (trimmed here)
            text: Message text (trimmed here)
            board_content_size: Current board content size

        Returns:
            The new note, or None if author or text is empty
        """
        author = (author or "").strip()
        text = (text or "").strip()

        if not author or not text:
            self.last_error = BoardError.INVALID_INPUT
            logger.debug("Ignoring post with empty author or text")
            return None

        if author not in self._authors:
            self._authors.append(author)
            logger.info(f"New author: {author}")
        color = self.colors.get_or_assign(author)

        max_rotation = self.config.max_rotation_deg
        note = Note(
            id=self._next_id,
            author=author,
            text=text,
            created_date=self.today(),
            rotation_degrees=float(self.rng.uniform(-max_rotation, max_rotation)),
            position=random_position(self.rng, board_content_size, self.card_size),
            color=color,
        )
        self._next_id += 1

        self._notes.append(note)
        self._index[note.id] = note
        self.last_error = None

        logger.debug(
            f"Note {note.id} posted by {author} at "
            f"({note.position.x:.1f}, {note.position.y:.1f})"
        )
        return note

    def set_selection(self, author: Optional[str]) -> None:
        """Replace the author filter (None shows every note)."""
        if author is not None and author not in self._authors:
            logger.debug(f"Selecting unknown author {author!r}")
        self._selection = author

    def toggle_selection(self, author: str) -> Optional[str]:
        """
        Select an author, or clear the filter if already selected.

        Returns:
            The selection after the toggle
        """
        if self._selection == author:
            self.set_selection(None)
        else:
            self.set_selection(author)
        return self._selection

    def clear_selection(self) -> None:
        """Show every note again."""
        self.set_selection(None)

    def commit_position(self, note_id: int, new_position: Point) -> bool:
        """
        Store a note's final drag position verbatim.

        The drag controller clamps before committing; no re-clamp here.

        Returns:
            True if stored, False if the note does not exist
        """
        note = self._index.get(note_id)
        if note is None:
            self.last_error = BoardError.NOT_FOUND
            logger.warning(f"Dropping position commit for unknown note {note_id}")
            return False

        note.position = new_position
        self.last_error = None
        return True

    def visible_notes(self) -> List[Note]:
        """Notes passing the author filter, in creation order."""
        if self._selection is None:
            return list(self._notes)
        return [note for note in self._notes if note.author == self._selection]

    def get_note(self, note_id: int) -> Optional[Note]:
        return self._index.get(note_id)

    def color_for(self, author: str) -> Optional[HSLColor]:
        return self.colors.get(author)

    def note_at(self, point: Point, card_size: Optional[Size] = None) -> Optional[Note]:
        """
        Topmost visible note under a board-local point.

        Later notes are drawn on top, so they are tested first. Rotation is
        ignored.
        """
        card_size = card_size or self.card_size
        for note in reversed(self.visible_notes()):
            if note.contains(point, card_size):
                return note
        return None

    @property
    def filter_title(self) -> Optional[str]:
        """Heading shown above a filtered board."""
        if self._selection is None:
            return None
        return f"Messages from {self._selection}"
