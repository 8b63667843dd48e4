"""
Drag state machine for a single card.

State flow:
- IDLE: Waiting for a press on the card
- DRAGGING: Following the pointer, clamped to the board

A press captures the offset between the pointer and the card's top-left.
Every move places the card at pointer - offset, clamped per axis to the
board. The release commits the last clamped position exactly once.
"""
from enum import Enum
from typing import Callable, Optional
import logging

from noteboard.core import (
    BoardError,
    ContentRect,
    Point,
    Size,
    clamp_position,
    to_board_coords,
)
from .listeners import PointerListenerRegistry

logger = logging.getLogger(__name__)


class DragState(Enum):
    """Drag states for a card."""
    IDLE = "idle"  # Awaiting a press
    DRAGGING = "dragging"  # Pointer captured, card follows it


class DragController:
    """
    Converts a pointer event stream into clamped positions for one card.

    The controller never writes to the board store while dragging. The only
    write is `on_commit(note_id, position)` on release.
    """

    def __init__(
            self,
            note_id: int,
            position: Point,
            card_size: Size,
            listeners: PointerListenerRegistry,
            measure_board: Callable[[], Optional[ContentRect]],
            on_commit: Callable[[int, Point], bool],
            on_move: Optional[Callable[[int, Point], None]] = None
    ):
        """
        Initialize controller.

        Args:
            note_id: Card's note id
            position: Card's committed position (board-local)
            card_size: Card size used for clamping
            listeners: Process-wide move/release listener slot
            measure_board: Returns the board content rect, or None if not laid out
            on_commit: Called once per gesture with the final position
            on_move: Called with the live position after each move
        """
        self.note_id = note_id
        self.card_size = card_size
        self.listeners = listeners
        self.measure_board = measure_board
        self.on_commit = on_commit
        self.on_move = on_move

        self.state = DragState.IDLE
        self.position = position

        # Gesture data, only meaningful while dragging
        self.captured_offset: Optional[Point] = None
        self._bounds: Optional[ContentRect] = None

        self.last_error: Optional[BoardError] = None

        # Statistics
        self.drag_count = 0
        self.commit_count = 0

    @property
    def is_dragging(self) -> bool:
        return self.state == DragState.DRAGGING

    def press(self, pointer: Point) -> bool:
        """
        Start a drag.

        Args:
            pointer: Pointer position in client coordinates

        Returns:
            True if the card entered DRAGGING
        """
        if self.state != DragState.IDLE:
            logger.debug(f"Card {self.note_id}: press while dragging ignored")
            return False

        bounds = self.measure_board()
        if bounds is None:
            self.last_error = BoardError.LAYOUT_UNAVAILABLE
            logger.debug(f"Card {self.note_id}: board not measurable, press ignored")
            return False

        if not self.listeners.attach(self, self._handle_move, self._handle_release):
            logger.debug(f"Card {self.note_id}: pointer held by another card")
            return False

        self._bounds = bounds
        self.captured_offset = to_board_coords(pointer, bounds) - self.position
        self.last_error = None
        self._transition_to(DragState.DRAGGING)
        self.drag_count += 1
        return True

    def _handle_move(self, pointer: Point) -> None:
        """Follow the pointer (process-wide move listener)."""
        if self.state != DragState.DRAGGING:
            return

        # Keep the last known bounds if the board is briefly unmeasurable
        bounds = self.measure_board() or self._bounds
        self._bounds = bounds

        raw = to_board_coords(pointer, bounds) - self.captured_offset
        self.position = clamp_position(raw, bounds.size, self.card_size)

        if self.on_move:
            self.on_move(self.note_id, self.position)

    def _handle_release(self, pointer: Point) -> None:
        """Finish the gesture and commit (process-wide release listener)."""
        if self.state != DragState.DRAGGING:
            logger.debug(f"Card {self.note_id}: stale release ignored")
            return

        self._end_gesture()

        final_position = self.position
        self.commit_count += 1
        committed = self.on_commit(self.note_id, final_position)

        logger.debug(
            f"Card {self.note_id}: committed ({final_position.x:.1f}, "
            f"{final_position.y:.1f}) accepted={committed}"
        )

    def teardown(self) -> None:
        """Abort without committing (card removed, window closing)."""
        if self.state == DragState.DRAGGING:
            logger.info(f"Card {self.note_id}: drag torn down without commit")
        self._end_gesture()

    def sync_position(self, position: Point) -> None:
        """Adopt the stored position. Ignored mid-drag."""
        if self.state == DragState.IDLE:
            self.position = position

    def _end_gesture(self) -> None:
        self.listeners.detach(self)
        self.captured_offset = None
        self._bounds = None
        if self.state != DragState.IDLE:
            self._transition_to(DragState.IDLE)

    def _transition_to(self, new_state: DragState) -> None:
        """Transition to new state."""
        logger.debug(f"Card {self.note_id}: {self.state.value} → {new_state.value}")
        self.state = new_state

    def get_stats(self) -> dict:
        """Get controller statistics."""
        return {
            "note_id": self.note_id,
            "current_state": self.state.value,
            "drag_count": self.drag_count,
            "commit_count": self.commit_count,
        }
