"""
Wiring between the board store, drag controllers and a front end.
"""
from typing import Callable, Dict, Optional
import logging

from noteboard.board import BoardStore
from noteboard.core import (
    BoardError,
    ContentRect,
    Note,
    Point,
    card_transform,
    to_board_coords,
)
from .drag_state import DragController
from .listeners import PointerListenerRegistry

logger = logging.getLogger(__name__)


class BoardInteraction:
    """
    Front-end facing board session.

    Owns one DragController per card and routes raw pointer events to them.
    The front end supplies `measure_board` and renders whatever
    `live_position` reports.
    """

    def __init__(
            self,
            store: BoardStore,
            measure_board: Callable[[], Optional[ContentRect]],
            listeners: Optional[PointerListenerRegistry] = None,
            on_change: Optional[Callable[[], None]] = None
    ):
        """
        Initialize session.

        Args:
            store: Board state store
            measure_board: Returns the board content rect, or None if not laid out
            listeners: Pointer listener slot (one per pointer device)
            on_change: Called whenever something visible changed
        """
        self.store = store
        self.measure_board = measure_board
        self.listeners = listeners or PointerListenerRegistry()
        self.on_change = on_change

        self.controllers: Dict[int, DragController] = {}
        self.last_error: Optional[BoardError] = None

    def _notify(self) -> None:
        if self.on_change:
            self.on_change()

    def post_message(self, author: str, text: str) -> Optional[Note]:
        """Post a message at a random position on the measured board."""
        bounds = self.measure_board()
        if bounds is None:
            self.last_error = BoardError.LAYOUT_UNAVAILABLE
            logger.info("Board not laid out yet, message dropped")
            return None

        note = self.store.post_message(author, text, bounds.size)
        self.last_error = self.store.last_error
        if note is not None:
            self._notify()
        return note

    def toggle_author(self, author: str) -> Optional[str]:
        """Toggle the author filter and drop controllers of hidden cards."""
        selection = self.store.toggle_selection(author)
        self.sync_visible()
        return selection

    def clear_filter(self) -> None:
        self.store.clear_selection()
        self.sync_visible()

    def controller_for(self, note: Note) -> DragController:
        """Get or create the card's controller."""
        controller = self.controllers.get(note.id)
        if controller is None:
            controller = DragController(
                note_id=note.id,
                position=note.position,
                card_size=self.store.card_size,
                listeners=self.listeners,
                measure_board=self.measure_board,
                on_commit=self._commit,
                on_move=self._moved,
            )
            self.controllers[note.id] = controller
        return controller

    def press_at(self, pointer: Point) -> Optional[int]:
        """
        Start dragging the topmost visible card under the pointer.

        Args:
            pointer: Pointer position in client coordinates

        Returns:
            Id of the card now being dragged, or None
        """
        bounds = self.measure_board()
        if bounds is None:
            self.last_error = BoardError.LAYOUT_UNAVAILABLE
            return None

        note = self.store.note_at(to_board_coords(pointer, bounds))
        if note is None:
            return None

        controller = self.controller_for(note)
        controller.sync_position(note.position)
        if not controller.press(pointer):
            self.last_error = controller.last_error
            return None

        self._notify()
        return note.id

    def pointer_move(self, pointer: Point) -> None:
        self.listeners.dispatch_move(pointer)

    def pointer_release(self, pointer: Point) -> None:
        self.listeners.dispatch_release(pointer)

    @property
    def dragging_id(self) -> Optional[int]:
        owner = self.listeners.active_owner
        return owner.note_id if isinstance(owner, DragController) else None

    def live_position(self, note_id: int) -> Optional[Point]:
        """Where the card should be drawn right now."""
        controller = self.controllers.get(note_id)
        if controller is not None and controller.is_dragging:
            return controller.position
        note = self.store.get_note(note_id)
        return note.position if note else None

    def live_positions(self) -> Dict[int, Point]:
        """Live positions of cards currently being dragged."""
        return {
            note_id: controller.position
            for note_id, controller in self.controllers.items()
            if controller.is_dragging
        }

    def sync_visible(self) -> None:
        """Tear down controllers of hidden cards, resync the rest."""
        visible = {note.id: note for note in self.store.visible_notes()}

        for note_id in list(self.controllers):
            controller = self.controllers[note_id]
            note = visible.get(note_id)
            if note is None:
                controller.teardown()
                del self.controllers[note_id]
            else:
                controller.sync_position(note.position)

        self._notify()

    def teardown(self) -> None:
        """End any active drag without committing (window closing)."""
        for controller in self.controllers.values():
            controller.teardown()
        self.controllers.clear()

    def _moved(self, note_id: int, position: Point) -> None:
        self._notify()

    def _commit(self, note_id: int, position: Point) -> bool:
        committed = self.store.commit_position(note_id, position)
        if committed:
            logger.debug(f"Note {note_id}: {card_transform(self.store.get_note(note_id))}")
        else:
            self.last_error = self.store.last_error
        self._notify()
        return committed
