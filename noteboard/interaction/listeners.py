"""
Process-wide pointer listener slot.

Move and release events must reach a dragged card even when the pointer
leaves the card's bounds, so they are listened for globally, and only
while a drag is active.
"""
from typing import Any, Callable, Optional
import logging

from noteboard.core import Point

logger = logging.getLogger(__name__)

PointerHandler = Callable[[Point], None]


class PointerListenerRegistry:
    """
    Single move/release listener slot for one pointer device.

    At most one owner (a drag controller) holds the slot. The optional
    `install`/`uninstall` hooks connect to the windowing system, e.g.
    tkinter's bind_all/unbind_all, and run exactly once per attach/detach.
    """

    def __init__(
            self,
            install: Optional[Callable[[], None]] = None,
            uninstall: Optional[Callable[[], None]] = None
    ):
        self._install = install
        self._uninstall = uninstall

        self._owner: Optional[Any] = None
        self._on_move: Optional[PointerHandler] = None
        self._on_release: Optional[PointerHandler] = None

        # Statistics
        self.attach_count = 0
        self.detach_count = 0

    @property
    def active_owner(self) -> Optional[Any]:
        return self._owner

    @property
    def is_captured(self) -> bool:
        return self._owner is not None

    def attach(self, owner: Any, on_move: PointerHandler, on_release: PointerHandler) -> bool:
        """
        Give the slot to owner.

        Returns:
            False if a different owner already holds the slot
        """
        if self._owner is not None and self._owner is not owner:
            logger.debug("Pointer already captured, refusing attach")
            return False

        if self._owner is None and self._install:
            self._install()

        self._owner = owner
        self._on_move = on_move
        self._on_release = on_release
        self.attach_count += 1
        return True

    def detach(self, owner: Any) -> None:
        """Release the slot if owner holds it. Safe to call repeatedly."""
        if self._owner is None or self._owner is not owner:
            return

        self._owner = None
        self._on_move = None
        self._on_release = None
        self.detach_count += 1

        if self._uninstall:
            self._uninstall()

    def dispatch_move(self, point: Point) -> None:
        """Deliver a move event to the current owner, if any."""
        if self._on_move is not None:
            self._on_move(point)

    def dispatch_release(self, point: Point) -> None:
        """Deliver a release event to the current owner, if any."""
        if self._on_release is None:
            logger.debug("Release with no active drag ignored")
            return
        self._on_release(point)
