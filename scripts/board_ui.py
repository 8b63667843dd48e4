"""
Post-it message board GUI.

Features:
- Authors sidebar: click an author to filter, click again to clear
- Board: cards at random positions, drag to move
- New message sidebar: name + message, Enter or button to post

Usage:
    python scripts/board_ui.py
    python scripts/board_ui.py --config config/default_config.yaml -v
"""
import cv2
import sys
import argparse
from pathlib import Path
import tkinter as tk
from tkinter import ttk
from PIL import Image, ImageTk

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from noteboard.board import BoardRenderer, BoardStore
from noteboard.core import (
    BoardConfig,
    ContentRect,
    Point,
    load_board_config,
    optional_size,
)
from noteboard.interaction import BoardInteraction, PointerListenerRegistry
import logging

logger = logging.getLogger(__name__)


class AuthorPanel(ttk.Frame):
    """Left sidebar: author list and filter controls."""

    def __init__(self, parent, session: BoardInteraction):
        super().__init__(parent, padding=10)
        self.session = session

        ttk.Label(self, text="Users", font=("Arial", 16, "bold")).pack(anchor="w", pady=(0, 10))

        self.listbox = tk.Listbox(
            self,
            font=("Arial", 12),
            activestyle="none",
            exportselection=False
        )
        self.listbox.pack(fill="both", expand=True)
        self.listbox.bind("<<ListboxSelect>>", self._on_select)

        self.clear_button = ttk.Button(self, text="Clear Filter", command=self._clear)

    def refresh(self):
        """Redraw the author list from the store."""
        store = self.session.store
        self.listbox.delete(0, tk.END)

        for idx, author in enumerate(store.authors):
            self.listbox.insert(tk.END, author)
            if author == store.selection:
                background = "#b3e0ff"
            else:
                background = store.color_for(author).to_hex()
            self.listbox.itemconfig(idx, background=background, foreground="black")

        if store.selection is not None:
            self.clear_button.pack(fill="x", pady=(10, 0))
        else:
            self.clear_button.pack_forget()

    def _on_select(self, event):
        selected = self.listbox.curselection()
        if not selected:
            return
        author = self.listbox.get(selected[0])
        self.listbox.selection_clear(0, tk.END)
        self.session.toggle_author(author)

    def _clear(self):
        self.session.clear_filter()


class MessageForm(ttk.Frame):
    """Right sidebar: new message input."""

    def __init__(self, parent, session: BoardInteraction):
        super().__init__(parent, padding=10)
        self.session = session

        ttk.Label(self, text="New Message", font=("Arial", 16, "bold")).pack(anchor="w", pady=(0, 10))

        ttk.Label(self, text="Your Name").pack(anchor="w")
        self.name_entry = ttk.Entry(self)
        self.name_entry.pack(fill="x", pady=(0, 5))

        ttk.Label(self, text="Your Message").pack(anchor="w")
        self.message_entry = ttk.Entry(self)
        self.message_entry.pack(fill="x", pady=(0, 5))
        self.message_entry.bind("<Return>", lambda e: self._submit())

        ttk.Button(self, text="Add Message", command=self._submit).pack(fill="x")

    def _submit(self):
        note = self.session.post_message(self.name_entry.get(), self.message_entry.get())
        if note is None:
            # Invalid input keeps the fields as typed
            return

        self.name_entry.delete(0, tk.END)
        self.message_entry.delete(0, tk.END)
        logger.info(f"{note.author} posted note {note.id}")


class BoardCanvas(tk.Canvas):
    """Board surface: renders cards and feeds pointer events to the session."""

    def __init__(self, parent, config: BoardConfig):
        super().__init__(parent, bg=config.ui.background, highlightthickness=0)
        self.renderer = BoardRenderer(config.card_size)
        self.session = None
        self._photo = None

        self.bind("<ButtonPress-1>", self._on_press)
        self.bind("<Configure>", lambda e: self.redraw())

    def measure(self):
        """Board content rect in screen coordinates, or None before layout."""
        if not self.winfo_ismapped():
            return None
        size = optional_size(self.winfo_width(), self.winfo_height())
        if size is None or size.width <= 1 or size.height <= 1:
            return None
        return ContentRect(
            size=size,
            origin=Point(float(self.winfo_rootx()), float(self.winfo_rooty())),
            scroll=Point(float(self.canvasx(0)), float(self.canvasy(0))),
        )

    def install_drag_listeners(self):
        """Listen to pointer motion/release application-wide."""
        self.bind_all("<B1-Motion>", self._on_motion)
        self.bind_all("<ButtonRelease-1>", self._on_release)

    def uninstall_drag_listeners(self):
        self.unbind_all("<B1-Motion>")
        self.unbind_all("<ButtonRelease-1>")

    def redraw(self):
        """Render the visible notes."""
        if self.session is None:
            return
        bounds = self.measure()
        if bounds is None:
            return

        store = self.session.store
        image = self.renderer.render(
            store.visible_notes(),
            bounds.size,
            live_positions=self.session.live_positions(),
            title=store.filter_title,
            dragging_id=self.session.dragging_id
        )

        # Convert for Tkinter
        image_rgb = cv2.cvtColor(image, cv2.COLOR_BGR2RGB)
        self._photo = ImageTk.PhotoImage(image=Image.fromarray(image_rgb))
        self.delete("all")
        self.create_image(bounds.scroll.x, bounds.scroll.y, image=self._photo, anchor="nw")

    @staticmethod
    def _screen_point(event) -> Point:
        return Point(float(event.x_root), float(event.y_root))

    def _on_press(self, event):
        self.session.press_at(self._screen_point(event))

    def _on_motion(self, event):
        self.session.pointer_move(self._screen_point(event))

    def _on_release(self, event):
        self.session.pointer_release(self._screen_point(event))


class MessageBoardApp(tk.Tk):
    """Main application window."""

    def __init__(self, config: BoardConfig):
        super().__init__()

        self.title("Message Board")
        self.geometry(f"{config.ui.window_width}x{config.ui.window_height}")

        self.canvas = BoardCanvas(self, config)
        listeners = PointerListenerRegistry(
            install=self.canvas.install_drag_listeners,
            uninstall=self.canvas.uninstall_drag_listeners
        )
        self.session = BoardInteraction(
            BoardStore(config),
            measure_board=self.canvas.measure,
            listeners=listeners,
            on_change=self._refresh
        )
        self.canvas.session = self.session

        self.authors = AuthorPanel(self, self.session)
        self.form = MessageForm(self, self.session)

        self.authors.configure(width=config.ui.sidebar_width)
        self.form.configure(width=config.ui.sidebar_width)
        self.authors.pack(side="left", fill="y")
        self.authors.pack_propagate(False)
        self.form.pack(side="right", fill="y")
        self.form.pack_propagate(False)
        self.canvas.pack(side="left", fill="both", expand=True)

        self.protocol("WM_DELETE_WINDOW", self._on_closing)

    def _refresh(self):
        self.authors.refresh()
        self.canvas.redraw()

    def _on_closing(self):
        """Handle window close."""
        self.session.teardown()
        self.destroy()


def parse_args():
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Post-it message board with draggable cards"
    )

    parser.add_argument(
        "--config",
        type=str,
        default="config/default_config.yaml",
        help="Board configuration file"
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging"
    )

    return parser.parse_args()


def main():
    """Run message board application."""
    args = parse_args()

    # Setup logging
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    try:
        config = load_board_config(Path(args.config))
    except ValueError as e:
        logger.error(f"Invalid board configuration: {e}")
        return

    app = MessageBoardApp(config)
    app.mainloop()


if __name__ == "__main__":
    main()
