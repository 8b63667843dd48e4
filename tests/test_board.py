"""
Unit tests for board module.
"""
import numpy as np
from datetime import date
import pytest

from noteboard.core import BoardConfig, BoardError, HSLColor, Note, Point, Size
from noteboard.board import AuthorColorMap, BoardRenderer, BoardStore, generate_pastel_color


BOARD = Size(1000, 800)


def make_store(seed: int = 7, **kwargs) -> BoardStore:
    return BoardStore(
        rng=np.random.default_rng(seed),
        today=lambda: date(2024, 5, 17),
        **kwargs
    )


def test_post_message_scenario():
    """Alice, Bob, Alice: registry order, shared colors, filtered view."""
    store = make_store()

    n1 = store.post_message("Alice", "hi", BOARD)
    n2 = store.post_message("Bob", "yo", BOARD)
    n3 = store.post_message("Alice", "again", BOARD)

    assert store.authors == ["Alice", "Bob"]
    assert n1.color == n3.color
    assert n2.color == store.color_for("Bob")

    store.set_selection("Alice")
    assert [n.id for n in store.visible_notes()] == [n1.id, n3.id]


def test_post_message_assigns_fields():
    """Ids, trimming, date, rotation and position are assigned."""
    store = make_store()

    note = store.post_message("  Alice ", "  hello world  ", BOARD)

    assert note.id == 1
    assert note.author == "Alice"
    assert note.text == "hello world"
    assert note.created_date == date(2024, 5, 17)
    assert note.date_label == "2024-05-17"
    assert -3.0 <= note.rotation_degrees <= 3.0
    assert 0 <= note.position.x <= 750
    assert 0 <= note.position.y <= 550
    assert note.color.saturation == 70
    assert note.color.lightness == 80
    assert 0 <= note.color.hue < 360
    assert store.last_error is None


def test_post_message_counts():
    """New author grows the registry by one, known author does not."""
    store = make_store()
    store.post_message("Alice", "one", BOARD)

    color = store.color_for("Alice")
    notes_before = store.note_count

    store.post_message("Alice", "two", BOARD)
    assert store.note_count == notes_before + 1
    assert store.authors == ["Alice"]
    assert store.notes[-1].color == color

    store.post_message("Carol", "three", BOARD)
    assert store.note_count == notes_before + 2
    assert store.authors == ["Alice", "Carol"]


@pytest.mark.parametrize("author,text", [
    ("", "hi"),
    ("Alice", ""),
    ("   ", "hi"),
    ("Alice", "\t \n"),
    (None, "hi"),
])
def test_post_message_invalid_input(author, text):
    """Empty author or text after trimming leaves state unchanged."""
    store = make_store()
    store.post_message("Bob", "first", BOARD)
    before = (store.notes, store.authors, len(store.colors))

    result = store.post_message(author, text, BOARD)

    assert result is None
    assert store.last_error == BoardError.INVALID_INPUT
    assert (store.notes, store.authors, len(store.colors)) == before


def test_ids_are_monotonic():
    """Ids increase in creation order and are never reused."""
    store = make_store()

    ids = [store.post_message("A", f"msg {i}", BOARD).id for i in range(5)]

    assert ids == sorted(ids)
    assert len(set(ids)) == 5


def test_small_board_places_at_origin():
    """Board smaller than a card places notes at (0, 0)."""
    store = make_store()

    note = store.post_message("Alice", "hi", Size(100, 120))

    assert note.position == Point(0.0, 0.0)


def test_rotation_range_from_config():
    """Rotation follows the configured range."""
    store = make_store(config=BoardConfig(max_rotation_deg=0.0))

    note = store.post_message("Alice", "hi", BOARD)

    assert note.rotation_degrees == 0.0


def test_toggle_selection():
    """Selecting the same author twice clears the filter."""
    store = make_store()
    store.post_message("Alice", "hi", BOARD)
    store.post_message("Bob", "yo", BOARD)

    assert store.toggle_selection("Alice") == "Alice"
    assert store.toggle_selection("Alice") is None

    # Selecting another author replaces the filter
    store.toggle_selection("Alice")
    assert store.toggle_selection("Bob") == "Bob"

    store.clear_selection()
    assert store.selection is None


def test_visible_notes_without_selection():
    """No filter returns all notes in creation order, repeatably."""
    store = make_store()
    for author in ["Bob", "Alice", "Bob", "Carol"]:
        store.post_message(author, "text", BOARD)

    first = [n.id for n in store.visible_notes()]
    second = [n.id for n in store.visible_notes()]

    assert first == second == [1, 2, 3, 4]


def test_visible_notes_unknown_author():
    """Filtering by an author without notes shows nothing."""
    store = make_store()
    store.post_message("Alice", "hi", BOARD)

    store.set_selection("Nobody")

    assert store.visible_notes() == []
    assert store.note_count == 1


def test_filter_title():
    """Heading reflects the active filter."""
    store = make_store()
    assert store.filter_title is None

    store.set_selection("Alice")
    assert store.filter_title == "Messages from Alice"


def test_commit_position():
    """Commit overwrites verbatim and touches only the named note."""
    store = make_store()
    n1 = store.post_message("Alice", "hi", BOARD)
    n2 = store.post_message("Bob", "yo", BOARD)
    n2_position = n2.position

    assert store.commit_position(n1.id, Point(12.5, 40.0))

    assert store.get_note(n1.id).position == Point(12.5, 40.0)
    assert store.get_note(n2.id).position == n2_position


def test_commit_position_unknown_note():
    """Unknown ids are dropped without touching other notes."""
    store = make_store()
    note = store.post_message("Alice", "hi", BOARD)
    position = note.position

    assert not store.commit_position(999, Point(1, 1))

    assert store.last_error == BoardError.NOT_FOUND
    assert store.get_note(note.id).position == position


def test_note_at_prefers_topmost():
    """Hit-testing returns the latest visible note under the point."""
    store = make_store()
    n1 = store.post_message("Alice", "bottom", BOARD)
    n2 = store.post_message("Bob", "top", BOARD)
    store.commit_position(n1.id, Point(0, 0))
    store.commit_position(n2.id, Point(100, 100))

    assert store.note_at(Point(150, 150)).id == n2.id
    assert store.note_at(Point(50, 50)).id == n1.id
    assert store.note_at(Point(900, 700)) is None

    # Hidden notes cannot be hit
    store.set_selection("Alice")
    assert store.note_at(Point(150, 150)).id == n1.id


def test_author_color_map_insert_if_absent():
    """Colors are generated once per author and never overwritten."""
    colors = AuthorColorMap(np.random.default_rng(1))

    first = colors.get_or_assign("Alice")
    again = colors.get_or_assign("Alice")

    assert first is again
    assert "Alice" in colors
    assert colors.get("Bob") is None
    assert len(colors) == 1


def test_generate_pastel_color_range():
    """Hues cover [0, 360) with fixed tone."""
    rng = np.random.default_rng(3)

    hues = [generate_pastel_color(rng).hue for _ in range(500)]

    assert min(hues) >= 0
    assert max(hues) < 360
    assert len(set(hues)) > 50


def test_renderer_draws_cards():
    """Rendered image has the board size and the card color at the card centre."""
    renderer = BoardRenderer(Size(200, 200))
    color = HSLColor(hue=120)
    note = Note(
        id=1, author="Alice", text="hi", created_date=date(2024, 1, 1),
        rotation_degrees=0.0, position=Point(50, 60), color=color
    )

    image = renderer.render([note], Size(640, 480))

    assert image.shape == (480, 640, 3)
    assert tuple(image[5, 600]) == BoardRenderer.COLORS["background"]
    assert tuple(image[160, 150]) == color.to_bgr()


def test_renderer_live_position_override():
    """Live drag positions take precedence over committed ones."""
    renderer = BoardRenderer(Size(100, 100))
    color = HSLColor(hue=0, saturation=100, lightness=50)
    note = Note(
        id=7, author="A", text="x", created_date=date(2024, 1, 1),
        rotation_degrees=0.0, position=Point(0, 0), color=color
    )

    image = renderer.render(
        [note], Size(400, 400),
        live_positions={7: Point(250, 250)},
        title="Messages from A",
        dragging_id=7
    )

    assert tuple(image[300, 300]) == color.to_bgr()
    assert tuple(image[390, 50]) == BoardRenderer.COLORS["background"]
