from __future__ import annotations

from text_engine.buffer import SelectionModel, TextRange, TextRope


def make_selection(text: str) -> SelectionModel:
    return SelectionModel(TextRope(text))


def test_set_cursor_clamps_to_text() -> None:
    model = make_selection("ab\ncdef")

    assert model.set_cursor((10, 1))
    assert model.cursor == (4, 1)
    assert not model.set_cursor((10, 5))
    assert model.set_cursor((9, 0))
    assert model.cursor == (3, 0)


def test_extending_keeps_anchor() -> None:
    model = make_selection("ab\ncdef")
    model.set_cursor((1, 0))

    model.set_cursor((2, 1), True)

    assert model.anchor == (1, 0)
    assert model.cursor == (2, 1)
    assert model.has_selection()
    assert model.selection() == TextRange((1, 0), (2, 1))


def test_backward_selection_is_ordered() -> None:
    model = make_selection("ab\ncdef")
    model.set_cursor((2, 1))

    model.set_cursor((1, 0), True)

    assert model.selection() == TextRange((1, 0), (2, 1))


def test_set_selection_reports_change() -> None:
    model = make_selection("hello")

    assert model.set_selection(TextRange((1, 0), (3, 0)))
    assert not model.set_selection(TextRange((1, 0), (3, 0)))
    assert model.anchor == (1, 0)
    assert model.cursor == (3, 0)


def test_select_all_runs_to_end_of_last_line() -> None:
    model = make_selection("ab\ncd")

    assert model.select_all()

    assert model.anchor == (0, 0)
    assert model.cursor == (2, 1)
    assert not model.select_all()


def test_clear_selection_collapses_to_cursor() -> None:
    model = make_selection("hello")
    model.set_selection(TextRange((1, 0), (4, 0)))

    assert model.clear_selection()

    assert not model.has_selection()
    assert model.anchor == (4, 0)


def test_expand_and_shrink_follow_edits() -> None:
    model = make_selection("hello world")
    model.set_selection(TextRange((6, 0), (11, 0)))

    model.expand(TextRange((0, 0), (2, 0)))
    assert model.selection() == TextRange((8, 0), (13, 0))

    model.shrink(TextRange((9, 0), (13, 0)))
    assert model.selection() == TextRange((8, 0), (9, 0))
