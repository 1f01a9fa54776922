from __future__ import annotations

from typing import Iterator, List

import pytest

from text_engine import actions
from text_engine.buffer import EditEngine, TextRange
from text_engine.buffer import grapheme as grapheme_module
from text_engine.buffer.grapheme import Grapheme


def make_engine(text: str) -> EditEngine:
    return EditEngine.from_text(text, name="actions")


def test_insert_tab_pads_to_next_stop() -> None:
    engine = make_engine("ab")
    engine.set_tab_width(4)

    actions.insert_tab(engine, (2, 0))

    assert engine.text() == "ab  "


def test_insert_tab_without_expansion() -> None:
    engine = make_engine("ab")
    engine.set_expand_tabs(False)

    actions.insert_tab(engine, (2, 0))

    assert engine.text() == "ab\t"
    with pytest.raises(ValueError):
        engine.set_tab_width(0)


def test_remove_prev_char_joins_lines() -> None:
    engine = make_engine("ab\ncd")

    assert actions.remove_prev_char(engine, (0, 1))
    assert engine.text() == "abcd"
    assert not actions.remove_prev_char(engine, (0, 0))


def test_remove_prev_char_takes_whole_grapheme() -> None:
    engine = make_engine("aö")

    assert actions.remove_prev_char(engine, (2, 0))
    assert engine.text() == "a"


def test_remove_next_char_joins_lines() -> None:
    engine = make_engine("ab\ncd")

    assert actions.remove_next_char(engine, (2, 0))
    assert engine.text() == "abcd"
    assert not actions.remove_next_char(engine, (4, 0))


def test_backspace_at_cursor() -> None:
    engine = make_engine("abc")
    engine.set_cursor((3, 0))

    actions.remove_prev_char(engine)

    assert engine.text() == "ab"
    assert engine.cursor() == (2, 0)


def test_replace_selection() -> None:
    engine = make_engine("hello world")
    engine.set_selection(TextRange((0, 0), (5, 0)))

    actions.replace_selection(engine, "bye")

    assert engine.text() == "bye world"
    assert engine.cursor() == (3, 0)
    assert not engine.has_selection()


def test_insert_text_replaces_selection() -> None:
    engine = make_engine("hello world")
    engine.set_selection(TextRange((6, 0), (11, 0)))

    actions.insert_text(engine, "there")

    assert engine.text() == "hello there"
    assert engine.cursor() == (11, 0)


def test_delete_selection_without_selection_does_nothing() -> None:
    engine = make_engine("abc")

    assert actions.delete_selection(engine) is None
    assert engine.text() == "abc"


def test_word_navigation_on_one_line() -> None:
    engine = make_engine("  hello world  ")

    assert actions.next_word_start(engine, (0, 0)) == (2, 0)
    assert actions.next_word_end(engine, (0, 0)) == (7, 0)
    assert actions.next_word_end(engine, (7, 0)) == (13, 0)
    assert actions.prev_word_start(engine, (13, 0)) == (8, 0)
    assert actions.prev_word_start(engine, (8, 0)) == (2, 0)
    assert actions.prev_word_end(engine, (8, 0)) == (7, 0)
    assert actions.word_start(engine, (4, 0)) == (2, 0)
    assert actions.word_end(engine, (4, 0)) == (7, 0)


def test_word_boundaries() -> None:
    engine = make_engine("  hello world  ")

    assert actions.is_word_boundary(engine, (2, 0))
    assert actions.is_word_boundary(engine, (7, 0))
    assert not actions.is_word_boundary(engine, (3, 0))
    assert not actions.is_word_boundary(engine, (0, 0))


def test_next_word_start_crosses_line_break() -> None:
    engine = make_engine("ab\n  cd")

    assert actions.next_word_start(engine, (2, 0)) == (2, 1)
    assert actions.prev_word_start(engine, (2, 1)) == (0, 0)


def test_word_motions_cross_blank_lines() -> None:
    engine = make_engine("ab\n\n\n  cd")

    assert actions.next_word_start(engine, (2, 0)) == (2, 3)
    assert actions.prev_word_start(engine, (2, 3)) == (0, 0)
    assert actions.prev_word_end(engine, (2, 3)) == (2, 0)
    assert not actions.is_word_boundary(engine, (0, 1))
    assert actions.is_word_boundary(engine, (2, 0))


def test_motions_segment_only_nearby_lines(monkeypatch: pytest.MonkeyPatch) -> None:
    engine = make_engine("".join(f"line {index}\n" for index in range(20_000)))
    engine.set_cursor((3, 10))
    segmented: List[int] = []
    original = grapheme_module.iter_graphemes

    def counting(text: str, offset: int = 0) -> Iterator[Grapheme]:
        segmented.append(len(text))
        return original(text, offset)

    monkeypatch.setattr(grapheme_module, "iter_graphemes", counting)

    for _ in range(20):
        actions.move_right(engine)
    actions.move_word_left(engine)

    assert engine.cursor() == (5, 12)
    assert segmented
    assert sum(segmented) < 1000


def test_cursor_motions() -> None:
    engine = make_engine("ab\ncdef")

    actions.move_right(engine)
    actions.move_right(engine)
    assert engine.cursor() == (2, 0)
    actions.move_right(engine)
    assert engine.cursor() == (0, 1)
    actions.move_left(engine)
    assert engine.cursor() == (2, 0)
    actions.move_down(engine)
    assert engine.cursor() == (2, 1)
    actions.move_line_end(engine)
    assert engine.cursor() == (4, 1)
    actions.move_up(engine)
    assert engine.cursor() == (2, 0)
    actions.move_line_start(engine)
    assert engine.cursor() == (0, 0)
    actions.move_left(engine)
    assert engine.cursor() == (0, 0)


def test_motion_can_extend_selection() -> None:
    engine = make_engine("hello world")

    actions.move_word_right(engine, True)

    assert engine.anchor() == (0, 0)
    assert engine.cursor() == (5, 0)
    assert engine.selected_text() == "hello"

    actions.move_word_left(engine)
    assert engine.cursor() == (0, 0)
    assert not engine.has_selection()
