from __future__ import annotations

from text_engine.buffer import StyleMap, TextRange


def make_range(start: tuple[int, int], end: tuple[int, int]) -> TextRange:
    return TextRange(start, end)  # type: ignore[arg-type]


def make_map(*entries: tuple[tuple[int, int], tuple[int, int], int]) -> StyleMap:
    styles = StyleMap()
    for start, end, style in entries:
        styles.add_style(make_range(start, end), style)
    return styles


def test_add_style_ignores_duplicates() -> None:
    styles = StyleMap()

    assert styles.add_style(make_range((0, 0), (2, 0)), 1)
    assert not styles.add_style(make_range((0, 0), (2, 0)), 1)
    assert styles.add_style(make_range((0, 0), (2, 0)), 2)
    assert len(styles) == 2


def test_styles_stay_sorted_by_range() -> None:
    styles = make_map(((3, 1), (4, 1), 1), ((0, 0), (2, 0), 2), ((5, 0), (1, 1), 3))

    assert [style for _, style in styles.styles()] == [2, 3, 1]


def test_remove_style() -> None:
    styles = make_map(((0, 0), (2, 0), 1))

    assert not styles.remove_style(make_range((0, 0), (2, 0)), 9)
    assert styles.remove_style(make_range((0, 0), (2, 0)), 1)
    assert len(styles) == 0


def test_styles_at_collects_overlapping_ranges() -> None:
    styles = make_map(
        ((0, 0), (5, 0), 2),
        ((2, 0), (3, 0), 1),
        ((2, 0), (3, 0), 3),
        ((4, 0), (6, 0), 4),
    )

    assert styles.styles_at((2, 0)) == [1, 2, 3]
    assert styles.styles_at((3, 0)) == [2]
    assert styles.styles_at((4, 0)) == [2, 4]
    assert styles.styles_at((5, 0)) == [4]
    assert styles.styles_at((6, 0)) == []


def test_styles_at_sees_long_range_that_starts_early() -> None:
    styles = make_map(((0, 0), (0, 5), 7), ((1, 0), (2, 0), 8), ((0, 2), (1, 2), 9))

    assert styles.styles_at((0, 3)) == [7]
    assert styles.styles_at((1, 0)) == [7, 8]
    assert styles.styles_at((0, 2)) == [7, 9]


def test_styles_at_range_returns_intersecting_entries() -> None:
    styles = make_map(((0, 0), (2, 0), 1), ((3, 0), (5, 0), 2), ((0, 1), (3, 1), 3))

    found = styles.styles_at_range(make_range((1, 0), (4, 0)))
    assert [style for _, style in found] == [1, 2]
    assert styles.styles_at_range(make_range((2, 0), (3, 0))) == []


def test_styles_after_mut_starts_at_first_reaching_entry() -> None:
    styles = make_map(((0, 0), (9, 0), 1), ((1, 0), (2, 0), 2), ((4, 0), (5, 0), 3))

    tail = styles.styles_after_mut((6, 0))
    assert tail.start == 0
    assert len(tail) == 3

    styles = make_map(((0, 0), (1, 0), 1), ((4, 0), (5, 0), 2))
    tail = styles.styles_after_mut((3, 0))
    assert [style for _, style in tail] == [2]


def test_expand_moves_ranges_at_and_after_insertion() -> None:
    styles = make_map(((0, 0), (0, 5), 7), ((1, 0), (2, 0), 8))

    styles.expand(make_range((1, 0), (2, 0)))

    assert styles.styles() == (
        (make_range((0, 0), (0, 5)), 7),
        (make_range((2, 0), (3, 0)), 8),
    )


def test_expand_reaches_long_range_ending_after_insertion() -> None:
    styles = make_map(((0, 0), (9, 0), 1), ((1, 0), (2, 0), 2))

    styles.expand(make_range((5, 0), (7, 0)))

    assert styles.styles() == (
        (make_range((0, 0), (11, 0)), 1),
        (make_range((1, 0), (2, 0)), 2),
    )


def test_shrink_moves_ranges_and_merges_duplicates() -> None:
    styles = make_map(((0, 0), (9, 0), 1), ((4, 0), (6, 0), 2), ((2, 0), (3, 0), 2))

    styles.shrink(make_range((2, 0), (6, 0)))

    assert styles.styles() == (
        (make_range((0, 0), (5, 0)), 1),
        (make_range((2, 0), (2, 0)), 2),
    )


def test_drop_contained_removes_only_enclosed_entries() -> None:
    styles = make_map(((2, 0), (3, 0), 1), ((1, 0), (5, 0), 2), ((1, 0), (4, 0), 3))

    assert styles.drop_contained(make_range((1, 0), (4, 0))) == 2
    assert styles.styles() == ((make_range((1, 0), (5, 0)), 2),)


def test_clear_styles() -> None:
    styles = make_map(((0, 0), (1, 0), 1))

    styles.clear_styles()

    assert len(styles) == 0
    assert styles.styles_at((0, 0)) == []
