"""Tests for the local note collection and its optimistic patches."""

from storyboard.board_state import BoardState
from tests.conftest import make_comment, make_note


def test_replace_all_drops_duplicate_ids():
    state = BoardState()

    state.replace_all([make_note("a"), make_note("b"), make_note("a", use_case="dup")])

    assert state.ids() == ["a", "b"]
    assert state.find("a").use_case == "summarise meeting notes"


def test_prepend_puts_created_note_first():
    state = BoardState([make_note("a")])

    state.prepend(make_note("b"))

    assert state.ids() == ["b", "a"]


def test_prepend_replaces_note_already_seen_by_poll():
    state = BoardState([make_note("a"), make_note("b")])

    state.prepend(make_note("b", use_case="fresh"))

    assert state.ids() == ["b", "a"]
    assert state.find("b").use_case == "fresh"


def test_remove_is_immediate_and_closes_detail():
    state = BoardState([make_note("a"), make_note("b")])
    state.select("a")

    assert state.remove("a") is True
    assert state.ids() == ["b"]
    assert state.selected is None
    assert state.remove("a") is False


def test_append_comment_updates_collection_and_detail_copy():
    state = BoardState([make_note("a"), make_note("b")])
    state.select("a")

    state.append_comment("a", make_comment("c1", "A"))
    state.append_comment("a", make_comment("c2", "B"))

    assert [c.text for c in state.find("a").comments] == ["A", "B"]
    assert [c.text for c in state.selected.comments] == ["A", "B"]
    assert state.find("b").comments == []


def test_append_comment_reaches_stale_detail_copy_after_note_left_collection():
    state = BoardState([make_note("a")])
    state.select("a")
    state.replace_all([])

    assert state.append_comment("a", make_comment()) is False
    assert len(state.selected.comments) == 1


def test_comment_list_never_shrinks_on_repeat():
    state = BoardState([make_note("a")])
    comment = make_comment("c1")

    state.append_comment("a", comment)
    state.append_comment("a", comment)

    assert len(state.find("a").comments) == 1


def test_snapshot_does_not_refresh_open_detail():
    state = BoardState([make_note("a", use_case="old")])
    state.select("a")

    state.replace_all([make_note("a", use_case="new")])

    assert state.find("a").use_case == "new"
    assert state.selected.use_case == "old"


def test_move_replaces_note_with_new_position():
    original = make_note("a", x=1, y=2)
    state = BoardState([original])

    moved = state.move("a", 30, 40)

    assert (moved.x, moved.y) == (30, 40)
    assert state.find("a") is moved
    assert (original.x, original.y) == (1, 2)
    assert state.move("missing", 1, 1) is None


def test_listeners_are_notified_until_unsubscribed():
    state = BoardState()
    seen = []
    unsubscribe = state.subscribe(lambda s: seen.append(len(s.notes)))

    state.replace_all([make_note("a")])
    state.prepend(make_note("b"))
    unsubscribe()
    state.remove("a")

    assert seen == [1, 2]


def test_finish_loading_only_once():
    state = BoardState()
    seen = []
    state.subscribe(lambda s: seen.append(s.loading))

    state.finish_loading()
    state.finish_loading()

    assert state.loading is False
    assert seen == [False]
