import pytest

from helpcenter.history import POPUP_TITLE_WIDTH, History, HistoryEntry


def _visit(history, url, title):
    history.create_entry()
    history.update_current_entry(url, title)


@pytest.fixture
def three():
    history = History()
    _visit(history, "help:/one", "One")
    _visit(history, "help:/two", "Two")
    _visit(history, "help:/three", "Three")
    return history


def test_empty_history_cannot_move():
    history = History()
    assert not history.can_go_back()
    assert not history.can_go_forward()
    assert history.back() is None
    assert history.current is None


def test_update_without_entries_is_ignored():
    history = History()
    history.update_current_entry("help:/x", "X")
    assert history.entries == []


def test_newest_entry_is_first(three):
    assert [e.url for e in three.entries] == ["help:/three", "help:/two", "help:/one"]
    assert three.current_index == 0
    assert three.can_go_back()
    assert not three.can_go_forward()


def test_back_and_forward(three):
    entry = three.back()
    assert entry.url == "help:/two"
    assert three.can_go_back() and three.can_go_forward()
    assert three.back().url == "help:/one"
    assert not three.can_go_back()
    assert three.back() is None
    assert three.forward().url == "help:/two"
    assert three.forward().url == "help:/three"
    assert three.forward() is None


def test_create_entry_drops_forward_history(three):
    three.back()
    three.create_entry()
    three.update_current_entry("help:/four", "Four")
    assert [e.url for e in three.entries] == ["help:/four", "help:/two", "help:/one"]
    assert not three.can_go_forward()


def test_unvisited_entry_is_reused():
    history = History()
    _visit(history, "help:/a", "A")
    history.create_entry()
    history.create_entry()
    assert len(history.entries) == 2
    assert history.current == HistoryEntry()


def test_unvisited_current_is_dropped_when_moving(three):
    three.create_entry()
    assert len(three.entries) == 4
    entry = three.back()
    assert entry.url == "help:/two"
    assert len(three.entries) == 3


def test_search_flag_is_recorded():
    history = History()
    history.create_entry()
    history.update_current_entry("khelpcenter:search", "Search", search=True)
    assert history.current.search is True
    assert history.current.visited is True


def test_back_popup(three):
    assert three.history_popup(only_back=True) == [(0, "Two", False), (1, "One", False)]


def test_forward_popup(three):
    three.back()
    three.back()
    assert three.history_popup(only_forward=True) == [
        (0, "Two", False),
        (1, "Three", False),
    ]


def test_popup_escapes_ampersand_and_squeezes():
    history = History()
    _visit(history, "help:/a", "Tom & Jerry")
    _visit(history, "help:/b", "a" * 40 + "b" * 40)
    items = history.history_popup()
    texts = [text for _, text, _ in items]
    assert texts[1] == "Tom && Jerry"
    long_text = texts[0]
    assert len(long_text) <= POPUP_TITLE_WIDTH
    assert "..." in long_text
    assert long_text.startswith("a") and long_text.endswith("b")


def test_popup_marks_current_only_in_full_menu(three):
    three.back()
    checked = [text for _, text, flag in three.history_popup() if flag]
    assert checked == ["Two"]
    assert all(not flag for _, _, flag in three.history_popup(only_back=True))


def test_popup_is_limited():
    history = History()
    for n in range(20):
        _visit(history, f"help:/{n}", f"T{n}")
    items = history.history_popup()
    assert len(items) == 11
    assert [data for data, _, _ in items] == list(range(11))


def test_go_menu_small_history(three):
    items = three.go_menu()
    assert items == [(0, "One", False)]
    assert three.go_menu_activated(1).url == "help:/one"


def test_go_menu_ignores_non_positive_index(three):
    three.go_menu()
    assert three.go_menu_activated(0) is None
    assert three.current_index == 0