import pytest

from helpcenter.docentry import DocEntry
from helpcenter.navigator import (
    HOME_URL,
    START_PAGE_NAME,
    START_PAGE_TITLE,
    Navigator,
    NavigatorItem,
    create_children_list,
)


@pytest.fixture
def nav():
    navigator = Navigator()
    apps = NavigatorItem(DocEntry("Apps", "khelpcenter:apps"), navigator.root)
    apps.entry.is_directory = True
    apps.entry.info = "Application manuals"
    NavigatorItem(DocEntry("Editor", "help:/editor"), apps)
    viewer = NavigatorItem(DocEntry("Viewer", "help:/viewer"), apps)
    NavigatorItem(DocEntry("Viewer Intro", "help:/viewer/intro"), viewer)
    NavigatorItem(DocEntry("Manpages", "man:/"), navigator.root)
    return navigator


def test_walk_is_depth_first(nav):
    names = [i.entry.name for i in nav.root.walk()]
    assert names[1:] == ["Apps", "Editor", "Viewer", "Viewer Intro", "Manpages"]


def test_select_exact(nav):
    item = nav.select_item("help:/viewer")
    assert item.entry.name == "Viewer"
    assert nav.current_item is item
    assert nav.selected
    assert item.expanded


def test_select_anchor_form(nav):
    target = NavigatorItem(DocEntry("Anchored", "help:/doc?anchor=sec"), nav.root)
    assert nav.select_item("help:/doc#sec") is target


def test_select_fragment_fallback(nav):
    item = nav.select_item("help:/editor#chapter")
    assert item.entry.name == "Editor"
    assert nav.selected


def test_select_unknown_clears(nav):
    nav.select_item("help:/editor")
    assert nav.select_item("help:/missing") is None
    assert not nav.selected


def test_select_home_clears(nav):
    nav.select_item("help:/editor")
    assert nav.select_item(HOME_URL) is None
    assert not nav.selected


def test_select_already_shown_returns_current(nav):
    first = nav.select_item("help:/editor")
    assert nav.select_item("help:/editor") is first


def test_children_list_depth_limit(nav):
    html = create_children_list(nav.root, 0)
    assert html.startswith("<ul>\n") and html.endswith("</ul>\n")
    assert '<a href="help:/editor">Editor</a>' in html
    assert "Viewer Intro" not in html
    assert '<a href="khelpcenter:apps"><b>Apps</b></a><br>Application manuals' in html


def test_children_list_of_leaf_is_empty_list(nav):
    leaf = nav.top_level_items[1]
    assert create_children_list(leaf, 0) == "<ul>\n</ul>\n"


def test_overview_start_page(nav):
    title, name, content = nav.overview_content()
    assert title == START_PAGE_TITLE
    assert name == START_PAGE_NAME
    assert content == create_children_list(nav.root, 0)


def test_overview_item_with_info(nav):
    apps = nav.top_level_items[0]
    title, name, content = nav.overview_content(apps)
    assert title == name == "Apps"
    assert content.startswith("<p>Application manuals</p>\n<ul>\n")
    assert "Viewer Intro" in content


def test_overview_empty_item(nav):
    leaf = nav.top_level_items[1]
    assert nav.overview_content(leaf)[2] == "<p></p>"


def test_search_result_url(nav):
    assert nav.search_result_url("help:/x?q=%k", "fonts") == "help:/x?q=fonts"
    assert nav.search_result_url("help:/x", "fonts") == "help:/x"
    nav.clear_selection()
    assert not nav.selected