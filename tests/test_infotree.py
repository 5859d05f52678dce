import pytest

from helpcenter.infotree import InfoTree

DIR_FILE = """This is the info directory.
It lists the manuals.

* Menu:

Development
* Make: (make)Overview.       GNU make.
* Gdb: (gdb).                 The GNU debugger.

Text
* Sed: (sed).     Stream editor.
* gawk: (gawk).   Pattern scanning.
"""


@pytest.fixture(autouse=True)
def no_infopath(monkeypatch):
    monkeypatch.delenv("INFOPATH", raising=False)


@pytest.fixture
def info_dir(tmp_path):
    directory = tmp_path / "info"
    directory.mkdir()
    (directory / "dir").write_text(DIR_FILE, encoding="utf-8")
    return directory


def _urls(item):
    return {child.name: child.entry.url for child in item.children}


def test_categories_are_read_and_sorted(info_dir):
    tree = InfoTree()
    alphab, categories = tree.build([info_dir])
    assert [c.name for c in categories.children] == ["Development", "Text"]
    assert alphab is tree.alphab_item


def test_node_urls(info_dir):
    tree = InfoTree()
    tree.build([info_dir])
    development = tree.category_item.children[0]
    assert [c.name for c in development.children] == ["Gdb", "Make"]
    urls = _urls(development)
    assert urls["Gdb"] == "info:/gdb/Top"
    assert urls["Make"] == "info:/make/Overview"


def test_alphabetical_sections(info_dir):
    tree = InfoTree()
    tree.build([info_dir])
    sections = {s.name: [c.name for c in s.children] for s in tree.alphab_item.children}
    assert list(sections) == sorted(sections)
    assert sections["G"] == ["Gdb", "gawk"]
    assert sections["S"] == ["Sed"]


def test_every_node_listed_in_both_views(info_dir):
    tree = InfoTree()
    tree.build([info_dir])
    by_category = sorted(n.name for c in tree.category_item.children for n in c.children)
    by_letter = sorted(n.name for s in tree.alphab_item.children for n in s.children)
    assert by_category == by_letter


def test_missing_paths_give_empty_tree(tmp_path):
    tree = InfoTree()
    alphab, categories = tree.build([tmp_path / "nowhere"])
    assert alphab.children == []
    assert categories.children == []


def test_infopath_is_searched(info_dir, monkeypatch):
    monkeypatch.setenv("INFOPATH", str(info_dir))
    tree = InfoTree()
    tree.build([])
    assert len(tree.category_item.children) == 2


def test_build_twice_does_not_duplicate(info_dir):
    tree = InfoTree()
    tree.build([info_dir])
    tree.build([info_dir])
    assert len(tree.category_item.children) == 2


def test_parse_unreadable_file_is_ignored(tmp_path):
    tree = InfoTree()
    tree.parse_info_dir_file(tmp_path / "missing")
    assert tree.category_item.children == []


def test_intro_without_menu_adds_nothing(tmp_path):
    path = tmp_path / "dir"
    path.write_text("Only a blurb\nand nothing else\n", encoding="utf-8")
    tree = InfoTree()
    tree.parse_info_dir_file(path)
    assert tree.category_item.children == []
    assert tree.alphab_item.children == []