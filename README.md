# helpcenter

Building blocks for a help browser, in plain Python. The package reads
documentation metadata, keeps a contents tree, loads a glossary, indexes
GNU info documents, renders pages from templates and tracks browsing
history. It has no graphical interface and no command of its own. A
front end is expected to sit on top of it.

## Modules

- `helpcenter.docentry.DocEntry` is one documentation entry. The
  constructor takes a name, a URL and an icon. `read_from_file()` fills
  the entry from the `[Desktop Entry]` group of a `.desktop` file.
  `add_child()` keeps children ordered by `weight` and links each child
  to the next through `next_sibling`. An entry without a URL gets an
  internal `khelpcenter:<identifier>` URL. If the identifier is unset,
  a random one is created.
- `helpcenter.appgroup.documentation_url()` maps an application's
  properties to its help URL. It reads `DocPath` first, then
  `X-DocPath`. File and HTTP URLs are returned unchanged. Any other
  value becomes `help:/<path>`. If neither key is set, it returns
  `None`.
- `helpcenter.infotree.InfoTree` parses GNU info `dir` files into two
  trees of `InfoItem` nodes, "Alphabetically" and "By Category".
  `build()` looks in the given directories and also in those listed in
  `$INFOPATH`.
- `helpcenter.glossary.Glossary` reads a glossary cache. The cache is an
  XML file of `section` and `entry` elements. The class groups entries
  by topic and by first letter. `entry()` returns a `GlossaryEntry`,
  and each entry has its `GlossaryEntryXRef` cross-references.
  `cache_status()` reports `CacheStatus.NEED_REBUILD` or
  `CacheStatus.CACHE_OK`.
- `helpcenter.formatter.TemplateFormatter` renders `index.html`,
  `glossary.html` and `search.html` Jinja2 templates. Values are
  inserted without escaping, except the search words.
- `helpcenter.history.History` is the back and forward history. Index 0
  is the newest entry. It offers `back()`, `forward()` and
  `go_history()`. It also builds history menu items with
  `history_popup()` and `go_menu()`.
- `helpcenter.fonts.FontSettings` holds font sizes, font families and the
  default encoding. `load()` and `save()` read and write them in the
  `[HTML Settings]` group of an INI-style file. Other groups in the file
  are kept.
- `helpcenter.navigator.Navigator` and `NavigatorItem` form the contents
  tree. `select_item()` finds the item for a URL. A URL with a fragment
  also matches its `?anchor=` form. `overview_content()` and
  `create_children_list()` build the HTML overview of an item or of the
  start page.
- `helpcenter.navconfig.NavigatorConfig` remembers the current `Tab`
  and the start URL, including per-language `StartUrl[xx]` values.
  `home_url()` falls back to `khelpcenter:home`.

## Example

```python
from helpcenter.docentry import DocEntry

root = DocEntry("Top")
second = DocEntry("Second")
second.weight = 5
first = DocEntry("First")
first.weight = 1
root.add_child(second)
root.add_child(first)
print([child.name for child in root.children])   # ['First', 'Second']
print(first.next_sibling.name)                   # 'Second'
```

## What it does not do

- It does not scan directories of metadata files into a single entry
  tree, and it has no traverser API for walking one. Each `DocEntry`
  is read and linked by the caller.
- It does not create the glossary cache. `Glossary` only reads an
  existing cache file and says whether it is out of date.
- It has no window, no menus, no search engine and no command to start
  it.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```