"""Documentation entries, contents tree, glossary, info index, templates and history for a help browser."""

__version__ = "0.1.0"