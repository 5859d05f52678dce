"""Font settings for the document view, kept in an INI-style config file."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Union

PathLike = Union[str, "os.PathLike[str]"]

GROUP = "HTML Settings"
USE_LANGUAGE_ENCODING = "Use Language Encoding"

DEFAULT_MIN_FONT_SIZE = 7
DEFAULT_MEDIUM_FONT_SIZE = 10
DEFAULT_STANDARD_FONT = "Sans Serif"
DEFAULT_FIXED_FONT = "Monospace"
DEFAULT_SERIF_FONT = "Serif"
DEFAULT_SANS_SERIF_FONT = "Sans Serif"
DEFAULT_CURSIVE_FONT = "Sans Serif"
DEFAULT_FANTASY_FONT = "Sans Serif"

MIN_FONT_SIZE_RANGE = (1, 20)
MEDIUM_FONT_SIZE_RANGE = (4, 28)
ADJUSTMENT_RANGE = (-5, 5)

_Config = dict[str, dict[str, str]]


def _clamp(value: int, bounds: tuple[int, int]) -> int:
    low, high = bounds
    return max(low, min(high, value))


def _to_int(text: str, default: int) -> int:
    try:
        return int(text.strip())
    except (ValueError, AttributeError):
        return default


def _split_list(value: str) -> list[str]:
    """Split a comma-separated list where ``\\,`` and ``\\\\`` are escapes."""
    if not value:
        return []
    items: list[str] = []
    current: list[str] = []
    chars = iter(value)
    for char in chars:
        if char == "\\":
            nxt = next(chars, None)
            current.append("\\" if nxt is None else nxt)
        elif char == ",":
            items.append("".join(current))
            current = []
        else:
            current.append(char)
    items.append("".join(current))
    return items


def _join_list(items: list[str]) -> str:
    return ",".join(item.replace("\\", "\\\\").replace(",", "\\,") for item in items)


def _read_config(path: Path) -> _Config:
    config: _Config = {"": {}}
    try:
        text = path.read_text(encoding="utf-8", errors="replace")
    except OSError:
        return config
    group = ""
    for raw in text.splitlines():
        line = raw.strip()
        if not line or line.startswith("#"):
            continue
        if line.startswith("[") and line.endswith("]"):
            group = line[1:-1]
            config.setdefault(group, {})
            continue
        if "=" in line:
            key, _, value = line.partition("=")
            config.setdefault(group, {})[key.strip()] = value.strip()
    return config


def _write_config(path: Path, config: _Config) -> None:
    lines: list[str] = []
    for group, entries in config.items():
        if not group and not entries:
            continue
        if group:
            if lines:
                lines.append("")
            lines.append(f"[{group}]")
        lines.extend(f"{key}={value}" for key, value in entries.items())
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")


@dataclass
class FontSettings:
    """Font sizes, families and default encoding of the document view."""

    min_font_size: int = DEFAULT_MIN_FONT_SIZE
    medium_font_size: int = DEFAULT_MEDIUM_FONT_SIZE
    standard_font: str = DEFAULT_STANDARD_FONT
    fixed_font: str = DEFAULT_FIXED_FONT
    serif_font: str = DEFAULT_SERIF_FONT
    sans_serif_font: str = DEFAULT_SANS_SERIF_FONT
    italic_font: str = DEFAULT_CURSIVE_FONT
    fantasy_font: str = DEFAULT_FANTASY_FONT
    default_encoding: str = ""
    font_size_adjustment: int = 0

    def __post_init__(self) -> None:
        for name, bounds in (
            ("min_font_size", MIN_FONT_SIZE_RANGE),
            ("medium_font_size", MEDIUM_FONT_SIZE_RANGE),
            ("font_size_adjustment", ADJUSTMENT_RANGE),
        ):
            value = getattr(self, name)
            low, high = bounds
            if not low <= value <= high:
                raise ValueError(f"{name} must be between {low} and {high}, got {value}")

    @property
    def families(self) -> tuple[str, str, str, str, str, str]:
        return (
            self.standard_font,
            self.fixed_font,
            self.serif_font,
            self.sans_serif_font,
            self.italic_font,
            self.fantasy_font,
        )

    @classmethod
    def load(cls, path: PathLike) -> FontSettings:
        """Read the settings; missing or out-of-range values fall back or clamp."""
        group = _read_config(Path(path)).get(GROUP, {})
        min_size = _to_int(group.get("MinimumFontSize", ""), DEFAULT_MIN_FONT_SIZE)
        medium = _to_int(group.get("MediumFontSize", ""), DEFAULT_MEDIUM_FONT_SIZE)

        fonts = _split_list(group.get("Fonts", ""))
        if not fonts:
            fonts = [
                DEFAULT_STANDARD_FONT,
                DEFAULT_FIXED_FONT,
                DEFAULT_SERIF_FONT,
                DEFAULT_SANS_SERIF_FONT,
                DEFAULT_CURSIVE_FONT,
                DEFAULT_FANTASY_FONT,
                "",
            ]
        fonts += [""] * (7 - len(fonts))

        return cls(
            min_font_size=_clamp(min_size, MIN_FONT_SIZE_RANGE),
            medium_font_size=_clamp(medium, MEDIUM_FONT_SIZE_RANGE),
            standard_font=fonts[0],
            fixed_font=fonts[1],
            serif_font=fonts[2],
            sans_serif_font=fonts[3],
            italic_font=fonts[4],
            fantasy_font=fonts[5],
            default_encoding=group.get("DefaultEncoding", ""),
            font_size_adjustment=_clamp(_to_int(fonts[6], 0), ADJUSTMENT_RANGE),
        )

    def save(self, path: PathLike) -> None:
        """Write the settings, keeping every other group and key of the file."""
        target = Path(path)
        config = _read_config(target)
        group = config.setdefault(GROUP, {})
        group["MinimumFontSize"] = str(self.min_font_size)
        group["MediumFontSize"] = str(self.medium_font_size)
        group["Fonts"] = _join_list(
            list(self.families) + [str(self.font_size_adjustment)]
        )
        encoding = self.default_encoding
        group["DefaultEncoding"] = "" if encoding == USE_LANGUAGE_ENCODING else encoding
        _write_config(target, config)