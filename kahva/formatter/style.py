"""
Styles, colours and style rules for labelled text.

A rule pairs a pattern of labels with a style. Rules usually come from the
``colors`` table in settings, e.g.::

    "colors": {
        "commit_id": "blue",
        "description placeholder": {"fg": "yellow", "italic": true}
    }
"""

from dataclasses import dataclass, fields
from typing import Any

ANSI_COLOR_NAMES = ["black", "red", "green", "yellow", "blue", "magenta", "cyan", "white"]

ANSI_INDEX_PREFIX = "ansi-color-"
BRIGHT_PREFIX = "bright "


@dataclass(frozen=True)
class Color:
    """A terminal colour: a named ANSI colour, a 256-palette index or 24-bit RGB.

    A colour with no fields set is the terminal's default colour.
    """

    name: str | None = None
    index: int | None = None
    rgb: tuple[int, int, int] | None = None

    @classmethod
    def parse(cls, value: str) -> "Color":
        """Parse a colour name as written in settings."""
        value = value.strip()

        if value.startswith("#"):
            hex_digits = value[1:]
            if len(hex_digits) != 6:
                raise ValueError(f"Invalid color: {value}")
            try:
                r, g, b = (int(hex_digits[i : i + 2], 16) for i in (0, 2, 4))
            except ValueError:
                raise ValueError(f"Invalid color: {value}") from None
            return cls(rgb=(r, g, b))

        if value.startswith(ANSI_INDEX_PREFIX):
            try:
                index = int(value[len(ANSI_INDEX_PREFIX) :])
            except ValueError:
                raise ValueError(f"Invalid color: {value}") from None
            if not 0 <= index <= 255:
                raise ValueError(f"Invalid color: {value}")
            return cls(index=index)

        base = value.removeprefix(BRIGHT_PREFIX)
        if value == "default" or base in ANSI_COLOR_NAMES:
            return cls(name=value)

        raise ValueError(f"Invalid color: {value}")

    @property
    def is_default(self) -> bool:
        return self.rgb is None and self.index is None and self.name in (None, "default")

    def sgr(self, background: bool = False) -> str:
        """Return the SGR parameters that select this colour."""
        base = 40 if background else 30
        if self.rgb is not None:
            r, g, b = self.rgb
            return f"{base + 8};2;{r};{g};{b}"
        if self.index is not None:
            return f"{base + 8};5;{self.index}"
        if self.is_default:
            return str(base + 9)
        assert self.name is not None
        if self.name.startswith(BRIGHT_PREFIX):
            return str(base + 60 + ANSI_COLOR_NAMES.index(self.name[len(BRIGHT_PREFIX) :]))
        return str(base + ANSI_COLOR_NAMES.index(self.name))


@dataclass(frozen=True)
class Style:
    """Text attributes. ``None`` means unspecified: inherit or use the default."""

    bold: bool | None = None
    italic: bool | None = None
    underline: bool | None = None
    fg: Color | None = None
    bg: Color | None = None

    def merge(self, other: "Style") -> "Style":
        """Return this style overridden field by field by the fields set in other."""
        merged = {}
        for f in fields(self):
            value = getattr(other, f.name)
            merged[f.name] = value if value is not None else getattr(self, f.name)
        return Style(**merged)


@dataclass(frozen=True)
class Rule:
    """Applies style wherever all pattern labels are open, in order."""

    pattern: tuple[str, ...]
    style: Style


STYLE_FLAGS = ("bold", "italic", "underline")
STYLE_COLORS = ("fg", "bg")


def style_from_config(key: str, value: dict[str, Any]) -> Style:
    """Build a Style from a settings table like {"fg": "red", "bold": true}."""
    attrs: dict[str, Any] = {}
    for name, setting in value.items():
        if name in STYLE_COLORS:
            if not isinstance(setting, str):
                raise ValueError(f"Invalid {name} for '{key}': expected a color name")
            attrs[name] = Color.parse(setting)
        elif name in STYLE_FLAGS:
            if not isinstance(setting, bool):
                raise ValueError(f"Invalid {name} for '{key}': expected true or false")
            attrs[name] = setting
        else:
            raise ValueError(f"Unknown style attribute '{name}' for '{key}'")
    return Style(**attrs)


def rules_from_config(colors: dict[str, Any]) -> list[Rule]:
    """
    Convert the ``colors`` settings table into an ordered rule table.

    Keys are space-separated label patterns. Values are either a colour name
    (the foreground) or a table of style attributes.
    """
    rules: list[Rule] = []
    for key, value in colors.items():
        pattern = tuple(key.split())
        if isinstance(value, str):
            style = Style(fg=Color.parse(value))
        elif isinstance(value, dict):
            style = style_from_config(key, value)
        else:
            raise ValueError(f"Invalid style for '{key}': expected a color name or a table")
        rules.append(Rule(pattern, style))
    return rules
