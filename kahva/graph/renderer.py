"""Interface to the row-layout renderer that computes lane geometry."""

from dataclasses import dataclass
from typing import Any, Protocol

from kahva.graph.types import Ancestor, RowKey


class RowRenderer(Protocol):
    """Lays out one row at a time; rows must be fed in display order."""

    def next_row(self, key: RowKey, ancestors: list[Ancestor], glyph: str, message: str) -> Any:
        """Return the layout hint for the row. The hint is opaque to Kahva."""
        ...


@dataclass(frozen=True)
class RowHint:
    """What PassthroughRenderer returns: its input, unchanged."""

    key: RowKey
    ancestors: tuple[Ancestor, ...]
    glyph: str
    message: str


class PassthroughRenderer:
    """Renderer that does no layout and hands back its input as the hint."""

    def next_row(self, key: RowKey, ancestors: list[Ancestor], glyph: str, message: str) -> RowHint:
        return RowHint(key, tuple(ancestors), glyph, message)
