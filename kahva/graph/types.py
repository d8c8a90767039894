"""Types for commit graph rows."""

from collections.abc import Hashable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from kahva.formatter.base import StyledText

CommitId = Hashable


class EdgeKind(Enum):
    """How a graph node relates to one of its targets"""

    DIRECT = "direct"  # Real parent
    INDIRECT = "indirect"  # Ancestor reached by skipping hidden history
    MISSING = "missing"  # Parent outside the visible set


@dataclass(frozen=True)
class Edge:
    """An edge from a graph node to a commit id (or, once classified, a RowKey)."""

    target: Any
    kind: EdgeKind

    @classmethod
    def direct(cls, target: Any) -> "Edge":
        return cls(target, EdgeKind.DIRECT)

    @classmethod
    def indirect(cls, target: Any) -> "Edge":
        return cls(target, EdgeKind.INDIRECT)

    @classmethod
    def missing(cls, target: Any) -> "Edge":
        return cls(target, EdgeKind.MISSING)


@dataclass
class GraphNode:
    """A commit and its ordered edges, as produced by the graph traversal."""

    commit_id: CommitId
    edges: list[Edge] = field(default_factory=list)


@dataclass(frozen=True)
class RowKey:
    """Identifies a row. Synthetic keys stand for elided history."""

    commit_id: CommitId
    synthetic: bool = False

    def real(self) -> "RowKey":
        return RowKey(self.commit_id, False)


class AncestorKind(Enum):
    """Edge kinds as the row renderer understands them"""

    PARENT = "parent"
    ANCESTOR = "ancestor"
    ANONYMOUS = "anonymous"


@dataclass(frozen=True)
class Ancestor:
    """An edge handed to the row renderer. Anonymous edges have no target."""

    kind: AncestorKind
    target: RowKey | None = None


@dataclass
class Row:
    """One display row: a commit or a synthetic elided-history placeholder."""

    key: RowKey
    edges: list[Edge]  # Classified, targets are RowKeys
    styled_text: StyledText
    glyph: str
    layout_hint: Any = None

    @property
    def commit_id(self) -> CommitId | None:
        """The commit shown by this row; None for synthetic rows."""
        return None if self.key.synthetic else self.key.commit_id

    @property
    def text(self) -> str:
        return "".join(text for text, _ in self.styled_text)


@dataclass
class RepoView:
    """Everything needed to display the log: rows in order, heads and parents."""

    rows: list[Row] = field(default_factory=list)
    heads: set[CommitId] = field(default_factory=set)
    parents: dict[CommitId, list[CommitId]] = field(default_factory=dict)

    def is_head(self, commit_id: CommitId | None) -> bool:
        return commit_id is not None and commit_id in self.heads
