"""Edge classification - prepares a node's edges for the row renderer."""

from collections.abc import Iterable
from dataclasses import dataclass, field

from kahva.graph.types import Ancestor, AncestorKind, CommitId, Edge, EdgeKind, RowKey


@dataclass
class ClassifiedEdges:
    """A node's edges retargeted at row keys, plus the targets to expand."""

    edges: list[Edge] = field(default_factory=list)
    elided: list[CommitId] = field(default_factory=list)


def classify_edges(edges: Iterable[Edge], elide_indirect: bool) -> ClassifiedEdges:
    """
    Retarget raw edges at row keys.

    Direct edges keep their order. Indirect edges either stay ancestor links
    to the real row, or, with elide_indirect, become direct links to a
    synthetic row whose target is queued in ``elided``. Missing edges are
    never expanded and are placed after all others.
    """
    result = ClassifiedEdges()
    missing: list[Edge] = []
    for edge in edges:
        if edge.kind == EdgeKind.DIRECT:
            result.edges.append(Edge.direct(RowKey(edge.target)))
        elif edge.kind == EdgeKind.INDIRECT:
            if elide_indirect:
                result.elided.append(edge.target)
                result.edges.append(Edge.direct(RowKey(edge.target, synthetic=True)))
            else:
                result.edges.append(Edge.indirect(RowKey(edge.target)))
        else:
            # Every missing parent gets its own dangling edge
            missing.append(Edge.missing(RowKey(edge.target)))
    result.edges.extend(missing)
    return result


def to_ancestor(edge: Edge) -> Ancestor:
    """Convert a classified edge into the renderer's representation."""
    if edge.kind == EdgeKind.DIRECT:
        return Ancestor(AncestorKind.PARENT, edge.target)
    if edge.kind == EdgeKind.INDIRECT:
        return Ancestor(AncestorKind.ANCESTOR, edge.target)
    return Ancestor(AncestorKind.ANONYMOUS)
