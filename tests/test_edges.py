"""Tests for edge classification."""

from kahva.graph.edges import classify_edges, to_ancestor
from kahva.graph.types import Ancestor, AncestorKind, Edge, EdgeKind, RowKey


class TestClassifyEdges:
    """Test retargeting edges at row keys"""

    def test_direct_edges_keep_order(self):
        result = classify_edges([Edge.direct("b"), Edge.direct("c")], elide_indirect=False)
        assert result.edges == [Edge.direct(RowKey("b")), Edge.direct(RowKey("c"))]
        assert result.elided == []

    def test_indirect_without_elision(self):
        result = classify_edges([Edge.indirect("c")], elide_indirect=False)
        assert result.edges == [Edge.indirect(RowKey("c"))]
        assert result.elided == []

    def test_indirect_with_elision_targets_synthetic_row(self):
        result = classify_edges([Edge.indirect("c"), Edge.direct("b"), Edge.indirect("d")], elide_indirect=True)
        assert result.edges == [
            Edge.direct(RowKey("c", synthetic=True)),
            Edge.direct(RowKey("b")),
            Edge.direct(RowKey("d", synthetic=True)),
        ]
        assert result.elided == ["c", "d"]

    def test_missing_edges_go_last(self):
        result = classify_edges([Edge.missing("x"), Edge.direct("b")], elide_indirect=True)
        assert result.edges == [Edge.direct(RowKey("b")), Edge.missing(RowKey("x"))]
        assert result.elided == []

    def test_every_missing_edge_kept(self):
        result = classify_edges([Edge.missing("x"), Edge.missing("y")], elide_indirect=False)
        assert [edge.target for edge in result.edges] == [RowKey("x"), RowKey("y")]
        assert all(edge.kind == EdgeKind.MISSING for edge in result.edges)


class TestToAncestor:
    """Test conversion to the renderer's edge representation"""

    def test_conversions(self):
        key = RowKey("b")
        assert to_ancestor(Edge.direct(key)) == Ancestor(AncestorKind.PARENT, key)
        assert to_ancestor(Edge.indirect(key)) == Ancestor(AncestorKind.ANCESTOR, key)
        assert to_ancestor(Edge.missing(key)) == Ancestor(AncestorKind.ANONYMOUS)
