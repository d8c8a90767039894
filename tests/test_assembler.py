"""Tests for row assembly, elision expansion and head computation."""

import pytest

from kahva.constants import ELIDED_TEXT
from kahva.graph.assembler import RowAssembler, compute_heads
from kahva.graph.renderer import PassthroughRenderer, RowHint
from kahva.graph.types import Ancestor, AncestorKind, Edge, GraphNode, RowKey


class RecordingRenderer:
    """Row renderer that records its calls and returns the call index as hint."""

    def __init__(self):
        self.calls = []

    def next_row(self, key, ancestors, glyph, message):
        self.calls.append((key, ancestors, glyph, message))
        return len(self.calls) - 1


def write_id(commit, formatter):
    with formatter.labeled("commit_id"):
        formatter.write(commit)


def make_assembler(renderer=None, fetch_commit=None, template=write_id):
    return RowAssembler(
        fetch_commit=fetch_commit or (lambda commit_id: commit_id),
        template=template,
        renderer=renderer or RecordingRenderer(),
    )


class TestAssemble:
    """Test rows produced from a traversal"""

    def test_elided_history_scenario(self):
        """A -> B (direct), B -> C (indirect), C; with elision."""
        nodes = [
            GraphNode("A", [Edge.direct("B")]),
            GraphNode("B", [Edge.indirect("C")]),
            GraphNode("C", []),
        ]
        view = make_assembler().assemble(nodes, elide_indirect=True)

        assert [row.key for row in view.rows] == [
            RowKey("A"),
            RowKey("B"),
            RowKey("C", synthetic=True),
            RowKey("C"),
        ]
        assert view.rows[1].edges == [Edge.direct(RowKey("C", synthetic=True))]
        assert view.rows[2].edges == [Edge.direct(RowKey("C"))]
        assert view.rows[2].styled_text == ((ELIDED_TEXT, ("elided",)),)
        assert view.rows[2].commit_id is None
        assert view.heads == {"A"}

    def test_without_elision_indirect_edge_kept(self):
        nodes = [GraphNode("B", [Edge.indirect("C")]), GraphNode("C", [])]
        renderer = RecordingRenderer()
        view = make_assembler(renderer).assemble(nodes, elide_indirect=False)

        assert [row.key for row in view.rows] == [RowKey("B"), RowKey("C")]
        assert view.rows[0].edges == [Edge.indirect(RowKey("C"))]
        assert renderer.calls[0][1] == [Ancestor(AncestorKind.ANCESTOR, RowKey("C"))]

    def test_one_synthetic_row_per_indirect_edge(self):
        nodes = [
            GraphNode("M", [Edge.indirect("X"), Edge.direct("P"), Edge.indirect("Y")]),
            GraphNode("P", [Edge.indirect("X")]),
            GraphNode("X", []),
            GraphNode("Y", []),
        ]
        view = make_assembler().assemble(nodes, elide_indirect=True)

        assert [(row.key.commit_id, row.key.synthetic) for row in view.rows] == [
            ("M", False),
            ("X", True),
            ("Y", True),
            ("P", False),
            ("X", True),
            ("X", False),
            ("Y", False),
        ]
        for row in view.rows:
            if row.key.synthetic:
                assert row.edges == [Edge.direct(row.key.real())]

    def test_renderer_sees_rows_in_order(self):
        renderer = RecordingRenderer()
        nodes = [GraphNode("B", [Edge.indirect("C"), Edge.missing("Z")]), GraphNode("C", [])]
        view = make_assembler(renderer).assemble(nodes, elide_indirect=True)

        assert [call[0] for call in renderer.calls] == [RowKey("B"), RowKey("C", True), RowKey("C")]
        assert renderer.calls[0][1] == [
            Ancestor(AncestorKind.PARENT, RowKey("C", True)),
            Ancestor(AncestorKind.ANONYMOUS),
        ]
        assert renderer.calls[1][1] == [Ancestor(AncestorKind.PARENT, RowKey("C"))]
        assert renderer.calls[1][3] == ELIDED_TEXT
        assert [row.layout_hint for row in view.rows] == [0, 1, 2]

    def test_styled_text_from_template(self):
        view = make_assembler().assemble([GraphNode("A", [])], elide_indirect=False)
        assert view.rows[0].styled_text == (("A", ("commit_id",)),)
        assert view.rows[0].text == "A"
        assert view.rows[0].glyph == "o"

    def test_node_symbol_collaborator(self):
        assembler = RowAssembler(
            fetch_commit=lambda commit_id: commit_id,
            template=write_id,
            renderer=PassthroughRenderer(),
            node_symbol=lambda commit: "@" if commit == "A" else "o",
        )
        view = assembler.assemble([GraphNode("A", [Edge.direct("B")]), GraphNode("B", [])], False)
        assert [row.glyph for row in view.rows] == ["@", "o"]
        assert view.rows[0].layout_hint == RowHint(
            RowKey("A"), (Ancestor(AncestorKind.PARENT, RowKey("B")),), "@", ""
        )

    def test_empty_traversal(self):
        view = make_assembler().assemble([], elide_indirect=True)
        assert view.rows == []
        assert view.heads == set()
        assert view.parents == {}


class TestParentsAndHeads:
    """Test the adjacency map and heads"""

    def test_parents_include_every_edge_kind(self):
        nodes = [GraphNode("A", [Edge.direct("B"), Edge.indirect("C"), Edge.missing("Z")])]
        view = make_assembler().assemble(nodes, elide_indirect=True)
        assert view.parents == {"A": ["B", "C", "Z"]}

    def test_heads_exclude_any_target(self):
        nodes = [
            GraphNode("A", [Edge.direct("B")]),
            GraphNode("D", [Edge.missing("E")]),
            GraphNode("B", [Edge.indirect("C")]),
            GraphNode("C", []),
            GraphNode("E", []),
        ]
        view = make_assembler().assemble(nodes, elide_indirect=False)
        assert view.heads == {"A", "D"}
        assert view.is_head("A")
        assert not view.is_head("C")
        assert not view.is_head(None)

    def test_compute_heads_ignores_order(self):
        assert compute_heads({"C": [], "B": ["C"], "A": ["B"]}) == {"A"}
        assert compute_heads({"A": ["B"], "X": ["B"], "B": []}) == {"A", "X"}

    def test_unseen_targets_are_not_heads(self):
        assert compute_heads({"A": ["Z"]}) == {"A"}


class TestFailures:
    """Test that collaborator errors abort assembly"""

    def test_fetch_error_propagates(self):
        def fetch(commit_id):
            if commit_id == "B":
                raise ValueError("Unknown commit B")
            return commit_id

        assembler = make_assembler(fetch_commit=fetch)
        with pytest.raises(ValueError, match="Unknown commit B"):
            assembler.assemble([GraphNode("A", [Edge.direct("B")]), GraphNode("B", [])], False)

    def test_template_error_propagates(self):
        def template(commit, formatter):
            raise RuntimeError("template failed")

        with pytest.raises(RuntimeError):
            make_assembler(template=template).assemble([GraphNode("A", [])], False)

    def test_traversal_error_propagates(self):
        def nodes():
            yield GraphNode("A", [Edge.direct("B")])
            raise OSError("object store unreadable")

        with pytest.raises(OSError):
            make_assembler().assemble(nodes(), elide_indirect=False)
