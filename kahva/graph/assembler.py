"""
Row assembly - turns a graph traversal into display rows.

The traversal yields commits in display order together with their edges.
For each commit the assembler classifies the edges, renders the commit's
text through the template, asks the row renderer for a layout hint and
appends the row. When indirect edges are elided, a placeholder row for each
skipped stretch of history is inserted right after the row that points at it,
so the renderer sees the synthetic key next to the edge that introduces it.
"""

from collections.abc import Callable, Iterable
from typing import Any

from kahva.constants import ELIDED_LABEL, ELIDED_NODE_SYMBOL, ELIDED_TEXT, NODE_SYMBOL
from kahva.formatter.base import FormatRecorder, Formatter
from kahva.graph.edges import classify_edges, to_ancestor
from kahva.graph.renderer import RowRenderer
from kahva.graph.types import CommitId, Edge, GraphNode, RepoView, Row, RowKey


def compute_heads(parents: dict[CommitId, list[CommitId]]) -> set[CommitId]:
    """Commits that were seen as nodes but are nobody's edge target."""
    targets = {target for node_targets in parents.values() for target in node_targets}
    return {commit_id for commit_id in parents if commit_id not in targets}


class RowAssembler:
    """
    Builds a RepoView from a graph traversal.

    Args:
        fetch_commit: Loads the full commit object for an id
        template: Writes a commit's labelled text to a formatter
        renderer: Row-layout renderer producing each row's layout hint
        node_symbol: Returns the glyph for a commit's node (default "o")
    """

    def __init__(
        self,
        fetch_commit: Callable[[CommitId], Any],
        template: Callable[[Any, Formatter], None],
        renderer: RowRenderer,
        node_symbol: Callable[[Any], str] | None = None,
    ) -> None:
        self.fetch_commit = fetch_commit
        self.template = template
        self.renderer = renderer
        self.node_symbol = node_symbol

    def assemble(self, nodes: Iterable[GraphNode], elide_indirect: bool) -> RepoView:
        """
        Consume the traversal and build the view.

        Any error from the traversal, commit fetch or template propagates and
        no view is produced.
        """
        rows: list[Row] = []
        parents: dict[CommitId, list[CommitId]] = {}

        for node in nodes:
            # Every target counts for heads, whatever the edge kind
            parents.setdefault(node.commit_id, []).extend(edge.target for edge in node.edges)

            classified = classify_edges(node.edges, elide_indirect)
            commit = self.fetch_commit(node.commit_id)
            rows.append(self._commit_row(node.commit_id, commit, classified.edges))

            for target in classified.elided:
                rows.append(self._elided_row(target))

        return RepoView(rows=rows, heads=compute_heads(parents), parents=parents)

    def _commit_row(self, commit_id: CommitId, commit: Any, edges: list[Edge]) -> Row:
        key = RowKey(commit_id)
        glyph = self.node_symbol(commit) if self.node_symbol else NODE_SYMBOL

        recorder = FormatRecorder()
        self.template(commit, recorder)

        hint = self.renderer.next_row(key, [to_ancestor(edge) for edge in edges], glyph, "")
        return Row(key=key, edges=edges, styled_text=recorder.styled_text(), glyph=glyph, layout_hint=hint)

    def _elided_row(self, target: CommitId) -> Row:
        key = RowKey(target, synthetic=True)
        edges = [Edge.direct(key.real())]

        recorder = FormatRecorder()
        with recorder.labeled(ELIDED_LABEL):
            recorder.write(ELIDED_TEXT)

        hint = self.renderer.next_row(key, [to_ancestor(edge) for edge in edges], ELIDED_NODE_SYMBOL, ELIDED_TEXT)
        return Row(
            key=key,
            edges=edges,
            styled_text=recorder.styled_text(),
            glyph=ELIDED_NODE_SYMBOL,
            layout_hint=hint,
        )
