"""
Git repository access using pygit2
"""

from collections import deque
from collections.abc import Callable, Iterator
from pathlib import Path

import pygit2

from kahva.graph.types import Edge, EdgeKind, GraphNode


class KahvaRepository:
    """Reads commits and the commit graph shown in the log"""

    def __init__(self, repo_path: str | None = None) -> None:
        """Initialize repository"""
        if repo_path is None:
            repo_path = self._find_repo()

        self.repo = pygit2.Repository(repo_path)

    def _find_repo(self) -> str:
        """Find git repository in current directory or parents"""
        current = Path.cwd()
        while current != current.parent:
            if (current / ".git").exists():
                return str(current)
            current = current.parent
        raise ValueError("Not in a git repository")

    def commit(self, commit_id: str) -> pygit2.Commit:
        """Look up a commit by its hex id"""
        try:
            obj = self.repo[commit_id]
        except (KeyError, ValueError):
            raise ValueError(f"Unknown commit {commit_id}") from None
        if not isinstance(obj, pygit2.Commit):
            raise ValueError(f"{commit_id} is not a commit")
        return obj

    def head_id(self) -> str | None:
        """The commit HEAD points at, or None if HEAD is unborn"""
        if self.repo.head_is_unborn:
            return None
        return str(self.repo.head.peel(pygit2.Commit).id)

    def branch_tips(self) -> dict[str, list[str]]:
        """Map commit id -> names of local branches pointing at it"""
        tips: dict[str, list[str]] = {}
        for branch_name in self.repo.branches.local:
            commit = self.repo.branches.local[branch_name].peel(pygit2.Commit)
            tips.setdefault(str(commit.id), []).append(branch_name)
        return tips

    def resolve_revision(self, revision: str) -> pygit2.Commit:
        """Resolve a revision spec (branch, tag, hex id, HEAD~2, ...) to a commit"""
        try:
            return self.repo.revparse_single(revision).peel(pygit2.Commit)
        except (KeyError, ValueError):
            raise ValueError(f"Unknown revision {revision}") from None

    def ancestors_of(self, revisions: list[str]) -> set[str]:
        """Ids of the given revisions and everything reachable from them"""
        ids: set[str] = set()
        for revision in revisions:
            commit = self.resolve_revision(revision)
            ids.update(str(ancestor.id) for ancestor in self.repo.walk(commit.id, pygit2.enums.SortMode.NONE))
        return ids

    def _walk_tips(self) -> list[pygit2.Oid]:
        """HEAD first, then every local branch tip, without duplicates"""
        tips: list[pygit2.Oid] = []
        if not self.repo.head_is_unborn:
            tips.append(self.repo.head.peel(pygit2.Commit).id)
        for branch_name in self.repo.branches.local:
            oid = self.repo.branches.local[branch_name].peel(pygit2.Commit).id
            if oid not in tips:
                tips.append(oid)
        return tips

    def iter_graph(
        self,
        limit: int | None = None,
        include: Callable[[pygit2.Commit], bool] | None = None,
    ) -> Iterator[GraphNode]:
        """
        Yield visible commits with their edges, children before parents.

        A commit is visible when include(commit) is true (default: every
        commit) and fewer than limit commits have been made visible. Edges to
        hidden parents are replaced by indirect edges to the nearest visible
        ancestors, or by a missing edge when there are none. Indirect edges to
        commits already reachable through another edge are left out.

        Args:
            limit: Maximum number of visible commits
            include: Predicate selecting visible commits
        """
        tips = self._walk_tips()
        if not tips:
            return

        walker = self.repo.walk(tips[0], pygit2.enums.SortMode.TOPOLOGICAL | pygit2.enums.SortMode.TIME)
        for tip in tips[1:]:
            walker.push(tip)

        # Commits walked so far; paths to visible ancestors only run through these
        walked: dict[str, pygit2.Commit] = {}
        visible: list[pygit2.Commit] = []
        for commit in walker:
            if limit is not None and len(visible) >= limit:
                break
            walked[str(commit.id)] = commit
            if include is None or include(commit):
                visible.append(commit)

        visible_ids = {str(commit.id) for commit in visible}
        for commit in visible:
            yield GraphNode(str(commit.id), self._edges(commit, visible_ids, walked))

    def _edges(
        self,
        commit: pygit2.Commit,
        visible_ids: set[str],
        walked: dict[str, pygit2.Commit],
    ) -> list[Edge]:
        """Build the ordered edge list for a visible commit"""
        parent_ids = [str(parent_id) for parent_id in commit.parent_ids]
        direct_ids = {parent_id for parent_id in parent_ids if parent_id in visible_ids}

        edges: list[Edge] = []
        seen_indirect: set[str] = set()
        for parent_id in parent_ids:
            if parent_id in direct_ids:
                edges.append(Edge.direct(parent_id))
                continue

            ancestors = self._nearest_visible(parent_id, visible_ids, walked)
            if not ancestors:
                edges.append(Edge.missing(parent_id))
                continue

            for ancestor_id in ancestors:
                if ancestor_id in direct_ids or ancestor_id in seen_indirect:
                    continue
                seen_indirect.add(ancestor_id)
                edges.append(Edge.indirect(ancestor_id))

        return self._drop_transitive(edges, walked)

    def _drop_transitive(self, edges: list[Edge], walked: dict[str, pygit2.Commit]) -> list[Edge]:
        """Drop indirect edges whose target is already an ancestor of another edge's target"""
        if not any(edge.kind == EdgeKind.INDIRECT for edge in edges):
            return edges

        targets = [edge.target for edge in edges if edge.kind != EdgeKind.MISSING]
        reduced: list[Edge] = []
        for edge in edges:
            if edge.kind == EdgeKind.INDIRECT and any(
                self._reaches(other, edge.target, walked) for other in targets if other != edge.target
            ):
                continue
            reduced.append(edge)
        return reduced

    def _reaches(self, start: str, goal: str, walked: dict[str, pygit2.Commit]) -> bool:
        """Whether goal is a proper ancestor of start within the walked history"""
        seen = {start}
        queue = deque([start])
        while queue:
            commit = walked.get(queue.popleft())
            if commit is None:
                continue
            for parent_id in commit.parent_ids:
                parent_hex = str(parent_id)
                if parent_hex == goal:
                    return True
                if parent_hex not in seen:
                    seen.add(parent_hex)
                    queue.append(parent_hex)
        return False

    def _nearest_visible(
        self,
        start: str,
        visible_ids: set[str],
        walked: dict[str, pygit2.Commit],
    ) -> list[str]:
        """Breadth-first search from a hidden commit for the closest visible ancestors"""
        found: list[str] = []
        seen = {start}
        queue = deque([start])
        while queue:
            commit_id = queue.popleft()
            if commit_id in visible_ids:
                found.append(commit_id)
                continue
            commit = walked.get(commit_id)
            if commit is None:
                # Beyond the walked history
                continue
            for parent_id in commit.parent_ids:
                parent_hex = str(parent_id)
                if parent_hex not in seen:
                    seen.add(parent_hex)
                    queue.append(parent_hex)
        return found
