"""Shared fixtures: throwaway git repositories built with pygit2."""

import pygit2
import pytest


class RepoBuilder:
    """Creates commits with increasing timestamps in a fresh repository."""

    def __init__(self, path: str) -> None:
        self.repo = pygit2.init_repository(path)
        self.tree = self.repo.TreeBuilder().write()
        self.time = 1_700_000_000

    def commit(
        self,
        message: str,
        parents: list[str] | None = None,
        branch: str | None = None,
        email: str = "test@example.com",
    ) -> str:
        self.time += 60
        signature = pygit2.Signature("Test User", email, self.time, 0)
        oid = self.repo.create_commit(
            None,
            signature,
            signature,
            message,
            self.tree,
            [pygit2.Oid(hex=parent) for parent in parents or []],
        )
        if branch:
            self.repo.references.create(f"refs/heads/{branch}", oid, force=True)
        return str(oid)

    def checkout(self, branch: str) -> None:
        self.repo.set_head(f"refs/heads/{branch}")


@pytest.fixture
def repo_builder(tmp_path) -> RepoBuilder:
    return RepoBuilder(str(tmp_path / "repo"))
