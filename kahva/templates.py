"""
Commit templates for the log.

A template writes one commit as labelled text. Labels name what each piece
of text is (``commit_id``, ``author``, ...) and are resolved to styles by
the colour formatter.
"""

from datetime import datetime, timedelta, timezone

import pygit2

from kahva.constants import EMPTY_DESCRIPTION, HEAD_NODE_SYMBOL, NODE_SYMBOL
from kahva.formatter.base import Formatter
from kahva.git_backend.repository import KahvaRepository

SHORT_ID_LENGTH = 8


def format_timestamp(commit: pygit2.Commit) -> str:
    """Format the commit time in the committer's own timezone"""
    tz = timezone(timedelta(minutes=commit.commit_time_offset))
    return datetime.fromtimestamp(commit.commit_time, tz).strftime("%Y-%m-%d %H:%M:%S")


class LogTemplate:
    """One-line log entries: id, author, time, branches and description."""

    def __init__(self, repo: KahvaRepository) -> None:
        self.branch_tips = repo.branch_tips()
        self.head_id = repo.head_id()

    def format(self, commit: pygit2.Commit, formatter: Formatter) -> None:
        commit_id = str(commit.id)
        with formatter.labeled("commit"):
            with formatter.labeled("commit_id"):
                formatter.write(commit_id[:SHORT_ID_LENGTH])
            formatter.write(" ")
            with formatter.labeled("author"):
                formatter.write(commit.author.email)
            formatter.write(" ")
            with formatter.labeled("timestamp"):
                formatter.write(format_timestamp(commit))

            branches = self.branch_tips.get(commit_id, [])
            if branches:
                formatter.write(" ")
                with formatter.labeled("bookmarks"):
                    formatter.write(" ".join(branches))

            formatter.write(" ")
            first_line = commit.message.strip().split("\n")[0]
            with formatter.labeled("description"):
                if first_line:
                    formatter.write(first_line)
                else:
                    with formatter.labeled("placeholder"):
                        formatter.write(EMPTY_DESCRIPTION)
        formatter.write("\n")

    def node_symbol(self, commit: pygit2.Commit) -> str:
        """Glyph for the commit's node: @ marks the checked out commit"""
        return HEAD_NODE_SYMBOL if str(commit.id) == self.head_id else NODE_SYMBOL
