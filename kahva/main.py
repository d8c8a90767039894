#!/usr/bin/env python3
"""
Kahva - commit graph log viewer

Prints the log built by backend.reload to the terminal, styled with the
colour table from settings.
"""

import argparse
import sys
from pathlib import Path

import pygit2

from kahva.backend import formatter_for_settings, reload
from kahva.config.settings import Settings
from kahva.constants import NODE_LABEL
from kahva.formatter.base import replay_styled_text
from kahva.formatter.color import ColorFormatter
from kahva.git_backend.repository import KahvaRepository
from kahva.graph.types import RepoView


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments"""
    parser = argparse.ArgumentParser(
        prog="kahva",
        description="Kahva - commit graph log viewer",
    )
    parser.add_argument(
        "--repository",
        help="Path to the repository (default: the one containing the current directory)",
    )
    parser.add_argument(
        "-r",
        "--revisions",
        action="append",
        default=[],
        metavar="REV",
        help="Only show REV and its ancestors; may be given more than once",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="Settings file (default: ~/.config/kahva/settings.json)",
    )
    return parser.parse_args(argv)


def write_log(view: RepoView, formatter: ColorFormatter) -> None:
    """Replay every row through the formatter, one line per row."""
    for row in view.rows:
        with formatter.labeled(NODE_LABEL):
            formatter.write(row.glyph)
        formatter.write(" ")
        replay_styled_text(row.styled_text, formatter)
        if not row.text.endswith("\n"):
            formatter.write("\n")


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)

    try:
        settings = Settings(config_path=args.config)
        repo = KahvaRepository(args.repository)

        include = None
        if args.revisions:
            revision_ids = repo.ancestors_of(args.revisions)

            def include(commit: pygit2.Commit) -> bool:
                return str(commit.id) in revision_ids

        view = reload(repo, settings, include=include)
        with formatter_for_settings(settings) as formatter:
            write_log(view, formatter)
    except (ValueError, pygit2.GitError) as e:
        print(f"❌ {e}", file=sys.stderr)
        sys.exit(1)

    sys.stdout.flush()
    sys.stdout.buffer.write(formatter.take_output())
    sys.stdout.buffer.flush()


if __name__ == "__main__":
    main()
