"""
Log loading - wires settings, the git graph, templates and row assembly.
"""

from collections.abc import Callable

import pygit2

from kahva.config.settings import Settings
from kahva.formatter.color import ColorFormatter
from kahva.git_backend.repository import KahvaRepository
from kahva.graph.assembler import RowAssembler
from kahva.graph.renderer import PassthroughRenderer, RowRenderer
from kahva.graph.types import RepoView
from kahva.templates import LogTemplate


def reload(
    repo: KahvaRepository,
    settings: Settings,
    renderer: RowRenderer | None = None,
    include: Callable[[pygit2.Commit], bool] | None = None,
) -> RepoView:
    """
    Build a fresh view of the log.

    Each call starts from scratch; nothing is carried over from earlier views.
    include selects the visible commits, as in KahvaRepository.iter_graph.
    Errors reading commits propagate and no view is returned.
    """
    elide_indirect = settings.get_elide_indirect()
    template = LogTemplate(repo)
    assembler = RowAssembler(
        fetch_commit=repo.commit,
        template=template.format,
        renderer=renderer if renderer is not None else PassthroughRenderer(),
        node_symbol=template.node_symbol,
    )
    view = assembler.assemble(repo.iter_graph(limit=settings.get_log_limit(), include=include), elide_indirect)
    print(f"📜 Loaded {len(view.rows)} rows, {len(view.heads)} head(s) (elided nodes: {elide_indirect})")
    return view


def formatter_for_settings(settings: Settings) -> ColorFormatter:
    """Create a colour formatter for one render pass, with its own style cache."""
    return ColorFormatter(settings.get_style_rules(), debug=settings.get_debug_labels())
