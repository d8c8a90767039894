"""Commit graph row assembly"""

from kahva.graph.assembler import RowAssembler, compute_heads
from kahva.graph.renderer import PassthroughRenderer, RowRenderer
from kahva.graph.types import Edge, EdgeKind, GraphNode, RepoView, Row, RowKey

__all__ = [
    "Edge",
    "EdgeKind",
    "GraphNode",
    "PassthroughRenderer",
    "RepoView",
    "Row",
    "RowAssembler",
    "RowKey",
    "RowRenderer",
    "compute_heads",
]
