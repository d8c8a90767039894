"""
Centralized constants for Kahva.

This module contains hardcoded strings used across the codebase.
Centralizing them here makes them easier to find and modify.
"""

# Synthetic rows standing in for history the traversal skipped
ELIDED_LABEL = "elided"
ELIDED_TEXT = "(elided revisions)"

# Node glyphs handed to the row renderer
NODE_SYMBOL = "o"
HEAD_NODE_SYMBOL = "@"
ELIDED_NODE_SYMBOL = "~"

# Label around the node glyph in terminal output
NODE_LABEL = "node"

# Visible stand-in for a raw ESC byte in template output
ESCAPE_PLACEHOLDER = "␛"

# Shown under "description placeholder" for commits without a message
EMPTY_DESCRIPTION = "(no description set)"

# Settings keys
ELIDED_NODES_SETTING = "ui.log-synthetic-elided-nodes"
DEBUG_LABELS_SETTING = "ui.debug-labels"
LOG_LIMIT_SETTING = "log.limit"
COLORS_SETTING = "colors"
