"""Labelled text formatting and style resolution"""

from kahva.formatter.base import Formatter, FormatRecorder, PlainTextFormatter, replay_styled_text
from kahva.formatter.color import ColorFormatter, StyledRun
from kahva.formatter.matcher import StyleMatcher
from kahva.formatter.style import Color, Rule, Style, rules_from_config

__all__ = [
    "Color",
    "ColorFormatter",
    "FormatRecorder",
    "Formatter",
    "PlainTextFormatter",
    "Rule",
    "Style",
    "StyleMatcher",
    "StyledRun",
    "replay_styled_text",
    "rules_from_config",
]
