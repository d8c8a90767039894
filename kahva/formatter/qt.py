"""Qt text formats for styled runs, for painting rows in a Qt widget."""

from PySide6.QtGui import QColor, QFont, QTextCharFormat

from kahva.formatter.base import StyledText, replay_styled_text
from kahva.formatter.color import ColorFormatter, StyledRun
from kahva.formatter.style import ANSI_COLOR_NAMES, BRIGHT_PREFIX, Color, Style

DEFAULT_TEXT_COLOR = QColor("#FFFFFF")

# Named colours, dark variant first then bright
ANSI_PALETTE = {
    "black": (QColor(0, 0, 0), QColor(85, 85, 85)),
    "red": (QColor(187, 0, 0), QColor(255, 85, 85)),
    "green": (QColor(0, 187, 0), QColor(85, 255, 85)),
    "yellow": (QColor(187, 187, 0), QColor(255, 255, 85)),
    "blue": (QColor(0, 0, 187), QColor(85, 85, 255)),
    "magenta": (QColor(187, 0, 187), QColor(255, 85, 255)),
    "cyan": (QColor(0, 187, 187), QColor(85, 255, 255)),
    "white": (QColor(187, 187, 187), QColor(255, 255, 255)),
}

# xterm 6x6x6 colour cube levels
CUBE_LEVELS = [0, 95, 135, 175, 215, 255]


def _palette_color(index: int) -> QColor:
    """Map a 256-colour palette index to its usual xterm RGB value."""
    if index < 16:
        name = ANSI_COLOR_NAMES[index % 8]
        return QColor(ANSI_PALETTE[name][1 if index >= 8 else 0])
    if index < 232:
        index -= 16
        return QColor(CUBE_LEVELS[index // 36], CUBE_LEVELS[(index // 6) % 6], CUBE_LEVELS[index % 6])
    level = 8 + (index - 232) * 10
    return QColor(level, level, level)


def color_to_qcolor(color: Color | None) -> QColor:
    """Convert a Color to a QColor; None and "default" give the default text colour."""
    if color is None or color.is_default:
        return QColor(DEFAULT_TEXT_COLOR)
    if color.rgb is not None:
        return QColor(*color.rgb)
    if color.index is not None:
        return _palette_color(color.index)
    assert color.name is not None
    bright = color.name.startswith(BRIGHT_PREFIX)
    dark_color, bright_color = ANSI_PALETTE[color.name.removeprefix(BRIGHT_PREFIX)]
    return QColor(bright_color if bright else dark_color)


def char_format(style: Style) -> QTextCharFormat:
    """Build a QTextCharFormat for a resolved style."""
    fmt = QTextCharFormat()
    fmt.setFontWeight(QFont.Weight.Bold if style.bold else QFont.Weight.Normal)
    fmt.setFontItalic(bool(style.italic))
    fmt.setFontUnderline(bool(style.underline))
    fmt.setForeground(color_to_qcolor(style.fg))
    if style.bg is not None and not style.bg.is_default:
        fmt.setBackground(color_to_qcolor(style.bg))
    return fmt


def run_sections(runs: list[StyledRun]) -> list[tuple[str, QTextCharFormat, str | None]]:
    """Convert styled runs to (text, format, innermost label) sections."""
    return [(run.text, char_format(run.style), run.label) for run in runs]


def styled_text_sections(
    styled_text: StyledText, formatter: ColorFormatter
) -> list[tuple[str, QTextCharFormat, str | None]]:
    """Replay a row's styled text through formatter and return its Qt sections."""
    replay_styled_text(styled_text, formatter)
    return run_sections(formatter.take())
