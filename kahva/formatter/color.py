"""
Colour formatter: turns labelled text into styled output.

Text is written under a stack of labels. Whenever text is about to be
written, the label stack is resolved to a style and, if that style differs
from the one last emitted, a transition is written. The formatter produces
two views of the same stream:

- ``output``: bytes with ANSI SGR escapes, for terminal-like consumers
- ``runs``: StyledRun entries (text plus resolved style), for GUI consumers
"""

from collections.abc import Sequence
from dataclasses import dataclass
from types import TracebackType

from kahva.constants import ESCAPE_PLACEHOLDER
from kahva.formatter.base import Formatter, as_text
from kahva.formatter.matcher import StyleMatcher
from kahva.formatter.style import Color, Rule, Style


@dataclass(frozen=True)
class StyledRun:
    """A stretch of text written under one style and label stack."""

    text: str
    style: Style
    labels: tuple[str, ...] = ()

    @property
    def label(self) -> str | None:
        """The innermost label, if any."""
        return self.labels[-1] if self.labels else None


def sanitize(text: str) -> str:
    """Replace raw ESC characters so template text cannot inject escapes."""
    return text.replace("\x1b", ESCAPE_PLACEHOLDER)


class ColorFormatter(Formatter):
    """
    Formatter that resolves labels to styles and emits style transitions.

    Must be closed when done (or used as a context manager) so that any style
    left open is reset, even if rendering failed part way.

    Args:
        rules: Ordered style rule table
        debug: Annotate output with the label path around each change
        strict: Raise on pop_label() with no open labels instead of ignoring it
    """

    def __init__(self, rules: Sequence[Rule], debug: bool = False, strict: bool = False) -> None:
        self.matcher = StyleMatcher(rules)
        self.strict = strict
        # Labels currently open; they determine the requested style
        self.labels: list[str] = []
        # The style we last emitted
        self.current_style = Style()
        # The label path we last annotated; None disables annotations
        self.current_debug: str | None = "" if debug else None
        self.unbalanced_pops = 0

        self.output = bytearray()
        self.runs: list[StyledRun] = []
        self._run_text: list[str] = []
        self._run_labels: tuple[str, ...] = ()

    def __enter__(self) -> "ColorFormatter":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def push_label(self, label: str) -> None:
        self.labels.append(label)

    def pop_label(self) -> None:
        if not self.labels:
            self.unbalanced_pops += 1
            if self.strict:
                raise ValueError("pop_label() called with no open labels")
            print("⚠️ Ignoring pop_label() with no open labels")
        else:
            self.labels.pop()
        if not self.labels:
            self._write_new_style()

    def write(self, data: str | bytes) -> int:
        """
        Write text, styling each line independently.

        The style is reset before every newline and re-applied after it, so
        every line carries its own escapes (grep, ``less -R``) and background
        colours do not bleed past the end of the line.
        """
        text = as_text(data)
        start = 0
        while start < len(text):
            end = text.find("\n", start)
            if end == -1:
                self._write_new_style()
                self._write_text(sanitize(text[start:]))
                break
            self._write_new_style()
            self._write_text(sanitize(text[start:end]))
            labels = self.labels
            self.labels = []
            self._write_new_style()
            self._write_text("\n")
            self.labels = labels
            start = end + 1
        return len(data)

    def write_raw(self, data: bytes) -> None:
        """Write pre-rendered content after applying the current style, unsanitized."""
        self._write_new_style()
        self.output.extend(data)
        self._run_text.append(as_text(data))

    def take(self) -> list[StyledRun]:
        """Return the runs written so far and start a new batch.

        A final run holding only a newline is dropped.
        """
        self._flush_run()
        runs = self.runs
        self.runs = []
        if runs and runs[-1].text == "\n":
            runs.pop()
        return runs

    def take_output(self) -> bytes:
        """Return the terminal output written so far and clear it."""
        output = bytes(self.output)
        self.output.clear()
        return output

    def close(self) -> None:
        """Drop all open labels and reset the style. Never raises."""
        self.labels.clear()
        try:
            self._write_new_style()
            self._flush_run()
        except Exception as e:
            print(f"⚠️ Failed to reset style on close: {e}")

    def _write_new_style(self) -> None:
        self._flush_run()

        new_debug = None
        if self.current_debug is not None:
            joined = " ".join(self.labels)
            if joined != self.current_debug:
                if self.current_debug:
                    self._write_text(">>")
                new_debug = joined

        new_style = self.matcher.resolve(self.labels)
        if new_style != self.current_style:
            self._write_transition(new_style)
            self.current_style = new_style

        if new_debug is not None:
            if new_debug:
                self._write_text(f"<<{new_debug}::")
            self.current_debug = new_debug

        self._run_labels = tuple(self.labels)

    def _write_transition(self, new_style: Style) -> None:
        current = self.current_style
        if new_style.bold != current.bold:
            if new_style.bold:
                self._write_escape("1")
            else:
                # SGR 22 double-underlines on some terminals, so reset everything
                # and re-apply the remaining attributes below.
                self._write_escape("0")
                current = Style()
        if new_style.italic != current.italic:
            self._write_escape("3" if new_style.italic else "23")
        if new_style.underline != current.underline:
            self._write_escape("4" if new_style.underline else "24")
        if new_style.fg != current.fg:
            self._write_escape((new_style.fg or Color()).sgr())
        if new_style.bg != current.bg:
            self._write_escape((new_style.bg or Color()).sgr(background=True))

    def _write_escape(self, params: str) -> None:
        self.output.extend(f"\x1b[{params}m".encode())

    def _write_text(self, text: str) -> None:
        if not text:
            return
        self.output.extend(text.encode("utf-8"))
        self._run_text.append(text)

    def _flush_run(self) -> None:
        if not self._run_text:
            return
        self.runs.append(StyledRun("".join(self._run_text), self.current_style, self._run_labels))
        self._run_text = []
