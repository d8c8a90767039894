"""
Formatter interface for labelled text output.

Templates write text through a Formatter, opening and closing labels around
the parts they produce. What a label means is up to the formatter: the
plain formatter ignores labels, the recorder keeps them for later replay and
the colour formatter turns them into styles.
"""

import contextlib
from abc import ABC, abstractmethod
from collections.abc import Iterable, Iterator

StyledText = tuple[tuple[str, tuple[str, ...]], ...]


def as_text(data: str | bytes) -> str:
    if isinstance(data, bytes):
        return data.decode("utf-8", errors="replace")
    return data


class Formatter(ABC):
    """Base class for label-aware text sinks."""

    @abstractmethod
    def push_label(self, label: str) -> None:
        """Open a label. Labels nest; the last pushed is the innermost."""
        ...

    @abstractmethod
    def pop_label(self) -> None:
        """Close the innermost open label."""
        ...

    @abstractmethod
    def write(self, data: str | bytes) -> int:
        """Write text under the currently open labels. Returns the amount written."""
        ...

    def write_raw(self, data: bytes) -> None:
        """Write pre-rendered content. Formatters without styling treat it as text."""
        self.write(data)

    @contextlib.contextmanager
    def labeled(self, label: str) -> Iterator[None]:
        """Keep label open for the duration of the block, including on errors."""
        self.push_label(label)
        try:
            yield
        finally:
            self.pop_label()


class PlainTextFormatter(Formatter):
    """Collects text and ignores labels."""

    def __init__(self) -> None:
        self._parts: list[str] = []

    def push_label(self, label: str) -> None:
        pass

    def pop_label(self) -> None:
        pass

    def write(self, data: str | bytes) -> int:
        self._parts.append(as_text(data))
        return len(data)

    def getvalue(self) -> str:
        return "".join(self._parts)


class FormatRecorder(Formatter):
    """Records label and write operations so they can be replayed later."""

    def __init__(self) -> None:
        self.operations: list[tuple[str, str | bytes | None]] = []

    def push_label(self, label: str) -> None:
        self.operations.append(("push", label))

    def pop_label(self) -> None:
        self.operations.append(("pop", None))

    def write(self, data: str | bytes) -> int:
        self.operations.append(("write", as_text(data)))
        return len(data)

    def write_raw(self, data: bytes) -> None:
        self.operations.append(("raw", data))

    def replay(self, formatter: Formatter) -> None:
        """Send the recorded operations to another formatter, in order."""
        for op, value in self.operations:
            if op == "push":
                assert isinstance(value, str)
                formatter.push_label(value)
            elif op == "pop":
                formatter.pop_label()
            elif op == "write":
                assert isinstance(value, str)
                formatter.write(value)
            else:
                assert isinstance(value, bytes)
                formatter.write_raw(value)

    def styled_text(self) -> StyledText:
        """
        Fold the recording into (text, labels) pairs.

        Consecutive writes under the same labels are joined. Raw content is
        kept as text.
        """
        labels: list[str] = []
        pairs: list[tuple[str, tuple[str, ...]]] = []
        for op, value in self.operations:
            if op == "push":
                assert isinstance(value, str)
                labels.append(value)
            elif op == "pop":
                if labels:
                    labels.pop()
            else:
                text = as_text(value or "")
                if not text:
                    continue
                current = tuple(labels)
                if pairs and pairs[-1][1] == current:
                    pairs[-1] = (pairs[-1][0] + text, current)
                else:
                    pairs.append((text, current))
        return tuple(pairs)


def replay_styled_text(pairs: Iterable[tuple[str, tuple[str, ...]]], formatter: Formatter) -> None:
    """Write (text, labels) pairs to formatter, opening and closing labels as needed."""
    open_labels: list[str] = []
    for text, labels in pairs:
        common = 0
        while common < min(len(open_labels), len(labels)) and open_labels[common] == labels[common]:
            common += 1
        while len(open_labels) > common:
            formatter.pop_label()
            open_labels.pop()
        for label in labels[common:]:
            formatter.push_label(label)
            open_labels.append(label)
        formatter.write(text)
    while open_labels:
        formatter.pop_label()
        open_labels.pop()
