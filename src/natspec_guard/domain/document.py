"""Line index over a source text: offset-to-line lookup and per-line helpers."""

import re
from dataclasses import dataclass

_INDENT_RE = re.compile(r"^(\s*)")


@dataclass(frozen=True)
class LineSpan:
    """One physical line. `end` is the index of its newline (or len(text))."""

    index: int
    start: int
    end: int
    content: str

    @property
    def body_end(self) -> int:
        """Index just past the line text, before the carriage return of a CRLF ending."""
        return self.end - 1 if self.content.endswith("\r") else self.end


class DocumentIndex:
    """
    Immutable view of a source text split into physical lines.

    A text ending with a newline gets a final empty line whose start and end
    both equal len(text), so every offset in [0, len(text)] maps to a line.
    """

    def __init__(self, text: str) -> None:
        self._text = text
        lines: list[LineSpan] = []
        start = 0
        for i in range(len(text) + 1):
            if i == len(text) or text[i] == "\n":
                lines.append(LineSpan(len(lines), start, i, text[start:i]))
                start = i + 1
        self._lines: tuple[LineSpan, ...] = tuple(lines)
        first_newline = text.find("\n")
        self._newline = "\r\n" if first_newline > 0 and text[first_newline - 1] == "\r" else "\n"

    @property
    def text(self) -> str:
        return self._text

    @property
    def newline(self) -> str:
        """Line ending of the first line; edits reuse it."""
        return self._newline

    @property
    def lines(self) -> tuple[LineSpan, ...]:
        return self._lines

    def __len__(self) -> int:
        return len(self._lines)

    def __getitem__(self, index: int) -> LineSpan:
        return self._lines[index]

    def line_index_of(self, offset: int) -> int:
        """Return the index of the line containing `offset` (largest start <= offset)."""
        if offset < 0 or offset > len(self._text):
            raise ValueError(
                f"offset {offset} outside document of length {len(self._text)}")
        lo, hi = 0, len(self._lines) - 1
        while lo < hi:
            mid = (lo + hi + 1) >> 1
            if self._lines[mid].start <= offset:
                lo = mid
            else:
                hi = mid - 1
        return lo

    def line_text(self, index: int) -> str:
        return self._lines[index].content

    def indent_of(self, index: int) -> str:
        """Leading whitespace of a line."""
        match = _INDENT_RE.match(self._lines[index].content)
        return match.group(1) if match else ""
