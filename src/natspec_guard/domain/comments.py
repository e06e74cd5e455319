"""
Locate the documentation comment sitting above a declaration.

Two scan policies live here and stay separate:

* block policy (used by the comment-style rule) looks for a `/** ... */` block;
* line-run policy (used by the selector-tag rule) collects the contiguous run of
  `///` lines directly above the declaration.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from natspec_guard.domain.document import DocumentIndex, LineSpan

_NATSPEC_LINE_RE = re.compile(r"^///(\s|$)")
_BLOCK_END_RE = re.compile(r"\*/\s*$")


class LineKind(Enum):
    BLANK = "blank"
    LINE_COMMENT = "line_comment"
    BLOCK_START = "block_start"
    BLOCK_END = "block_end"
    OTHER = "other"


class CommentStyle(Enum):
    LINE_RUN = "line_run"
    BLOCK = "block"


@dataclass(frozen=True)
class CommentBlock:
    """A located comment: inclusive line span plus the lines themselves."""

    style: CommentStyle
    start_line: int
    end_line: int
    lines: tuple[LineSpan, ...] = ()

    @property
    def key(self) -> tuple[int, int]:
        return (self.start_line, self.end_line)


def classify_line(content: str) -> LineKind:
    """Classify one physical line. A one-line `/** x */` is a BLOCK_END."""
    trimmed = content.lstrip()
    if not trimmed.rstrip():
        return LineKind.BLANK
    if trimmed.startswith("///"):
        return LineKind.LINE_COMMENT
    if _BLOCK_END_RE.search(trimmed):
        return LineKind.BLOCK_END
    if trimmed.startswith("/*"):
        return LineKind.BLOCK_START
    return LineKind.OTHER


def is_natspec_line(content: str) -> bool:
    """True for `///` followed by whitespace or end of line (not `////`)."""
    return bool(_NATSPEC_LINE_RE.match(content.lstrip()))


class CommentBlockLocator:
    """Backward line scans over one DocumentIndex."""

    def __init__(self, document: DocumentIndex) -> None:
        self._doc = document

    def find_block_comment(self, offset: int) -> Optional[CommentBlock]:
        """
        Find a `/** ... */` block above the line holding `offset`.

        Blank lines are skipped. A `///` line, code, or a plain `/* */` comment
        means no block.
        """
        decl_line = self._doc.line_index_of(offset)
        for i in range(decl_line - 1, -1, -1):
            kind = classify_line(self._doc.line_text(i))
            if kind is LineKind.BLANK:
                continue
            if kind is LineKind.BLOCK_END:
                return self._match_block_start(i)
            return None
        return None

    def _match_block_start(self, end_line: int) -> Optional[CommentBlock]:
        for j in range(end_line, -1, -1):
            trimmed = self._doc.line_text(j).lstrip()
            if j == end_line:
                # `code; /* note */` closes its own comment, not a doc block.
                if not trimmed.startswith("/*") and "/*" in trimmed[:trimmed.rindex("*/")]:
                    return None
            elif "*/" in trimmed:
                return None
            if trimmed.startswith("/**"):
                return CommentBlock(
                    CommentStyle.BLOCK,
                    j,
                    end_line,
                    tuple(self._doc[k] for k in range(j, end_line + 1)),
                )
            if trimmed.startswith("/*"):
                return None
        return None

    def find_line_run(self, offset: int) -> Optional[CommentBlock]:
        """Maximal run of `///` lines ending on the line above `offset`'s line."""
        decl_line = self._doc.line_index_of(offset)
        start = decl_line
        while start > 0 and is_natspec_line(self._doc.line_text(start - 1)):
            start -= 1
        if start == decl_line:
            return None
        return CommentBlock(
            CommentStyle.LINE_RUN,
            start,
            decl_line - 1,
            tuple(self._doc[k] for k in range(start, decl_line)),
        )
