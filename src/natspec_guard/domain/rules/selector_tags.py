"""Selector tag rule: interfaces and custom errors document their selector."""

import re
from typing import Literal, Optional

from natspec_guard.domain.constants import SELECTOR_TAGS_RULE_ID
from natspec_guard.domain.document import LineSpan
from natspec_guard.domain.entities import Declaration, DeclarationKind, TextEdit
from natspec_guard.domain.rules import AnalysisContext, Checkable, Violation

TagKind = Literal["Error", "Interface"]

SELECTOR_TAG_RE = re.compile(r"@dev\s+(Error|Interface)\s+selector:\s*`(0x[0-9a-fA-F]+)`")
SELECTOR_MENTION_RE = re.compile(r"(Error|Interface)\s+selector:\s*`(0x[0-9a-fA-F]+)`")


class SelectorTagsRule(Checkable):
    """
    Rule `selector-tags`.

    Every custom error must carry `/// @dev Error selector: \\`0x........\\`` and
    every interface with functions `/// @dev Interface selector: \\`0x........\\``
    holding its ERC-165 identifier. Missing, stale and loosely phrased tags are
    reported with a fix.
    """

    rule_id: str = SELECTOR_TAGS_RULE_ID
    description: str = "Interfaces and custom errors must document their selector in a @dev tag."

    def __init__(self, kinds: tuple[str, ...] = ("Error", "Interface")) -> None:
        self._kinds = frozenset(kinds)

    def check(self, declaration: Declaration, context: AnalysisContext) -> list[Violation]:
        expected = self._expected(declaration, context)
        if expected is None:
            return []
        kind, selector = expected
        if kind not in self._kinds:
            return []
        violation = self._check_tag(declaration, context, kind, selector)
        return [violation] if violation else []

    def _expected(
        self, declaration: Declaration, context: AnalysisContext
    ) -> Optional[tuple[TagKind, str]]:
        if declaration.kind is DeclarationKind.CUSTOM_ERROR:
            return ("Error", context.selectors.selector_of(declaration))
        if declaration.is_interface:
            functions = declaration.functions()
            if not functions:
                return None
            return ("Interface", context.selectors.interface_id(functions))
        return None

    def _find_tag(
        self, run: tuple[LineSpan, ...], kind: TagKind
    ) -> tuple[Optional[LineSpan], Optional[str], bool]:
        """Return (line, hex value, is_canonical) of the first tag for `kind`."""
        for line in run:
            canonical = SELECTOR_TAG_RE.search(line.content)
            if canonical and canonical.group(1) == kind:
                return line, canonical.group(2), True
            mention = SELECTOR_MENTION_RE.search(line.content)
            if mention and mention.group(1) == kind:
                return line, mention.group(2), False
        return None, None, False

    def _check_tag(
        self,
        declaration: Declaration,
        context: AnalysisContext,
        kind: TagKind,
        expected: str,
    ) -> Optional[Violation]:
        offset = context.require_range(declaration).start
        block = context.locator.find_line_run(offset)
        run = block.lines if block else ()
        line, found, is_canonical = self._find_tag(run, kind)
        label = kind.lower()

        if line is None or found is None:
            return Violation.from_declaration(
                rule_id=self.rule_id,
                message=f"Missing @dev {label} selector tag (expected `{expected}`)",
                declaration=declaration,
                context=context,
                fix=self._insert_tag(declaration, context, run, kind, expected),
            )

        if is_canonical:
            if found == expected:
                return None
            hex_start = line.start + line.content.index(found)
            return Violation.from_declaration(
                rule_id=self.rule_id,
                message=f"Incorrect {label} selector: expected `{expected}`, found `{found}`",
                declaration=declaration,
                context=context,
                fix=TextEdit(hex_start, hex_start + len(found) - 1, expected),
            )

        if found == expected:
            message = f"Non-canonical @dev {label} selector format"
        else:
            message = f"Incorrect {label} selector: expected `{expected}`, found `{found}`"
        canonical_line = self.tag_line(context.declaration_indent(declaration), kind, expected)
        return Violation.from_declaration(
            rule_id=self.rule_id,
            message=message,
            declaration=declaration,
            context=context,
            fix=TextEdit(line.start, line.body_end - 1, canonical_line),
        )

    @staticmethod
    def tag_line(indent: str, kind: str, selector: str) -> str:
        return f"{indent}/// @dev {kind} selector: `{selector}`"

    def _insert_tag(
        self,
        declaration: Declaration,
        context: AnalysisContext,
        run: tuple[LineSpan, ...],
        kind: TagKind,
        expected: str,
    ) -> TextEdit:
        """Insert the tag after the `///` run, or directly above the declaration."""
        decl_line = context.document[context.declaration_line(declaration)]
        new_line = self.tag_line(context.declaration_indent(declaration), kind, expected)
        newline = context.document.newline
        # Both branches rewrite the newline that ends the preceding line.
        if run:
            newline_at = run[-1].end
            return TextEdit(newline_at, newline_at, f"\n{new_line}{newline}")
        if decl_line.start > 0:
            newline_at = decl_line.start - 1
            return TextEdit(newline_at, newline_at, f"\n{new_line}{newline}")
        first_char = context.unit.text[:1]
        return TextEdit(0, 0, f"{new_line}{newline}{first_char}")
