"""Comment-style rule: NatSpec must use `///` lines, not `/** */` blocks."""

import re

from natspec_guard.domain.comments import CommentBlock
from natspec_guard.domain.constants import NATSPEC_TRIPLE_SLASH_RULE_ID
from natspec_guard.domain.entities import Declaration, DeclarationKind, TextEdit
from natspec_guard.domain.rules import AnalysisContext, Checkable, Violation

_OPENER_RE = re.compile(r"^/\*\*\s?")
_CLOSER_RE = re.compile(r"\s*\*/$")
_CONTINUATION_RE = re.compile(r"^\*\s?")

CHECKED_KINDS: frozenset[DeclarationKind] = frozenset(
    {
        DeclarationKind.CONTRACT,
        DeclarationKind.FUNCTION,
        DeclarationKind.EVENT,
        DeclarationKind.CUSTOM_ERROR,
        DeclarationKind.STATE_VARIABLE,
        DeclarationKind.MODIFIER,
        DeclarationKind.STRUCT,
        DeclarationKind.ENUM,
    }
)


class NatspecTripleSlashRule(Checkable):
    """
    Rule `natspec-triple-slash`.

    Flags a `/** ... */` block sitting directly above a declaration (blank
    lines allowed in between, `///` lines not) and rewrites it as `///` lines.
    A block shared by several declarations is reported once per unit.
    """

    rule_id: str = NATSPEC_TRIPLE_SLASH_RULE_ID
    description: str = "NatSpec comments must use the triple-slash (///) style."
    message: str = (
        "NatSpec comments should use triple-slash (///) format instead of block (/** */) format"
    )

    def check(self, declaration: Declaration, context: AnalysisContext) -> list[Violation]:
        if declaration.kind not in CHECKED_KINDS:
            return []
        offset = context.require_range(declaration).start
        block = context.locator.find_block_comment(offset)
        if block is None or block.key in context.reported:
            return []
        context.reported.add(block.key)

        replacement = self.convert(
            block, context.declaration_indent(declaration), context.document.newline)
        first, last = block.lines[0], block.lines[-1]
        return [
            Violation.from_declaration(
                rule_id=self.rule_id,
                message=self.message,
                declaration=declaration,
                context=context,
                fix=TextEdit(first.start, last.body_end - 1, replacement),
            )
        ]

    @staticmethod
    def convert(block: CommentBlock, indent: str, newline: str = "\n") -> str:
        """Render a block comment as `///` lines with the given indentation."""
        rendered: list[str] = []
        last_index = len(block.lines) - 1
        for i, line in enumerate(block.lines):
            text = line.content.strip()
            if i == last_index:
                text = _CLOSER_RE.sub("", text)
            if i == 0:
                text = _OPENER_RE.sub("", text)
            else:
                text = _CONTINUATION_RE.sub("", text)
            text = text.rstrip()

            if i in (0, last_index) and not text:
                continue
            rendered.append(f"{indent}/// {text}" if text else f"{indent}///")
        return newline.join(rendered)
