"""Domain models for rules and violations."""

from dataclasses import dataclass, field

__all__ = [
    "AnalysisContext",
    "Checkable",
    "Violation",
]

from typing import Optional, Protocol

from natspec_guard.domain.comments import CommentBlockLocator
from natspec_guard.domain.document import DocumentIndex
from natspec_guard.domain.entities import Declaration, SourceRange, SourceUnit, TextEdit
from natspec_guard.domain.exceptions import MalformedDeclarationError
from natspec_guard.domain.protocols import HasherProtocol
from natspec_guard.domain.selectors import SelectorComputer
from natspec_guard.domain.symbols import SymbolTable
from natspec_guard.domain.type_resolver import TypeResolver


@dataclass(frozen=True)
class Violation:
    """A rule violation with rule id, message, location and optional fix."""

    rule_id: str
    message: str
    location: str
    declaration: Declaration
    fix: Optional[TextEdit] = None

    @property
    def fixable(self) -> bool:
        return self.fix is not None

    @classmethod
    def from_declaration(
        cls,
        *,
        rule_id: str,
        message: str,
        declaration: Declaration,
        context: "AnalysisContext",
        fix: Optional[TextEdit] = None,
    ) -> "Violation":
        """Build a Violation with `path:line:column` derived from the declaration start."""
        offset = context.require_range(declaration).start
        line = context.document.line_index_of(offset)
        column = offset - context.document[line].start
        return cls(
            rule_id=rule_id,
            message=message,
            location=f"{context.unit.path}:{line + 1}:{column}",
            declaration=declaration,
            fix=fix,
        )


@dataclass
class AnalysisContext:
    """
    Everything the rules share while analyzing one source unit.

    Created once per unit and discarded afterwards; `reported` holds the
    (start_line, end_line) spans of block comments already flagged.
    """

    unit: SourceUnit
    document: DocumentIndex
    symbols: SymbolTable
    selectors: SelectorComputer
    locator: CommentBlockLocator
    reported: set[tuple[int, int]] = field(default_factory=set)

    @classmethod
    def for_unit(cls, unit: SourceUnit, hasher: HasherProtocol) -> "AnalysisContext":
        document = DocumentIndex(unit.text)
        symbols = SymbolTable.build(unit.declarations)
        return cls(
            unit=unit,
            document=document,
            symbols=symbols,
            selectors=SelectorComputer(TypeResolver(symbols), hasher),
            locator=CommentBlockLocator(document),
        )

    def require_range(self, declaration: Declaration) -> SourceRange:
        """Return the declaration's range or refuse to process it."""
        rng = declaration.range
        if rng is None:
            raise MalformedDeclarationError(
                declaration.kind.value, declaration.name, "node has no source range")
        if rng.start < 0 or rng.start > len(self.unit.text):
            raise MalformedDeclarationError(
                declaration.kind.value,
                declaration.name,
                f"range start {rng.start} outside source of length {len(self.unit.text)}",
            )
        return rng

    def declaration_line(self, declaration: Declaration) -> int:
        return self.document.line_index_of(self.require_range(declaration).start)

    def declaration_indent(self, declaration: Declaration) -> str:
        return self.document.indent_of(self.declaration_line(declaration))


class Checkable(Protocol):
    """One-and-done check: given a declaration, return violations (with fixes)."""

    rule_id: str
    description: str

    def check(self, declaration: Declaration, context: AnalysisContext) -> list[Violation]:
        """Interrogate a declaration for a convention breach."""
        ...
