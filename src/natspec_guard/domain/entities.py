"""Domain entities: declarations, type references, text edits and analysis results."""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import TYPE_CHECKING, Optional, Union

if TYPE_CHECKING:
    from natspec_guard.domain.rules import Violation


class DeclarationKind(Enum):
    """Closed set of declaration kinds the engine understands."""
    CONTRACT = "contract"
    FUNCTION = "function"
    EVENT = "event"
    CUSTOM_ERROR = "custom_error"
    STATE_VARIABLE = "state_variable"
    MODIFIER = "modifier"
    STRUCT = "struct"
    ENUM = "enum"
    USER_TYPE = "user_type"


class ContainerKind(Enum):
    """Flavour of a contract-like declaration."""
    CONTRACT = "contract"
    ABSTRACT = "abstract"
    INTERFACE = "interface"
    LIBRARY = "library"


@dataclass(frozen=True)
class SourceRange:
    """Character offsets of a node: start inclusive, end exclusive."""
    start: int
    end: int


@dataclass(frozen=True)
class ElementaryType:
    name: str


@dataclass(frozen=True)
class UserDefinedType:
    path: str


@dataclass(frozen=True)
class ArrayType:
    element: "TypeRef"
    length: Optional[int] = None


@dataclass(frozen=True)
class UnsupportedType:
    """A type shape the resolver does not model (mappings, function types, ...)."""
    description: str = ""


TypeRef = Union[ElementaryType, UserDefinedType, ArrayType, UnsupportedType]


@dataclass(frozen=True)
class Parameter:
    name: str
    type_ref: Optional[TypeRef]


@dataclass(frozen=True)
class Declaration:
    """
    Read-only view of one declaration node of a parsed source unit.

    Gateways build these from an external AST; rules never create them.
    """
    kind: DeclarationKind
    name: str
    range: Optional[SourceRange]
    parameters: tuple[Parameter, ...] = ()
    members: tuple[Parameter, ...] = ()
    children: tuple["Declaration", ...] = ()
    container_kind: Optional[ContainerKind] = None
    underlying: Optional[TypeRef] = None
    is_special_function: bool = False
    """True for constructors, fallback and receive functions."""

    @property
    def is_interface(self) -> bool:
        return self.kind is DeclarationKind.CONTRACT and self.container_kind is ContainerKind.INTERFACE

    def functions(self) -> list["Declaration"]:
        """Named, non-special function members of a container."""
        return [
            child for child in self.children
            if child.kind is DeclarationKind.FUNCTION
            and child.name
            and not child.is_special_function
        ]

    def walk(self) -> list["Declaration"]:
        """Pre-order traversal of this declaration and its nested declarations."""
        nodes: list[Declaration] = [self]
        for child in self.children:
            nodes.extend(child.walk())
        return nodes

    def shifted(self, edits: "tuple[TextEdit, ...]") -> "Declaration":
        """Copy with ranges moved to where they land once `edits` are applied."""
        new_range = None
        if self.range is not None:
            new_range = SourceRange(
                shift_offset(self.range.start, edits), shift_offset(self.range.end, edits))
        return replace(
            self,
            range=new_range,
            children=tuple(child.shifted(edits) for child in self.children),
        )


@dataclass(frozen=True)
class SourceUnit:
    """A parsed file: its path, raw text and top-level declarations."""
    path: str
    text: str
    declarations: tuple[Declaration, ...] = ()

    def walk(self) -> list[Declaration]:
        nodes: list[Declaration] = []
        for declaration in self.declarations:
            nodes.extend(declaration.walk())
        return nodes

    def rebased(self, text: str, edits: "tuple[TextEdit, ...]") -> "SourceUnit":
        """The unit as it reads after `edits` (already applied to produce `text`)."""
        return SourceUnit(
            path=self.path,
            text=text,
            declarations=tuple(d.shifted(edits) for d in self.declarations),
        )


@dataclass(frozen=True)
class TextEdit:
    """
    Replace text[start:end + 1] with replacement.

    `end` is inclusive, so an edit touching a single character has start == end.
    """
    start: int
    end: int
    replacement: str

    @property
    def stop(self) -> int:
        """Exclusive end, for slicing."""
        return self.end + 1


@dataclass(frozen=True)
class FixOutcome:
    """Result of applying a batch of edits to one text."""
    text: str
    applied: tuple[TextEdit, ...] = ()
    skipped: tuple[TextEdit, ...] = ()

    @property
    def changed(self) -> bool:
        return bool(self.applied)


@dataclass(frozen=True)
class FileReport:
    """Violations and failures for one analyzed file."""
    path: str
    violations: tuple["Violation", ...] = ()
    errors: tuple[str, ...] = ()

    def has_violations(self) -> bool:
        return bool(self.violations)


@dataclass(frozen=True)
class AuditResult:
    """Aggregate of per-file reports for one CLI run."""
    reports: list[FileReport] = field(default_factory=list)
    load_errors: list[str] = field(default_factory=list)

    def violation_count(self) -> int:
        return sum(len(r.violations) for r in self.reports)

    def has_violations(self) -> bool:
        return self.violation_count() > 0

    def has_errors(self) -> bool:
        return bool(self.load_errors) or any(r.errors for r in self.reports)


def shift_offset(offset: int, edits: "tuple[TextEdit, ...]") -> int:
    """Map an offset in the original text to the text produced by `edits`."""
    delta = 0
    for edit in edits:
        if edit.stop <= offset:
            delta += len(edit.replacement) - (edit.stop - edit.start)
        elif edit.start <= offset:
            # Inside a replaced region: keep the distance to the region end.
            tail = edit.stop - offset
            return edit.start + delta + max(0, len(edit.replacement) - tail)
    return offset + delta
