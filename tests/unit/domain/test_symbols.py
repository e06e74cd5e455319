"""Unit tests for SymbolTable."""

from natspec_guard.domain.entities import (
    ContainerKind,
    Declaration,
    DeclarationKind,
    ElementaryType,
    Parameter,
    SourceRange,
)
from natspec_guard.domain.symbols import (
    ContainerSymbol,
    EnumSymbol,
    StructSymbol,
    SymbolTable,
    ValueTypeSymbol,
)

_R = SourceRange(0, 1)


def _decl(kind: DeclarationKind, name: str, **fields: object) -> Declaration:
    return Declaration(kind=kind, name=name, range=_R, **fields)  # type: ignore[arg-type]


class TestSymbolTable:
    def test_registers_top_level_types(self) -> None:
        members = (Parameter("x", ElementaryType("uint256")),)
        table = SymbolTable.build([
            _decl(DeclarationKind.ENUM, "Color"),
            _decl(DeclarationKind.STRUCT, "Point", members=members),
            _decl(DeclarationKind.USER_TYPE, "Price", underlying=ElementaryType("uint128")),
        ])

        assert table.lookup("Color") == EnumSymbol("Color")
        assert table.lookup("Point") == StructSymbol("Point", members)
        assert table.lookup("Price") == ValueTypeSymbol("Price", ElementaryType("uint128"))
        assert len(table) == 3

    def test_nested_names_are_reachable_bare_and_qualified(self) -> None:
        vault = _decl(
            DeclarationKind.CONTRACT,
            "Vault",
            container_kind=ContainerKind.CONTRACT,
            children=(_decl(DeclarationKind.STRUCT, "Position"),),
        )
        table = SymbolTable.build([vault])

        assert isinstance(table.lookup("Vault"), ContainerSymbol)
        assert isinstance(table.lookup("Vault.Position"), StructSymbol)
        assert isinstance(table.lookup("Position"), StructSymbol)

    def test_unknown_qualifier_falls_back_to_last_segment(self) -> None:
        table = SymbolTable.build([_decl(DeclarationKind.ENUM, "Side")])
        assert table.lookup("Book.Side") == EnumSymbol("Side")

    def test_first_bare_name_wins(self) -> None:
        """A later nested declaration with the same name keeps only its qualified key."""
        inner = _decl(DeclarationKind.ENUM, "Position")
        table = SymbolTable.build([
            _decl(DeclarationKind.STRUCT, "Position"),
            _decl(DeclarationKind.CONTRACT, "Vault", children=(inner,)),
        ])

        assert isinstance(table.lookup("Position"), StructSymbol)
        assert isinstance(table.lookup("Vault.Position"), EnumSymbol)

    def test_declaration_order_does_not_matter(self) -> None:
        """Types used before they are declared still resolve once the table is built."""
        table = SymbolTable.build([
            _decl(DeclarationKind.FUNCTION, "f"),
            _decl(DeclarationKind.ENUM, "Late"),
        ])
        assert table.lookup("Late") == EnumSymbol("Late")

    def test_functions_and_unnamed_nodes_are_not_symbols(self) -> None:
        table = SymbolTable.build([
            _decl(DeclarationKind.FUNCTION, "transfer"),
            _decl(DeclarationKind.EVENT, "Transfer"),
            _decl(DeclarationKind.STRUCT, ""),
        ])
        assert len(table) == 0
        assert table.lookup("transfer") is None
