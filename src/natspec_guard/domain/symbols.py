"""Symbol table for user-defined type names declared in one source unit."""

from dataclasses import dataclass
from typing import Optional, Union

from natspec_guard.domain.entities import (
    ContainerKind,
    Declaration,
    DeclarationKind,
    Parameter,
    TypeRef,
)


@dataclass(frozen=True)
class EnumSymbol:
    name: str


@dataclass(frozen=True)
class StructSymbol:
    name: str
    members: tuple[Parameter, ...]


@dataclass(frozen=True)
class ContainerSymbol:
    name: str
    kind: Optional[ContainerKind]


@dataclass(frozen=True)
class ValueTypeSymbol:
    """`type Price is uint256;` style user-defined value type."""
    name: str
    underlying: Optional[TypeRef]


SymbolInfo = Union[EnumSymbol, StructSymbol, ContainerSymbol, ValueTypeSymbol]


class SymbolTable:
    """
    Name -> SymbolInfo for one source unit.

    Built completely before any type is resolved, so declaration order in the
    file never matters. Names nested inside a container are registered both
    bare (`Position`) and qualified (`Vault.Position`).
    """

    def __init__(self, symbols: Optional[dict[str, SymbolInfo]] = None) -> None:
        self._symbols: dict[str, SymbolInfo] = dict(symbols or {})

    @classmethod
    def build(cls, declarations: "tuple[Declaration, ...] | list[Declaration]") -> "SymbolTable":
        table = cls()
        for declaration in declarations:
            table._collect(declaration, scope=None)
        return table

    def _collect(self, node: Declaration, scope: Optional[str]) -> None:
        symbol = self._symbol_for(node)
        if symbol is None:
            return
        self._register(node.name, symbol, scope)
        if node.kind is DeclarationKind.CONTRACT:
            for child in node.children:
                self._collect(child, scope=node.name)

    def _symbol_for(self, node: Declaration) -> Optional[SymbolInfo]:
        if not node.name:
            return None
        if node.kind is DeclarationKind.CONTRACT:
            return ContainerSymbol(node.name, node.container_kind)
        if node.kind is DeclarationKind.ENUM:
            return EnumSymbol(node.name)
        if node.kind is DeclarationKind.STRUCT:
            return StructSymbol(node.name, node.members)
        if node.kind is DeclarationKind.USER_TYPE:
            return ValueTypeSymbol(node.name, node.underlying)
        return None

    def _register(self, name: str, symbol: SymbolInfo, scope: Optional[str]) -> None:
        if scope:
            self._symbols[f"{scope}.{name}"] = symbol
        # First declaration of a bare name wins; later shadows only get the qualified key.
        self._symbols.setdefault(name, symbol)

    def lookup(self, path: str) -> Optional[SymbolInfo]:
        """Find a symbol by its full path, falling back to the last path segment."""
        symbol = self._symbols.get(path)
        if symbol is not None or "." not in path:
            return symbol
        return self._symbols.get(path.rsplit(".", 1)[-1])

    def __len__(self) -> int:
        return len(self._symbols)
