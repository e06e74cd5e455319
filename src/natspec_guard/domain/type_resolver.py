"""Resolve declaration parameter types to canonical ABI type strings."""

from typing import Optional

from natspec_guard.domain.entities import (
    ArrayType,
    ElementaryType,
    TypeRef,
    UserDefinedType,
)
from natspec_guard.domain.symbols import (
    EnumSymbol,
    StructSymbol,
    SymbolTable,
    ValueTypeSymbol,
)

UNKNOWN_TYPE = "unknown"

# Aliases Solidity accepts in source but never uses in a canonical signature.
ELEMENTARY_ALIASES: dict[str, str] = {
    "uint": "uint256",
    "int": "int256",
    "byte": "bytes1",
    "fixed": "fixed128x18",
    "ufixed": "ufixed128x18",
}


class TypeResolver:
    """
    Total mapping from TypeRef to its ABI string.

    Never raises: shapes it does not model come back as "unknown" so one odd
    parameter cannot abort analysis of the whole file.
    """

    def __init__(self, symbols: SymbolTable) -> None:
        self._symbols = symbols

    def resolve(self, type_ref: Optional[TypeRef]) -> str:
        if type_ref is None:
            return ""
        if isinstance(type_ref, ElementaryType):
            return ELEMENTARY_ALIASES.get(type_ref.name, type_ref.name)
        if isinstance(type_ref, UserDefinedType):
            return self._resolve_user_defined(type_ref.path)
        if isinstance(type_ref, ArrayType):
            element = self.resolve(type_ref.element)
            if type_ref.length is not None:
                return f"{element}[{type_ref.length}]"
            return f"{element}[]"
        return UNKNOWN_TYPE

    def _resolve_user_defined(self, path: str) -> str:
        symbol = self._symbols.lookup(path)
        if isinstance(symbol, EnumSymbol):
            return "uint8"
        if isinstance(symbol, StructSymbol):
            members = ",".join(self.resolve(m.type_ref) for m in symbol.members)
            return f"({members})"
        if isinstance(symbol, ValueTypeSymbol):
            return self.resolve(symbol.underlying)
        # Contracts, interfaces, libraries and names from other files.
        return "address"
