"""Canonical signatures, 4-byte selectors and ERC-165 interface identifiers."""

from collections.abc import Iterable

from natspec_guard.domain.entities import Declaration
from natspec_guard.domain.protocols import HasherProtocol
from natspec_guard.domain.type_resolver import TypeResolver

SELECTOR_BYTES = 4


class SelectorComputer:
    """
    Derive selectors for functions and custom errors.

    The hash is injected so the domain stays free of crypto libraries; any
    correct Keccak-256 yields identical selectors.
    """

    def __init__(self, resolver: TypeResolver, hasher: HasherProtocol) -> None:
        self._resolver = resolver
        self._hasher = hasher

    def signature(self, declaration: Declaration) -> str:
        """`name(type1,type2,...)` for a function or custom error."""
        types = ",".join(self._resolver.resolve(p.type_ref) for p in declaration.parameters)
        return f"{declaration.name}({types})"

    def selector(self, signature: str) -> str:
        """First four bytes of hash(signature) as `0x` + 8 lowercase hex digits."""
        digest = self._hasher.digest(signature.encode("utf-8"))
        return "0x" + digest[:SELECTOR_BYTES].hex()

    def selector_of(self, declaration: Declaration) -> str:
        return self.selector(self.signature(declaration))

    def interface_id(self, functions: Iterable[Declaration]) -> str:
        """XOR-fold of the function selectors; order of `functions` is irrelevant."""
        value = 0
        for function in functions:
            value ^= int(self.selector_of(function), 16)
        return f"0x{value:08x}"
