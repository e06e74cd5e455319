"""Unit tests for TypeResolver."""

import pytest

from natspec_guard.domain.entities import (
    ArrayType,
    ContainerKind,
    Declaration,
    DeclarationKind,
    ElementaryType,
    Parameter,
    SourceRange,
    UnsupportedType,
    UserDefinedType,
)
from natspec_guard.domain.symbols import SymbolTable
from natspec_guard.domain.type_resolver import UNKNOWN_TYPE, TypeResolver

_R = SourceRange(0, 1)


@pytest.fixture
def resolver() -> TypeResolver:
    point = Declaration(
        kind=DeclarationKind.STRUCT,
        name="Point",
        range=_R,
        members=(
            Parameter("x", ElementaryType("uint")),
            Parameter("owner", ElementaryType("address")),
        ),
    )
    outer = Declaration(
        kind=DeclarationKind.STRUCT,
        name="Outer",
        range=_R,
        members=(
            Parameter("p", UserDefinedType("Point")),
            Parameter("xs", ArrayType(ElementaryType("uint8"))),
        ),
    )
    declarations = [
        outer,
        point,
        Declaration(kind=DeclarationKind.ENUM, name="Color", range=_R),
        Declaration(
            kind=DeclarationKind.USER_TYPE, name="Price", range=_R, underlying=ElementaryType("uint128")),
        Declaration(
            kind=DeclarationKind.CONTRACT, name="Token", range=_R, container_kind=ContainerKind.CONTRACT),
    ]
    return TypeResolver(SymbolTable.build(declarations))


class TestTypeResolver:
    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("uint", "uint256"),
            ("int", "int256"),
            ("byte", "bytes1"),
            ("fixed", "fixed128x18"),
            ("ufixed", "ufixed128x18"),
            ("address", "address"),
            ("bytes32", "bytes32"),
            ("string", "string"),
        ],
    )
    def test_elementary_names(self, resolver: TypeResolver, name: str, expected: str) -> None:
        assert resolver.resolve(ElementaryType(name)) == expected

    def test_enum_is_uint8(self, resolver: TypeResolver) -> None:
        assert resolver.resolve(UserDefinedType("Color")) == "uint8"

    def test_struct_is_tuple_of_members(self, resolver: TypeResolver) -> None:
        assert resolver.resolve(UserDefinedType("Point")) == "(uint256,address)"

    def test_nested_struct_declared_later(self, resolver: TypeResolver) -> None:
        assert resolver.resolve(UserDefinedType("Outer")) == "((uint256,address),uint8[])"

    def test_value_type_resolves_to_underlying(self, resolver: TypeResolver) -> None:
        assert resolver.resolve(UserDefinedType("Price")) == "uint128"

    @pytest.mark.parametrize("path", ["Token", "IERC20", "lib.Other"])
    def test_contracts_and_unknown_names_are_address(self, resolver: TypeResolver, path: str) -> None:
        assert resolver.resolve(UserDefinedType(path)) == "address"

    def test_fixed_array_of_enum(self, resolver: TypeResolver) -> None:
        assert resolver.resolve(ArrayType(UserDefinedType("Color"), 3)) == "uint8[3]"

    def test_dynamic_array_of_fixed_arrays(self, resolver: TypeResolver) -> None:
        nested = ArrayType(ArrayType(ElementaryType("uint"), 2))
        assert resolver.resolve(nested) == "uint256[2][]"

    def test_struct_array(self, resolver: TypeResolver) -> None:
        assert resolver.resolve(ArrayType(UserDefinedType("Point"))) == "(uint256,address)[]"

    def test_fixed_struct_array(self, resolver: TypeResolver) -> None:
        assert resolver.resolve(ArrayType(UserDefinedType("Point"), 3)) == "(uint256,address)[3]"

    def test_unsupported_shape_is_unknown(self, resolver: TypeResolver) -> None:
        assert resolver.resolve(UnsupportedType("Mapping")) == UNKNOWN_TYPE

    def test_missing_type_is_empty(self, resolver: TypeResolver) -> None:
        assert resolver.resolve(None) == ""
