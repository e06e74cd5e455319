"""Unit tests for SolidityAstGateway."""

import json
from pathlib import Path

import pytest

from natspec_guard.domain.entities import (
    ArrayType,
    ContainerKind,
    DeclarationKind,
    ElementaryType,
    SourceRange,
    UnsupportedType,
    UserDefinedType,
)
from natspec_guard.domain.exceptions import AstLoadError
from natspec_guard.domain.selectors import SelectorComputer
from natspec_guard.domain.symbols import SymbolTable
from natspec_guard.domain.type_resolver import TypeResolver
from natspec_guard.infrastructure.gateways.filesystem_gateway import FileSystemGateway
from natspec_guard.infrastructure.gateways.keccak_gateway import Keccak256Hasher
from natspec_guard.infrastructure.gateways.solidity_ast_gateway import SolidityAstGateway


def _elementary(name: str) -> dict:
    return {"type": "ElementaryTypeName", "name": name}


def _param(name: str, type_name: dict) -> dict:
    return {"type": "VariableDeclaration", "name": name, "typeName": type_name}


VAULT_AST = {
    "type": "SourceUnit",
    "children": [
        {"type": "PragmaDirective", "name": "solidity", "value": "^0.8.20", "range": [0, 23]},
        {
            "type": "ContractDefinition",
            "name": "IVault",
            "kind": "interface",
            "range": [26, 300],
            "subNodes": [
                {
                    "type": "StructDefinition",
                    "name": "Position",
                    "range": [50, 90],
                    "members": [_param("size", _elementary("uint")), _param("owner", _elementary("address"))],
                },
                {"type": "EnumDefinition", "name": "Side", "range": [95, 120], "members": []},
                {
                    "type": "CustomErrorDefinition",
                    "name": "Denied",
                    "range": [125, 180],
                    "parameters": [
                        _param("p", {"type": "UserDefinedTypeName", "namePath": "Position"}),
                        _param("s", {"type": "UserDefinedTypeName", "namePath": "IVault.Side"}),
                        _param("xs", {"type": "ArrayTypeName", "baseTypeName": _elementary("uint"), "length": None}),
                        _param(
                            "ys",
                            {
                                "type": "ArrayTypeName",
                                "baseTypeName": _elementary("bytes32"),
                                "length": {"type": "NumberLiteral", "number": "2"},
                            },
                        ),
                    ],
                },
                {
                    "type": "FunctionDefinition",
                    "name": "open",
                    "range": [185, 230],
                    "parameters": [_param("p", {"type": "UserDefinedTypeName", "namePath": "Position"})],
                    "isConstructor": False,
                    "isReceiveEther": False,
                    "isFallback": False,
                },
                {
                    "type": "FunctionDefinition",
                    "name": None,
                    "range": [235, 270],
                    "parameters": [],
                    "isReceiveEther": True,
                },
            ],
        },
    ],
}


@pytest.fixture
def gateway() -> SolidityAstGateway:
    return SolidityAstGateway(FileSystemGateway())


class TestBuildUnit:
    def test_declarations_and_ranges(self, gateway: SolidityAstGateway) -> None:
        source = gateway.build_unit("src/IVault.sol", "x" * 301, VAULT_AST)

        assert len(source.declarations) == 1
        vault = source.declarations[0]
        assert vault.kind is DeclarationKind.CONTRACT
        assert vault.container_kind is ContainerKind.INTERFACE
        assert vault.is_interface
        assert vault.range == SourceRange(26, 301)
        assert [d.kind for d in vault.children] == [
            DeclarationKind.STRUCT,
            DeclarationKind.ENUM,
            DeclarationKind.CUSTOM_ERROR,
            DeclarationKind.FUNCTION,
            DeclarationKind.FUNCTION,
        ]
        assert [f.name for f in vault.functions()] == ["open"]
        assert vault.children[4].is_special_function

    def test_signature_from_parsed_types(self, gateway: SolidityAstGateway) -> None:
        source = gateway.build_unit("src/IVault.sol", "x" * 301, VAULT_AST)
        computer = SelectorComputer(TypeResolver(SymbolTable.build(source.declarations)), Keccak256Hasher())
        denied = source.declarations[0].children[2]

        assert computer.signature(denied) == "Denied((uint256,address),uint8,uint256[],bytes32[2])"

    def test_ast_wrapper_object_is_accepted(self, gateway: SolidityAstGateway) -> None:
        source = gateway.build_unit("a.sol", "", {"ast": {"type": "SourceUnit", "children": []}})
        assert source.declarations == ()

    def test_non_source_unit_root_is_rejected(self, gateway: SolidityAstGateway) -> None:
        with pytest.raises(AstLoadError, match="not a SourceUnit"):
            gateway.build_unit("a.sol", "", {"type": "ContractDefinition"})

    def test_state_variable_and_value_type(self, gateway: SolidityAstGateway) -> None:
        ast = {
            "type": "SourceUnit",
            "children": [
                {"type": "TypeDefinition", "name": "Price", "range": [0, 21], "definition": _elementary("uint128")},
                {
                    "type": "ContractDefinition",
                    "name": "Book",
                    "kind": "abstract",
                    "range": [23, 60],
                    "subNodes": [
                        {
                            "type": "StateVariableDeclaration",
                            "range": [40, 55],
                            "variables": [{"type": "VariableDeclaration", "name": "total"}],
                        }
                    ],
                },
            ],
        }
        price, book = gateway.build_unit("a.sol", "", ast).declarations

        assert price.kind is DeclarationKind.USER_TYPE
        assert price.underlying == ElementaryType("uint128")
        assert book.container_kind is ContainerKind.ABSTRACT
        assert book.children[0].kind is DeclarationKind.STATE_VARIABLE
        assert book.children[0].name == "total"

    def test_missing_range_is_kept_as_none(self, gateway: SolidityAstGateway) -> None:
        ast = {"type": "SourceUnit", "children": [{"type": "CustomErrorDefinition", "name": "E"}]}
        assert gateway.build_unit("a.sol", "", ast).declarations[0].range is None


class TestTypeRef:
    @pytest.mark.parametrize(
        ("node", "expected"),
        [
            (_elementary("address"), ElementaryType("address")),
            ({"type": "UserDefinedTypeName", "namePath": "Lib.Point"}, UserDefinedType("Lib.Point")),
            (
                {"type": "ArrayTypeName", "baseTypeName": _elementary("uint8"), "length": {"number": "0x10"}},
                ArrayType(ElementaryType("uint8"), 16),
            ),
            (
                {"type": "ArrayTypeName", "baseTypeName": _elementary("uint8"), "length": {"number": "1_000"}},
                ArrayType(ElementaryType("uint8"), 1000),
            ),
            (
                {"type": "ArrayTypeName", "baseTypeName": _elementary("uint8"), "length": {"type": "Identifier", "name": "N"}},
                UnsupportedType("non-literal array length"),
            ),
            ({"type": "Mapping"}, UnsupportedType("Mapping")),
            (None, None),
        ],
    )
    def test_type_ref(self, gateway: SolidityAstGateway, node: object, expected: object) -> None:
        assert gateway.type_ref(node) == expected


class TestLoadUnit:
    def test_reads_sibling_ast_file(self, tmp_path: Path, gateway: SolidityAstGateway) -> None:
        sol = tmp_path / "A.sol"
        sol.write_text("error E();\n", encoding="utf-8")
        ast = {"type": "SourceUnit", "children": [{"type": "CustomErrorDefinition", "name": "E", "range": [0, 9]}]}
        (tmp_path / "A.sol.ast.json").write_text(json.dumps(ast), encoding="utf-8")

        source = gateway.load_unit(str(sol))

        assert source.text == "error E();\n"
        assert source.declarations[0].range == SourceRange(0, 10)

    def test_custom_suffix(self, tmp_path: Path) -> None:
        sol = tmp_path / "A.sol"
        sol.write_text("", encoding="utf-8")
        (tmp_path / "A.sol.json").write_text('{"type": "SourceUnit", "children": []}', encoding="utf-8")
        gateway = SolidityAstGateway(FileSystemGateway(), ast_suffix=".json")

        assert gateway.ast_path_for(str(sol)) == f"{sol}.json"
        assert gateway.load_unit(str(sol)).declarations == ()

    def test_missing_ast(self, tmp_path: Path, gateway: SolidityAstGateway) -> None:
        sol = tmp_path / "A.sol"
        sol.write_text("", encoding="utf-8")
        with pytest.raises(AstLoadError, match="AST file not found"):
            gateway.load_unit(str(sol))

    @pytest.mark.parametrize(("raw", "match"), [("{not json", "invalid AST JSON"), ("[]", "is not an object")])
    def test_bad_ast_content(self, tmp_path: Path, gateway: SolidityAstGateway, raw: str, match: str) -> None:
        sol = tmp_path / "A.sol"
        sol.write_text("", encoding="utf-8")
        (tmp_path / "A.sol.ast.json").write_text(raw, encoding="utf-8")
        with pytest.raises(AstLoadError, match=match):
            gateway.load_unit(str(sol))
