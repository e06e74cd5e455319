"""
Solidity AST Gateway - reads `@solidity-parser/parser` JSON (parsed with `range: true`).

The parser's `range` is `[start, end]` with an inclusive end; declarations
carry `[start, end + 1)` so the domain works with half-open ranges.
"""

import json
import logging
from typing import Any, Optional

from natspec_guard.domain.constants import DEFAULT_AST_SUFFIX
from natspec_guard.domain.entities import (
    ArrayType,
    ContainerKind,
    Declaration,
    DeclarationKind,
    ElementaryType,
    Parameter,
    SourceRange,
    SourceUnit,
    TypeRef,
    UnsupportedType,
    UserDefinedType,
)
from natspec_guard.domain.exceptions import AstLoadError
from natspec_guard.domain.protocols import AstGatewayProtocol, FileSystemProtocol

logger = logging.getLogger(__name__)

AstNode = dict[str, Any]

_KIND_BY_NODE_TYPE: dict[str, DeclarationKind] = {
    "ContractDefinition": DeclarationKind.CONTRACT,
    "FunctionDefinition": DeclarationKind.FUNCTION,
    "EventDefinition": DeclarationKind.EVENT,
    "CustomErrorDefinition": DeclarationKind.CUSTOM_ERROR,
    "StateVariableDeclaration": DeclarationKind.STATE_VARIABLE,
    "ModifierDefinition": DeclarationKind.MODIFIER,
    "StructDefinition": DeclarationKind.STRUCT,
    "EnumDefinition": DeclarationKind.ENUM,
    "TypeDefinition": DeclarationKind.USER_TYPE,
}

_CONTAINER_KINDS: dict[str, ContainerKind] = {kind.value: kind for kind in ContainerKind}


class SolidityAstGateway(AstGatewayProtocol):
    """Converts solidity-parser JSON into domain declarations."""

    def __init__(self, filesystem: FileSystemProtocol, ast_suffix: str = DEFAULT_AST_SUFFIX) -> None:
        self._filesystem = filesystem
        self._ast_suffix = ast_suffix

    def ast_path_for(self, source_path: str) -> str:
        return f"{source_path}{self._ast_suffix}"

    def load_unit(self, source_path: str, ast_path: Optional[str] = None) -> SourceUnit:
        """Read `source_path` and its AST JSON (default: `<source_path><suffix>`)."""
        ast_path = ast_path or self.ast_path_for(source_path)
        if not self._filesystem.exists(ast_path):
            raise AstLoadError(source_path, f"AST file not found: {ast_path}")
        try:
            text = self._filesystem.read_text(source_path)
            raw = self._filesystem.read_text(ast_path)
        except OSError as exc:
            raise AstLoadError(source_path, str(exc)) from exc
        try:
            document = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise AstLoadError(source_path, f"invalid AST JSON in {ast_path}: {exc}") from exc
        if not isinstance(document, dict):
            raise AstLoadError(source_path, f"AST root in {ast_path} is not an object")
        return self.build_unit(source_path, text, document)

    def build_unit(self, path: str, text: str, ast: dict[str, object]) -> SourceUnit:
        root = ast.get("ast", ast) if ast.get("type") != "SourceUnit" else ast
        if not isinstance(root, dict) or root.get("type") != "SourceUnit":
            raise AstLoadError(path, "AST root is not a SourceUnit")
        children = root.get("children") or []
        declarations = tuple(
            d for d in (self._declaration(child) for child in children) if d is not None
        )
        logger.debug("%s: %d top-level declaration(s)", path, len(declarations))
        return SourceUnit(path=path, text=text, declarations=declarations)

    # -- declarations ---------------------------------------------------

    def _declaration(self, node: AstNode) -> Optional[Declaration]:
        if not isinstance(node, dict):
            return None
        kind = _KIND_BY_NODE_TYPE.get(str(node.get("type")))
        if kind is None:
            return None

        name = node.get("name")
        if kind is DeclarationKind.STATE_VARIABLE:
            variables = node.get("variables") or []
            name = variables[0].get("name") if variables and isinstance(variables[0], dict) else None

        children: tuple[Declaration, ...] = ()
        container_kind = None
        if kind is DeclarationKind.CONTRACT:
            container_kind = _CONTAINER_KINDS.get(str(node.get("kind")), ContainerKind.CONTRACT)
            children = tuple(
                d for d in (self._declaration(sub) for sub in node.get("subNodes") or []) if d is not None
            )

        members: tuple[Parameter, ...] = ()
        if kind is DeclarationKind.STRUCT:
            members = self._parameters(node.get("members"))

        underlying = None
        if kind is DeclarationKind.USER_TYPE:
            underlying = self.type_ref(node.get("definition"))

        return Declaration(
            kind=kind,
            name=str(name) if name else "",
            range=self._range(node),
            parameters=self._parameters(node.get("parameters")),
            members=members,
            children=children,
            container_kind=container_kind,
            underlying=underlying,
            is_special_function=bool(
                node.get("isConstructor") or node.get("isFallback") or node.get("isReceiveEther")
            ),
        )

    def _range(self, node: AstNode) -> Optional[SourceRange]:
        raw = node.get("range")
        if isinstance(raw, (list, tuple)) and len(raw) == 2 and all(isinstance(x, int) for x in raw):
            return SourceRange(raw[0], raw[1] + 1)
        return None

    def _parameters(self, raw: object) -> tuple[Parameter, ...]:
        if not isinstance(raw, list):
            return ()
        params = []
        for item in raw:
            if not isinstance(item, dict):
                continue
            params.append(Parameter(name=str(item.get("name") or ""), type_ref=self.type_ref(item.get("typeName"))))
        return tuple(params)

    # -- types ----------------------------------------------------------

    def type_ref(self, node: object) -> Optional[TypeRef]:
        """Map a solidity-parser TypeName node to a TypeRef."""
        if not isinstance(node, dict):
            return None
        node_type = node.get("type")
        if node_type == "ElementaryTypeName":
            return ElementaryType(str(node.get("name")))
        if node_type == "UserDefinedTypeName":
            return UserDefinedType(str(node.get("namePath")))
        if node_type == "ArrayTypeName":
            element = self.type_ref(node.get("baseTypeName")) or UnsupportedType("missing element type")
            length = node.get("length")
            if length is None:
                return ArrayType(element)
            value = self._array_length(length)
            if value is None:
                return UnsupportedType("non-literal array length")
            return ArrayType(element, value)
        return UnsupportedType(str(node_type))

    def _array_length(self, length: object) -> Optional[int]:
        if isinstance(length, int) and not isinstance(length, bool):
            return length
        if isinstance(length, str):
            return self._parse_int(length)
        if isinstance(length, dict):
            for key in ("number", "value"):
                if key in length:
                    return self._array_length(length[key])
        return None

    def _parse_int(self, text: str) -> Optional[int]:
        try:
            return int(text.replace("_", ""), 0)
        except ValueError:
            return None
