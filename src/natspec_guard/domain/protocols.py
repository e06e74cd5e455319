"""Ports implemented by infrastructure and consumed by domain and use cases."""

from typing import Optional, Protocol

from natspec_guard.domain.entities import SourceUnit
from natspec_guard.domain.registry_types import RuleRegistryEntry


class HasherProtocol(Protocol):
    """Fixed-output hash used to derive selectors (Keccak-256 in production)."""

    def digest(self, data: bytes) -> bytes:
        """Return the full digest of data."""
        ...


class TelemetryPort(Protocol):
    """Protocol for telemetry/UI updates."""

    def step(self, message: str) -> None: ...
    def error(self, message: str) -> None: ...
    def warning(self, message: str) -> None: ...
    def handshake(self) -> None: ...


class FileSystemProtocol(Protocol):
    """Protocol for filesystem operations - abstracts Path usage."""

    def exists(self, path: str) -> bool:
        """Check if path exists."""
        ...

    def glob_solidity_files(self, path: str) -> list[str]:
        """Get all Solidity files in path (recursive if directory)."""
        ...

    def read_text(self, path: str, encoding: str = "utf-8") -> str:
        """Read text content of a file."""
        ...

    def write_text(self, path: str, content: str, encoding: str = "utf-8") -> None:
        """Write text content to a file."""
        ...


class AstGatewayProtocol(Protocol):
    """Turns an externally produced AST plus source text into a SourceUnit."""

    def load_unit(self, source_path: str, ast_path: Optional[str] = None) -> SourceUnit:
        """Load source text and AST for source_path."""
        ...

    def build_unit(self, path: str, text: str, ast: dict[str, object]) -> SourceUnit:
        """Build a SourceUnit from an already decoded AST document."""
        ...


class GuidanceServiceProtocol(Protocol):
    """Rule registry lookups (display names, instructions)."""

    def get_entry(self, rule_id: str) -> Optional[RuleRegistryEntry]: ...
    def get_display_name(self, rule_id: str) -> str: ...
    def get_manual_instructions(self, rule_id: str) -> str: ...
    def known_rule_ids(self) -> list[str]: ...
    def is_fixable(self, rule_id: str) -> bool: ...
