from typing import TYPE_CHECKING, Any, Optional, cast

from natspec_guard.domain.config import ConfigurationLoader
from natspec_guard.domain.rules.factory import RuleFactory
from natspec_guard.infrastructure.config_file_loader import ConfigFileLoader
from natspec_guard.infrastructure.gateways.filesystem_gateway import FileSystemGateway
from natspec_guard.infrastructure.gateways.keccak_gateway import Keccak256Hasher
from natspec_guard.infrastructure.gateways.solidity_ast_gateway import SolidityAstGateway
from natspec_guard.infrastructure.reporters import TerminalAuditReporter
from natspec_guard.infrastructure.services.guidance_service import GuidanceService
from natspec_guard.interface.telemetry import ProjectTelemetry

if TYPE_CHECKING:
    from natspec_guard.domain.protocols import (
        AstGatewayProtocol,
        FileSystemProtocol,
        HasherProtocol,
        TelemetryPort,
    )


class NatspecGuardContainer:
    """Dependency Injection Container for natspec-guard."""

    def __init__(self, config_loader: Optional[ConfigurationLoader] = None) -> None:
        self._singletons: dict[str, Any] = {}
        self._register_defaults(config_loader)

    def _register_defaults(self, config_loader: Optional[ConfigurationLoader]) -> None:
        """Register default implementations for protocols."""
        if config_loader is None:
            config_dict, tool_section = ConfigFileLoader.load_config_from_fs()
            config_loader = ConfigurationLoader(config_dict, tool_section)
        self.register_singleton("ConfigurationLoader", config_loader)

        self.register_singleton(
            "TelemetryPort", ProjectTelemetry("NATSPEC-GUARD", "cyan", "selector & NatSpec audit"))
        filesystem = FileSystemGateway(exclude_paths=config_loader.exclude_paths)
        self.register_singleton("FileSystemGateway", filesystem)
        self.register_singleton(
            "SolidityAstGateway",
            SolidityAstGateway(filesystem=filesystem, ast_suffix=config_loader.ast_suffix),
        )
        self.register_singleton("Hasher", Keccak256Hasher())

        guidance_service = GuidanceService()
        self.register_singleton("GuidanceService", guidance_service)
        self.register_singleton("AuditReporter", TerminalAuditReporter(guidance_service))
        self.register_singleton("RuleFactory", RuleFactory(config_loader))

    def register_singleton(self, key: str, instance: Any) -> None:
        """Register a singleton instance."""
        self._singletons[key] = instance

    def get(self, key: str) -> Any:
        """Retrieve a dependency by key. Prefer explicit get_* methods for type safety."""
        if key in self._singletons:
            return self._singletons[key]
        raise ValueError(f"Dependency '{key}' not registered.")

    def get_config_loader(self) -> ConfigurationLoader:
        """Return the configuration loader (created at composition root)."""
        return cast(ConfigurationLoader, self.get("ConfigurationLoader"))

    def get_telemetry_port(self) -> "TelemetryPort":
        """Return the telemetry/UI port."""
        return cast("TelemetryPort", self.get("TelemetryPort"))

    def get_filesystem_gateway(self) -> "FileSystemProtocol":
        """Return the filesystem gateway."""
        return cast("FileSystemProtocol", self.get("FileSystemGateway"))

    def get_ast_gateway(self) -> "AstGatewayProtocol":
        """Return the solidity-parser AST gateway."""
        return cast("AstGatewayProtocol", self.get("SolidityAstGateway"))

    def get_hasher(self) -> "HasherProtocol":
        """Return the Keccak-256 hasher."""
        return cast("HasherProtocol", self.get("Hasher"))

    def get_guidance_service(self) -> GuidanceService:
        """Return the guidance service (rule registry)."""
        return cast(GuidanceService, self.get("GuidanceService"))

    def get_reporter(self) -> TerminalAuditReporter:
        """Return the audit reporter."""
        return cast(TerminalAuditReporter, self.get("AuditReporter"))

    def get_rule_factory(self) -> RuleFactory:
        """Return the rule factory."""
        return cast(RuleFactory, self.get("RuleFactory"))
