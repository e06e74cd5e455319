"""Use Case: check a set of Solidity files and collect per-file reports."""

import logging
from collections.abc import Sequence
from typing import Optional

from natspec_guard.domain.entities import AuditResult, FileReport
from natspec_guard.domain.exceptions import AstLoadError
from natspec_guard.domain.protocols import (
    AstGatewayProtocol,
    FileSystemProtocol,
    TelemetryPort,
)
from natspec_guard.use_cases.analyze_unit import AnalyzeUnitUseCase

logger = logging.getLogger(__name__)


class CheckAuditUseCase:
    """Expand targets to `.sol` files, load each with its AST and analyze it."""

    def __init__(
        self,
        analyzer: AnalyzeUnitUseCase,
        ast_gateway: AstGatewayProtocol,
        filesystem: FileSystemProtocol,
        telemetry: Optional[TelemetryPort] = None,
    ) -> None:
        self.analyzer = analyzer
        self.ast_gateway = ast_gateway
        self.filesystem = filesystem
        self.telemetry = telemetry

    def collect_files(self, targets: Sequence[str]) -> list[str]:
        files: list[str] = []
        for target in targets:
            if not self.filesystem.exists(target):
                logger.warning("Target does not exist: %s", target)
                continue
            for path in self.filesystem.glob_solidity_files(target):
                if path not in files:
                    files.append(path)
        return files

    def execute(self, targets: Sequence[str]) -> AuditResult:
        files = self.collect_files(targets)
        if self.telemetry:
            self.telemetry.step(f"Checking {len(files)} Solidity file(s)")
        reports: list[FileReport] = []
        load_errors: list[str] = []
        for path in files:
            try:
                unit = self.ast_gateway.load_unit(path)
            except AstLoadError as exc:
                logger.error("Cannot analyze %s: %s", path, exc.reason)
                load_errors.append(str(exc))
                continue
            reports.append(self.analyzer.execute(unit))
        return AuditResult(reports=reports, load_errors=load_errors)
