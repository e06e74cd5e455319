"""CLI entry points for natspec-guard - Thin Controller using Typer."""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from natspec_guard.domain.config import ConfigurationLoader
from natspec_guard.domain.protocols import (
    AstGatewayProtocol,
    FileSystemProtocol,
    GuidanceServiceProtocol,
    HasherProtocol,
    TelemetryPort,
)
from natspec_guard.domain.rules.factory import RuleFactory
from natspec_guard.domain.selectors import SelectorComputer
from natspec_guard.domain.symbols import SymbolTable
from natspec_guard.domain.type_resolver import TypeResolver
from natspec_guard.infrastructure.reporters import TerminalAuditReporter
from natspec_guard.interface.telemetry import ProjectTelemetry
from natspec_guard.use_cases.analyze_unit import AnalyzeUnitUseCase
from natspec_guard.use_cases.apply_fixes import ApplyFixesUseCase
from natspec_guard.use_cases.check_audit import CheckAuditUseCase

logger = logging.getLogger(__name__)

# B008: avoid function call in default; use module-level singletons for Typer params
_PATHS_ARGUMENT = typer.Argument(
    None, help="Solidity files or directories (default: current directory)")
_RULE_OPTION = typer.Option(
    None, "--rule", "-r", help="Only run this rule id (repeatable)")
_JSON_OPTION = typer.Option(False, "--json", help="Output results as JSON")
_VERBOSE_OPTION = typer.Option(False, "--verbose", "-v", help="Debug logging")
_DRY_RUN_OPTION = typer.Option(
    False, "--dry-run", help="Print a unified diff instead of writing files")
_RULE_ID_ARGUMENT = typer.Argument(..., help="Rule id, e.g. selector-tags")
_SIGNATURES_ARGUMENT = typer.Argument(
    ..., help="Canonical signatures, e.g. 'transfer(address,uint256)'")
_INTERFACE_OPTION = typer.Option(
    False, "--interface", help="Also print the XOR of all given selectors")


@dataclass(frozen=True)
class CLIDependencies:
    """Explicit dependencies for the CLI. All dependencies injected at composition root."""

    config_loader: ConfigurationLoader
    telemetry: TelemetryPort
    filesystem: FileSystemProtocol
    ast_gateway: AstGatewayProtocol
    hasher: HasherProtocol
    guidance_service: GuidanceServiceProtocol
    reporter: TerminalAuditReporter
    rule_factory: RuleFactory


class CLIAppFactory:
    """Creates the Typer app. No top-level functions."""

    @staticmethod
    def resolve_targets(paths: Optional[list[Path]]) -> list[str]:
        """Explicit paths, else the current directory."""
        if paths:
            return [str(p) for p in paths]
        return ["."]

    @staticmethod
    def build_analyzer(deps: CLIDependencies, rules: Optional[list[str]]) -> AnalyzeUnitUseCase:
        only = tuple(rules) if rules else None
        unknown = [r for r in rules or [] if r not in deps.guidance_service.known_rule_ids()]
        if unknown:
            raise typer.BadParameter(f"unknown rule id(s): {', '.join(unknown)}", param_hint="--rule")
        rules_to_run = deps.rule_factory.create_rules(only=only)
        logger.debug("Running rules: %s", ", ".join(r.rule_id for r in rules_to_run))
        return AnalyzeUnitUseCase(rules_to_run, deps.hasher)

    @staticmethod
    def create_app(deps: CLIDependencies) -> typer.Typer:
        """Create the Typer app with explicitly injected dependencies. No Service Locator."""
        app = typer.Typer(
            name="natspec-guard",
            help="Check and fix selector tags and NatSpec comment style in Solidity sources.",
            add_completion=False,
        )

        @app.command()
        def check(
            paths: Optional[list[Path]] = _PATHS_ARGUMENT,
            rule: Optional[list[str]] = _RULE_OPTION,
            json_output: bool = _JSON_OPTION,
            verbose: bool = _VERBOSE_OPTION,
        ) -> None:
            """Report selector-tag and comment-style violations."""
            ProjectTelemetry.configure_logging(verbose)
            if not json_output:
                deps.telemetry.handshake()
            analyzer = CLIAppFactory.build_analyzer(deps, rule)
            use_case = CheckAuditUseCase(
                analyzer=analyzer,
                ast_gateway=deps.ast_gateway,
                filesystem=deps.filesystem,
                telemetry=None if json_output else deps.telemetry,
            )
            audit_result = use_case.execute(CLIAppFactory.resolve_targets(paths))
            if json_output:
                deps.reporter.report_json(audit_result)
            else:
                deps.reporter.report_audit(audit_result)
            if audit_result.has_violations() or audit_result.has_errors():
                raise typer.Exit(code=1)

        @app.command()
        def fix(
            paths: Optional[list[Path]] = _PATHS_ARGUMENT,
            rule: Optional[list[str]] = _RULE_OPTION,
            dry_run: bool = _DRY_RUN_OPTION,
            verbose: bool = _VERBOSE_OPTION,
        ) -> None:
            """Apply the fixes attached to every violation, in place."""
            ProjectTelemetry.configure_logging(verbose)
            deps.telemetry.handshake()
            analyzer = CLIAppFactory.build_analyzer(deps, rule)
            checker = CheckAuditUseCase(
                analyzer=analyzer, ast_gateway=deps.ast_gateway, filesystem=deps.filesystem)
            files = checker.collect_files(CLIAppFactory.resolve_targets(paths))
            use_case = ApplyFixesUseCase(
                analyzer=analyzer,
                ast_gateway=deps.ast_gateway,
                filesystem=deps.filesystem,
                telemetry=deps.telemetry,
                max_passes=deps.config_loader.max_fix_passes,
                write=not dry_run,
            )
            results = use_case.execute(files)
            changed = [r for r in results if r.changed]
            if dry_run:
                out = Console()
                for result in changed:
                    out.print(result.unified_diff(), end="", markup=False, highlight=False)
            remaining = sum(r.remaining for r in results)
            deps.telemetry.step(
                f"Fix complete. Files {'to change' if dry_run else 'repaired'}: {len(changed)}")
            if remaining:
                deps.telemetry.warning(
                    f"{remaining} overlapping edit(s) left; regenerate the AST and run fix again.")
            if len(results) < len(files):
                raise typer.Exit(code=1)

        @app.command()
        def explain(rule_id: str = _RULE_ID_ARGUMENT) -> None:
            """Show guidance for a rule."""
            entry = deps.guidance_service.get_entry(rule_id)
            if entry is None:
                deps.telemetry.error(
                    f"Unknown rule '{rule_id}'. Known: {', '.join(deps.guidance_service.known_rule_ids())}")
                raise typer.Exit(code=2)
            out = Console()
            out.print(f"[bold]{deps.guidance_service.get_display_name(rule_id)}[/bold] ({rule_id})")
            if entry.get("short_description"):
                out.print(str(entry["short_description"]))
            out.print()
            out.print(deps.guidance_service.get_manual_instructions(rule_id), markup=False)
            for ref in entry.get("references", []):
                out.print(f"  see: {ref}", markup=False)

        @app.command()
        def selector(
            signatures: list[str] = _SIGNATURES_ARGUMENT,
            interface: bool = _INTERFACE_OPTION,
        ) -> None:
            """Print the 4-byte selector of canonical signatures."""
            computer = SelectorComputer(TypeResolver(SymbolTable()), deps.hasher)
            value = 0
            for signature in signatures:
                sel = computer.selector(signature.replace(" ", ""))
                value ^= int(sel, 16)
                typer.echo(f"{sel}  {signature}")
            if interface:
                typer.echo(f"0x{value:08x}  (interface id)")

        return app
