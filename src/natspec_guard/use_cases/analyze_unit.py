"""Use Case: analyze one source unit with the enabled rules."""

import logging
from collections.abc import Sequence

from natspec_guard.domain.entities import FileReport, SourceUnit
from natspec_guard.domain.exceptions import MalformedDeclarationError
from natspec_guard.domain.protocols import HasherProtocol
from natspec_guard.domain.rules import AnalysisContext, Checkable, Violation

logger = logging.getLogger(__name__)


class AnalyzeUnitUseCase:
    """
    Run rules over every declaration of a unit, in traversal order.

    A malformed declaration is skipped and recorded; the rest of the unit is
    still analyzed.
    """

    def __init__(self, rules: Sequence[Checkable], hasher: HasherProtocol) -> None:
        self.rules = list(rules)
        self.hasher = hasher

    def execute(self, unit: SourceUnit) -> FileReport:
        context = AnalysisContext.for_unit(unit, self.hasher)
        violations: list[Violation] = []
        errors: list[str] = []

        for declaration in unit.walk():
            try:
                found = [v for rule in self.rules for v in rule.check(declaration, context)]
            except MalformedDeclarationError as exc:
                logger.warning("Skipping declaration in %s: %s", unit.path, exc)
                errors.append(str(exc))
                continue
            violations.extend(found)

        logger.debug("%s: %d violation(s) from %d rule(s)", unit.path, len(violations), len(self.rules))
        return FileReport(path=unit.path, violations=tuple(violations), errors=tuple(errors))
