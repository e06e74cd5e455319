"""Use Case: Apply Fixes to Source Code."""

import difflib
import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Optional

from natspec_guard.domain.entities import FixOutcome, TextEdit
from natspec_guard.domain.exceptions import AstLoadError
from natspec_guard.domain.protocols import (
    AstGatewayProtocol,
    FileSystemProtocol,
    TelemetryPort,
)
from natspec_guard.use_cases.analyze_unit import AnalyzeUnitUseCase

logger = logging.getLogger(__name__)


class FixApplier:
    """
    Apply non-overlapping TextEdits to a text, left to right.

    Adjacent edits are fine. Edits that overlap an already accepted edit are skipped and
    returned in FixOutcome.skipped so a later pass can retry them.
    """

    def apply(self, text: str, edits: Iterable[TextEdit]) -> FixOutcome:
        accepted: list[TextEdit] = []
        skipped: list[TextEdit] = []
        last_stop = -1
        for edit in sorted(edits, key=lambda e: (e.start, e.end)):
            if edit.start < 0 or edit.start > len(text) or edit.stop < edit.start:
                logger.debug("Dropping out-of-range edit %s", edit)
                skipped.append(edit)
                continue
            if edit.start < last_stop:
                skipped.append(edit)
                continue
            accepted.append(edit)
            last_stop = edit.stop

        parts: list[str] = []
        cursor = 0
        for edit in accepted:
            parts.append(text[cursor:edit.start])
            parts.append(edit.replacement)
            cursor = edit.stop
        parts.append(text[cursor:])
        return FixOutcome(text="".join(parts), applied=tuple(accepted), skipped=tuple(skipped))


@dataclass(frozen=True)
class FileFixResult:
    path: str
    original: str
    fixed: str
    passes: int
    applied: int
    remaining: int

    @property
    def changed(self) -> bool:
        return self.original != self.fixed

    def unified_diff(self) -> str:
        return "".join(
            difflib.unified_diff(
                self.original.splitlines(keepends=True),
                self.fixed.splitlines(keepends=True),
                fromfile=f"a/{self.path}",
                tofile=f"b/{self.path}",
            )
        )


class ApplyFixesUseCase:
    """Orchestrate repeated analyze -> apply passes for each file."""

    def __init__(
        self,
        analyzer: AnalyzeUnitUseCase,
        ast_gateway: AstGatewayProtocol,
        filesystem: FileSystemProtocol,
        telemetry: Optional[TelemetryPort] = None,
        max_passes: int = 3,
        write: bool = True,
    ) -> None:
        self.analyzer = analyzer
        self.ast_gateway = ast_gateway
        self.filesystem = filesystem
        self.telemetry = telemetry
        self.max_passes = max_passes
        self.write = write
        self.applier = FixApplier()

    def execute(self, files: Sequence[str]) -> list[FileFixResult]:
        if self.telemetry:
            self.telemetry.step(f"Applying fixes to {len(files)} file(s)")
        results: list[FileFixResult] = []
        for path in files:
            try:
                result = self.fix_file(path)
            except AstLoadError as exc:
                logger.error("Cannot fix %s: %s", path, exc.reason)
                if self.telemetry:
                    self.telemetry.error(str(exc))
                continue
            results.append(result)
            if result.changed and self.write:
                self.filesystem.write_text(path, result.fixed)
                if self.telemetry:
                    self.telemetry.step(f"Repaired: {path} ({result.applied} edit(s))")
        return results

    def fix_file(self, path: str) -> FileFixResult:
        """
        Fix one file in memory.

        Each pass re-analyzes the rewritten text with declaration ranges shifted
        past the edits already applied, so edits skipped for overlapping are
        regenerated against the new text on the next pass.
        """
        unit = self.ast_gateway.load_unit(path)
        original = unit.text
        passes = 0
        applied = 0
        remaining = 0

        while passes < self.max_passes:
            report = self.analyzer.execute(unit)
            edits = [v.fix for v in report.violations if v.fix is not None]
            if not edits:
                remaining = 0
                break
            outcome = self.applier.apply(unit.text, edits)
            passes += 1
            applied += len(outcome.applied)
            remaining = len(outcome.skipped)
            if not outcome.changed:
                break
            unit = unit.rebased(outcome.text, outcome.applied)
            if not outcome.skipped:
                break

        logger.debug("%s: %d edit(s) in %d pass(es), %d remaining", path, applied, passes, remaining)
        return FileFixResult(
            path=path,
            original=original,
            fixed=unit.text,
            passes=passes,
            applied=applied,
            remaining=remaining,
        )
