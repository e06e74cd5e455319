"""Terminal reporter implementation - renders audit results with rich tables."""

import json
from collections import Counter
from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from natspec_guard.domain.entities import AuditResult
from natspec_guard.domain.protocols import GuidanceServiceProtocol


class TerminalAuditReporter:
    """Prints violations grouped per file, then a per-rule summary table."""

    def __init__(self, guidance_service: GuidanceServiceProtocol, console: Optional[Console] = None) -> None:
        self._guidance = guidance_service
        self.console = console or Console()

    def report_audit(self, audit_result: AuditResult) -> None:
        for report in audit_result.reports:
            for violation in report.violations:
                fix = "[green]fixable[/green]" if violation.fixable else "[yellow]manual[/yellow]"
                self.console.print(
                    f"  [bold]{escape(violation.location)}[/bold]: [red]{violation.rule_id}[/red]: "
                    f"{escape(violation.message)} ({fix})",
                    highlight=False,
                    soft_wrap=True,
                )
            for error in report.errors:
                self.console.print(f"  [bold]{escape(report.path)}[/bold]: [yellow]skipped[/yellow]: {escape(error)}", highlight=False, soft_wrap=True)
        for error in audit_result.load_errors:
            self.console.print(f"  [red]load error[/red]: {escape(error)}", highlight=False, soft_wrap=True)

        counts = Counter(v.rule_id for r in audit_result.reports for v in r.violations)
        if counts:
            table = Table(title="natspec-guard summary", show_lines=False, pad_edge=False)
            table.add_column("Rule ID", style="#C41E3A")
            table.add_column("Rule")
            table.add_column("Count", justify="right", style="bold #007BFF")
            table.add_column("Fix?")
            for rule_id, count in sorted(counts.items()):
                table.add_row(
                    rule_id,
                    self._guidance.get_display_name(rule_id),
                    str(count),
                    "auto" if self._guidance.is_fixable(rule_id) else "manual",
                )
            self.console.print(table)

        files = len(audit_result.reports)
        total = audit_result.violation_count()
        summary = Text()
        summary.append(f"\nChecked {files} file(s): ")
        summary.append(f"{total} violation(s)", style="red" if total else "green")
        if audit_result.load_errors:
            summary.append(f", {len(audit_result.load_errors)} load error(s)", style="red")
        self.console.print(summary)

    def report_json(self, audit_result: AuditResult) -> None:
        """Machine-readable output on stdout."""
        payload = {
            "files": len(audit_result.reports),
            "violations": [
                {
                    "rule_id": v.rule_id,
                    "location": v.location,
                    "message": v.message,
                    "fix": None
                    if v.fix is None
                    else {"start": v.fix.start, "end": v.fix.end, "replacement": v.fix.replacement},
                }
                for r in audit_result.reports
                for v in r.violations
            ],
            "errors": list(audit_result.load_errors) + [e for r in audit_result.reports for e in r.errors],
        }
        self.console.print_json(json.dumps(payload))
