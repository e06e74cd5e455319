"""Project telemetry: user-facing progress lines on a rich console, mirrored to logging."""

import logging
from typing import Optional

from rich.console import Console
from rich.markup import escape

from natspec_guard.domain.protocols import TelemetryPort

logger = logging.getLogger("natspec_guard")


class ProjectTelemetry(TelemetryPort):
    """Rich console telemetry. Messages go to stderr so stdout stays parseable."""

    def __init__(
        self,
        project_name: str,
        color: str = "cyan",
        welcome: str = "",
        console: Optional[Console] = None,
    ) -> None:
        self.project_name = project_name
        self.color = color
        self.welcome = welcome
        self.console = console or Console(stderr=True)

    def handshake(self) -> None:
        suffix = f" {self.welcome}" if self.welcome else ""
        self.console.print(f"[bold {self.color}]{self.project_name}[/]{suffix}")

    def step(self, message: str) -> None:
        logger.info(message)
        self.console.print(f"[{self.color}]>[/] {escape(message)}")

    def warning(self, message: str) -> None:
        logger.warning(message)
        self.console.print(f"[yellow]warning:[/] {escape(message)}")

    def error(self, message: str) -> None:
        logger.error(message)
        self.console.print(f"[red]error:[/] {escape(message)}")

    @staticmethod
    def configure_logging(verbose: bool = False) -> None:
        """Basic stderr logging; DEBUG when verbose."""
        logging.basicConfig(
            level=logging.DEBUG if verbose else logging.WARNING,
            format="%(levelname)s %(name)s: %(message)s",
        )
