"""Package entry point - composition root. Wire dependencies and run the CLI app."""

from natspec_guard.infrastructure.di.container import NatspecGuardContainer
from natspec_guard.interface.cli import CLIAppFactory, CLIDependencies


def main() -> None:
    """Entry point: wire dependencies at composition root, create app, run."""
    container = NatspecGuardContainer()

    deps = CLIDependencies(
        config_loader=container.get_config_loader(),
        telemetry=container.get_telemetry_port(),
        filesystem=container.get_filesystem_gateway(),
        ast_gateway=container.get_ast_gateway(),
        hasher=container.get_hasher(),
        guidance_service=container.get_guidance_service(),
        reporter=container.get_reporter(),
        rule_factory=container.get_rule_factory(),
    )

    app = CLIAppFactory.create_app(deps)
    app()


if __name__ == "__main__":
    main()
