"""Errors raised across layers."""


class NatspecGuardError(Exception):
    """Base class for errors raised by natspec-guard."""


class MalformedDeclarationError(NatspecGuardError):
    """A declaration violates the input contract (e.g. it has no byte range)."""

    def __init__(self, kind: str, name: str, reason: str) -> None:
        super().__init__(f"{kind} '{name or '<anonymous>'}': {reason}")
        self.kind = kind
        self.name = name
        self.reason = reason


class AstLoadError(NatspecGuardError):
    """The AST for a source file is missing, unreadable or not valid JSON."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason
