"""GuidanceService: loads the rule registry and provides display names and manual instructions."""

from pathlib import Path
from typing import Optional, cast

import yaml

from natspec_guard.domain.protocols import GuidanceServiceProtocol
from natspec_guard.domain.registry_types import RuleRegistryEntry


class GuidanceService(GuidanceServiceProtocol):
    """Loads rule_registry.yaml and answers per-rule lookups."""

    def __init__(self, registry_path: Optional[str] = None) -> None:
        if registry_path is not None:
            self._path = Path(registry_path)
        else:
            # Default: packaged resource next to this package
            _base = Path(__file__).resolve().parent.parent.parent
            self._path = _base / "resources" / "rule_registry.yaml"
        self._registry: dict[str, RuleRegistryEntry] = {}
        self._load()

    def _load(self) -> None:
        if self._path.exists():
            with open(self._path, encoding="utf-8") as f:
                data = yaml.safe_load(f)
                self._registry = (
                    cast(dict[str, RuleRegistryEntry], data) if isinstance(data, dict) else {}
                )
        else:
            self._registry = {}

    def get_registry(self) -> dict[str, RuleRegistryEntry]:
        """Return a shallow copy of the loaded registry."""
        return dict(self._registry)

    def get_entry(self, rule_id: str) -> Optional[RuleRegistryEntry]:
        entry = self._registry.get(rule_id)
        return cast(RuleRegistryEntry, dict(entry)) if entry else None

    def known_rule_ids(self) -> list[str]:
        return sorted(self._registry)

    def get_display_name(self, rule_id: str) -> str:
        """Return display name for a rule, title-casing the id when unregistered."""
        entry = self.get_entry(rule_id)
        if not entry:
            return rule_id.replace("-", " ").title()
        return str(
            entry.get("display_name")
            or entry.get("short_description")
            or rule_id.replace("-", " ").title()
        )

    def get_manual_instructions(self, rule_id: str) -> str:
        entry = self.get_entry(rule_id)
        if entry and "manual_instructions" in entry:
            return str(entry["manual_instructions"]).strip()
        return "See project docs. Fix the violation at the reported location."

    def is_fixable(self, rule_id: str) -> bool:
        entry = self.get_entry(rule_id)
        return bool(entry and entry.get("fixable"))
