"""Creates the configured rule instances, in registry order."""

from natspec_guard.domain.config import ConfigurationLoader
from natspec_guard.domain.constants import NATSPEC_TRIPLE_SLASH_RULE_ID, SELECTOR_TAGS_RULE_ID
from natspec_guard.domain.rules import Checkable
from natspec_guard.domain.rules.natspec_triple_slash import NatspecTripleSlashRule
from natspec_guard.domain.rules.selector_tags import SelectorTagsRule


class RuleFactory:
    """Builds rules from configuration. No top-level functions."""

    def __init__(self, config_loader: ConfigurationLoader) -> None:
        self._config = config_loader

    def create_rule(self, rule_id: str) -> Checkable | None:
        if rule_id == SELECTOR_TAGS_RULE_ID:
            return SelectorTagsRule(kinds=self._config.selector_tag_kinds)
        if rule_id == NATSPEC_TRIPLE_SLASH_RULE_ID:
            return NatspecTripleSlashRule()
        return None

    def create_rules(self, only: tuple[str, ...] | None = None) -> list[Checkable]:
        """Rules enabled in config, optionally narrowed to `only`."""
        rules: list[Checkable] = []
        for rule_id in self._config.enabled_rules:
            if only and rule_id not in only:
                continue
            rule = self.create_rule(rule_id)
            if rule is not None:
                rules.append(rule)
        return rules
