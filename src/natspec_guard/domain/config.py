"""Configuration for natspec-guard. Immutable value object created by Infrastructure."""

from __future__ import annotations

import logging

from natspec_guard.domain.constants import (
    ALL_RULE_IDS,
    DEFAULT_AST_SUFFIX,
    DEFAULT_EXCLUDE_PATHS,
    DEFAULT_MAX_FIX_PASSES,
    SELECTOR_TAG_KINDS,
)

logger = logging.getLogger(__name__)


class ConfigurationLoader:
    """
    Immutable configuration for linter settings.

    Created by Infrastructure from (config_dict, tool_section). Domain does not
    read the filesystem; Infrastructure calls ConfigFileLoader.load_config_from_fs()
    and constructs ConfigurationLoader(config_dict, tool_section) at composition root.
    Invalid values are logged and replaced by defaults.
    """

    def __init__(
        self,
        config_dict: dict[str, object] | None = None,
        tool_section: dict[str, object] | None = None,
    ) -> None:
        self._config: dict[str, object] = dict(config_dict or {})
        self._tool_section: dict[str, object] = dict(tool_section or {})
        if self._config:
            self.validate_config(self._config)

    def validate_config(self, config: dict[str, object]) -> None:
        """Warn about unknown rule ids, tag kinds and out-of-range values."""
        rules = config.get("rules")
        if rules is not None:
            if not isinstance(rules, list):
                logger.warning("Configuration Warning: 'rules' must be a list; using all rules.")
            else:
                unknown = [r for r in rules if r not in ALL_RULE_IDS]
                if unknown:
                    logger.warning("Configuration Warning: unknown rule ids ignored: %s", ", ".join(map(str, unknown)))

        kinds = config.get("selector_tag_kinds")
        if isinstance(kinds, list):
            unknown_kinds = [k for k in kinds if k not in SELECTOR_TAG_KINDS]
            if unknown_kinds:
                logger.warning(
                    "Configuration Warning: unknown selector tag kinds ignored: %s",
                    ", ".join(map(str, unknown_kinds)),
                )

        passes = config.get("max_fix_passes")
        if passes is not None and (not isinstance(passes, int) or isinstance(passes, bool) or passes < 1):
            logger.warning(
                "Configuration Warning: 'max_fix_passes' must be a positive integer; using %d.",
                DEFAULT_MAX_FIX_PASSES,
            )

    @property
    def config(self) -> dict[str, object]:
        """Return the loaded configuration."""
        return self._config

    @property
    def tool_section(self) -> dict[str, object]:
        return self._tool_section

    @property
    def enabled_rules(self) -> tuple[str, ...]:
        """Rule ids to run, in registry order."""
        raw = self._config.get("rules")
        if not isinstance(raw, list):
            return ALL_RULE_IDS
        wanted = {str(r) for r in raw}
        return tuple(r for r in ALL_RULE_IDS if r in wanted)

    @property
    def selector_tag_kinds(self) -> tuple[str, ...]:
        raw = self._config.get("selector_tag_kinds")
        if not isinstance(raw, list):
            return SELECTOR_TAG_KINDS
        return tuple(k for k in SELECTOR_TAG_KINDS if k in raw)

    @property
    def ast_suffix(self) -> str:
        """Suffix appended to a `.sol` path to find its AST JSON."""
        raw = self._config.get("ast_suffix")
        return raw if isinstance(raw, str) and raw else DEFAULT_AST_SUFFIX

    @property
    def exclude_paths(self) -> list[str]:
        """Path fragments skipped when walking directories."""
        raw = self._config.get("exclude_paths")
        if isinstance(raw, list):
            return [str(x) for x in raw if isinstance(x, str)]
        return list(DEFAULT_EXCLUDE_PATHS)

    @property
    def max_fix_passes(self) -> int:
        raw = self._config.get("max_fix_passes")
        if isinstance(raw, int) and not isinstance(raw, bool) and raw >= 1:
            return raw
        return DEFAULT_MAX_FIX_PASSES
