"""
Rule identifiers and defaults shared across layers.
"""

SELECTOR_TAGS_RULE_ID: str = "selector-tags"
NATSPEC_TRIPLE_SLASH_RULE_ID: str = "natspec-triple-slash"

ALL_RULE_IDS: tuple[str, ...] = (SELECTOR_TAGS_RULE_ID, NATSPEC_TRIPLE_SLASH_RULE_ID)

SELECTOR_TAG_KINDS: tuple[str, ...] = ("Error", "Interface")

# [tool.natspec-guard] in pyproject.toml
CONFIG_SECTION: str = "natspec-guard"

DEFAULT_AST_SUFFIX: str = ".ast.json"
DEFAULT_MAX_FIX_PASSES: int = 3
SOLIDITY_SUFFIX: str = ".sol"

DEFAULT_EXCLUDE_PATHS: tuple[str, ...] = ("node_modules", "lib/forge-std", ".git")
