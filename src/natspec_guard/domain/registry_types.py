from typing import TypedDict


class RuleRegistryEntry(TypedDict, total=False):
    short_description: str
    display_name: str
    manual_instructions: str
    fixable: bool
    references: list[str]
