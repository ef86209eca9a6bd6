from __future__ import annotations

"""
Linter configuration: which rules are enabled and the raw arguments each receives.

Rules get their arguments the way a lint host hands them over: an ordered list
of string tokens per rule id (e.g. ["allow-null-check"]). Each rule resolves
its own tokens into typed options once per file.
"""

from dataclasses import dataclass, field
from typing import List, Mapping, Sequence

from nullguard.rules.base import Rule
from nullguard.rules.undefined_or_null_comparison import (
    OPTION_ALLOW_NULL_CHECK,
    OPTION_ALLOW_UNDEFINED_CHECK,
    UndefinedOrNullComparisonRule,
)


@dataclass
class Config:
    """
    Linter configuration.

    Carries the enabled rules and, per rule id, the raw argument tokens.
    """

    rules: Sequence[Rule] = field(default_factory=list)
    rule_arguments: Mapping[str, Sequence[str]] = field(default_factory=dict)

    def arguments_for(self, rule_id: str) -> Sequence[str]:
        """Raw argument tokens for a rule; empty if none were configured."""
        return self.rule_arguments.get(rule_id, ())


def get_default_config(
    allow_null_check: bool = False,
    allow_undefined_check: bool = False,
) -> Config:
    """
    Return the default configuration with all implemented rules.

    The two flags are what the CLI in main.py exposes; they are translated into
    the comparison rule's argument tokens.
    """
    rules: List[Rule] = [
        UndefinedOrNullComparisonRule(),
    ]
    arguments: List[str] = []
    if allow_null_check:
        arguments.append(OPTION_ALLOW_NULL_CHECK)
    if allow_undefined_check:
        arguments.append(OPTION_ALLOW_UNDEFINED_CHECK)
    return Config(
        rules=rules,
        rule_arguments={UndefinedOrNullComparisonRule.id: arguments},
    )


def get_enabled_rules(config: Config | None = None) -> Sequence[Rule]:
    """Return the list of enabled rules from the given config (or default config)."""
    if config is None:
        config = get_default_config()
    return config.rules
