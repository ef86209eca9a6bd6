# Comparison to null/undefined detection: flags `==`, `!=`, `===`, `!==` operands
# that are the `null` literal or the bare identifier `undefined`.

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, Iterable, Optional

from tree_sitter import Node as TSNode

from nullguard.context import (
    get_char_end_line_col,
    get_char_line_col,
    get_source_span,
    is_equality_comparison,
)
from nullguard.findings.models import Finding, Location
from nullguard.rules.base import Rule

if TYPE_CHECKING:
    from nullguard.config import Config
    from nullguard.context import FileContext

logger = logging.getLogger(__name__)

OPTION_ALLOW_NULL_CHECK = "allow-null-check"
OPTION_ALLOW_UNDEFINED_CHECK = "allow-undefined-check"
KNOWN_OPTIONS = frozenset({OPTION_ALLOW_NULL_CHECK, OPTION_ALLOW_UNDEFINED_CHECK})


class OperandKind(Enum):
    """What a comparison operand is, syntactically."""

    NULL = "null"
    UNDEFINED = "undefined"
    OTHER = "other"


class OperandVerdict(Enum):
    """Which operands of one comparison are invalid."""

    BOTH = "both"
    LEFT = "left"
    RIGHT = "right"
    NONE = "none"


@dataclass(frozen=True)
class ComparisonOptions:
    """Resolved allowances. Both comparisons are disallowed by default."""

    allow_null_check: bool = False
    allow_undefined_check: bool = False

    @classmethod
    def from_arguments(cls, arguments: Iterable[str]) -> ComparisonOptions:
        """
        Build options from raw rule arguments, e.g. ["allow-null-check"].

        Presence is what matters; duplicates are harmless and unrecognized
        tokens are ignored.
        """
        present: set[str] = set()
        for token in arguments:
            if token in KNOWN_OPTIONS:
                present.add(token)
            else:
                logger.debug("Ignoring unknown rule option %r", token)
        return cls(
            allow_null_check=OPTION_ALLOW_NULL_CHECK in present,
            allow_undefined_check=OPTION_ALLOW_UNDEFINED_CHECK in present,
        )


@dataclass(frozen=True)
class RuleMetadata:
    rule_name: str
    description: str
    options_description: str
    options: dict[str, Any]
    option_examples: tuple[Any, ...]
    type: str
    typescript_only: bool = False
    remediation: Optional[str] = field(default=None)


@dataclass(frozen=True)
class InvalidOperand:
    """One operand that must be reported: the operand node and what it is."""

    node: TSNode
    kind: OperandKind

    @property
    def message(self) -> str:
        return failure_message(self.kind)


def failure_message(kind: OperandKind) -> str:
    return f"Comparison operand is {'null' if kind is OperandKind.NULL else 'undefined'}"


def classify_operand(node: TSNode) -> OperandKind:
    """
    Classify an operand node.

    `undefined` is matched only as a bare identifier; tree-sitter exposes it
    either as its own `undefined` node or as an `identifier`. Scope is not
    consulted, so a local variable named `undefined` matches too.
    """
    if node.type == "null":
        return OperandKind.NULL
    if node.type == "undefined":
        return OperandKind.UNDEFINED
    # tree-sitter-javascript/-typescript emit `undefined` nodes; other grammars may not
    if node.type == "identifier" and node.text == b"undefined":
        return OperandKind.UNDEFINED
    return OperandKind.OTHER


def is_invalid_operand(kind: OperandKind, options: ComparisonOptions) -> bool:
    if kind is OperandKind.NULL:
        return not options.allow_null_check
    if kind is OperandKind.UNDEFINED:
        return not options.allow_undefined_check
    if kind is OperandKind.OTHER:
        return False
    raise AssertionError(f"Unhandled operand kind: {kind!r}")


def get_operand_verdict(left_invalid: bool, right_invalid: bool) -> OperandVerdict:
    if left_invalid and right_invalid:
        return OperandVerdict.BOTH
    if left_invalid:
        return OperandVerdict.LEFT
    if right_invalid:
        return OperandVerdict.RIGHT
    return OperandVerdict.NONE


def scan(root: TSNode, options: ComparisonOptions) -> list[InvalidOperand]:
    """
    Walk every descendant of root (pre-order) and collect invalid comparison operands.

    Results follow the pre-order position of each comparison, left operand
    before right operand. Matched comparisons are still descended into, so
    `(a == null) == b` reports the inner `null`.
    """
    invalid: list[InvalidOperand] = []
    stack = list(reversed(root.children))
    while stack:
        node = stack.pop()
        if is_equality_comparison(node):
            left = node.child_by_field_name("left")
            right = node.child_by_field_name("right")
            # ERROR recovery can leave a comparison without one of its operands
            if left is not None and right is not None:
                left_kind = classify_operand(left)
                right_kind = classify_operand(right)
                verdict = get_operand_verdict(
                    is_invalid_operand(left_kind, options),
                    is_invalid_operand(right_kind, options),
                )
                if verdict in (OperandVerdict.BOTH, OperandVerdict.LEFT):
                    invalid.append(InvalidOperand(left, left_kind))
                if verdict in (OperandVerdict.BOTH, OperandVerdict.RIGHT):
                    invalid.append(InvalidOperand(right, right_kind))
        stack.extend(reversed(node.children))
    return invalid


class UndefinedOrNullComparisonRule(Rule):
    """Disallows comparisons to `undefined` or `null`."""

    id = "no-undefined-or-null-comparison"
    name = "Comparison to undefined or null"

    metadata = RuleMetadata(
        rule_name=id,
        description="Disallows comparisons to `undefined` or `null`.",
        options_description=(
            "Two arguments may be optionally provided:\n\n"
            f'* "{OPTION_ALLOW_NULL_CHECK}" allows comparisons to `null`.\n'
            f'* "{OPTION_ALLOW_UNDEFINED_CHECK}" allows comparisons to `undefined`.'
        ),
        options={
            "type": "array",
            "items": {
                "type": "string",
                "enum": [OPTION_ALLOW_NULL_CHECK, OPTION_ALLOW_UNDEFINED_CHECK],
            },
            "minLength": 0,
            "maxLength": 2,
        },
        option_examples=(
            True,
            (True, OPTION_ALLOW_NULL_CHECK),
            (True, OPTION_ALLOW_UNDEFINED_CHECK),
        ),
        type="functionality",
        typescript_only=False,
        remediation=(
            "Use a truthiness check (`if (!value)`), optional chaining (`value?.x`) "
            "or nullish coalescing (`value ?? fallback`) instead of comparing to null/undefined."
        ),
    )

    def run(self, context: FileContext, config: Config | None) -> list[Finding]:
        arguments = config.arguments_for(self.id) if config is not None else ()
        options = ComparisonOptions.from_arguments(arguments)

        findings: list[Finding] = []
        for operand in scan(context.root_node, options):
            line, col = get_char_line_col(context, operand.node)
            end_line, end_col = get_char_end_line_col(context, operand.node)
            findings.append(
                Finding(
                    rule_id=self.id,
                    message=operand.message,
                    location=Location(
                        path=context.path,
                        line=line,
                        column=col,
                        end_line=end_line,
                        end_column=end_col,
                        start_byte=operand.node.start_byte,
                        end_byte=operand.node.end_byte,
                        snippet=get_source_span(context, operand.node),
                    ),
                    severity="warning",
                )
            )
        logger.debug("%s: %d finding(s) in %s", self.id, len(findings), context.path)
        return findings
