"""
Validation engine for decoded JSON request bodies.

The engine walks a value tree depth-first and collects every failed check
instead of stopping at the first one:

- Object: for each key whose value is not null, the value is validated first,
  then the key is dispatched to its field validator with the value's text form.
- Array: every element is validated in order. Indices are never dispatched.
- Scalar: the generic allowed-character check runs on the value.

Null values are skipped entirely, both as object members and as array elements
or a top-level body. The tree is never mutated, so validating the same tree
twice yields the same errors.

Returned messages carry no JSON path. Each ``ValidationIssue`` records the path
separately so it can be logged without being exposed in the message list.
"""

from dataclasses import dataclass
from typing import Any, List, Optional, Tuple

from request_validator.validation.dispatcher import VALIDATOR_REGISTRY, FieldRule, find_rule
from request_validator.validation.general import general_format_error
from request_validator.validation.values import JSONKind, json_kind, render_value

ROOT_PATH = '$'
GENERAL_RULE = 'general'


@dataclass(frozen=True)
class ValidationIssue:
    """A single failed check with the location it was found at."""

    path: str
    rule: str
    message: str


class PayloadValidator:
    """
    Depth-first walker driving the field dispatcher and the generic check.

    Instances hold no per-request state and may be shared across threads.
    """

    def __init__(self, registry: Tuple[FieldRule, ...] = VALIDATOR_REGISTRY):
        self.registry = registry

    def validate(self, value: Any) -> List[str]:
        """Validate a decoded body and return the error messages in traversal order."""
        return [issue.message for issue in self.collect_issues(value)]

    def collect_issues(self, value: Any) -> List[ValidationIssue]:
        """Validate a decoded body and return every failed check with its path."""
        issues: List[ValidationIssue] = []
        self._walk(value, ROOT_PATH, issues)
        return issues

    def _walk(self, value: Any, path: str, issues: List[ValidationIssue]) -> None:
        # Explicit stack so nesting depth is not bounded by the interpreter's
        # recursion limit. Entries are (key, value, path); a non-None key marks
        # a member whose subtree is done and whose key is due for dispatch.
        stack: List[Tuple[Optional[str], Any, str]] = [(None, value, path)]

        while stack:
            key, current, current_path = stack.pop()
            if key is not None:
                self._dispatch(key, current, current_path, issues)
                continue

            kind = json_kind(current)
            if kind is JSONKind.OBJECT:
                pending = []
                for member_key, member in current.items():
                    if member is None:
                        continue
                    member_path = f"{current_path}.{member_key}"
                    pending.append((None, member, member_path))
                    pending.append((member_key, member, member_path))
                stack.extend(reversed(pending))
            elif kind is JSONKind.ARRAY:
                stack.extend(
                    (None, item, f"{current_path}[{index}]")
                    for index, item in reversed(list(enumerate(current)))
                )
            elif kind is not JSONKind.NULL:
                message = general_format_error(current)
                if message:
                    issues.append(ValidationIssue(current_path, GENERAL_RULE, message))

    def _dispatch(self, key: str, value: Any, path: str, issues: List[ValidationIssue]) -> None:
        rule = find_rule(key, self.registry)
        if rule is None:
            return
        for message in rule.validator(render_value(value)).errors:
            issues.append(ValidationIssue(path, rule.name, message))


default_validator = PayloadValidator()


def validate_payload(value: Any, validator: Optional[PayloadValidator] = None) -> List[str]:
    """
    Validate a decoded JSON body.

    Returns:
        Ordered error messages; an empty list means the body is valid
    """
    return (validator or default_validator).validate(value)


def collect_issues(value: Any, validator: Optional[PayloadValidator] = None) -> List[ValidationIssue]:
    """
    Validate a decoded JSON body, keeping the path and rule of each failure.

    Returns:
        Ordered ``ValidationIssue`` entries; messages match ``validate_payload``
    """
    return (validator or default_validator).collect_issues(value)
