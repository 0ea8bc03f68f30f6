"""
Field dispatcher mapping object keys to format validators.

The registry is an ordered, immutable tuple of ``FieldRule`` entries evaluated
first-match-wins. Exact key matches are listed before the ``id`` substring
rule, so a key such as ``"mobile"`` never falls through to the identifier check.
Matching is case-sensitive.
"""

from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

from request_validator.validation.formats import (
    ValidationResult,
    validate_email_format,
    validate_identifier,
    validate_mobile_number,
    validate_otp,
    validate_pan,
)

KeyPredicate = Callable[[str], bool]
FormatValidator = Callable[[str], ValidationResult]

MOBILE_KEYS = frozenset({'mobile', 'contact', 'phone'})


@dataclass(frozen=True)
class FieldRule:
    """A named (predicate, validator) pair in the validator registry."""

    name: str
    matches: KeyPredicate
    validator: FormatValidator


def _exact(*keys: str) -> KeyPredicate:
    accepted = frozenset(keys)
    return lambda key: key in accepted


def _contains(fragment: str) -> KeyPredicate:
    return lambda key: fragment in key


VALIDATOR_REGISTRY: Tuple[FieldRule, ...] = (
    FieldRule('otp', _exact('otp'), validate_otp),
    FieldRule('mobile', _exact(*MOBILE_KEYS), validate_mobile_number),
    FieldRule('pan', _exact('pan'), validate_pan),
    FieldRule('email', _exact('email'), validate_email_format),
    FieldRule('id', _contains('id'), validate_identifier),
)


def find_rule(key: str, registry: Tuple[FieldRule, ...] = VALIDATOR_REGISTRY) -> Optional[FieldRule]:
    """Return the first rule whose predicate accepts ``key``, or None."""
    for rule in registry:
        if rule.matches(key):
            return rule
    return None


def dispatch_field(
    key: str,
    value: str,
    registry: Tuple[FieldRule, ...] = VALIDATOR_REGISTRY
) -> List[str]:
    """
    Run the validator selected for ``key`` against ``value``.

    Args:
        key: Object key the value was found under
        value: Text form of the value
        registry: Ordered rules to select from

    Returns:
        Error messages from the selected validator; empty when the key has no
        rule or the value passed
    """
    rule = find_rule(key, registry)
    if rule is None:
        return []
    return list(rule.validator(value).errors)
