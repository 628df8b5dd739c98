"""
Snippetbox — Validation Predicates
===================================

What:  Side-effect-free checks used by the endpoint validation policies.
How:   Each predicate returns a bool and never raises; the caller decides
       which message to record through `Validator.check_field`.

Character counts are Unicode code points (`len()` of a `str`), not bytes,
so "café" is 4 characters long.
"""

import re
from typing import Pattern

# Permissive RFC 5322 style shape check: local part, "@", dot-separated
# DNS labels. It answers "looks like an email", not "is deliverable".
EMAIL_RX: Pattern[str] = re.compile(
    r"[a-zA-Z0-9.!#$%&'*+/=?^_`{|}~-]+"
    r"@[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?"
    r"(?:\.[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?)*"
)


def not_blank(value: str) -> bool:
    """True if anything other than whitespace is left after trimming."""
    return value.strip() != ""


def max_chars(value: str, n: int) -> bool:
    return len(value) <= n


def min_chars(value: str, n: int) -> bool:
    return len(value) >= n


def permitted_int(value: int, *permitted: int) -> bool:
    """True if `value` equals one of `permitted` exactly."""
    return value in permitted


def matches(value: str, pattern: Pattern[str]) -> bool:
    """True if the whole of `value` matches the precompiled `pattern`."""
    return pattern.fullmatch(value) is not None
