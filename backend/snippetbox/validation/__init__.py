"""
Snippetbox — Validation Package
================================

Validator (accumulated errors) plus the predicate library::

    form.validator.check_field(not_blank(form.title), "title", "This field cannot be blank")
    if not form.validator.valid():
        ...  # re-render with 422
"""

from snippetbox.validation.rules import (
    EMAIL_RX,
    matches,
    max_chars,
    min_chars,
    not_blank,
    permitted_int,
)
from snippetbox.validation.validator import Validator

__all__ = [
    "EMAIL_RX",
    "Validator",
    "matches",
    "max_chars",
    "min_chars",
    "not_blank",
    "permitted_int",
]
