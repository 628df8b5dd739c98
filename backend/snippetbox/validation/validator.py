"""
Snippetbox — Validation State
==============================

What:  Per-request accumulator of field and non-field error messages.
Who:   Held by every form record (`form.validator`) and filled in by the
       endpoint validation policies and by handlers reacting to service
       errors (duplicate email, bad credentials).
When:  Created with the form, discarded with the response (or rendered
       into the re-displayed form on a 422).
"""

from typing import Dict, List


class Validator:
    """
    Accumulated validation outcome for one form submission.

    Attributes:
        field_errors:     field name → single message. A later message for the
                          same field replaces the earlier one.
        non_field_errors: messages not attributable to a single input, in the
                          order they were added.
    """

    def __init__(self) -> None:
        self.field_errors: Dict[str, str] = {}
        self.non_field_errors: List[str] = []

    def valid(self) -> bool:
        """True iff no field errors and no non-field errors were recorded."""
        return not self.field_errors and not self.non_field_errors

    def add_field_error(self, field: str, message: str) -> None:
        self.field_errors[field] = message

    def add_non_field_error(self, message: str) -> None:
        self.non_field_errors.append(message)

    def check_field(self, ok: bool, field: str, message: str) -> None:
        """Record `message` under `field` unless `ok` holds."""
        if not ok:
            self.add_field_error(field, message)

    def __repr__(self) -> str:
        return (
            f"<Validator(field_errors={self.field_errors!r}, "
            f"non_field_errors={self.non_field_errors!r})>"
        )
