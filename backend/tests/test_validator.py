"""
Snippetbox — Validator and Predicate Unit Tests
================================================

What we test:
    ✅ Validator starts valid; any field or non-field error makes it invalid
    ✅ A later message for the same field replaces the earlier one
    ✅ Predicates count code points, trim whitespace, never raise
"""

import re

import pytest

from snippetbox.validation import (
    EMAIL_RX,
    Validator,
    matches,
    max_chars,
    min_chars,
    not_blank,
    permitted_int,
)


class TestValidator:

    def test_new_validator_is_valid(self):
        v = Validator()
        assert v.valid()
        assert v.field_errors == {}
        assert v.non_field_errors == []

    def test_field_error_makes_invalid(self):
        v = Validator()
        v.add_field_error("title", "This field cannot be blank")
        assert not v.valid()
        assert v.field_errors == {"title": "This field cannot be blank"}

    def test_non_field_error_makes_invalid(self):
        v = Validator()
        v.add_non_field_error("Email or password is incorrect")
        assert not v.valid()
        assert v.field_errors == {}

    def test_last_message_for_field_wins(self):
        v = Validator()
        v.add_field_error("title", "first")
        v.add_field_error("title", "second")
        assert v.field_errors == {"title": "second"}

    def test_non_field_errors_keep_order(self):
        v = Validator()
        v.add_non_field_error("one")
        v.add_non_field_error("two")
        assert v.non_field_errors == ["one", "two"]

    def test_check_field_records_only_on_failure(self):
        v = Validator()
        v.check_field(True, "title", "never recorded")
        assert v.valid()
        v.check_field(False, "title", "recorded")
        assert v.field_errors == {"title": "recorded"}


class TestPredicates:

    @pytest.mark.parametrize("value,expected", [
        ("hello", True),
        ("  x  ", True),
        ("", False),
        ("   ", False),
        ("\t\n", False),
    ])
    def test_not_blank(self, value, expected):
        assert not_blank(value) is expected

    def test_max_chars_counts_code_points(self):
        assert max_chars("a" * 100, 100)
        assert not max_chars("a" * 101, 100)
        # 100 CJK characters are 300 UTF-8 bytes but still 100 characters
        assert max_chars("字" * 100, 100)
        assert not max_chars("字" * 101, 100)

    def test_min_chars_counts_code_points(self):
        assert min_chars("pa$$word", 8)
        assert not min_chars("pa$$wor", 8)
        assert min_chars("ééééééé" + "é", 8)
        assert not min_chars("é" * 7, 8)

    @pytest.mark.parametrize("value,expected", [
        (1, True),
        (7, True),
        (365, True),
        (0, False),
        (2, False),
        (-1, False),
    ])
    def test_permitted_int(self, value, expected):
        assert permitted_int(value, 1, 7, 365) is expected

    def test_permitted_int_with_no_choices(self):
        assert not permitted_int(1)

    @pytest.mark.parametrize("value,expected", [
        ("alice@example.com", True),
        ("bob.smith+tag@mail.example.co.uk", True),
        ("user@localhost", True),
        ("", False),
        ("bob", False),
        ("bob@", False),
        ("@example.com", False),
        ("bob@example..com", False),
        ("bob@-example.com", False),
        ("bob example@example.com", False),
    ])
    def test_email_pattern(self, value, expected):
        assert matches(value, EMAIL_RX) is expected

    def test_matches_requires_whole_string(self):
        pattern = re.compile(r"[a-z]+")
        assert matches("abc", pattern)
        assert not matches("abc1", pattern)
        assert not matches("1abc", pattern)
