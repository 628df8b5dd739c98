"""
Snippetbox — Form Records and Form Binder
==========================================

What:  Typed records for the three HTML forms, the binder that fills them
       from a urlencoded POST body, and each form's validation policy.
How:   Every form class declares a mapping table (`form_fields`) of
       attribute → source key → converter. `FormBinder` checks that table
       against the dataclass once, when it is constructed, and then copies
       the first value of each key into the record, converting as declared.
Who:   Route handlers receive bound forms through `bind_form(...)`
       dependencies and call `form.validate()`.

Request Flow:
    POST body ──▶ read_post_form ──▶ FormBinder.bind ──▶ form.validate()
                  (400 if not        (400 if an int        (errors land in
                   urlencoded)        does not parse)       form.validator)

Decoding rules:
    - Repeated keys: the first value wins.
    - Missing text keys keep the record's default; the validation policy
      reports them.
    - Integer fields must be present and non-empty: a missing or empty
      value is a decode error, like any other non-integer.
    - Integers are plain base-10 with an optional sign ("7", "-1");
      "7.0", "1_0" and " 7" are decode errors.
"""

import re
from dataclasses import dataclass, field, fields, is_dataclass
from typing import Any, Callable, Dict, Generic, List, Mapping, Sequence, Tuple, Type, TypeVar

from fastapi import Depends, Request

from snippetbox.exceptions import DecodeError
from snippetbox.validation import (
    EMAIL_RX,
    Validator,
    matches,
    max_chars,
    min_chars,
    not_blank,
    permitted_int,
)

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"

# Shared messages, also asserted on by the tests
BLANK_MESSAGE = "This field cannot be blank"
EMAIL_MESSAGE = "This field must be a valid email address"

_INT_RX = re.compile(r"[+-]?[0-9]+")


def parse_int(raw: str) -> int:
    """Strict base-10 integer conversion used by integer form fields."""
    if not _INT_RX.fullmatch(raw):
        raise ValueError(f"invalid integer literal: {raw!r}")
    return int(raw)


@dataclass(frozen=True)
class FormField:
    """One row of a form's mapping table."""

    attr: str
    key: str
    convert: Callable[[str], Any] = str


# ══════════════════════════════════════════════════════════════════════════
# Form Records
# ══════════════════════════════════════════════════════════════════════════


@dataclass
class SnippetCreateForm:
    title: str = ""
    content: str = ""
    expires: int = 0
    validator: Validator = field(default_factory=Validator, repr=False, compare=False)

    form_fields = (
        FormField("title", "title"),
        FormField("content", "content"),
        FormField("expires", "expires", parse_int),
    )

    def validate(self) -> bool:
        """title: not blank, ≤100 chars; content: not blank; expires: 1, 7 or 365."""
        v = self.validator
        v.check_field(not_blank(self.title), "title", BLANK_MESSAGE)
        v.check_field(
            max_chars(self.title, 100),
            "title",
            "This field cannot be more than 100 characters long",
        )
        v.check_field(not_blank(self.content), "content", BLANK_MESSAGE)
        v.check_field(
            permitted_int(self.expires, 1, 7, 365),
            "expires",
            "This field must equal 1, 7 or 365",
        )
        return v.valid()


@dataclass
class UserSignupForm:
    name: str = ""
    email: str = ""
    password: str = ""
    validator: Validator = field(default_factory=Validator, repr=False, compare=False)

    form_fields = (
        FormField("name", "name"),
        FormField("email", "email"),
        FormField("password", "password"),
    )

    def validate(self) -> bool:
        v = self.validator
        v.check_field(not_blank(self.name), "name", BLANK_MESSAGE)
        v.check_field(not_blank(self.email), "email", BLANK_MESSAGE)
        v.check_field(matches(self.email, EMAIL_RX), "email", EMAIL_MESSAGE)
        v.check_field(not_blank(self.password), "password", BLANK_MESSAGE)
        v.check_field(
            min_chars(self.password, 8),
            "password",
            "This field must be at least 8 characters long",
        )
        return v.valid()


@dataclass
class UserLoginForm:
    email: str = ""
    password: str = ""
    validator: Validator = field(default_factory=Validator, repr=False, compare=False)

    form_fields = (
        FormField("email", "email"),
        FormField("password", "password"),
    )

    def validate(self) -> bool:
        v = self.validator
        v.check_field(not_blank(self.email), "email", BLANK_MESSAGE)
        v.check_field(matches(self.email, EMAIL_RX), "email", EMAIL_MESSAGE)
        v.check_field(not_blank(self.password), "password", BLANK_MESSAGE)
        return v.valid()


# ══════════════════════════════════════════════════════════════════════════
# Form Binder
# ══════════════════════════════════════════════════════════════════════════

F = TypeVar("F")


class FormBinder(Generic[F]):
    """
    Decodes a key → values payload into instances of one form class.

    Construction resolves the class's `form_fields` table; a table naming an
    attribute the dataclass does not have raises TypeError, since that is a
    bug in the form definition rather than in the request.
    """

    def __init__(self, form_cls: Type[F]):
        if not is_dataclass(form_cls):
            raise TypeError(f"{form_cls.__name__} is not a dataclass form record")

        table: Tuple[FormField, ...] = tuple(getattr(form_cls, "form_fields", ()))
        if not table:
            raise TypeError(f"{form_cls.__name__} declares no form_fields")

        known = {f.name for f in fields(form_cls)}
        unknown = [spec.attr for spec in table if spec.attr not in known]
        if unknown:
            raise TypeError(
                f"{form_cls.__name__}.form_fields maps unknown attributes: {', '.join(unknown)}"
            )

        self.form_cls = form_cls
        self.table = table

    def decode(self, payload: Mapping[str, Sequence[str]], form: F) -> None:
        """
        Populate `form` in place from `payload`.

        Raises:
            DecodeError: `form` is not a mutable instance of the bound class,
                or a converter rejected a value.
        """
        if not isinstance(form, self.form_cls):
            raise DecodeError(
                "Destination is not a form record of the bound type",
                context={
                    "expected": self.form_cls.__name__,
                    "got": type(form).__name__,
                },
            )

        for spec in self.table:
            values = payload.get(spec.key)
            if not values:
                if spec.convert is str:
                    continue
                # An absent integer parses like an empty one: a decode error
                values = [""]
            raw = values[0]

            try:
                value = spec.convert(raw)
            except (TypeError, ValueError) as e:
                raise DecodeError(
                    f"Field '{spec.key}' could not be decoded",
                    field=spec.key,
                    context={"error": str(e)},
                ) from e

            try:
                setattr(form, spec.attr, value)
            except AttributeError as e:
                # dataclasses.FrozenInstanceError is an AttributeError
                raise DecodeError(
                    "Destination form record is not mutable",
                    context={"form": type(form).__name__},
                ) from e

    def bind(self, payload: Mapping[str, Sequence[str]]) -> F:
        """Create a fresh form record and decode `payload` into it."""
        form = self.form_cls()
        self.decode(payload, form)
        return form


# ══════════════════════════════════════════════════════════════════════════
# FastAPI Dependencies
# ══════════════════════════════════════════════════════════════════════════


async def read_post_form(request: Request) -> Dict[str, List[str]]:
    """
    Read a urlencoded request body as key → list of values.

    Raises:
        DecodeError: Content-Type is not application/x-www-form-urlencoded.
    """
    content_type = request.headers.get("content-type", "")
    media_type = content_type.split(";", 1)[0].strip().lower()
    if media_type != FORM_CONTENT_TYPE:
        raise DecodeError(
            "Request body is not form-encoded",
            context={"content_type": content_type},
        )

    form = await request.form()
    return {key: form.getlist(key) for key in form.keys()}


def bind_form(form_cls: Type[F]) -> Callable[..., Any]:
    """
    Build a dependency that yields a bound `form_cls` record.

    Usage::

        async def snippet_create_post(
            form: SnippetCreateForm = Depends(bind_form(SnippetCreateForm)),
        ): ...
    """
    binder = FormBinder(form_cls)

    async def dependency(payload: Dict[str, List[str]] = Depends(read_post_form)) -> F:
        return binder.bind(payload)

    return dependency
