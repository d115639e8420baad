"""Validation rules for outgoing email messages.

Rules are plain data: a field name, a predicate and a message. All rules
are evaluated and every violation is returned, so a caller fixing a message
sees the whole list at once instead of one problem per attempt.

Rules that apply to a collection (recipients, attachments, headers) are
``EachRule`` instances; they report one violation per failing item with the
item index in the field name, e.g. ``to[1]`` or ``attachments[0].content``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Iterable, Sequence, Union

from email_validator import EmailNotValidError, validate_email

from sendout.domain.entities.email_message import Address, EmailMessage
from sendout.domain.errors import ValidationError


@dataclass(frozen=True)
class Violation:
    field: str
    message: str

    def __str__(self) -> str:
        return f"{self.field}: {self.message}"


@dataclass(frozen=True)
class Rule:
    """A check over the whole message."""

    field: str
    check: Callable[[EmailMessage], bool]
    message: str

    def evaluate(self, message: EmailMessage) -> list[Violation]:
        if self.check(message):
            return []
        return [Violation(self.field, self.message)]


@dataclass(frozen=True)
class EachRule:
    """A check applied to every item of a collection on the message.

    ``field`` is a template receiving the item index as ``{i}``;
    ``message`` is a template receiving the item as ``{value}``.
    """

    field: str
    items: Callable[[EmailMessage], Sequence[Any]]
    check: Callable[[Any], bool]
    message: str

    def evaluate(self, message: EmailMessage) -> list[Violation]:
        return [
            Violation(self.field.format(i=i), self.message.format(value=item))
            for i, item in enumerate(self.items(message))
            if not self.check(item)
        ]


AnyRule = Union[Rule, EachRule]


def is_valid_address(address: Address) -> bool:
    """Syntax-only check; no DNS lookups."""
    if not address.email:
        return False
    try:
        validate_email(address.email, check_deliverability=False)
    except EmailNotValidError:
        return False
    return True


def _not_blank(value: str | None) -> bool:
    return bool(value and value.strip())


def _optional_not_blank(value: str | None) -> bool:
    return value is None or _not_blank(value)


def _is_media_type(value: str) -> bool:
    kind, sep, subtype = (value or "").partition("/")
    return bool(sep and kind.strip() and subtype.strip())


def _header_names_unique(message: EmailMessage) -> bool:
    names = [name.strip().lower() for name in message.headers]
    return len(names) == len(set(names))


def _recipient_rules(field: str) -> EachRule:
    return EachRule(
        field=field + "[{i}]",
        items=lambda m: getattr(m, field),
        check=is_valid_address,
        message="'{value.email}' is not a valid email address",
    )


MESSAGE_RULES: tuple[AnyRule, ...] = (
    Rule("from", lambda m: m.from_ is not None, "sender address is required"),
    Rule(
        "from",
        lambda m: m.from_ is None or is_valid_address(m.from_),
        "sender is not a valid email address",
    ),
    Rule("recipients", lambda m: bool(m.recipients), "missing recipient: at least one of to, cc or bcc is required"),
    Rule("to", lambda m: bool(m.to), "at least one 'to' recipient is required"),
    _recipient_rules("to"),
    _recipient_rules("cc"),
    _recipient_rules("bcc"),
    _recipient_rules("reply_to"),
    Rule("subject", lambda m: _not_blank(m.subject), "subject must not be empty"),
    Rule("body", lambda m: m.body is not None and _not_blank(m.body.content), "body must not be empty"),
    EachRule("attachments[{i}].name", lambda m: m.attachments, lambda a: _not_blank(a.name), "attachment name must not be empty"),
    EachRule("attachments[{i}].content", lambda m: m.attachments, lambda a: bool(a.content), "attachment content must not be empty"),
    EachRule(
        "attachments[{i}].content_type",
        lambda m: m.attachments,
        lambda a: _is_media_type(a.content_type),
        "'{value.content_type}' is not a media type",
    ),
    EachRule("headers[{i}].name", lambda m: list(m.headers), _not_blank, "header name must not be empty"),
    Rule("headers", _header_names_unique, "header names must be unique"),
    Rule("tag", lambda m: _optional_not_blank(m.tag), "tag must not be empty when set"),
    Rule("message_stream", lambda m: _optional_not_blank(m.message_stream), "message stream must not be empty when set"),
)


def validate_message(message: EmailMessage, extra_rules: Iterable[AnyRule] = ()) -> list[Violation]:
    """Evaluate every rule and return all violations (empty when valid)."""
    violations: list[Violation] = []
    for rule in (*MESSAGE_RULES, *extra_rules):
        violations.extend(rule.evaluate(message))
    return violations


def ensure_valid(message: EmailMessage, extra_rules: Iterable[AnyRule] = ()) -> EmailMessage:
    """Return ``message`` unchanged, or raise ``ValidationError`` listing every violation."""
    violations = validate_message(message, extra_rules)
    if violations:
        raise ValidationError(violations)
    return message
