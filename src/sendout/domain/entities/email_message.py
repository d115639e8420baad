"""Outgoing email message value objects."""

from __future__ import annotations

import mimetypes
import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field, replace
from email.utils import parseaddr, quote
from enum import Enum
from pathlib import Path
from types import MappingProxyType
from typing import Optional, Union

DEFAULT_CONTENT_TYPE = "application/octet-stream"

# RFC 5322 specials; a display name containing any of them is quoted
_SPECIALS = re.compile(r'[][\\()<>@,:;".]')


@dataclass(frozen=True)
class Address:
    """A mailbox: an address with an optional display name."""

    email: str
    name: Optional[str] = None

    @classmethod
    def parse(cls, value: str) -> Address:
        """Parse ``"Name <a@b>"`` or ``"a@b"``.

        Unparseable input is kept verbatim as the address so that
        validation can report it instead of losing it here.
        """
        name, email = parseaddr(value)
        if not email:
            return cls(email=value.strip())
        return cls(email=email, name=name or None)

    def formatted(self) -> str:
        """Render as ``Name <a@b>`` or the bare address.

        Non-ASCII names and addresses are kept as text; the provider takes
        JSON strings and does the header encoding itself.
        """
        if not self.name:
            return self.email
        name = self.name
        if _SPECIALS.search(name):
            name = f'"{quote(name)}"'
        return f"{name} <{self.email}>"

    def __str__(self) -> str:
        return self.formatted()


AddressLike = Union[Address, str]


def _to_address(value: AddressLike) -> Address:
    return value if isinstance(value, Address) else Address.parse(value)


def _to_addresses(values: Union[AddressLike, Iterable[AddressLike], None]) -> tuple[Address, ...]:
    if values is None:
        return ()
    if isinstance(values, (str, Address)):
        return (_to_address(values),)
    return tuple(_to_address(v) for v in values)


class BodyKind(str, Enum):
    TEXT = "text"
    HTML = "html"


@dataclass(frozen=True)
class Body:
    """Message body: either plain text or HTML, never both."""

    kind: BodyKind
    content: str

    @classmethod
    def text(cls, content: str) -> Body:
        return cls(BodyKind.TEXT, content)

    @classmethod
    def html(cls, content: str) -> Body:
        return cls(BodyKind.HTML, content)

    @property
    def is_html(self) -> bool:
        return self.kind is BodyKind.HTML


@dataclass(frozen=True)
class Attachment:
    name: str
    content: bytes
    content_type: str = DEFAULT_CONTENT_TYPE

    @classmethod
    def from_path(cls, path: Union[str, Path], content_type: Optional[str] = None) -> Attachment:
        """Read a file from disk, guessing its media type from the name."""
        p = Path(path)
        guessed, _ = mimetypes.guess_type(p.name)
        return cls(
            name=p.name,
            content=p.read_bytes(),
            content_type=content_type or guessed or DEFAULT_CONTENT_TYPE,
        )

    @property
    def size_bytes(self) -> int:
        return len(self.content)


@dataclass(frozen=True)
class Header:
    name: str
    value: str


@dataclass(frozen=True, kw_only=True)
class EmailMessage:
    """An email ready to hand to a provider.

    Address fields accept ``Address`` objects or strings and are normalised
    to tuples of ``Address`` on construction. Construction never validates;
    see ``sendout.domain.validation``.
    """

    to: tuple[Address, ...]
    subject: str
    body: Body
    from_: Optional[Address] = None
    cc: tuple[Address, ...] = ()
    bcc: tuple[Address, ...] = ()
    reply_to: tuple[Address, ...] = ()
    attachments: tuple[Attachment, ...] = ()
    headers: Mapping[str, str] = field(default_factory=dict)
    tag: Optional[str] = None
    metadata: Mapping[str, str] = field(default_factory=dict)
    message_stream: Optional[str] = None

    def __post_init__(self) -> None:
        # frozen dataclass: normalise through object.__setattr__
        if self.from_ is not None:
            object.__setattr__(self, "from_", _to_address(self.from_))
        for name in ("to", "cc", "bcc", "reply_to"):
            object.__setattr__(self, name, _to_addresses(getattr(self, name)))
        object.__setattr__(self, "attachments", tuple(self.attachments or ()))
        object.__setattr__(self, "headers", MappingProxyType(dict(self.headers or {})))
        object.__setattr__(self, "metadata", MappingProxyType(dict(self.metadata or {})))

    def __hash__(self) -> int:
        # mapping fields compare by content, regardless of order
        return hash(
            (
                self.to,
                self.subject,
                self.body,
                self.from_,
                self.cc,
                self.bcc,
                self.reply_to,
                self.attachments,
                frozenset(self.headers.items()),
                self.tag,
                frozenset(self.metadata.items()),
                self.message_stream,
            )
        )

    @property
    def recipients(self) -> tuple[Address, ...]:
        """Every To, Cc and Bcc address, in that order."""
        return self.to + self.cc + self.bcc

    @property
    def header_list(self) -> list[Header]:
        return [Header(name, value) for name, value in self.headers.items()]

    def with_sender(self, sender: AddressLike) -> EmailMessage:
        """Return a copy with ``from_`` replaced."""
        return replace(self, from_=_to_address(sender))
