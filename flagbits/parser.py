"""Formatting and parsing flags values as text.

The text form is a ``|``-separated list of flag names and hex numbers, with
optional whitespace around each item::

    A | B | 0x0c

Names are case-sensitive.  Hex numbers carry a ``0x`` prefix and stand for
bits that may or may not belong to a defined flag.
"""

from __future__ import annotations

from enum import Enum
from typing import TypeVar

from .traits import Flags

F = TypeVar("F", bound=Flags)

_SEPARATOR = " | "


class ParseErrorKind(Enum):
    """What went wrong while parsing flags from text."""

    EMPTY_FLAG = "encountered empty flag"
    INVALID_NAMED_FLAG = "unrecognized named flag"
    INVALID_HEX_FLAG = "invalid hex flag"


class ParseError(ValueError):
    """An error encountered while parsing flags from text."""

    def __init__(self, kind: ParseErrorKind, got: str | None = None) -> None:
        self.kind = kind
        self.got = got
        super().__init__(str(self))

    @classmethod
    def invalid_hex_flag(cls, flag: object) -> ParseError:
        """An invalid hex flag was encountered."""
        return cls(ParseErrorKind.INVALID_HEX_FLAG, str(flag))

    @classmethod
    def invalid_named_flag(cls, flag: object) -> ParseError:
        """A name that does not match any flag of the flags type was encountered."""
        return cls(ParseErrorKind.INVALID_NAMED_FLAG, str(flag))

    @classmethod
    def empty_flag(cls) -> ParseError:
        """Nothing was found between two separators."""
        return cls(ParseErrorKind.EMPTY_FLAG)

    def __str__(self) -> str:
        if self.got is None:
            return self.kind.value
        return f"{self.kind.value} `{self.got}`"

    def __repr__(self) -> str:
        return f"ParseError({self.kind.name}, {self.got!r})"


def _names_and_remaining(flags: Flags) -> tuple[list[str], int]:
    names = []
    remaining = flags.bits()
    for name, flag in flags.iter_names():
        names.append(name)
        remaining &= ~flag.bits()
    return names, remaining


def to_writer(flags: Flags) -> str:
    """Format a flags value as text.

    Bits that are not part of a contained named flag are written as a final
    hex number.
    """
    names, remaining = _names_and_remaining(flags)
    storage = type(flags).BITS
    if remaining != storage.empty:
        names.append("0x" + storage.write_hex(remaining))
    return _SEPARATOR.join(names)


def _items(text: str):
    for item in text.split("|"):
        item = item.strip()
        if not item:
            raise ParseError.empty_flag()
        yield item


def _named(flags_type: type[F], name: str) -> F:
    parsed = flags_type.from_name(name)
    if parsed is None:
        raise ParseError.invalid_named_flag(name)
    return parsed


def from_str(flags_type: type[F], text: str) -> F:
    """Parse a flags value of ``flags_type`` from text.

    Unknown names raise :class:`ParseError`; unknown bits given in hex are kept.
    """
    parsed = flags_type.empty()
    if not text.strip():
        return parsed
    for item in _items(text):
        if item.startswith("0x"):
            digits = item[2:]
            try:
                bits = flags_type.BITS.parse_hex(digits)
            except ValueError:
                raise ParseError.invalid_hex_flag(digits) from None
            parsed.insert(flags_type.from_bits_retain(bits))
        else:
            parsed.insert(_named(flags_type, item))
    return parsed


def to_writer_truncate(flags: Flags) -> str:
    """Format a flags value as text, ignoring any unknown bits."""
    return to_writer(type(flags).from_bits_truncate(flags.bits()))


def from_str_truncate(flags_type: type[F], text: str) -> F:
    """Parse a flags value from text, dropping any unknown bits."""
    return flags_type.from_bits_truncate(from_str(flags_type, text).bits())


def to_writer_strict(flags: Flags) -> str:
    """Format only the contained named flags of a flags value as text."""
    names, _ = _names_and_remaining(flags)
    return _SEPARATOR.join(names)


def from_str_strict(flags_type: type[F], text: str) -> F:
    """Parse a flags value from names only; hex numbers raise :class:`ParseError`."""
    parsed = flags_type.empty()
    if not text.strip():
        return parsed
    for item in _items(text):
        if item.startswith("0x"):
            raise ParseError.invalid_hex_flag("unsupported hex flag value")
        parsed.insert(_named(flags_type, item))
    return parsed