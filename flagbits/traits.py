"""Flag sets stored in fixed-width integers."""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator, Mapping
from enum import Enum
from typing import ClassVar, TypeVar, Union

_HEX_DIGITS = re.compile(r"[+-]?[0-9A-Fa-f]+")


class Bits(Enum):
    """A fixed-width integer type used as storage for a flags type."""

    U8 = (8, False)
    I8 = (8, True)
    U16 = (16, False)
    I16 = (16, True)
    U32 = (32, False)
    I32 = (32, True)
    U64 = (64, False)
    I64 = (64, True)
    U128 = (128, False)
    I128 = (128, True)
    # Pointer-sized storage; these are aliases of the 64-bit members.
    USIZE = (64, False)
    ISIZE = (64, True)

    def __init__(self, width: int, signed: bool) -> None:
        self.width = width
        self.signed = signed

    @property
    def mask(self) -> int:
        """All bits of the storage width set, as a non-negative integer."""
        return (1 << self.width) - 1

    @property
    def min(self) -> int:
        """The smallest representable value."""
        return -(1 << (self.width - 1)) if self.signed else 0

    @property
    def max(self) -> int:
        """The largest representable value."""
        return (1 << (self.width - 1)) - 1 if self.signed else self.mask

    @property
    def empty(self) -> int:
        """A value with all bits unset."""
        return 0

    @property
    def all(self) -> int:
        """A value with all bits set."""
        return self.wrap(self.mask)

    def wrap(self, value: int) -> int:
        """Reduce an integer to this storage type, wrapping like two's complement."""
        wrapped = value & self.mask
        if self.signed and wrapped > self.max:
            wrapped -= 1 << self.width
        return wrapped

    def parse_hex(self, text: str) -> int:
        """Parse hex digits (no ``0x`` prefix) into a value of this type.

        Raises ValueError on malformed input or a value out of range.
        """
        if not _HEX_DIGITS.fullmatch(text):
            raise ValueError(f"invalid hex value {text!r}")
        if text.startswith("-") and not self.signed:
            raise ValueError(f"invalid hex value {text!r}")
        value = int(text, 16)
        if not self.min <= value <= self.max:
            raise ValueError(f"hex value {text!r} out of range for {self.name}")
        return value

    def write_hex(self, value: int) -> str:
        """Format a value as lower-case hex digits, without a ``0x`` prefix."""
        return format(value & self.mask, "x")


class Flag:
    """A defined flags value that may be named or unnamed."""

    __slots__ = ("name", "_value")

    def __init__(self, name: str, value: Flags) -> None:
        self.name = name
        self._value = value

    @property
    def value(self) -> Flags:
        """A fresh copy of the flags value of this flag."""
        return type(self._value).from_bits_retain(self._value.bits())

    def is_named(self) -> bool:
        """Whether the flag has a non-empty name."""
        return bool(self.name)

    def is_unnamed(self) -> bool:
        """Whether the flag's name is empty."""
        return not self.name

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Flag):
            return NotImplemented
        return self.name == other.name and self._value == other._value

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Flag({self.name!r}, {self._value!r})"


F = TypeVar("F", bound="Flags")
_FlagSpec = Union[Mapping[str, int], Iterable[tuple[str, int]]]


class Flags:
    """A set of defined flags using a fixed-width integer as storage.

    Subclasses choose their storage and flags with class keywords::

        class Mode(Flags, bits=Bits.U8, flags={"READ": 1, "WRITE": 2}):
            pass

    ``flags`` may also be a sequence of ``(name, bits)`` pairs; an empty name
    defines an unnamed flag.  ``BITS`` and ``FLAGS`` may be assigned directly.
    """

    BITS: ClassVar[Bits]
    FLAGS: ClassVar[tuple[Flag, ...]] = ()

    __slots__ = ("_bits",)

    def __init_subclass__(
        cls, bits: Bits | None = None, flags: _FlagSpec | None = None, **kwargs
    ) -> None:
        super().__init_subclass__(**kwargs)
        if bits is not None:
            cls.BITS = bits
        if flags is not None:
            pairs = flags.items() if isinstance(flags, Mapping) else flags
            cls.FLAGS = tuple(
                Flag(name, cls.from_bits_retain(value.bits() if isinstance(value, Flags) else value))
                for name, value in pairs
            )

    def __init__(self, bits: int = 0) -> None:
        storage = getattr(type(self), "BITS", None)
        if storage is None:
            raise TypeError(f"{type(self).__name__} has no storage type (BITS)")
        self._bits = storage.wrap(bits)

    # -- construction -------------------------------------------------------

    @classmethod
    def empty(cls: type[F]) -> F:
        """A flags value with all bits unset."""
        return cls.from_bits_retain(cls.BITS.empty)

    @classmethod
    def all(cls: type[F]) -> F:
        """A flags value with all known bits set."""
        truncated = cls.BITS.empty
        for flag in cls.FLAGS:
            truncated |= flag.value.bits()
        return cls.from_bits_retain(truncated)

    @classmethod
    def from_bits(cls: type[F], bits: int) -> F | None:
        """Convert from bits, or return None if any unknown bits are set."""
        bits = cls.BITS.wrap(bits)
        truncated = cls.from_bits_truncate(bits)
        return truncated if truncated.bits() == bits else None

    @classmethod
    def from_bits_truncate(cls: type[F], bits: int) -> F:
        """Convert from bits, unsetting any unknown bits."""
        return cls.from_bits_retain(bits & cls.all().bits())

    @classmethod
    def from_bits_retain(cls: type[F], bits: int) -> F:
        """Convert from bits exactly (wrapped to the storage width)."""
        return cls(bits)

    @classmethod
    def from_name(cls: type[F], name: str) -> F | None:
        """The value of the flag with the given name, or None if there is none."""
        if not name:
            return None
        for flag in cls.FLAGS:
            if flag.name == name:
                return cls.from_bits_retain(flag.value.bits())
        return None

    # -- queries ------------------------------------------------------------

    def bits(self) -> int:
        """The exact bits set in this flags value."""
        return self._bits

    def contains_unknown_bits(self) -> bool:
        """Whether any bits not belonging to a defined flag are set."""
        return type(self).all().bits() & self._bits != self._bits

    def iter(self: F) -> Iterator[F]:
        """Yield each contained named flag, then any remaining bits together."""
        remaining = self._bits
        for _, flag in self.iter_names():
            remaining &= ~flag.bits()
            yield flag
        if remaining != type(self).BITS.empty:
            yield type(self).from_bits_retain(remaining)

    def iter_names(self: F) -> Iterator[tuple[str, F]]:
        """Yield ``(name, value)`` for each contained named flag.

        A flag is yielded when all its bits are set in this value and some of
        them have not been covered by a flag yielded earlier.
        """
        cls = type(self)
        empty = cls.BITS.empty
        remaining = self._bits
        for flag in cls.FLAGS:
            if remaining == empty:
                return
            if flag.is_unnamed():
                continue
            bits = flag.value.bits()
            if self._bits & bits == bits and remaining & bits != empty:
                remaining &= ~bits
                yield flag.name, cls.from_bits_retain(bits)

    def is_empty(self) -> bool:
        """Whether all bits are unset."""
        return self._bits == type(self).BITS.empty

    def is_all(self) -> bool:
        """Whether all known bits are set."""
        return type(self).all().bits() | self._bits == self._bits

    def intersects(self: F, other: F) -> bool:
        """Whether any bit set in ``other`` is also set here."""
        return self._bits & self._other(other) != type(self).BITS.empty

    def contains(self: F, other: F) -> bool:
        """Whether every bit set in ``other`` is also set here."""
        other_bits = self._other(other)
        return self._bits & other_bits == other_bits

    # -- in-place changes ---------------------------------------------------

    def truncate(self) -> None:
        """Unset any unknown bits."""
        self._bits = type(self).from_bits_truncate(self._bits).bits()

    def insert(self: F, other: F) -> None:
        """Set the bits of ``other``."""
        self._bits = self.union(other).bits()

    def remove(self: F, other: F) -> None:
        """Unset the bits of ``other``."""
        self._bits = self.difference(other).bits()

    def toggle(self: F, other: F) -> None:
        """Flip the bits of ``other``."""
        self._bits = self.symmetric_difference(other).bits()

    def set(self: F, other: F, value: bool) -> None:
        """Insert ``other`` when ``value`` is true, otherwise remove it."""
        if value:
            self.insert(other)
        else:
            self.remove(other)

    def clear(self) -> None:
        """Unset all bits."""
        self._bits = type(self).BITS.empty

    # -- new values ---------------------------------------------------------

    def intersection(self: F, other: F) -> F:
        """The bits set in both values."""
        return type(self).from_bits_retain(self._bits & self._other(other))

    def union(self: F, other: F) -> F:
        """The bits set in either value."""
        return type(self).from_bits_retain(self._bits | self._other(other))

    def difference(self: F, other: F) -> F:
        """The bits set here but not in ``other``; ``other`` is not truncated."""
        return type(self).from_bits_retain(self._bits & ~self._other(other))

    def symmetric_difference(self: F, other: F) -> F:
        """The bits set in exactly one of the values."""
        return type(self).from_bits_retain(self._bits ^ self._other(other))

    def complement(self: F) -> F:
        """The known bits not set here."""
        return type(self).from_bits_truncate(~self._bits)

    # -- protocol -----------------------------------------------------------

    def _other(self, other: Flags) -> int:
        if not isinstance(other, type(self)):
            raise TypeError(
                f"expected {type(self).__name__}, got {type(other).__name__}"
            )
        return other._bits

    def __iter__(self: F) -> Iterator[F]:
        return self.iter()

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._bits == other._bits  # type: ignore[attr-defined]

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"{type(self).__name__}(0x{type(self).BITS.write_hex(self._bits)})"