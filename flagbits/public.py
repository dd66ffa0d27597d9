"""User-facing flags types with operators, named constants and formatting."""

from __future__ import annotations

import types
from collections.abc import Iterable, Mapping
from typing import TypeVar

from .parser import to_writer
from .traits import Bits, Flags

B = TypeVar("B", bound="BitFlags")


class _FlagConstant:
    """Class attribute that hands out a fresh value of a named flag."""

    __slots__ = ("bits",)

    def __init__(self, bits: int) -> None:
        self.bits = bits

    def __get__(self, instance: object, owner: type[Flags]) -> Flags:
        return owner.from_bits_retain(self.bits)

    def __set__(self, instance: object, value: object) -> None:
        raise AttributeError("flag constants are read-only")


class BitFlags(Flags):
    """A flags type with bitwise operators and its flags as class attributes.

    Declare one with class keywords, the same way as :class:`Flags`::

        class Mode(BitFlags, bits=Bits.U8, flags={"READ": 1, "WRITE": 2}):
            pass

        Mode.READ | Mode.WRITE

    A flag named ``_`` is unnamed: its bits count as known, but it has no
    constant and cannot be parsed by name.
    """

    __slots__ = ()

    def __init_subclass__(
        cls, bits: Bits | None = None, flags=None, **kwargs
    ) -> None:
        pairs = None
        if flags is not None:
            items = flags.items() if isinstance(flags, Mapping) else flags
            pairs = [("" if name == "_" else name, value) for name, value in items]
            cls._check_names([name for name, _ in pairs if name])
        super().__init_subclass__(bits=bits, flags=pairs, **kwargs)
        if pairs is not None:
            for flag in cls.FLAGS:
                if flag.is_named():
                    setattr(cls, flag.name, _FlagConstant(flag.value.bits()))

    @classmethod
    def _check_names(cls, names: list[str]) -> None:
        seen: set[str] = set()
        for name in names:
            if name in seen:
                raise ValueError(f"flag {name!r} is defined more than once")
            seen.add(name)
            for base in cls.__mro__:
                attr = vars(base).get(name)
                if attr is not None and not isinstance(attr, _FlagConstant):
                    raise ValueError(
                        f"flag {name!r} clashes with an attribute of {base.__name__}"
                    )

    # -- collecting ---------------------------------------------------------

    def extend(self: B, iterable: Iterable[B]) -> None:
        """Insert every flags value of ``iterable``."""
        for item in iterable:
            self.insert(item)

    @classmethod
    def from_iter(cls: type[B], iterable: Iterable[B]) -> B:
        """The union of every flags value of ``iterable``."""
        result = cls.empty()
        result.extend(iterable)
        return result

    # -- operators ----------------------------------------------------------

    def _same(self, other: object) -> bool:
        return isinstance(other, type(self))

    def __or__(self: B, other: B) -> B:
        if not self._same(other):
            return NotImplemented
        return self.union(other)

    def __ior__(self: B, other: B) -> B:
        if not self._same(other):
            return NotImplemented
        self.insert(other)
        return self

    def __and__(self: B, other: B) -> B:
        if not self._same(other):
            return NotImplemented
        return self.intersection(other)

    def __iand__(self: B, other: B) -> B:
        if not self._same(other):
            return NotImplemented
        self._bits = self.intersection(other).bits()
        return self

    def __xor__(self: B, other: B) -> B:
        if not self._same(other):
            return NotImplemented
        return self.symmetric_difference(other)

    def __ixor__(self: B, other: B) -> B:
        if not self._same(other):
            return NotImplemented
        self.toggle(other)
        return self

    def __sub__(self: B, other: B) -> B:
        if not self._same(other):
            return NotImplemented
        return self.difference(other)

    def __isub__(self: B, other: B) -> B:
        if not self._same(other):
            return NotImplemented
        self.remove(other)
        return self

    def __invert__(self: B) -> B:
        return self.complement()

    # -- ordering -----------------------------------------------------------

    def __lt__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self.bits() < other.bits()  # type: ignore[attr-defined]

    def __le__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self.bits() <= other.bits()  # type: ignore[attr-defined]

    def __gt__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self.bits() > other.bits()  # type: ignore[attr-defined]

    def __ge__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self.bits() >= other.bits()  # type: ignore[attr-defined]

    # -- text ---------------------------------------------------------------

    def __str__(self) -> str:
        return to_writer(self)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({to_writer(self) or '0x0'})"

    def __format__(self, spec: str) -> str:
        if not spec:
            return str(self)
        if spec[-1] in "xXob":
            return format(self.bits() & type(self).BITS.mask, spec)
        return format(self.bits(), spec)


def bitflags(name: str, bits: Bits, members) -> type[BitFlags]:
    """Create a :class:`BitFlags` subclass called ``name``.

    ``members`` is a mapping of flag names to bits, or a sequence of
    ``(name, bits)`` pairs; the name ``_`` defines an unnamed flag.
    """
    return types.new_class(
        name,
        (BitFlags,),
        {"bits": bits, "flags": members},
        lambda namespace: namespace.update({"__slots__": ()}),
    )