# flagbits

Sets of named bit flags stored in a fixed-width integer.

A flags type pairs a storage width with a list of defined flags. Each
flag has a name and a value, and values may overlap or span several
bits. A flags value holds an integer of that width and supports set
operations on it. Bits that belong to some defined flag are *known*;
any other bits are *unknown*, and the API lets you either keep or drop
them.

The package has three modules:

- `flagbits.traits`: the storage types (`Bits`), a defined flag
  (`Flag`) and the base flags type (`Flags`) with all set operations.
- `flagbits.public`: `BitFlags`, a `Flags` subclass that adds
  operators, flag constants as class attributes, ordering and
  formatting, and the `bitflags()` factory.
- `flagbits.parser`: reading and writing flags values as text.

## Installing

```
pip install flagbits
```

## Storage types

`flagbits.traits.Bits` is an enum of integer widths: `U8`, `I8`, `U16`,
`I16`, `U32`, `I32`, `U64`, `I64`, `U128`, `I128`, and `USIZE` / `ISIZE`
as aliases of the 64-bit members. Every value stored in a flags type is
wrapped to its width the way two's complement arithmetic would wrap it,
so on a signed type all bits set reads as `-1`.

Each member offers `width`, `signed`, `mask`, `min`, `max`, `empty` and
`all`, plus `wrap(value)`, `parse_hex(text)` (hex digits without a
`0x` prefix; raises `ValueError` when malformed or out of range) and
`write_hex(value)` (lower-case hex digits, no prefix).

## Declaring a flags type

With the factory:

```python
from flagbits.public import bitflags
from flagbits.traits import Bits

Perms = bitflags("Perms", Bits.U8, {"READ": 1, "WRITE": 2, "EXEC": 4})
```

or as a class, with the same information given as class keywords:

```python
from flagbits.public import BitFlags
from flagbits.traits import Bits

class Perms(BitFlags, bits=Bits.U8, flags={"READ": 1, "WRITE": 2, "EXEC": 4}):
    pass
```

`flags` (or `members`) is a mapping of names to bits or a sequence of
`(name, bits)` pairs, kept in declaration order. A flag named `_` is
unnamed: its bits count as known, but it gets no constant and cannot be
looked up by name. Defining a name twice, or a name that clashes with
an existing attribute such as `union`, raises `ValueError`.

Each named flag becomes a read-only class attribute (`Perms.READ`) that
returns a fresh value every time. `Perms.FLAGS` holds the defined flags
as `flagbits.traits.Flag` objects with `name`, `value`, `is_named()`
and `is_unnamed()`.

The plain `flagbits.traits.Flags` base can be subclassed the same way
when the set operations are wanted without operators or constants.

## Constructing values

```python
Perms.empty()                   # no bits set
Perms.all()                     # every known bit set
Perms.from_bits(0b011)          # None if unknown bits are present
Perms.from_bits_truncate(0xff)  # drops unknown bits
Perms.from_bits_retain(0xff)    # keeps every bit as given
Perms.from_name("READ")         # None if no named flag has that name
```

## Working with values

```python
p = Perms.READ | Perms.WRITE

p.contains(Perms.READ)          # True
p.intersects(Perms.EXEC)        # False
p.bits()                        # 3

p.insert(Perms.EXEC)
p.remove(Perms.WRITE)
p.toggle(Perms.READ)
p.set(Perms.WRITE, True)
p.truncate()                    # drop unknown bits
p.clear()
```

`union`, `intersection`, `difference`, `symmetric_difference` and
`complement` return new values; the operators `|`, `&`, `-`, `^` and `~`
map to them, and `|=`, `&=`, `-=` and `^=` change a value in place.
`complement` and `~` truncate the result to known bits; `difference`
does not truncate its argument, so `a - b` and `a & ~b` differ when `b`
has unknown bits. Combining values of different flags types raises
`TypeError`.

`p.is_empty()`, `p.is_all()` and `p.contains_unknown_bits()` describe
the value as a whole. Values of the same type compare equal by their
bits and are ordered by them; they are mutable and therefore not
hashable.

## Iterating

`p.iter()` (and plain `for flag in p`) yields one value per contained
named flag, followed by any bits not covered by those flags as a single
final value. `p.iter_names()` yields `(name, value)` pairs for named
flags only; a flag is yielded when all of its bits are set and some of
them were not covered by a flag yielded before it.

`Perms.from_iter(values)` builds the union of an iterable of values, and
`p.extend(values)` inserts each of them in place.

## Text format

`flagbits.parser` reads and writes flags as text such as
`READ | WRITE | 0x80`: flag names separated by `|`, with any bits not
covered by a named flag written as one hex number. Names are
case-sensitive, whitespace around each part is ignored, and blank text
parses as the empty value.

```python
from flagbits.parser import from_str, to_writer

text = to_writer(Perms.READ | Perms.WRITE)   # "READ | WRITE"
from_str(Perms, text) == Perms.READ | Perms.WRITE   # True
```

- `to_writer` / `from_str` keep unknown bits.
- `to_writer_truncate` / `from_str_truncate` drop unknown bits.
- `to_writer_strict` writes named flags only; `from_str_strict` accepts
  names only and rejects hex numbers.

Malformed input raises `flagbits.parser.ParseError`, a `ValueError`
whose `kind` is a `ParseErrorKind` (`EMPTY_FLAG`, `INVALID_NAMED_FLAG`
or `INVALID_HEX_FLAG`) and whose `got` holds the offending text.

`BitFlags` values use this format too: `str(p)` gives `to_writer(p)`,
`repr(p)` gives `Perms(READ | WRITE)` (or `Perms(0x0)` when empty), and
`format(p, "x")`, `"X"`, `"o"` and `"b"` format the bits.

## Scope

flagbits is a library only; it has no command-line tool.