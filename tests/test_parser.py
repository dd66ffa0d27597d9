import pytest

from flagbits.parser import (
    ParseError,
    ParseErrorKind,
    from_str,
    from_str_strict,
    from_str_truncate,
    to_writer,
    to_writer_strict,
    to_writer_truncate,
)
from flagbits.traits import Bits, Flags


class Abc(Flags, bits=Bits.U8, flags={"A": 1, "B": 1 << 1, "C": 1 << 2, "ABC": 0b111}):
    pass


class AbcInvert(Flags, bits=Bits.U8, flags={"ABC": 0b111, "A": 1, "B": 1 << 1, "C": 1 << 2}):
    pass


class Zero(Flags, bits=Bits.U8, flags={"ZERO": 0}):
    pass


class Unicode(Flags, bits=Bits.U8, flags={"一": 1, "二": 1 << 1}):
    pass


class Overlapping(Flags, bits=Bits.U8, flags={"AB": 1 | 1 << 1, "BC": 1 << 1 | 1 << 2}):
    pass


class OverlappingFull(Flags, bits=Bits.U8, flags=[("A", 1), ("B", 1), ("C", 1), ("D", 1 << 1)]):
    pass


class Signed(Flags, bits=Bits.I8, flags={}):
    pass


class Flags10(
    Flags,
    bits=Bits.U32,
    flags={name: 1 << shift for shift, name in enumerate("ABCDEFGHIJ")},
):
    pass


def _named(cls, name):
    return cls.from_name(name)


# -- round trips ---------------------------------------------------------


@pytest.mark.parametrize("bits", range(256))
def test_roundtrip(bits):
    f = Abc.from_bits_retain(bits)
    assert from_str(Abc, to_writer(f)) == f


@pytest.mark.parametrize("bits", range(256))
def test_roundtrip_truncate(bits):
    f = Abc.from_bits_retain(bits)
    assert from_str_truncate(Abc, to_writer_truncate(f)) == Abc.from_bits_truncate(bits)


# -- from_str ------------------------------------------------------------


@pytest.mark.parametrize(
    "text, expected",
    [
        ("", 0),
        ("A", 1),
        (" A ", 1),
        ("A | B | C", 0b111),
        ("A\n|\tB\r\n|   C ", 0b111),
        ("A|B|C", 0b111),
        ("0x8", 1 << 3),
        ("A | 0x8", 1 | 1 << 3),
        ("0x1 | 0x8 | B", 1 | 1 << 1 | 1 << 3),
    ],
)
def test_from_str_valid(text, expected):
    assert from_str(Abc, text).bits() == expected


def test_from_str_unicode():
    assert from_str(Unicode, "一 | 二").bits() == 1 | 1 << 1


@pytest.mark.parametrize(
    "text, prefix",
    [
        ("a", "unrecognized named flag"),
        ("A & B", "unrecognized named flag"),
        ("0xg", "invalid hex flag"),
        ("0xffffffffffff", "invalid hex flag"),
    ],
)
def test_from_str_invalid(text, prefix):
    with pytest.raises(ParseError) as info:
        from_str(Abc, text)
    assert str(info.value).startswith(prefix)


def test_from_str_invalid_hex_reports_digits():
    with pytest.raises(ParseError) as info:
        from_str(Abc, "0xg")
    assert str(info.value) == "invalid hex flag `g`"
    assert info.value.kind is ParseErrorKind.INVALID_HEX_FLAG


def test_from_str_invalid_name_reports_name():
    with pytest.raises(ParseError) as info:
        from_str(Abc, "A | a")
    assert str(info.value) == "unrecognized named flag `a`"


@pytest.mark.parametrize("text", ["A |", "| A", "A || B", "A | \t | B"])
def test_from_str_empty_flag(text):
    with pytest.raises(ParseError) as info:
        from_str(Abc, text)
    assert info.value.kind is ParseErrorKind.EMPTY_FLAG
    assert str(info.value) == "encountered empty flag"


def test_from_str_bare_prefix_is_invalid_hex():
    with pytest.raises(ParseError) as info:
        from_str(Abc, "0x")
    assert info.value.kind is ParseErrorKind.INVALID_HEX_FLAG


def test_from_str_signed_out_of_range():
    with pytest.raises(ParseError):
        from_str(Signed, "0x80")
    assert from_str(Signed, "0x7f").bits() == 0x7F


def test_parse_error_is_value_error():
    with pytest.raises(ValueError):
        from_str(Abc, "nope")


# -- to_writer -----------------------------------------------------------


@pytest.mark.parametrize(
    "value, expected",
    [
        (Abc.empty(), ""),
        (Abc.from_bits_retain(1), "A"),
        (Abc.all(), "A | B | C"),
        (Abc.from_bits_retain(1 << 3), "0x8"),
        (Abc.from_bits_retain(1 | 1 << 3), "A | 0x8"),
        (Zero.from_bits_retain(0), ""),
        (AbcInvert.all(), "ABC"),
        (Overlapping.from_bits_retain(1), "0x1"),
        (OverlappingFull.from_bits_retain(1), "A"),
        (OverlappingFull.from_bits_retain(1 | 1 << 1), "A | D"),
    ],
)
def test_to_writer(value, expected):
    assert to_writer(value) == expected


def test_to_writer_signed_uses_storage_width():
    assert to_writer(Signed.from_bits_retain(-128)) == "0x80"


# -- truncate ------------------------------------------------------------


@pytest.mark.parametrize(
    "text, expected",
    [
        ("", 0),
        ("A", 1),
        (" A ", 1),
        ("A | B | C", 0b111),
        ("A\n|\tB\r\n|   C ", 0b111),
        ("A|B|C", 0b111),
        ("0x8", 0),
        ("A | 0x8", 1),
        ("0x1 | 0x8 | B", 1 | 1 << 1),
    ],
)
def test_from_str_truncate_valid(text, expected):
    assert from_str_truncate(Abc, text).bits() == expected


def test_from_str_truncate_unicode():
    assert from_str_truncate(Unicode, "一 | 二").bits() == 1 | 1 << 1


@pytest.mark.parametrize(
    "value, expected",
    [
        (Abc.empty(), ""),
        (Abc.from_bits_retain(1), "A"),
        (Abc.all(), "A | B | C"),
        (Abc.from_bits_retain(1 << 3), ""),
        (Abc.from_bits_retain(1 | 1 << 3), "A"),
        (Zero.from_bits_retain(0), ""),
        (AbcInvert.all(), "ABC"),
        (Overlapping.from_bits_retain(1), "0x1"),
        (OverlappingFull.from_bits_retain(1), "A"),
        (OverlappingFull.from_bits_retain(1 | 1 << 1), "A | D"),
    ],
)
def test_to_writer_truncate(value, expected):
    assert to_writer_truncate(value) == expected


# -- strict --------------------------------------------------------------


@pytest.mark.parametrize(
    "text, expected",
    [
        ("", 0),
        ("A", 1),
        (" A ", 1),
        ("A | B | C", 0b111),
        ("A\n|\tB\r\n|   C ", 0b111),
        ("A|B|C", 0b111),
    ],
)
def test_from_str_strict_valid(text, expected):
    assert from_str_strict(Abc, text).bits() == expected


def test_from_str_strict_unicode():
    assert from_str_strict(Unicode, "一 | 二").bits() == 1 | 1 << 1


@pytest.mark.parametrize(
    "text, prefix",
    [
        ("a", "unrecognized named flag"),
        ("A & B", "unrecognized named flag"),
        ("0x1", "invalid hex flag"),
        ("0xg", "invalid hex flag"),
        ("0xffffffffffff", "invalid hex flag"),
    ],
)
def test_from_str_strict_invalid(text, prefix):
    with pytest.raises(ParseError) as info:
        from_str_strict(Abc, text)
    assert str(info.value).startswith(prefix)


def test_from_str_strict_hex_message():
    with pytest.raises(ParseError) as info:
        from_str_strict(Abc, "A | 0x1")
    assert str(info.value) == "invalid hex flag `unsupported hex flag value`"


@pytest.mark.parametrize(
    "value, expected",
    [
        (Abc.empty(), ""),
        (Abc.from_bits_retain(1), "A"),
        (Abc.all(), "A | B | C"),
        (Abc.from_bits_retain(1 << 3), ""),
        (Abc.from_bits_retain(1 | 1 << 3), "A"),
        (Zero.from_bits_retain(0), ""),
        (AbcInvert.all(), "ABC"),
        (Overlapping.from_bits_retain(1), ""),
        (OverlappingFull.from_bits_retain(1), "A"),
        (OverlappingFull.from_bits_retain(1 | 1 << 1), "A | D"),
    ],
)
def test_to_writer_strict(value, expected):
    assert to_writer_strict(value) == expected


# -- error constructors --------------------------------------------------


def test_parse_error_constructors():
    assert str(ParseError.invalid_hex_flag("zz")) == "invalid hex flag `zz`"
    assert str(ParseError.invalid_named_flag("Q")) == "unrecognized named flag `Q`"
    empty = ParseError.empty_flag()
    assert str(empty) == "encountered empty flag"
    assert empty.got is None


# -- ten-flag type -------------------------------------------------------


def test_format_ten_flags():
    assert to_writer(_named(Flags10, "J")) == "J"
    five = Flags10.from_bits_retain(0b11111 << 5)
    assert to_writer(five) == "F | G | H | I | J"
    assert to_writer(Flags10.all()) == "A | B | C | D | E | F | G | H | I | J"


def test_parse_ten_flags():
    assert from_str(Flags10, "J").bits() == 1 << 9
    assert from_str(Flags10, "F | G | H | I | J").bits() == 0b11111 << 5
    assert from_str(Flags10, "A | B | C | D | E | F | G | H | I | J") == Flags10.all()
    assert from_str(Flags10, "0xFF").bits() == 0xFF