"""Tests for AIS bit-field extraction."""

from bosun.ais.bits import (
    ARMOR_ALPHABET,
    BitVector,
    dearmor,
    get_int,
    get_text,
    get_uint,
    sixbit_char,
)


def _sixbit(text: str) -> str:
    """Encode text as 6-bit AIS characters."""
    bits = ""
    for char in text:
        value = ord(char)
        bits += format(value - 64 if value >= 64 else value, "06b")
    return bits


class TestDearmor:
    """Test 6-bit armor decoding."""

    def test_alphabet_has_64_characters(self):
        assert len(ARMOR_ALPHABET) == 64
        assert len(set(ARMOR_ALPHABET)) == 64

    def test_characters_map_to_their_index(self):
        assert dearmor("0") == "000000"
        assert dearmor("1") == "000001"
        assert dearmor("A") == "010001"
        assert dearmor("W") == "100111"
        assert dearmor("`") == "101000"
        assert dearmor("w") == "111111"

    def test_groups_are_concatenated_in_order(self):
        assert dearmor("10") == "000001000000"
        assert len(dearmor("15Mvht0P00o?aL0E`Vff4?wT2408")) == 168

    def test_invalid_character_fails_whole_payload(self):
        assert dearmor("15Mx") is None
        assert dearmor("X") is None
        assert dearmor("15M 0") is None

    def test_empty_payload(self):
        assert dearmor("") == ""


class TestIntegers:
    """Test signed and unsigned extraction."""

    def test_unsigned(self):
        assert get_uint("000110", 0, 6) == 6
        assert get_uint("0001101", 3, 4) == 13

    def test_unsigned_out_of_range_is_zero(self):
        assert get_uint("0001", 2, 4) == 0
        assert get_uint("", 0, 1) == 0

    def test_signed_positive(self):
        assert get_int("0111", 0, 4) == 7

    def test_signed_negative(self):
        assert get_int("1111", 0, 4) == -1
        assert get_int("1000", 0, 4) == -8

    def test_signed_out_of_range_is_zero(self):
        assert get_int("11", 0, 4) == 0


class TestText:
    """Test 6-bit text extraction."""

    def test_character_mapping(self):
        assert sixbit_char(0) == "@"
        assert sixbit_char(1) == "A"
        assert sixbit_char(31) == "_"
        assert sixbit_char(32) == " "
        assert sixbit_char(48) == "0"
        assert sixbit_char(63) == "?"

    def test_single_letter_with_padding(self):
        bits = _sixbit("A@@@")
        assert get_text(bits, 0, len(bits)) == "A"

    def test_truncated_at_first_padding(self):
        bits = _sixbit("AB@CD")
        assert get_text(bits, 0, len(bits)) == "AB"

    def test_whitespace_trimmed(self):
        bits = _sixbit("  SEA BREEZE  ")
        assert get_text(bits, 0, len(bits)) == "SEA BREEZE"

    def test_offset(self):
        bits = "01" + _sixbit("HI")
        assert get_text(bits, 2, 12) == "HI"

    def test_out_of_range_is_empty(self):
        bits = _sixbit("ABC")
        assert get_text(bits, 6, 18) == ""


class TestBitVector:
    """Test the BitVector wrapper."""

    def test_position_report_fields(self):
        vector = BitVector.from_payload("15Mvht0P00o?aL0E`Vff4?wT2408")
        assert vector is not None
        assert len(vector) == 168
        assert vector.unsigned(0, 6) == 1
        assert vector.unsigned(8, 30) == 366981360
        assert vector.signed(61, 28) == -73446528

    def test_invalid_payload(self):
        assert BitVector.from_payload("15Mx") is None
