"""
Unit tests for the codec module (GeoHex code <-> lattice address).
"""
import logging

import pytest

from src.geohex.codec import (
    H_KEY,
    LEADERS,
    MAX_CODE_LENGTH,
    InvalidCode,
    decode,
    encode,
    level_by_code,
    validate,
)


@pytest.mark.unit
class TestLeaders:
    """Test suite for the leader table."""

    def test_leader_table_size(self):
        """Test that every three-digit base-9 prefix has a leader."""
        assert len(LEADERS) == 9 ** 3

    def test_leader_values_are_base9(self):
        """Test that leader values only use digits 0-8."""
        for value in LEADERS.values():
            assert "9" not in f"{value:03d}"

    def test_leaders_use_first_30_letters(self):
        """Test that leaders only draw from A-Z and a-d."""
        for leader in LEADERS:
            assert leader[0] in H_KEY[:30]
            assert leader[1] in H_KEY[:30]

    def test_known_leaders(self):
        """Test a few leaders against their decimal values."""
        assert LEADERS["XM"] == 702
        assert LEADERS["OY"] == 444
        assert LEADERS["AA"] == 0
        assert LEADERS["dS"] == 888


@pytest.mark.unit
class TestLevelByCode:
    """Test suite for level_by_code function."""

    def test_level_by_code(self):
        """Test that the level is the number of digits after the leader."""
        assert level_by_code("XM") == 0
        assert level_by_code("XM4885487") == 7
        assert level_by_code("XM" + "4" * 15) == 15


@pytest.mark.unit
class TestEncode:
    """Test suite for encode function."""

    def test_encode_origin(self):
        """Test that the origin cell is all-zero balanced ternary."""
        assert encode(0, 0, 0) == "OY"

    def test_encode_tokyo_level_0(self):
        """Test the level 0 cell covering Tokyo."""
        assert encode(5, -2, 0) == "XM"

    def test_encode_tokyo_level_7(self):
        """Test a level 7 cell in central Tokyo."""
        assert encode(11263, -4020, 7) == "XM4885487"

    def test_encode_accepts_floats(self):
        """Test that lattice addresses carried as floats encode the same."""
        assert encode(11263.0, -4020.0, 7) == "XM4885487"

    def test_encode_length(self):
        """Test that codes are level + 2 characters long."""
        for level in range(16):
            assert len(encode(0, 0, level)) == level + 2

    def test_encode_antimeridian_cell(self):
        """Test the level 0 cell sitting on the antimeridian."""
        assert encode(-4, 5, 0, eastern=True) == "QU"

    def test_encode_fold_only_for_eastern_cells(self):
        """Test that the leading digit fold only applies to eastern cells."""
        # Leading pair (2, 1) with diagonal followers stays 7xx
        assert encode(5, -4, 0, eastern=False) == "XK"
        assert encode(5, -4, 0, eastern=True) == "QU"


@pytest.mark.unit
class TestDecode:
    """Test suite for decode function."""

    def test_decode_origin(self):
        """Test decoding the origin cell."""
        assert decode("OY") == (0, 0, 0)

    def test_decode_tokyo_level_7(self):
        """Test decoding a level 7 Tokyo code."""
        assert decode("XM4885487") == (11263, -4020, 7)

    def test_decode_eastern_fold(self):
        """Test that a folded leader decodes to the unfolded address."""
        assert decode("QU") == (5, -4, 0)

    def test_decode_low_leader_misreads_fold(self):
        """Test that an unpadded leader below 100 triggers the fold on the wrong digits."""
        assert encode(-23, -14, 1) == "Bc8"
        assert decode("Bc8") == (-14, -23, 1)

    def test_decode_encode_roundtrip(self):
        """Test that decoding then encoding returns the same code."""
        for code in ("OY", "XM", "PF", "XM4885487", "OY444444444444444", "PF0123456781234"):
            h_x, h_y, level = decode(code)
            assert encode(h_x, h_y, level) == code

    def test_decode_returns_integers(self):
        """Test that lattice addresses are exact integers."""
        h_x, h_y, level = decode("XM4885487")

        assert isinstance(h_x, int)
        assert isinstance(h_y, int)
        assert isinstance(level, int)


@pytest.mark.unit
class TestValidate:
    """Test suite for code validation."""

    def test_valid_code_passes(self):
        """Test that a valid code is returned unchanged."""
        assert validate("XM4885487") == "XM4885487"

    @pytest.mark.parametrize("code", [
        "",
        "X",
        "XM" + "0" * 16,
        "AJ",       # leader value 9 is not base-9
        "ze",       # letters past 'd' are never leaders
        "X?",
        "XM9",
        "XM48a",
        "xm488",
    ])
    def test_invalid_codes(self, code):
        """Test that malformed codes raise InvalidCode."""
        with pytest.raises(InvalidCode):
            decode(code)

    def test_non_string_code(self):
        """Test that non-string input raises InvalidCode."""
        with pytest.raises(InvalidCode):
            decode(None)

    def test_invalid_code_is_value_error(self):
        """Test that InvalidCode can be caught as ValueError."""
        with pytest.raises(ValueError):
            decode("X")

    def test_invalid_code_details(self):
        """Test that InvalidCode carries the code and the reason."""
        with pytest.raises(InvalidCode) as exc_info:
            decode("XM9")

        assert exc_info.value.code == "XM9"
        assert "0-8" in exc_info.value.reason
        assert "XM9" in str(exc_info.value)

    def test_max_code_length(self):
        """Test that 17 characters (level 15) is the longest code."""
        assert MAX_CODE_LENGTH == 17
        assert validate("XM" + "0" * 15) == "XM" + "0" * 15

    def test_rejection_is_logged(self, caplog):
        """Test that rejected codes are logged at DEBUG level."""
        with caplog.at_level(logging.DEBUG, logger="src.geohex.codec"):
            with pytest.raises(InvalidCode):
                decode("XM9")

        assert any("XM9" in record.getMessage() for record in caplog.records)
