"""
Tests for address and amount codecs
"""

import pytest
from eth_utils import to_checksum_address

from horizon_api.core.codecs import is_valid_address, normalize_address, parse_amount, to_hex
from horizon_api.domain.exceptions import ExceptionCode, InvalidAddress, InvalidAmount

CHECKSUMMED = [
    "0x5aAeb6053F3E94C9b9A09f33669435E7Ef1BeAed",
    "0xfB6916095ca1df60bB79Ce92cE3Ea74c37c5d359",
    "0xdbF03B407c01E7cD3CBea99509d93f8DDDC8C6FB",
    "0xD1220A0cf47c7B9Be7A2E6BA89F429762e7b9aDb",
]


class TestNormalizeAddress:
    """Test address normalization"""

    @pytest.mark.parametrize("address", CHECKSUMMED)
    def test_lowercase_becomes_checksummed(self, address):
        """Test lowercase input yields the EIP-55 form"""
        assert normalize_address(address.lower()) == address

    @pytest.mark.parametrize("address", CHECKSUMMED)
    def test_checksummed_is_unchanged(self, address):
        """Test already checksummed input is returned as-is"""
        assert normalize_address(address) == address

    def test_uppercase_hex_accepted(self):
        """Test all-uppercase hex digits are accepted"""
        address = CHECKSUMMED[0]
        assert normalize_address("0x" + address[2:].upper()) == address

    @pytest.mark.parametrize("address", CHECKSUMMED)
    def test_idempotent(self, address):
        """Test normalize(normalize(x)) == normalize(x)"""
        once = normalize_address(address.lower())
        assert normalize_address(once) == once

    def test_bad_checksum_rejected(self):
        """Test mixed case with a wrong checksum is rejected"""
        bad = CHECKSUMMED[0][:-1] + "D"
        with pytest.raises(InvalidAddress):
            normalize_address(bad)

    @pytest.mark.parametrize(
        "address",
        [
            "",
            "0xinvalid",
            "not-an-address",
            "5aaeb6053f3e94c9b9a09f33669435e7ef1beaed",
            "0X5aaeb6053f3e94c9b9a09f33669435e7ef1beaed",
            "0x5aaeb6053f3e94c9b9a09f33669435e7ef1bea",
            "0x5aaeb6053f3e94c9b9a09f33669435e7ef1beaed00",
            "0x5aaeb6053f3e94c9b9a09f33669435e7ef1beazz",
            "0x5aaeb6053f3e94c9b9a09f33669435e7ef1beaed\n",
            " 0x5aaeb6053f3e94c9b9a09f33669435e7ef1beaed",
            None,
            12345,
        ],
    )
    def test_malformed_rejected(self, address):
        """Test malformed input raises InvalidAddress"""
        with pytest.raises(InvalidAddress):
            normalize_address(address)

    def test_invalid_address_carries_parameter_code(self):
        """Test InvalidAddress maps to INVALID_PARAMETERS"""
        with pytest.raises(InvalidAddress) as exc_info:
            normalize_address("0xinvalid")
        assert exc_info.value.code is ExceptionCode.INVALID_PARAMETERS

    def test_matches_library_checksum(self):
        """Test agreement with eth_utils for a digit-heavy address"""
        address = "0x0000000000000000000000000000000000000001"
        assert normalize_address(address) == to_checksum_address(address)


class TestIsValidAddress:
    """Test boolean address validation"""

    def test_valid(self):
        assert is_valid_address(CHECKSUMMED[0]) is True
        assert is_valid_address(CHECKSUMMED[0].lower()) is True

    def test_invalid_never_raises(self):
        assert is_valid_address("0xinvalid") is False
        assert is_valid_address("") is False
        assert is_valid_address(None) is False
        assert is_valid_address(CHECKSUMMED[0][:-1] + "D") is False

    def test_trailing_newline_rejected(self):
        """Test a trailing newline fails validation instead of raising"""
        assert is_valid_address(CHECKSUMMED[0] + "\n") is False
        assert is_valid_address(CHECKSUMMED[0].lower() + "\n") is False


class TestParseAmount:
    """Test amount parsing"""

    def test_empty_is_zero(self):
        """Test empty and blank strings map to zero"""
        assert parse_amount("") == 0
        assert parse_amount("   ") == 0

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("0", 0),
            ("1000", 1000),
            ("007", 7),
            ("  42 ", 42),
            ("-15", -15),
            ("+15", 15),
            ("115792089237316195423570985008687907853269984665640564039457584007913129639935",
             2**256 - 1),
        ],
    )
    def test_valid_amounts(self, text, expected):
        assert parse_amount(text) == expected

    def test_canonical_round_trip(self):
        """Test decimal digits round-trip after stripping leading zeros"""
        for text in ["1", "10", "000123", "999999999999999999999999"]:
            assert str(parse_amount(text)) == text.lstrip("0")

    @pytest.mark.parametrize(
        "text", ["1.5", "abc", "1e18", "0x10", "1_000", "12a", "--1", "1 000", "7\n8", None, 10]
    )
    def test_invalid_amounts(self, text):
        with pytest.raises(InvalidAmount):
            parse_amount(text)

    def test_oversized_amount(self):
        """Test digit strings past the int conversion limit are rejected"""
        with pytest.raises(InvalidAmount):
            parse_amount("1" * 5000)


class TestToHex:
    """Test byte to hex conversion"""

    def test_empty(self):
        assert to_hex(b"") == "0x"
        assert to_hex([]) == "0x"

    def test_bytes(self):
        assert to_hex([0x01, 0x02, 0x03, 0xFF]) == "0x010203ff"
        assert to_hex(bytes([0x01, 0x02, 0x03, 0xFF])) == "0x010203ff"

    def test_lowercase(self):
        assert to_hex(b"\xab\xcd") == "0xabcd"
