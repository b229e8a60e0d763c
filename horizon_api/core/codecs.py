"""
Address and amount codecs.

Addresses are 20-byte hex values whose canonical text form is the
EIP-55 mixed-case checksum encoding. Amounts are arbitrary-precision
integers parsed from base-10 strings.
"""

import re
from typing import Iterable, Union

from eth_utils import encode_hex, is_checksum_address, to_checksum_address

from ..domain.exceptions import InvalidAddress, InvalidAmount

ADDRESS_PATTERN = re.compile(r"^0x[0-9a-fA-F]{40}$")
AMOUNT_PATTERN = re.compile(r"^[+-]?[0-9]+$")


def _has_mixed_case(hex_body: str) -> bool:
    return any(c.islower() for c in hex_body) and any(c.isupper() for c in hex_body)


def normalize_address(address: str) -> str:
    """
    Validate an address and return its checksummed canonical form.

    All-lowercase and all-uppercase hex are accepted as-is. Mixed-case
    input must already carry a correct EIP-55 checksum.

    Args:
        address: "0x" followed by 40 hex characters

    Returns:
        Checksummed address string

    Raises:
        InvalidAddress: If the shape or the checksum is wrong
    """
    if not isinstance(address, str) or not ADDRESS_PATTERN.fullmatch(address):
        raise InvalidAddress(address)

    try:
        if _has_mixed_case(address[2:]) and not is_checksum_address(address):
            raise InvalidAddress(address)
        return to_checksum_address(address)
    except ValueError as e:
        raise InvalidAddress(address) from e


def is_valid_address(address: str) -> bool:
    """Same validation as normalize_address, but never raises."""
    try:
        normalize_address(address)
    except InvalidAddress:
        return False
    return True


def parse_amount(text: str) -> int:
    """
    Parse a base-10 integer amount.

    Surrounding whitespace is ignored and an empty string maps to 0.

    Raises:
        InvalidAmount: For fractional, non-numeric, oversized or non-string input
    """
    if not isinstance(text, str):
        raise InvalidAmount(text)

    stripped = text.strip()
    if stripped == "":
        return 0

    if not AMOUNT_PATTERN.fullmatch(stripped):
        raise InvalidAmount(text)

    try:
        return int(stripped)
    except ValueError as e:
        # Beyond the interpreter's int conversion digit limit
        raise InvalidAmount(text) from e


def to_hex(data: Union[bytes, bytearray, Iterable[int]]) -> str:
    """Lowercase "0x"-prefixed hex of a byte sequence; empty input gives "0x"."""
    return encode_hex(bytes(data))
