"""
Message signing and signature verification.

Messages are hashed with SHA-256 and the 32-byte digest is signed as an
EIP-191 personal message ("\\x19Ethereum Signed Message:\\n32" + digest).
Signing is deterministic (RFC 6979), so the same key and message always
produce the same signature.
"""

import hashlib

import structlog
from eth_account import Account
from eth_account.messages import encode_defunct

from ..domain.exceptions import ExceptionFactory, SigningError
from .codecs import normalize_address, parse_amount, to_hex

logger = structlog.get_logger(__name__)


def message_digest(message: str) -> bytes:
    """SHA-256 digest of the UTF-8 encoding of message."""
    return hashlib.sha256(message.encode("utf-8")).digest()


def build_registration_message(user_address: str, contract_address: str) -> str:
    """Lowercased user address followed by lowercased contract address."""
    user = normalize_address(user_address)
    contract = normalize_address(contract_address)
    return (user + contract).lower()


def build_participation_message(
    user_address: str, amount: str, contract_address: str
) -> str:
    """
    Hex encoding of lowercase(user) + decimal(amount) + lowercase(contract).

    Raises:
        InvalidAmount: If amount is not a base-10 integer string
        InvalidAddress: If either address is invalid
    """
    amount_value = parse_amount(amount)
    user = normalize_address(user_address)
    contract = normalize_address(contract_address)
    message = f"{user.lower()}{amount_value}{contract.lower()}"
    return to_hex(message.encode("utf-8"))


class MessageSigner:
    """
    Signs domain messages with one private key held for the signer's lifetime.

    The key and the derived address are read-only after construction, so a
    single instance is safe to share between concurrent requests.
    """

    def __init__(self, private_key: str):
        """
        Args:
            private_key: Hex private key, with or without "0x" prefix

        Raises:
            DomainException: PRIVATE_KEY_NOT_EXISTS when empty,
                INVALID_PARAMETERS when the key cannot be loaded
        """
        if not private_key or not private_key.strip():
            raise ExceptionFactory.private_key_not_exists()

        key = private_key.strip()
        if not key.startswith("0x"):
            key = f"0x{key}"

        try:
            self._account = Account.from_key(key)
        except Exception as e:
            raise ExceptionFactory.invalid_parameters("Invalid private key") from e

        self._address = self._account.address

    def get_address(self) -> str:
        """Checksummed address of the signing key."""
        return self._address

    def sign(self, message: str) -> str:
        """
        Sign the SHA-256 digest of message.

        Returns:
            "0x"-prefixed 65-byte signature (r || s || v)

        Raises:
            SigningError: If the signing backend fails
        """
        try:
            digest = message_digest(message)
            signed = self._account.sign_message(encode_defunct(primitive=digest))
        except Exception as e:
            logger.error("Message signing failed", error=str(e))
            raise SigningError(str(e)) from e

        return to_hex(signed.signature)

    def sign_registration(self, user_address: str, contract_address: str) -> str:
        """Sign the registration message for (user, contract)."""
        return self.sign(build_registration_message(user_address, contract_address))

    def sign_participation(
        self, user_address: str, amount: str, contract_address: str
    ) -> str:
        """Sign the participation message for (user, amount, contract)."""
        return self.sign(
            build_participation_message(user_address, amount, contract_address)
        )


def verify_signature(message: str, signature: str, address: str) -> bool:
    """
    Check that signature over message was produced by address.

    Address comparison is case-insensitive. Malformed input of any kind
    yields False instead of an exception.
    """
    try:
        digest = message_digest(message)
        recovered = Account.recover_message(
            encode_defunct(primitive=digest), signature=signature
        )
        return recovered.lower() == address.lower()
    except Exception as e:
        logger.debug("Signature verification rejected", error=str(e))
        return False
