"""
Signing use cases for registrations and participations.
"""

import structlog

from ..core.signer import MessageSigner, verify_signature

logger = structlog.get_logger(__name__)


class UserService:
    """Signs user actions with the service key and verifies signatures."""

    def __init__(self, signer: MessageSigner):
        self.signer = signer

    def sign_registration(self, user_address: str, contract_address: str) -> str:
        """
        Sign a registration for a user on a sale contract.

        Raises:
            InvalidAddress: If either address is invalid
            SigningError: If signing fails
        """
        signature = self.signer.sign_registration(user_address, contract_address)
        logger.info(
            "Registration signed",
            user_address=user_address,
            contract_address=contract_address,
        )
        return signature

    def sign_participation(
        self, user_address: str, amount: str, contract_address: str
    ) -> str:
        """
        Sign a participation of amount for a user on a sale contract.

        Raises:
            InvalidAmount: If amount is not a base-10 integer string
            InvalidAddress: If either address is invalid
            SigningError: If signing fails
        """
        signature = self.signer.sign_participation(user_address, amount, contract_address)
        logger.info(
            "Participation signed",
            user_address=user_address,
            contract_address=contract_address,
            amount=amount,
        )
        return signature

    def get_address(self) -> str:
        return self.signer.get_address()

    def verify_signature(self, message: str, signature: str, address: str) -> bool:
        return verify_signature(message, signature, address)
