"""
Domain exceptions for Horizon API.

Every failure the service reports carries one member of the closed
ExceptionCode enumeration. The HTTP layer translates the member into a
response; these classes know nothing about HTTP.
"""

from enum import Enum
from typing import Any, Dict, Optional


class ExceptionCode(Enum):
    """Stable (code, message) pairs shared with API consumers."""

    NO_PERMISSION = (403, "No Permission")
    SERVER_ERROR = (500, "Internal Server Error")
    INVALID_PARAMETERS = (501, "Invalid Parameters")
    INVALID_TOKEN = (502, "Invalid Token")
    TOKEN_EXPIRED = (502, "The token has expired")
    FAILED = (503, "Failed")
    DATA_DUPLICATION = (505, "Data exists")
    VERIFICATION_FAILED = (506, "Wrong account or password")
    REQUEST_TOO_FREQUENT = (509, "Requests are too frequent")
    PRIVATE_KEY_EXISTS = (502, "exist")
    PRIVATE_KEY_NOT_EXISTS = (503, "key not exist")

    @property
    def code(self) -> int:
        return self.value[0]

    @property
    def message(self) -> str:
        return self.value[1]


class DomainException(Exception):
    """Base exception for all Horizon API domain errors."""

    def __init__(self, code: ExceptionCode, message: Optional[str] = None):
        self.code = code
        self.message = message or code.message
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Serializable form consumed by the HTTP layer."""
        return {"code": self.code.code, "error": self.message}


class InvalidAddress(DomainException):
    """Raised when a string is not a valid checksummed hex address."""

    def __init__(self, address: Any):
        super().__init__(
            ExceptionCode.INVALID_PARAMETERS, f"Invalid address: {address!r}"
        )
        self.address = address


class InvalidAmount(DomainException):
    """Raised when an amount is not a base-10 integer string."""

    def __init__(self, amount: Any):
        super().__init__(ExceptionCode.INVALID_PARAMETERS, "Invalid amount")
        self.amount = amount


class InvalidPageParam(DomainException):
    """Raised when pagination parameters are out of range."""

    def __init__(self, page_index: Any, page_size: Any):
        super().__init__(
            ExceptionCode.INVALID_PARAMETERS,
            f"Invalid pagination: pageIndex={page_index}, pageSize={page_size} "
            "(pageIndex >= 1, pageSize 1-100)",
        )
        self.page_index = page_index
        self.page_size = page_size


class SigningError(DomainException):
    """Raised when the signing backend fails."""

    def __init__(self, reason: Optional[str] = None):
        message = "Failed to sign message"
        if reason:
            message += f": {reason}"
        super().__init__(ExceptionCode.SERVER_ERROR, message)


class ExceptionFactory:
    """Factory helpers building a DomainException for each code."""

    @staticmethod
    def invalid_parameters(message: Optional[str] = None) -> DomainException:
        return DomainException(ExceptionCode.INVALID_PARAMETERS, message)

    @staticmethod
    def server_error(message: Optional[str] = None) -> DomainException:
        return DomainException(ExceptionCode.SERVER_ERROR, message)

    @staticmethod
    def no_permission(message: Optional[str] = None) -> DomainException:
        return DomainException(ExceptionCode.NO_PERMISSION, message)

    @staticmethod
    def invalid_token(message: Optional[str] = None) -> DomainException:
        return DomainException(ExceptionCode.INVALID_TOKEN, message)

    @staticmethod
    def token_expired(message: Optional[str] = None) -> DomainException:
        return DomainException(ExceptionCode.TOKEN_EXPIRED, message)

    @staticmethod
    def failed(message: Optional[str] = None) -> DomainException:
        return DomainException(ExceptionCode.FAILED, message)

    @staticmethod
    def data_duplication(message: Optional[str] = None) -> DomainException:
        return DomainException(ExceptionCode.DATA_DUPLICATION, message)

    @staticmethod
    def verification_failed(message: Optional[str] = None) -> DomainException:
        return DomainException(ExceptionCode.VERIFICATION_FAILED, message)

    @staticmethod
    def request_too_frequent(message: Optional[str] = None) -> DomainException:
        return DomainException(ExceptionCode.REQUEST_TOO_FREQUENT, message)

    @staticmethod
    def private_key_exists(message: Optional[str] = None) -> DomainException:
        return DomainException(ExceptionCode.PRIVATE_KEY_EXISTS, message)

    @staticmethod
    def private_key_not_exists(message: Optional[str] = None) -> DomainException:
        return DomainException(ExceptionCode.PRIVATE_KEY_NOT_EXISTS, message)
