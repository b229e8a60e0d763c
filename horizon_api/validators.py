"""
Input validation and Pydantic models for the HTTP API.

JSON payloads use camelCase keys; Python attributes stay snake_case.
Addresses are validated with the same checksum rules as the signer, so an
address accepted here is always accepted by normalize_address.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from .core.codecs import is_valid_address, parse_amount
from .domain.exceptions import InvalidAmount


class CamelModel(BaseModel):
    """Base model exposing camelCase aliases."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


def _check_address(value: str, label: str) -> str:
    if not is_valid_address(value):
        raise ValueError(f"Invalid {label} address")
    return value


# Project models


class ProjectBase(CamelModel):
    """Fields shared by project requests and responses."""

    sale_start: datetime
    sale_end: datetime
    registration_time_starts: datetime
    registration_time_ends: datetime
    tge: datetime
    unlock_time: datetime
    vesting_portions_unlock_time: List[int] = Field(default_factory=list)
    vesting_percent_per_portion: List[int] = Field(default_factory=list)


class ProjectCreate(ProjectBase):
    """Model for creating a project."""


class ProjectUpdate(CamelModel):
    """Model for partially updating a project. Omitted fields are left unchanged."""

    id: Optional[int] = None
    sale_start: Optional[datetime] = None
    sale_end: Optional[datetime] = None
    registration_time_starts: Optional[datetime] = None
    registration_time_ends: Optional[datetime] = None
    tge: Optional[datetime] = None
    unlock_time: Optional[datetime] = None
    vesting_portions_unlock_time: Optional[List[int]] = None
    vesting_percent_per_portion: Optional[List[int]] = None


class ProjectResponse(ProjectBase):
    """Project as returned by the API."""

    id: int
    create_time: Optional[datetime] = None
    update_time: Optional[datetime] = None


class ProjectPageResponse(CamelModel):
    """One page of projects."""

    page_index: int
    page_size: int
    page_count: int
    data_count: int
    data: List[ProjectResponse]


class ProjectMutationResponse(CamelModel):
    """Create/update acknowledgement carrying the stored project."""

    message: str
    data: ProjectResponse


# Signing models


class RegistrationRequest(CamelModel):
    """Model for signing a registration."""

    user_address: str
    contract_address: str

    @field_validator("user_address")
    @classmethod
    def validate_user_address(cls, v: str) -> str:
        return _check_address(v, "user")

    @field_validator("contract_address")
    @classmethod
    def validate_contract_address(cls, v: str) -> str:
        return _check_address(v, "contract")


class ParticipationRequest(RegistrationRequest):
    """Model for signing a participation with an amount."""

    amount: str

    @field_validator("amount")
    @classmethod
    def validate_amount(cls, v: str) -> str:
        """
        Require a non-empty base-10 integer string.

        The codec maps "" to zero; at the API boundary an amount is mandatory.
        """
        if not v.strip():
            raise ValueError("Amount is required")
        try:
            parse_amount(v)
        except InvalidAmount:
            raise ValueError("Invalid amount format")
        return v


class SignatureResponse(CamelModel):
    """Signature plus the address that produced it."""

    signature: str
    signer_address: str


class VerifySignatureRequest(CamelModel):
    """Model for verifying a signature."""

    message: str = Field(..., min_length=1)
    signature: str = Field(..., min_length=1)
    address: str = Field(..., min_length=1)


class VerifySignatureResponse(CamelModel):
    valid: bool


class AddressResponse(CamelModel):
    address: str


class ErrorResponse(CamelModel):
    """Error response model."""

    success: bool = False
    code: int
    error: str
