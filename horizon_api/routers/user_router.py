"""
Signing router: registration and participation signatures, verification
and the service's signer address.
"""

from fastapi import APIRouter, Depends

from ..dependencies import get_user_service
from ..metrics import track_signature
from ..services.user_service import UserService
from ..validators import (
    AddressResponse,
    ErrorResponse,
    ParticipationRequest,
    RegistrationRequest,
    SignatureResponse,
    VerifySignatureRequest,
    VerifySignatureResponse,
)

router = APIRouter(
    prefix="/api/v1/users",
    tags=["users"],
    responses={400: {"model": ErrorResponse}},
)


@router.post("/sign-registration", response_model=SignatureResponse, summary="Sign registration")
async def sign_registration(
    request: RegistrationRequest,
    service: UserService = Depends(get_user_service),
):
    signature = service.sign_registration(request.user_address, request.contract_address)
    track_signature("registration")
    return SignatureResponse(signature=signature, signer_address=service.get_address())


@router.post(
    "/sign-participation", response_model=SignatureResponse, summary="Sign participation"
)
async def sign_participation(
    request: ParticipationRequest,
    service: UserService = Depends(get_user_service),
):
    signature = service.sign_participation(
        request.user_address, request.amount, request.contract_address
    )
    track_signature("participation")
    return SignatureResponse(signature=signature, signer_address=service.get_address())


@router.post(
    "/verify-signature", response_model=VerifySignatureResponse, summary="Verify signature"
)
async def verify_signature(
    request: VerifySignatureRequest,
    service: UserService = Depends(get_user_service),
):
    """A failed verification is a normal result: {"valid": false}, status 200."""
    valid = service.verify_signature(request.message, request.signature, request.address)
    return VerifySignatureResponse(valid=valid)


@router.get("/address", response_model=AddressResponse, summary="Signer address")
async def signer_address(service: UserService = Depends(get_user_service)):
    return AddressResponse(address=service.get_address())
