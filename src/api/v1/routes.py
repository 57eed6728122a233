"""
API v1 routes.

Defines REST endpoints for the account onboarding API. Routes only
translate between HTTP and AccountService results; every business rule
lives in the domain service.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from src.api.dependencies import get_account_service
from src.api.models import (
    BiometricRequest,
    ErrorResponse,
    LoginRequest,
    LoginResponse,
    MessageResponse,
    PinRequest,
    RegisterRequest,
    RegisterResponse,
    SendCodeRequest,
    VerifyCodeRequest,
)
from src.domain.exceptions import DeliveryError, ErrorKind
from src.domain.results import Failure, OperationResult, Success
from src.domain.service import AccountService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/accounts", tags=["v1"])

_STATUS_BY_KIND = {
    ErrorKind.VALIDATION: status.HTTP_400_BAD_REQUEST,
    ErrorKind.CODE_EXPIRED: status.HTTP_400_BAD_REQUEST,
    ErrorKind.CODE_MISMATCH: status.HTTP_400_BAD_REQUEST,
    ErrorKind.CONFLICT: status.HTTP_409_CONFLICT,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.STATE: status.HTTP_403_FORBIDDEN,
}

_FAILURE_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Invalid input or verification code"},
    404: {"model": ErrorResponse, "description": "Account not found"},
    422: {"description": "Validation error"},
}


def _unwrap(result: OperationResult, action: str, ic_number: str) -> Success:
    """Return the Success or raise the HTTP error matching the Failure kind."""
    if isinstance(result, Failure):
        logger.warning(
            "%s failed for IC Number: %s. Reason: %s", action, ic_number, result.message
        )
        raise HTTPException(
            status_code=_STATUS_BY_KIND.get(result.kind, status.HTTP_400_BAD_REQUEST),
            detail=result.message,
        )
    logger.info("%s succeeded for IC Number: %s", action, ic_number)
    return result


async def _send_code(send, ic_number: str, action: str) -> MessageResponse:
    logger.info("%s request for IC Number: %s", action, ic_number)
    try:
        result = await send(ic_number)
    except DeliveryError as e:
        logger.error("%s delivery failed for IC Number: %s: %s", action, ic_number, e)
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Failed to deliver verification code",
        ) from None
    return MessageResponse(message=_unwrap(result, action, ic_number).message)


@router.post(
    "/register",
    response_model=RegisterResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse, "description": "Missing or malformed field"},
        409: {"model": ErrorResponse, "description": "IC number, email or phone already registered"},
        422: {"description": "Validation error"},
    },
    summary="Register a new customer",
)
async def register(
    request_data: RegisterRequest,
    service: AccountService = Depends(get_account_service),
) -> RegisterResponse:
    """
    Register a new customer account.

    All verification and biometric flags start false and no PIN is set.
    """
    logger.info("Registration attempt for email: %s", request_data.email)
    result = await service.register(
        customer_name=request_data.customer_name,
        ic_number=request_data.ic_number,
        email=request_data.email,
        phone_number=request_data.phone_number,
        has_accepted_privacy_policy=request_data.has_accepted_privacy_policy,
    )
    success = _unwrap(result, "Registration", request_data.ic_number)
    return RegisterResponse(message=success.message, customer_id=success.account_id)


@router.post(
    "/send-email-code",
    response_model=MessageResponse,
    responses={**_FAILURE_RESPONSES, 502: {"model": ErrorResponse}},
    summary="Send email verification code",
)
async def send_email_code(
    request_data: SendCodeRequest,
    service: AccountService = Depends(get_account_service),
) -> MessageResponse:
    """Send a 6-digit code, valid for 10 minutes, to the account email."""
    return await _send_code(
        service.send_email_verification_code, request_data.ic_number, "Email verification code"
    )


@router.post(
    "/send-mobile-code",
    response_model=MessageResponse,
    responses={**_FAILURE_RESPONSES, 502: {"model": ErrorResponse}},
    summary="Send mobile verification code",
)
async def send_mobile_code(
    request_data: SendCodeRequest,
    service: AccountService = Depends(get_account_service),
) -> MessageResponse:
    """Send a 6-digit code, valid for 10 minutes, to the account phone number."""
    return await _send_code(
        service.send_mobile_verification_code, request_data.ic_number, "Mobile verification code"
    )


@router.post(
    "/verify-code",
    response_model=MessageResponse,
    responses=_FAILURE_RESPONSES,
    summary="Verify an email or mobile code",
)
async def verify_code(
    request_data: VerifyCodeRequest,
    service: AccountService = Depends(get_account_service),
) -> MessageResponse:
    logger.info(
        "Code verification attempt for IC Number: %s, Type: %s",
        request_data.ic_number,
        request_data.type.value,
    )
    result = await service.verify_code(
        request_data.ic_number, request_data.code, request_data.type
    )
    return MessageResponse(message=_unwrap(result, "Code verification", request_data.ic_number).message)


@router.post(
    "/create-pin",
    response_model=MessageResponse,
    responses={**_FAILURE_RESPONSES, 403: {"model": ErrorResponse}},
    summary="Create the account PIN",
)
async def create_pin(
    request_data: PinRequest,
    service: AccountService = Depends(get_account_service),
) -> MessageResponse:
    """Requires verified email and phone and an accepted privacy policy."""
    logger.info("PIN creation attempt for IC Number: %s", request_data.ic_number)
    result = await service.create_pin(request_data.ic_number, request_data.pin_hash)
    return MessageResponse(message=_unwrap(result, "PIN creation", request_data.ic_number).message)


@router.post(
    "/login",
    response_model=LoginResponse,
    responses={**_FAILURE_RESPONSES, 403: {"model": ErrorResponse}},
    summary="Log in with PIN and optional biometrics",
)
async def login(
    request_data: LoginRequest,
    service: AccountService = Depends(get_account_service),
) -> LoginResponse:
    logger.info("Login attempt for IC Number: %s", request_data.ic_number)
    result = await service.login(
        request_data.ic_number,
        request_data.pin_hash,
        use_face_biometric=request_data.use_face_biometric,
        use_fingerprint_biometric=request_data.use_fingerprint_biometric,
    )
    success = _unwrap(result, "Login", request_data.ic_number)
    return LoginResponse(
        message=success.message,
        customer_id=success.account_id,
        face_biometric_used=request_data.use_face_biometric,
        fingerprint_biometric_used=request_data.use_fingerprint_biometric,
    )


@router.post(
    "/biometric/face",
    response_model=MessageResponse,
    responses=_FAILURE_RESPONSES,
    summary="Enable or disable face biometric login",
)
async def manage_face_biometric(
    request_data: BiometricRequest,
    service: AccountService = Depends(get_account_service),
) -> MessageResponse:
    logger.info("Face biometric management attempt for IC Number: %s", request_data.ic_number)
    result = await service.manage_face_biometric(request_data.ic_number, request_data.enable)
    return MessageResponse(message=_unwrap(result, "Face biometric update", request_data.ic_number).message)


@router.post(
    "/biometric/fingerprint",
    response_model=MessageResponse,
    responses=_FAILURE_RESPONSES,
    summary="Enable or disable fingerprint biometric login",
)
async def manage_fingerprint_biometric(
    request_data: BiometricRequest,
    service: AccountService = Depends(get_account_service),
) -> MessageResponse:
    logger.info("Fingerprint biometric management attempt for IC Number: %s", request_data.ic_number)
    result = await service.manage_fingerprint_biometric(request_data.ic_number, request_data.enable)
    return MessageResponse(
        message=_unwrap(result, "Fingerprint biometric update", request_data.ic_number).message
    )
