"""
API request and response models.

Pydantic models for FastAPI endpoint validation and OpenAPI schema generation.
Field presence and format rules live in the domain service, so string
fields default to "" and reach it unchanged.
"""

from pydantic import BaseModel, Field

from src.domain.account import VerificationChannel


class RegisterRequest(BaseModel):
    """Request model for customer registration."""

    customer_name: str = Field("", description="Customer full name")
    ic_number: str = Field("", description="National identity card number")
    email: str = Field("", description="Email address")
    phone_number: str = Field("", description="Phone number, + followed by 10-15 digits")
    has_accepted_privacy_policy: bool = False


class RegisterResponse(BaseModel):
    """Response model for successful registration."""

    message: str
    customer_id: int


class SendCodeRequest(BaseModel):
    """Request model for email or mobile code issuance."""

    ic_number: str = Field("", description="National identity card number")


class VerifyCodeRequest(BaseModel):
    """Request model for code redemption."""

    ic_number: str = ""
    code: str = Field("", description="6-digit verification code")
    type: VerificationChannel = Field(..., description="Channel the code was sent on")


class PinRequest(BaseModel):
    """Request model for PIN creation. pin_hash is hashed by the client."""

    ic_number: str = ""
    pin_hash: str = ""


class LoginRequest(BaseModel):
    """Request model for login."""

    ic_number: str = ""
    pin_hash: str = ""
    use_face_biometric: bool = False
    use_fingerprint_biometric: bool = False


class LoginResponse(BaseModel):
    """Response model for successful login."""

    message: str
    customer_id: int
    face_biometric_used: bool
    fingerprint_biometric_used: bool


class BiometricRequest(BaseModel):
    """Request model for enabling or disabling a biometric modality."""

    ic_number: str = ""
    enable: bool


class MessageResponse(BaseModel):
    """Response model for operations that only report a message."""

    message: str


class ErrorResponse(BaseModel):
    """Standard error response model."""

    detail: str
