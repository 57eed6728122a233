"""
Unit tests for API v1 routes.

Tests endpoint responses with a mocked AccountService.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from src.api.dependencies import get_account_service
from src.api.v1.routes import router
from src.domain.account import VerificationChannel
from src.domain.exceptions import DeliveryError, ErrorKind
from src.domain.results import Failure, Success
from src.domain.service import AccountService


@pytest.fixture
def mock_service() -> MagicMock:
    service = MagicMock(spec=AccountService)
    for name in (
        "register",
        "send_email_verification_code",
        "send_mobile_verification_code",
        "verify_code",
        "create_pin",
        "login",
        "manage_face_biometric",
        "manage_fingerprint_biometric",
    ):
        setattr(service, name, AsyncMock())
    return service


@pytest.fixture
def app(mock_service: MagicMock) -> FastAPI:
    """Create test FastAPI application with the service overridden."""
    test_app = FastAPI()
    test_app.include_router(router, prefix="/v1")
    test_app.dependency_overrides[get_account_service] = lambda: mock_service
    return test_app


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    return TestClient(app)


class TestRegisterEndpoint:
    """Tests for POST /v1/accounts/register."""

    def test_register_success_returns_201(self, client, mock_service) -> None:
        mock_service.register.return_value = Success("Customer registered successfully.", 5)

        response = client.post(
            "/v1/accounts/register",
            json={
                "customer_name": "John Doe",
                "ic_number": "900101145678",
                "email": "john@example.com",
                "phone_number": "+60123456789",
                "has_accepted_privacy_policy": True,
            },
        )

        assert response.status_code == 201
        assert response.json() == {
            "message": "Customer registered successfully.",
            "customer_id": 5,
        }
        mock_service.register.assert_awaited_once_with(
            customer_name="John Doe",
            ic_number="900101145678",
            email="john@example.com",
            phone_number="+60123456789",
            has_accepted_privacy_policy=True,
        )

    def test_register_conflict_returns_409(self, client, mock_service) -> None:
        mock_service.register.return_value = Failure(
            ErrorKind.CONFLICT, "ICNumber already registered"
        )

        response = client.post("/v1/accounts/register", json={"ic_number": "900101145678"})

        assert response.status_code == 409
        assert response.json() == {"detail": "ICNumber already registered"}

    def test_register_validation_failure_returns_400(self, client, mock_service) -> None:
        mock_service.register.return_value = Failure(ErrorKind.VALIDATION, "Email is required")

        response = client.post("/v1/accounts/register", json={})

        assert response.status_code == 400
        assert response.json() == {"detail": "Email is required"}

    def test_register_logs_failure(self, client, mock_service, caplog) -> None:
        mock_service.register.return_value = Failure(ErrorKind.VALIDATION, "Email is required")

        client.post("/v1/accounts/register", json={"ic_number": "900101145678"})

        assert "Registration failed for IC Number: 900101145678" in caplog.text
        assert "Email is required" in caplog.text


class TestSendCodeEndpoints:
    """Tests for POST /v1/accounts/send-email-code and /send-mobile-code."""

    @pytest.mark.parametrize(
        ("path", "method", "message"),
        [
            ("/v1/accounts/send-email-code", "send_email_verification_code", "Email verification code sent"),
            ("/v1/accounts/send-mobile-code", "send_mobile_verification_code", "Mobile verification code sent"),
        ],
    )
    def test_send_code_success(self, client, mock_service, path, method, message) -> None:
        getattr(mock_service, method).return_value = Success(message)

        response = client.post(path, json={"ic_number": "900101145678"})

        assert response.status_code == 200
        assert response.json() == {"message": message}
        getattr(mock_service, method).assert_awaited_once_with("900101145678")

    def test_send_code_unknown_account_returns_404(self, client, mock_service) -> None:
        mock_service.send_email_verification_code.return_value = Failure(
            ErrorKind.NOT_FOUND, "Account not found"
        )

        response = client.post("/v1/accounts/send-email-code", json={"ic_number": "0"})

        assert response.status_code == 404
        assert response.json() == {"detail": "Account not found"}

    def test_delivery_error_returns_502(self, client, mock_service) -> None:
        """Delivery failures surface as a generic 502 without internal detail."""
        mock_service.send_mobile_verification_code.side_effect = DeliveryError(
            "Failed to send SMS: 401 Unauthorized"
        )

        response = client.post("/v1/accounts/send-mobile-code", json={"ic_number": "1"})

        assert response.status_code == 502
        assert response.json() == {"detail": "Failed to deliver verification code"}


class TestVerifyCodeEndpoint:
    """Tests for POST /v1/accounts/verify-code."""

    def test_verify_success(self, client, mock_service) -> None:
        mock_service.verify_code.return_value = Success("Code verified successfully")

        response = client.post(
            "/v1/accounts/verify-code",
            json={"ic_number": "900101145678", "code": "123456", "type": "EMAIL"},
        )

        assert response.status_code == 200
        assert response.json() == {"message": "Code verified successfully"}
        mock_service.verify_code.assert_awaited_once_with(
            "900101145678", "123456", VerificationChannel.EMAIL
        )

    @pytest.mark.parametrize(
        ("kind", "message"),
        [
            (ErrorKind.CODE_EXPIRED, "Invalid or expired code"),
            (ErrorKind.CODE_MISMATCH, "Incorrect code"),
        ],
    )
    def test_code_failures_return_400(self, client, mock_service, kind, message) -> None:
        mock_service.verify_code.return_value = Failure(kind, message)

        response = client.post(
            "/v1/accounts/verify-code",
            json={"ic_number": "1", "code": "123456", "type": "PHONE"},
        )

        assert response.status_code == 400
        assert response.json() == {"detail": message}

    def test_unknown_channel_returns_422(self, client, mock_service) -> None:
        response = client.post(
            "/v1/accounts/verify-code",
            json={"ic_number": "1", "code": "123456", "type": "FAX"},
        )

        assert response.status_code == 422
        mock_service.verify_code.assert_not_called()


class TestCreatePinEndpoint:
    """Tests for POST /v1/accounts/create-pin."""

    def test_create_pin_success(self, client, mock_service) -> None:
        mock_service.create_pin.return_value = Success("PIN created successfully")

        response = client.post("/v1/accounts/create-pin", json={"ic_number": "1", "pin_hash": "H"})

        assert response.status_code == 200
        mock_service.create_pin.assert_awaited_once_with("1", "H")

    def test_create_pin_state_failure_returns_403(self, client, mock_service) -> None:
        mock_service.create_pin.return_value = Failure(
            ErrorKind.STATE, "Email has not been verified yet"
        )

        response = client.post("/v1/accounts/create-pin", json={"ic_number": "1", "pin_hash": "H"})

        assert response.status_code == 403
        assert response.json() == {"detail": "Email has not been verified yet"}


class TestLoginEndpoint:
    """Tests for POST /v1/accounts/login."""

    def test_login_success(self, client, mock_service) -> None:
        mock_service.login.return_value = Success("Login successful", 3)

        response = client.post(
            "/v1/accounts/login",
            json={"ic_number": "1", "pin_hash": "H", "use_face_biometric": True},
        )

        assert response.status_code == 200
        assert response.json() == {
            "message": "Login successful",
            "customer_id": 3,
            "face_biometric_used": True,
            "fingerprint_biometric_used": False,
        }
        mock_service.login.assert_awaited_once_with(
            "1", "H", use_face_biometric=True, use_fingerprint_biometric=False
        )

    def test_login_invalid_pin_returns_403(self, client, mock_service) -> None:
        mock_service.login.return_value = Failure(ErrorKind.STATE, "Invalid PIN")

        response = client.post("/v1/accounts/login", json={"ic_number": "1", "pin_hash": "x"})

        assert response.status_code == 403
        assert response.json() == {"detail": "Invalid PIN"}
        assert "customer_id" not in response.json()


class TestBiometricEndpoints:
    """Tests for POST /v1/accounts/biometric/{face,fingerprint}."""

    @pytest.mark.parametrize(
        ("path", "method"),
        [
            ("/v1/accounts/biometric/face", "manage_face_biometric"),
            ("/v1/accounts/biometric/fingerprint", "manage_fingerprint_biometric"),
        ],
    )
    def test_toggle(self, client, mock_service, path, method) -> None:
        getattr(mock_service, method).return_value = Success("Face biometric disabled successfully")

        response = client.post(path, json={"ic_number": "1", "enable": False})

        assert response.status_code == 200
        getattr(mock_service, method).assert_awaited_once_with("1", False)

    def test_enable_flag_required(self, client) -> None:
        response = client.post("/v1/accounts/biometric/face", json={"ic_number": "1"})
        assert response.status_code == 422
