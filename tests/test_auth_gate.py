"""Tests for the bearer-token and admin gates."""

import pytest
from datetime import timedelta
from types import SimpleNamespace
from unittest.mock import MagicMock

from common.auth import JWTAuth
from common.utils.exceptions import UnauthorizedException, ForbiddenException
from customer_api.auth import AuthGate, AdminGate, IdentityContext


@pytest.fixture
def auth_gate(token_auth):
    return AuthGate(token_auth=token_auth)


@pytest.fixture
def admin_gate(token_auth):
    return AdminGate(token_auth=token_auth)


@pytest.fixture
def customer_token(token_auth, sample_customer_id):
    return token_auth.issue_token({
        "customer_id": sample_customer_id,
        "email": "jane@example.com",
        "username": "jane",
        "phone": None,
        "image": None,
    })


def _request(authorization=None):
    request = MagicMock()
    request.headers = {} if authorization is None else {"Authorization": authorization}
    request.state = SimpleNamespace()
    return request


# ─────────────────────────────────────────────────────────────────
# AuthGate
# ─────────────────────────────────────────────────────────────────


class TestAuthGate:
    def test_valid_token_yields_identity(self, auth_gate, customer_token, sample_customer_id):
        identity = auth_gate.authenticate(f"Bearer {customer_token}")

        assert identity == IdentityContext(
            customer_id=sample_customer_id,
            email="jane@example.com",
            username="jane",
        )
        assert identity.is_admin is False

    @pytest.mark.parametrize("header", [None, "", "Bearer ", "Basic abc", "Token xyz"])
    def test_missing_or_non_bearer_header_is_unauthorized(self, auth_gate, header):
        with pytest.raises(UnauthorizedException) as exc_info:
            auth_gate.authenticate(header)

        assert exc_info.value.status_code == 401
        assert exc_info.value.code == "AUTH_REQUIRED"

    def test_expired_token_is_unauthorized(self, auth_gate, token_auth, sample_customer_id):
        token = token_auth.issue_token(
            {"customer_id": sample_customer_id}, ttl=timedelta(seconds=-5)
        )

        with pytest.raises(UnauthorizedException) as exc_info:
            auth_gate.authenticate(f"Bearer {token}")

        assert exc_info.value.code == "INVALID_TOKEN"

    def test_token_failures_are_indistinguishable(self, auth_gate, token_auth, sample_customer_id):
        expired = token_auth.issue_token({"customer_id": sample_customer_id}, ttl=timedelta(seconds=-5))
        forged = JWTAuth(secret="other").issue_token({"customer_id": sample_customer_id})
        malformed = "not.a.jwt"

        details = []
        for token in (expired, forged, malformed):
            with pytest.raises(UnauthorizedException) as exc_info:
                auth_gate.authenticate(f"Bearer {token}")
            details.append((exc_info.value.status_code, exc_info.value.detail))

        assert details[0] == details[1] == details[2]

    def test_token_without_customer_id_is_unauthorized(self, auth_gate, token_auth):
        # Tokens carrying only "id" do not satisfy the gate
        token = token_auth.issue_token({"id": "abc", "email": "a@example.com"})

        with pytest.raises(UnauthorizedException):
            auth_gate.authenticate(f"Bearer {token}")

    @pytest.mark.asyncio
    async def test_require_auth_attaches_identity_to_request(
        self, auth_gate, customer_token, sample_customer_id
    ):
        request = _request(f"Bearer {customer_token}")

        identity = await auth_gate.require_auth(request)

        assert request.state.identity is identity
        assert identity.customer_id == sample_customer_id

    @pytest.mark.asyncio
    async def test_require_auth_leaves_request_untouched_on_failure(self, auth_gate):
        request = _request()

        with pytest.raises(UnauthorizedException):
            await auth_gate.require_auth(request)

        assert not hasattr(request.state, "identity")


# ─────────────────────────────────────────────────────────────────
# AdminGate
# ─────────────────────────────────────────────────────────────────


class TestAdminGate:
    def test_admin_claim_passes(self, admin_gate, admin_token):
        identity = admin_gate.authenticate(f"Bearer {admin_token}")

        assert identity.is_admin is True

    def test_missing_admin_claim_is_forbidden(self, admin_gate, customer_token):
        with pytest.raises(ForbiddenException) as exc_info:
            admin_gate.authenticate(f"Bearer {customer_token}")

        assert exc_info.value.status_code == 403

    def test_falsy_admin_claim_is_forbidden(self, admin_gate, token_auth, sample_customer_id):
        token = token_auth.issue_token({"customer_id": sample_customer_id, "is_admin": False})

        with pytest.raises(ForbiddenException):
            admin_gate.authenticate(f"Bearer {token}")

    def test_invalid_token_is_unauthorized_not_forbidden(self, admin_gate):
        with pytest.raises(UnauthorizedException):
            admin_gate.authenticate("Bearer garbage")
