"""
Unit tests for registration, login, logout and token validation.
"""

import pytest
from datetime import datetime, timedelta, timezone
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session
import jwt

from adfluence.config import settings
from adfluence.errors import DuplicateIdentity, InvalidCredentials, Unauthenticated
from adfluence.models.account import Account, InfluencerAccount
from adfluence.models.enums import AccountRole
from adfluence.models.schemas import LoginRequest, RegisterRequest
from adfluence.models.session import AccountSession
from adfluence.repositories.session_repository import SessionRepository
from adfluence.services.auth_service import AuthService
from adfluence.utils.security import verify_password

TEST_PASSWORD = "Password123!"


@pytest.mark.unit
@pytest.mark.auth
class TestRegistration:
    """Test account registration endpoint."""

    def test_register_new_account_success(self, client: TestClient, test_db: Session):
        """Test successful registration returns the account and a token."""
        response = client.post(
            "/api/register",
            json={
                "name": "Acme",
                "email": "acme@example.com",
                "password": "SecurePassword123!",
                "role": "brand"
            }
        )

        assert response.status_code == 201
        data = response.json()
        assert data["account"]["email"] == "acme@example.com"
        assert data["account"]["role"] == "brand"
        assert data["token"]

        account = test_db.query(Account).filter(Account.email == "acme@example.com").first()
        assert account is not None
        assert account.password_hash != "SecurePassword123!"
        assert verify_password("SecurePassword123!", account.password_hash)
        assert account.tokens == [data["token"]]

    def test_register_duplicate_email(self, client: TestClient, brand):
        """Test the second registration with an email fails and the first is unaffected."""
        original_hash = brand.account.password_hash

        response = client.post(
            "/api/register",
            json={
                "name": "Impostor",
                "email": "brand@example.com",
                "password": "AnotherPassword1!",
                "role": "influencer"
            }
        )

        assert response.status_code == 400
        assert response.json()["error"] == "DuplicateIdentity"

        me = client.get("/api/me", headers=brand.headers)
        assert me.status_code == 200
        assert me.json()["name"] == "Acme Brand"
        assert me.json()["role"] == "brand"
        assert brand.account.password_hash == original_hash

    def test_register_duplicate_email_service(self, test_db: Session, brand):
        """Test the service raises DuplicateIdentity."""
        with pytest.raises(DuplicateIdentity):
            AuthService.register_account(
                test_db,
                RegisterRequest(name="Again", email="brand@example.com", password=TEST_PASSWORD, role=AccountRole.AGENCY)
            )

        assert test_db.query(Account).filter(Account.email == "brand@example.com").count() == 1

    def test_email_match_is_case_sensitive(self, client: TestClient, brand):
        """Test emails differing only in case are distinct identities."""
        response = client.post(
            "/api/register",
            json={"name": "Other", "email": "Brand@example.com", "password": TEST_PASSWORD, "role": "brand"}
        )

        assert response.status_code == 201

    def test_register_invalid_role(self, client: TestClient):
        """Test an unknown role is rejected as a validation error."""
        response = client.post(
            "/api/register",
            json={"name": "X", "email": "x@example.com", "password": TEST_PASSWORD, "role": "admin"}
        )

        assert response.status_code == 400
        assert response.json()["error"] == "ValidationError"

    def test_register_weak_password(self, client: TestClient):
        """Test a short password is rejected."""
        response = client.post(
            "/api/register",
            json={"name": "X", "email": "x@example.com", "password": "short", "role": "brand"}
        )

        assert response.status_code == 400
        assert response.json()["error"] == "ValidationError"
        assert "password" in response.json()["detail"].lower()

    def test_register_password_over_bcrypt_limit(self, client: TestClient):
        """Test passwords longer than 72 bytes are rejected."""
        response = client.post(
            "/api/register",
            json={"name": "X", "email": "x@example.com", "password": "a" * 73, "role": "brand"}
        )

        assert response.status_code == 400

    def test_register_invalid_email(self, client: TestClient):
        """Test a malformed email is rejected."""
        response = client.post(
            "/api/register",
            json={"name": "X", "email": "not-an-email", "password": TEST_PASSWORD, "role": "brand"}
        )

        assert response.status_code == 400
        assert "email" in response.json()["detail"].lower()

    def test_register_influencer_starts_with_empty_collections(self, client: TestClient, test_db: Session):
        """Test influencer niches and social media start empty."""
        response = client.post(
            "/api/register",
            json={"name": "Casey", "email": "casey@example.com", "password": TEST_PASSWORD, "role": "influencer"}
        )

        assert response.status_code == 201
        data = response.json()["account"]
        assert data["niches"] == []
        assert data["socialMedia"] == []

        account = test_db.query(Account).filter(Account.email == "casey@example.com").first()
        assert isinstance(account, InfluencerAccount)

    def test_salts_differ_per_account(self, register):
        """Test two accounts with the same password get different hashes."""
        first = register(AccountRole.BRAND)
        second = register(AccountRole.BRAND)

        assert first.account.password_hash != second.account.password_hash


@pytest.mark.unit
@pytest.mark.auth
class TestLogin:
    """Test login endpoint."""

    def test_login_success(self, client: TestClient, influencer):
        """Test successful login issues a new token bound to the account."""
        response = client.post(
            "/api/login",
            json={"email": "creator@example.com", "password": TEST_PASSWORD}
        )

        assert response.status_code == 200
        data = response.json()
        assert data["account"]["id"] == str(influencer.account.id)

        payload = jwt.decode(data["token"], settings.JWT_SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
        assert payload["sub"] == str(influencer.account.id)
        assert data["token"] != influencer.token

    def test_login_wrong_password(self, client: TestClient, test_db: Session, influencer):
        """Test a wrong password fails and no token is appended."""
        before = SessionRepository(test_db).tokens_for(influencer.account.id)

        response = client.post(
            "/api/login",
            json={"email": "creator@example.com", "password": "WrongPassword1!"}
        )

        assert response.status_code == 400
        assert response.json()["error"] == "InvalidCredentials"
        assert "token" not in response.json()
        assert SessionRepository(test_db).tokens_for(influencer.account.id) == before

    def test_login_nonexistent_account(self, client: TestClient):
        """Test an unknown email fails the same way as a wrong password."""
        response = client.post(
            "/api/login",
            json={"email": "nobody@example.com", "password": TEST_PASSWORD}
        )

        assert response.status_code == 400
        assert response.json()["error"] == "InvalidCredentials"

    def test_unknown_email_still_checks_a_hash(self, test_db: Session, monkeypatch):
        """Test unknown emails pay the same bcrypt cost as wrong passwords."""
        checked = []

        def recording_verify(password, password_hash):
            checked.append(password_hash)
            return verify_password(password, password_hash)

        monkeypatch.setattr("adfluence.services.auth_service.verify_password", recording_verify)

        with pytest.raises(InvalidCredentials):
            AuthService.authenticate(test_db, "nobody@example.com", TEST_PASSWORD)

        assert len(checked) == 1
        assert checked[0].startswith("$2")

    def test_login_email_is_exact_match(self, test_db: Session, influencer):
        """Test login does not fold email case."""
        with pytest.raises(InvalidCredentials):
            AuthService.login(test_db, LoginRequest(email="Creator@example.com", password=TEST_PASSWORD))

    def test_multiple_sessions_are_kept_in_order(self, test_db: Session, influencer):
        """Test each login appends a distinct token after the earlier ones."""
        _, second = AuthService.login(test_db, LoginRequest(email="creator@example.com", password=TEST_PASSWORD))
        _, third = AuthService.login(test_db, LoginRequest(email="creator@example.com", password=TEST_PASSWORD))

        assert len({influencer.token, second, third}) == 3
        assert SessionRepository(test_db).tokens_for(influencer.account.id) == [influencer.token, second, third]


@pytest.mark.unit
@pytest.mark.auth
class TestLogout:
    """Test logout and revocation."""

    def test_logout_revokes_only_presented_token(self, client: TestClient, influencer):
        """Test a logged-out token is rejected while another session survives."""
        login = client.post("/api/login", json={"email": "creator@example.com", "password": TEST_PASSWORD})
        other_headers = {"Authorization": f"Bearer {login.json()['token']}"}

        response = client.post("/api/logout", headers=influencer.headers)
        assert response.status_code == 200
        assert response.json()["message"] == "Logged out successfully"

        assert client.get("/api/me", headers=influencer.headers).status_code == 401
        assert client.get("/api/me", headers=other_headers).status_code == 200

    def test_logout_twice_is_unauthenticated(self, client: TestClient, influencer):
        """Test logout is only reachable with a live token."""
        assert client.post("/api/logout", headers=influencer.headers).status_code == 200

        response = client.post("/api/logout", headers=influencer.headers)

        assert response.status_code == 401
        assert response.json()["error"] == "Unauthenticated"

    def test_validate_token_after_logout(self, test_db: Session, influencer):
        """Test the service rejects a revoked but correctly signed token."""
        _, second = AuthService.login(test_db, LoginRequest(email="creator@example.com", password=TEST_PASSWORD))

        AuthService.logout(test_db, influencer.account, influencer.token)

        with pytest.raises(Unauthenticated):
            AuthService.validate_token(test_db, influencer.token)
        assert AuthService.validate_token(test_db, second).id == influencer.account.id

    def test_logout_absent_token_is_noop(self, test_db: Session, influencer):
        """Test revoking a token that is not live changes nothing."""
        assert AuthService.logout(test_db, influencer.account, "not-a-live-token") is False
        assert AuthService.validate_token(test_db, influencer.token).id == influencer.account.id

    def test_logout_everywhere(self, test_db: Session, influencer):
        """Test bulk revocation rejects every token."""
        _, second = AuthService.login(test_db, LoginRequest(email="creator@example.com", password=TEST_PASSWORD))

        assert AuthService.logout_everywhere(test_db, influencer.account) == 2

        for token in (influencer.token, second):
            with pytest.raises(Unauthenticated):
                AuthService.validate_token(test_db, token)


@pytest.mark.unit
@pytest.mark.auth
class TestCurrentAccount:
    """Test the current account endpoint."""

    def test_get_me_success(self, client: TestClient, brand):
        """Test getting current account with valid token."""
        response = client.get("/api/me", headers=brand.headers)

        assert response.status_code == 200
        data = response.json()
        assert data["email"] == "brand@example.com"
        assert data["id"] == str(brand.account.id)

    def test_get_me_no_token(self, client: TestClient):
        """Test a missing Authorization header is unauthenticated."""
        response = client.get("/api/me")

        assert response.status_code == 401
        assert response.json()["error"] == "Unauthenticated"
        assert response.headers["www-authenticate"] == "Bearer"

    def test_get_me_garbage_token(self, client: TestClient):
        """Test an undecodable token is unauthenticated."""
        response = client.get("/api/me", headers={"Authorization": "Bearer invalid.token.here"})

        assert response.status_code == 401

    def test_get_me_wrong_signature(self, client: TestClient, brand):
        """Test a token signed with another secret is rejected."""
        forged = jwt.encode({"sub": str(brand.account.id)}, "some-other-secret", algorithm="HS256")

        response = client.get("/api/me", headers={"Authorization": f"Bearer {forged}"})

        assert response.status_code == 401

    def test_signed_token_never_issued_is_rejected(self, client: TestClient, brand):
        """Test a validly signed token without a live session is rejected."""
        unissued = jwt.encode(
            {"sub": str(brand.account.id), "jti": "never-issued"},
            settings.JWT_SECRET_KEY,
            algorithm=settings.JWT_ALGORITHM
        )

        response = client.get("/api/me", headers={"Authorization": f"Bearer {unissued}"})

        assert response.status_code == 401

    def test_expired_token_is_rejected(self, client: TestClient, brand):
        """Test a token past its exp claim is rejected."""
        expired = jwt.encode(
            {"sub": str(brand.account.id), "exp": datetime.now(timezone.utc) - timedelta(minutes=1)},
            settings.JWT_SECRET_KEY,
            algorithm=settings.JWT_ALGORITHM
        )

        response = client.get("/api/me", headers={"Authorization": f"Bearer {expired}"})

        assert response.status_code == 401

    def test_expired_session_row_is_rejected(self, test_db: Session, brand):
        """Test a session past its stored expiry is rejected and removed."""
        session = test_db.query(AccountSession).filter(AccountSession.session_token == brand.token).first()
        session.expires_at = datetime.utcnow() - timedelta(minutes=1)
        test_db.commit()

        with pytest.raises(Unauthenticated):
            AuthService.validate_token(test_db, brand.token)

        assert SessionRepository(test_db).tokens_for(brand.account.id) == []

    def test_token_for_unknown_account(self, test_db: Session):
        """Test a token whose subject is not a UUID is rejected."""
        token = jwt.encode({"sub": "not-a-uuid"}, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)

        with pytest.raises(Unauthenticated):
            AuthService.validate_token(test_db, token)
