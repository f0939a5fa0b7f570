"""Authentication service: credentials, sessions and the public account view."""

from sqlalchemy.orm import Session
from typing import Optional, Tuple
from uuid import UUID

from adfluence.errors import DuplicateIdentity, InvalidCredentials, Unauthenticated, ValidationError
from adfluence.models.account import Account
from adfluence.models.enums import AccountRole
from adfluence.models.schemas import ACCOUNT_VIEWS, RegisterRequest, LoginRequest
from adfluence.repositories.account_repository import AccountRepository
from adfluence.repositories.session_repository import SessionRepository
from adfluence.services.logging_service import logger
from adfluence.utils.security import (
    hash_password,
    verify_password,
    create_access_token,
    decode_access_token,
    dummy_password_hash,
    token_expiry,
    validate_password_strength
)
from adfluence.utils.validators import validate_email, validate_display_name


class AuthService:
    """Service for authentication operations."""

    @staticmethod
    def register_account(
        db: Session,
        data: RegisterRequest,
        ip_address: Optional[str] = None,
        user_agent: Optional[str] = None
    ) -> Tuple[Account, str]:
        """
        Register a new account and open its first session.

        Args:
            db: Database session
            data: Registration data
            ip_address: Client IP address
            user_agent: Client user agent

        Returns:
            Tuple of (account, token)

        Raises:
            ValidationError: malformed name, email or password
            DuplicateIdentity: email already registered
        """
        for is_valid, error in (
            validate_display_name(data.name),
            validate_email(data.email),
            validate_password_strength(data.password),
        ):
            if not is_valid:
                raise ValidationError(error)

        accounts = AccountRepository(db)
        if accounts.find_by_email(data.email):
            raise DuplicateIdentity()

        account = accounts.create(
            data.role,
            name=data.name.strip(),
            email=data.email,
            password_hash=hash_password(data.password)
        )
        logger.info("Account registered", account_id=str(account.id), role=account.role)

        token = AuthService.create_session(db, account, ip_address, user_agent)
        return account, token

    @staticmethod
    def authenticate(db: Session, email: str, password: str) -> Account:
        """
        Check an email/password pair.

        Unknown email and wrong password fail identically.

        Raises:
            InvalidCredentials: no such account or wrong password
        """
        account = AccountRepository(db).find_by_email(email)
        password_hash = account.password_hash if account else dummy_password_hash()

        if not verify_password(password, password_hash) or not account:
            logger.warning("Login rejected", reason="invalid_credentials")
            raise InvalidCredentials()

        return account

    @staticmethod
    def login(
        db: Session,
        data: LoginRequest,
        ip_address: Optional[str] = None,
        user_agent: Optional[str] = None
    ) -> Tuple[Account, str]:
        """
        Authenticate and issue a new session token.

        Earlier sessions of the same account stay valid.

        Returns:
            Tuple of (account, token)
        """
        account = AuthService.authenticate(db, data.email, data.password)
        token = AuthService.create_session(db, account, ip_address, user_agent)
        logger.info("Account logged in", account_id=str(account.id))
        return account, token

    @staticmethod
    def create_session(
        db: Session,
        account: Account,
        ip_address: Optional[str] = None,
        user_agent: Optional[str] = None
    ) -> str:
        """
        Sign a token bound to the account and record it as live.

        Returns:
            JWT access token
        """
        access_token = create_access_token({"sub": str(account.id)})
        claims = decode_access_token(access_token) or {}

        SessionRepository(db).issue(
            account_id=account.id,
            token=access_token,
            expires_at=token_expiry(claims),
            ip_address=ip_address,
            user_agent=user_agent
        )
        db.refresh(account)

        return access_token

    @staticmethod
    def validate_token(db: Session, token: str) -> Account:
        """
        Resolve a bearer token to its account.

        The signature and expiry must verify, the account must exist, and
        the exact token must still be among the account's live sessions.

        Raises:
            Unauthenticated: any of the above fails
        """
        claims = decode_access_token(token)
        if not claims:
            raise Unauthenticated()

        try:
            account_id = UUID(str(claims.get("sub")))
        except ValueError:
            raise Unauthenticated()

        if not SessionRepository(db).find_live(token, account_id):
            logger.info("Token rejected", reason="revoked_or_expired", account_id=str(account_id))
            raise Unauthenticated()

        account = AccountRepository(db).find_by_id(account_id)
        if not account:
            raise Unauthenticated()

        return account

    @staticmethod
    def logout(db: Session, account: Account, token: str) -> bool:
        """
        Revoke exactly the presented token.

        Other sessions of the account are untouched. Revoking a token that
        is no longer live is a no-op.

        Returns:
            True if a live session was removed
        """
        removed = SessionRepository(db).revoke(token, account.id)
        db.expire(account, ["sessions"])
        logger.info("Account logged out", account_id=str(account.id), removed=removed)
        return removed

    @staticmethod
    def logout_everywhere(db: Session, account: Account) -> int:
        """Revoke every session of an account."""
        count = SessionRepository(db).revoke_all(account.id)
        db.expire(account, ["sessions"])
        logger.info("All sessions revoked", account_id=str(account.id), count=count)
        return count

    @staticmethod
    def serialize(account: Account):
        """
        Public view of an account.

        The view classes carry no password or token fields, so nothing
        secret can be projected whoever the caller is.
        """
        return ACCOUNT_VIEWS[AccountRole(account.role)].model_validate(account)
