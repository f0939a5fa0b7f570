"""Authentication endpoints."""

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.orm import Session

from adfluence.database import get_db
from adfluence.models.account import Account
from adfluence.models.schemas import (
    AccountView,
    AuthResponse,
    LoginRequest,
    MessageResponse,
    RegisterRequest
)
from adfluence.middleware.auth import get_bearer_token, get_current_account
from adfluence.services.auth_service import AuthService

router = APIRouter()


def _client_details(request: Request):
    ip_address = request.client.host if request.client else None
    return ip_address, request.headers.get("user-agent")


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(
    data: RegisterRequest,
    request: Request,
    db: Session = Depends(get_db)
):
    """
    Register a new account.

    Requirements:
    - Unique email (exact match)
    - Password of 8 to 72 bytes
    - Role: brand, agency, influencer or individual

    Returns:
        Public account view and a bearer token
    """
    ip_address, user_agent = _client_details(request)
    account, token = AuthService.register_account(db, data, ip_address, user_agent)
    return AuthResponse(account=AuthService.serialize(account), token=token)


@router.post("/login", response_model=AuthResponse)
def login(
    data: LoginRequest,
    request: Request,
    db: Session = Depends(get_db)
):
    """
    Login with email and password.

    Each login opens an additional session; earlier tokens stay valid.
    """
    ip_address, user_agent = _client_details(request)
    account, token = AuthService.login(db, data, ip_address, user_agent)
    return AuthResponse(account=AuthService.serialize(account), token=token)


@router.post("/logout", response_model=MessageResponse)
def logout(
    token: str = Depends(get_bearer_token),
    account: Account = Depends(get_current_account),
    db: Session = Depends(get_db)
):
    """
    Revoke the presented token.

    Requires:
        Authorization: Bearer <token>
    """
    AuthService.logout(db, account, token)
    return MessageResponse(message="Logged out successfully")


@router.get("/me", response_model=AccountView)
def get_me(account: Account = Depends(get_current_account)):
    """
    Current authenticated account.

    Requires:
        Authorization: Bearer <token>
    """
    return AuthService.serialize(account)
