"""Authentication dependencies for protected routes."""

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session
from typing import Optional

from adfluence.database import get_db
from adfluence.errors import Unauthenticated
from adfluence.models.account import Account
from adfluence.services.auth_service import AuthService

# HTTP Bearer token scheme; missing headers are reported as Unauthenticated
security = HTTPBearer(auto_error=False)


async def get_bearer_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)
) -> str:
    """
    Extract the token from "Authorization: Bearer <token>".

    Raises:
        Unauthenticated: header missing or not a bearer credential
    """
    if not credentials or not credentials.credentials:
        raise Unauthenticated()
    return credentials.credentials


def get_current_account(
    token: str = Depends(get_bearer_token),
    db: Session = Depends(get_db)
) -> Account:
    """
    Dependency to get the current authenticated account.

    Usage in routes:
        @router.get("/protected")
        def protected_route(account: Account = Depends(get_current_account)):
            return {"name": account.name}

    Raises:
        Unauthenticated: invalid, expired or revoked token
    """
    return AuthService.validate_token(db, token)
