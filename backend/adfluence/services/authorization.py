"""Role checks gating marketplace actions."""

from typing import Iterable, Optional

from adfluence.errors import Forbidden
from adfluence.models.account import Account
from adfluence.models.enums import AccountRole, SPONSOR_ROLES

# Roles allowed per action
CAMPAIGN_CREATORS = SPONSOR_ROLES
CAMPAIGN_APPLICANTS = frozenset({AccountRole.INFLUENCER})
INFLUENCER_DASHBOARD = frozenset({AccountRole.INFLUENCER})
BRAND_DASHBOARD = SPONSOR_ROLES


def authorize(account: Optional[Account], required_roles: Iterable[AccountRole]) -> bool:
    """True when the account's declared role is one of required_roles."""
    if account is None:
        return False
    return account.role in {AccountRole(role).value for role in required_roles}


def require_role(account: Account, required_roles: Iterable[AccountRole], message: Optional[str] = None) -> None:
    """
    Raise Forbidden unless authorize() passes.

    Raises:
        Forbidden: role mismatch
    """
    if not authorize(account, required_roles):
        raise Forbidden(message)
