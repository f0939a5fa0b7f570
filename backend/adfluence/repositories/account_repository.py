"""Account persistence."""

from typing import Any, Optional

from sqlalchemy.exc import IntegrityError

from adfluence.errors import DuplicateIdentity
from adfluence.models.account import Account, ACCOUNT_CLASSES
from adfluence.models.enums import AccountRole
from adfluence.repositories.base import SQLAlchemyRepository


class AccountRepository(SQLAlchemyRepository[Account]):
    model = Account
    immutable_fields = frozenset({"id", "role", "sessions"})

    def find_by_email(self, email: str) -> Optional[Account]:
        """Exact, case-sensitive email lookup."""
        return self.query().filter(Account.email == email).first()

    def create(self, role: AccountRole, **fields: Any) -> Account:
        """
        Persist a new account of the variant matching its role.

        Raises:
            DuplicateIdentity: the email is already registered
        """
        account = ACCOUNT_CLASSES[AccountRole(role)](**fields)
        try:
            return self.save(account)
        except IntegrityError as e:
            raise DuplicateIdentity() from e
