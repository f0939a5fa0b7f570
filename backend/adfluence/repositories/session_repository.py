"""
Revocable sessions.

A session row maps one issued token to one account. A token is only
accepted while its row exists, so deleting the row revokes it regardless
of the token's signature.
"""

from datetime import datetime
from typing import List, Optional
from uuid import UUID

from adfluence.models.session import AccountSession
from adfluence.repositories.base import SQLAlchemyRepository


class SessionRepository(SQLAlchemyRepository[AccountSession]):
    model = AccountSession

    def issue(
        self,
        account_id: UUID,
        token: str,
        expires_at: Optional[datetime] = None,
        ip_address: Optional[str] = None,
        user_agent: Optional[str] = None
    ) -> AccountSession:
        """Record a freshly signed token as live."""
        session = AccountSession(
            account_id=account_id,
            session_token=token,
            expires_at=expires_at,
            ip_address=ip_address,
            user_agent=user_agent
        )
        return self.save(session)

    def find_live(self, token: str, account_id: UUID) -> Optional[AccountSession]:
        """
        Return the session for this exact token and account, if still live.

        Expired rows are deleted on sight.
        """
        session = self.query().filter(
            AccountSession.session_token == token,
            AccountSession.account_id == account_id
        ).first()

        if not session:
            return None

        if session.expires_at is not None and session.expires_at < datetime.utcnow():
            self.db.delete(session)
            self.commit()
            return None

        return session

    def revoke(self, token: str, account_id: UUID) -> bool:
        """Delete exactly one token. Returns False when it was not live."""
        count = self.query().filter(
            AccountSession.session_token == token,
            AccountSession.account_id == account_id
        ).delete(synchronize_session="fetch")
        self.commit()
        return count > 0

    def revoke_all(self, account_id: UUID) -> int:
        """Delete every session of an account."""
        count = self.query().filter(
            AccountSession.account_id == account_id
        ).delete(synchronize_session="fetch")
        self.commit()
        return count

    def tokens_for(self, account_id: UUID) -> List[str]:
        """Live tokens of an account in issue order."""
        rows = self.query().filter(
            AccountSession.account_id == account_id
        ).order_by(AccountSession.created_at).all()
        return [row.session_token for row in rows]
