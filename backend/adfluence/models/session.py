"""Session model backing bearer-token revocation."""

from sqlalchemy import Column, String, DateTime, ForeignKey, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
from datetime import datetime
import uuid

from adfluence.database import Base


class AccountSession(Base):
    """One issued bearer token. Deleting the row revokes the token."""

    __tablename__ = "account_sessions"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    account_id = Column(UUID(as_uuid=True), ForeignKey("accounts.id", ondelete="CASCADE"), nullable=False, index=True)

    session_token = Column(String(512), unique=True, nullable=False, index=True)
    ip_address = Column(String(45), nullable=True)  # IPv6 max length
    user_agent = Column(Text, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    expires_at = Column(DateTime, nullable=True, index=True)

    # Relationships
    account = relationship("Account", back_populates="sessions")

    def __repr__(self):
        return f"<AccountSession(id={self.id}, account_id={self.account_id}, expires_at={self.expires_at})>"
