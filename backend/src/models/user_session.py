"""
User session model for cookie-based authentication.

A row exists for every login. The raw session token lives only in the
client's cookie; the table keeps its SHA-256 digest, which is the unique
lookup key. Expired rows are inert and are deleted when they are next
presented or by the periodic cleanup job.
"""

from datetime import datetime
from sqlalchemy import String, ForeignKey, Index
from sqlalchemy.orm import Mapped, mapped_column, relationship

from core.database import Base, UTCDateTime


class UserSession(Base):
    """Login session owned by exactly one user."""

    __tablename__ = "sessions"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"))
    token_hash: Mapped[str] = mapped_column(String(64), unique=True)  # SHA-256 hex of the session token
    expires_at: Mapped[datetime] = mapped_column(UTCDateTime)
    created_at: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False)

    # Relationships
    user = relationship("User", back_populates="sessions")

    __table_args__ = (
        Index('idx_sessions_user_id', 'user_id'),
        Index('idx_sessions_expires_at', 'expires_at'),
    )

    def is_expired(self, now: datetime) -> bool:
        """Check if the session has expired at ``now``."""
        return self.expires_at <= now

    def __repr__(self) -> str:
        return f"<UserSession(id={self.id}, user_id={self.user_id}, expires_at={self.expires_at})>"
