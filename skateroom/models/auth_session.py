from sqlalchemy import Column, DateTime, ForeignKey, String
from sqlalchemy.sql import func
from skateroom.database import Base
from skateroom.models.user import new_uuid


class AuthSession(Base):
    """Server-side half of an access token; the JWT carries its id as `sid`."""

    __tablename__ = "auth_sessions"

    id = Column(String(36), primary_key=True, default=new_uuid)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    expires_at = Column(DateTime(timezone=True), nullable=False)
