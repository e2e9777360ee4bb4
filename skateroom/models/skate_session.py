from sqlalchemy import Column, DateTime, ForeignKey, String, Text, func
from skateroom.database import Base
from skateroom.models.user import new_uuid


class SkateSession(Base):
    __tablename__ = "skate_sessions"

    id = Column(String(36), primary_key=True, default=new_uuid)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    place_name = Column(String(255), nullable=False)
    address = Column(String(500), nullable=True)
    session_date = Column(DateTime(timezone=True), nullable=False, index=True)
    review = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)
