from sqlalchemy import Column, Date, DateTime, ForeignKey, Integer, String, Text, func
from sqlalchemy.orm import relationship
from skateroom.database import Base


class Profile(Base):
    __tablename__ = "profiles"

    # Same id as the owning user (1:1).
    id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), primary_key=True)
    username = Column(String(100), nullable=True)
    full_name = Column(String(255), nullable=True)
    avatar_url = Column(Text, nullable=True)
    date_of_birth = Column(Date, nullable=True)
    hometown = Column(String(255), nullable=True)
    stance = Column(String(16), nullable=True)
    skating_since = Column(Date, nullable=True)
    total_sessions = Column(Integer, nullable=False, default=0)
    decks_used = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    user = relationship("User", backref="profile_record")
