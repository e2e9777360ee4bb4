from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, String, Text, func
from skateroom.database import Base
from skateroom.models.user import new_uuid


class SkateGear(Base):
    __tablename__ = "skate_gear"

    id = Column(String(36), primary_key=True, default=new_uuid)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    category = Column(String(16), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    brand = Column(String(255), nullable=True)
    specs = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    __table_args__ = (
        CheckConstraint(
            "category IN ('deck','truck','wheel','bearing','griptape','tool')",
            name="ck_skate_gear_category",
        ),
    )
