from sqlalchemy import JSON, Column, Date, Float, ForeignKey, String, Text
from sqlalchemy.orm import declared_attr
from skateroom.database import Base


class GearDetailMixin:
    """Columns every category-specific detail table shares."""

    @declared_attr
    def gear_id(cls):
        return Column(String(36), ForeignKey("skate_gear.id", ondelete="CASCADE"), primary_key=True)

    condition = Column(String(16), nullable=False, default="New")
    image_url = Column(Text, nullable=True)
    price = Column(Float, nullable=True)


class UsageMixin:
    currently_using = Column(String(16), nullable=False, default="No")


class DeckDetail(GearDetailMixin, UsageMixin, Base):
    __tablename__ = "deck_details"

    model = Column(String(255), nullable=True)
    size = Column(String(16), nullable=False)
    purchase_date = Column(Date, nullable=True)


class TruckDetail(GearDetailMixin, UsageMixin, Base):
    __tablename__ = "truck_details"

    width = Column(String(32), nullable=False)
    height = Column(String(32), nullable=False)
    color = Column(String(64), nullable=True)
    axle_type = Column(String(64), nullable=True)
    weight = Column(Float, nullable=True)


class WheelDetail(GearDetailMixin, UsageMixin, Base):
    __tablename__ = "wheel_details"

    diameter = Column(Float, nullable=False)
    durometer = Column(String(16), nullable=False)
    contact_patch = Column(Float, nullable=True)
    color = Column(String(64), nullable=True)


class BearingDetail(GearDetailMixin, UsageMixin, Base):
    __tablename__ = "bearing_details"

    abec_rating = Column(String(16), nullable=True)
    material = Column(String(64), nullable=True)
    shields_type = Column(String(64), nullable=True)


class GriptapeDetail(GearDetailMixin, UsageMixin, Base):
    __tablename__ = "griptape_details"

    width = Column(String(32), nullable=False)
    length = Column(String(32), nullable=False)
    grit = Column(String(32), nullable=True)
    color = Column(String(64), nullable=True)


class ToolDetail(GearDetailMixin, Base):
    __tablename__ = "tool_details"

    tool_type = Column(String(64), nullable=False)
    material = Column(String(64), nullable=True)
    included_tools = Column(JSON, nullable=True)
    color = Column(String(64), nullable=True)
