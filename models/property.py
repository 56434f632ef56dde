# models/property.py
import enum

from sqlalchemy import JSON, Column, Date, DateTime, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import relationship

from utils.timeutils import utcnow
from .base import Base, TimestampMixin


class PropertyStatus(str, enum.Enum):
     VACANT = "vacant"
     OCCUPIED = "occupied"
     MAINTENANCE = "maintenance"


class Bhk(str, enum.Enum):
     RK1 = "1RK"
     BHK1 = "1BHK"
     BHK2 = "2BHK"
     BHK3 = "3BHK"
     BHK4_PLUS = "4BHK+"


class MediaType(str, enum.Enum):
     IMAGE = "image"
     VIDEO = "video"


class Property(TimestampMixin, Base):
     """
     Property model - a rental listing owned by a landlord.

     Address and specs are fixed-shape sub-records kept as JSON. The specs
     `bhk` value is mirrored into its own column so listings can be
     filtered on it.
     """
     __tablename__ = "properties"

     id = Column(Integer, primary_key=True, autoincrement=True)
     owner_id = Column(
          Integer,
          ForeignKey("users.id"),
          nullable=False,
          index=True
     )

     title = Column(String(200), nullable=False)
     address = Column(JSON, nullable=False)
     city = Column(String(100), nullable=False, index=True)
     specs = Column(JSON, nullable=False)
     bhk = Column(String(10), nullable=False, index=True)
     amenities = Column(JSON, nullable=False, default=list)

     expected_rent = Column(Numeric(12, 2), nullable=False)
     expected_deposit = Column(Numeric(12, 2), nullable=False)
     description = Column(Text, nullable=True)
     maintenance_details = Column(JSON, nullable=True)

     status = Column(String(20), nullable=False, default=PropertyStatus.VACANT.value, index=True)
     available_from = Column(Date, nullable=True)
     current_agreement_id = Column(
          Integer,
          ForeignKey("agreements.id", use_alter=True, name="fk_properties_current_agreement"),
          nullable=True
     )

     # Relationships
     owner = relationship("User")
     media = relationship(
          "PropertyMedia",
          back_populates="listing",
          order_by="PropertyMedia.id",
          cascade="all, delete-orphan",
          passive_deletes=True,
     )

     def __repr__(self):
          return f"<Property(id={self.id}, title='{self.title}', status='{self.status}')>"


class PropertyMedia(Base):
     """One uploaded photo or video of a property."""
     __tablename__ = "property_media"

     id = Column(Integer, primary_key=True, autoincrement=True)
     property_id = Column(
          Integer,
          ForeignKey("properties.id", ondelete="CASCADE"),
          nullable=False,
          index=True
     )
     url = Column(String(1000), nullable=False)
     public_id = Column(String(500), nullable=False)
     type = Column(String(10), nullable=False, default=MediaType.IMAGE.value)
     caption = Column(String(500), nullable=True)
     uploaded_at = Column(DateTime, default=utcnow, nullable=False)

     listing = relationship("Property", back_populates="media")
