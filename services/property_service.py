# services/property_service.py
"""
Property Service - listings owned by a landlord.

Every query is scoped with owned_property(), so another user's property
is reported as not found.
"""
import logging
from typing import BinaryIO, List, Optional

from sqlalchemy.orm import Session, selectinload

from azure_blob import ObjectStore
from models import Property, PropertyMedia
from schemas.property import PropertyCreate, PropertyFilter, PropertyUpdate
from services.access import owned_property
from utils.errors import NotFound

logger = logging.getLogger(__name__)


class PropertyService:
     """Service class for property-related business logic."""

     @staticmethod
     def create(db: Session, owner_id: int, body: PropertyCreate) -> Property:
          data = body.model_dump(mode="json", exclude_none=True)
          prop = Property(
               owner_id=owner_id,
               title=body.title,
               address=data["address"],
               city=body.address.city,
               specs=data["specs"],
               bhk=body.specs.bhk.value,
               amenities=body.amenities,
               expected_rent=body.expected_rent,
               expected_deposit=body.expected_deposit,
               description=body.description,
               maintenance_details=data.get("maintenance_details"),
               status=body.status.value,
               available_from=body.available_from,
          )
          db.add(prop)
          db.commit()
          db.refresh(prop)
          logger.info("Property created", extra={"user_id": owner_id})
          return prop

     @staticmethod
     def list_mine(db: Session, owner_id: int, filters: PropertyFilter) -> List[Property]:
          query = (
               db.query(Property)
               .options(selectinload(Property.media))
               .filter(owned_property(owner_id))
          )
          if filters.status:
               query = query.filter(Property.status == filters.status.value)
          if filters.city:
               query = query.filter(Property.city == filters.city)
          if filters.bhk:
               query = query.filter(Property.bhk == filters.bhk.value)
          return query.order_by(Property.created_at.desc(), Property.id.desc()).all()

     @staticmethod
     def get(db: Session, owner_id: int, property_id: int) -> Property:
          prop = (
               db.query(Property)
               .options(selectinload(Property.media))
               .filter(Property.id == property_id, owned_property(owner_id))
               .first()
          )
          if not prop:
               raise NotFound("Property not found")
          return prop

     @staticmethod
     def update(db: Session, owner_id: int, property_id: int, body: PropertyUpdate) -> Property:
          prop = PropertyService.get(db, owner_id, property_id)
          data = body.model_dump(mode="json", exclude_unset=True)

          # Sub-records merge into what is stored
          if body.address is not None:
               prop.address = {**(prop.address or {}), **{k: v for k, v in data["address"].items() if v is not None}}
               prop.city = prop.address.get("city", prop.city)
          if body.specs is not None:
               prop.specs = {**(prop.specs or {}), **{k: v for k, v in data["specs"].items() if v is not None}}
               prop.bhk = prop.specs.get("bhk", prop.bhk)

          for field in ("title", "amenities", "description", "maintenance_details", "status"):
               if field in data and data[field] is not None:
                    setattr(prop, field, data[field])
          if body.expected_rent is not None:
               prop.expected_rent = body.expected_rent
          if body.expected_deposit is not None:
               prop.expected_deposit = body.expected_deposit
          if body.available_from is not None:
               prop.available_from = body.available_from

          db.commit()
          db.refresh(prop)
          return prop

     @staticmethod
     def delete(db: Session, owner_id: int, property_id: int) -> None:
          prop = PropertyService.get(db, owner_id, property_id)
          db.delete(prop)
          db.commit()
          logger.info("Property deleted", extra={"user_id": owner_id})

     @staticmethod
     def add_media(
          db: Session,
          store: ObjectStore,
          owner_id: int,
          property_id: int,
          data: BinaryIO,
          filename: str,
          content_type: Optional[str],
          media_type: str = "image",
          caption: Optional[str] = None,
     ) -> Property:
          """Upload one file and append it to the property's media list."""
          prop = PropertyService.get(db, owner_id, property_id)

          stored = store.upload(data, filename, f"rentfit/properties/{prop.id}", content_type)
          db.add(PropertyMedia(
               property_id=prop.id,
               url=stored.url,
               public_id=stored.public_id,
               type=media_type,
               caption=caption,
          ))
          db.commit()
          db.expire(prop, ["media"])
          logger.info("Property media added", extra={"public_id": stored.public_id})
          return prop
