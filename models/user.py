# models/user.py
import enum

from sqlalchemy import JSON, CheckConstraint, Column, Integer, String

from .base import Base, TimestampMixin


class UserRole(str, enum.Enum):
     LANDLORD = "landlord"
     TENANT = "tenant"
     ADMIN = "admin"


class Checkpoint(str, enum.Enum):
     """Where the user is in the onboarding flow."""
     ONBOARDING = "onboarding"
     COMPLETE = "complete"


class User(TimestampMixin, Base):
     """
     User model - central authentication table.

     A user signs in either with a local password or through Firebase; at
     least one of password_hash / firebase_uid must be present. Users are
     never hard-deleted.
     """
     __tablename__ = "users"
     __table_args__ = (
          CheckConstraint(
               "password_hash IS NOT NULL OR firebase_uid IS NOT NULL",
               name="ck_users_has_credential",
          ),
     )

     id = Column(Integer, primary_key=True, autoincrement=True)
     email = Column(String(255), unique=True, nullable=False, index=True)
     password_hash = Column(String(255), nullable=True)
     firebase_uid = Column(String(128), unique=True, nullable=True, index=True)
     name = Column(String(200), nullable=False)
     image = Column(String(1000), nullable=True)
     roles = Column(JSON, nullable=False, default=list)
     checkpoint = Column(String(20), nullable=False, default=Checkpoint.ONBOARDING.value)

     landlord_profile = Column(JSON, nullable=True)
     tenant_profile = Column(JSON, nullable=True)
     subscription = Column(JSON, nullable=True)

     def __repr__(self):
          return f"<User(id={self.id}, email='{self.email}', roles={self.roles})>"
