# models/base.py
from sqlalchemy import Column, DateTime
from sqlalchemy.orm import DeclarativeBase

from utils.timeutils import utcnow


class Base(DeclarativeBase):
     """
     Base class for all SQLAlchemy models. Each model names its own table.
     """


class TimestampMixin:
     """created_at / updated_at maintained on the Python side."""

     created_at = Column(DateTime, default=utcnow, nullable=False)
     updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)
