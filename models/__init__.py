# models/__init__.py
from .base import Base
from .user import User
from .property import Property, PropertyMedia
from .agreement import Agreement
from .payment import Payment
from .inspection import Inspection, InspectionPhoto
from .ticket import Ticket, TicketMessage
from .notification import Notification
from .document import Document

__all__ = [
     "Base",
     "User",
     "Property",
     "PropertyMedia",
     "Agreement",
     "Payment",
     "Inspection",
     "InspectionPhoto",
     "Ticket",
     "TicketMessage",
     "Notification",
     "Document",
]
