# services/access.py
"""
Participant predicates for every shared or owned entity.

Each function returns a SQLAlchemy clause to compose into the WHERE of a
query, so a record the caller may not see is never loaded at all. Callers
turn an empty result into NotFound.
"""
from sqlalchemy import or_

from models import Agreement, Document, Notification, Payment, Property, Ticket


def owned_property(user_id: int):
     return Property.owner_id == user_id


def agreement_participant(user_id: int):
     return or_(Agreement.landlord_id == user_id, Agreement.tenant_id == user_id)


def payment_participant(user_id: int):
     return or_(Payment.payer_id == user_id, Payment.receiver_id == user_id)


def ticket_participant(user_id: int):
     return or_(Ticket.author_id == user_id, Ticket.assigned_to_id == user_id)


def notification_recipient(user_id: int):
     return Notification.user_id == user_id


def document_uploader(user_id: int):
     return Document.uploaded_by_id == user_id
