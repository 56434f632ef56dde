# services/__init__.py
from .auth_service import AuthService
from .property_service import PropertyService
from .agreement_service import AgreementService
from .payment_service import PaymentService
from .inspection_service import InspectionService
from .ticket_service import TicketService
from .notification_service import NotificationService
from .media_service import MediaService

__all__ = [
     "AuthService",
     "PropertyService",
     "AgreementService",
     "PaymentService",
     "InspectionService",
     "TicketService",
     "NotificationService",
     "MediaService",
]
