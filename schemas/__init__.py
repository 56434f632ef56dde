# schemas/__init__.py
from .common import ApiListResponse, ApiResponse, MessageResponse, QueryFilter
from .auth import AuthPayload, UserResponse
from .property import PropertyResponse
from .agreement import AgreementResponse
from .payment import PaymentResponse
from .inspection import InspectionResponse
from .ticket import TicketResponse
from .notification import NotificationResponse
from .media import DocumentResponse, UploadedFile

__all__ = [
     "ApiResponse",
     "ApiListResponse",
     "MessageResponse",
     "QueryFilter",
     "AuthPayload",
     "UserResponse",
     "PropertyResponse",
     "AgreementResponse",
     "PaymentResponse",
     "InspectionResponse",
     "TicketResponse",
     "NotificationResponse",
     "DocumentResponse",
     "UploadedFile",
]
