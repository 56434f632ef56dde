# utils/errors.py
"""
Application error taxonomy.

Services raise these; main.py turns them into the standard
{"success": false, "error": {...}} envelope with the matching status code.
"""
from typing import Any, Dict, List, Optional

from fastapi import status


class AppError(Exception):
     """Base class for errors that map onto an HTTP status."""

     status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
     default_message: str = "Internal server error"

     def __init__(self, message: Optional[str] = None, details: Optional[List[Dict[str, Any]]] = None):
          self.message = message or self.default_message
          self.details = details
          super().__init__(self.message)

     def to_payload(self) -> dict:
          error: Dict[str, Any] = {"message": self.message}
          if self.details:
               error["details"] = self.details
          return {"success": False, "error": error}


class ValidationError(AppError):
     status_code = status.HTTP_400_BAD_REQUEST
     default_message = "Validation error"


class Unauthenticated(AppError):
     status_code = status.HTTP_401_UNAUTHORIZED
     default_message = "Authentication required"


class Forbidden(AppError):
     status_code = status.HTTP_403_FORBIDDEN
     default_message = "Insufficient permissions"


class NotFound(AppError):
     status_code = status.HTTP_404_NOT_FOUND
     default_message = "Resource not found"


class Conflict(AppError):
     status_code = status.HTTP_409_CONFLICT
     default_message = "Resource already exists"


class UpstreamFailure(AppError):
     status_code = status.HTTP_502_BAD_GATEWAY
     default_message = "Upstream service failed"


class InternalError(AppError):
     pass
