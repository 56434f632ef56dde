# schemas/common.py
"""
Response envelope and the base for per-entity list filters.
"""
from typing import Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict

T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
     """Standard success envelope: {"success": true, "data": ...}."""
     success: bool = True
     data: Optional[T] = None


class ApiListResponse(BaseModel, Generic[T]):
     success: bool = True
     count: int
     data: List[T]


class MessageResponse(BaseModel):
     success: bool = True
     message: str


class QueryFilter(BaseModel):
     """
     Base for list filters bound with Annotated[..., Query()]. Unknown query
     parameters are rejected with a 400.
     """
     model_config = ConfigDict(extra="forbid")
