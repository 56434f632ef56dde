# dependencies.py
"""
Shared FastAPI dependencies: caller resolution, role gating and the
external collaborators stored on app.state by main.create_app.
"""
import logging
from dataclasses import dataclass
from typing import List

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from azure_blob import ObjectStore
from database import get_session
from firebase_auth import IdentityVerifier
from models import User
from services.auth_service import decode_access_token
from utils.errors import Forbidden, Unauthenticated, UpstreamFailure

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CurrentUser:
     id: int
     email: str
     roles: List[str]


def _bearer_token(request: Request) -> str:
     auth = request.headers.get("Authorization")
     if not auth or not auth.startswith("Bearer "):
          raise Unauthenticated("No token provided")
     token = auth.split(" ", 1)[1].strip()
     if not token:
          raise Unauthenticated("No token provided")
     return token


def get_current_user(request: Request, db: Session = Depends(get_session)) -> CurrentUser:
     """Verify the bearer token and re-load the user it names."""
     payload = decode_access_token(_bearer_token(request))

     user = db.get(User, payload["user_id"])
     if user is None:
          logger.warning("Token refers to a missing user", extra={"user_id": payload["user_id"]})
          raise Unauthenticated("User not found")

     return CurrentUser(id=user.id, email=user.email, roles=list(user.roles or []))


def require_roles(*roles: str):
     """Dependency factory: the caller must hold at least one of `roles`."""
     allowed = set(roles)

     def checker(current_user: CurrentUser = Depends(get_current_user)) -> CurrentUser:
          if not allowed.intersection(current_user.roles):
               raise Forbidden("Insufficient permissions")
          return current_user

     return checker


def get_identity_verifier(request: Request) -> IdentityVerifier:
     verifier = getattr(request.app.state, "identity_verifier", None)
     if verifier is None:
          raise UpstreamFailure("Federated sign-in is not configured")
     return verifier


def get_object_store(request: Request) -> ObjectStore:
     store = getattr(request.app.state, "object_store", None)
     if store is None:
          raise UpstreamFailure("File storage is not configured")
     return store


def client_ip(request: Request) -> str:
     return request.client.host if request.client else "unknown"
