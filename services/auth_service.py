# services/auth_service.py
"""
Auth Service - local credentials, federated sign-in and access tokens.

Tokens are HS256 JWTs carrying {user_id, email, roles, iat, exp}. Every
request re-loads the user named by the token (see dependencies.py), so a
removed account stops working immediately.

Passwords and hashes are never logged.
"""
import logging
from datetime import datetime, timedelta, timezone
from typing import List, Optional, Tuple

from jose import JWTError, jwt
from passlib.context import CryptContext
from sqlalchemy.orm import Session

from config import get_settings
from firebase_auth import IdentityVerifier
from models import User
from models.user import Checkpoint
from schemas.auth import ProfileUpdate, RegisterRequest
from utils.errors import Conflict, NotFound, Unauthenticated, ValidationError

logger = logging.getLogger(__name__)

settings = get_settings()

# Bcrypt with a fixed work factor
pwd_context = CryptContext(
     schemes=["bcrypt"],
     deprecated="auto",
     bcrypt__rounds=settings.bcrypt_rounds,
)

INVALID_CREDENTIALS = "Invalid email or password"


def hash_password(password: str) -> str:
     return pwd_context.hash(password)


def verify_password(password: str, hashed: str) -> bool:
     return pwd_context.verify(password, hashed)


def create_access_token(user: User) -> str:
     now = datetime.now(timezone.utc)
     claims = {
          "user_id": user.id,
          "email": user.email,
          "roles": list(user.roles or []),
          "iat": now,
          "exp": now + timedelta(minutes=settings.jwt_exp_minutes),
     }
     return jwt.encode(claims, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> dict:
     """
     Verify signature and expiry.

     Raises:
          Unauthenticated: token is malformed, expired or has no user_id
     """
     try:
          payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
     except JWTError as exc:
          raise Unauthenticated("Invalid or expired token") from exc

     if not isinstance(payload.get("user_id"), int):
          raise Unauthenticated("Invalid or expired token")
     return payload


def _dedupe_roles(roles) -> List[str]:
     seen: List[str] = []
     for role in roles or []:
          value = getattr(role, "value", role)
          if value not in seen:
               seen.append(value)
     return seen


def _find_by_email(db: Session, email: str) -> Optional[User]:
     return db.query(User).filter(User.email == email.strip().lower()).first()


class AuthService:
     """Service class for account and credential operations."""

     @staticmethod
     def register(db: Session, body: RegisterRequest) -> Tuple[User, str]:
          email = body.email.strip().lower()
          if _find_by_email(db, email):
               raise Conflict("User already exists with this email")

          user = User(
               name=body.name.strip(),
               email=email,
               password_hash=hash_password(body.password),
               roles=_dedupe_roles(body.roles),
               checkpoint=Checkpoint.ONBOARDING.value,
          )
          db.add(user)
          db.commit()
          db.refresh(user)

          logger.info("User registered", extra={"user_id": user.id})
          return user, create_access_token(user)

     @staticmethod
     def login(db: Session, email: str, password: str) -> Tuple[User, str]:
          user = _find_by_email(db, email)

          # Same message for every failure so accounts can't be enumerated
          if not user or not user.password_hash:
               raise Unauthenticated(INVALID_CREDENTIALS)
          if not verify_password(password, user.password_hash):
               logger.info("Failed login", extra={"user_id": user.id})
               raise Unauthenticated(INVALID_CREDENTIALS)

          return user, create_access_token(user)

     @staticmethod
     def federated_sign_in(db: Session, verifier: IdentityVerifier, id_token: str) -> Tuple[User, str]:
          """
          Exchange a Firebase ID token for a local token, creating the user on
          first sign-in. An existing account with the same email is linked.
          """
          identity = verifier.verify(id_token)
          if not identity.email:
               raise ValidationError("Email not found in Firebase token")

          email = identity.email.strip().lower()
          user = _find_by_email(db, email)

          if user:
               if not user.firebase_uid:
                    user.firebase_uid = identity.subject_id
               if identity.picture and not user.image:
                    user.image = identity.picture
               if identity.name and identity.name != user.name:
                    user.name = identity.name
               db.commit()
               db.refresh(user)
               logger.info("Federated sign-in", extra={"user_id": user.id})
          else:
               user = User(
                    email=email,
                    firebase_uid=identity.subject_id,
                    name=identity.name or email.split("@")[0],
                    image=identity.picture,
                    roles=[],
                    checkpoint=Checkpoint.ONBOARDING.value,
               )
               db.add(user)
               db.commit()
               db.refresh(user)
               logger.info("User created from federated sign-in", extra={"user_id": user.id})

          return user, create_access_token(user)

     @staticmethod
     def get_user(db: Session, user_id: int) -> User:
          user = db.get(User, user_id)
          if not user:
               raise NotFound("User not found")
          return user

     @staticmethod
     def update_profile(db: Session, user_id: int, body: ProfileUpdate) -> User:
          user = AuthService.get_user(db, user_id)
          data = body.model_dump(exclude_unset=True, mode="json")

          for field in ("name", "image", "checkpoint"):
               if data.get(field) is not None:
                    setattr(user, field, data[field])

          if body.roles is not None:
               user.roles = _dedupe_roles(body.roles)

          # Merge sub-profiles field by field
          for field in ("landlord_profile", "tenant_profile"):
               incoming = data.get(field)
               if incoming:
                    merged = dict(getattr(user, field) or {})
                    merged.update({k: v for k, v in incoming.items() if v is not None})
                    setattr(user, field, merged)

          db.commit()
          db.refresh(user)
          logger.info("Profile updated", extra={"user_id": user.id})
          return user

     @staticmethod
     def change_password(db: Session, user_id: int, current_password: str, new_password: str) -> None:
          user = AuthService.get_user(db, user_id)
          if not user.password_hash:
               raise ValidationError("Account has no password; sign in with your identity provider")
          if not verify_password(current_password, user.password_hash):
               raise ValidationError("Current password is incorrect")

          user.password_hash = hash_password(new_password)
          db.commit()
          logger.info("Password changed", extra={"user_id": user.id})
