"""
Firebase Admin wiring for federated sign-in.

The SDK app is initialized once at process start (see main.create_app) and
handed to the auth routes as an IdentityVerifier dependency.
"""
import json
import logging
from dataclasses import dataclass
from typing import Optional, Protocol

import firebase_admin
from firebase_admin import auth, credentials
from firebase_admin.exceptions import FirebaseError

from config import Settings
from utils.errors import Unauthenticated, UpstreamFailure, ValidationError

logger = logging.getLogger(__name__)

APP_NAME = "rentals-backend"


@dataclass(frozen=True)
class FederatedIdentity:
     subject_id: str
     email: Optional[str]
     name: Optional[str] = None
     picture: Optional[str] = None


class IdentityVerifier(Protocol):
     def verify(self, id_token: str) -> FederatedIdentity:
          ...


class FirebaseIdentityVerifier:
     def __init__(self, app: firebase_admin.App):
          self.app = app

     def verify(self, id_token: str) -> FederatedIdentity:
          try:
               decoded = auth.verify_id_token(id_token, app=self.app)
          except auth.CertificateFetchError as exc:
               logger.error("Could not fetch Firebase public keys")
               raise UpstreamFailure("Identity provider unavailable") from exc
          except (auth.InvalidIdTokenError, ValueError) as exc:
               raise Unauthenticated("Invalid or expired Firebase token") from exc
          except FirebaseError as exc:
               logger.error("Firebase token verification failed: %s", exc.code)
               raise UpstreamFailure("Identity provider unavailable") from exc

          if not decoded.get("uid"):
               raise ValidationError("Firebase token has no subject")

          return FederatedIdentity(
               subject_id=decoded["uid"],
               email=decoded.get("email"),
               name=decoded.get("name"),
               picture=decoded.get("picture"),
          )


def _credentials_from_settings(settings: Settings) -> Optional[credentials.Certificate]:
     if settings.firebase_service_account_key:
          try:
               info = json.loads(settings.firebase_service_account_key)
          except json.JSONDecodeError as exc:
               raise ValueError("Invalid FIREBASE_SERVICE_ACCOUNT_KEY format") from exc
          return credentials.Certificate(info)

     if settings.firebase_project_id:
          if not (settings.firebase_client_email and settings.firebase_private_key):
               logger.warning(
                    "FIREBASE_PROJECT_ID is set but FIREBASE_CLIENT_EMAIL or FIREBASE_PRIVATE_KEY is missing"
               )
               return None
          return credentials.Certificate({
               "type": "service_account",
               "project_id": settings.firebase_project_id.strip(),
               "client_email": settings.firebase_client_email.strip(),
               "private_key": settings.firebase_private_key.replace("\\n", "\n"),
               "token_uri": "https://oauth2.googleapis.com/token",
          })

     return None


def init_identity_verifier(settings: Settings) -> Optional[FirebaseIdentityVerifier]:
     """Initialize the Firebase Admin app. Returns None when not configured."""
     cred = _credentials_from_settings(settings)
     if cred is None:
          logger.warning("Firebase Admin SDK not initialized; federated sign-in is disabled")
          return None

     try:
          app = firebase_admin.get_app(APP_NAME)
     except ValueError:
          app = firebase_admin.initialize_app(cred, name=APP_NAME)
     logger.info("Firebase Admin SDK initialized")
     return FirebaseIdentityVerifier(app)
