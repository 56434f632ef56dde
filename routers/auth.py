# routers/auth.py
"""
Auth API routes: registration, login, Firebase token exchange and the
caller's own profile.
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from database import get_session
from dependencies import CurrentUser, get_current_user, get_identity_verifier
from firebase_auth import IdentityVerifier
from schemas.auth import (
     AuthPayload,
     ChangePasswordRequest,
     FirebaseAuthRequest,
     LoginRequest,
     ProfileUpdate,
     RegisterRequest,
     UserResponse,
)
from schemas.common import ApiResponse, MessageResponse
from services.auth_service import AuthService

router = APIRouter(prefix="/api/auth", tags=["auth"])


def _auth_payload(user, token: str) -> ApiResponse[AuthPayload]:
     return ApiResponse(data=AuthPayload(token=token, user=UserResponse.model_validate(user)))


@router.post(
     "/register",
     response_model=ApiResponse[AuthPayload],
     status_code=status.HTTP_201_CREATED,
     summary="Register a local account"
)
def register(body: RegisterRequest, db: Session = Depends(get_session)):
     """
     Create an account with email and password.

     - **email**: must not already be registered (409 otherwise)
     - **password**: at least 6 characters
     - **roles**: any of landlord, tenant, admin
     """
     user, token = AuthService.register(db, body)
     return _auth_payload(user, token)


@router.post("/login", response_model=ApiResponse[AuthPayload], summary="Log in with email and password")
def login(body: LoginRequest, db: Session = Depends(get_session)):
     user, token = AuthService.login(db, body.email, body.password)
     return _auth_payload(user, token)


@router.post("/firebase", response_model=ApiResponse[AuthPayload], summary="Exchange a Firebase ID token")
def firebase_sign_in(
     body: FirebaseAuthRequest,
     db: Session = Depends(get_session),
     verifier: IdentityVerifier = Depends(get_identity_verifier)
):
     """
     Verify a Firebase ID token and return a local access token. The first
     sign-in for an email creates the account; an existing account with the
     same email is linked to the Firebase user.
     """
     user, token = AuthService.federated_sign_in(db, verifier, body.id_token)
     return _auth_payload(user, token)


@router.get("/me", response_model=ApiResponse[UserResponse], summary="Current user")
def get_me(
     db: Session = Depends(get_session),
     current_user: CurrentUser = Depends(get_current_user)
):
     user = AuthService.get_user(db, current_user.id)
     return ApiResponse(data=UserResponse.model_validate(user))


@router.put("/profile", response_model=ApiResponse[UserResponse], summary="Update profile")
def update_profile(
     body: ProfileUpdate,
     db: Session = Depends(get_session),
     current_user: CurrentUser = Depends(get_current_user)
):
     user = AuthService.update_profile(db, current_user.id, body)
     return ApiResponse(data=UserResponse.model_validate(user))


@router.put("/change-password", response_model=MessageResponse, summary="Change password")
def change_password(
     body: ChangePasswordRequest,
     db: Session = Depends(get_session),
     current_user: CurrentUser = Depends(get_current_user)
):
     AuthService.change_password(db, current_user.id, body.current_password, body.new_password)
     return MessageResponse(message="Password changed successfully")
