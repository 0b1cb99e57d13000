# app/routers/auth.py
from fastapi import APIRouter, Depends, status
from sqlmodel import Session

from app.core.config import Settings, get_app_settings
from app.database import get_session
from app.repositories.user_repo import UserRepository
from app.schemas.common import ApiResponse
from app.schemas.user import (
    AuthPayload,
    LoginRequest,
    SignupRequest,
    TokenVerifyRequest,
    VerifiedUser,
)
from app.services.auth_service import AuthService

router = APIRouter(prefix="/auth", tags=["Auth"])

repo = UserRepository()
service = AuthService(repo)


@router.post(
    "/signup",
    response_model=ApiResponse[AuthPayload],
    status_code=status.HTTP_201_CREATED,
)
def signup(
    payload: SignupRequest,
    session: Session = Depends(get_session),
    settings: Settings = Depends(get_app_settings),
):
    """
    Create an account and return it with an access token.

    Errors:
      - 400 missing fields, short password, or email already registered.
    """
    data = service.signup(session, settings, payload)
    return ApiResponse(message="User created successfully", data=data)


@router.post("/login", response_model=ApiResponse[AuthPayload])
def login(
    payload: LoginRequest,
    session: Session = Depends(get_session),
    settings: Settings = Depends(get_app_settings),
):
    """
    Exchange email + password for an access token.
    """
    data = service.login(session, settings, payload)
    return ApiResponse(message="Login successful", data=data)


@router.post("/verify-token", response_model=ApiResponse[VerifiedUser])
def verify_token(
    payload: TokenVerifyRequest,
    session: Session = Depends(get_session),
    settings: Settings = Depends(get_app_settings),
):
    """
    Check a token sent in the body and return its user.
    """
    data = service.verify_token(session, settings, payload.token)
    return ApiResponse(message="Token is valid", data=data)
