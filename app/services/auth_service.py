# app/services/auth_service.py
import logging

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session

from app.core.config import Settings
from app.core.errors import AuthError, ConflictError, ValidationError
from app.core.security import (
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)
from app.models.user import User
from app.repositories.user_repo import UserRepository
from app.schemas.user import (
    AuthPayload,
    LoginRequest,
    SignupRequest,
    UserRead,
    VerifiedUser,
)

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6


class AuthService:
    """
    Business logic for accounts and tokens.

    Responsibilities:
      - validate signup input (required fields, password length)
      - enforce unique emails
      - hash / verify passwords
      - issue and check access tokens
    """

    def __init__(self, repo: UserRepository):
        self.repo = repo

    @staticmethod
    def _normalize_email(email: str) -> str:
        return email.strip().lower()

    @staticmethod
    def _to_read(user: User) -> UserRead:
        return UserRead(id=user.id, email=user.email, name=user.name)

    def signup(
        self,
        session: Session,
        settings: Settings,
        payload: SignupRequest,
    ) -> AuthPayload:
        """
        Create an account and return it with a fresh token.

        Rules:
          - email and password are required
          - password must have at least 6 characters
          - email must not be registered yet
        """
        if not payload.email or not payload.password:
            raise ValidationError("Email and password are required")

        if len(payload.password) < MIN_PASSWORD_LENGTH:
            raise ValidationError(
                f"Password must be at least {MIN_PASSWORD_LENGTH} characters long"
            )

        email = self._normalize_email(str(payload.email))
        if self.repo.get_by_email(session, email) is not None:
            raise ConflictError("User with this email already exists")

        user = User(
            email=email,
            password=hash_password(payload.password, settings.BCRYPT_ROUNDS),
            name=payload.name or "",
        )
        try:
            user = self.repo.create(session, user)
        except IntegrityError:
            # Lost a race against a concurrent signup with the same email.
            session.rollback()
            raise ConflictError("User with this email already exists")

        logger.info("User %s signed up", user.id)
        token = create_access_token(settings, user.id, user.email)
        return AuthPayload(user=self._to_read(user), token=token)

    def login(
        self,
        session: Session,
        settings: Settings,
        payload: LoginRequest,
    ) -> AuthPayload:
        """
        Check credentials and return the user with a fresh token.

        Unknown email and wrong password give the same 401 message.
        """
        if not payload.email or not payload.password:
            raise ValidationError("Email and password are required")

        user = self.repo.get_by_email(session, self._normalize_email(payload.email))
        if user is None or not verify_password(payload.password, user.password):
            logger.info("Failed login attempt")
            raise AuthError("Invalid email or password")

        token = create_access_token(settings, user.id, user.email)
        return AuthPayload(user=self._to_read(user), token=token)

    def verify_token(
        self,
        session: Session,
        settings: Settings,
        token: str | None,
    ) -> VerifiedUser:
        """
        Validate a token and make sure its user still exists.

        Raises:
            ValidationError(400): token missing.
            AuthError(401): token invalid/expired, or user gone.
        """
        if not token:
            raise ValidationError("Token is required")

        claims = decode_access_token(settings, token)

        user = self.repo.get_by_email(session, claims["email"])
        if user is None:
            raise AuthError("User not found")

        return VerifiedUser(user=self._to_read(user))
