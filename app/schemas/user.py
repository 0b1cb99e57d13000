# app/schemas/user.py
from pydantic import EmailStr, ConfigDict, field_validator
from sqlmodel import SQLModel


class SignupRequest(SQLModel):
    """
    Payload for account creation.

    Presence and password length are checked by AuthService so the client
    gets the shop's own messages rather than raw field errors.
    """

    model_config = ConfigDict(extra="ignore")

    email: EmailStr | None = None
    password: str | None = None
    name: str | None = None

    @field_validator("email", mode="before")
    @classmethod
    def blank_email_is_missing(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("name")
    @classmethod
    def normalize_name(cls, v: str | None) -> str | None:
        if v is None:
            return v
        return v.strip()


class LoginRequest(SQLModel):
    model_config = ConfigDict(extra="ignore")

    email: str | None = None
    password: str | None = None


class TokenVerifyRequest(SQLModel):
    model_config = ConfigDict(extra="ignore")

    token: str | None = None


class UserRead(SQLModel):
    """Response schema returned to clients (never includes the hash)."""

    id: int
    email: str
    name: str | None = None


class AuthPayload(SQLModel):
    """`data` of signup / login responses."""

    user: UserRead
    token: str


class VerifiedUser(SQLModel):
    """`data` of verify-token responses."""

    user: UserRead


class CurrentUser(SQLModel):
    """Identity carried by a valid access token."""

    id: int
    email: str
