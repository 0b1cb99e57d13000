# app/models/user.py
from datetime import datetime, timezone

from sqlmodel import SQLModel, Field


class User(SQLModel, table=True):
    """
    Registered shop customer.

    `password` holds the bcrypt hash only and is never returned to clients;
    read schemas in app.schemas.user leave it out.
    """

    __tablename__ = "users"

    id: int | None = Field(
        default=None,
        primary_key=True,
    )

    email: str = Field(
        unique=True,
        index=True,
        description="Login email (unique)",
    )

    password: str = Field(
        description="bcrypt hash of the password",
    )

    name: str = Field(
        default="",
        description="Optional display name",
    )

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Creation timestamp (UTC)",
    )
