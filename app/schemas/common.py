# app/schemas/common.py
from typing import Generic, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    """
    Envelope shared by every endpoint:

        {"success": true, "message": "...", "data": ...}

    Error responses are produced by the exception handlers in app.main and
    add `error` (and `stack` in development) instead of `data`.
    """

    success: bool = True
    message: str
    data: T | None = None
