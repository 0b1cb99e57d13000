# app/core/payment_client.py
"""
Payment gateway client for the shop.

Responsibilities:
  - Define the contract checkout relies on: process_payment(amount, method).
  - Provide a mock gateway (fixed latency, configurable success rate) used
    until a real provider is wired in.
  - Provide a deterministic stand-in for tests.

A real gateway client only needs to implement `PaymentProcessor` and be
passed to `create_app(payment_processor=...)`.
"""
from __future__ import annotations

import logging
import random
import string
import time
from datetime import datetime, timezone
from typing import Protocol

from fastapi import Request
from pydantic import BaseModel

logger = logging.getLogger(__name__)

_BASE36 = string.digits + string.ascii_lowercase


class PaymentResult(BaseModel):
    """
    Outcome of a payment attempt.

    On success `payment_id` is set; on failure `error` carries the reason.
    """

    success: bool
    payment_id: str | None = None
    amount: float | None = None
    method: str | None = None
    processed_at: datetime | None = None
    error: str | None = None


class PaymentProcessor(Protocol):
    def process_payment(self, amount: float, method: str) -> PaymentResult: ...


class MockPaymentProcessor:
    """
    Stand-in payment gateway.

    - amount <= 0 always fails with "Invalid amount"
    - otherwise succeeds with probability `success_rate`
    - every call waits `latency_seconds` to mimic a network round trip
    """

    def __init__(
        self,
        success_rate: float = 0.95,
        latency_seconds: float = 1.0,
        rng: random.Random | None = None,
    ):
        self.success_rate = success_rate
        self.latency_seconds = latency_seconds
        self.rng = rng or random.Random()

    def _payment_id(self) -> str:
        suffix = "".join(self.rng.choice(_BASE36) for _ in range(9))
        return f"mock_payment_{int(time.time() * 1000)}_{suffix}"

    def process_payment(self, amount: float, method: str) -> PaymentResult:
        if self.latency_seconds > 0:
            time.sleep(self.latency_seconds)

        if amount <= 0:
            return PaymentResult(success=False, error="Invalid amount")

        if self.rng.random() >= self.success_rate:
            logger.info("Mock processor declined %.2f via %s", amount, method)
            return PaymentResult(
                success=False,
                error="Payment declined by mock processor",
            )

        return PaymentResult(
            success=True,
            payment_id=self._payment_id(),
            amount=amount,
            method=method,
            processed_at=datetime.now(timezone.utc),
        )


class StaticPaymentProcessor:
    """
    Deterministic processor: always succeeds or always declines.

    Records every call in `calls` as (amount, method).
    """

    def __init__(self, succeed: bool = True, error: str = "Payment declined"):
        self.succeed = succeed
        self.error = error
        self.calls: list[tuple[float, str]] = []

    def process_payment(self, amount: float, method: str) -> PaymentResult:
        self.calls.append((amount, method))
        if not self.succeed:
            return PaymentResult(success=False, error=self.error)
        return PaymentResult(
            success=True,
            payment_id=f"test_payment_{len(self.calls)}",
            amount=amount,
            method=method,
            processed_at=datetime.now(timezone.utc),
        )


def get_payment_processor(request: Request) -> PaymentProcessor:
    """
    FastAPI dependency returning the processor the app was started with.
    """
    return request.app.state.payment_processor
