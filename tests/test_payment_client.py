# tests/test_payment_client.py
import random
import re

from app.core.payment_client import MockPaymentProcessor, StaticPaymentProcessor


def test_mock_rejects_non_positive_amount():
    processor = MockPaymentProcessor(success_rate=1.0, latency_seconds=0)

    result = processor.process_payment(0, "mock")

    assert result.success is False
    assert result.error == "Invalid amount"


def test_mock_success_has_payment_id():
    processor = MockPaymentProcessor(success_rate=1.0, latency_seconds=0)

    result = processor.process_payment(10.5, "card")

    assert result.success is True
    assert re.fullmatch(r"mock_payment_\d+_[0-9a-z]{9}", result.payment_id)
    assert result.amount == 10.5
    assert result.method == "card"


def test_mock_declines_when_success_rate_zero():
    processor = MockPaymentProcessor(success_rate=0.0, latency_seconds=0)

    result = processor.process_payment(10.0, "mock")

    assert result.success is False
    assert result.error == "Payment declined by mock processor"


def test_mock_success_rate_is_roughly_honoured():
    processor = MockPaymentProcessor(
        success_rate=0.95, latency_seconds=0, rng=random.Random(1234)
    )

    successes = sum(processor.process_payment(1.0, "mock").success for _ in range(1000))

    assert 900 <= successes <= 990


def test_static_processor_records_calls():
    processor = StaticPaymentProcessor(succeed=False, error="nope")

    result = processor.process_payment(5.0, "mock")

    assert result.success is False
    assert result.error == "nope"
    assert processor.calls == [(5.0, "mock")]
