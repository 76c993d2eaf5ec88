import asyncio

import httpx

from chat_memory.domain.exceptions import ApiError, NetworkError, QuotaExceededError
from chat_memory.domain.models import ErrorKind
from chat_memory.providers.errors import (
    GENERIC_MESSAGE,
    QUOTA_MESSAGE,
    TIMEOUT_MESSAGE,
    classify_description,
    classify_failure,
)


def test_quota_wins_over_timeout():
    err = classify_description("Quota exceeded after timeout")
    assert err.kind == ErrorKind.QUOTA
    assert err.message == QUOTA_MESSAGE
    assert err.message.startswith("Daily AI usage limit reached")


def test_timeout_description():
    err = classify_description("upstream timeout")
    assert err.kind == ErrorKind.TIMEOUT
    assert err.message == TIMEOUT_MESSAGE


def test_other_description():
    err = classify_description("boom")
    assert err.kind == ErrorKind.OTHER
    assert err.message == GENERIC_MESSAGE
    assert classify_description("").kind == ErrorKind.OTHER


def test_structured_timeouts_classify_as_timeout():
    assert classify_failure(asyncio.TimeoutError()).kind == ErrorKind.TIMEOUT
    assert classify_failure(httpx.ReadTimeout("timed out")).kind == ErrorKind.TIMEOUT
    assert classify_failure(NetworkError(code="NETWORK_TIMEOUT", message="timed out")).kind == ErrorKind.TIMEOUT


def test_business_errors():
    assert classify_failure(QuotaExceededError(code="QUOTA_EXCEEDED", message="daily allocation used")).kind == ErrorKind.QUOTA
    assert classify_failure(ApiError(code="API_ERROR", message="You exceeded your current quota")).kind == ErrorKind.QUOTA
    assert classify_failure(ApiError(code="API_ERROR", message="internal")).kind == ErrorKind.OTHER
    assert classify_failure(RuntimeError("weird")).kind == ErrorKind.OTHER


def test_failure_keeps_description_for_logging():
    err = classify_failure(ApiError(code="API_ERROR", message="bad gateway"))
    assert err.detail == "API_ERROR: bad gateway"
    assert err.message == GENERIC_MESSAGE
    # detail 不参与比较
    assert err == classify_description("something else")
