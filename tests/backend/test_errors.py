"""
Tests for the error taxonomy in app.core.errors.
"""

import pytest
from pymongo.errors import AutoReconnect

from app.core.errors import (
    ErrorKind,
    Forbidden,
    NotFound,
    StoreFailure,
    Unauthenticated,
    ValidationFailed,
    format_validation_errors,
    translate_store_errors,
)


@pytest.mark.parametrize("error_cls,kind,status", [
    (Unauthenticated, ErrorKind.UNAUTHENTICATED, 401),
    (Forbidden, ErrorKind.FORBIDDEN, 403),
    (ValidationFailed, ErrorKind.VALIDATION_FAILED, 400),
    (NotFound, ErrorKind.NOT_FOUND, 404),
    (StoreFailure, ErrorKind.STORE_FAILURE, 500),
])
def test_kind_and_status_mapping(error_cls, kind, status):
    error = error_cls("boom")

    assert error.kind is kind
    assert error.http_status == status
    assert error.to_response() == {"error": {"kind": kind.value, "message": "boom"}}


def test_format_validation_errors_joins_all_fields():
    errors = [
        {"loc": ("body", "cat_name"), "msg": "Field required"},
        {"loc": ("weight",), "msg": "Input should be a valid number"},
        {"loc": (), "msg": "Bad request"},
    ]

    assert format_validation_errors(errors) == (
        "Field required: cat_name, Input should be a valid number: weight, Bad request: request"
    )


class TestTranslateStoreErrors:
    """Tests for the driver error wrapper."""

    @pytest.mark.asyncio
    async def test_driver_error_becomes_store_failure(self):
        @translate_store_errors
        async def flaky():
            raise AutoReconnect("connection reset")

        with pytest.raises(StoreFailure) as exc_info:
            await flaky()

        assert isinstance(exc_info.value.__cause__, AutoReconnect)

    @pytest.mark.asyncio
    async def test_registry_errors_pass_through(self):
        @translate_store_errors
        async def missing():
            raise NotFound("Cat not found")

        with pytest.raises(NotFound):
            await missing()
