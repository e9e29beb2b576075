import logging
from unittest.mock import MagicMock

import pytest

from marketplace.services.base import BaseService
from utils.service_base import (
    DEFAULT_MESSAGES,
    ERROR_STATUS,
    ErrorKind,
    ResultError,
    ServiceResult,
    error_from_status,
    service_err,
    service_ok,
    status_for,
)

EXPECTED_STATUS = [
    (ErrorKind.NONE, 200),
    (ErrorKind.BAD_REQUEST, 400),
    (ErrorKind.NOT_FOUND, 404),
    (ErrorKind.ALREADY_EXIST, 409),
    (ErrorKind.CONFLICT, 409),
    (ErrorKind.UNSUPPORTED_MEDIA_TYPE, 415),
    (ErrorKind.FORBIDDEN, 403),
    (ErrorKind.INTERNAL_SERVER_ERROR, 500),
]


@pytest.mark.unit
class TestErrorKind:
    def test_every_kind_is_mapped(self):
        assert set(ERROR_STATUS) == set(ErrorKind)
        assert set(DEFAULT_MESSAGES) == set(ErrorKind)

    @pytest.mark.parametrize("kind, status", EXPECTED_STATUS)
    def test_status_for(self, kind, status):
        assert status_for(kind) == status

    @pytest.mark.parametrize("kind, status", EXPECTED_STATUS)
    def test_error_code_follows_kind(self, kind, status):
        assert ResultError.of(kind).code == status

    def test_code_cannot_be_overridden(self):
        assert ResultError(kind=ErrorKind.NOT_FOUND, message="x", code=500).code == 404

    def test_default_messages(self):
        assert ResultError.not_found().message == "Data not found!"
        assert ResultError.unsupported_media_type().message == "Unsupported Media Type!"
        assert ResultError.access_denied().message == "Access Denied!"

    def test_to_dict(self):
        assert ResultError.conflict("Slug taken").to_dict() == {
            "code": 409,
            "message": "Slug taken",
            "kind": "Conflict",
        }

    @pytest.mark.parametrize(
        "status, kind",
        [
            (200, ErrorKind.NONE),
            (204, ErrorKind.NONE),
            (400, ErrorKind.BAD_REQUEST),
            (404, ErrorKind.NOT_FOUND),
            (409, ErrorKind.CONFLICT),
            (415, ErrorKind.UNSUPPORTED_MEDIA_TYPE),
            (401, ErrorKind.INTERNAL_SERVER_ERROR),
            (403, ErrorKind.INTERNAL_SERVER_ERROR),
            (429, ErrorKind.INTERNAL_SERVER_ERROR),
            (502, ErrorKind.INTERNAL_SERVER_ERROR),
        ],
    )
    def test_error_from_status(self, status, kind):
        assert error_from_status(status, "upstream").kind is kind


@pytest.mark.unit
class TestServiceResult:
    def test_success(self):
        result = service_ok(42)

        assert result.ok
        assert result.value == 42
        assert result.error.kind is ErrorKind.NONE
        assert result.error.code == 200

    def test_failure(self):
        result = service_err(ResultError.bad_request("Nope"))

        assert not result.ok
        assert result.value is None
        assert result.error.code == 400
        assert result.error_detail == "Nope"

    def test_failure_may_carry_value(self):
        assert service_err(ResultError.not_found(), value=False).value is False

    def test_failure_with_none_kind_is_rejected(self):
        with pytest.raises(ValueError):
            ServiceResult.failure(ResultError.none())

    def test_map_and_flat_map(self):
        assert service_ok(2).map(lambda v: v * 3).value == 6
        assert service_ok(2).flat_map(lambda v: service_err(ResultError.conflict())).error.kind is ErrorKind.CONFLICT

        failed = service_err(ResultError.not_found())
        assert failed.map(lambda v: v * 3) is failed
        assert failed.flat_map(lambda v: service_ok(v)) is failed


class _SampleService(BaseService):
    @BaseService.log_performance
    def succeed(self):
        return service_ok("done")

    @BaseService.log_performance
    def fail(self):
        return service_err(ResultError.not_found("Missing thing"))

    @BaseService.log_performance
    def explode(self):
        raise RuntimeError("boom")


@pytest.mark.unit
class TestBaseService:
    def test_default_logger_name(self):
        assert _SampleService().logger.name.endswith("._SampleService")

    def test_log_performance_records_completion(self):
        logger = MagicMock(spec=logging.Logger)

        assert _SampleService(logger).succeed().value == "done"
        assert "[_SampleService.succeed] | COMPLETED" in logger.info.call_args[0][0]

    def test_log_performance_records_failure_kind(self):
        logger = MagicMock(spec=logging.Logger)

        _SampleService(logger).fail()

        message = logger.warning.call_args[0][0]
        assert "FAILED with NotFound" in message
        assert "Missing thing" in message

    def test_log_performance_reraises(self):
        logger = MagicMock(spec=logging.Logger)

        with pytest.raises(RuntimeError):
            _SampleService(logger).explode()
        assert "EXCEPTION" in logger.error.call_args[0][0]

    def test_wrap_exception(self):
        service = _SampleService(MagicMock(spec=logging.Logger))

        assert service.wrap_exception(lambda: 5, "five").value == 5

        result = service.wrap_exception(lambda: 1 / 0, "divide", message="Failed to divide")
        assert result.error.kind is ErrorKind.INTERNAL_SERVER_ERROR
        assert result.error_detail == "Failed to divide"
