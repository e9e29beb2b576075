import pytest
from rest_framework import serializers

from marketplace.api.responses import build_envelope, to_response
from utils.service_base import ResultError, ServiceResult


class _ItemSerializer(serializers.Serializer):
    displayName = serializers.CharField(source="name")


class _Item:
    def __init__(self, name):
        self.name = name


@pytest.mark.unit
class TestEnvelope:
    def test_success_envelope(self):
        envelope = build_envelope(ServiceResult.success("x"), data={"a": 1})

        assert envelope == {
            "isSuccess": True,
            "error": {"code": 200, "message": "Ok", "kind": "None"},
            "data": {"a": 1},
        }

    def test_failure_envelope(self):
        envelope = build_envelope(ServiceResult.failure(ResultError.not_found("Gone")))

        assert envelope["isSuccess"] is False
        assert envelope["error"] == {"code": 404, "message": "Gone", "kind": "NotFound"}
        assert envelope["data"] is None


@pytest.mark.unit
class TestToResponse:
    def test_serializes_value(self):
        response = to_response(ServiceResult.success(_Item("Cars")), _ItemSerializer)

        assert response.status_code == 200
        assert response.data["data"] == {"displayName": "Cars"}

    def test_serializes_lists(self):
        response = to_response(ServiceResult.success([_Item("a"), _Item("b")]), _ItemSerializer, many=True)

        assert [item["displayName"] for item in response.data["data"]] == ["a", "b"]

    def test_raw_value_without_serializer(self):
        assert to_response(ServiceResult.success(True)).data["data"] is True

    @pytest.mark.parametrize(
        "error, status",
        [
            (ResultError.bad_request(), 400),
            (ResultError.not_found(), 404),
            (ResultError.already_exist(), 409),
            (ResultError.conflict(), 409),
            (ResultError.access_denied(), 403),
            (ResultError.internal_server_error(), 500),
        ],
    )
    def test_status_follows_kind(self, error, status):
        response = to_response(ServiceResult.failure(error))

        assert response.status_code == status
        assert response.data["error"]["code"] == status
        assert response.data["isSuccess"] is False

    def test_unsupported_media_type_has_no_body(self):
        response = to_response(ServiceResult.failure(ResultError.unsupported_media_type("Nope")))

        assert response.status_code == 415
        assert response.data is None

    def test_failure_value_is_serialized(self):
        response = to_response(ServiceResult.failure(ResultError.not_found(), value=False))

        assert response.data["data"] is False
