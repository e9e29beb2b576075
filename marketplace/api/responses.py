"""
ServiceResult -> HTTP response mapping.

Every endpoint answers with the same envelope::

    {"isSuccess": bool, "error": {"code", "message", "kind"}, "data": ...}

and the status of the error kind. UnsupportedMediaType is the one
exception: it is answered with a bare 415 and no body.
"""

from typing import Any, Optional, Type

from rest_framework import serializers
from rest_framework.response import Response

from utils.service_base import ErrorKind, ServiceResult


def build_envelope(result: ServiceResult, data: Any = None) -> dict:
    """Wire envelope for a result; ``data`` is the already serialized value."""
    return {
        "isSuccess": result.ok,
        "error": result.error.to_dict(),
        "data": data,
    }


def to_response(
    result: ServiceResult,
    serializer_class: Optional[Type[serializers.BaseSerializer]] = None,
    many: bool = False,
) -> Response:
    """
    Map a ServiceResult to a DRF Response.

    Args:
        result: Service outcome
        serializer_class: Serializer for ``result.value``; the raw value is
            used when omitted
        many: Serialize ``result.value`` as a list

    Example:
        >>> return to_response(service.get_by_id(pk, request.language), CategorySerializer)
    """
    if result.error.kind is ErrorKind.UNSUPPORTED_MEDIA_TYPE:
        return Response(status=result.error.code)

    data = None
    if result.value is not None:
        data = serializer_class(result.value, many=many).data if serializer_class else result.value

    return Response(build_envelope(result, data), status=result.error.code)
