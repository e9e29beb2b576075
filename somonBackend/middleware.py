"""Custom middleware for the Somon backend."""

from __future__ import annotations

from typing import Callable

from marketplace.domain import Language

LANGUAGE_QUERY_PARAM = "lang"
LANGUAGE_HEADER = "X-Language"


def resolve_request_language(request) -> Language:
    """
    Pick the response language for a request.

    Order: ``?lang=`` query parameter, ``X-Language`` header, first
    ``Accept-Language`` entry, then Russian. Unknown codes resolve to Russian.
    """
    code = request.GET.get(LANGUAGE_QUERY_PARAM)
    if not code:
        code = request.headers.get(LANGUAGE_HEADER)
    if not code:
        accept = request.headers.get("Accept-Language", "")
        code = accept.split(",")[0].split(";")[0].strip()
    return Language.from_code(code)


class LanguageMiddleware:
    """Attach ``request.language`` and echo the resolved code in ``X-Language``."""

    def __init__(self, get_response: Callable):
        self.get_response = get_response

    def __call__(self, request):
        request.language = resolve_request_language(request)
        response = self.get_response(request)
        response[LANGUAGE_HEADER] = request.language.code
        return response
