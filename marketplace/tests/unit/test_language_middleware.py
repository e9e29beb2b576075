import pytest
from django.http import HttpResponse
from django.test import RequestFactory

from marketplace.domain import Language
from somonBackend.middleware import LanguageMiddleware, resolve_request_language


@pytest.fixture
def rf():
    return RequestFactory()


@pytest.mark.unit
class TestResolveRequestLanguage:
    @pytest.mark.parametrize(
        "path, headers, expected",
        [
            ("/", {}, Language.RUSSIAN),
            ("/?lang=en", {}, Language.ENGLISH),
            ("/", {"HTTP_X_LANGUAGE": "tj"}, Language.TAJIK),
            ("/", {"HTTP_ACCEPT_LANGUAGE": "en-GB,en;q=0.8,ru;q=0.5"}, Language.ENGLISH),
            ("/?lang=tj", {"HTTP_X_LANGUAGE": "en"}, Language.TAJIK),
            ("/", {"HTTP_X_LANGUAGE": "tj", "HTTP_ACCEPT_LANGUAGE": "en"}, Language.TAJIK),
            ("/?lang=de", {}, Language.RUSSIAN),
            ("/", {"HTTP_ACCEPT_LANGUAGE": "*"}, Language.RUSSIAN),
        ],
    )
    def test_resolution_order(self, rf, path, headers, expected):
        assert resolve_request_language(rf.get(path, **headers)) is expected


@pytest.mark.unit
class TestLanguageMiddleware:
    def test_sets_request_language_and_header(self, rf):
        seen = {}

        def view(request):
            seen["language"] = request.language
            return HttpResponse("ok")

        response = LanguageMiddleware(view)(rf.get("/?lang=EN"))

        assert seen["language"] is Language.ENGLISH
        assert response["X-Language"] == "en"
