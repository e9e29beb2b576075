"""
Gemini Client
=============

Thin ``requests`` wrapper around the Gemini ``generateContent`` endpoint.
"""

import logging
import time
from dataclasses import dataclass
from typing import Any, Dict, Optional

import requests
from django.conf import settings

from utils.logging_utils import mask_url
from utils.service_base import ResultError, ServiceResult, error_from_status

from .interface import GenerativeClientInterface

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gemini-2.0-flash"
DEFAULT_ENDPOINT = "https://generativelanguage.googleapis.com"


@dataclass
class GeminiSettings:
    """
    Gemini API configuration (``GEMINI`` dict in settings.py).

    Attributes:
        api_key: Google AI Studio key, sent as the ``key`` query parameter
        model: Model name, e.g. "gemini-2.0-flash"
        endpoint: API base URL
        timeout_seconds: Request timeout
    """

    api_key: str = ""
    model: str = DEFAULT_MODEL
    endpoint: str = DEFAULT_ENDPOINT
    timeout_seconds: int = 60

    @property
    def generate_url(self) -> str:
        return f"{self.endpoint.rstrip('/')}/v1beta/models/{self.model}:generateContent"

    @classmethod
    def from_django_settings(cls, overrides: Optional[dict] = None) -> "GeminiSettings":
        config = dict(getattr(settings, "GEMINI", {}))
        config.update(overrides or {})
        return cls(
            api_key=config.get("API_KEY") or "",
            model=config.get("MODEL") or DEFAULT_MODEL,
            endpoint=config.get("ENDPOINT") or DEFAULT_ENDPOINT,
            timeout_seconds=int(config.get("TIMEOUT_SECONDS", 60)),
        )


class GeminiClient(GenerativeClientInterface):
    """
    Gemini REST client.

    Non-2xx responses are translated with ``error_from_status`` and carry the
    response body and reason as the message. Network errors and undecodable
    bodies become InternalServerError. The API key never reaches the logs.
    """

    def __init__(self, gemini_settings: GeminiSettings, session: Optional[requests.Session] = None):
        self.settings = gemini_settings
        self.session = session or requests.Session()
        self.session.headers.update({"Accept": "application/json"})

    def generate_content(self, payload: Dict[str, Any]) -> ServiceResult[Dict[str, Any]]:
        url = self.settings.generate_url
        safe_url = mask_url(f"{url}?key={self.settings.api_key}")
        start = time.perf_counter()
        logger.info(f"[GeminiClient.generate_content] | START | POST {safe_url}")

        try:
            response = self.session.post(
                url,
                params={"key": self.settings.api_key},
                json=payload,
                timeout=self.settings.timeout_seconds,
            )
        except requests.RequestException as e:
            duration = (time.perf_counter() - start) * 1000
            logger.error(f"[GeminiClient.generate_content] | NETWORK ERROR after {duration:.2f}ms: {e}")
            return ServiceResult.failure(ResultError.internal_server_error(str(e)))

        duration = (time.perf_counter() - start) * 1000

        if not response.ok:
            message = f"{response.text}\n{response.reason}"
            logger.warning(
                f"[GeminiClient.generate_content] | FAILED in {duration:.2f}ms | status={response.status_code}"
            )
            return ServiceResult.failure(error_from_status(response.status_code, message))

        try:
            data = response.json()
        except ValueError as e:
            logger.error(f"[GeminiClient.generate_content] | Invalid JSON in response: {e}")
            return ServiceResult.failure(ResultError.internal_server_error("Invalid JSON response from Gemini"))

        logger.info(f"[GeminiClient.generate_content] | COMPLETED in {duration:.2f}ms")
        return ServiceResult.success(data)
