"""
Generative AI Interface
=======================

Contract for the outbound generative-AI collaborator.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict

from utils.service_base import ServiceResult


class GenerativeClientInterface(ABC):
    """
    Abstract interface for a generative model endpoint.

    Concrete implementations:
        - GeminiClient: Google Gemini ``generateContent`` REST API
    """

    @abstractmethod
    def generate_content(self, payload: Dict[str, Any]) -> ServiceResult[Dict[str, Any]]:
        """
        Send a ``{"contents": [{"parts": [...]}]}`` payload to the model.

        Returns:
            ServiceResult with the decoded JSON response, or a failure whose
            kind is derived from the upstream HTTP status
        """
        pass
