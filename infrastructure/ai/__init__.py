"""
Generative AI Layer
===================

Outbound client for the Gemini model API.
"""

from .gemini_client import GeminiClient, GeminiSettings
from .interface import GenerativeClientInterface

__all__ = ["GenerativeClientInterface", "GeminiClient", "GeminiSettings"]
