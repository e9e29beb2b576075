"""
GeminiService - AI-assisted listing drafts

Validates the attached media, builds the listing prompt in the request
language and forwards everything to the generative model. The model's
JSON answer is returned verbatim as a string.
"""

import base64
import json
import logging
from pathlib import Path
from typing import Iterable, List, Optional

from infrastructure.ai import GenerativeClientInterface
from infrastructure.storage import StorageSettings, resolve_mime_type
from marketplace.domain import DEFAULT_LANGUAGE, Language

from .base import BaseService, ResultError, ServiceResult, service_err, service_ok
from .dtos import GeminiGenerateResponse
from .prompt_builder import NO_MEDIA, PromptTemplates, build_prompt


class GeminiService(BaseService):
    """
    Service proxying listing-generation requests to Gemini.

    Args:
        client: Generative model client
        storage_settings: Extension allow-lists and size limits
        templates: Prompt templates loaded at startup
        logger: Optional logger override
    """

    def __init__(
        self,
        client: GenerativeClientInterface,
        storage_settings: StorageSettings,
        templates: PromptTemplates,
        logger: Optional[logging.Logger] = None,
    ):
        super().__init__(logger)
        self.client = client
        self.storage_settings = storage_settings
        self.templates = templates

    @BaseService.log_performance
    def generate(
        self,
        client_prompt: Optional[str],
        files: Optional[Iterable] = None,
        language: Language = DEFAULT_LANGUAGE,
    ) -> ServiceResult[GeminiGenerateResponse]:
        """
        Send the prompt and media to the model.

        Returns:
            ServiceResult with GeminiGenerateResponse(raw_response), or
            UnsupportedMediaType / BadRequest for invalid files, or the
            upstream failure mapped to an ErrorKind
        """
        files = list(files or [])
        validation = self.validate_files(files)
        if not validation.ok:
            return service_err(validation.error)

        media_list = ", ".join(f.name for f in files) if files else NO_MEDIA
        prompt = build_prompt(self.templates, language.display_name, client_prompt or "", media_list)

        parts: List[dict] = [{"text": prompt}]
        try:
            for file in files:
                parts.append({"inline_data": {"mime_type": resolve_mime_type(file), "data": _read_base64(file)}})
        except OSError as e:
            self.logger.error(f"[generate] Failed to read uploaded file: {e}", exc_info=True)
            return service_err(ResultError.internal_server_error("Failed to read uploaded file"))

        self.logger.info(f"Sending prompt with {len(files)} media parts to Gemini")
        result = self.client.generate_content({"contents": [{"parts": parts}]})
        if not result.ok:
            return service_err(result.error)

        return service_ok(GeminiGenerateResponse(raw_response=json.dumps(result.value, ensure_ascii=False)))

    def validate_files(self, files: List) -> ServiceResult[bool]:
        """
        Check each file against the image/video allow-lists and size limits.

        The first invalid file decides the error.
        """
        for file in files:
            extension = Path(file.name or "").suffix.strip().lower()
            is_image = extension in self.storage_settings.allowed_image_extensions
            is_video = extension in self.storage_settings.allowed_video_extensions

            if not is_image and not is_video:
                return service_err(ResultError.unsupported_media_type(f"Extension not allowed: {extension}"))

            size_mb = file.size / 1024 / 1024
            if is_image and size_mb > self.storage_settings.max_image_size_mb:
                return service_err(ResultError.bad_request(f"Image too large: {file.name} ({size_mb:.1f} MB)"))
            if is_video and size_mb > self.storage_settings.max_video_size_mb:
                return service_err(ResultError.bad_request(f"Video too large: {file.name} ({size_mb:.1f} MB)"))

        return service_ok(True)


def _read_base64(file) -> str:
    if hasattr(file, "seek"):
        file.seek(0)
    if hasattr(file, "chunks"):
        content = b"".join(file.chunks())
    else:
        content = file.read()
    return base64.b64encode(content).decode("ascii")
