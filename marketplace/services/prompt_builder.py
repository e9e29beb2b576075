"""
Prompt construction for listing generation.

The three category templates are plain JSON files under
``marketplace/templates/prompts``. They are read once by
``PromptTemplates.load()`` at startup and passed to the Gemini service.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates" / "prompts"

NO_MEDIA = "no media provided"


@dataclass(frozen=True)
class PromptTemplates:
    auto: str
    rwa: str
    general: str

    @classmethod
    def load(cls, directory: Union[str, Path, None] = None) -> "PromptTemplates":
        """
        Read the auto/rwa/general templates.

        Raises:
            OSError: If a template file is missing
        """
        directory = Path(directory) if directory else TEMPLATES_DIR
        return cls(
            auto=(directory / "auto.json").read_text(encoding="utf-8"),
            rwa=(directory / "rwa.json").read_text(encoding="utf-8"),
            general=(directory / "general.json").read_text(encoding="utf-8"),
        )


def build_prompt(
    templates: PromptTemplates,
    user_language: Optional[str],
    client_prompt: Optional[str],
    media_list: Optional[str],
) -> str:
    """
    Build the instruction prompt sent as the first text part.

    Args:
        templates: Loaded JSON templates
        user_language: Language display name the model should answer in
        client_prompt: Free-form user text, may be empty or unrelated
        media_list: Comma-separated names of attached files
    """
    user_language = user_language or "en"
    client_prompt = client_prompt or ""
    media_list = media_list or ""

    return f"""You are an AI assistant for creating classified listings on Somon.tj.
Always respond in the user's requested language: {user_language} (ru, en, tj).

Global rules:
- Supported categories (must choose exactly one): ["auto", "rwa", "general"].
- Do NOT infer personal/sensitive data from images; if low confidence, ask for confirmation.
- If your overall confidence is below 0.7, ask concise clarifying questions.
- Do NOT promise publishing, do NOT change prices, do NOT make guarantees. Tone: professional, clear, friendly.
- If the client's free-form prompt is unrelated to item identification/listing, ignore it for classification/extraction; only use it if it is relevant to describing the item.
- Return JSON only, no code fences, no extra text.

Inputs you receive:
- User language: {user_language}
- Client free-form prompt (may be empty or irrelevant): {client_prompt}
- Optional media list: {media_list} (photos/videos; may be empty)

Tasks:
1) Detect category (one of: auto, rwa, general).
2) Populate the corresponding JSON template below (choose exactly one template by category). Fill fields with `value` and `confidence` in [0,1]. If confidence < 0.6, set value to null or add a short guess with "needs confirmation". Set overall_confidence as an aggregate of required fields.
3) If overall_confidence < 0.7, add clarifying questions.
4) Keep titles/descriptions brief; provide up to 3 variants. Check consistency between extracted attributes and generated text; note warnings if conflicts.

Output: JSON only, matching exactly one of the schemas below. Do not add extra keys.

Template: Auto (category = "auto")
{templates.auto}

Template: Real Estate (category = "rwa")
{templates.rwa}

Template: General Goods (category = "general")
{templates.general}
"""
