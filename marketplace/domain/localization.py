"""
Localization primitives.

Content is stored in Russian, Tajik and English. Russian is the fallback for
unknown language codes and for empty translations.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

LANGUAGE_ALIASES = {
    "ru": "ru",
    "rus": "ru",
    "russian": "ru",
    "tj": "tj",
    "tg": "tj",
    "tajik": "tj",
    "тоҷикӣ": "tj",
    "en": "en",
    "eng": "en",
    "english": "en",
}


class Language(Enum):
    RUSSIAN = "ru"
    TAJIK = "tj"
    ENGLISH = "en"

    @property
    def code(self) -> str:
        return self.value

    @property
    def display_name(self) -> str:
        return {
            Language.RUSSIAN: "Русский",
            Language.TAJIK: "Тоҷикӣ",
            Language.ENGLISH: "English",
        }[self]

    @classmethod
    def from_code(cls, code: Optional[str]) -> "Language":
        """
        Resolve a language code, falling back to Russian.

        Accepts the aliases in LANGUAGE_ALIASES case-insensitively and
        tolerates region suffixes ("en-US", "ru_RU").

        Example:
            >>> Language.from_code("EN-us")
            <Language.ENGLISH: 'en'>
            >>> Language.from_code("xx")
            <Language.RUSSIAN: 'ru'>
        """
        if not code:
            return DEFAULT_LANGUAGE
        normalized = code.strip().lower()
        alias = LANGUAGE_ALIASES.get(normalized)
        if alias is None:
            alias = LANGUAGE_ALIASES.get(normalized.replace("_", "-").split("-")[0])
        return cls(alias) if alias else DEFAULT_LANGUAGE


DEFAULT_LANGUAGE = Language.RUSSIAN


@dataclass
class LocalizedString:
    """
    A text field stored in every supported language.

    Resolve a value with ``get(language)``; there is no implicit
    default-language conversion.
    """

    ru: str = ""
    tj: str = ""
    en: str = ""

    def get(self, language: Language) -> str:
        value = getattr(self, language.value, "")
        return value or self.ru

    def set(self, language: Language, value: str) -> None:
        setattr(self, language.value, value or "")

    @classmethod
    def from_document(cls, document: Optional[dict]) -> "LocalizedString":
        document = document or {}
        return cls(ru=document.get("ru") or "", tj=document.get("tj") or "", en=document.get("en") or "")

    def to_document(self) -> dict:
        return {"ru": self.ru, "tj": self.tj, "en": self.en}
