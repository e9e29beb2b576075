from marketplace.domain import Language


def request_language(request) -> Language:
    """Language resolved by LanguageMiddleware, Russian when absent."""
    language = getattr(request, "language", None)
    return language if isinstance(language, Language) else Language.from_code(None)
