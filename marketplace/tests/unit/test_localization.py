import pytest

from marketplace.domain import DEFAULT_LANGUAGE, Language, LocalizedString


@pytest.mark.unit
class TestLanguage:
    @pytest.mark.parametrize(
        "code, expected",
        [
            ("ru", Language.RUSSIAN),
            ("tj", Language.TAJIK),
            ("en", Language.ENGLISH),
            ("EN", Language.ENGLISH),
            (" tj ", Language.TAJIK),
            ("tg", Language.TAJIK),
            ("en-US", Language.ENGLISH),
            ("ru_RU", Language.RUSSIAN),
            ("english", Language.ENGLISH),
            ("xx", Language.RUSSIAN),
            ("", Language.RUSSIAN),
            (None, Language.RUSSIAN),
        ],
    )
    def test_from_code(self, code, expected):
        assert Language.from_code(code) is expected

    def test_default_is_russian(self):
        assert DEFAULT_LANGUAGE is Language.RUSSIAN

    def test_codes_and_display_names(self):
        assert [lang.code for lang in Language] == ["ru", "tj", "en"]
        assert Language.TAJIK.display_name == "Тоҷикӣ"


@pytest.mark.unit
class TestLocalizedString:
    def test_get_returns_requested_language(self):
        text = LocalizedString(ru="Машина", tj="Мошин", en="Car")

        assert text.get(Language.RUSSIAN) == "Машина"
        assert text.get(Language.TAJIK) == "Мошин"
        assert text.get(Language.ENGLISH) == "Car"

    def test_empty_translation_falls_back_to_russian(self):
        text = LocalizedString(ru="Машина", tj="", en="")

        assert text.get(Language.ENGLISH) == "Машина"
        assert text.get(Language.TAJIK) == "Машина"

    def test_set(self):
        text = LocalizedString(ru="Машина")
        text.set(Language.ENGLISH, "Car")
        text.set(Language.TAJIK, None)

        assert text.en == "Car"
        assert text.tj == ""

    def test_document_conversion(self):
        text = LocalizedString.from_document({"ru": "Дом", "en": None})

        assert text == LocalizedString(ru="Дом", tj="", en="")
        assert text.to_document() == {"ru": "Дом", "tj": "", "en": ""}
        assert LocalizedString.from_document(None) == LocalizedString()
