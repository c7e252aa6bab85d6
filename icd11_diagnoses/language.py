"""Languages and ICD versions known to the ICD-11 API."""

from enum import Enum

from .exceptions import UnsupportedLanguageError


class ICDLanguage(Enum):
    """Languages the ICD-11 API serves titles in, keyed by ISO 639 code."""

    ARABIC = "ar"
    CHINESE = "zh"
    CZECH = "cs"
    ENGLISH = "en"
    FRENCH = "fr"
    KAZAKH = "kk"
    PORTUGUESE = "pt"
    RUSSIAN = "ru"
    SLOVAK = "sk"
    SPANISH = "es"
    SWEDISH = "sv"
    TURKISH = "tr"
    UZBEK = "uz"

    @property
    def code(self) -> str:
        """ISO 639 code, as sent in the Accept-Language header."""
        return self.value

    @classmethod
    def by_code(cls, code: str) -> "ICDLanguage":
        """
        Look up a language by its ISO 639 code (case-insensitive).

        Example:
            >>> ICDLanguage.by_code("RU")
            <ICDLanguage.RUSSIAN: 'ru'>
        """
        wanted = code.strip().lower()
        for language in cls:
            if language.code == wanted:
                return language
        raise UnsupportedLanguageError(f"Unknown ICD language code: {code}", "by_code", code)

    def __str__(self) -> str:
        return self.code


class ICDVersion(Enum):
    """Revisions of the ICD a code can be expressed in."""

    ICD10 = "icd10"
    ICD11 = "icd11"
