"""Domain entities built from ICD-11 API responses.

Every entity is titled in one "home" language. Asking for the title in
that language is a plain attribute read; asking for any other language
calls the translation function captured when the entity was built, which
goes back to the API.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable

from .exceptions import NoProviderFoundError, UnsupportedLanguageError
from .language import ICDLanguage, ICDVersion

if TYPE_CHECKING:
    from .client import ICD11Client
    from .services import ServiceRegistry


Translator = Callable[[ICDLanguage], str]


def reject_translation(language: ICDLanguage) -> str:
    """Translator for titles that may only be read in their home language."""
    raise UnsupportedLanguageError(
        "Title may only be read in its original language",
        "title",
        language.code,
    )


class Titled:
    """A title in a home language plus a way to get it in any other one."""

    __slots__ = ("_title", "_language", "_translate")

    def __init__(self, title: str, language: ICDLanguage, translate: Translator = reject_translation):
        self._title = title
        self._language = language
        self._translate = translate

    @property
    def language(self) -> ICDLanguage:
        return self._language

    def title(self, language: ICDLanguage | None = None) -> str:
        """
        Return the title in ``language``.

        With no language, or the home language, the stored title is returned
        without any network access. Other languages go through the
        translation function, which may hit the API and may fail.
        """
        if language is None or language == self._language:
            return self._title
        return self._translate(language)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(title={self._title!r}, language={self._language.code!r})"


class Category(Titled):
    """A grouping node of the ICD-11 hierarchy, addressed by its entity id."""

    __slots__ = ("_system_code",)

    def __init__(self, title: str, system_code: str, language: ICDLanguage, client: ICD11Client):
        super().__init__(
            title,
            language,
            lambda lang: client.get_title_by_entity_id(system_code, lang).title(lang),
        )
        self._system_code = system_code

    @property
    def system_code(self) -> str:
        return self._system_code

    def __eq__(self, other):
        if not isinstance(other, Category):
            return NotImplemented
        return self._system_code == other._system_code

    def __hash__(self):
        return hash(self._system_code)

    def __repr__(self) -> str:
        return f"Category(system_code={self._system_code!r}, title={self._title!r})"


class DiagnosisEntity(Titled):
    """Common base of diagnoses and symptoms: a titled ICD-11 code.

    Translation re-runs the full code lookup in the requested language and
    reads the home title of the fresh entity, so a translated title always
    belongs to an entity of the same code.
    """

    __slots__ = ("_icd11_code", "_services")

    def __init__(self, client: ICD11Client, language: ICDLanguage, icd11_code: str, title: str):
        super().__init__(
            title,
            language,
            lambda lang: client.get_by_icd11_code(icd11_code, lang).title(lang),
        )
        self._icd11_code = icd11_code
        self._services: ServiceRegistry | None = getattr(client, "services", None)

    @property
    def icd11_code(self) -> str:
        return self._icd11_code

    def get_icd_code(self, version: ICDVersion) -> str:
        """ICD code of this entity in ``version``, converting when needed."""
        if version == ICDVersion.ICD11:
            return self._icd11_code
        if self._services is None:
            raise NoProviderFoundError(
                f"No code converter registered for {ICDVersion.ICD11.name} -> {version.name}",
                "get_icd_code",
                self._icd11_code,
            )
        return self._services.convert(self._icd11_code, ICDVersion.ICD11, version)

    def __eq__(self, other):
        if not isinstance(other, DiagnosisEntity):
            return NotImplemented
        return type(self) is type(other) and self._icd11_code == other._icd11_code

    def __hash__(self):
        return hash(self._icd11_code)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(icd11_code={self._icd11_code!r})"


class Diagnosis(DiagnosisEntity):
    __slots__ = ()

    def get_symptoms(self) -> list[Symptom]:
        """Symptoms of this diagnosis, from the first supplier that accepts it."""
        if self._services is None:
            raise NoProviderFoundError("No symptom supplier registered", "get_symptoms", self._icd11_code)
        return self._services.symptoms_for(self)


class Symptom(DiagnosisEntity):
    __slots__ = ()
