"""Pluggable symptom suppliers and ICD code converters."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from .exceptions import NoProviderFoundError
from .language import ICDVersion

if TYPE_CHECKING:
    from .entities import Diagnosis, Symptom

logger = logging.getLogger(__name__)


class SymptomSupplier(ABC):
    """Knows the symptoms of some diagnoses."""

    @abstractmethod
    def can_process(self, diagnosis: Diagnosis) -> bool:
        ...

    @abstractmethod
    def process(self, diagnosis: Diagnosis) -> list[Symptom]:
        ...


class ICDCodeConverter(ABC):
    """Converts codes from one ICD version to another."""

    @abstractmethod
    def from_version(self) -> ICDVersion:
        ...

    @abstractmethod
    def to_version(self) -> ICDVersion:
        ...

    @abstractmethod
    def convert(self, code: str) -> str:
        ...


class ServiceRegistry:
    """
    Ordered collection of suppliers and converters.

    Lookups walk the providers in registration order and the first one that
    accepts the request wins.
    """

    def __init__(self, suppliers=None, converters=None):
        self.suppliers: list[SymptomSupplier] = list(suppliers or [])
        self.converters: list[ICDCodeConverter] = list(converters or [])

    def register_supplier(self, supplier: SymptomSupplier) -> None:
        self.suppliers.append(supplier)

    def register_converter(self, converter: ICDCodeConverter) -> None:
        self.converters.append(converter)

    def symptoms_for(self, diagnosis: Diagnosis) -> list[Symptom]:
        for supplier in self.suppliers:
            if supplier.can_process(diagnosis):
                logger.debug("Using %s for symptoms of %s", type(supplier).__name__, diagnosis.icd11_code)
                return list(supplier.process(diagnosis))
        raise NoProviderFoundError("No symptom supplier accepts this diagnosis", "get_symptoms", diagnosis.icd11_code)

    def convert(self, code: str, source: ICDVersion, target: ICDVersion) -> str:
        for converter in self.converters:
            if converter.from_version() == source and converter.to_version() == target:
                return converter.convert(code)
        raise NoProviderFoundError(
            f"No code converter registered for {source.name} -> {target.name}",
            "get_icd_code",
            code,
        )
