"""
ICD-11 Diagnoses

Typed access to the WHO ICD-11 API: categories, diagnoses and symptoms
with titles in any language the API serves.

Quick Start:
    from icd11_diagnoses import *

    client = ICD11Client()
    client.set_parameter(CLIENT_ID_KEY, "...")
    client.set_parameter(CLIENT_SECRET_KEY, "...")
    client.initialize()

    # Look up by code
    diagnosis = client.get_by_icd11_code("1A40.0")
    diagnosis.title()                        # home language, no request
    diagnosis.title(ICDLanguage.RUSSIAN)     # fetched on demand

    # Browse and search
    chapters = client.get_parent_category_listing()
    results = client.search("breast cancer")
"""

from .classify import EntityKind, classify
from .client import (
    CLIENT_ID_KEY,
    CLIENT_SECRET_KEY,
    CLIENT_TOKEN_KEY,
    LATEST_RELEASE_KEY,
    ICD11Client,
    get_client,
)
from .config import ClientConfig, load_config, load_credentials
from .entities import Category, Diagnosis, DiagnosisEntity, Symptom, Titled
from .exceptions import (
    AuthenticationError,
    ConfigurationError,
    DiagnosesSystemError,
    NoProviderFoundError,
    NotCategoryError,
    NotFoundError,
    RemoteError,
    TransportError,
    UnrecognizedEntityShapeError,
    UnsupportedLanguageError,
)
from .language import ICDLanguage, ICDVersion
from .services import ICDCodeConverter, ServiceRegistry, SymptomSupplier
from .transport import HttpResponse, RequestsTransport, Transport

__all__ = [
    # Client
    "ICD11Client",
    "get_client",
    "CLIENT_ID_KEY",
    "CLIENT_SECRET_KEY",
    "CLIENT_TOKEN_KEY",
    "LATEST_RELEASE_KEY",
    # Entities
    "Titled",
    "Category",
    "DiagnosisEntity",
    "Diagnosis",
    "Symptom",
    "EntityKind",
    "classify",
    "ICDLanguage",
    "ICDVersion",
    # Services
    "ServiceRegistry",
    "SymptomSupplier",
    "ICDCodeConverter",
    # Config
    "ClientConfig",
    "load_config",
    "load_credentials",
    # Transport
    "Transport",
    "RequestsTransport",
    "HttpResponse",
    # Errors
    "DiagnosesSystemError",
    "ConfigurationError",
    "AuthenticationError",
    "NotFoundError",
    "NotCategoryError",
    "UnrecognizedEntityShapeError",
    "UnsupportedLanguageError",
    "RemoteError",
    "TransportError",
    "NoProviderFoundError",
]
