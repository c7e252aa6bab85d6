"""HTTP client for the ICD-11 MMS linearization."""

import logging
from urllib.parse import quote, quote_plus

from .auth import fetch_token
from .classify import EntityKind, classify, entity_id_from_uri, get_title, release_from_uri
from .config import ClientConfig, load_credentials
from .entities import Category, Diagnosis, DiagnosisEntity, Symptom, Titled
from .exceptions import (
    AuthenticationError,
    ConfigurationError,
    NotCategoryError,
    NotFoundError,
    RemoteError,
    TransportError,
    UnrecognizedEntityShapeError,
)
from .language import ICDLanguage
from .services import ServiceRegistry
from .transport import RequestsTransport, Transport

logger = logging.getLogger(__name__)


# Keys for set_parameter()
CLIENT_ID_KEY = "CLIENT_ID"
CLIENT_SECRET_KEY = "CLIENT_SECRET"
CLIENT_TOKEN_KEY = "CLIENT_TOKEN"
LATEST_RELEASE_KEY = "LATEST_RELEASE_NAME"

Entity = Category | DiagnosisEntity


class ICD11Client:
    """
    Client that turns ICD-11 API responses into categories, diagnoses and symptoms.

    Set the credentials, call :meth:`initialize` once, then look entities up:

        >>> client = ICD11Client()
        >>> client.set_parameter(CLIENT_ID_KEY, "...")
        >>> client.set_parameter(CLIENT_SECRET_KEY, "...")
        >>> client.initialize()
        >>> client.get_by_icd11_code("1A40.0").title()
        'Gastroenteritis or colitis without specification of origin'

    Every lookup takes an optional language; without it the client's
    default language (see :meth:`set_language`) is used. Nothing is cached:
    each call goes to the API.
    """

    def __init__(self, config: ClientConfig | None = None, transport: Transport | None = None,
                 services: ServiceRegistry | None = None):
        self.config = config or ClientConfig()
        self.transport = transport or RequestsTransport()
        self.services = services or ServiceRegistry()
        self.language = self.config.language
        self._data: dict[str, str] = {}

    # ------------------------------------------------------------------
    # Parameters and lifecycle
    # ------------------------------------------------------------------

    def set_parameter(self, key: str, value: str) -> None:
        self._data[key] = value

    def get_parameter(self, key: str) -> str | None:
        return self._data.get(key)

    def set_language(self, language: ICDLanguage) -> None:
        """Set the language used when a lookup is given none."""
        self.language = language

    @property
    def release(self) -> str | None:
        """Name of the MMS release all queries are made against (e.g. "2024-01")."""
        return self._data.get(LATEST_RELEASE_KEY)

    def initialize(self) -> None:
        """
        Obtain an access token and resolve the latest MMS release.

        Client id and secret must have been set with :meth:`set_parameter`
        under :data:`CLIENT_ID_KEY` and :data:`CLIENT_SECRET_KEY`.
        """
        client_id = self._data.get(CLIENT_ID_KEY)
        client_secret = self._data.get(CLIENT_SECRET_KEY)
        if not client_id or not client_secret:
            raise ConfigurationError(
                "WHO API credentials were not given. Set CLIENT_ID_KEY and "
                "CLIENT_SECRET_KEY with set_parameter() first",
                "initialize",
            )

        token = fetch_token(
            self.transport,
            client_id,
            client_secret,
            token_url=self.config.token_url,
            timeout=self.config.timeout,
        )
        self.set_parameter(CLIENT_TOKEN_KEY, token)

        response = self._get("release/11/mms", self.language, "initialize")
        latest = response.get("latestRelease")
        if not latest:
            raise ConfigurationError("Release listing has no latestRelease", "initialize", "release/11/mms")
        release = release_from_uri(latest)
        self.set_parameter(LATEST_RELEASE_KEY, release)
        logger.info("Using ICD-11 MMS release %s", release)

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    def get_by_icd11_code(self, icd11_code: str, language: ICDLanguage | None = None) -> Entity:
        """
        Look up an entity by its ICD-11 code.

        The codeinfo endpoint points at the entity via ``stemId``; the entity
        itself is fetched from there.

        Example:
            >>> client.get_by_icd11_code("MG24.01")
            Symptom(icd11_code='MG24.01')
        """
        language = language or self.language
        operation = "get_by_icd11_code"

        code_info = self._get(self._mms_path(f"codeinfo/{quote(icd11_code, safe='/&')}"),
                              language, operation, icd11_code)
        stem_id = code_info.get("stemId")
        if not stem_id:
            raise UnrecognizedEntityShapeError("Code info has no stemId", operation, icd11_code)

        entity, _ = self._fetch_entity(entity_id_from_uri(stem_id), language, operation)
        return entity

    def get_parent_category_listing(self, language: ICDLanguage | None = None) -> list[tuple[Entity, str]]:
        """Top level of the MMS hierarchy (the chapters)."""
        return self.get_category_listing("", language)

    def get_category_listing(self, category: str, language: ICDLanguage | None = None) -> list[tuple[Entity, str]]:
        """
        Children of a category, as ``(entity, entity_id)`` pairs in API order.

        An empty category id means the root. Each child costs one more request.
        """
        language = language or self.language
        operation = "get_category_listing"

        response = self._get(self._mms_path(category), language, operation, category)
        if "child" not in response:
            raise NotCategoryError("Given entity is not a category", operation, category)

        return [
            self._fetch_entity(entity_id_from_uri(child_uri), language, operation)
            for child_uri in response["child"]
        ]

    def search(self, query: str, language: ICDLanguage | None = None) -> list[tuple[Entity, str]]:
        """
        Free-text search, as ``(entity, entity_id)`` pairs in relevance order.

        Example:
            >>> [e for e, _ in client.search("Bipolar type I disorder manic")][:1]
            [Diagnosis(icd11_code='6A60.1')]
        """
        language = language or self.language
        operation = "search"

        response = self._get(self._mms_path(f"search?q={quote_plus(query)}"), language, operation, query)
        destinations = response.get("destinationEntities")
        if destinations is None:
            raise UnrecognizedEntityShapeError("Search response has no destinationEntities", operation, query)

        results = []
        for destination in destinations:
            stem_id = destination.get("stemId")
            if not stem_id:
                raise UnrecognizedEntityShapeError("Search hit has no stemId", operation, query)
            results.append(self._fetch_entity(entity_id_from_uri(stem_id), language, operation))
        return results

    def get_title_by_entity_id(self, entity_id: str, language: ICDLanguage | None = None) -> Titled:
        """
        Title of an entity by its MMS id, in ``language`` only.

        The returned object refuses other languages; call again with the
        language you need.
        """
        language = language or self.language
        response = self._get(self._mms_path(entity_id), language, "get_title_by_entity_id", entity_id)
        return Titled(get_title(response), language)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _fetch_entity(self, entity_id: str, language: ICDLanguage, operation: str) -> tuple[Entity, str]:
        response = self._get(self._mms_path(entity_id), language, operation, entity_id)
        return self._materialize(response, entity_id, language), entity_id

    def _materialize(self, response: dict, entity_id: str, language: ICDLanguage) -> Entity:
        kind = classify(response)
        title = get_title(response)

        if kind is EntityKind.CATEGORY:
            return Category(title, entity_id, language, self)
        if kind is EntityKind.SYMPTOM:
            return Symptom(self, language, response["code"], title)
        return Diagnosis(self, language, response["code"], title)

    def _mms_path(self, entity: str) -> str:
        release = self._data.get(LATEST_RELEASE_KEY)
        if not release:
            raise AuthenticationError("Client is not initialized; call initialize() first", "request", entity)
        return f"release/11/{release}/mms" + (f"/{entity}" if entity else "")

    def _headers(self, language: ICDLanguage, operation: str, subject: str | None) -> dict[str, str]:
        token = self._data.get(CLIENT_TOKEN_KEY)
        if not token:
            raise AuthenticationError("No access token; call initialize() first", operation, subject)
        return {
            "Authorization": f"Bearer {token}",
            "Accept": "application/json",
            "Accept-Language": language.code,
            "API-Version": self.config.api_version,
        }

    def _get(self, path: str, language: ICDLanguage, operation: str, subject: str | None = None) -> dict:
        """Make GET request to ICD-11 API and return the JSON object."""
        url = f"{self.config.base_uri}{path}"
        headers = self._headers(language, operation, subject)

        logger.debug("GET %s [%s]", url, language.code)
        try:
            response = self.transport.send("GET", url, headers, timeout=self.config.timeout)
        except TransportError as e:
            raise TransportError(e.message, operation, subject) from e

        if response.status == 404:
            raise NotFoundError(f"ICD API has no {url}", operation, subject)
        if response.status == 401:
            raise AuthenticationError(f"ICD API rejected the access token: {response.text}", operation, subject)
        if response.status != 200:
            raise RemoteError(f"Error response from ICD API ({response.status}): {response.text}",
                              operation, subject, status=response.status)

        try:
            return response.json()
        except RemoteError as e:
            raise RemoteError(e.message, operation, subject, status=response.status) from e


# Global client instance
_client: ICD11Client | None = None


def get_client() -> ICD11Client:
    """Get or create an initialized client from config.toml and .env."""
    global _client
    if _client is None:
        client = ICD11Client(ClientConfig.from_file())
        client_id, client_secret = load_credentials()
        if client_id:
            client.set_parameter(CLIENT_ID_KEY, client_id)
        if client_secret:
            client.set_parameter(CLIENT_SECRET_KEY, client_secret)
        client.initialize()
        _client = client
    return _client
