"""Helpers for reading raw ICD-11 API responses."""

import logging
from enum import Enum

from .exceptions import UnrecognizedEntityShapeError

logger = logging.getLogger(__name__)


class EntityKind(Enum):
    CATEGORY = "category"
    DIAGNOSIS = "diagnosis"
    SYMPTOM = "symptom"


def classify(response: dict) -> EntityKind:
    """
    Decide which kind of entity an MMS response describes.

    Order matters: anything with children is a category, even when it also
    carries a code. Leaves are symptoms when their code starts with "M"
    (chapter 21, symptoms and signs) and diagnoses otherwise.

    Example:
        >>> classify({"code": "MG24.01"})
        <EntityKind.SYMPTOM: 'symptom'>
    """
    if response.get("child"):
        kind = EntityKind.CATEGORY
    else:
        code = response.get("code")
        if not isinstance(code, str) or not code:
            raise UnrecognizedEntityShapeError(
                "Response has neither children nor a code",
                "classify",
                response.get("@id"),
            )
        kind = EntityKind.SYMPTOM if code.startswith("M") else EntityKind.DIAGNOSIS

    logger.debug("Classified %s as %s", response.get("@id", "<no id>"), kind.value)
    return kind


def get_title(response: dict) -> str:
    """Extract the display title (``title.@value``) from a response."""
    title = response.get("title")
    if isinstance(title, dict) and isinstance(title.get("@value"), str):
        return title["@value"]
    raise UnrecognizedEntityShapeError("Response has no title", "get_title", response.get("@id"))


def entity_id_from_uri(uri: str) -> str:
    """
    Extract the MMS entity id from an entity URI.

    Example:
        >>> entity_id_from_uri("http://id.who.int/icd/release/11/2024-01/mms/257068234")
        '257068234'
    """
    marker = "/mms/"
    idx = uri.find(marker)
    if idx == -1:
        raise UnrecognizedEntityShapeError("Not an MMS entity URI", "entity_id_from_uri", uri)
    return uri[idx + len(marker):].rstrip("/")


def release_from_uri(uri: str) -> str:
    """
    Extract the release name from a ``latestRelease`` URI.

    Example:
        >>> release_from_uri("http://id.who.int/icd/release/11/2024-01/mms")
        '2024-01'
    """
    marker = "/release/11/"
    idx = uri.find(marker)
    release = uri[idx + len(marker):] if idx != -1 else uri
    release = release.rstrip("/")
    if release.endswith("/mms"):
        release = release[: -len("/mms")]
    return release
