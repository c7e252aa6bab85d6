"""HTTP transport used by the client."""

import json
import logging
from dataclasses import dataclass
from typing import Protocol

import requests

from .exceptions import RemoteError, TransportError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HttpResponse:
    status: int
    text: str

    def json(self) -> dict:
        """Parse the body as a JSON object."""
        # same parse as requests.Response.json(), kept here so any transport can produce it
        try:
            data = json.loads(self.text)
        except ValueError as e:
            raise RemoteError(f"Response is not valid JSON: {e}", status=self.status) from e
        if not isinstance(data, dict):
            raise RemoteError("Response is not a JSON object", status=self.status)
        return data


class Transport(Protocol):
    def send(self, method: str, url: str, headers: dict[str, str],
             data: dict[str, str] | None = None, timeout: float = 10.0) -> HttpResponse:
        ...


class RequestsTransport:
    """Transport backed by a ``requests.Session``."""

    def __init__(self, session: requests.Session | None = None):
        self.session = session or requests.Session()

    def send(self, method: str, url: str, headers: dict[str, str],
             data: dict[str, str] | None = None, timeout: float = 10.0) -> HttpResponse:
        logger.debug("%s %s", method, url)
        try:
            response = self.session.request(method, url, headers=headers, data=data, timeout=timeout)
        except requests.RequestException as e:
            raise TransportError(f"{method} {url} failed: {e}", subject=url) from e
        return HttpResponse(response.status_code, response.text)

    def close(self) -> None:
        self.session.close()
