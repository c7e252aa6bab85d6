"""Shared fixtures: an in-memory ICD-11 API served through a fake transport."""

import json
from dataclasses import dataclass

import pytest

from icd11_diagnoses import CLIENT_ID_KEY, CLIENT_SECRET_KEY, ICD11Client
from icd11_diagnoses.auth import TOKEN_URL
from icd11_diagnoses.transport import HttpResponse

BASE = "https://id.who.int/icd/"
RELEASE = "2024-01"
MMS = f"{BASE}release/11/{RELEASE}/mms"
URI = f"http://id.who.int/icd/release/11/{RELEASE}/mms/"


@dataclass
class SentRequest:
    method: str
    url: str
    headers: dict
    data: dict | None
    timeout: float


class FakeTransport:
    """Serves canned responses by (method, url, language) and records every request."""

    def __init__(self):
        self.routes = {}
        self.requests: list[SentRequest] = []

    def add(self, url, body, status=200, method="GET", language=None):
        self.routes[(method, url, language)] = (status, body)

    def send(self, method, url, headers, data=None, timeout=10.0):
        self.requests.append(SentRequest(method, url, dict(headers), data, timeout))
        language = headers.get("Accept-Language")
        route = self.routes.get((method, url, language)) or self.routes.get((method, url, None))
        if route is None:
            return HttpResponse(404, "")
        status, body = route
        if isinstance(body, Exception):
            raise body
        return HttpResponse(status, body if isinstance(body, str) else json.dumps(body))

    def gets(self):
        return [r for r in self.requests if r.method == "GET"]


def entity(title, code=None, children=None, entity_id=None):
    body = {"title": {"@language": "en", "@value": title}}
    if entity_id:
        body["@id"] = URI + entity_id
    if code is not None:
        body["code"] = code
    if children is not None:
        body["child"] = [URI + c for c in children]
    return body


@pytest.fixture
def transport():
    fake = FakeTransport()
    fake.add(TOKEN_URL, {"access_token": "test-token", "expires_in": 3600}, method="POST")
    fake.add(f"{BASE}release/11/mms", {"latestRelease": f"http://id.who.int/icd/release/11/{RELEASE}/mms"})

    # Root and chapters
    fake.add(MMS, {"child": [URI + "1435254666", URI + "1843895818"]})
    fake.add(f"{MMS}/1435254666", entity("Certain infectious or parasitic diseases", "01", ["588616678"]))
    fake.add(f"{MMS}/1843895818", entity("Symptoms, signs or clinical findings, not elsewhere classified",
                                         "21", ["1907420475"]))

    # 1A40 category and its children
    fake.add(f"{MMS}/588616678", entity("Gastroenteritis or colitis of infectious origin", children=["135352227"]))
    fake.add(f"{MMS}/135352227", entity("Gastroenteritis or colitis without specification of infectious agent",
                                        "1A40", ["1688127370", "1688127370/unspecified"]))
    fake.add(f"{MMS}/1688127370", entity("Gastroenteritis or colitis without specification of origin", "1A40.0"))
    fake.add(f"{MMS}/1688127370", {
        "code": "1A40.0",
        "title": {"@language": "ru", "@value": "Гастроэнтерит или колит неуточненного происхождения"},
    }, language="ru")
    fake.add(f"{MMS}/1688127370/unspecified",
             entity("Gastroenteritis or colitis without specification of infectious agent, unspecified", "1A40.Z"))

    # Fear of cancer: symptoms only
    fake.add(f"{MMS}/1907420475", entity("Fear of cancer", "MG24.0", ["1007537429", "1380563532"]))
    fake.add(f"{MMS}/1007537429", entity("Fear of breast cancer female", "MG24.01"))
    fake.add(f"{MMS}/1380563532", entity("Fear of breast cancer male", "MG24.02"))

    # A leaf entity fetched by title
    fake.add(f"{MMS}/30738976", entity("Viral intestinal infections", "1A2"))

    # Code info
    fake.add(f"{MMS}/codeinfo/1A40.0", {"code": "1A40.0", "stemId": URI + "1688127370"})
    fake.add(f"{MMS}/codeinfo/1A40.Z", {"code": "1A40.Z", "stemId": URI + "1688127370/unspecified"})
    fake.add(f"{MMS}/codeinfo/1A40", {"code": "1A40", "stemId": URI + "135352227"})
    fake.add(f"{MMS}/codeinfo/MG24.01", {"code": "MG24.01", "stemId": URI + "1007537429"})

    # Search
    fake.add(f"{MMS}/search?q=breast+cancer+fear", {
        "error": False,
        "destinationEntities": [
            {"id": URI + "1007537429", "stemId": URI + "1007537429", "theCode": "MG24.01"},
            {"id": URI + "1907420475", "stemId": URI + "1907420475", "theCode": "MG24.0"},
            {"id": URI + "1688127370", "stemId": URI + "1688127370", "theCode": "1A40.0"},
        ],
    })
    return fake


@pytest.fixture
def uninitialized_client(transport):
    client = ICD11Client(transport=transport)
    client.set_parameter(CLIENT_ID_KEY, "id")
    client.set_parameter(CLIENT_SECRET_KEY, "secret")
    return client


@pytest.fixture
def client(uninitialized_client, transport):
    uninitialized_client.initialize()
    transport.requests.clear()
    return uninitialized_client
