import base64
from typing import Callable

import pytest
from fastapi.testclient import TestClient

from lidcore.config import Settings
from lidcore.language.index import ProfileIndex
from lidcore.main import create_app
from lidcore.service import LanguageIdentifierService


class StaticDetector:
    def detect(self, data: bytes):
        return [("cp1252", 80)]


@pytest.fixture
def client(bundled_index: ProfileIndex) -> TestClient:
    service = LanguageIdentifierService(
        index=bundled_index,
        settings=Settings(short_text_threshold=10),
        encoding_detector=StaticDetector(),
    )
    return TestClient(create_app(service))


def test_health(client: TestClient) -> None:
    assert client.get("/health").json() == {"status": "ok"}


def test_languages(client: TestClient) -> None:
    languages = client.get("/languages").json()["languages"]
    assert languages[:3] == ["da", "de", "en"]


def test_detect_language(client: TestClient, read_sample: Callable[[str], str]) -> None:
    response = client.post("/detect-language", json={"text": read_sample("pt")})
    assert response.status_code == 200
    assert response.json() == {"language_code": "pt"}


def test_detect_language_rejects_empty_text(client: TestClient) -> None:
    assert client.post("/detect-language", json={"text": ""}).status_code == 422


def test_detect_encoding(client: TestClient) -> None:
    payload = base64.b64encode("café crème brûlée".encode("cp1252")).decode("ascii")
    response = client.post("/detect-encoding", json={"content_base64": payload})
    assert response.status_code == 200
    assert response.json() == {"encoding": "windows-1252"}


def test_detect_encoding_short_content_uses_default(client: TestClient) -> None:
    payload = base64.b64encode(b"ab").decode("ascii")
    response = client.post(
        "/detect-encoding",
        json={"content_base64": payload, "default_encoding": "ISO-8859-15"},
    )
    assert response.json() == {"encoding": "iso-8859-15"}


def test_detect_encoding_rejects_invalid_base64(client: TestClient) -> None:
    response = client.post("/detect-encoding", json={"content_base64": "not base64!!"})
    assert response.status_code == 400
