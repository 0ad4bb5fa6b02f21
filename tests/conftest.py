"""Pytest fixtures for the classification service tests."""

from __future__ import annotations

import json
import os
from typing import Callable

import httpx
import pytest

os.environ.setdefault("LOG_LEVEL", "DEBUG")

IMAGE_DATA = "data:image/jpeg;base64,/9j/4AAQSkZJRgABAQAAAQABAAD/2wBDAAgGBgcGBQgHBwcJCQgKDBQNDAsLDBkSEw8U"

METAL_REPLY = '{"type":"metal","confidence":0.88,"reasoning":"shiny surface"}'


def chat_completion(content) -> dict:
    """Upstream success body wrapping a single reply."""
    return {"choices": [{"message": {"role": "assistant", "content": content}}]}


class FakeGateway:
    """Records upstream requests and answers them with a fixed response."""

    def __init__(self, status_code: int = 200, body=None, text: str | None = None):
        self.status_code = status_code
        self.body = body
        self.text = text
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.text is not None:
            return httpx.Response(self.status_code, text=self.text)
        return httpx.Response(self.status_code, json=self.body)

    @property
    def payloads(self) -> list[dict]:
        return [json.loads(r.content) for r in self.requests]


@pytest.fixture
def image_data() -> str:
    return IMAGE_DATA


@pytest.fixture
def settings():
    from app.config import Settings

    return Settings(
        AI_GATEWAY_API_KEY="test-key",
        AI_GATEWAY_URL="https://gateway.test/v1/chat/completions",
        AI_MODEL="google/gemini-2.5-flash",
        AI_TIMEOUT_SECONDS=5.0,
    )


@pytest.fixture
def make_service(settings) -> Callable:
    """Build a ClassificationService whose upstream is a FakeGateway."""
    from app.services.classification_service import ClassificationService

    def _make(gateway: FakeGateway, service_settings=None):
        return ClassificationService(
            service_settings or settings,
            transport=httpx.MockTransport(gateway),
        )

    return _make


@pytest.fixture
def client():
    """TestClient with dependency overrides cleared after each test."""
    from fastapi.testclient import TestClient

    from app.main import app

    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
