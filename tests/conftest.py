"""Pytest configuration and fixtures for tests."""

import json
from typing import Any

import pytest
import requests

from asana_client import AsanaClient


def make_response(body: Any = None, status_code: int = 200) -> requests.Response:
    """Build a real ``requests.Response`` carrying ``body`` (JSON-encoded unless already str)."""
    response = requests.Response()
    response.status_code = status_code
    if body is None:
        body = ""
    if not isinstance(body, str):
        body = json.dumps(body)
    response._content = body.encode("utf-8")
    response.encoding = "utf-8"
    response.headers["Content-Type"] = "application/json"
    return response


class FakeTransport:
    """Records every request and answers with queued responses."""

    def __init__(self) -> None:
        self.requests: list[requests.Request] = []
        self.responses: list[requests.Response] = []

    def respond(self, body: Any = None, status_code: int = 200) -> None:
        self.responses.append(make_response(body, status_code))

    def send(self, request: requests.Request) -> requests.Response:
        self.requests.append(request)
        return self.responses.pop(0)

    @property
    def last(self) -> requests.PreparedRequest:
        return self.requests[-1].prepare()


@pytest.fixture
def transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture
def client(transport: FakeTransport) -> AsanaClient:
    api = AsanaClient(transport)
    api.base_url = "http://asana.test/"
    return api
