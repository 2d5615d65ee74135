"""Transports that carry requests built by ``AsanaClient`` over the wire.

The client never talks to the network itself. Anything with a
``send(request) -> response`` method can be injected, which is also the
place to attach authentication or custom status handling.
"""

import logging
from collections.abc import Callable
from typing import Protocol, runtime_checkable

import requests
from requests.auth import AuthBase

logger = logging.getLogger(__name__)


@runtime_checkable
class Transport(Protocol):
    def send(self, request: requests.Request) -> requests.Response: ...


class TransportFunc:
    """Adapt a plain callable into a ``Transport``."""

    def __init__(self, func: Callable[[requests.Request], requests.Response]):
        self.func = func

    def send(self, request: requests.Request) -> requests.Response:
        return self.func(request)


class SessionTransport:
    """Default transport backed by a ``requests.Session``.

    The request is prepared through the session, so session headers, cookies
    and ``auth`` apply to every call.
    """

    def __init__(self, session: requests.Session | None = None):
        self.session = session or requests.Session()

    def send(self, request: requests.Request) -> requests.Response:
        prepared = self.session.prepare_request(request)
        return self.session.send(prepared)

    def close(self) -> None:
        self.session.close()


class BearerAuth(AuthBase):
    """Attach an Asana personal access token or OAuth token."""

    def __init__(self, token: str):
        if not token:
            raise ValueError("An access token is required for bearer authentication")
        self.token = token

    def __call__(self, request: requests.PreparedRequest) -> requests.PreparedRequest:
        request.headers["Authorization"] = f"Bearer {self.token}"
        return request

    def __repr__(self) -> str:
        # Token is sensitive; never render it.
        return "BearerAuth(token=***)"


def build_session(access_token: str | None = None) -> requests.Session:
    session = requests.Session()
    if access_token:
        session.auth = BearerAuth(access_token)
        logger.debug("Configured bearer authentication on session")
    return session
