"""Unit tests for transports."""

from unittest.mock import Mock, patch

import pytest
import requests
from conftest import make_response

from asana_client import BearerAuth, SessionTransport, Transport, TransportFunc


class TestTransportFunc:
    def test_delegates_to_callable(self) -> None:
        response = make_response({"data": []})
        func = Mock(return_value=response)
        request = requests.Request("GET", "http://asana.test/tags")

        transport = TransportFunc(func)

        assert isinstance(transport, Transport)
        assert transport.send(request) is response
        func.assert_called_once_with(request)


class TestSessionTransport:
    def test_default_session(self) -> None:
        transport = SessionTransport()
        assert isinstance(transport.session, requests.Session)

    def test_applies_session_settings(self) -> None:
        session = requests.Session()
        session.auth = BearerAuth("tok")
        session.headers["X-Custom"] = "1"
        transport = SessionTransport(session)

        with patch.object(session, "send") as mock_send:
            mock_send.return_value = make_response({"data": []})
            transport.send(requests.Request("GET", "http://asana.test/tags"))

        prepared = mock_send.call_args.args[0]
        assert prepared.headers["Authorization"] == "Bearer tok"
        assert prepared.headers["X-Custom"] == "1"

    def test_close(self) -> None:
        session = Mock()
        SessionTransport(session).close()
        session.close.assert_called_once()


class TestBearerAuth:
    def test_requires_token(self) -> None:
        with pytest.raises(ValueError):
            BearerAuth("")

    def test_repr_hides_token(self) -> None:
        assert "secret" not in repr(BearerAuth("secret"))
