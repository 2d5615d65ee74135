"""Exceptions raised by the Asana client.

Transport failures (``requests.RequestException``), malformed JSON and
payloads that fail model validation are not wrapped; they reach the caller
as raised by ``requests`` and ``pydantic``.
"""

from collections.abc import Iterator


class AsanaError(Exception):
    """Base exception for errors defined by this library."""


class UnauthorizedError(AsanaError):
    """Raised when the API answers with HTTP 401."""

    def __init__(self, message: str = "asana: unauthorized"):
        super().__init__(message)


class ApiError(AsanaError):
    """A single error reported by the API inside the response envelope."""

    def __init__(self, phrase: str = "", message: str = ""):
        self.phrase = phrase
        self.message = message
        super().__init__(str(self))

    def __str__(self) -> str:
        return f"{self.message} - {self.phrase}"

    def __repr__(self) -> str:
        return f"ApiError(phrase={self.phrase!r}, message={self.message!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ApiError):
            return NotImplemented
        return (self.phrase, self.message) == (other.phrase, other.message)

    def __hash__(self) -> int:
        return hash((self.phrase, self.message))


class ApiErrors(AsanaError):
    """All errors from one response. Always holds at least one ``ApiError``."""

    def __init__(self, errors: list[ApiError]):
        if not errors:
            raise ValueError("ApiErrors requires at least one error")
        self.errors = list(errors)
        super().__init__(str(self))

    def __str__(self) -> str:
        return ", ".join(str(error) for error in self.errors)

    def __iter__(self) -> Iterator[ApiError]:
        return iter(self.errors)

    def __len__(self) -> int:
        return len(self.errors)

    @property
    def first(self) -> ApiError:
        return self.errors[0]
