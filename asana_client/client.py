import json
import logging
from functools import lru_cache
from http import HTTPStatus
from typing import Any, get_origin
from urllib.parse import urlencode, urljoin, urlsplit, urlunsplit

import requests
from pydantic import BaseModel, TypeAdapter

from .config import DEFAULT_BASE_URL, DEFAULT_USER_AGENT, AsanaSettings
from .errors import UnauthorizedError
from .models import ApiResponse, Filter, Project, Story, Tag, Task, TaskUpdate, User, Workspace
from .transport import SessionTransport, Transport, build_session

logger = logging.getLogger(__name__)

# Fields requested when the caller's filter selects none. Keyed by the exact
# resource path, so "tasks/123" gets no defaults.
DEFAULT_OPT_FIELDS: dict[str, tuple[str, ...]] = {
    "tags": ("name", "color", "notes"),
    "users": ("name", "email", "photo"),
    "projects": ("name", "color", "archived"),
    "workspaces": ("name", "is_organization"),
    "tasks": ("name", "assignee", "assignee_status", "completed", "parent"),
}


@lru_cache(maxsize=None)
def _adapter(model: Any) -> TypeAdapter[Any]:
    return TypeAdapter(model)


class AsanaClient:
    """Client for the Asana REST API.

    Every endpoint method funnels into ``_make_request``. Authentication is
    the transport's job: pass a transport whose session carries a token, or
    use ``create_authenticated_client``.
    """

    def __init__(
        self,
        transport: Transport | None = None,
        base_url: str = DEFAULT_BASE_URL,
        user_agent: str = DEFAULT_USER_AGENT,
    ):
        self._transport = transport if transport is not None else SessionTransport()
        self._user_agent = user_agent
        # Public and mutable so tests can point the client at a fake server.
        self.base_url = base_url

    @classmethod
    def from_settings(
        cls, settings: AsanaSettings | None = None, transport: Transport | None = None
    ) -> "AsanaClient":
        settings = settings or AsanaSettings()
        if transport is None:
            transport = SessionTransport(build_session(settings.access_token))
        return cls(transport, base_url=settings.base_url, user_agent=settings.user_agent)

    @property
    def transport(self) -> Transport:
        return self._transport

    @property
    def user_agent(self) -> str:
        return self._user_agent

    def close(self) -> None:
        close = getattr(self._transport, "close", None)
        if callable(close):
            close()

    def __enter__(self) -> "AsanaClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def list_workspaces(self, opt: Filter | None = None) -> list[Workspace]:
        return self._make_request("GET", "workspaces", list[Workspace], opt=opt)

    def list_users(self, opt: Filter | None = None) -> list[User]:
        return self._make_request("GET", "users", list[User], opt=opt)

    def list_projects(self, opt: Filter | None = None) -> list[Project]:
        return self._make_request("GET", "projects", list[Project], opt=opt)

    def list_tasks(self, opt: Filter | None = None) -> list[Task]:
        return self._make_request("GET", "tasks", list[Task], opt=opt)

    def get_task(self, task_id: str, opt: Filter | None = None) -> Task | None:
        return self._make_request("GET", f"tasks/{task_id}", Task, opt=opt)

    def update_task(
        self, task_id: str, update: TaskUpdate, opt: Filter | None = None
    ) -> Task | None:
        """Update a task. https://developers.asana.com/reference/updatetask"""
        return self._make_request("PUT", f"tasks/{task_id}", Task, data=update, opt=opt)

    def create_task(self, fields: dict[str, str], opt: Filter | None = None) -> Task | None:
        """Create a task from form fields. https://developers.asana.com/reference/createtask"""
        return self._make_request("POST", "tasks", Task, form=fields, opt=opt)

    def list_project_tasks(self, project_id: str, opt: Filter | None = None) -> list[Task]:
        return self._make_request("GET", f"projects/{project_id}/tasks", list[Task], opt=opt)

    def list_task_stories(self, task_id: str, opt: Filter | None = None) -> list[Story]:
        return self._make_request("GET", f"tasks/{task_id}/stories", list[Story], opt=opt)

    def list_tags(self, opt: Filter | None = None) -> list[Tag]:
        return self._make_request("GET", "tags", list[Tag], opt=opt)

    def get_authenticated_user(self, opt: Filter | None = None) -> User | None:
        return self._make_request("GET", "users/me", User, opt=opt)

    def get_user_by_id(self, user_id: str, opt: Filter | None = None) -> User | None:
        return self._make_request("GET", f"users/{user_id}", User, opt=opt)

    def request(self, path: str, opt: Filter | None = None, model: Any = None) -> Any:
        """GET any endpoint, decoding "data" into ``model`` when given."""
        return self._make_request("GET", path, model, opt=opt)

    def _make_request(
        self,
        method: str,
        path: str,
        model: Any = None,
        data: Any = None,
        form: dict[str, str] | None = None,
        opt: Filter | None = None,
    ) -> Any:
        """Send one request and decode the response envelope.

        Args:
            method: HTTP method
            path: Resource path relative to ``base_url``, e.g. "tasks/123"
            model: Type to validate the "data" payload into; raw JSON if None
            data: JSON payload, sent wrapped as {"data": ...}
            form: Form fields; ignored when ``data`` is given
            opt: Query filter; never modified

        Raises:
            UnauthorizedError: on HTTP 401
            ApiErrors: when the envelope carries a nonempty "errors" list
        """
        if opt is None:
            opt = Filter()
        if not opt.opt_fields:
            opt = opt.model_copy(update={"opt_fields": list(DEFAULT_OPT_FIELDS.get(path, ()))})

        url = self._build_url(path, opt)
        headers = {"User-Agent": self._user_agent, "Accept": "application/json"}
        body: bytes | str | None = None
        if data is not None:
            body = json.dumps({"data": _dump(data)}, separators=(",", ":")).encode("utf-8")
            headers["Content-Type"] = "application/json"
        elif form is not None:
            body = urlencode(form)
            headers["Content-Type"] = "application/x-www-form-urlencoded"

        request = requests.Request(method.upper(), url, headers=headers, data=body)
        logger.debug(f"{request.method} {url}")
        response = self._transport.send(request)
        logger.debug(f"Response status: {response.status_code}")

        if response.status_code == HTTPStatus.UNAUTHORIZED:
            raise UnauthorizedError()

        envelope = ApiResponse.from_json(response.json(), status_code=response.status_code)
        if not envelope.success:
            logger.warning(
                f"Asana reported {len(envelope.errors)} error(s) for {request.method} {path}"
            )
        envelope.raise_for_errors()
        return _decode(model, envelope.data)

    def _build_url(self, path: str, opt: Filter) -> str:
        parts = urlsplit(path)
        query = urlencode(sorted(opt.to_params().items()))
        relative = urlunsplit(("", "", parts.path, query, ""))
        base = self.base_url if self.base_url.endswith("/") else f"{self.base_url}/"
        return urljoin(base, relative)


def _dump(data: Any) -> Any:
    if isinstance(data, BaseModel):
        return data.model_dump(mode="json", by_alias=True, exclude_unset=True, exclude_none=True)
    return data


def _decode(model: Any, data: Any) -> Any:
    if model is None:
        return data
    if data is None:
        return [] if get_origin(model) is list else None
    return _adapter(model).validate_python(data)


def create_authenticated_client(
    access_token: str, base_url: str = DEFAULT_BASE_URL
) -> AsanaClient:
    """Build a client whose session sends ``access_token`` as a bearer token."""
    if not access_token:
        raise ValueError("access_token is required")
    logger.info(f"Creating Asana client for {base_url}")
    # Token is sensitive; do not log it.
    return AsanaClient(SessionTransport(build_session(access_token)), base_url=base_url)
