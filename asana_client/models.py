"""Typed records for the Asana API.

Records mirror the JSON the API returns. Every field is optional because the
API only sends the fields selected through ``opt_fields``.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from .errors import ApiError, ApiErrors


class Record(BaseModel):
    """Base class for resource records."""

    model_config = ConfigDict(
        populate_by_name=True,
        extra="ignore",
        coerce_numbers_to_str=True,
    )

    def to_dict(self) -> dict[str, Any]:
        """Serialize with API field names, leaving out absent fields."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True, exclude_defaults=True)


def _gid() -> Any:
    # Current payloads carry "gid"; older ones (and many fixtures) use a numeric "id".
    return Field(
        default=None,
        validation_alias=AliasChoices("gid", "id"),
        serialization_alias="gid",
    )


class Workspace(Record):
    id: str | None = _gid()
    name: str | None = None
    is_organization: bool = False


class User(Record):
    id: str | None = _gid()
    email: str | None = None
    name: str | None = None
    photo: dict[str, str | None] = Field(default_factory=dict)
    workspaces: list[Workspace] = Field(default_factory=list)


class Project(Record):
    id: str | None = _gid()
    name: str | None = None
    archived: bool = False
    color: str | None = None
    notes: str | None = None


class Heart(Record):
    """A heart (like) given by a user."""

    id: str | None = _gid()
    user: User | None = None


class Task(Record):
    id: str | None = _gid()
    assignee: User | None = None
    assignee_status: str | None = None
    created_at: datetime | None = None
    # Not documented by Asana, but returned when requested.
    created_by: User | None = None
    completed: bool = False
    name: str | None = None
    hearts: list[Heart] = Field(default_factory=list)
    notes: str | None = None
    parent: "Task | None" = None
    projects: list[Project] = Field(default_factory=list)
    due_on: str | None = None
    due_at: str | None = None


Task.model_rebuild()


class TaskUpdate(BaseModel):
    """Partial update for a task. Fields left as None are not sent."""

    notes: str | None = None
    hearted: bool | None = None

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json", exclude_none=True)


class Story(Record):
    id: str | None = _gid()
    created_at: datetime | None = None
    created_by: User | None = None
    hearts: list[Heart] = Field(default_factory=list)
    text: str | None = None
    type: str | None = None  # "comment", "system", ...


class Tag(Record):
    id: str | None = _gid()
    name: str | None = None
    color: str | None = None
    notes: str | None = None


class Filter(BaseModel):
    """Query parameters shared by the list and get endpoints.

    Field names are the wire names. Falsy values are left out of the query
    string and list values are joined with commas.
    """

    archived: bool = False
    assignee: str = ""
    project: str = ""
    workspace: str = ""
    completed_since: str | datetime = ""
    modified_since: str | datetime = ""
    opt_fields: list[str] = Field(default_factory=list)
    opt_expand: list[str] = Field(default_factory=list)

    def to_params(self) -> dict[str, str]:
        params: dict[str, str] = {}
        for name, value in self:
            if not value:
                continue
            if isinstance(value, bool):
                params[name] = "true"
            elif isinstance(value, datetime):
                params[name] = value.isoformat()
            elif isinstance(value, list):
                params[name] = ",".join(value)
            else:
                params[name] = str(value)
        return params


@dataclass
class ApiResponse:
    """Decoded response envelope: a payload under "data" or a list of "errors"."""

    data: Any | None = None
    errors: list[ApiError] = field(default_factory=list)
    status_code: int | None = None

    @property
    def success(self) -> bool:
        return not self.errors

    @classmethod
    def from_json(cls, payload: Any, status_code: int | None = None) -> "ApiResponse":
        if not isinstance(payload, dict):
            raise ValueError(
                f"Unexpected response body: expected JSON object, got {type(payload).__name__}"
            )
        errors = [
            ApiError(phrase=item.get("phrase") or "", message=item.get("message") or "")
            for item in payload.get("errors") or []
        ]
        return cls(data=payload.get("data"), errors=errors, status_code=status_code)

    def raise_for_errors(self) -> None:
        if self.errors:
            raise ApiErrors(self.errors)
