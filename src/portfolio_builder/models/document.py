"""Portfolio document model: field defaults, the Project value and structural copies."""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from pydantic import BaseModel, ConfigDict

Document = dict[str, Any]

FIELD_DEFAULTS: Mapping[str, Any] = MappingProxyType(
    {
        "name": "",
        "role": "",
        "about": "",
        "skills": (),
        "projects": (),
        "image": "",
        "github": "",
        "linkedin": "",
        "theme": "adventure",
        "layout": "centered",
        "font": "Poppins",
    }
)

FIELD_NAMES: tuple[str, ...] = tuple(FIELD_DEFAULTS)
LIST_FIELDS = frozenset({"skills", "projects"})


class Project(BaseModel):
    """A portfolio project entry."""

    model_config = ConfigDict(frozen=True)

    title: str
    link: str


def copy_value(value: Any) -> Any:
    """Return a structurally independent copy of a document value.

    Only plain data is supported; anything else raises ``TypeError`` instead
    of being dropped on the way into a snapshot.
    """
    if value is None or isinstance(value, (str, int, float, bool, Project)):
        return value
    if isinstance(value, (list, tuple)):
        return [copy_value(item) for item in value]
    if isinstance(value, Mapping):
        return {str(key): copy_value(item) for key, item in value.items()}
    raise TypeError(f"Unsupported document value of type {type(value).__name__}")


def freeze_value(value: Any) -> Any:
    """Return a read-only copy of a document value (tuples and mapping proxies)."""
    if value is None or isinstance(value, (str, int, float, bool, Project)):
        return value
    if isinstance(value, (list, tuple)):
        return tuple(freeze_value(item) for item in value)
    if isinstance(value, Mapping):
        return MappingProxyType({str(key): freeze_value(item) for key, item in value.items()})
    raise TypeError(f"Unsupported document value of type {type(value).__name__}")


def copy_document(document: Mapping[str, Any]) -> Document:
    return {str(key): copy_value(value) for key, value in document.items()}


def default_document() -> Document:
    """Build a fresh document holding the default value for every known field."""
    return copy_document(FIELD_DEFAULTS)


def _coerce_project(value: Any) -> Any:
    if isinstance(value, Mapping) and "title" in value and "link" in value:
        return Project(title=str(value["title"]), link=str(value["link"]))
    return value


def normalize_document(data: Mapping[str, Any]) -> Document:
    """Copy ``data`` into a document, filling defaults and coercing project dicts.

    Unknown keys are kept as-is.
    """
    document = default_document()
    for key, value in data.items():
        document[str(key)] = copy_value(value)
    projects = document.get("projects")
    if isinstance(projects, list):
        document["projects"] = [_coerce_project(item) for item in projects]
    return document


def to_jsonable(value: Any) -> Any:
    """Convert a document value into JSON-compatible data."""
    if isinstance(value, Project):
        return value.model_dump()
    if isinstance(value, (list, tuple)):
        return [to_jsonable(item) for item in value]
    if isinstance(value, Mapping):
        return {str(key): to_jsonable(item) for key, item in value.items()}
    return value


class Snapshot:
    """An immutable copy of a document at one point in time."""

    __slots__ = ("_fields",)

    def __init__(self, document: Mapping[str, Any]) -> None:
        self._fields: Mapping[str, Any] = MappingProxyType(
            {str(key): freeze_value(value) for key, value in document.items()}
        )

    @property
    def fields(self) -> Mapping[str, Any]:
        return self._fields

    def __getitem__(self, key: str) -> Any:
        return self._fields[key]

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Snapshot):
            return self.to_document() == other.to_document()
        return NotImplemented

    def __repr__(self) -> str:
        return f"Snapshot({self.to_document()!r})"

    def to_document(self) -> Document:
        """Return a mutable copy of the snapshot that does not alias it."""
        return copy_document(self._fields)

    def to_json(self) -> dict[str, Any]:
        return to_jsonable(self._fields)
