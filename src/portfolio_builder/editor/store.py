"""Document store: the single live portfolio document and its field-level edits."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from portfolio_builder.errors import OutOfRangeError
from portfolio_builder.models.document import (
    Document,
    Project,
    Snapshot,
    copy_document,
    copy_value,
    normalize_document,
)

if TYPE_CHECKING:
    from collections.abc import Mapping

logger = logging.getLogger(__name__)


class DocumentStore:
    """Hold the live document and apply edits to it.

    Every edit method returns ``True`` when the document changed and ``False``
    for a no-op, so callers know whether to record a history snapshot.
    """

    def __init__(self, document: Mapping[str, Any] | None = None) -> None:
        self._document: Document = normalize_document(document or {})
        self._dirty = False
        self._revision = 0

    @property
    def document(self) -> Document:
        """A copy of the live document; edits must go through the store."""
        return copy_document(self._document)

    @property
    def dirty(self) -> bool:
        return self._dirty

    @property
    def revision(self) -> int:
        """Bumped on every change to the live document."""
        return self._revision

    def mark_clean(self, revision: int | None = None) -> None:
        """Clear the dirty flag, unless the document changed after ``revision``."""
        if revision is None or revision == self._revision:
            self._dirty = False

    def get(self, name: str, default: Any = None) -> Any:
        return copy_value(self._document.get(name, default))

    @property
    def skills(self) -> list[str]:
        skills = self._document.get("skills")
        return list(skills) if isinstance(skills, list) else []

    @property
    def projects(self) -> list[Project]:
        projects = self._document.get("projects")
        return list(projects) if isinstance(projects, list) else []

    def snapshot(self) -> Snapshot:
        return Snapshot(self._document)

    def set_field(self, name: str, value: Any) -> bool:
        new_value = copy_value(value)
        if name in self._document and self._document[name] == new_value:
            return False
        self._document[name] = new_value
        self._changed()
        return True

    def add_skill(self, value: str) -> bool:
        skill = value.strip()
        skills = self._list("skills")
        if not skill or skill in skills:
            logger.debug("Skill ignored - value=%r", value)
            return False
        skills.append(skill)
        self._changed()
        return True

    def remove_skill_at(self, index: int) -> str:
        return self._remove_at("skills", index)

    def add_project(self, title: str, link: str) -> bool:
        title, link = title.strip(), link.strip()
        if not title or not link:
            logger.debug("Project ignored - title=%r link=%r", title, link)
            return False
        self._list("projects").append(Project(title=title, link=link))
        self._changed()
        return True

    def remove_project_at(self, index: int) -> Project:
        return self._remove_at("projects", index)

    def replace_all(self, document: Mapping[str, Any]) -> None:
        """Replace the whole document with a copy of ``document``."""
        self._document = normalize_document(document)
        self._changed()

    def _list(self, name: str) -> list[Any]:
        items = self._document.get(name)
        if not isinstance(items, list):
            items = []
            self._document[name] = items
        return items

    def _remove_at(self, name: str, index: int) -> Any:
        items = self._list(name)
        if not 0 <= index < len(items):
            raise OutOfRangeError(name, index, len(items))
        removed = items.pop(index)
        self._changed()
        return removed

    def _changed(self) -> None:
        self._dirty = True
        self._revision += 1
