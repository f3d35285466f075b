# src/habityzer_cli/api/relations.py

"""
Relation references as they travel over the wire.

On write, a relation is always an IRI string (/api/task_statuses/3).
On read, a collection view sends the IRI string while a detail view embeds the
related object, and a missing relation is neither. Model this as a tagged variant
instead of checking the runtime type at every call site.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Union

API_PREFIX = "/api"

TASKS = "tasks"
TASK_STATUSES = "task_statuses"
PROJECTS = "projects"


def to_iri(kind: str, id: Any) -> str:
    """Format the IRI of `id` in the `kind` collection (plural collection name)."""
    return f"{API_PREFIX}/{kind}/{id}"


@dataclass(frozen=True, slots=True)
class Absent:
    """The field is missing (or null): no relation at all."""


@dataclass(frozen=True, slots=True)
class Unresolved:
    """The relation arrived as a bare IRI string."""

    iri: str

    @property
    def id(self) -> str:
        return self.iri.rstrip("/").rsplit("/", 1)[-1]


@dataclass(frozen=True, slots=True)
class Resolved:
    """The relation arrived as an embedded object."""

    object: Any

    @property
    def name(self) -> str | None:
        if isinstance(self.object, Mapping):
            name = self.object.get("name")
            return None if name is None else str(name)
        return None


Relation = Union[Absent, Unresolved, Resolved]

ABSENT = Absent()


def resolve_relation(value: Any) -> Relation:
    if value is None:
        return ABSENT
    if isinstance(value, str):
        return Unresolved(value)
    return Resolved(value)


def relation_label(relation: Relation, *, unresolved_label: str, absent_label: str) -> str:
    """Human-readable label: the embedded name, else a placeholder for the variant."""
    if isinstance(relation, Resolved):
        return relation.name or absent_label
    if isinstance(relation, Unresolved):
        return unresolved_label
    return absent_label
