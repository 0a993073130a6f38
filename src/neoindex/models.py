from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .errors import UnresolvedIndex


class EntityKind(str, Enum):
    NODE = "node"
    RELATIONSHIP = "relationship"


def id_from_uri(uri: str) -> int:
    """Entity ids are the last path segment of their self link."""
    tail = uri.rstrip("/").rsplit("/", 1)[-1]
    if not tail.isdigit():
        raise ValueError(f"no entity id at the end of {uri!r}")
    return int(tail)


class IndexResponse(BaseModel):
    """Index descriptor as the server reports it.

    The server does not always populate provider, type and to_lower_case.
    """

    model_config = ConfigDict(extra="ignore")

    template: str = ""
    provider: str = ""
    type: str = ""
    to_lower_case: bool | str | None = None

    @field_validator("template", "provider", "type", mode="before")
    @classmethod
    def _none_as_blank(cls, v: Any) -> Any:
        return "" if v is None else v

    @property
    def lower_case(self) -> bool:
        return str(self.to_lower_case).lower() == "true"


class ServiceRoot(BaseModel):
    model_config = ConfigDict(extra="ignore")

    node_index: str | None = None
    relationship_index: str | None = None
    neo4j_version: str | None = None


class Entity(BaseModel):
    """A node or relationship representation returned by lookups."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    self_link: str = Field(alias="self")
    data: dict[str, Any] = Field(default_factory=dict)
    kind: EntityKind = EntityKind.NODE

    # Relationships only
    type: str | None = None
    start: str | None = None
    end: str | None = None

    @field_validator("self_link")
    @classmethod
    def _has_id(cls, v: str) -> str:
        id_from_uri(v)
        return v

    @property
    def id(self) -> int:
        return id_from_uri(self.self_link)

    def ref(self) -> EntityRef:
        return EntityRef(id=self.id, self_link=self.self_link)


ResultSet = dict[int, Entity]


@dataclass(frozen=True, slots=True)
class EntityRef:
    """Minimal handle for associating an entity with an index entry."""

    id: int
    self_link: str

    @classmethod
    def from_uri(cls, uri: str) -> EntityRef:
        return cls(id=id_from_uri(uri), self_link=uri)


@dataclass(frozen=True, slots=True)
class Index:
    """A named server-side index over one entity kind.

    `self_uri` is only set once the index has been created or fetched;
    until then the descriptor is only usable as input to create/get.
    """

    name: str
    kind: EntityKind
    base_uri: str
    self_uri: str | None = None
    uri_template: str = ""
    provider: str = ""
    index_type: str = ""
    case_sensitive: bool = True

    @property
    def resolved(self) -> bool:
        return self.self_uri is not None

    def location(self) -> str:
        if self.self_uri is None:
            raise UnresolvedIndex(f"index {self.name!r} has not been created or fetched")
        return self.self_uri

    @classmethod
    def from_response(
        cls, name: str, kind: EntityKind, base_uri: str, self_uri: str, res: IndexResponse
    ) -> Index:
        return cls(
            name=name,
            kind=kind,
            base_uri=base_uri,
            self_uri=self_uri,
            uri_template=res.template,
            provider=res.provider,
            index_type=res.type,
            case_sensitive=not res.lower_case,
        )
