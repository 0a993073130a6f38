from __future__ import annotations

import logging

from . import paths
from .errors import InvalidArgument
from .http import GraphDatabase
from .models import EntityKind, Index, IndexResponse
from .responses import check_status, decode

logger = logging.getLogger(__name__)


def _require_name(name: str) -> str:
    if not name:
        raise InvalidArgument("index name must not be empty")
    return name


class IndexRegistry:
    """Creates, lists, fetches and deletes indexes on one database.

    Node and relationship indexes behave identically; they only live under
    different collection endpoints, selected by `kind`.
    """

    def __init__(self, db: GraphDatabase):
        self.db = db

    def create(
        self,
        name: str,
        index_type: str = "",
        provider: str = "",
        kind: EntityKind = EntityKind.NODE,
    ) -> Index:
        href = self.db.index_href(kind)
        self_uri = paths.compose(href, paths.segment(_require_name(name)))

        payload: dict = {"name": name}
        config = {k: v for k, v in (("type", index_type), ("provider", provider)) if v}
        if config:
            payload["config"] = config

        r = self.db.request("POST", href, json=payload)
        check_status(r, {201}, f"create {kind.value} index {name!r}")
        # The creation response has no self link; the index lives at <collection>/<name>.
        idx = Index.from_response(name, kind, href, self_uri, decode(r, IndexResponse))
        logger.info(f"Created {kind.value} index {name!r} at {self_uri}")
        return idx

    def list(self, kind: EntityKind = EntityKind.NODE) -> list[Index]:
        href = self.db.index_href(kind)
        r = self.db.request("GET", href)
        check_status(r, {200}, f"list {kind.value} indexes")
        found = decode(r, dict[str, IndexResponse])
        return [
            Index.from_response(name, kind, href, paths.compose(href, name), res)
            for name, res in found.items()
        ]

    def get(self, name: str, kind: EntityKind = EntityKind.NODE) -> Index:
        href = self.db.index_href(kind)
        uri = paths.compose(href, paths.segment(_require_name(name)))
        r = self.db.request("GET", uri)
        check_status(r, {200}, f"get {kind.value} index {name!r}", not_found=True)
        return Index.from_response(name, kind, href, uri, decode(r, IndexResponse))

    def delete(self, index: Index) -> None:
        uri = paths.validate(index.location())
        r = self.db.request("DELETE", uri)
        check_status(r, {204}, f"delete {index.kind.value} index {index.name!r}")
        logger.info(f"Deleted {index.kind.value} index {index.name!r}")

    # Kind-specific shortcuts

    def create_node_index(self, name: str, index_type: str = "", provider: str = "") -> Index:
        return self.create(name, index_type, provider, kind=EntityKind.NODE)

    def create_relationship_index(self, name: str, index_type: str = "", provider: str = "") -> Index:
        return self.create(name, index_type, provider, kind=EntityKind.RELATIONSHIP)

    def node_indexes(self) -> list[Index]:
        return self.list(EntityKind.NODE)

    def relationship_indexes(self) -> list[Index]:
        return self.list(EntityKind.RELATIONSHIP)

    def node_index(self, name: str) -> Index:
        return self.get(name, EntityKind.NODE)

    def relationship_index(self, name: str) -> Index:
        return self.get(name, EntityKind.RELATIONSHIP)
