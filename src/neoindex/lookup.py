from __future__ import annotations

from . import paths
from .errors import InvalidArgument
from .http import GraphDatabase
from .models import Entity, Index, ResultSet
from .responses import check_status, decode


class LookupEngine:
    """Exact key/value and query-language lookups against an index."""

    def __init__(self, db: GraphDatabase):
        self.db = db

    def find(self, index: Index, key: str, value: str) -> ResultSet:
        if not key or not value:
            raise InvalidArgument("exact lookups need both a key and a value")
        uri = paths.compose(index.location(), paths.quote_segment(key), paths.quote_segment(value))
        return self._fetch(index, uri, f"find {key}={value} in index {index.name!r}")

    def query(self, index: Index, query: str) -> ResultSet:
        """Run `query` in whatever syntax the index's provider understands."""
        uri = paths.with_query(paths.validate(index.location()), query=query)
        return self._fetch(index, uri, f"query index {index.name!r}")

    def _fetch(self, index: Index, uri: str, operation: str) -> ResultSet:
        r = self.db.request("GET", uri)
        check_status(r, {200}, operation)
        found: ResultSet = {}
        for entity in decode(r, list[Entity]):
            entity.kind = index.kind
            found[entity.id] = entity
        return found
