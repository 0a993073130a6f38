from __future__ import annotations

import logging

from . import paths
from .errors import InvalidArgument
from .http import GraphDatabase
from .models import Entity, EntityRef, Index
from .responses import check_status

logger = logging.getLogger(__name__)


class EntryManager:
    """Adds and removes key/value entries pointing at entities in an index."""

    def __init__(self, db: GraphDatabase):
        self.db = db

    def add(self, index: Index, entity: EntityRef | Entity, key: str, value: str) -> None:
        uri = paths.validate(index.location())
        data = {"uri": entity.self_link, "key": key, "value": value}
        r = self.db.request("POST", uri, json=data)
        check_status(r, {201}, f"add entry {key}={value} to index {index.name!r}")
        logger.debug(f"Indexed {entity.self_link} under {key}={value} in {index.name!r}")

    def remove(self, index: Index, entity: EntityRef | Entity, key: str = "", value: str = "") -> None:
        """Remove the entity's entries from the index.

        With key and value only the matching entries go; with only a key every
        entry under that key goes; with neither every entry for the entity goes.
        A value without a key is rejected, since the value would be taken
        for a key.
        """
        if value and not key:
            raise InvalidArgument("cannot remove by value without a key")
        uri = index.location()
        if key:
            uri = paths.join(uri, paths.quote_segment(key), paths.quote_segment(value))
        uri = paths.compose(uri, str(entity.id))
        r = self.db.request("DELETE", uri)
        check_status(r, {204}, f"remove entity {entity.id} from index {index.name!r}")
