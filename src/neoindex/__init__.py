"""Client binding for the index feature of a Neo4j-style REST graph server.

- `GraphDatabase`: the HTTP handle every operation is given explicitly
- `IndexRegistry`: create / list / get / delete indexes
- `EntryManager`: add and remove key/value entries for entities
- `LookupEngine`: exact-match and query-language lookups
"""

from .entries import EntryManager
from .errors import (
    BadResponse,
    InvalidArgument,
    InvalidPath,
    NeoIndexError,
    NotFound,
    TransportError,
    UnresolvedIndex,
)
from .http import GraphDatabase
from .lookup import LookupEngine
from .models import Entity, EntityKind, EntityRef, Index, ResultSet
from .registry import IndexRegistry

__version__ = "0.1.0"

__all__ = [
    "BadResponse",
    "Entity",
    "EntityKind",
    "EntityRef",
    "EntryManager",
    "GraphDatabase",
    "Index",
    "IndexRegistry",
    "InvalidArgument",
    "InvalidPath",
    "LookupEngine",
    "NeoIndexError",
    "NotFound",
    "ResultSet",
    "TransportError",
    "UnresolvedIndex",
]
