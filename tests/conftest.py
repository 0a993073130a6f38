"""In-memory stand-in for the server's index REST API, served through httpx.MockTransport."""

from __future__ import annotations

import json
from collections.abc import Iterator
from dataclasses import dataclass, field

import httpx
import pytest

from neoindex.http import GraphDatabase
from neoindex.models import EntityRef
from neoindex.settings import NeoIndexSettings

BASE = "http://neo.test/db/data"


def node_ref(node_id: int) -> EntityRef:
    return EntityRef(id=node_id, self_link=f"{BASE}/node/{node_id}")


@dataclass
class FakeIndex:
    config: dict
    entries: list[tuple[str, str, str]] = field(default_factory=list)  # key, value, uri


class FakeIndexServer:
    def __init__(self) -> None:
        self.indexes: dict[str, dict[str, FakeIndex]] = {"node": {}, "relationship": {}}
        self.requests: list[httpx.Request] = []
        self.advertise_indexes = True

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path.rstrip("/")
        if path == "/db/data":
            return self._service_root()
        prefix = "/db/data/index/"
        if not path.startswith(prefix):
            return self._error(404, f"no such resource {path}")
        kind, *rest = path[len(prefix):].split("/")
        if kind not in self.indexes:
            return self._error(404, f"no such index kind {kind}")
        if not rest:
            return self._collection(request, kind)
        name, *tail = rest
        idx = self.indexes[kind].get(name)
        if idx is None:
            return self._error(404, f"Index [{name}] not found")
        return self._index(request, kind, name, idx, tail)

    def _service_root(self) -> httpx.Response:
        body = {"neo4j_version": "1.9.M05", "node": f"{BASE}/node"}
        if self.advertise_indexes:
            body["node_index"] = f"{BASE}/index/node"
            body["relationship_index"] = f"{BASE}/index/relationship"
        return httpx.Response(200, json=body)

    def _collection(self, request: httpx.Request, kind: str) -> httpx.Response:
        if request.method == "POST":
            payload = json.loads(request.content)
            config = payload.get("config") or {}
            self.indexes[kind][payload["name"]] = FakeIndex(config=config)
            return httpx.Response(201, json=self._describe(kind, payload["name"], config))
        if request.method == "GET":
            return httpx.Response(
                200,
                json={name: self._describe(kind, name, idx.config) for name, idx in self.indexes[kind].items()},
            )
        return self._error(405, "method not allowed")

    def _index(
        self, request: httpx.Request, kind: str, name: str, idx: FakeIndex, tail: list[str]
    ) -> httpx.Response:
        if request.method == "GET" and not tail:
            query = request.url.params.get("query")
            if query is None:
                return httpx.Response(200, json=self._describe(kind, name, idx.config))
            key, _, value = query.partition(":")
            return self._entities(idx, key, value)
        if request.method == "GET" and len(tail) == 2:
            return self._entities(idx, tail[0], tail[1])
        if request.method == "DELETE" and not tail:
            del self.indexes[kind][name]
            return httpx.Response(204)
        if request.method == "POST" and not tail:
            payload = json.loads(request.content)
            idx.entries.append((payload["key"], payload["value"], payload["uri"]))
            return httpx.Response(201, json={"self": payload["uri"], "data": {}})
        if request.method == "DELETE":
            *pair, entity_id = tail
            before = len(idx.entries)
            idx.entries = [e for e in idx.entries if not self._matches(e, pair, entity_id)]
            if len(idx.entries) == before:
                return self._error(404, "no such entry")
            return httpx.Response(204)
        return self._error(405, "method not allowed")

    @staticmethod
    def _matches(entry: tuple[str, str, str], pair: list[str], entity_id: str) -> bool:
        key, value, uri = entry
        if not uri.endswith(f"/{entity_id}"):
            return False
        return list((key, value)[: len(pair)]) == pair

    @staticmethod
    def _entities(idx: FakeIndex, key: str, value: str) -> httpx.Response:
        hits = [uri for k, v, uri in idx.entries if k == key and v == value]
        return httpx.Response(200, json=[{"self": uri, "data": {"key": key, "value": value}} for uri in hits])

    @staticmethod
    def _describe(kind: str, name: str, config: dict) -> dict:
        body = {"template": f"{BASE}/index/{kind}/{name}/{{key}}/{{value}}"}
        if config.get("provider"):
            body["provider"] = config["provider"]
        if config.get("type"):
            body["type"] = config["type"]
            body["to_lower_case"] = "true" if config["type"] == "fulltext" else "false"
        return body

    @staticmethod
    def _error(status: int, message: str) -> httpx.Response:
        return httpx.Response(status, json={"message": message, "exception": "NotFoundException"})


@pytest.fixture
def server() -> FakeIndexServer:
    return FakeIndexServer()


@pytest.fixture
def cfg() -> NeoIndexSettings:
    return NeoIndexSettings(url=BASE, retry_attempts=1, retry_backoff_s=0)


@pytest.fixture
def db(server: FakeIndexServer, cfg: NeoIndexSettings) -> Iterator[GraphDatabase]:
    client = httpx.Client(transport=httpx.MockTransport(server))
    with GraphDatabase(client=client, cfg=cfg) as database:
        yield database.connect()
    client.close()
