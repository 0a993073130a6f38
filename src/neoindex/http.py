from __future__ import annotations

import logging
from typing import Any

import httpx
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential, wait_random

from . import paths
from .errors import TransportError
from .models import EntityKind, ServiceRoot
from .responses import check_status, decode
from .settings import NeoIndexSettings, settings as default_settings

logger = logging.getLogger(__name__)


def default_timeout(cfg: NeoIndexSettings) -> httpx.Timeout:
    return httpx.Timeout(connect=cfg.connect_timeout_s, read=cfg.read_timeout_s, write=20.0, pool=10.0)


def default_limits(cfg: NeoIndexSettings) -> httpx.Limits:
    return httpx.Limits(max_connections=cfg.max_connections, max_keepalive_connections=20)


class HttpClientFactory:
    """Creates shared httpx clients with sane defaults.

    Keep one client per database handle; do not create per-request.
    """

    @staticmethod
    def client(cfg: NeoIndexSettings) -> httpx.Client:
        auth = None
        if cfg.username:
            auth = httpx.BasicAuth(cfg.username, cfg.password or "")
        return httpx.Client(
            headers={"Accept": "application/json"},
            auth=auth,
            timeout=default_timeout(cfg),
            limits=default_limits(cfg),
            follow_redirects=True,
        )


TransientHttpError = (httpx.TimeoutException, httpx.NetworkError, httpx.RemoteProtocolError)

# Failures where the request never reached the server; safe to resend any method.
UnsentHttpError = (httpx.ConnectError, httpx.ConnectTimeout)

IDEMPOTENT_METHODS = frozenset({"GET", "HEAD", "DELETE"})


def transient_retry(attempts: int, backoff_s: float = 0.5, errors: tuple = TransientHttpError):
    return retry(
        reraise=True,
        stop=stop_after_attempt(attempts),
        wait=wait_exponential(multiplier=backoff_s, max=10.0) + wait_random(0, backoff_s),
        retry=retry_if_exception_type(errors),
    )


class GraphDatabase:
    """Handle on one graph database server.

    Every index operation takes this handle explicitly. It owns the HTTP
    client (or borrows an injected one) and knows where the node and
    relationship index collections live.
    """

    def __init__(
        self,
        url: str | None = None,
        *,
        client: httpx.Client | None = None,
        cfg: NeoIndexSettings | None = None,
    ):
        self.cfg = cfg or default_settings
        self.url = paths.validate((url or self.cfg.url).rstrip("/"))
        self._owns_client = client is None
        self._client = client or HttpClientFactory.client(self.cfg)
        attempts, backoff = self.cfg.retry_attempts, self.cfg.retry_backoff_s
        self._send = transient_retry(attempts, backoff)(self._client.request)
        # Non-idempotent requests are only resent when they never left the client.
        self._send_write = transient_retry(attempts, backoff, UnsentHttpError)(self._client.request)
        self.version: str | None = None
        self.href_node_index = paths.compose(self.url, self.cfg.node_index_path)
        self.href_relationship_index = paths.compose(self.url, self.cfg.relationship_index_path)

    def __enter__(self) -> GraphDatabase:
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def connect(self) -> GraphDatabase:
        """Read the service root and pick up the advertised index collections."""
        r = self.request("GET", self.url)
        check_status(r, {200}, "service root")
        root = decode(r, ServiceRoot)
        if root.node_index:
            self.href_node_index = paths.validate(root.node_index)
        if root.relationship_index:
            self.href_relationship_index = paths.validate(root.relationship_index)
        self.version = root.neo4j_version
        logger.info(f"Connected to graph database at {self.url} (version {self.version or 'unknown'})")
        return self

    def index_href(self, kind: EntityKind) -> str:
        if kind is EntityKind.RELATIONSHIP:
            return self.href_relationship_index
        return self.href_node_index

    def request(self, method: str, url: str, json: Any = None) -> httpx.Response:
        logger.debug(f"{method} {url}")
        try:
            send = self._send if method.upper() in IDEMPOTENT_METHODS else self._send_write
            return send(method, url, json=json)
        except httpx.TransportError as e:
            logger.warning(f"{method} {url} failed: {e}")
            raise TransportError(f"{method} {url}: {e}") from e


