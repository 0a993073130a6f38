"""Status-code classification and body decoding shared by every operation."""

from __future__ import annotations

import logging
from collections.abc import Collection
from typing import Any

import httpx
from pydantic import TypeAdapter, ValidationError

from .errors import BadResponse, NotFound

logger = logging.getLogger(__name__)


def _error_body(r: httpx.Response) -> Any:
    if not r.content:
        return None
    try:
        return r.json()
    except ValueError:
        return r.text


def _describe(body: Any) -> str:
    # Neo4j error documents carry `message` and `exception`
    if isinstance(body, dict) and ("message" in body or "exception" in body):
        return f"{body.get('exception', '')}: {body.get('message', '')}".strip(": ")
    return repr(body)


def check_status(
    r: httpx.Response, expected: Collection[int], operation: str, *, not_found: bool = False
) -> None:
    if r.status_code in expected:
        return
    body = _error_body(r)
    logger.warning(f"{operation} failed: {r.request.method} {r.request.url} -> {r.status_code} {_describe(body)}")
    if not_found and r.status_code == 404:
        raise NotFound(f"{operation}: not found")
    raise BadResponse(r.status_code, body, f"{operation}: unexpected status {r.status_code}")


def decode(r: httpx.Response, model: Any) -> Any:
    """Validate the JSON body against `model` (a pydantic model or any type
    TypeAdapter understands, e.g. ``list[Entity]``).
    """
    try:
        return TypeAdapter(model).validate_json(r.content)
    except ValidationError as e:
        logger.warning(f"Malformed body from {r.request.url}: {e}")
        raise BadResponse(r.status_code, r.text, f"malformed response body: {e.error_count()} error(s)") from e
