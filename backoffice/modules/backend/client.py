"""
REST backend client: one shared request helper plus response-shape normalization.
Entity wrappers in this package build paths and payloads, and never touch httpx directly.
"""

import logging
from typing import Any, TypeVar

import httpx
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from backoffice.config import get_settings
from backoffice.exceptions import BackendError, NotFoundError
from backoffice.models.base import Page

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)

INVALID_RESPONSE_MESSAGE = "El servidor devolvió una respuesta vacía o inválida"


def get_http_client() -> httpx.AsyncClient:
    """Build a client bound to the configured backend base URL."""
    settings = get_settings()
    headers = {"Accept": "application/json"}
    if settings.api_token:
        headers["Authorization"] = f"Bearer {settings.api_token}"
    return httpx.AsyncClient(
        base_url=settings.api_base_url,
        timeout=settings.api_timeout_seconds,
        headers=headers,
    )


def clean_params(params: dict | None) -> dict:
    """Drop unset query parameters (None or empty string)."""
    if not params:
        return {}
    return {k: v for k, v in params.items() if v is not None and v != ""}


def extract_error_message(payload: Any, default: str) -> str:
    """Pick the most specific message the backend sent, else the generic one."""
    if isinstance(payload, str) and payload.strip():
        return payload.strip()
    if isinstance(payload, dict):
        for key in ("message", "error"):
            value = payload.get(key)
            if isinstance(value, str) and value:
                return value
    return default


async def request(
    method: str,
    path: str,
    *,
    error_message: str,
    json: Any = None,
    params: dict | None = None,
) -> Any:
    """Perform one backend call and return the decoded JSON body (None if empty)."""
    try:
        async with get_http_client() as client:
            response = await client.request(method, path, json=json, params=clean_params(params))
    except httpx.HTTPError as e:
        logger.error("Backend %s %s failed: %s", method, path, e)
        raise BackendError(error_message) from e

    payload = _decode(response)

    if response.is_error:
        logger.error(
            "Backend %s %s answered %s: %s",
            method, path, response.status_code, payload,
        )
        message = extract_error_message(payload, error_message)
        if response.status_code == 404:
            raise NotFoundError(message, status_code=404, payload=payload)
        raise BackendError(message, status_code=response.status_code, payload=payload)

    return payload


def _decode(response: httpx.Response) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text


def extract_items(data: Any) -> list:
    """Return the list of records whatever envelope the endpoint used."""
    if isinstance(data, list):
        return data
    if isinstance(data, dict):
        for key in ("content", "data", "items"):
            if isinstance(data.get(key), list):
                return data[key]
    return []


def normalize_page(data: Any, model: type[M]) -> Page[M]:
    """Normalize a bare array, a Spring page or a {data: [...]} envelope into a Page."""
    items = [model.model_validate(raw) for raw in extract_items(data)]

    if isinstance(data, dict) and "content" in data:
        size = data.get("size") or len(items)
        # Spring pages are zero-based
        page = (data.get("number") or 0) + 1
        return Page[model](
            items=items,
            total=data.get("totalElements", len(items)),
            page=page,
            page_size=size,
        )

    if isinstance(data, dict) and "data" in data:
        return Page[model](
            items=items,
            total=data.get("total", len(items)),
            page=data.get("page") or 1,
            page_size=data.get("size") or len(items),
        )

    return page_of(items, model)


def page_of(items: list[M], model: type[M]) -> Page[M]:
    """Wrap an already parsed list as a single page."""
    return Page[model](items=items, total=len(items), page=1, page_size=len(items))


def parse_one(data: Any, model: type[M]) -> M:
    """Validate a single-record body. An empty or malformed record is a backend failure."""
    if not isinstance(data, dict):
        logger.error("Backend returned no %s record: %r", model.__name__, data)
        raise BackendError(INVALID_RESPONSE_MESSAGE, payload=data)
    try:
        return model.model_validate(data)
    except PydanticValidationError as e:
        logger.error("Backend returned an invalid %s record: %s", model.__name__, e)
        raise BackendError(INVALID_RESPONSE_MESSAGE, payload=data) from e
