"""Developments API wrappers."""

import logging

from backoffice.exceptions import BackendError
from backoffice.models.base import Page
from backoffice.models.development import Development, DevelopmentForm
from backoffice.modules.backend.client import normalize_page, parse_one, request

logger = logging.getLogger(__name__)


async def list_developments(
    page: int | None = None,
    size: int | None = None,
    search: str | None = None,
    type: str | None = None,
    status: str | None = None,
    city: str | None = None,
    min_price: float | None = None,
    max_price: float | None = None,
    featured: bool | None = None,
    premium: bool | None = None,
) -> Page[Development]:
    data = await request(
        "GET", "/api/developments",
        params={
            "page": page, "size": size, "search": search, "type": type,
            "status": status, "city": city, "minPrice": min_price,
            "maxPrice": max_price, "featured": featured, "premium": premium,
        },
        error_message="Error al cargar los desarrollos",
    )
    return normalize_page(data, Development)


async def get_development(development_id) -> Development:
    data = await request("GET", f"/api/developments/{development_id}", error_message="Error al obtener el desarrollo")
    return parse_one(data, Development)


async def list_developments_by_type(development_type: str) -> Page[Development]:
    data = await request(
        "GET", f"/api/developments/type/{development_type}",
        error_message="Error al obtener desarrollos por tipo",
    )
    return normalize_page(data, Development)


async def create_development(form: DevelopmentForm) -> Development:
    payload = form.to_payload()
    # backend enums are UPPERCASE
    payload["type"] = payload["type"].upper()
    payload["status"] = payload["status"].upper()
    data = await request("POST", "/api/developments", json=payload, error_message="Error al crear el desarrollo")
    logger.info("Development created: %s (%s)", form.title, form.type.value)
    return parse_one(data, Development)


async def update_development(development_id, changes: dict) -> Development:
    data = await request(
        "PUT", f"/api/developments/{development_id}", json=changes,
        error_message="Error al actualizar el desarrollo",
    )
    return parse_one(data, Development)


async def delete_development(development_id) -> None:
    await request("DELETE", f"/api/developments/{development_id}", error_message="Error al eliminar el desarrollo")


async def toggle_featured(development_id, featured: bool) -> Development:
    return await update_development(development_id, {"featured": featured})


async def toggle_premium(development_id, premium: bool) -> Development:
    return await update_development(development_id, {"premium": premium})


async def increment_views(development_id) -> None:
    """Best effort: a failed view counter must not interrupt the caller."""
    try:
        await request(
            "POST", f"/api/developments/{development_id}/views",
            error_message="Error al incrementar vistas",
        )
    except BackendError as e:
        logger.warning("Could not increment views for development %s: %s", development_id, e)
