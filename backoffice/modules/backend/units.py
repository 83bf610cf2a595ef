"""Development units API wrappers."""

import logging

from backoffice.models.base import Page
from backoffice.models.development import DevelopmentUnit, DevelopmentUnitForm
from backoffice.modules.backend.client import normalize_page, parse_one, request

logger = logging.getLogger(__name__)


async def list_units() -> Page[DevelopmentUnit]:
    data = await request("GET", "/api/developments/units", error_message="Error al cargar las unidades")
    return normalize_page(data, DevelopmentUnit)


async def list_units_by_development(development_id) -> Page[DevelopmentUnit]:
    data = await request(
        "GET", f"/api/developments/{development_id}/units",
        error_message="Error al cargar las unidades del desarrollo",
    )
    return normalize_page(data, DevelopmentUnit)


async def list_units_by_status(status: str) -> Page[DevelopmentUnit]:
    data = await request(
        "GET", f"/api/developments/units/status/{status.upper()}",
        error_message="Error al cargar las unidades por estado",
    )
    return normalize_page(data, DevelopmentUnit)


async def get_unit(unit_id) -> DevelopmentUnit:
    data = await request("GET", f"/api/developments/units/{unit_id}", error_message="Error al cargar la unidad")
    return parse_one(data, DevelopmentUnit)


async def create_unit(form: DevelopmentUnitForm) -> DevelopmentUnit:
    data = await request(
        "POST", f"/api/developments/{form.development_id}/units", json=form.to_payload(),
        error_message="Error al crear la unidad",
    )
    logger.info("Unit %s created in development %s", form.unit_number, form.development_id)
    return parse_one(data, DevelopmentUnit)


async def update_unit(unit_id, changes: dict) -> DevelopmentUnit:
    data = await request(
        "PUT", f"/api/developments/units/{unit_id}", json=changes,
        error_message="Error al actualizar la unidad",
    )
    return parse_one(data, DevelopmentUnit)


async def delete_unit(unit_id) -> None:
    await request("DELETE", f"/api/developments/units/{unit_id}", error_message="Error al eliminar la unidad")
