"""
Admin API: back-office endpoints for catalogs, units, quotas, reservations,
contact import, dashboards and company settings.
"""

import asyncio
import logging

from fastapi import APIRouter, Depends, File, Query, UploadFile

from backoffice.config import get_settings
from backoffice.exceptions import ValidationError
from backoffice.models.base import BatchResult
from backoffice.models.property_type import PropertyTypeForm
from backoffice.models.quota import QuotaForm
from backoffice.models.reservation import ReservationCancellation, ReservationForm
from backoffice.models.settings import AppSettings
from backoffice.modules import grouping, reservations, stats
from backoffice.modules.backend import developments as developments_api
from backoffice.modules.backend import property_types as property_types_api
from backoffice.modules.backend import quotas as quotas_api
from backoffice.modules.backend import reservations as reservations_api
from backoffice.modules.backend import units as units_api
from backoffice.modules.contacts.importer import import_contacts, import_summary
from backoffice.modules.quotas.plan import PlanConfig, build_plan, generate_plan, preview
from backoffice.modules.quotas.single import create_single_quota
from backoffice.modules.settings_store import SettingsStore, get_store, load_settings, save_settings

logger = logging.getLogger(__name__)

router = APIRouter()


def _batch_response(batch: BatchResult) -> dict:
    body = batch.summary()
    body["created"] = [r.item.to_payload() for r in batch.results if r.success and r.item is not None]
    return body


# --- Property types ---

@router.get("/property-types")
async def list_property_types(search: str = ""):
    """Property types ordered for display: parents, their children, then orphans."""
    page = await property_types_api.list_property_types()
    return [t.to_payload() for t in grouping.group_property_types(page.items, search)]


@router.post("/property-types", status_code=201)
async def create_property_type(form: PropertyTypeForm):
    created = await property_types_api.create_property_type(form)
    return created.to_payload()


# --- Units ---

@router.get("/units/grouped")
async def list_units_grouped(expanded: list[str] = Query(default=[])):
    """Units grouped per development. `expanded` lists the development ids shown open."""
    unit_page, development_page = await asyncio.gather(
        units_api.list_units(),
        developments_api.list_developments(),
    )
    state = grouping.ExpansionState(expanded=set(expanded))
    groups = grouping.group_units_by_development(unit_page.items, development_page.items, state)
    return [
        {
            "development_id": g.development_id,
            "title": g.title,
            "count": g.count,
            "expanded": g.expanded,
            "units": [u.to_payload() for u in g.units],
        }
        for g in groups
    ]


# --- Quotas ---

@router.post("/quotas", status_code=201)
async def create_quota(form: QuotaForm):
    created = await create_single_quota(form)
    return created.to_payload()


@router.post("/quotas/plan/preview")
async def preview_plan(config: PlanConfig):
    """Show the generated installments without creating anything."""
    return {
        "summary": preview(config),
        "quotas": [q.to_payload() for q in build_plan(config)],
    }


@router.post("/quotas/plan")
async def create_plan(config: PlanConfig):
    """Create every installment of a plan, one request at a time."""
    batch = await generate_plan(config)
    body = _batch_response(batch)
    body["requested"] = config.installments
    body["ok"] = batch.failed == 0
    if not body["ok"]:
        failure = next(r for r in batch.results if not r.success)
        body["error"] = (
            f"Se crearon {batch.succeeded} de {config.installments} cuotas. "
            f"Error en la cuota {failure.index}: {failure.error}"
        )
    return body


# --- Reservations ---

@router.post("/reservations", status_code=201)
async def create_reservation(form: ReservationForm):
    created = await reservations.create_reservation(form)
    return created.to_payload()


@router.post("/reservations/{reservation_id}/confirm")
async def confirm_reservation(reservation_id: str):
    return (await reservations_api.confirm_reservation(reservation_id)).to_payload()


@router.post("/reservations/{reservation_id}/cancel")
async def cancel_reservation(reservation_id: str, body: ReservationCancellation):
    if not body.reason.strip():
        raise ValidationError("Indicá el motivo de la cancelación", field="reason")
    return (await reservations_api.cancel_reservation(reservation_id, body.reason.strip())).to_payload()


@router.post("/reservations/{reservation_id}/convert")
async def convert_reservation(reservation_id: str):
    """Turn a confirmed reservation into a sale."""
    return (await reservations_api.convert_reservation(reservation_id)).to_payload()


# --- Contacts ---

@router.post("/contacts/import")
async def import_contacts_csv(csv_file: UploadFile = File(...)):
    """Create one contact per CSV row. Failed rows are counted, not fatal."""
    content = await csv_file.read()
    batch = await import_contacts(content)
    return {
        "message": import_summary(batch),
        "imported": batch.succeeded,
        "errors": batch.failed,
        "results": batch.summary()["results"],
    }


# --- Dashboards ---

@router.get("/dashboard/developments")
async def developments_dashboard():
    settings = get_settings()
    page = await developments_api.list_developments()
    developments = page.items

    recent = sorted(
        (d for d in developments if d.created_at is not None),
        key=lambda d: d.created_at,
        reverse=True,
    )[:5]
    performers = stats.top_performers(developments, "views", settings.top_performers_limit)

    return {
        "stats": stats.development_stats(developments, days=settings.recent_activity_days),
        "type_stats": stats.development_type_stats(developments),
        "recent": [d.to_payload() for d in recent],
        "top_performers": [d.to_payload() for d in performers],
    }


@router.get("/dashboard/units")
async def units_dashboard(development_id: str | None = None):
    if development_id:
        unit_page = await units_api.list_units_by_development(development_id)
    else:
        unit_page = await units_api.list_units()
    return stats.unit_stats(unit_page.items)


@router.get("/dashboard/quotas")
async def quotas_dashboard(development_id: str | None = None):
    if development_id:
        quota_page = await quotas_api.list_quotas_by_development(development_id)
    else:
        quota_page = await quotas_api.list_quotas()
    return stats.quota_stats(quota_page.items)


# --- Settings ---

@router.get("/settings")
async def get_app_settings(store: SettingsStore = Depends(get_store)):
    settings = await load_settings(store)
    return settings.to_payload()


@router.put("/settings")
async def put_app_settings(body: AppSettings, store: SettingsStore = Depends(get_store)):
    return save_settings(store, body).to_payload()
