"""Development quota (payment installment) API wrappers."""

import logging

from backoffice.models.base import Page
from backoffice.models.quota import DevelopmentQuota, PaymentForm, QuotaForm
from backoffice.modules.backend.client import normalize_page, parse_one, request

logger = logging.getLogger(__name__)


async def list_quotas() -> Page[DevelopmentQuota]:
    data = await request("GET", "/api/developments/quotas", error_message="Error al cargar las cuotas")
    return normalize_page(data, DevelopmentQuota)


async def list_quotas_by_development(development_id) -> Page[DevelopmentQuota]:
    data = await request(
        "GET", f"/api/developments/{development_id}/quotas",
        error_message="Error al cargar las cuotas del desarrollo",
    )
    return normalize_page(data, DevelopmentQuota)


async def list_quotas_by_unit(unit_id) -> Page[DevelopmentQuota]:
    data = await request(
        "GET", f"/api/developments/units/{unit_id}/quotas",
        error_message="Error al cargar las cuotas de la unidad",
    )
    return normalize_page(data, DevelopmentQuota)


async def list_overdue_quotas() -> Page[DevelopmentQuota]:
    data = await request("GET", "/api/developments/quotas/overdue", error_message="Error al cargar las cuotas vencidas")
    return normalize_page(data, DevelopmentQuota)


async def get_quota(quota_id) -> DevelopmentQuota:
    data = await request("GET", f"/api/developments/quotas/{quota_id}", error_message="Error al cargar la cuota")
    return parse_one(data, DevelopmentQuota)


async def create_quota(form: QuotaForm) -> DevelopmentQuota:
    data = await request(
        "POST", f"/api/developments/{form.development_id}/quotas", json=form.to_payload(),
        error_message="Error al crear la cuota",
    )
    logger.debug("Quota %s created for unit %s", form.quota_number, form.unit_id)
    return parse_one(data, DevelopmentQuota)


async def update_quota(quota_id, changes: dict) -> DevelopmentQuota:
    data = await request(
        "PUT", f"/api/developments/quotas/{quota_id}", json=changes,
        error_message="Error al actualizar la cuota",
    )
    return parse_one(data, DevelopmentQuota)


async def delete_quota(quota_id) -> None:
    await request("DELETE", f"/api/developments/quotas/{quota_id}", error_message="Error al eliminar la cuota")


async def record_payment(quota_id, payment: PaymentForm) -> DevelopmentQuota:
    data = await request(
        "POST", f"/api/developments/quotas/{quota_id}/payment", json=payment.to_payload(),
        error_message="Error al registrar el pago",
    )
    logger.info("Payment of %s recorded for quota %s", payment.amount, quota_id)
    return parse_one(data, DevelopmentQuota)
