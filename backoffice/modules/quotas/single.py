"""Single quota creation: validate, then exactly one create call."""

from backoffice.exceptions import ValidationError
from backoffice.models.quota import DevelopmentQuota, QuotaForm
from backoffice.modules.backend import quotas as quotas_api


def validate_quota(form: QuotaForm) -> None:
    if not form.development_id:
        raise ValidationError("Por favor selecciona un desarrollo", field="development_id")
    if not form.unit_id:
        raise ValidationError("Por favor selecciona una unidad", field="unit_id")
    if not form.quota_name.strip():
        raise ValidationError("El nombre de la cuota es requerido", field="quota_name")
    if form.amount <= 0:
        raise ValidationError("El monto debe ser mayor a 0", field="amount")
    if form.due_date is None:
        raise ValidationError("La fecha de vencimiento es requerida", field="due_date")


async def create_single_quota(form: QuotaForm) -> DevelopmentQuota:
    validate_quota(form)
    if not form.quota_number:
        form = form.model_copy(update={"quota_number": f"Q-{form.unit_id}-{form.due_date:%Y%m%d}"})
    return await quotas_api.create_quota(form)
