"""
Installment-plan generator: expands one plan (amount, count, frequency, first due
date) into N quota records and creates them one at a time.

Creation is sequential and non-transactional. The first failing installment stops
the batch; installments already created stay created, later ones are never sent.
"""

import calendar
import logging
from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import Literal

from pydantic import field_validator

from backoffice.exceptions import BackofficeError, ValidationError
from backoffice.models.base import ApiModel, BatchItemResult, BatchResult, EntityId
from backoffice.models.quota import QuotaForm, QuotaStatus, QuotaType
from backoffice.modules.backend import quotas as quotas_api

logger = logging.getLogger(__name__)

PERIOD_MONTHS = {
    "MONTHLY": 1,
    "QUARTERLY": 3,
    "ANNUAL": 12,
}

CENT = Decimal("0.01")


class PlanConfig(ApiModel):
    development_id: EntityId | None = None
    unit_id: EntityId | None = None
    currency_id: EntityId | None = None
    amount_type: Literal["perInstallment", "total"] = "perInstallment"
    amount: Decimal = Decimal("0")
    installments: int = 1
    frequency: Literal["MONTHLY", "QUARTERLY", "ANNUAL"] = "MONTHLY"
    first_due_date: date | None = None
    description: str | None = None

    @field_validator("first_due_date", mode="before")
    @classmethod
    def _blank_date(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value


def validate_plan(config: PlanConfig) -> None:
    """Check every precondition. Raises before anything is sent to the backend."""
    if not config.development_id:
        raise ValidationError("Por favor selecciona un desarrollo", field="development_id")
    if not config.unit_id:
        raise ValidationError("Por favor selecciona una unidad", field="unit_id")
    if not config.currency_id:
        raise ValidationError("Por favor selecciona una moneda", field="currency_id")
    if config.first_due_date is None:
        raise ValidationError("Por favor ingresa la fecha del primer vencimiento", field="first_due_date")
    if config.installments < 1:
        raise ValidationError("La cantidad de cuotas debe ser al menos 1", field="installments")
    if config.amount <= 0:
        raise ValidationError("El monto debe ser mayor a 0", field="amount")


def add_months(start: date, months: int) -> date:
    """Calendar-month arithmetic. A day past the end of the target month clamps to its last day."""
    month_index = start.month - 1 + months
    year = start.year + month_index // 12
    month = month_index % 12 + 1
    day = min(start.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


def installment_amount(config: PlanConfig) -> Decimal:
    if config.amount_type == "total":
        return (config.amount / config.installments).quantize(CENT, rounding=ROUND_HALF_UP)
    return config.amount


def due_date_for(config: PlanConfig, number: int) -> date:
    """Due date of installment `number` (1-indexed)."""
    return add_months(config.first_due_date, (number - 1) * PERIOD_MONTHS[config.frequency])


def build_plan(config: PlanConfig) -> list[QuotaForm]:
    """Materialize the plan without touching the network."""
    validate_plan(config)
    total = config.installments
    quota_type = QuotaType(config.frequency)

    forms = []
    for i in range(1, total + 1):
        forms.append(QuotaForm(
            development_id=config.development_id,
            unit_id=config.unit_id,
            currency_id=config.currency_id,
            quota_number=f"PLAN-{i}/{total}",
            quota_name=f"Cuota {i} de {total}",
            type=quota_type,
            status=QuotaStatus.PENDING,
            amount=installment_amount(config),
            due_date=due_date_for(config, i),
            installment_number=i,
            total_installments=total,
            description=config.description,
            active=True,
        ))
    return forms


def preview(config: PlanConfig) -> dict:
    """Figures shown to the user before confirming the plan."""
    validate_plan(config)
    per_installment = installment_amount(config)
    return {
        "installments": config.installments,
        "installment_amount": per_installment,
        "total_amount": per_installment * config.installments,
        "first_due_date": config.first_due_date,
        "last_due_date": due_date_for(config, config.installments),
    }


async def generate_plan(config: PlanConfig) -> BatchResult:
    forms = build_plan(config)
    batch = BatchResult()

    for index, form in enumerate(forms, start=1):
        try:
            created = await quotas_api.create_quota(form)
        except BackofficeError as e:
            logger.error(
                "Plan for unit %s stopped at installment %d/%d: %s",
                config.unit_id, index, len(forms), e,
            )
            batch.results.append(BatchItemResult(index=index, success=False, error=str(e)))
            break
        batch.results.append(BatchItemResult(index=index, success=True, item=created))

    logger.info(
        "Plan for unit %s: %d of %d installments created",
        config.unit_id, batch.succeeded, len(forms),
    )
    return batch
