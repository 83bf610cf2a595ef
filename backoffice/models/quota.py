from datetime import date
from decimal import Decimal
from enum import Enum

from pydantic import field_validator

from backoffice.models.base import ApiModel, EntityId


class QuotaType(str, Enum):
    INITIAL = "INITIAL"
    MONTHLY = "MONTHLY"
    QUARTERLY = "QUARTERLY"
    ANNUAL = "ANNUAL"
    FINAL = "FINAL"
    SPECIAL = "SPECIAL"
    MAINTENANCE = "MAINTENANCE"
    INSURANCE = "INSURANCE"
    TAXES = "TAXES"


class QuotaStatus(str, Enum):
    PENDING = "PENDING"
    PAID = "PAID"
    OVERDUE = "OVERDUE"
    CANCELLED = "CANCELLED"
    PARTIAL = "PARTIAL"
    REFUNDED = "REFUNDED"


class QuotaForm(ApiModel):
    development_id: EntityId | None = None
    unit_id: EntityId | None = None
    quota_number: str = ""
    quota_name: str = ""
    type: QuotaType = QuotaType.INITIAL
    status: QuotaStatus = QuotaStatus.PENDING
    amount: Decimal = Decimal("0")
    paid_amount: Decimal = Decimal("0")
    discount_amount: Decimal = Decimal("0")
    currency_id: EntityId | None = None
    due_date: date | None = None
    installment_number: int = 1
    total_installments: int = 1
    description: str | None = None
    notes: str | None = None
    active: bool = True

    @field_validator("type", "status", mode="before")
    @classmethod
    def _uppercase(cls, value):
        if isinstance(value, str):
            return value.upper()
        return value


class DevelopmentQuota(QuotaForm):
    id: EntityId
    development_id: EntityId
    payment_date: date | None = None
    payment_method: str | None = None
    payment_reference: str | None = None

    @property
    def pending_amount(self) -> Decimal:
        return max(self.amount - self.paid_amount - self.discount_amount, Decimal("0"))


class PaymentForm(ApiModel):
    amount: Decimal
    payment_date: date
    payment_method: str | None = None
    payment_reference: str | None = None
    notes: str | None = None
