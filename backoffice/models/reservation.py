from datetime import date
from decimal import Decimal
from enum import Enum

from pydantic import field_validator

from backoffice.models.base import ApiModel, EntityId


class ReservationStatus(str, Enum):
    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    CANCELLED = "CANCELLED"
    EXPIRED = "EXPIRED"
    CONVERTED = "CONVERTED"
    REFUNDED = "REFUNDED"


class ReservationForm(ApiModel):
    development_id: EntityId | None = None
    unit_id: EntityId | None = None
    client_name: str = ""
    client_email: str = ""
    client_phone: str | None = None
    client_document: str | None = None
    status: ReservationStatus = ReservationStatus.PENDING
    reservation_amount: Decimal = Decimal("0")
    total_price: Decimal = Decimal("0")
    reservation_date: date | None = None
    expiration_date: date | None = None
    agent_name: str | None = None
    payment_method: str | None = None  # efectivo, transferencia, tarjeta
    payment_reference: str | None = None
    notes: str | None = None
    reservation_number: str | None = None
    active: bool = True

    @field_validator("status", mode="before")
    @classmethod
    def _uppercase(cls, value):
        if isinstance(value, str):
            return value.upper()
        return value


class DevelopmentReservation(ReservationForm):
    id: EntityId
    development_id: EntityId


class ReservationCancellation(ApiModel):
    reason: str
