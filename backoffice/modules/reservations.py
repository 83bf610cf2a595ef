"""
Reservations: a time-boxed hold on a unit. The hold length is a client-side default
applied when the request is composed; nothing expires reservations automatically.
"""

import logging
import secrets
from datetime import date, timedelta

from backoffice.config import get_settings
from backoffice.exceptions import ValidationError
from backoffice.models.reservation import DevelopmentReservation, ReservationForm
from backoffice.modules.backend import reservations as reservations_api

logger = logging.getLogger(__name__)


def default_expiration(reservation_date: date, days: int | None = None) -> date:
    if days is None:
        days = get_settings().reservation_default_days
    return reservation_date + timedelta(days=days)


def reservation_number(on: date) -> str:
    return f"RES-{on:%Y%m%d}-{secrets.token_hex(3).upper()}"


def build_reservation(form: ReservationForm, today: date | None = None) -> ReservationForm:
    """Fill in the dates and number the user left blank."""
    today = today or date.today()
    reservation_date = form.reservation_date or today
    return form.model_copy(update={
        "reservation_date": reservation_date,
        "expiration_date": form.expiration_date or default_expiration(reservation_date),
        "reservation_number": form.reservation_number or reservation_number(reservation_date),
    })


def validate_reservation(form: ReservationForm) -> None:
    if not form.development_id:
        raise ValidationError("Por favor selecciona un desarrollo", field="development_id")
    if not form.client_name.strip():
        raise ValidationError("El nombre del cliente es requerido", field="client_name")
    if not form.client_email.strip():
        raise ValidationError("El email del cliente es requerido", field="client_email")
    if form.reservation_amount <= 0:
        raise ValidationError("El monto de la reserva debe ser mayor a 0", field="reservation_amount")
    if (
        form.reservation_date and form.expiration_date
        and form.expiration_date < form.reservation_date
    ):
        raise ValidationError(
            "La fecha de vencimiento no puede ser anterior a la fecha de reserva",
            field="expiration_date",
        )


async def create_reservation(form: ReservationForm, today: date | None = None) -> DevelopmentReservation:
    form = build_reservation(form, today=today)
    validate_reservation(form)
    created = await reservations_api.create_reservation(form)
    logger.info(
        "Reservation %s created for %s (development %s, expires %s)",
        form.reservation_number, form.client_name, form.development_id, form.expiration_date,
    )
    return created
