"""Development reservations API wrappers.

A reservation is created under its development and then moves through
confirm, cancel or convert (into a sale) via dedicated action endpoints.
"""

import logging

from backoffice.models.base import Page
from backoffice.models.reservation import DevelopmentReservation, ReservationForm
from backoffice.modules.backend.client import normalize_page, parse_one, request

logger = logging.getLogger(__name__)

BASE_PATH = "/api/developments/reservations"


async def list_reservations() -> Page[DevelopmentReservation]:
    data = await request("GET", BASE_PATH, error_message="Error al cargar las reservas")
    return normalize_page(data, DevelopmentReservation)


async def list_reservations_by_development(development_id) -> Page[DevelopmentReservation]:
    data = await request(
        "GET", f"{BASE_PATH}/development/{development_id}",
        error_message="Error al cargar las reservas del desarrollo",
    )
    return normalize_page(data, DevelopmentReservation)


async def list_reservations_by_status(status: str) -> Page[DevelopmentReservation]:
    data = await request(
        "GET", f"{BASE_PATH}/status/{status.upper()}",
        error_message="Error al cargar las reservas por estado",
    )
    return normalize_page(data, DevelopmentReservation)


async def list_reservations_by_unit(unit_id) -> Page[DevelopmentReservation]:
    data = await request(
        "GET", f"{BASE_PATH}/unit/{unit_id}",
        error_message="Error al cargar las reservas de la unidad",
    )
    return normalize_page(data, DevelopmentReservation)


async def list_expired_reservations() -> Page[DevelopmentReservation]:
    data = await request("GET", f"{BASE_PATH}/expired", error_message="Error al cargar las reservas vencidas")
    return normalize_page(data, DevelopmentReservation)


async def get_reservation(reservation_id) -> DevelopmentReservation:
    data = await request("GET", f"{BASE_PATH}/{reservation_id}", error_message="Error al cargar la reserva")
    return parse_one(data, DevelopmentReservation)


async def create_reservation(form: ReservationForm) -> DevelopmentReservation:
    data = await request(
        "POST", f"{BASE_PATH}/development/{form.development_id}", json=form.to_payload(),
        error_message="Error al crear la reserva",
    )
    logger.info("Reservation %s created in development %s", form.reservation_number, form.development_id)
    return parse_one(data, DevelopmentReservation)


async def update_reservation(reservation_id, changes: dict) -> DevelopmentReservation:
    data = await request(
        "PUT", f"{BASE_PATH}/{reservation_id}", json=changes,
        error_message="Error al actualizar la reserva",
    )
    return parse_one(data, DevelopmentReservation)


async def delete_reservation(reservation_id) -> None:
    await request("DELETE", f"{BASE_PATH}/{reservation_id}", error_message="Error al eliminar la reserva")


# --- Lifecycle ---

async def confirm_reservation(reservation_id) -> DevelopmentReservation:
    data = await request(
        "POST", f"{BASE_PATH}/{reservation_id}/confirm",
        error_message="Error al confirmar la reserva",
    )
    logger.info("Reservation %s confirmed", reservation_id)
    return parse_one(data, DevelopmentReservation)


async def cancel_reservation(reservation_id, reason: str) -> DevelopmentReservation:
    data = await request(
        "POST", f"{BASE_PATH}/{reservation_id}/cancel", json={"reason": reason},
        error_message="Error al cancelar la reserva",
    )
    logger.info("Reservation %s cancelled: %s", reservation_id, reason)
    return parse_one(data, DevelopmentReservation)


async def convert_reservation(reservation_id) -> DevelopmentReservation:
    data = await request(
        "POST", f"{BASE_PATH}/{reservation_id}/convert",
        error_message="Error al convertir la reserva en venta",
    )
    logger.info("Reservation %s converted to sale", reservation_id)
    return parse_one(data, DevelopmentReservation)
