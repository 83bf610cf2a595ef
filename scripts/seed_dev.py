"""
Seed script: creates a demo development, its units, a reservation and a payment plan
through the REST backend.
Run: python -m scripts.seed_dev
"""

import asyncio
import sys
from datetime import date
from decimal import Decimal

from dotenv import load_dotenv

load_dotenv()

from backoffice.config import get_settings
from backoffice.exceptions import BackofficeError
from backoffice.models.development import DevelopmentForm, DevelopmentUnitForm
from backoffice.models.reservation import ReservationForm
from backoffice.modules import reservations
from backoffice.modules.backend import catalogs, developments, units
from backoffice.modules.quotas.plan import PlanConfig, generate_plan

DEVELOPMENT = {
    "title": "Torre Palermo",
    "description": "Edificio de 7 pisos con amenities",
    "address": "Av. Santa Fe 3200",
    "city": "Buenos Aires",
    "type": "edificio",
    "status": "available",
    "price": Decimal("827000"),
}

UNITS = [
    {"unit_number": "1A", "floor": 1, "bedrooms": 1, "area": 38, "price": 62000, "status": "AVAILABLE"},
    {"unit_number": "2B", "floor": 2, "bedrooms": 2, "area": 55, "price": 89000, "status": "AVAILABLE"},
    {"unit_number": "3A", "floor": 3, "bedrooms": 2, "area": 58, "price": 95000, "status": "AVAILABLE"},
    {"unit_number": "4C", "floor": 4, "bedrooms": 3, "area": 78, "price": 128000, "status": "AVAILABLE"},
    {"unit_number": "5A", "floor": 5, "bedrooms": 2, "area": 55, "price": 98000, "status": "RESERVED"},
    {"unit_number": "6B", "floor": 6, "bedrooms": 3, "area": 82, "price": 145000, "status": "AVAILABLE"},
    {"unit_number": "PH", "floor": 7, "bedrooms": 4, "area": 120, "price": 210000, "status": "AVAILABLE"},
]


async def seed():
    print(f"Seeding backend at {get_settings().api_base_url}")

    try:
        existing = await developments.list_developments(search=DEVELOPMENT["title"])
        if any(d.title == DEVELOPMENT["title"] for d in existing.items):
            print(f"Development '{DEVELOPMENT['title']}' already exists. Skipping seed.")
            return

        dev = await developments.create_development(DevelopmentForm(**DEVELOPMENT))
        print(f"Created development: {dev.title} (id={dev.id})")

        created_units = []
        for u in UNITS:
            unit = await units.create_unit(DevelopmentUnitForm(
                development_id=dev.id, type="DEPARTAMENTO", area_unit="m2", **u,
            ))
            created_units.append(unit)
        print(f"Created {len(created_units)} units")

        reserved = next(u for u in created_units if u.unit_number == "5A")
        reservation = await reservations.create_reservation(ReservationForm(
            development_id=dev.id,
            unit_id=reserved.id,
            client_name="Lucía Fernández",
            client_email="lucia@example.com",
            reservation_amount=Decimal("5000"),
            total_price=reserved.price or Decimal("0"),
        ))
        print(f"Created reservation {reservation.reservation_number}")

        currencies = await catalogs.list_currencies()
        if not currencies:
            print("No currencies configured, skipping payment plan.")
            return

        batch = await generate_plan(PlanConfig(
            development_id=dev.id,
            unit_id=reserved.id,
            currency_id=currencies[0]["id"],
            amount_type="total",
            amount=Decimal("93000"),
            installments=12,
            frequency="MONTHLY",
            first_due_date=date.today().replace(day=10),
        ))
        print(f"Payment plan: {batch.succeeded} quotas created, {batch.failed} failed")
    except BackofficeError as e:
        print(f"ERROR: {e}")
        sys.exit(1)

    print("\nSeed complete!")


if __name__ == "__main__":
    asyncio.run(seed())
