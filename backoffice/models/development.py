from datetime import datetime
from decimal import Decimal
from enum import Enum

from pydantic import field_validator, model_validator

from backoffice.models.base import ApiModel, EntityId


class DevelopmentType(str, Enum):
    LOTEAMIENTO = "loteamiento"
    EDIFICIO = "edificio"
    CONDOMINIO = "condominio"
    BARRIO_CERRADO = "barrio_cerrado"


class DevelopmentStatus(str, Enum):
    AVAILABLE = "available"
    SOLD = "sold"
    RESERVED = "reserved"
    RENTED = "rented"


DEVELOPMENT_TYPE_LABELS = {
    "loteamiento": "Loteamiento",
    "edificio": "Edificio",
    "condominio": "Condominio",
    "barrio_cerrado": "Barrio Cerrado",
}


class UnitType(str, Enum):
    LOT = "LOT"
    DEPARTAMENTO = "DEPARTAMENTO"
    HOUSE = "HOUSE"
    TOWNHOUSE = "TOWNHOUSE"
    DUPLEX = "DUPLEX"
    PENTHOUSE = "PENTHOUSE"
    STUDIO = "STUDIO"
    OFFICE = "OFFICE"
    COMMERCIAL = "COMMERCIAL"
    WAREHOUSE = "WAREHOUSE"
    PARKING = "PARKING"
    STORAGE = "STORAGE"


class UnitStatus(str, Enum):
    AVAILABLE = "AVAILABLE"
    RESERVED = "RESERVED"
    SOLD = "SOLD"
    UNDER_CONSTRUCTION = "UNDER_CONSTRUCTION"
    DELIVERED = "DELIVERED"
    RENTED = "RENTED"
    MAINTENANCE = "MAINTENANCE"
    UNAVAILABLE = "UNAVAILABLE"


class DevelopmentForm(ApiModel):
    title: str
    description: str | None = None
    address: str | None = None
    city: str | None = None
    type: DevelopmentType
    status: DevelopmentStatus = DevelopmentStatus.AVAILABLE
    price: Decimal | None = None
    currency_id: EntityId | None = None
    images: list[str] = []
    featured: bool = False
    premium: bool = False

    @field_validator("type", "status", mode="before")
    @classmethod
    def _lowercase(cls, value):
        # Backend enums travel UPPERCASE; the app works in lowercase
        if isinstance(value, str):
            return value.lower()
        return value


class Development(DevelopmentForm):
    id: EntityId
    currency: str | None = None
    views: int = 0
    favorites_count: int = 0
    created_at: datetime | None = None

    @model_validator(mode="before")
    @classmethod
    def _flatten_currency(cls, data):
        if isinstance(data, dict) and isinstance(data.get("currency"), dict):
            currency = data["currency"]
            data = dict(data)
            data["currency"] = currency.get("code") or currency.get("name") or ""
            if data.get("currencyId") is None and data.get("currency_id") is None:
                data["currencyId"] = currency.get("id")
        return data


class DevelopmentUnitForm(ApiModel):
    development_id: EntityId
    unit_number: str
    unit_name: str | None = None
    type: UnitType
    status: UnitStatus = UnitStatus.AVAILABLE
    price: Decimal | None = None
    discount_price: Decimal | None = None
    area: float | None = None
    area_unit: str | None = None  # m2, ha
    bedrooms: int | None = None
    bathrooms: int | None = None
    floor: int | None = None

    @field_validator("type", "status", mode="before")
    @classmethod
    def _uppercase(cls, value):
        if isinstance(value, str):
            return value.upper()
        return value

    @field_validator("unit_number", mode="before")
    @classmethod
    def _unit_number_as_text(cls, value):
        if isinstance(value, int):
            return str(value)
        return value


class DevelopmentUnit(DevelopmentUnitForm):
    id: EntityId
    views: int = 0
