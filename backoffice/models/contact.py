from datetime import datetime
from enum import Enum

from backoffice.models.base import ApiModel, EntityId


class ContactType(str, Enum):
    CLIENT = "client"
    PROSPECT = "prospect"
    BUYER = "buyer"
    SELLER = "seller"
    OWNER = "owner"


class ContactStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    LEAD = "lead"
    QUALIFIED = "qualified"
    CONVERTED = "converted"


class Budget(ApiModel):
    min: float | None = None
    max: float | None = None
    currency: str | None = None


class AreaRange(ApiModel):
    min: float | None = None
    max: float | None = None


class Preferences(ApiModel):
    property_type: list[str] = []
    location: list[str] = []
    bedrooms: int | None = None
    bathrooms: int | None = None
    area: AreaRange | None = None


class ContactForm(ApiModel):
    first_name: str
    last_name: str
    email: str
    phone: str = ""
    type: ContactType = ContactType.PROSPECT
    status: ContactStatus = ContactStatus.LEAD
    company: str | None = None
    position: str | None = None
    address: str | None = None
    city: str | None = None
    state: str | None = None
    zip: str | None = None
    country: str | None = None
    notes: str | None = None
    source: str | None = None  # web, referido, csv, instagram...
    budget: Budget | None = None
    preferences: Preferences | None = None
    tags: list[str] = []
    assigned_to: str | None = None
    last_contact: datetime | None = None
    next_follow_up: datetime | None = None


class Contact(ContactForm):
    id: EntityId
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()
