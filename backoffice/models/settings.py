from decimal import Decimal

from pydantic import Field

from backoffice.models.base import ApiModel


class CompanyInfo(ApiModel):
    name: str = ""
    address: str = ""
    phone: str = ""
    email: str = ""
    website: str = ""
    description: str = ""


class ContactSettings(ApiModel):
    id: str
    name: str = ""
    phone: str = ""
    email: str = ""
    position: str = ""


class FeaturedCriteria(ApiModel):
    min_amenities: int = 3
    min_rating: float = 4.0
    min_views: int = 100
    allowed_cities: list[str] = []
    property_types: list[str] = []


class PremiumCriteria(ApiModel):
    min_price: Decimal = Decimal("200000")
    min_area: float = 150.0
    premium_locations: list[str] = []
    luxury_amenities: list[str] = []


class FeaturedSettings(ApiModel):
    enabled: bool = True
    criteria: FeaturedCriteria = Field(default_factory=FeaturedCriteria)
    manual_selection: list[str] = []  # property ids pinned by hand


class PremiumSettings(ApiModel):
    enabled: bool = True
    criteria: PremiumCriteria = Field(default_factory=PremiumCriteria)
    manual_selection: list[str] = []


class PropertySettings(ApiModel):
    featured: FeaturedSettings = Field(default_factory=FeaturedSettings)
    premium: PremiumSettings = Field(default_factory=PremiumSettings)


class AppSettings(ApiModel):
    company_info: CompanyInfo = Field(default_factory=CompanyInfo)
    contacts: list[ContactSettings] = []
    property_settings: PropertySettings = Field(default_factory=PropertySettings)
