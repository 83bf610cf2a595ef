from backoffice.models.base import ApiModel, EntityId


class Country(ApiModel):
    id: EntityId
    name: str
    code: str | None = None


class City(ApiModel):
    id: EntityId
    name: str
    country_id: EntityId
    state: str | None = None
    active: bool = True


class Neighborhood(ApiModel):
    id: EntityId
    name: str
    description: str | None = None
    city_id: EntityId | None = None
