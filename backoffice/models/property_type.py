from backoffice.models.base import ApiModel, EntityId


class PropertyType(ApiModel):
    id: EntityId
    name: str
    description: str | None = None
    active: bool = True
    parent_id: EntityId | None = None
    parent_name: str | None = None


class PropertyTypeForm(ApiModel):
    name: str
    description: str | None = None
    active: bool = True
    parent_id: EntityId | None = None
