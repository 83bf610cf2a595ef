"""Property type catalog API wrappers.

Types nest one level deep (parent -> child). Writes that would create a deeper
chain are rejected here, before the request leaves the process.
"""

import logging

from backoffice.exceptions import ValidationError
from backoffice.models.base import Page
from backoffice.models.property_type import PropertyType, PropertyTypeForm
from backoffice.modules.backend.client import normalize_page, page_of, parse_one, request

logger = logging.getLogger(__name__)


async def list_property_types() -> Page[PropertyType]:
    data = await request("GET", "/api/property-types", error_message="Error al cargar los tipos de propiedad")
    return normalize_page(data, PropertyType)


async def list_parent_types() -> Page[PropertyType]:
    """Only roots can be chosen as a parent."""
    roots = [t for t in (await list_property_types()).items if t.parent_id is None]
    return page_of(roots, PropertyType)


async def get_property_type(type_id) -> PropertyType:
    data = await request("GET", f"/api/property-types/{type_id}", error_message="Error al cargar el tipo de propiedad")
    return parse_one(data, PropertyType)


def check_parent(form: PropertyTypeForm, existing: list[PropertyType], type_id=None) -> None:
    """Raise ValidationError if `form.parent_id` would break single-level nesting."""
    if form.parent_id is None:
        return
    if type_id is not None and str(form.parent_id) == str(type_id):
        raise ValidationError("Un tipo de propiedad no puede ser su propio padre", field="parent_id")

    by_id = {str(t.id): t for t in existing}
    parent = by_id.get(str(form.parent_id))
    if parent is None:
        raise ValidationError(f"El tipo padre {form.parent_id} no existe", field="parent_id")
    if parent.parent_id is not None:
        raise ValidationError(
            f"'{parent.name}' ya es un subtipo; solo se admite un nivel de jerarquía",
            field="parent_id",
        )
    if type_id is not None and any(str(t.parent_id) == str(type_id) for t in existing):
        raise ValidationError(
            "Un tipo con subtipos no puede asignarse a otro padre",
            field="parent_id",
        )


async def create_property_type(form: PropertyTypeForm) -> PropertyType:
    if not form.name.strip():
        raise ValidationError("El nombre es requerido", field="name")
    if form.parent_id is not None:
        check_parent(form, (await list_property_types()).items)
    data = await request(
        "POST", "/api/property-types", json=form.to_payload(),
        error_message="Error al crear el tipo de propiedad",
    )
    logger.info("Property type created: %s (parent=%s)", form.name, form.parent_id)
    return parse_one(data, PropertyType)


async def update_property_type(type_id, form: PropertyTypeForm) -> PropertyType:
    if not form.name.strip():
        raise ValidationError("El nombre es requerido", field="name")
    if form.parent_id is not None:
        check_parent(form, (await list_property_types()).items, type_id=type_id)
    data = await request(
        "PUT", f"/api/property-types/{type_id}", json=form.to_payload(),
        error_message="Error al actualizar el tipo de propiedad",
    )
    return parse_one(data, PropertyType)


async def delete_property_type(type_id) -> None:
    await request("DELETE", f"/api/property-types/{type_id}", error_message="Error al eliminar el tipo de propiedad")
