"""Small reference catalogs. Returned as raw dicts, only names and ids are consumed."""

from backoffice.modules.backend.client import extract_items, request


async def list_currencies() -> list[dict]:
    data = await request("GET", "/api/currencies", error_message="Error al cargar las monedas")
    return extract_items(data)


async def list_amenities() -> list[dict]:
    data = await request("GET", "/api/amenities", error_message="Error al cargar los amenities")
    return extract_items(data)


async def list_city_zones() -> list[dict]:
    data = await request("GET", "/api/city-zones", error_message="Error al cargar las zonas")
    return extract_items(data)


async def list_agencies() -> list[dict]:
    data = await request("GET", "/api/agencies", error_message="Error al cargar las agencias")
    return extract_items(data)
