"""Location hierarchy wrappers: Country -> City -> Neighborhood."""

from backoffice.models.base import Page
from backoffice.models.location import City, Country, Neighborhood
from backoffice.modules.backend.client import normalize_page, page_of, parse_one, request


def country_code(name: str) -> str:
    return name.strip()[:2].upper()


# --- Countries ---

async def list_countries() -> Page[Country]:
    data = await request("GET", "/api/countries", error_message="Error al obtener países")
    return normalize_page(data, Country)


async def create_country(name: str) -> Country:
    data = await request(
        "POST", "/api/countries", json={"name": name, "code": country_code(name)},
        error_message="Error al crear país",
    )
    return parse_one(data, Country)


async def update_country(country_id, name: str) -> Country:
    data = await request(
        "PUT", f"/api/countries/{country_id}", json={"name": name, "code": country_code(name)},
        error_message="Error al actualizar país",
    )
    return parse_one(data, Country)


async def delete_country(country_id) -> None:
    await request("DELETE", f"/api/countries/{country_id}", error_message="Error al eliminar país")


# --- Cities ---

async def list_cities() -> Page[City]:
    data = await request("GET", "/api/cities", error_message="Error al obtener ciudades")
    return normalize_page(data, City)


async def list_cities_by_country(country_id) -> Page[City]:
    return [c for c in await list_cities() if str(c.country_id) == str(country_id)]


async def create_city(name: str, country_id) -> City:
    data = await request(
        "POST", "/api/cities", json={"name": name, "countryId": int(country_id), "active": True},
        error_message="Error al crear ciudad",
    )
    return parse_one(data, City)


async def update_city(city_id, name: str, country_id) -> City:
    data = await request(
        "PUT", f"/api/cities/{city_id}", json={"name": name, "countryId": int(country_id), "active": True},
        error_message="Error al actualizar ciudad",
    )
    return parse_one(data, City)


async def delete_city(city_id) -> None:
    await request("DELETE", f"/api/cities/{city_id}", error_message="Error al eliminar ciudad")


# --- Neighborhoods ---

async def list_neighborhoods() -> Page[Neighborhood]:
    data = await request("GET", "/api/neighborhoods", error_message="Error al obtener barrios")
    return normalize_page(data, Neighborhood)


async def list_neighborhoods_by_city(city_id) -> Page[Neighborhood]:
    return [n for n in await list_neighborhoods() if str(n.city_id) == str(city_id)]


async def create_neighborhood(name: str, city_id, description: str = "") -> Neighborhood:
    data = await request(
        "POST", "/api/neighborhoods",
        json={"name": name, "cityId": int(city_id), "description": description},
        error_message="Error al crear barrio",
    )
    return parse_one(data, Neighborhood)


async def update_neighborhood(neighborhood_id, name: str, city_id, description: str = "") -> Neighborhood:
    data = await request(
        "PUT", f"/api/neighborhoods/{neighborhood_id}",
        json={"name": name, "cityId": int(city_id), "description": description},
        error_message="Error al actualizar barrio",
    )
    return parse_one(data, Neighborhood)


async def delete_neighborhood(neighborhood_id) -> None:
    await request("DELETE", f"/api/neighborhoods/{neighborhood_id}", error_message="Error al eliminar barrio")
