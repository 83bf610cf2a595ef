"""
Settings store: company info, contact list and listing curation criteria.

Callers get a store injected and only see load()/save(). The JSON file store is the
default backing; swapping in a backend-persisted table only means a new store class.
"""

import json
import logging
from pathlib import Path
from typing import Protocol

from backoffice.config import get_settings
from backoffice.exceptions import BackofficeError
from backoffice.models.base import Page
from backoffice.models.settings import (
    AppSettings,
    CompanyInfo,
    FeaturedCriteria,
    FeaturedSettings,
    PremiumCriteria,
    PremiumSettings,
    PropertySettings,
)
from backoffice.modules.backend import catalogs, locations, property_types

logger = logging.getLogger(__name__)


class SettingsStore(Protocol):
    def load(self) -> AppSettings | None:
        """Return the persisted settings, or None if nothing was saved yet."""
        ...

    def save(self, settings: AppSettings) -> None:
        ...


class JsonFileSettingsStore:
    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def load(self) -> AppSettings | None:
        if not self.path.exists():
            return None
        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
            return AppSettings.model_validate(raw)
        except ValueError as e:
            # pydantic.ValidationError is a ValueError too
            logger.warning("Settings file %s is corrupt, ignoring it: %s", self.path, e)
            return None

    def save(self, settings: AppSettings) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(settings.to_payload(), indent=2, ensure_ascii=False), encoding="utf-8")
        logger.info("Settings saved to %s", self.path)


class MemorySettingsStore:
    def __init__(self, settings: AppSettings | None = None) -> None:
        self._settings = settings

    def load(self) -> AppSettings | None:
        return self._settings.model_copy(deep=True) if self._settings else None

    def save(self, settings: AppSettings) -> None:
        self._settings = settings.model_copy(deep=True)


_store: SettingsStore | None = None


def get_store() -> SettingsStore:
    global _store
    if _store is None:
        _store = JsonFileSettingsStore(get_settings().settings_store_path)
    return _store


async def _names(source, label: str) -> list[str]:
    """Fetch a catalog and keep its names. A failing source yields an empty list."""
    try:
        result = await source()
    except BackofficeError as e:
        logger.warning("Could not load %s for default settings: %s", label, e)
        return []
    items = result.items if isinstance(result, Page) else result
    names = []
    for item in items:
        name = item.get("name") if isinstance(item, dict) else getattr(item, "name", None)
        if name:
            names.append(name)
    return names


async def _first_active_agency() -> dict | None:
    try:
        agencies = await catalogs.list_agencies()
    except BackofficeError as e:
        logger.warning("Could not load agencies for default settings: %s", e)
        return None
    for agency in agencies:
        if agency.get("active", True):
            return agency
    return None


async def _root_type_names() -> list[str]:
    try:
        types = await property_types.list_parent_types()
    except BackofficeError as e:
        logger.warning("Could not load property types for default settings: %s", e)
        return []
    return [t.name for t in types.items]


async def build_default_settings() -> AppSettings:
    cities = await _names(locations.list_cities, "cities")
    zones = await _names(catalogs.list_city_zones, "city zones")
    amenities = await _names(catalogs.list_amenities, "amenities")
    type_names = await _root_type_names()
    agency = await _first_active_agency()

    company = CompanyInfo()
    if agency:
        company = CompanyInfo(
            name=agency.get("name") or "",
            address=agency.get("address") or "",
            phone=agency.get("phone") or "",
            email=agency.get("email") or "",
            website=agency.get("website") or "",
            description=agency.get("description") or "",
        )

    return AppSettings(
        company_info=company,
        property_settings=PropertySettings(
            featured=FeaturedSettings(criteria=FeaturedCriteria(
                allowed_cities=cities[:5],
                property_types=type_names,
            )),
            premium=PremiumSettings(criteria=PremiumCriteria(
                premium_locations=zones,
                luxury_amenities=amenities,
            )),
        ),
    )


async def load_settings(store: SettingsStore) -> AppSettings:
    """Cached settings if present, otherwise backend-derived defaults (saved on first load)."""
    cached = store.load()
    if cached is not None:
        return cached
    defaults = await build_default_settings()
    store.save(defaults)
    return defaults


def save_settings(store: SettingsStore, settings: AppSettings) -> AppSettings:
    store.save(settings)
    return settings
