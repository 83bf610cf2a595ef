"""
Contacts API wrappers.

The backend stores budget, preferences and tags as text columns, so those three
fields travel as JSON strings and are decoded back on every read.
"""

import json
import logging
from datetime import datetime, timezone

from backoffice.models.base import Page
from backoffice.models.contact import Contact, ContactForm
from backoffice.modules.backend.client import normalize_page, request

logger = logging.getLogger(__name__)

JSON_TEXT_FIELDS = ("budget", "preferences", "tags")


def encode_contact(payload: dict) -> dict:
    """Serialize the structured fields to JSON strings for transport."""
    encoded = dict(payload)
    for key in JSON_TEXT_FIELDS:
        if key in encoded and not isinstance(encoded[key], str):
            encoded[key] = json.dumps(encoded[key])
    return encoded


def decode_contact(raw: dict) -> dict:
    """Inverse of encode_contact. Malformed JSON is dropped, not raised."""
    decoded = dict(raw)
    for key in JSON_TEXT_FIELDS:
        value = decoded.get(key)
        if not isinstance(value, str):
            continue
        if not value.strip():
            decoded.pop(key)
            continue
        try:
            decoded[key] = json.loads(value)
        except ValueError:
            if key == "tags":
                # legacy rows keep tags comma separated
                decoded[key] = [t.strip() for t in value.split(",") if t.strip()]
            else:
                logger.warning("Contact %s has malformed %s: %r", raw.get("id"), key, value)
                decoded.pop(key)
    return decoded


def _decode_envelope(data):
    if isinstance(data, list):
        return [decode_contact(raw) for raw in data]
    if isinstance(data, dict):
        for key in ("content", "data"):
            if isinstance(data.get(key), list):
                return {**data, key: [decode_contact(raw) for raw in data[key]]}
    return data


def _to_contact(raw) -> Contact | None:
    if not raw:
        return None
    return Contact.model_validate(decode_contact(raw))


async def list_contacts(
    page: int | None = None,
    size: int | None = None,
    search: str | None = None,
    type: str | None = None,
    status: str | None = None,
    assigned_to: str | None = None,
) -> Page[Contact]:
    data = await request(
        "GET", "/api/contacts",
        params={
            "page": page, "size": size, "search": search,
            "type": type, "status": status, "assignedTo": assigned_to,
        },
        error_message="Error al cargar los contactos",
    )
    return normalize_page(_decode_envelope(data), Contact)


async def search_contacts(query: str) -> Page[Contact]:
    data = await request(
        "GET", "/api/contacts", params={"search": query},
        error_message="Error al buscar contactos",
    )
    return normalize_page(_decode_envelope(data), Contact)


async def get_contact(contact_id) -> Contact | None:
    data = await request("GET", f"/api/contacts/{contact_id}", error_message="Error al cargar el contacto")
    return _to_contact(data)


async def create_contact(form: ContactForm) -> Contact | None:
    data = await request(
        "POST", "/api/contacts", json=encode_contact(form.to_payload()),
        error_message="Error al crear el contacto",
    )
    logger.info("Contact created: %s %s", form.first_name, form.last_name)
    return _to_contact(data)


async def update_contact(contact_id, changes: dict) -> Contact | None:
    """Partial update. `changes` uses wire (camelCase) keys."""
    data = await request(
        "PUT", f"/api/contacts/{contact_id}", json=encode_contact(changes),
        error_message="Error al actualizar el contacto",
    )
    return _to_contact(data)


async def delete_contact(contact_id) -> bool:
    await request("DELETE", f"/api/contacts/{contact_id}", error_message="Error al eliminar el contacto")
    return True


async def update_contact_status(contact_id, status: str) -> Contact | None:
    return await update_contact(contact_id, {"status": status})


async def add_note(contact_id, note: str) -> Contact | None:
    return await update_contact(contact_id, {"notes": note})


async def schedule_follow_up(contact_id, follow_up: datetime) -> Contact | None:
    return await update_contact(contact_id, {"nextFollowUp": follow_up.isoformat()})


async def mark_as_contacted(contact_id, now: datetime | None = None) -> Contact | None:
    now = now or datetime.now(timezone.utc)
    return await update_contact(contact_id, {"lastContact": now.isoformat()})
