"""
Contacts Importer: parses a CSV with a header row and creates one contact per valid row.
Rows without firstName, lastName or email are skipped and counted as errors;
a failed create is counted the same way and the batch keeps going.
"""

import csv
import io
import logging

from backoffice.exceptions import BackofficeError, ValidationError
from backoffice.models.base import BatchItemResult, BatchResult
from backoffice.models.contact import ContactForm, ContactStatus, ContactType
from backoffice.modules.backend import contacts as contacts_api

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ("firstName", "lastName", "email")

OPTIONAL_COLUMNS = {
    "phone": "phone",
    "company": "company",
    "position": "position",
    "address": "address",
    "city": "city",
    "state": "state",
    "zip": "zip",
    "country": "country",
    "notes": "notes",
    "source": "source",
    "assignedTo": "assigned_to",
}


def parse_contacts_csv(csv_bytes: bytes) -> list[dict]:
    """Return one dict per data row, keyed by header. Blank rows are ignored.

    Quoted values keep their embedded line breaks, blank ones included.
    """
    try:
        text = csv_bytes.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        logger.warning("Contacts CSV is not valid UTF-8: %s", e)
        raise ValidationError("El archivo CSV debe estar codificado en UTF-8.") from e

    reader = csv.DictReader(io.StringIO(text.lstrip()))
    rows = []
    try:
        for row in reader:
            cleaned = {(k or "").strip(): (v or "").strip() for k, v in row.items() if k is not None}
            if any(cleaned.values()):
                rows.append(cleaned)
    except csv.Error as e:
        logger.warning("Contacts CSV could not be parsed: %s", e)
        raise ValidationError("El archivo CSV no tiene el formato correcto.") from e

    if not reader.fieldnames or not rows:
        raise ValidationError("El archivo CSV está vacío o no tiene el formato correcto.")
    return rows


def row_to_contact(row: dict) -> ContactForm | None:
    """Map a CSV row onto a contact form, or None when a required column is empty."""
    if any(not row.get(col) for col in REQUIRED_COLUMNS):
        return None

    data = {
        "first_name": row["firstName"],
        "last_name": row["lastName"],
        "email": row["email"],
        "type": _enum_or_default(ContactType, row.get("type"), ContactType.PROSPECT),
        "status": _enum_or_default(ContactStatus, row.get("status"), ContactStatus.LEAD),
        "tags": [t.strip() for t in (row.get("tags") or "").split(",") if t.strip()],
    }
    for column, attr in OPTIONAL_COLUMNS.items():
        if row.get(column):
            data[attr] = row[column]
    data.setdefault("source", "csv")
    return ContactForm(**data)


async def import_contacts(csv_bytes: bytes) -> BatchResult:
    rows = parse_contacts_csv(csv_bytes)
    batch = BatchResult()

    for index, row in enumerate(rows, start=1):
        form = row_to_contact(row)
        if form is None:
            logger.warning("CSV row %d skipped, missing basic data: %s", index, row)
            batch.results.append(BatchItemResult(
                index=index, success=False,
                error="Faltan datos básicos (firstName, lastName, email)",
            ))
            continue
        try:
            created = await contacts_api.create_contact(form)
        except BackofficeError as e:
            logger.error("CSV row %d failed: %s", index, e)
            batch.results.append(BatchItemResult(index=index, success=False, error=str(e)))
            continue
        batch.results.append(BatchItemResult(index=index, success=True, item=created))

    logger.info("Contacts import: %d created, %d errors", batch.succeeded, batch.failed)
    return batch


def import_summary(batch: BatchResult) -> str:
    return (
        f"Importación completada. {batch.succeeded} contactos importados, "
        f"{batch.failed} errores."
    )


def _enum_or_default(enum_cls, raw: str | None, default):
    if not raw:
        return default
    try:
        return enum_cls(raw.strip().lower())
    except ValueError:
        return default
