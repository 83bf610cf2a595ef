"""Single contact creation: same validate-then-create shape as quotas and reservations."""

from backoffice.exceptions import ValidationError
from backoffice.models.contact import Contact, ContactForm
from backoffice.modules.backend import contacts as contacts_api


def validate_contact(form: ContactForm) -> None:
    if not form.first_name.strip():
        raise ValidationError("El nombre es requerido", field="first_name")
    if not form.last_name.strip():
        raise ValidationError("El apellido es requerido", field="last_name")
    if not form.email.strip():
        raise ValidationError("El email es requerido", field="email")
    if "@" not in form.email:
        raise ValidationError("El email no es válido", field="email")


async def create_contact(form: ContactForm) -> Contact | None:
    validate_contact(form)
    return await contacts_api.create_contact(form)
