"""Tests for the REST backend client and its entity wrappers."""

import asyncio
import json
from datetime import datetime, timezone

import httpx
import pytest

from backoffice.config import reload_settings
from backoffice.exceptions import BackendError, NotFoundError, ValidationError
from backoffice.models.contact import Contact
from backoffice.models.development import DevelopmentForm
from backoffice.models.property_type import PropertyType, PropertyTypeForm
from backoffice.models.quota import QuotaForm
from backoffice.modules.backend import (
    catalogs,
    client,
    contacts,
    developments,
    locations,
    property_types,
    quotas,
    units,
)


class TestNormalizePage:
    """Tests for list-shape normalization."""

    def test_bare_list(self, property_types_payload) -> None:
        page = client.normalize_page(property_types_payload, PropertyType)

        assert [t.name for t in page.items] == ["Casa", "Apartamento", "Terreno"]
        assert (page.total, page.page, page.page_size) == (3, 1, 3)

    def test_spring_page_is_one_based(self, property_types_payload) -> None:
        data = {"content": property_types_payload[:2], "totalElements": 12, "number": 2, "size": 2}

        page = client.normalize_page(data, PropertyType)

        assert len(page.items) == 2
        assert (page.total, page.page, page.page_size) == (12, 3, 2)

    def test_data_envelope(self, property_types_payload) -> None:
        data = {"data": property_types_payload, "total": 30, "page": 4, "size": 3}

        page = client.normalize_page(data, PropertyType)

        assert (page.total, page.page, page.page_size) == (30, 4, 3)

    def test_unknown_shape_is_empty(self) -> None:
        page = client.normalize_page({"unexpected": True}, PropertyType)

        assert page.items == []
        assert page.total == 0

    def test_clean_params_drops_unset(self) -> None:
        assert client.clean_params({"a": None, "b": "", "c": 0, "d": False, "e": "x"}) == {"c": 0, "d": False, "e": "x"}


class TestRequest:
    """Tests for the shared request helper."""

    def test_backend_message_preferred(self, backend) -> None:
        backend.add("GET", "/api/property-types", {"message": "Servicio en mantenimiento"}, status=503)

        with pytest.raises(BackendError) as exc_info:
            asyncio.run(property_types.list_property_types())

        assert str(exc_info.value) == "Servicio en mantenimiento"
        assert exc_info.value.status_code == 503

    def test_generic_message_fallback(self, backend) -> None:
        backend.add("GET", "/api/property-types", {"detail": "x"}, status=500)

        with pytest.raises(BackendError, match="Error al cargar los tipos de propiedad"):
            asyncio.run(property_types.list_property_types())

    def test_error_key_used(self) -> None:
        assert client.extract_error_message({"error": "Conflicto"}, "generic") == "Conflicto"
        assert client.extract_error_message("  texto plano ", "generic") == "texto plano"
        assert client.extract_error_message(None, "generic") == "generic"

    def test_not_found(self, backend) -> None:
        with pytest.raises(NotFoundError) as exc_info:
            asyncio.run(property_types.get_property_type(999))

        assert exc_info.value.status_code == 404

    def test_transport_error(self, monkeypatch, caplog) -> None:
        def refuse(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        monkeypatch.setattr(
            client, "get_http_client",
            lambda: httpx.AsyncClient(base_url="http://backend.test", transport=httpx.MockTransport(refuse)),
        )

        with pytest.raises(BackendError) as exc_info:
            asyncio.run(catalogs.list_currencies())

        assert str(exc_info.value) == "Error al cargar las monedas"
        assert exc_info.value.status_code is None
        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)
        assert "connection refused" in caplog.text

    def test_empty_body_is_none(self, backend) -> None:
        backend.add("DELETE", "/api/developments/units/4", None, status=204)

        assert asyncio.run(units.delete_unit(4)) is None

    def test_query_params_sent(self, backend) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request, body) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=[])

        backend.add_handler("GET", "/api/developments", handler)

        asyncio.run(developments.list_developments(search="torre", city=None, featured=True))

        assert dict(seen[0].url.params) == {"search": "torre", "featured": "true"}

    def test_bearer_token_header(self, monkeypatch) -> None:
        monkeypatch.setenv("API_TOKEN", "secreto")
        reload_settings()

        http = client.get_http_client()

        assert http.headers["Authorization"] == "Bearer secreto"
        assert str(http.base_url).startswith("http://backend.test")


class TestListWrappers:
    """Every entity list comes back as a Page, whatever envelope the endpoint used."""

    def test_spring_page_endpoint(self, backend, units_payload) -> None:
        backend.add("GET", "/api/developments/units", {
            "content": units_payload, "totalElements": 40, "number": 1, "size": 3,
        })

        page = asyncio.run(units.list_units())

        assert len(page.items) == 3
        assert (page.total, page.page, page.page_size) == (40, 2, 3)

    def test_data_envelope_endpoint(self, backend) -> None:
        backend.add("GET", "/api/developments/quotas/overdue", {"data": [
            {"id": 1, "developmentId": 10, "status": "overdue", "amount": "100"},
        ], "total": 1})

        page = asyncio.run(quotas.list_overdue_quotas())

        assert page.total == 1
        assert page.items[0].status.value == "OVERDUE"

    def test_bare_list_endpoint(self, backend, developments_payload) -> None:
        backend.add("GET", "/api/developments/type/EDIFICIO", developments_payload[:1])

        page = asyncio.run(developments.list_developments_by_type("EDIFICIO"))

        assert (page.total, page.page, page.page_size) == (1, 1, 1)

    def test_parent_types_filtered_page(self, backend, property_types_payload) -> None:
        backend.add("GET", "/api/property-types", {"content": property_types_payload, "totalElements": 3})

        page = asyncio.run(property_types.list_parent_types())

        assert [t.name for t in page.items] == ["Casa", "Terreno"]
        assert page.total == 2

    def test_search_contacts_page(self, backend) -> None:
        backend.add("GET", "/api/contacts", [
            {"id": 1, "firstName": "Ana", "lastName": "García", "email": "ana@example.com", "tags": '["vip"]'},
        ])

        page = asyncio.run(contacts.search_contacts("ana"))

        assert page.total == 1
        assert page.items[0].tags == ["vip"]


class TestSingleRecordBodies:
    """A create or read that answers 2xx without a usable record is a backend failure."""

    def test_empty_created_body(self, backend) -> None:
        backend.add("POST", "/api/developments/10/quotas", None, status=201)

        with pytest.raises(BackendError, match="respuesta vacía o inválida"):
            asyncio.run(quotas.create_quota(QuotaForm(development_id=10, unit_id=5)))

    def test_record_missing_required_fields(self, backend) -> None:
        backend.add("GET", "/api/developments/units/4", {"unitNumber": "4B"})

        with pytest.raises(BackendError) as exc_info:
            asyncio.run(units.get_unit(4))

        assert exc_info.value.payload == {"unitNumber": "4B"}

    def test_text_body_rejected(self, backend) -> None:
        backend.add("PUT", "/api/property-types/1", "ok")

        with pytest.raises(BackendError):
            asyncio.run(property_types.update_property_type(1, PropertyTypeForm(name="Casa")))

    def test_parse_one_accepts_record(self) -> None:
        assert client.parse_one({"id": 3, "name": "Casa"}, PropertyType).name == "Casa"


class TestContactCodec:
    """Tests for the JSON-text fields of contacts."""

    def test_encode_structured_fields(self) -> None:
        payload = contacts.encode_contact({
            "firstName": "Ana",
            "tags": ["vip"],
            "budget": {"min": 1000, "max": 2000, "currency": "USD"},
        })

        assert payload["firstName"] == "Ana"
        assert json.loads(payload["tags"]) == ["vip"]
        assert json.loads(payload["budget"])["currency"] == "USD"
        assert "preferences" not in payload

    def test_decode_structured_fields(self) -> None:
        raw = {
            "id": 1, "firstName": "Ana", "lastName": "García", "email": "ana@example.com",
            "tags": '["vip", "palermo"]',
            "preferences": '{"propertyType": ["casa"], "bedrooms": 3}',
        }

        contact = Contact.model_validate(contacts.decode_contact(raw))

        assert contact.tags == ["vip", "palermo"]
        assert contact.preferences.property_type == ["casa"]
        assert contact.preferences.bedrooms == 3

    def test_legacy_comma_tags(self) -> None:
        assert contacts.decode_contact({"tags": "vip, palermo"})["tags"] == ["vip", "palermo"]

    def test_malformed_budget_dropped(self) -> None:
        decoded = contacts.decode_contact({"id": 1, "budget": "{not json", "preferences": ""})

        assert "budget" not in decoded
        assert "preferences" not in decoded

    def test_list_contacts_spring_page(self, backend) -> None:
        backend.add("GET", "/api/contacts", {
            "content": [{"id": 1, "firstName": "Ana", "lastName": "García",
                         "email": "ana@example.com", "tags": '["vip"]'}],
            "totalElements": 1, "number": 0, "size": 20,
        })

        page = asyncio.run(contacts.list_contacts(page=0, size=20))

        assert page.total == 1
        assert page.items[0].tags == ["vip"]

    def test_mark_as_contacted(self, backend) -> None:
        sent: list[dict] = []

        def handler(request: httpx.Request, body: dict) -> httpx.Response:
            sent.append(body)
            return httpx.Response(200, json={"id": 5, "firstName": "A", "lastName": "B", "email": "a@b.com", **body})

        backend.add_handler("PUT", "/api/contacts/5", handler)
        now = datetime(2024, 5, 1, 9, 30, tzinfo=timezone.utc)

        contact = asyncio.run(contacts.mark_as_contacted(5, now=now))

        assert sent == [{"lastContact": "2024-05-01T09:30:00+00:00"}]
        assert contact.last_contact == now


class TestPropertyTypeNesting:
    """Tests for the single-level hierarchy rule on writes."""

    @pytest.fixture
    def existing(self, property_types_payload) -> list[PropertyType]:
        return [PropertyType.model_validate(r) for r in property_types_payload]

    def test_root_parent_allowed(self, existing) -> None:
        property_types.check_parent(PropertyTypeForm(name="Chalet", parent_id=1), existing)

    def test_child_as_parent_rejected(self, existing) -> None:
        with pytest.raises(ValidationError, match="un nivel"):
            property_types.check_parent(PropertyTypeForm(name="Loft", parent_id=2), existing)

    def test_missing_parent_rejected(self, existing) -> None:
        with pytest.raises(ValidationError, match="no existe"):
            property_types.check_parent(PropertyTypeForm(name="Loft", parent_id=99), existing)

    def test_self_parent_rejected(self, existing) -> None:
        with pytest.raises(ValidationError, match="propio padre"):
            property_types.check_parent(PropertyTypeForm(name="Casa", parent_id=1), existing, type_id=1)

    def test_type_with_children_cannot_get_parent(self, existing) -> None:
        with pytest.raises(ValidationError, match="subtipos"):
            property_types.check_parent(PropertyTypeForm(name="Casa", parent_id=3), existing, type_id=1)

    def test_create_rejected_before_post(self, backend, property_types_payload) -> None:
        backend.add("GET", "/api/property-types", property_types_payload)

        with pytest.raises(ValidationError):
            asyncio.run(property_types.create_property_type(PropertyTypeForm(name="Loft", parent_id=2)))

        assert backend.calls_to("POST", "/api/property-types") == []

    def test_create_root(self, backend) -> None:
        backend.add("POST", "/api/property-types", {"id": 8, "name": "Oficina"}, status=201)

        created = asyncio.run(property_types.create_property_type(PropertyTypeForm(name="Oficina")))

        assert created.id == 8
        assert backend.calls == [("POST", "/api/property-types", {"name": "Oficina", "active": True})]


class TestDevelopmentsAndLocations:
    def test_development_normalized_on_read(self, backend) -> None:
        backend.add("GET", "/api/developments/7", {
            "id": 7, "title": "Torre", "type": "BARRIO_CERRADO", "status": "RESERVED",
            "currency": {"id": 2, "code": "USD"},
        })

        dev = asyncio.run(developments.get_development(7))

        assert dev.type.value == "barrio_cerrado"
        assert dev.status.value == "reserved"
        assert dev.currency == "USD"
        assert dev.currency_id == 2

    def test_development_enums_uppercased_on_write(self, backend) -> None:
        sent: list[dict] = []

        def handler(request: httpx.Request, body: dict) -> httpx.Response:
            sent.append(body)
            return httpx.Response(201, json={**body, "id": 1})

        backend.add_handler("POST", "/api/developments", handler)

        asyncio.run(developments.create_development(DevelopmentForm(title="Torre", type="edificio")))

        assert sent[0]["type"] == "EDIFICIO"
        assert sent[0]["status"] == "AVAILABLE"

    def test_increment_views_swallows_errors(self, backend) -> None:
        backend.add("POST", "/api/developments/7/views", {"message": "boom"}, status=500)

        assert asyncio.run(developments.increment_views(7)) is None

    def test_cities_filtered_by_country(self, backend) -> None:
        backend.add("GET", "/api/cities", [
            {"id": 1, "name": "Buenos Aires", "countryId": 1},
            {"id": 2, "name": "Montevideo", "countryId": 2},
        ])

        cities = asyncio.run(locations.list_cities_by_country("1"))

        assert [c.name for c in cities.items] == ["Buenos Aires"]
        assert cities.total == 1

    def test_country_code(self) -> None:
        assert locations.country_code(" argentina ") == "AR"
