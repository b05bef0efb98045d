import asyncio
import uuid
from types import SimpleNamespace

import pytest

from brandkeeper.core.companies import service
from brandkeeper.core.companies.schemas import CompanyCreate, CompanyUpdate
from brandkeeper.core.errors import Conflict, ValidationFailed


@pytest.mark.parametrize(
    "name, slug",
    [
        ("Acme", "acme"),
        ("Café Niño S.A. de C.V.", "cafe-nino-s-a-de-c-v"),
        ("  --Marca   Uno--  ", "marca-uno"),
        ("Ñandú & Co", "nandu-co"),
    ],
)
def test_generate_slug(name, slug):
    assert service.generate_slug(name) == slug


def test_create_requires_parent_company(db, monkeypatch):
    async def no_parent(_db):
        return None

    monkeypatch.setattr(service, "get_parent_company", no_parent)
    with pytest.raises(ValidationFailed) as exc:
        asyncio.run(service.create_company(db, CompanyCreate(name="Nueva Marca")))
    assert exc.value.message == "No se encontró la empresa matriz"
    assert db.added == []


def test_create_rejects_taken_slug(db, monkeypatch):
    async def parent(_db):
        return SimpleNamespace(id=uuid.uuid4(), is_parent=True)

    async def taken(_db, slug, exclude_id=None):
        return False

    monkeypatch.setattr(service, "get_parent_company", parent)
    monkeypatch.setattr(service, "is_slug_available", taken)
    with pytest.raises(Conflict) as exc:
        asyncio.run(service.create_company(db, CompanyCreate(name="Nueva Marca")))
    assert exc.value.message == service.SLUG_TAKEN_MESSAGE


def test_create_rejects_name_without_letters(db, monkeypatch):
    async def parent(_db):
        return SimpleNamespace(id=uuid.uuid4(), is_parent=True)

    monkeypatch.setattr(service, "get_parent_company", parent)
    with pytest.raises(ValidationFailed) as exc:
        asyncio.run(service.create_company(db, CompanyCreate(name="¡¡!!")))
    assert exc.value.details[0]["path"] == ["name"]


def test_parent_company_cannot_be_edited(db):
    parent = SimpleNamespace(id=uuid.uuid4(), is_parent=True, name="Matriz", slug="matriz")
    with pytest.raises(ValidationFailed) as exc:
        asyncio.run(service.update_company(db, parent, CompanyUpdate(name="Otra")))
    assert exc.value.message == "No se puede editar la empresa matriz"


def test_rename_regenerates_slug(db, monkeypatch):
    async def available(_db, slug, exclude_id=None):
        return True

    monkeypatch.setattr(service, "is_slug_available", available)
    company = SimpleNamespace(id=uuid.uuid4(), is_parent=False, name="Vieja", slug="vieja", website=None)
    asyncio.run(service.update_company(db, company, CompanyUpdate(name="Marca Nueva", website="https://nueva.example.com")))
    assert company.slug == "marca-nueva"
    assert company.name == "Marca Nueva"
    assert company.website == "https://nueva.example.com"


def test_parent_company_cannot_be_deleted(db):
    parent = SimpleNamespace(id=uuid.uuid4(), is_parent=True)
    with pytest.raises(ValidationFailed):
        asyncio.run(service.delete_company(db, parent))
    assert db.deleted == []
