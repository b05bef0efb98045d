import uuid

import pytest
from pydantic import BaseModel, ValidationError

from brandkeeper.core.brand.schemas import BrandSettingsCreate
from brandkeeper.core.companies.schemas import CompanyCreate
from brandkeeper.core.users.schemas import UserCreate
from brandkeeper.core.validation import validate_input


def _messages(exc: ValidationError) -> dict:
    return {err["loc"]: err["msg"] for err in exc.errors()}


def test_brand_settings_requires_hex_colors():
    with pytest.raises(ValidationError) as exc:
        BrandSettingsCreate(company_id=uuid.uuid4(), primary_color="red", font_family="Inter", secondary_color="#12345")
    messages = _messages(exc.value)
    assert messages[("primary_color",)] == "El color primario debe ser un código hexadecimal válido"
    assert messages[("secondary_color",)] == "El color secundario debe ser un código hexadecimal válido"


def test_brand_settings_blank_optionals_become_none():
    data = BrandSettingsCreate(
        company_id=uuid.uuid4(), primary_color="#AbC123", font_family=" Inter ",
        secondary_color="", secondary_font="  ", logo_url="",
    )
    assert data.font_family == "Inter"
    assert data.secondary_color is None
    assert data.secondary_font is None
    assert data.logo_url is None


def test_logo_variants_must_be_urls():
    with pytest.raises(ValidationError) as exc:
        BrandSettingsCreate(
            company_id=uuid.uuid4(), primary_color="#000000", font_family="Inter",
            logo_variants={"isotipo": "no es url"},
        )
    assert _messages(exc.value)[("logo_variants", "isotipo")] == "La URL no es válida"


def test_company_name_bounds():
    with pytest.raises(ValidationError) as exc:
        CompanyCreate(name="A")
    assert _messages(exc.value)[("name",)] == "El nombre debe tener al menos 2 caracteres"


def test_user_email_is_normalized():
    data = UserCreate(email="  Ana@Example.COM ", full_name="Ana Pérez", role="admin", company_id=uuid.uuid4())
    assert data.email == "ana@example.com"
    assert data.role.value == "admin"


@pytest.mark.parametrize(
    "field, value, message",
    [
        ("email", "ana-at-example", "El correo electrónico no es válido"),
        ("full_name", "Ana 123", "El nombre solo puede contener letras y espacios"),
        ("phone", "123", "El teléfono debe tener al menos 10 dígitos"),
        ("phone", "55 1234 5678 x", "El teléfono contiene caracteres inválidos"),
        ("role", "owner", "El rol seleccionado no es válido"),
    ],
)
def test_user_field_messages(field, value, message):
    raw = {"email": "ana@example.com", "full_name": "Ana", "role": "collaborator", "company_id": str(uuid.uuid4())}
    raw[field] = value
    result = validate_input(UserCreate, raw)
    assert not result.ok
    assert {"path": [field], "message": message} in [
        {"path": issue["path"], "message": issue["message"]} for issue in result.issues
    ]


def test_validate_input_never_raises():
    class Payload(BaseModel):
        name: str

    assert validate_input(Payload, None).issues[0]["message"] == "Debe ser un objeto"
    missing = validate_input(Payload, {})
    assert missing.value is None
    assert missing.issues == [{"path": ["name"], "message": "Este campo es requerido", "code": "missing"}]

    good = validate_input(Payload, {"name": "ok"})
    assert good.ok
    assert good.value.name == "ok"
