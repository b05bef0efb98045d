"""
Reusable field types and the total ``validate_input`` helper.

Field types raise ``PydanticCustomError`` so that the message surfaced in the
400 envelope is the user-facing one, not pydantic's generic wording.
"""
import enum
import re
from dataclasses import dataclass, field
from typing import Annotated, Any, Generic, Sequence, TypeVar

from pydantic import AfterValidator, AnyUrl, BaseModel, BeforeValidator, TypeAdapter, ValidationError
from pydantic.networks import validate_email
from pydantic_core import PydanticCustomError

T = TypeVar("T", bound=BaseModel)

HEX_COLOR_RE = re.compile(r"^#[0-9A-Fa-f]{6}$")
FULL_NAME_RE = re.compile(r"^[a-zA-ZáéíóúÁÉÍÓÚñÑ\s]+$")
PHONE_RE = re.compile(r"^[\d\s\-\+\(\)]+$")

_URL = TypeAdapter(AnyUrl)

# pydantic error types that get a translated message in the issue list
_MESSAGES = {
    "missing": "Este campo es requerido",
    "json_invalid": "El cuerpo de la petición no es JSON válido",
    "uuid_parsing": "El identificador no es válido",
    "uuid_type": "El identificador no es válido",
    "model_type": "Debe ser un objeto",
    "list_type": "Debe ser una lista",
    "bool_type": "Debe ser verdadero o falso",
    "bool_parsing": "Debe ser verdadero o falso",
    "string_type": "Debe ser un texto",
}


def _fail(code: str, message: str) -> None:
    raise PydanticCustomError(code, message)


def text_length(min_length: int, max_length: int, label: str):
    def _check(value: str) -> str:
        value = value.strip()
        if len(value) < min_length:
            _fail("string_too_short", f"{label} debe tener al menos {min_length} caracteres")
        if len(value) > max_length:
            _fail("string_too_long", f"{label} no puede tener más de {max_length} caracteres")
        return value

    return AfterValidator(_check)


def optional_text(max_length: int, label: str, min_length: int = 0):
    """Blank strings collapse to ``None``; anything else must respect the bounds."""

    def _check(value: str | None) -> str | None:
        if value is None or not value.strip():
            return None
        value = value.strip()
        if len(value) < min_length:
            _fail("string_too_short", f"{label} debe tener al menos {min_length} caracteres")
        if len(value) > max_length:
            _fail("string_too_long", f"{label} no puede tener más de {max_length} caracteres")
        return value

    return AfterValidator(_check)


def _password(value: str) -> str:
    if len(value) < 6:
        _fail("string_too_short", "La contraseña debe tener al menos 6 caracteres")
    if len(value) > 100:
        _fail("string_too_long", "La contraseña no puede tener más de 100 caracteres")
    return value


def _full_name(value: str) -> str:
    value = value.strip()
    if len(value) < 2:
        _fail("string_too_short", "El nombre debe tener al menos 2 caracteres")
    if len(value) > 100:
        _fail("string_too_long", "El nombre no puede tener más de 100 caracteres")
    if not FULL_NAME_RE.match(value):
        _fail("string_pattern_mismatch", "El nombre solo puede contener letras y espacios")
    return value


def _phone(value: str | None) -> str | None:
    if value is None:
        return None
    if len(value) < 10:
        _fail("string_too_short", "El teléfono debe tener al menos 10 dígitos")
    if len(value) > 20:
        _fail("string_too_long", "El teléfono no puede tener más de 20 caracteres")
    if not PHONE_RE.match(value):
        _fail("string_pattern_mismatch", "El teléfono contiene caracteres inválidos")
    return value


def _email(value: str) -> str:
    value = value.strip()
    if not value:
        _fail("string_too_short", "El correo electrónico es requerido")
    try:
        _, normalized = validate_email(value)
    except ValueError:
        _fail("value_error", "El correo electrónico no es válido")
    return normalized.lower()


def _optional_url(value: str | None) -> str | None:
    if value is None or value == "":
        return None
    try:
        _URL.validate_python(value)
    except ValidationError:
        _fail("url_parsing", "La URL no es válida")
    return value


def hex_color(label: str):
    def _check(value: str) -> str:
        if not HEX_COLOR_RE.match(value):
            _fail("hex_color", f"{label} debe ser un código hexadecimal válido")
        return value

    return AfterValidator(_check)


def optional_hex_color(label: str):
    def _check(value: str | None) -> str | None:
        if value is None or value == "":
            return None
        if not HEX_COLOR_RE.match(value):
            _fail("hex_color", f"{label} debe ser un código hexadecimal válido")
        return value

    return AfterValidator(_check)


def enum_member(enum_cls: type[enum.Enum], message: str):
    allowed = {member.value for member in enum_cls}

    def _check(value: Any) -> Any:
        if isinstance(value, enum_cls):
            return value
        if value not in allowed:
            _fail("enum", message)
        return enum_cls(value)

    return BeforeValidator(_check)


Email = Annotated[str, AfterValidator(_email)]
Password = Annotated[str, AfterValidator(_password)]
FullName = Annotated[str, AfterValidator(_full_name)]
Phone = Annotated[str | None, AfterValidator(_phone)]
OptionalUrl = Annotated[str | None, AfterValidator(_optional_url)]


# ── Issue lists ───────────────────────────────────────────────────────────────

@dataclass
class ValidationResult(Generic[T]):
    value: T | None = None
    issues: list[dict[str, Any]] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.issues


def issues_from_errors(errors: Sequence[dict[str, Any]]) -> list[dict[str, Any]]:
    issues = []
    for err in errors:
        path = [part for part in err.get("loc", ()) if part != "body"]
        message = _MESSAGES.get(err.get("type", "")) or err.get("msg", "")
        if err.get("type") == "value_error" and message.startswith("Value error, "):
            message = message[len("Value error, "):]
        issues.append({"path": path, "message": message, "code": err.get("type")})
    return issues


def validate_input(model: type[T], raw: Any) -> ValidationResult[T]:
    """Validate untyped input without side effects; never raises on bad data."""
    try:
        return ValidationResult(value=model.model_validate(raw))
    except ValidationError as exc:
        return ValidationResult(issues=issues_from_errors(exc.errors()))
