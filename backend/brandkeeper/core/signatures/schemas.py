import enum
import uuid
from datetime import datetime
from typing import Annotated

from pydantic import BaseModel

from brandkeeper.core.validation import OptionalUrl, enum_member, optional_text, text_length


class TemplateType(str, enum.Enum):
    SIMPLE = "simple"
    WITH_PHOTO = "with_photo"
    VERTICAL = "vertical"


Type = Annotated[TemplateType, enum_member(TemplateType, "El tipo de plantilla no es válido")]
Name = Annotated[str, text_length(1, 255, "El nombre")]
HtmlContent = Annotated[str, text_length(1, 100_000, "El contenido HTML")]
Description = Annotated[str | None, optional_text(1000, "La descripción")]
GoogleFont = Annotated[str | None, optional_text(255, "La fuente")]


class TemplateCreate(BaseModel):
    company_id: uuid.UUID
    name: Name
    description: Description = None
    template_type: Type
    html_content: HtmlContent
    google_font: GoogleFont = None
    is_global: bool = False
    is_active: bool = True


class TemplateUpdate(BaseModel):
    name: Name | None = None
    description: Description = None
    template_type: Type | None = None
    html_content: HtmlContent | None = None
    google_font: GoogleFont = None
    is_global: bool | None = None
    is_active: bool | None = None


class TemplateRead(BaseModel):
    model_config = {"from_attributes": True}
    id: uuid.UUID
    company_id: uuid.UUID
    name: str
    description: str | None
    template_type: str
    html_content: str
    google_font: str | None
    is_global: bool
    is_active: bool
    created_at: datetime
    updated_at: datetime


class RenderRequest(BaseModel):
    full_name: Annotated[str, text_length(0, 100, "El nombre")] = ""
    position: Annotated[str, text_length(0, 100, "El cargo")] = ""
    phone: Annotated[str, text_length(0, 30, "El teléfono")] = ""
    phone_extension: Annotated[str, text_length(0, 10, "La extensión")] = ""
    email: Annotated[str, text_length(0, 255, "El correo electrónico")] = ""
    website: OptionalUrl = None
    photo_url: OptionalUrl = None


class RenderRead(BaseModel):
    template_id: uuid.UUID
    html: str
