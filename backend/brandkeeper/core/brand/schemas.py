import uuid
from datetime import datetime
from typing import Annotated, Any

from pydantic import BaseModel

from brandkeeper.core.validation import OptionalUrl, hex_color, optional_hex_color, optional_text, text_length

PrimaryColor = Annotated[str, hex_color("El color primario")]
SecondaryColor = Annotated[str | None, optional_hex_color("El color secundario")]
TertiaryColor = Annotated[str | None, optional_hex_color("El color terciario")]
NegativeColor = Annotated[str | None, optional_hex_color("El color negativo")]
FontFamily = Annotated[str, text_length(1, 255, "La fuente")]
OptionalFont = Annotated[str | None, optional_text(255, "La fuente")]


class LogoVariants(BaseModel):
    principal: OptionalUrl = None
    imagotipo: OptionalUrl = None
    isotipo: OptionalUrl = None
    negativo: OptionalUrl = None
    contraido: OptionalUrl = None


class BrandSettingsCreate(BaseModel):
    company_id: uuid.UUID
    primary_color: PrimaryColor
    secondary_color: SecondaryColor = None
    tertiary_color: TertiaryColor = None
    negative_color: NegativeColor = None
    font_family: FontFamily
    secondary_font: OptionalFont = None
    contrast_font: OptionalFont = None
    logo_url: OptionalUrl = None
    logo_variants: LogoVariants | None = None
    is_global: bool = False


class BrandSettingsUpdate(BaseModel):
    primary_color: PrimaryColor | None = None
    secondary_color: SecondaryColor = None
    tertiary_color: TertiaryColor = None
    negative_color: NegativeColor = None
    font_family: FontFamily | None = None
    secondary_font: OptionalFont = None
    contrast_font: OptionalFont = None
    logo_url: OptionalUrl = None
    logo_variants: LogoVariants | None = None


class BrandSettingsRead(BaseModel):
    model_config = {"from_attributes": True}
    id: uuid.UUID
    company_id: uuid.UUID
    primary_color: str
    secondary_color: str | None
    tertiary_color: str | None
    negative_color: str | None
    font_family: str
    secondary_font: str | None
    contrast_font: str | None
    logo_url: str | None
    logo_variants: dict[str, Any]
    is_global: bool
    created_at: datetime
    updated_at: datetime


class LogoUploadRead(BaseModel):
    logo_url: str
    path: str
    brand_settings: BrandSettingsRead
