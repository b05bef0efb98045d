import uuid
from datetime import datetime
from typing import Annotated

from pydantic import BaseModel

from brandkeeper.core.validation import OptionalUrl, optional_text, text_length

CompanyName = Annotated[str, text_length(2, 255, "El nombre")]


class CompanyCreate(BaseModel):
    name: CompanyName
    website: OptionalUrl = None
    logo_url: OptionalUrl = None
    legal_name: Annotated[str | None, optional_text(255, "El nombre legal", min_length=2)] = None
    address: Annotated[str | None, optional_text(500, "La dirección")] = None
    country: Annotated[str | None, optional_text(100, "El país", min_length=2)] = None


class CompanyUpdate(CompanyCreate):
    name: CompanyName | None = None


class CompanyRead(BaseModel):
    model_config = {"from_attributes": True}
    id: uuid.UUID
    name: str
    slug: str
    is_parent: bool
    parent_company_id: uuid.UUID | None
    website: str | None
    logo_url: str | None
    legal_name: str | None
    address: str | None
    country: str | None
    created_at: datetime
    updated_at: datetime
