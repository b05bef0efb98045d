import uuid
from datetime import datetime
from typing import Annotated

from pydantic import BaseModel

from brandkeeper.core.policy import UserRole
from brandkeeper.core.validation import Email, FullName, OptionalUrl, Phone, enum_member

Role = Annotated[UserRole, enum_member(UserRole, "El rol seleccionado no es válido")]


class UserCreate(BaseModel):
    email: Email
    full_name: FullName
    role: Role
    company_id: uuid.UUID
    phone: Phone = None
    avatar_url: OptionalUrl = None


class UserUpdate(BaseModel):
    email: Email | None = None
    full_name: FullName | None = None
    role: Role | None = None
    company_id: uuid.UUID | None = None
    is_active: bool | None = None
    phone: Phone = None
    avatar_url: OptionalUrl = None


class UserRead(BaseModel):
    model_config = {"from_attributes": True}
    id: uuid.UUID
    email: str
    full_name: str | None
    phone: str | None
    role: str
    company_id: uuid.UUID
    avatar_url: str | None
    is_active: bool
    created_at: datetime
    updated_at: datetime


class CredentialsResponse(BaseModel):
    """Success envelope for operations that hand out a generated password."""
    success: bool = True
    message: str
    data: UserRead | None = None
    email_sent: bool
    email_error: str | None = None
    password: str | None = None
