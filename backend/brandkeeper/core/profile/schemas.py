from pydantic import BaseModel

from brandkeeper.core.companies.schemas import CompanyRead
from brandkeeper.core.users.schemas import UserRead
from brandkeeper.core.validation import FullName, OptionalUrl, Phone


class ProfileUpdate(BaseModel):
    full_name: FullName | None = None
    phone: Phone = None
    avatar_url: OptionalUrl = None


class ProfileRead(UserRead):
    company: CompanyRead | None = None


class AvatarUploadRead(BaseModel):
    avatar_url: str
    path: str
