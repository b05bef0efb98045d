import uuid
from datetime import datetime
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator
from pydantic_core import PydanticCustomError

from brandkeeper.core.social_media.platforms import SocialMediaType, get_platform_config, validate_social_media_url
from brandkeeper.core.validation import enum_member

Platform = Annotated[SocialMediaType, enum_member(SocialMediaType, "La red social no es válida")]


class SocialMediaItem(BaseModel):
    type: Platform
    url: str

    @field_validator("url")
    @classmethod
    def url_matches_platform(cls, value: str, info: ValidationInfo) -> str:
        value = value.strip()
        platform = info.data.get("type")
        if value and platform and not validate_social_media_url(value, platform):
            raise PydanticCustomError(
                "social_media_url", "La URL no es válida para {label}", {"label": get_platform_config(platform).label},
            )
        return value


class SocialMediaUpdate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)
    social_media: list[SocialMediaItem] = Field(alias="socialMedia")


class SocialMediaRead(BaseModel):
    model_config = {"from_attributes": True}
    id: uuid.UUID
    company_id: uuid.UUID
    type: str
    url: str
    is_active: bool
    created_at: datetime
    updated_at: datetime
