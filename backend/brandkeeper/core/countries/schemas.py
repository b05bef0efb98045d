import uuid

from pydantic import BaseModel, computed_field

from brandkeeper.core.countries.utils import get_country_flag


class CountryRead(BaseModel):
    model_config = {"from_attributes": True}
    id: uuid.UUID
    name: str
    code: str
    region: str | None

    @computed_field
    @property
    def flag(self) -> str:
        return get_country_flag(self.code)
