from pydantic import BaseModel


class FontRead(BaseModel):
    family: str
    variants: list[str]
    category: str
