from pydantic import BaseModel, field_validator


class NamedItemCreate(BaseModel):
    name: str

    @field_validator("name")
    @classmethod
    def not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("El nombre es obligatorio")
        return value


class NamedItemOut(BaseModel):
    id: str
    name: str


class SeedResult(BaseModel):
    count: int
    message: str
