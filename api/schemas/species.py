from datetime import datetime
from pydantic import BaseModel, ConfigDict, field_validator
from typing import Optional

# api/schemas/species.py

SPECIES_FIELDS = (
    "scientific_name",
    "common_name",
    "total_population",
    "kingdom",
    "description",
    "image",
)


def parse_population(value) -> Optional[int]:
    """Form input -> head count; thousands separators allowed, anything else is None."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    s = "".join(str(value).split()).replace(",", "")
    if not s.isdigit():
        return None
    return int(s)


class SpeciesIn(BaseModel):
    scientific_name: Optional[str] = None
    common_name: Optional[str] = None
    total_population: Optional[int] = None
    kingdom: Optional[str] = None
    description: Optional[str] = None
    image: Optional[str] = None

    @field_validator(
        "scientific_name", "common_name", "kingdom", "description", "image", mode="before"
    )
    @classmethod
    def _blank_to_none(cls, v):
        if isinstance(v, str):
            v = v.strip()
            return v or None
        return v

    @field_validator("total_population", mode="before")
    @classmethod
    def _population(cls, v):
        return parse_population(v)


class SpeciesUpdate(SpeciesIn):
    """PATCH body; only the fields actually sent are written."""


class SpeciesSnapshot(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: int
    author: str
    scientific_name: Optional[str] = None
    common_name: Optional[str] = None
    total_population: Optional[int] = None
    kingdom: Optional[str] = None
    description: Optional[str] = None
    image: Optional[str] = None


class SpeciesOut(SpeciesSnapshot):
    author_name: Optional[str] = None
    created_at: Optional[datetime] = None


class SpeciesEditOut(BaseModel):
    species: SpeciesOut
    previous: SpeciesSnapshot
