from pydantic import BaseModel, Field
from typing import List, Optional


class DraftSpecies(BaseModel):
    """Not-yet-persisted species entry; every field is a form string."""

    scientific_name: str = ""
    common_name: str = ""
    total_population: str = ""
    kingdom: str = ""
    description: str = ""
    image: str = ""


class AutofillIn(BaseModel):
    query: Optional[str] = None
    draft: DraftSpecies = Field(default_factory=DraftSpecies)


class AutofillOut(BaseModel):
    title: str
    draft: DraftSpecies
    filled: List[str] = []
    notification: str
