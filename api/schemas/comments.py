from datetime import datetime
from pydantic import BaseModel, ConfigDict
from typing import Optional


class CommentIn(BaseModel):
    content: str


class CommentOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: str
    species_id: int
    author: str
    content: str
    created_at: datetime
    author_name: Optional[str] = None
