from pydantic import BaseModel, ConfigDict, Field
from typing import Optional


class ProfileOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: str
    email: Optional[str] = None
    display_name: Optional[str] = None
    avatar_url: Optional[str] = None
    biography: Optional[str] = None


class ProfileUpdate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)
    display_name: str = Field(min_length=2, max_length=30)
    biography: Optional[str] = Field(default=None, max_length=160)
