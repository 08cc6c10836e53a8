from pydantic import BaseModel


class ChatOut(BaseModel):
    response: str


class ErrorOut(BaseModel):
    error: str
