# api/routers/chat.py
import logging

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool

from api.schemas.chat import ChatOut, ErrorOut
from api.services.chat import ChatUpstreamError, generate_response

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/chat", tags=["chat"])


def _error(status: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status, content=ErrorOut(error=message).model_dump())


@router.post(
    "",
    response_model=ChatOut,
    responses={400: {"model": ErrorOut}, 502: {"model": ErrorOut}},
)
async def chat(request: Request):
    # parsed by hand: malformed bodies are a 400 here, not FastAPI's 422
    try:
        body = await request.json()
    except ValueError:
        return _error(400, "Invalid JSON body.")

    message = body.get("message") if isinstance(body, dict) else None
    if not isinstance(message, str) or not message.strip():
        return _error(400, "Message is required.")

    try:
        response = await run_in_threadpool(generate_response, message.strip())
    except ChatUpstreamError:
        return _error(502, "Upstream provider error.")
    return ChatOut(response=response)
