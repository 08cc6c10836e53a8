"""Single-turn relay to an OpenAI-compatible chat-completions endpoint."""

import logging
import os
from functools import lru_cache

from openai import OpenAI, OpenAIError

logger = logging.getLogger(__name__)

CHAT_MODEL = os.getenv("CHAT_MODEL", "gpt-4o-mini")
CHAT_TEMPERATURE = float(os.getenv("CHAT_TEMPERATURE", "0.4"))

SYSTEM_PROMPT = (
    "You are a helpful assistant that ONLY answers questions about animals and "
    "species (habitat, diet, conservation status, taxonomy, behavior, etc.). If a "
    "question is unrelated, politely say you only handle animal/species topics."
)

NO_ANSWER = (
    "I couldn't find an answer. Try rephrasing your question about animals or species."
)


class ChatUpstreamError(Exception):
    """The chat provider could not be reached or returned an error."""


@lru_cache(maxsize=1)
def get_client() -> OpenAI:
    return OpenAI(
        api_key=os.getenv("OPENAI_API_KEY"),
        base_url=os.getenv("OPENAI_BASE_URL") or None,
    )


def build_messages(message: str) -> list[dict]:
    return [
        {"role": "system", "content": SYSTEM_PROMPT},
        {"role": "user", "content": message},
    ]


def generate_response(message: str) -> str:
    """Ask the provider about ``message``; no history is sent or kept."""
    try:
        resp = get_client().chat.completions.create(
            model=CHAT_MODEL,
            temperature=CHAT_TEMPERATURE,
            messages=build_messages(message),
        )
    except OpenAIError as e:
        logger.warning("chat provider error: %s", e)
        raise ChatUpstreamError(str(e)) from e

    if not resp.choices:
        return NO_ANSWER
    content = resp.choices[0].message.content
    return content if content else NO_ANSWER
