# explorer/llm.py

import logging
from typing import Optional

from openai import OpenAI

from explorer.config import Settings, get_settings


def get_openai_client(settings: Optional[Settings] = None) -> Optional[OpenAI]:
    """Build the OpenAI client, or return None when no API key is configured."""
    settings = settings or get_settings()
    if not settings.openai_api_key:
        logging.info("OPENAI_API_KEY not set; AI features fall back to demo output.")
        return None

    kwargs = {"api_key": settings.openai_api_key}
    if settings.openai_base_url:
        kwargs["base_url"] = settings.openai_base_url
    return OpenAI(**kwargs)


def chat_completion(
        client: OpenAI,
        system: str,
        prompt: str,
        *,
        model: str = "gpt-4",
        temperature: float = 0.7,
        max_tokens: int = 1000,
    ) -> str:
    """Single chat-completions round trip. Returns '' when the model sends no content."""
    response = client.chat.completions.create(
        model=model,
        messages=[
            {"role": "system", "content": system},
            {"role": "user", "content": prompt},
        ],
        temperature=temperature,
        max_tokens=max_tokens,
    )
    if not response.choices:
        logging.warning(f"LLM reply ({model}) carried no choices")
        return ""
    content = response.choices[0].message.content
    logging.debug(f"LLM reply ({model}): {len(content or '')} chars")
    return content or ""
