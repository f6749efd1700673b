import asyncio
from functools import lru_cache
from typing import Any

from openai import AsyncOpenAI

from review_analytics.core.config import settings

_CHAT_SEMAPHORE = asyncio.Semaphore(max(1, settings.AI_CONCURRENCY))


@lru_cache(maxsize=1)
def get_async_client() -> AsyncOpenAI:
    return AsyncOpenAI(
        api_key=settings.AI_API_KEY,
        base_url=settings.AI_API_BASE_URL,
    )


async def create_chat_completion(**kwargs: Any) -> Any:
    client = get_async_client()
    async with _CHAT_SEMAPHORE:
        return await client.chat.completions.create(**kwargs)
