import logging

from openai import OpenAIError

from review_analytics.core.config import settings
from review_analytics.core.exceptions import GenerationError
from review_analytics.services.openai_client import create_chat_completion

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You are an experienced senior code reviewer. Review the submitted code for "
    "correctness, bugs, security, performance, readability and adherence to best "
    "practices. Point out concrete problems, explain why they matter and suggest "
    "improved code where useful. Finish with a short overall verdict."
)


def build_prompt(code: str, language: str) -> str:
    return f"Review the following {language} code:\n\n```{language}\n{code}\n```"


def _ai_available() -> bool:
    return bool(settings.AI_API_KEY)


async def generate_review(code: str, language: str) -> str:
    """Ask the configured model for a review of ``code``. Failures are not retried."""

    if not _ai_available():
        raise GenerationError("AI service is not configured")

    try:
        completion = await create_chat_completion(
            model=settings.AI_MODEL,
            max_tokens=settings.AI_MAX_TOKENS,
            temperature=settings.AI_TEMPERATURE,
            messages=[
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": build_prompt(code, language)},
            ],
        )
    except OpenAIError as exc:
        logger.warning("Review generation failed (%s): %s", exc.__class__.__name__, exc)
        raise GenerationError(f"AI review failed: {exc}") from exc

    content = ""
    if completion.choices:
        content = completion.choices[0].message.content or ""
    if not content.strip():
        raise GenerationError("AI service returned an empty review")
    return content
