import logging
import time
from datetime import datetime, timezone
from typing import Awaitable, Callable, Optional

from review_analytics.core.config import settings
from review_analytics.core.exceptions import ValidationError
from review_analytics.models.review import ReviewRecord
from review_analytics.services.rating import classify
from review_analytics.services.rounding import round_half_up
from review_analytics.services.store import ReviewStore
from review_analytics.services.tags import extract_tags

logger = logging.getLogger(__name__)

ReviewGenerator = Callable[[str, str], Awaitable[str]]


def _require_code(code: Optional[str]) -> str:
    if not code:
        raise ValidationError("Code is required. Please provide code for review")
    return code


def _resolve_language(language: Optional[str]) -> str:
    if language and language.strip():
        return language.strip()
    return settings.DEFAULT_LANGUAGE


def build_review_record(
    user_id: int,
    code: str,
    language: Optional[str],
    review_text: str,
    elapsed_ms: float,
    now: Optional[datetime] = None,
) -> ReviewRecord:
    code = _require_code(code)
    return ReviewRecord(
        user_id=user_id,
        code=code,
        language=_resolve_language(language),
        review_text=review_text,
        rating=classify(review_text),
        tags=extract_tags(review_text),
        review_duration_seconds=max(0, round_half_up(elapsed_ms / 1000)),
        created_at=now or datetime.now(timezone.utc),
    )


async def submit_review(
    store: ReviewStore,
    user_id: int,
    code: Optional[str],
    language: Optional[str],
    generate: ReviewGenerator,
    clock: Callable[[], float] = time.monotonic,
) -> ReviewRecord:
    """Validate, generate, classify and persist one review.

    Empty code is rejected before the generator is called. A failing
    generator leaves nothing behind in the store.
    """

    code = _require_code(code)
    language = _resolve_language(language)

    started = clock()
    review_text = await generate(code, language)
    elapsed_ms = (clock() - started) * 1000

    record = build_review_record(user_id, code, language, review_text, elapsed_ms)
    store.insert(record)
    logger.info(
        "Stored review %s for user %s (language=%s rating=%s tags=%s duration=%ss)",
        record.id,
        user_id,
        record.language,
        record.rating,
        ",".join(record.tags) or "-",
        record.review_duration_seconds,
    )
    return record
