import logging
import math
from typing import Optional

from review_analytics.core.exceptions import StorageError, ValidationError
from review_analytics.schemas.review import HistoryPage, ReviewRecordOut
from review_analytics.services.store import ReviewFilter, ReviewStore

logger = logging.getLogger(__name__)


def paginate(
    store: ReviewStore,
    user_id: int,
    language: Optional[str] = None,
    page: int = 1,
    page_size: int = 10,
) -> HistoryPage:
    """Return one page of a user's reviews, newest first.

    History is a non-critical read path: storage failures produce an empty
    page without ``total``/``total_pages`` instead of an error.
    """

    if page < 1:
        raise ValidationError("page must be a positive integer")
    if page_size < 1:
        raise ValidationError("limit must be a positive integer")

    review_filter = ReviewFilter(user_id=user_id, language=language)
    skip = (page - 1) * page_size
    try:
        total = store.count(review_filter)
        # Offsets and limits stay within the row count so they fit database integers.
        records = []
        if skip < total:
            records = store.find_page(review_filter, skip=skip, limit=min(page_size, total - skip))
    except StorageError as exc:
        logger.warning("Review history unavailable for user %s: %s", user_id, exc)
        return HistoryPage(items=[], page=page, page_size=page_size)

    return HistoryPage(
        items=[ReviewRecordOut.model_validate(record) for record in records],
        page=page,
        page_size=page_size,
        total=total,
        total_pages=math.ceil(total / page_size),
    )
