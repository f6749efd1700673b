"""Per-user dashboard statistics computed from review records."""

import heapq
import logging
import math
from datetime import datetime, timezone
from typing import Dict, Iterable, List, Tuple
from zoneinfo import ZoneInfo

from review_analytics.core.config import settings
from review_analytics.core.exceptions import AggregationError, StorageError
from review_analytics.models.review import ReviewRecord
from review_analytics.models.user import User
from review_analytics.schemas.dashboard import (
    ActivityItem,
    DashboardStats,
    LanguageBreakdown,
    LanguageCount,
    ProfileOut,
    ProfileStats,
)
from review_analytics.services.rounding import round_half_up, round_to
from review_analytics.services.store import ReviewStore
from review_analytics.services.time_windows import current_week, previous_week

logger = logging.getLogger(__name__)

LANGUAGE_LIMIT = 6
RECENT_ACTIVITY_LIMIT = 5
CODE_PREVIEW_LENGTH = 100

MINUTE = 60
HOUR = 60 * MINUTE
DAY = 24 * HOUR
WEEK = 7 * DAY


def _as_utc(moment: datetime) -> datetime:
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment


def _mean(total: float, count: int) -> float:
    return total / count if count else 0.0


def weekly_improvement(this_week: int, last_week: int) -> int:
    if last_week > 0:
        return round_half_up((this_week - last_week) / last_week * 100)
    return 100 if this_week > 0 else 0


def rating_improvement(current_week_rating: float, last_week_rating: float) -> int:
    # Falls back to 5, not 100, when last week has no ratings.
    if last_week_rating > 0:
        return round_half_up((current_week_rating - last_week_rating) / last_week_rating * 100)
    return 5 if current_week_rating > 0 else 0


def format_time_ago(created_at: datetime, now: datetime) -> str:
    created_at = _as_utc(created_at)
    seconds = math.floor((now - created_at).total_seconds())
    if seconds < MINUTE:
        return "just now"
    if seconds < HOUR:
        return f"{seconds // MINUTE} minutes ago"
    if seconds < DAY:
        return f"{seconds // HOUR} hours ago"
    if seconds < WEEK:
        return f"{seconds // DAY} days ago"
    return created_at.astimezone(now.tzinfo).strftime("%x")


def _activity(record: ReviewRecord, now: datetime) -> ActivityItem:
    return ActivityItem(
        id=record.id,
        language=record.language,
        rating=record.rating,
        created_at=record.created_at,
        time=format_time_ago(record.created_at, now),
        duration=record.review_duration_seconds or 0,
        code_preview=(record.code or "")[:CODE_PREVIEW_LENGTH],
    )


def aggregate(records: Iterable[ReviewRecord], now: datetime) -> DashboardStats:
    """Fold one user's records into dashboard statistics as of ``now``.

    ``now`` must be timezone aware; its timezone decides where weeks start.
    Records may arrive in any ``created_at`` order.
    """

    this_week = current_week(now)
    last_week = previous_week(now)

    total = this_week_count = last_week_count = 0
    rating_sum = this_week_sum = last_week_sum = 0
    languages: Dict[str, int] = {}
    recent: List[Tuple[datetime, int, ReviewRecord]] = []

    for position, record in enumerate(records):
        created_at = _as_utc(record.created_at)
        total += 1
        rating_sum += record.rating
        if created_at in this_week:
            this_week_count += 1
            this_week_sum += record.rating
        elif created_at in last_week:
            last_week_count += 1
            last_week_sum += record.rating

        languages[record.language] = languages.get(record.language, 0) + 1

        entry = (created_at, position, record)
        if len(recent) < RECENT_ACTIVITY_LIMIT:
            heapq.heappush(recent, entry)
        else:
            heapq.heappushpop(recent, entry)

    average_rating = _mean(rating_sum, total)
    current_week_rating = _mean(this_week_sum, this_week_count)
    last_week_rating = _mean(last_week_sum, last_week_count)

    # sorted() is stable, so equal counts keep first-encountered order.
    top_languages = sorted(languages.items(), key=lambda item: -item[1])[:LANGUAGE_LIMIT]
    latest = sorted(recent, key=lambda entry: (entry[0], entry[1]), reverse=True)

    return DashboardStats(
        total_reviews=total,
        this_week_reviews=this_week_count,
        last_week_reviews=last_week_count,
        weekly_improvement_percent=weekly_improvement(this_week_count, last_week_count),
        average_rating=average_rating,
        average_rating_display=round_to(average_rating, 1),
        current_week_rating=current_week_rating,
        last_week_rating=last_week_rating,
        quality_score_percent=round_half_up(average_rating * 20),
        rating_improvement_percent=rating_improvement(current_week_rating, last_week_rating),
        languages_count=len(top_languages),
        language_distribution=[
            LanguageCount(name=name, count=count) for name, count in top_languages
        ],
        recent_activity=[_activity(record, now) for _, _, record in latest],
    )


def dashboard_now() -> datetime:
    return datetime.now(ZoneInfo(settings.DASHBOARD_TIMEZONE))


def dashboard_stats(store: ReviewStore, user_id: int, now: datetime) -> DashboardStats:
    try:
        records = store.records_for_user(user_id)
    except StorageError as exc:
        logger.error("Dashboard aggregation failed for user %s: %s", user_id, exc)
        raise AggregationError("Failed to fetch dashboard statistics") from exc
    return aggregate(records, now)


def profile_summary(store: ReviewStore, user: User) -> ProfileOut:
    try:
        breakdown = store.language_breakdown(user.id)
    except StorageError as exc:
        logger.error("Profile aggregation failed for user %s: %s", user.id, exc)
        raise AggregationError("Failed to fetch user profile") from exc

    languages = [
        LanguageBreakdown(
            language=language,
            count=count,
            average_rating=round_to(average, 1),
        )
        for language, count, average in breakdown
    ]
    return ProfileOut(
        id=user.id,
        email=user.email,
        name=user.name,
        created_at=user.created_at,
        stats=ProfileStats(
            total_reviews=sum(item.count for item in languages),
            favorite_language=languages[0].language if languages else settings.DEFAULT_LANGUAGE,
            languages_used=len(languages),
            language_breakdown=languages,
        ),
    )
