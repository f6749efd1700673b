import random
from datetime import datetime, timedelta, timezone

import pytest

from review_analytics.core.exceptions import AggregationError, StorageError
from review_analytics.models.review import ReviewRecord
from review_analytics.models.user import User
from review_analytics.services.dashboard import (
    aggregate,
    dashboard_stats,
    format_time_ago,
    profile_summary,
    rating_improvement,
    weekly_improvement,
)

# Wednesday; the current week began Monday 2026-10-19.
NOW = datetime(2026, 10, 21, 12, 0, tzinfo=timezone.utc)


def _record(record_id, created_at, rating=4, language="python", code="print('hi')", duration=3):
    return ReviewRecord(
        id=record_id,
        user_id=1,
        code=code,
        language=language,
        review_text="",
        rating=rating,
        tags=[],
        review_duration_seconds=duration,
        created_at=created_at,
    )


def _week_of_records():
    this_week = [5, 4, 4, 4, 4, 4, 4]
    last_week = [4, 4, 4, 4]
    records = [
        _record(index, NOW - timedelta(hours=index), rating=rating)
        for index, rating in enumerate(this_week, start=1)
    ]
    records += [
        _record(10 + index, datetime(2026, 10, 13 + index, 9, 0, tzinfo=timezone.utc), rating=rating)
        for index, rating in enumerate(last_week)
    ]
    records.append(_record(99, datetime(2026, 10, 1, tzinfo=timezone.utc), rating=3, language="go"))
    return records


def test_weekly_improvement_policy():
    assert weekly_improvement(0, 0) == 0
    assert weekly_improvement(5, 0) == 100
    assert weekly_improvement(10, 5) == 100
    assert weekly_improvement(7, 4) == 75
    assert weekly_improvement(2, 4) == -50


def test_rating_improvement_policy():
    assert rating_improvement(4.2, 4.0) == 5
    assert rating_improvement(0, 0) == 0
    assert rating_improvement(4.0, 0) == 5
    assert rating_improvement(3.0, 4.0) == -25


def test_aggregate_counts_and_ratings():
    records = _week_of_records()
    random.Random(7).shuffle(records)

    stats = aggregate(records, NOW)

    assert stats.total_reviews == 12
    assert stats.this_week_reviews == 7
    assert stats.last_week_reviews == 4
    assert stats.weekly_improvement_percent == 75
    assert stats.average_rating == pytest.approx(4.0)
    assert stats.average_rating_display == 4.0
    assert stats.quality_score_percent == 80
    assert stats.current_week_rating == pytest.approx(29 / 7)
    assert stats.last_week_rating == pytest.approx(4.0)
    assert stats.rating_improvement_percent == 4


def test_aggregate_is_independent_of_record_order():
    records = _week_of_records()
    shuffled = list(records)
    random.Random(3).shuffle(shuffled)
    assert aggregate(records, NOW).model_dump(exclude={"language_distribution"}) == aggregate(
        shuffled, NOW
    ).model_dump(exclude={"language_distribution"})


def test_empty_record_set():
    stats = aggregate([], NOW)
    assert stats.total_reviews == 0
    assert stats.average_rating == 0
    assert stats.current_week_rating == 0
    assert stats.last_week_rating == 0
    assert stats.weekly_improvement_percent == 0
    assert stats.rating_improvement_percent == 0
    assert stats.quality_score_percent == 0
    assert stats.language_distribution == []
    assert stats.recent_activity == []


def test_only_current_week_uses_fallbacks():
    stats = aggregate([_record(1, NOW - timedelta(minutes=5), rating=3)], NOW)
    assert stats.weekly_improvement_percent == 100
    assert stats.rating_improvement_percent == 5


def test_language_distribution_top_six_with_stable_ties():
    languages = ["go", "python", "rust", "python", "rust", "java", "c", "ruby", "php", "kotlin", "java"]
    records = [
        _record(index, NOW - timedelta(days=index), language=language)
        for index, language in enumerate(languages, start=1)
    ]
    stats = aggregate(records, NOW)
    assert [(item.name, item.count) for item in stats.language_distribution] == [
        ("python", 2),
        ("rust", 2),
        ("java", 2),
        ("go", 1),
        ("c", 1),
        ("ruby", 1),
    ]
    assert stats.languages_count == 6


def test_recent_activity_is_latest_five_newest_first():
    long_code = "x = 1\n" * 40
    records = [
        _record(index, NOW - timedelta(minutes=index * 30), code=long_code if index == 2 else "y")
        for index in range(1, 9)
    ]
    random.Random(11).shuffle(records)

    activity = aggregate(records, NOW).recent_activity

    assert [item.id for item in activity] == [1, 2, 3, 4, 5]
    assert activity[0].time == "30 minutes ago"
    assert activity[1].time == "1 hours ago"
    assert activity[1].code_preview == long_code[:100]
    assert activity[0].code_preview == "y"
    assert all(item.action == "Code Review" and item.status == "Completed" for item in activity)
    assert activity[0].duration == 3


def test_recent_activity_ties_prefer_later_records():
    moment = NOW - timedelta(hours=2)
    records = [_record(index, moment) for index in range(1, 8)]
    assert [item.id for item in aggregate(records, NOW).recent_activity] == [7, 6, 5, 4, 3]


@pytest.mark.parametrize("code", ["", "a", "b" * 99, "c" * 100, "d" * 101, "e" * 5000])
def test_code_preview_length(code):
    activity = aggregate([_record(1, NOW, code=code)], NOW).recent_activity
    assert len(activity[0].code_preview) == min(100, len(code))


@pytest.mark.parametrize(
    "delta, expected",
    [
        (timedelta(seconds=0), "just now"),
        (timedelta(seconds=59), "just now"),
        (timedelta(seconds=60), "1 minutes ago"),
        (timedelta(seconds=3599), "59 minutes ago"),
        (timedelta(hours=1), "1 hours ago"),
        (timedelta(hours=23, minutes=59), "23 hours ago"),
        (timedelta(days=1), "1 days ago"),
        (timedelta(days=6, hours=23), "6 days ago"),
    ],
)
def test_format_time_ago(delta, expected):
    assert format_time_ago(NOW - delta, NOW) == expected


def test_format_time_ago_falls_back_to_a_date():
    created = NOW - timedelta(days=7)
    assert format_time_ago(created, NOW) == created.strftime("%x")


def test_naive_timestamps_are_read_as_utc():
    naive = (NOW - timedelta(hours=3)).replace(tzinfo=None)
    assert format_time_ago(naive, NOW) == "3 hours ago"
    assert aggregate([_record(1, naive)], NOW).this_week_reviews == 1


def test_dashboard_stats_reads_from_the_store(store):
    for record in _week_of_records():
        record.id = None
        store.db.add(record)
    store.db.commit()

    stats = dashboard_stats(store, 1, NOW)

    assert stats.total_reviews == 12
    assert stats.this_week_reviews == 7
    assert stats.recent_activity[0].created_at == NOW - timedelta(hours=1)


def test_dashboard_stats_wraps_storage_failures():
    class BrokenStore:
        def records_for_user(self, user_id):
            raise StorageError("connection refused")

    with pytest.raises(AggregationError):
        dashboard_stats(BrokenStore(), 1, NOW)


def test_profile_summary_groups_by_language(store):
    for index, (language, rating) in enumerate(
        [("python", 5), ("python", 4), ("go", 3), ("python", 3), ("go", 4), ("rust", 2)]
    ):
        record = _record(None, NOW - timedelta(days=index), rating=rating, language=language)
        store.db.add(record)
    store.db.commit()
    user = store.db.get(User, 1)

    profile = profile_summary(store, user)

    assert profile.email == "owner@example.com"
    assert profile.stats.total_reviews == 6
    assert profile.stats.favorite_language == "python"
    assert profile.stats.languages_used == 3
    assert [(item.language, item.count, item.average_rating) for item in profile.stats.language_breakdown] == [
        ("python", 3, 4.0),
        ("go", 2, 3.5),
        ("rust", 1, 2.0),
    ]


def test_profile_summary_defaults_favorite_language(store):
    profile = profile_summary(store, store.db.get(User, 2))
    assert profile.stats.total_reviews == 0
    assert profile.stats.favorite_language == "javascript"
    assert profile.stats.language_breakdown == []
