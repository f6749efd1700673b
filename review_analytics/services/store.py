"""SQLAlchemy-backed record store used by the review services."""

import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Query, Session

from review_analytics.core.exceptions import StorageError
from review_analytics.models.review import ReviewRecord

logger = logging.getLogger(__name__)

ALL_LANGUAGES = "all"


@dataclass(frozen=True)
class ReviewFilter:
    user_id: int
    language: Optional[str] = None

    @property
    def filters_language(self) -> bool:
        return bool(self.language) and self.language != ALL_LANGUAGES


class ReviewStore:
    def __init__(self, db: Session) -> None:
        self.db = db

    def _query(self, review_filter: ReviewFilter) -> Query:
        query = self.db.query(ReviewRecord).filter(ReviewRecord.user_id == review_filter.user_id)
        if review_filter.filters_language:
            query = query.filter(ReviewRecord.language == review_filter.language)
        return query

    def insert(self, record: ReviewRecord) -> ReviewRecord:
        try:
            self.db.add(record)
            self.db.commit()
            self.db.refresh(record)
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.exception("Failed to persist review record for user %s", record.user_id)
            raise StorageError("Failed to save review") from exc
        return record

    def find_page(self, review_filter: ReviewFilter, skip: int, limit: int) -> List[ReviewRecord]:
        try:
            return (
                self._query(review_filter)
                .order_by(ReviewRecord.created_at.desc(), ReviewRecord.id.desc())
                .offset(skip)
                .limit(limit)
                .all()
            )
        except SQLAlchemyError as exc:
            raise StorageError("Failed to fetch review history") from exc

    def count(self, review_filter: ReviewFilter) -> int:
        try:
            return self._query(review_filter).count()
        except SQLAlchemyError as exc:
            raise StorageError("Failed to count reviews") from exc

    def records_for_user(self, user_id: int) -> List[ReviewRecord]:
        """All of a user's records, oldest first with ids breaking ties."""

        try:
            return (
                self._query(ReviewFilter(user_id=user_id))
                .order_by(ReviewRecord.created_at.asc(), ReviewRecord.id.asc())
                .all()
            )
        except SQLAlchemyError as exc:
            raise StorageError("Failed to load reviews") from exc

    def language_breakdown(self, user_id: int) -> List[Tuple[str, int, float]]:
        count_expr = func.count(ReviewRecord.id).label("count")
        try:
            rows = (
                self.db.query(
                    ReviewRecord.language,
                    count_expr,
                    func.avg(ReviewRecord.rating).label("average_rating"),
                )
                .filter(ReviewRecord.user_id == user_id)
                .group_by(ReviewRecord.language)
                .order_by(count_expr.desc(), ReviewRecord.language.asc())
                .all()
            )
        except SQLAlchemyError as exc:
            raise StorageError("Failed to group reviews by language") from exc
        return [(language, int(count or 0), float(avg or 0)) for language, count, avg in rows]
