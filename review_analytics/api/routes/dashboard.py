from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from review_analytics.api.dependencies import get_current_user, get_store
from review_analytics.core.config import settings
from review_analytics.core.exceptions import AggregationError, ValidationError
from review_analytics.schemas.dashboard import DashboardStats, ProfileOut
from review_analytics.schemas.review import HistoryPage
from review_analytics.services.dashboard import dashboard_now, dashboard_stats, profile_summary
from review_analytics.services.history import paginate
from review_analytics.services.store import ReviewStore

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("/stats", response_model=DashboardStats)
def stats(
    store: ReviewStore = Depends(get_store),
    user=Depends(get_current_user),
):
    try:
        return dashboard_stats(store, user.id, dashboard_now())
    except AggregationError as exc:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=exc.message
        ) from exc


@router.get("/history", response_model=HistoryPage, response_model_exclude_none=True)
def history(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=settings.HISTORY_MAX_PAGE_SIZE),
    language: Optional[str] = None,
    store: ReviewStore = Depends(get_store),
    user=Depends(get_current_user),
):
    try:
        return paginate(store, user.id, language=language, page=page, page_size=limit)
    except ValidationError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=exc.message) from exc


@router.get("/profile", response_model=ProfileOut)
def profile(
    store: ReviewStore = Depends(get_store),
    user=Depends(get_current_user),
):
    try:
        return profile_summary(store, user)
    except AggregationError as exc:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=exc.message
        ) from exc
