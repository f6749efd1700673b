from fastapi import APIRouter, Depends, HTTPException, status

from review_analytics.api.dependencies import get_current_user, get_review_generator, get_store
from review_analytics.core.exceptions import GenerationError, StorageError, ValidationError
from review_analytics.schemas.review import ReviewRequest, ReviewResponse
from review_analytics.services.reviews import ReviewGenerator, submit_review
from review_analytics.services.store import ReviewStore

router = APIRouter(prefix="/ai", tags=["ai"])


@router.post("/get-review", response_model=ReviewResponse)
async def get_review(
    payload: ReviewRequest,
    store: ReviewStore = Depends(get_store),
    generate: ReviewGenerator = Depends(get_review_generator),
    user=Depends(get_current_user),
):
    try:
        record = await submit_review(store, user.id, payload.code, payload.language, generate)
    except ValidationError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=exc.message) from exc
    except GenerationError as exc:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=exc.message) from exc
    except StorageError as exc:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=exc.message
        ) from exc
    return ReviewResponse(
        review=record.review_text,
        rating=record.rating,
        tags=record.tags,
        suggestion_id=record.id,
        timestamp=record.created_at,
    )
