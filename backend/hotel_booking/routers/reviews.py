"""
评价路由
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from hotel_booking.database import get_db
from hotel_booking.models.entities import User
from hotel_booking.models.schemas import Envelope, ReviewCreate, ReviewResponse
from hotel_booking.security.auth import require_customer
from hotel_booking.services.review_service import ReviewService

router = APIRouter(prefix="/api/reviews", tags=["评价"])


@router.post("", response_model=Envelope[ReviewResponse], status_code=status.HTTP_201_CREATED)
def create_review(
    data: ReviewCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_customer)
):
    """提交评价"""
    service = ReviewService(db)
    review = service.create_review(data, current_user)
    return Envelope(data=ReviewResponse.model_validate(review))
