"""
评价服务
离店后的预订可评价一次，新增评价后重新计算酒店评分
"""
import logging
from datetime import datetime
from typing import Optional
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from hotel_booking.domain.booking_store import BookingStore, SqlAlchemyBookingStore
from hotel_booking.domain.reservation_rules import RejectionReason, ReservationRules
from hotel_booking.exceptions import ApiError
from hotel_booking.models.entities import Review, User, utcnow
from hotel_booking.models.schemas import ReviewCreate

logger = logging.getLogger(__name__)


class ReviewService:
    """评价服务"""

    def __init__(self, db: Session, store: Optional[BookingStore] = None):
        self.db = db
        self.store = store or SqlAlchemyBookingStore(db)
        self.rules = ReservationRules()

    def create_review(self, data: ReviewCreate, user: User, now: Optional[datetime] = None) -> Review:
        """创建评价并更新酒店评分"""
        now = now or utcnow()

        try:
            with self.store.transaction():
                booking = self.store.get_booking(data.booking_id)
                if not booking:
                    raise ApiError("BOOKING_NOT_FOUND", "预订不存在")

                if booking.user_id != user.id:
                    raise ApiError(RejectionReason.FORBIDDEN.value, "只能评价自己的预订")

                if not self.rules.eligible_for_review(booking, now):
                    raise ApiError(RejectionReason.BOOKING_NOT_ELIGIBLE.value, "预订未完成或已取消")

                if self.store.has_review(booking.id):
                    raise ApiError(RejectionReason.ALREADY_REVIEWED.value, "该预订已评价")

                existing_ratings = self.store.list_ratings(booking.hotel_id)
                review = self.store.add_review(Review(
                    user_id=user.id,
                    hotel_id=booking.hotel_id,
                    booking_id=booking.id,
                    rating=data.rating,
                    comment=data.comment,
                ))
                average, count = self.rules.recompute_rating(existing_ratings, data.rating)
                self.store.update_hotel_rating(booking.hotel_id, average, count)
        except IntegrityError:
            # 并发提交同一预订的评价，由 booking_id 唯一约束兜底
            logger.warning(f"Duplicate review for booking {data.booking_id}")
            raise ApiError(RejectionReason.ALREADY_REVIEWED.value, "该预订已评价")

        self.store.refresh(review)
        logger.info(f"Review {review.id} added for hotel {review.hotel_id}: rating now {average:.2f} ({count})")
        return review
