"""
hotel_booking/domain/booking_store.py

BookingStore - 预订规则依赖的数据访问接口，及其 SQLAlchemy 实现
"""
from abc import ABC, abstractmethod
from contextlib import contextmanager
from datetime import date
from typing import Iterator, List, Optional
import logging

from sqlalchemy.orm import Session, joinedload

from hotel_booking.models.entities import Booking, BookingStatus, Hotel, Review, Room

logger = logging.getLogger(__name__)


class BookingStore(ABC):
    """预订存储抽象"""

    @abstractmethod
    def transaction(self):
        """事务上下文：正常退出提交，异常回滚"""

    @abstractmethod
    def refresh(self, entity) -> None:
        """提交后重新加载实体"""

    @abstractmethod
    def get_room(self, room_id: int) -> Optional[Room]:
        ...

    @abstractmethod
    def find_overlapping_confirmed(self, room_id: int, check_in: date, check_out: date) -> List[Booking]:
        """读取与 [check_in, check_out) 重叠的已确认预订"""

    @abstractmethod
    def add_booking(self, booking: Booking) -> Booking:
        ...

    @abstractmethod
    def get_booking(self, booking_id: int) -> Optional[Booking]:
        ...

    @abstractmethod
    def has_review(self, booking_id: int) -> bool:
        ...

    @abstractmethod
    def list_ratings(self, hotel_id: int) -> List[int]:
        ...

    @abstractmethod
    def add_review(self, review: Review) -> Review:
        ...

    @abstractmethod
    def update_hotel_rating(self, hotel_id: int, average: float, count: int) -> None:
        ...


class SqlAlchemyBookingStore(BookingStore):
    """基于 SQLAlchemy 会话的实现，写操作只 flush，由 transaction() 统一提交"""

    def __init__(self, db: Session):
        self._db = db

    @contextmanager
    def transaction(self) -> Iterator[Session]:
        # 结束此前的隐式事务，保证事务内读到的是新快照
        if self._db.in_transaction():
            self._db.commit()
        try:
            yield self._db
            self._db.commit()
        except Exception:
            self._db.rollback()
            raise

    def refresh(self, entity) -> None:
        self._db.refresh(entity)

    def get_room(self, room_id: int) -> Optional[Room]:
        return self._db.query(Room).options(joinedload(Room.hotel)).filter(Room.id == room_id).first()

    def find_overlapping_confirmed(self, room_id: int, check_in: date, check_out: date) -> List[Booking]:
        return self._db.query(Booking).filter(
            Booking.room_id == room_id,
            Booking.status == BookingStatus.CONFIRMED,
            Booking.check_in_date < check_out,
            Booking.check_out_date > check_in,
        ).all()

    def add_booking(self, booking: Booking) -> Booking:
        self._db.add(booking)
        self._db.flush()
        return booking

    def get_booking(self, booking_id: int) -> Optional[Booking]:
        return self._db.query(Booking).filter(Booking.id == booking_id).first()

    def has_review(self, booking_id: int) -> bool:
        return self._db.query(Review.id).filter(Review.booking_id == booking_id).first() is not None

    def list_ratings(self, hotel_id: int) -> List[int]:
        rows = self._db.query(Review.rating).filter(Review.hotel_id == hotel_id).all()
        return [row[0] for row in rows]

    def add_review(self, review: Review) -> Review:
        self._db.add(review)
        self._db.flush()
        return review

    def update_hotel_rating(self, hotel_id: int, average: float, count: int) -> None:
        updated = self._db.query(Hotel).filter(Hotel.id == hotel_id).update(
            {Hotel.rating: average, Hotel.total_reviews: count},
            synchronize_session="fetch",
        )
        if not updated:
            logger.warning(f"Hotel {hotel_id} not found while updating rating")
