"""
预订服务
组合 ReservationRules 与 BookingStore，负责锁、事务和错误映射
"""
import logging
from datetime import date, datetime, timedelta
from typing import List, Optional
from sqlalchemy.orm import Session, joinedload
from hotel_booking.config import Settings
from hotel_booking.domain.booking_store import BookingStore, SqlAlchemyBookingStore
from hotel_booking.domain.reservation_rules import BookingRequest, Rejection, ReservationRules
from hotel_booking.exceptions import ApiError
from hotel_booking.models.entities import Booking, BookingStatus, Room, User, utcnow
from hotel_booking.models.schemas import BookingCreate
from hotel_booking.services.room_locks import RoomLockRegistry

logger = logging.getLogger(__name__)


class BookingService:
    """预订服务"""

    def __init__(self, db: Session, settings: Settings, room_locks: RoomLockRegistry,
                 store: Optional[BookingStore] = None):
        self.db = db
        self.room_locks = room_locks
        self.store = store or SqlAlchemyBookingStore(db)
        self.rules = ReservationRules(
            cancellation_notice=timedelta(hours=settings.CANCELLATION_NOTICE_HOURS)
        )

    def create_booking(self, data: BookingCreate, user: User, today: Optional[date] = None) -> Booking:
        """
        创建预订

        整个 读取-校验-写入 在房间锁 + 单个事务内完成，
        同一房间的重叠请求只有一个能成功。
        """
        today = today or utcnow().date()
        request = BookingRequest(
            user_id=user.id,
            room_id=data.room_id,
            check_in_date=data.check_in_date,
            check_out_date=data.check_out_date,
            guests=data.guests,
        )

        with self.room_locks.hold(data.room_id):
            with self.store.transaction():
                room = self.store.get_room(data.room_id)
                if not room:
                    raise ApiError("ROOM_NOT_FOUND", "房间不存在")

                if room.hotel.owner_id == user.id:
                    raise ApiError("FORBIDDEN", "不能预订自己酒店的房间")

                existing = self.store.find_overlapping_confirmed(
                    room.id, request.check_in_date, request.check_out_date
                )
                result = self.rules.accept(request, room, existing, today)
                if isinstance(result, Rejection):
                    logger.info(f"Booking rejected for user {user.id} room {room.id}: {result.reason.value}")
                    raise ApiError.from_rejection(result)

                booking = self.store.add_booking(result)

        self.store.refresh(booking)
        logger.info(
            f"Booking {booking.id} confirmed: room {booking.room_id} "
            f"{booking.check_in_date} -> {booking.check_out_date}, total {booking.total_price}"
        )
        return booking

    def get_bookings(self, user: User, status: Optional[BookingStatus] = None) -> List[Booking]:
        """获取当前用户的预订，最新的在前"""
        query = self.db.query(Booking).options(
            joinedload(Booking.room), joinedload(Booking.hotel)
        ).filter(Booking.user_id == user.id)

        if status:
            query = query.filter(Booking.status == status)

        return query.order_by(Booking.booking_date.desc(), Booking.id.desc()).all()

    def get_booking_detail(self, booking: Booking) -> dict:
        """预订列表项（包含酒店名与房间信息）"""
        room: Room = booking.room
        return {
            'id': booking.id,
            'room_id': booking.room_id,
            'hotel_id': booking.hotel_id,
            'hotel_name': booking.hotel.name,
            'room_number': room.room_number,
            'room_type': room.room_type,
            'check_in_date': booking.check_in_date,
            'check_out_date': booking.check_out_date,
            'guests': booking.guests,
            'total_price': booking.total_price,
            'status': booking.status,
            'booking_date': booking.booking_date,
        }

    def cancel_booking(self, booking_id: int, user: User, now: Optional[datetime] = None) -> Booking:
        """取消预订"""
        now = now or utcnow()

        with self.store.transaction():
            booking = self.store.get_booking(booking_id)
            if not booking:
                raise ApiError("BOOKING_NOT_FOUND", "预订不存在")

            result = self.rules.cancel(booking, user.id, now)
            if isinstance(result, Rejection):
                logger.info(f"Cancellation of booking {booking_id} rejected: {result.reason.value}")
                raise ApiError.from_rejection(result)

        self.store.refresh(booking)
        logger.info(f"Booking {booking.id} cancelled by user {user.id}")
        return booking
