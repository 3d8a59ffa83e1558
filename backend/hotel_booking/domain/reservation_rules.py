"""
hotel_booking/domain/reservation_rules.py

预订规则 - 纯决策逻辑，不做任何 I/O

- accept: 新预订是否可接受（日期、容量、可用性）
- cancel: 预订是否可取消（归属、状态、截止时间）
- eligible_for_review: 预订是否可评价
- recompute_rating: 酒店评分聚合

拒绝以 Rejection 值返回，由调用方映射为 HTTP 响应。
"""
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, UTC
from decimal import Decimal
from enum import Enum
from typing import Iterable, Tuple, Union

from hotel_booking.domain.state_machine import BOOKING_STATE_MACHINE
from hotel_booking.models.entities import Booking, BookingStatus


class RejectionReason(str, Enum):
    """拒绝原因（闭集）"""
    INVALID_DATES = "INVALID_DATES"
    INVALID_REQUEST = "INVALID_REQUEST"
    INVALID_CAPACITY = "INVALID_CAPACITY"
    ROOM_NOT_AVAILABLE = "ROOM_NOT_AVAILABLE"
    FORBIDDEN = "FORBIDDEN"
    ALREADY_CANCELLED = "ALREADY_CANCELLED"
    CANCELLATION_DEADLINE_PASSED = "CANCELLATION_DEADLINE_PASSED"
    BOOKING_NOT_ELIGIBLE = "BOOKING_NOT_ELIGIBLE"
    ALREADY_REVIEWED = "ALREADY_REVIEWED"


@dataclass(frozen=True)
class Rejection:
    reason: RejectionReason
    detail: str = ""


@dataclass(frozen=True)
class BookingRequest:
    """已通过 schema 校验的预订请求"""
    user_id: int
    room_id: int
    check_in_date: date
    check_out_date: date
    guests: int


def overlaps(check_in: date, check_out: date, other_check_in: date, other_check_out: date) -> bool:
    """半开区间 [check_in, check_out) 重叠判断，同日退房/入住不冲突"""
    return check_in < other_check_out and check_out > other_check_in


def _status_value(status) -> str:
    return status.value if isinstance(status, Enum) else status


def _as_naive_utc(moment: datetime) -> datetime:
    if moment.tzinfo is not None:
        return moment.astimezone(UTC).replace(tzinfo=None)
    return moment


def _as_datetime(value: date) -> datetime:
    """日期按当天 00:00 处理"""
    if isinstance(value, datetime):
        return _as_naive_utc(value)
    return datetime.combine(value, time.min)


class ReservationRules:
    """预订规则"""

    def __init__(self, cancellation_notice: timedelta = timedelta(hours=24)):
        self.cancellation_notice = cancellation_notice

    def accept(self, request: BookingRequest, room, existing_confirmed_bookings: Iterable,
               today: date) -> Union[Booking, Rejection]:
        """
        判断预订请求是否可接受

        校验顺序固定：日期 -> 退房日期 -> 容量 -> 可用性。
        调用方必须保证 existing_confirmed_bookings 是一致的快照，
        并在同一临界区内写入返回的预订。

        Args:
            request: 预订请求
            room: 目标房间（需有 id/hotel_id/max_occupancy/price_per_night）
            existing_confirmed_bookings: 该房间当前已确认的预订
            today: 当前日期

        Returns:
            新的 confirmed 预订（未持久化），或 Rejection
        """
        if request.check_in_date <= today:
            return Rejection(RejectionReason.INVALID_DATES, "入住日期必须晚于今天")

        if request.check_out_date <= request.check_in_date:
            return Rejection(RejectionReason.INVALID_REQUEST, "离店日期必须晚于入住日期")

        if request.guests > room.max_occupancy:
            return Rejection(
                RejectionReason.INVALID_CAPACITY,
                f"入住人数 {request.guests} 超过房间上限 {room.max_occupancy}"
            )

        for existing in existing_confirmed_bookings:
            if _status_value(existing.status) != BookingStatus.CONFIRMED.value:
                continue
            if overlaps(request.check_in_date, request.check_out_date,
                        existing.check_in_date, existing.check_out_date):
                return Rejection(
                    RejectionReason.ROOM_NOT_AVAILABLE,
                    f"与预订 {existing.id} 时间冲突"
                )

        nights = (request.check_out_date - request.check_in_date).days
        total_price = Decimal(str(room.price_per_night)) * nights

        return Booking(
            user_id=request.user_id,
            room_id=room.id,
            hotel_id=room.hotel_id,
            check_in_date=request.check_in_date,
            check_out_date=request.check_out_date,
            guests=request.guests,
            total_price=total_price,
            status=BookingStatus.CONFIRMED,
        )

    def cancel(self, booking: Booking, requesting_user_id: int,
               now: datetime) -> Union[Booking, Rejection]:
        """
        取消预订（原地修改 booking）

        距入住不足 cancellation_notice（默认 24 小时）时拒绝。
        """
        if booking.user_id != requesting_user_id:
            return Rejection(RejectionReason.FORBIDDEN, "只能取消自己的预订")

        current = _status_value(booking.status)
        if (BOOKING_STATE_MACHINE.is_terminal(current)
                or not BOOKING_STATE_MACHINE.can_transition(current, BookingStatus.CANCELLED.value, "cancel")):
            return Rejection(RejectionReason.ALREADY_CANCELLED, f"状态为 {current} 的预订不可取消")

        now = _as_naive_utc(now)
        until_check_in = _as_datetime(booking.check_in_date) - now
        if until_check_in < self.cancellation_notice:
            return Rejection(
                RejectionReason.CANCELLATION_DEADLINE_PASSED,
                f"距入住仅剩 {until_check_in.total_seconds() / 3600:.1f} 小时"
            )

        booking.status = BookingStatus.CANCELLED
        booking.cancelled_at = now
        return booking

    def eligible_for_review(self, booking: Booking, now: datetime) -> bool:
        """未取消且已离店（离店日期严格早于 now）"""
        if _status_value(booking.status) == BookingStatus.CANCELLED.value:
            return False
        return _as_datetime(booking.check_out_date) < _as_naive_utc(now)

    @staticmethod
    def recompute_rating(existing_ratings: Iterable[int], new_rating: int) -> Tuple[float, int]:
        """
        重新计算酒店评分

        Returns:
            (平均分, 评价数)
        """
        ratings = list(existing_ratings)
        ratings.append(new_rating)
        return sum(ratings) / len(ratings), len(ratings)
