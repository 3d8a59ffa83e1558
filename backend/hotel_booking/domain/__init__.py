"""
hotel_booking/domain - 预订领域层

纯规则（ReservationRules）+ 状态机 + 存储接口
"""
from hotel_booking.domain.reservation_rules import (
    ReservationRules, Rejection, RejectionReason, BookingRequest, overlaps,
)
from hotel_booking.domain.state_machine import BOOKING_STATE_MACHINE, StateMachine
from hotel_booking.domain.booking_store import BookingStore, SqlAlchemyBookingStore

__all__ = [
    "ReservationRules",
    "Rejection",
    "RejectionReason",
    "BookingRequest",
    "overlaps",
    "BOOKING_STATE_MACHINE",
    "StateMachine",
    "BookingStore",
    "SqlAlchemyBookingStore",
]
