"""
预订管理路由
"""
from typing import List, Optional
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from hotel_booking.config import Settings
from hotel_booking.database import get_db
from hotel_booking.dependencies import get_room_locks, get_settings
from hotel_booking.models.entities import BookingStatus, User
from hotel_booking.models.schemas import (
    Envelope, BookingCreate, BookingResponse, BookingListItem, BookingCancelResponse
)
from hotel_booking.security.auth import require_customer
from hotel_booking.services.booking_service import BookingService
from hotel_booking.services.room_locks import RoomLockRegistry

router = APIRouter(prefix="/api/bookings", tags=["预订管理"])


def get_booking_service(
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
    room_locks: RoomLockRegistry = Depends(get_room_locks),
) -> BookingService:
    return BookingService(db, settings, room_locks)


@router.post("", response_model=Envelope[BookingResponse], status_code=status.HTTP_201_CREATED)
def create_booking(
    data: BookingCreate,
    service: BookingService = Depends(get_booking_service),
    current_user: User = Depends(require_customer)
):
    """创建预订"""
    booking = service.create_booking(data, current_user)
    return Envelope(data=BookingResponse.model_validate(booking))


@router.get("", response_model=Envelope[List[BookingListItem]])
def list_bookings(
    status: Optional[BookingStatus] = None,
    service: BookingService = Depends(get_booking_service),
    current_user: User = Depends(require_customer)
):
    """获取我的预订列表"""
    bookings = service.get_bookings(current_user, status)
    return Envelope(data=[BookingListItem.model_validate(service.get_booking_detail(b)) for b in bookings])


@router.put("/{booking_id}/cancel", response_model=Envelope[BookingCancelResponse])
def cancel_booking(
    booking_id: int,
    service: BookingService = Depends(get_booking_service),
    current_user: User = Depends(require_customer)
):
    """取消预订"""
    booking = service.cancel_booking(booking_id, current_user)
    return Envelope(data=BookingCancelResponse.model_validate(booking))
