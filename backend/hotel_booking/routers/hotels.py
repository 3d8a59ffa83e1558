"""
酒店管理路由
"""
from typing import List, Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from hotel_booking.database import get_db
from hotel_booking.exceptions import ApiError
from hotel_booking.models.entities import User
from hotel_booking.models.schemas import (
    Envelope, HotelCreate, HotelResponse, HotelDetailResponse, HotelSearchItem,
    RoomCreate, RoomResponse
)
from hotel_booking.security.auth import get_current_user, require_owner
from hotel_booking.services.hotel_service import HotelService

router = APIRouter(prefix="/api/hotels", tags=["酒店管理"])


@router.post("", response_model=Envelope[HotelResponse], status_code=status.HTTP_201_CREATED)
def create_hotel(
    data: HotelCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_owner)
):
    """创建酒店"""
    service = HotelService(db)
    hotel = service.create_hotel(data, current_user)
    return Envelope(data=HotelResponse.model_validate(hotel))


@router.post("/{hotel_id}/rooms", response_model=Envelope[RoomResponse], status_code=status.HTTP_201_CREATED)
def add_room(
    hotel_id: int,
    data: RoomCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_owner)
):
    """添加房间"""
    service = HotelService(db)
    room = service.add_room(hotel_id, data, current_user)
    return Envelope(data=RoomResponse.model_validate(room))


@router.get("", response_model=Envelope[List[HotelSearchItem]])
def search_hotels(
    city: Optional[str] = None,
    country: Optional[str] = None,
    min_price: Optional[float] = Query(None, alias="minPrice", ge=0),
    max_price: Optional[float] = Query(None, alias="maxPrice", ge=0),
    min_rating: Optional[float] = Query(None, alias="minRating", ge=0, le=5),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """搜索酒店"""
    service = HotelService(db)
    hotels = service.search_hotels(city, country, min_price, max_price, min_rating)
    return Envelope(data=[HotelSearchItem.model_validate(h) for h in hotels])


@router.get("/{hotel_id}", response_model=Envelope[HotelDetailResponse])
def get_hotel(
    hotel_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """获取酒店详情"""
    service = HotelService(db)
    hotel = service.get_hotel(hotel_id)
    if not hotel:
        raise ApiError("HOTEL_NOT_FOUND", "酒店不存在")
    return Envelope(data=HotelDetailResponse.model_validate(hotel))
