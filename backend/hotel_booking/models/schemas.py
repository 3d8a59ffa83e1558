"""
Pydantic 模式定义
用于 API 请求/响应验证，JSON 字段统一为 camelCase
"""
from datetime import datetime, date
from decimal import Decimal
from typing import Generic, List, Optional, TypeVar
from pydantic import BaseModel, ConfigDict, EmailStr, Field
from pydantic.alias_generators import to_camel
from hotel_booking.models.entities import UserRole, BookingStatus

T = TypeVar("T")


class ApiModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class Envelope(BaseModel, Generic[T]):
    """统一响应信封"""
    success: bool = True
    data: Optional[T] = None
    error: Optional[str] = None


# ============== 认证 Schemas ==============

class SignupRequest(ApiModel):
    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    password: str = Field(..., min_length=6)
    role: Optional[UserRole] = None
    phone: str = Field(..., min_length=10, max_length=20)


class LoginRequest(ApiModel):
    email: EmailStr
    password: str = Field(..., min_length=6)


class UserResponse(ApiModel):
    id: int
    name: str
    email: str
    role: UserRole
    phone: Optional[str] = None


class LoginUser(ApiModel):
    id: int
    name: str
    email: str
    role: UserRole


class LoginResponse(ApiModel):
    token: str
    user: LoginUser


# ============== 酒店 / 房间 Schemas ==============

class HotelCreate(ApiModel):
    name: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = None
    city: str = Field(..., min_length=1, max_length=100)
    country: str = Field(..., min_length=1, max_length=100)
    amenities: List[str] = Field(default_factory=list)


class HotelResponse(ApiModel):
    id: int
    owner_id: int
    name: str
    description: Optional[str] = None
    city: str
    country: str
    amenities: List[str] = Field(default_factory=list)
    rating: float
    total_reviews: int


class RoomCreate(ApiModel):
    room_number: str = Field(..., min_length=1, max_length=20)
    room_type: str = Field(..., min_length=1, max_length=50)
    price_per_night: Decimal = Field(..., gt=0, max_digits=10, decimal_places=2)
    max_occupancy: int = Field(..., ge=1)


class RoomSummary(ApiModel):
    id: int
    room_number: str
    room_type: str
    price_per_night: float
    max_occupancy: int


class RoomResponse(RoomSummary):
    hotel_id: int


class HotelSearchItem(ApiModel):
    id: int
    name: str
    description: Optional[str] = None
    city: str
    country: str
    amenities: List[str] = Field(default_factory=list)
    rating: float
    total_reviews: int
    min_price_per_night: float


class HotelDetailResponse(HotelResponse):
    rooms: List[RoomSummary] = Field(default_factory=list)


# ============== 预订 Schemas ==============

class BookingCreate(ApiModel):
    room_id: int
    check_in_date: date
    check_out_date: date
    guests: int = Field(..., ge=1)


class BookingResponse(ApiModel):
    id: int
    user_id: int
    room_id: int
    hotel_id: int
    check_in_date: date
    check_out_date: date
    guests: int
    total_price: float
    status: BookingStatus
    booking_date: datetime


class BookingListItem(ApiModel):
    id: int
    room_id: int
    hotel_id: int
    hotel_name: str
    room_number: str
    room_type: str
    check_in_date: date
    check_out_date: date
    guests: int
    total_price: float
    status: BookingStatus
    booking_date: datetime


class BookingCancelResponse(ApiModel):
    id: int
    status: BookingStatus
    cancelled_at: Optional[datetime] = None


# ============== 评价 Schemas ==============

class ReviewCreate(ApiModel):
    booking_id: int
    rating: int = Field(..., ge=1, le=5)
    comment: Optional[str] = Field(None, max_length=2000)


class ReviewResponse(ApiModel):
    id: int
    user_id: int
    hotel_id: int
    booking_id: int
    rating: int
    comment: Optional[str] = None
    created_at: datetime
