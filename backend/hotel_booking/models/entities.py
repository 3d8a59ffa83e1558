"""
实体对象定义
用户、酒店、房间、预订、评价
"""
from datetime import datetime, UTC
from enum import Enum
from sqlalchemy import (
    Column, Integer, String, Float, DateTime, Date, JSON,
    ForeignKey, Text, Enum as SQLEnum, Numeric, UniqueConstraint, CheckConstraint
)
from sqlalchemy.orm import relationship
from hotel_booking.database import Base


def utcnow() -> datetime:
    """当前 UTC 时间（naive，数据库统一按 UTC 存储）"""
    return datetime.now(UTC).replace(tzinfo=None)


# ============== 枚举定义 ==============

class UserRole(str, Enum):
    """用户角色"""
    CUSTOMER = "customer"  # 顾客
    OWNER = "owner"        # 酒店业主


class BookingStatus(str, Enum):
    """预订状态"""
    CONFIRMED = "confirmed"  # 已确认
    CANCELLED = "cancelled"  # 已取消


# ============== 实体定义 ==============

class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(SQLEnum(UserRole), nullable=False, default=UserRole.CUSTOMER)
    phone = Column(String(20))
    created_at = Column(DateTime, default=utcnow)

    hotels = relationship("Hotel", back_populates="owner")
    bookings = relationship("Booking", back_populates="user")


class Hotel(Base):
    """
    酒店对象
    rating/total_reviews 为评价聚合值，每次新增评价时重新计算
    """
    __tablename__ = "hotels"

    id = Column(Integer, primary_key=True, index=True)
    owner_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    name = Column(String(200), nullable=False)
    description = Column(Text)
    city = Column(String(100), nullable=False)
    country = Column(String(100), nullable=False)
    amenities = Column(JSON, default=list)
    rating = Column(Float, default=0.0, nullable=False)
    total_reviews = Column(Integer, default=0, nullable=False)
    created_at = Column(DateTime, default=utcnow)

    owner = relationship("User", back_populates="hotels")
    rooms = relationship("Room", back_populates="hotel", order_by="Room.room_number")
    reviews = relationship("Review", back_populates="hotel")


class Room(Base):
    __tablename__ = "rooms"
    __table_args__ = (
        UniqueConstraint("hotel_id", "room_number", name="uq_room_hotel_number"),
        CheckConstraint("price_per_night > 0", name="ck_room_price_positive"),
        CheckConstraint("max_occupancy > 0", name="ck_room_occupancy_positive"),
    )

    id = Column(Integer, primary_key=True, index=True)
    hotel_id = Column(Integer, ForeignKey("hotels.id"), nullable=False, index=True)
    room_number = Column(String(20), nullable=False)
    room_type = Column(String(50), nullable=False)
    price_per_night = Column(Numeric(10, 2), nullable=False)
    max_occupancy = Column(Integer, nullable=False)
    created_at = Column(DateTime, default=utcnow)

    hotel = relationship("Hotel", back_populates="rooms")
    bookings = relationship("Booking", back_populates="room")


class Booking(Base):
    """
    预订对象
    只允许 confirmed -> cancelled，记录永不删除
    """
    __tablename__ = "bookings"
    __table_args__ = (
        CheckConstraint("check_out_date > check_in_date", name="ck_booking_dates"),
        CheckConstraint("guests > 0", name="ck_booking_guests_positive"),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    room_id = Column(Integer, ForeignKey("rooms.id"), nullable=False, index=True)
    hotel_id = Column(Integer, ForeignKey("hotels.id"), nullable=False, index=True)
    check_in_date = Column(Date, nullable=False)
    check_out_date = Column(Date, nullable=False)
    guests = Column(Integer, nullable=False)
    total_price = Column(Numeric(12, 2), nullable=False)
    status = Column(SQLEnum(BookingStatus), nullable=False, default=BookingStatus.CONFIRMED, index=True)
    booking_date = Column(DateTime, default=utcnow, nullable=False)
    cancelled_at = Column(DateTime)

    user = relationship("User", back_populates="bookings")
    room = relationship("Room", back_populates="bookings")
    hotel = relationship("Hotel")
    review = relationship("Review", back_populates="booking", uselist=False)


class Review(Base):
    __tablename__ = "reviews"
    __table_args__ = (
        CheckConstraint("rating >= 1 AND rating <= 5", name="ck_review_rating_range"),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    hotel_id = Column(Integer, ForeignKey("hotels.id"), nullable=False, index=True)
    # 一个预订最多一条评价
    booking_id = Column(Integer, ForeignKey("bookings.id"), nullable=False, unique=True)
    rating = Column(Integer, nullable=False)
    comment = Column(Text)
    created_at = Column(DateTime, default=utcnow)

    hotel = relationship("Hotel", back_populates="reviews")
    booking = relationship("Booking", back_populates="review")
