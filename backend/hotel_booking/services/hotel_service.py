"""
酒店服务 - 酒店与房间管理、酒店搜索
"""
import logging
from typing import List, Optional
from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload
from hotel_booking.exceptions import ApiError
from hotel_booking.models.entities import Hotel, Room, User
from hotel_booking.models.schemas import HotelCreate, RoomCreate

logger = logging.getLogger(__name__)


class HotelService:
    """酒店服务"""

    def __init__(self, db: Session):
        self.db = db

    def get_hotel(self, hotel_id: int) -> Optional[Hotel]:
        """获取单个酒店（含房间）"""
        return self.db.query(Hotel).options(selectinload(Hotel.rooms)).filter(
            Hotel.id == hotel_id
        ).first()

    def create_hotel(self, data: HotelCreate, owner: User) -> Hotel:
        """创建酒店"""
        hotel = Hotel(
            owner_id=owner.id,
            name=data.name,
            description=data.description,
            city=data.city,
            country=data.country,
            amenities=list(data.amenities),
            rating=0.0,
            total_reviews=0,
        )
        self.db.add(hotel)
        self.db.commit()
        self.db.refresh(hotel)
        logger.info(f"Owner {owner.id} created hotel {hotel.id}")
        return hotel

    def add_room(self, hotel_id: int, data: RoomCreate, owner: User) -> Room:
        """为酒店添加房间，同一酒店内房间号唯一"""
        hotel = self.db.query(Hotel).filter(Hotel.id == hotel_id).first()
        if not hotel:
            raise ApiError("HOTEL_NOT_FOUND", "酒店不存在")

        if hotel.owner_id != owner.id:
            raise ApiError("FORBIDDEN", "只能为自己的酒店添加房间")

        existing = self.db.query(Room).filter(
            Room.hotel_id == hotel_id,
            Room.room_number == data.room_number
        ).first()
        if existing:
            raise ApiError("ROOM_ALREADY_EXISTS", f"房间号 {data.room_number} 已存在")

        room = Room(
            hotel_id=hotel_id,
            room_number=data.room_number,
            room_type=data.room_type,
            price_per_night=data.price_per_night,
            max_occupancy=data.max_occupancy,
        )
        self.db.add(room)
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise ApiError("ROOM_ALREADY_EXISTS", f"房间号 {data.room_number} 已存在")
        self.db.refresh(room)
        return room

    def search_hotels(self, city: Optional[str] = None, country: Optional[str] = None,
                      min_price: Optional[float] = None, max_price: Optional[float] = None,
                      min_rating: Optional[float] = None) -> List[dict]:
        """
        搜索酒店

        城市/国家不区分大小写精确匹配；价格区间作用于酒店最低房价；
        没有房间的酒店不返回。
        """
        query = self.db.query(Hotel).options(selectinload(Hotel.rooms))

        if city:
            query = query.filter(func.lower(Hotel.city) == city.lower())
        if country:
            query = query.filter(func.lower(Hotel.country) == country.lower())
        if min_rating is not None:
            query = query.filter(Hotel.rating >= min_rating)

        results = []
        for hotel in query.order_by(Hotel.id).all():
            if not hotel.rooms:
                continue
            min_price_per_night = min(float(room.price_per_night) for room in hotel.rooms)
            if min_price is not None and min_price_per_night < min_price:
                continue
            if max_price is not None and min_price_per_night > max_price:
                continue
            results.append({
                'id': hotel.id,
                'name': hotel.name,
                'description': hotel.description,
                'city': hotel.city,
                'country': hotel.country,
                'amenities': hotel.amenities or [],
                'rating': hotel.rating,
                'total_reviews': hotel.total_reviews,
                'min_price_per_night': min_price_per_night,
            })
        return results
