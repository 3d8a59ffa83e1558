"""
Tests for hotel_booking/services/hotel_service.py
"""
import pytest
from decimal import Decimal

from hotel_booking.exceptions import ApiError
from hotel_booking.models.entities import Hotel, Room
from hotel_booking.models.schemas import HotelCreate, RoomCreate
from hotel_booking.services.hotel_service import HotelService


@pytest.fixture
def service(db_session):
    return HotelService(db_session)


def _hotel(db, owner, name, city, country, rating=0.0, prices=()):
    hotel = Hotel(owner_id=owner.id, name=name, city=city, country=country,
                  amenities=[], rating=rating, total_reviews=0)
    db.add(hotel)
    db.flush()
    for i, price in enumerate(prices):
        db.add(Room(hotel_id=hotel.id, room_number=str(100 + i), room_type="standard",
                    price_per_night=Decimal(price), max_occupancy=2))
    db.commit()
    return hotel


class TestCreateHotel:

    def test_defaults(self, service, owner):
        hotel = service.create_hotel(
            HotelCreate(name="山景酒店", city="Manali", country="India", amenities=["wifi"]), owner
        )
        assert hotel.id is not None
        assert hotel.owner_id == owner.id
        assert hotel.rating == 0.0
        assert hotel.total_reviews == 0
        assert hotel.amenities == ["wifi"]


class TestAddRoom:

    def test_success(self, service, owner, sample_hotel):
        room = service.add_room(
            sample_hotel.id,
            RoomCreate(room_number="201", room_type="suite", price_per_night=Decimal("250.50"), max_occupancy=4),
            owner,
        )
        assert room.hotel_id == sample_hotel.id
        assert room.price_per_night == Decimal("250.50")

    def test_hotel_not_found(self, service, owner):
        with pytest.raises(ApiError) as exc:
            service.add_room(999, RoomCreate(room_number="1", room_type="x",
                                             price_per_night=Decimal("10"), max_occupancy=1), owner)
        assert exc.value.code == "HOTEL_NOT_FOUND"

    def test_not_owner(self, service, other_owner, sample_hotel):
        with pytest.raises(ApiError) as exc:
            service.add_room(sample_hotel.id, RoomCreate(room_number="1", room_type="x",
                                                         price_per_night=Decimal("10"), max_occupancy=1),
                             other_owner)
        assert exc.value.code == "FORBIDDEN"

    def test_duplicate_room_number(self, service, owner, sample_room):
        with pytest.raises(ApiError) as exc:
            service.add_room(sample_room.hotel_id,
                             RoomCreate(room_number="101", room_type="x",
                                        price_per_night=Decimal("10"), max_occupancy=1),
                             owner)
        assert exc.value.code == "ROOM_ALREADY_EXISTS"

    def test_same_number_in_other_hotel_allowed(self, service, owner, sample_room, db_session):
        other = _hotel(db_session, owner, "另一家", "Goa", "India")
        room = service.add_room(other.id, RoomCreate(room_number="101", room_type="x",
                                                     price_per_night=Decimal("10"), max_occupancy=1), owner)
        assert room.room_number == "101"


class TestSearchHotels:

    @pytest.fixture
    def hotels(self, db_session, owner):
        return {
            'cheap': _hotel(db_session, owner, "Cheap Inn", "Goa", "India", 3.0, ["40.00", "90.00"]),
            'mid': _hotel(db_session, owner, "Mid Stay", "goa", "India", 4.2, ["120.00"]),
            'lux': _hotel(db_session, owner, "Lux Palace", "Mumbai", "India", 4.8, ["500.00"]),
            'empty': _hotel(db_session, owner, "No Rooms", "Goa", "India", 5.0),
        }

    def test_city_case_insensitive_and_skips_roomless(self, service, hotels):
        names = [h['name'] for h in service.search_hotels(city="GOA")]
        assert names == ["Cheap Inn", "Mid Stay"]

    def test_country_filter(self, service, hotels):
        assert service.search_hotels(country="france") == []
        assert len(service.search_hotels(country="india")) == 3

    def test_min_price_per_night_is_cheapest_room(self, service, hotels):
        result = {h['name']: h for h in service.search_hotels()}
        assert result["Cheap Inn"]['min_price_per_night'] == 40.0

    def test_price_range_on_cheapest_room(self, service, hotels):
        names = [h['name'] for h in service.search_hotels(min_price=50, max_price=200)]
        assert names == ["Mid Stay"]

    def test_min_rating(self, service, hotels):
        names = [h['name'] for h in service.search_hotels(min_rating=4.5)]
        assert names == ["Lux Palace"]

    def test_get_hotel_with_rooms(self, service, hotels):
        hotel = service.get_hotel(hotels['cheap'].id)
        assert sorted(r.room_number for r in hotel.rooms) == ["100", "101"]
        assert service.get_hotel(999) is None
