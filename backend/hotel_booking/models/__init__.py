from hotel_booking.models.entities import (
    UserRole, BookingStatus, User, Hotel, Room, Booking, Review
)

__all__ = ["UserRole", "BookingStatus", "User", "Hotel", "Room", "Booking", "Review"]
