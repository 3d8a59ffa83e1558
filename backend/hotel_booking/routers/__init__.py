# API Routers
from hotel_booking.routers import auth, hotels, bookings, reviews

__all__ = ['auth', 'hotels', 'bookings', 'reviews']
