from fastapi import Request

from hotel_booking.config import Settings
from hotel_booking.services.room_locks import RoomLockRegistry


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_room_locks(request: Request) -> RoomLockRegistry:
    return request.app.state.room_locks
