"""
认证路由
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from hotel_booking.config import Settings
from hotel_booking.database import get_db
from hotel_booking.dependencies import get_settings
from hotel_booking.models.schemas import (
    Envelope, SignupRequest, LoginRequest, UserResponse, LoginResponse
)
from hotel_booking.services.user_service import UserService

router = APIRouter(prefix="/api/auth", tags=["认证"])


@router.post("/signup", response_model=Envelope[UserResponse], status_code=status.HTTP_201_CREATED)
def signup(
    data: SignupRequest,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings)
):
    """用户注册"""
    service = UserService(db, settings)
    user = service.signup(data)
    return Envelope(data=UserResponse.model_validate(user))


@router.post("/login", response_model=Envelope[LoginResponse])
def login(
    data: LoginRequest,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings)
):
    """用户登录"""
    service = UserService(db, settings)
    result = service.authenticate(data.email, data.password)
    return Envelope(data=LoginResponse.model_validate(result))
