"""
用户服务 - 注册与登录
"""
import logging
from typing import Optional
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from hotel_booking.config import Settings
from hotel_booking.exceptions import ApiError
from hotel_booking.models.entities import User, UserRole
from hotel_booking.models.schemas import SignupRequest
from hotel_booking.security.auth import get_password_hash, verify_password, create_access_token

logger = logging.getLogger(__name__)


class UserService:
    """用户服务"""

    def __init__(self, db: Session, settings: Settings):
        self.db = db
        self.settings = settings

    def get_user_by_email(self, email: str) -> Optional[User]:
        return self.db.query(User).filter(User.email == email).first()

    def signup(self, data: SignupRequest) -> User:
        """注册，角色缺省为 customer"""
        if self.get_user_by_email(data.email):
            raise ApiError("EMAIL_ALREADY_EXISTS", "邮箱已注册")

        user = User(
            name=data.name,
            email=data.email,
            password_hash=get_password_hash(data.password, self.settings.BCRYPT_ROUNDS),
            role=data.role or UserRole.CUSTOMER,
            phone=data.phone,
        )
        self.db.add(user)
        try:
            self.db.commit()
        except IntegrityError:
            # 并发注册同一邮箱
            self.db.rollback()
            raise ApiError("EMAIL_ALREADY_EXISTS", "邮箱已注册")
        self.db.refresh(user)
        logger.info(f"User {user.id} signed up as {user.role.value}")
        return user

    def authenticate(self, email: str, password: str) -> dict:
        """认证登录，返回 token 与用户信息"""
        user = self.get_user_by_email(email)
        if not user or not verify_password(password, user.password_hash):
            raise ApiError("INVALID_CREDENTIALS", "邮箱或密码错误")

        return {
            'token': create_access_token(user, self.settings),
            'user': user,
        }
