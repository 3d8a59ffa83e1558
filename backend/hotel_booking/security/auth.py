"""
认证与授权模块
Bearer JWT 身份 + 角色检查（customer / owner）
"""
import bcrypt
import logging
from datetime import datetime, timedelta, UTC
from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError, jwt
from sqlalchemy.orm import Session
from hotel_booking.config import Settings
from hotel_booking.database import get_db
from hotel_booking.dependencies import get_settings
from hotel_booking.exceptions import ApiError
from hotel_booking.models.entities import User, UserRole

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)


def get_password_hash(password: str, rounds: int = 10) -> str:
    """密码哈希"""
    salt = bcrypt.gensalt(rounds=rounds)
    return bcrypt.hashpw(password.encode('utf-8'), salt).decode('utf-8')


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """验证密码"""
    return bcrypt.checkpw(plain_password.encode('utf-8'), hashed_password.encode('utf-8'))


def create_access_token(user: User, settings: Settings) -> str:
    """创建 JWT token"""
    expire = datetime.now(UTC) + timedelta(days=settings.ACCESS_TOKEN_EXPIRE_DAYS)
    role = user.role.value if isinstance(user.role, UserRole) else str(user.role)
    to_encode = {
        "sub": str(user.id),
        "email": user.email,
        "role": role,
        "exp": expire,
    }
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_token(token: str, settings: Settings) -> dict:
    """解码 JWT token"""
    try:
        return jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except JWTError as e:
        logger.info(f"Rejected token: {e}")
        raise ApiError("UNAUTHORIZED", "无效的认证凭证")


async def get_current_user(
    request: Request,
    credentials: HTTPAuthorizationCredentials = Depends(security),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> User:
    """获取当前登录用户"""
    if credentials is None:
        # HTTPBearer 对缺失头和非 Bearer 方案都返回 None，这里区分两种情况
        if request.headers.get("Authorization"):
            raise ApiError("INVALID_AUTH_HEADER", "认证头格式应为 Bearer <token>")
        raise ApiError("UNAUTHORIZED", "缺少认证头")

    payload = decode_token(credentials.credentials, settings)
    try:
        user_id = int(payload.get("sub"))
    except (TypeError, ValueError):
        raise ApiError("UNAUTHORIZED", "无效的认证凭证")

    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise ApiError("UNAUTHORIZED", "用户不存在")
    return user


def require_role(role: UserRole):
    """角色检查依赖"""
    async def role_checker(current_user: User = Depends(get_current_user)) -> User:
        if current_user.role != role:
            raise ApiError("FORBIDDEN", f"需要 {role.value} 角色")
        return current_user
    return role_checker


require_customer = require_role(UserRole.CUSTOMER)
require_owner = require_role(UserRole.OWNER)
