"""
应用配置
从环境变量 / .env 读取，由 create_app 显式构造并挂载到 app.state
"""
from typing import List, Optional
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """应用设置"""

    # 应用基础配置
    APP_NAME: str = "Hotel Booking API"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: List[str] = ["*"]

    # 数据库配置
    DATABASE_URL: str = "sqlite:///./hotel_booking.db"
    # 例如 PostgreSQL 下设置为 SERIALIZABLE
    DATABASE_ISOLATION_LEVEL: Optional[str] = None

    # JWT 配置
    SECRET_KEY: str = "your-secret-key-change-in-production"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_DAYS: int = 7
    BCRYPT_ROUNDS: int = 10

    # 预订规则
    CANCELLATION_NOTICE_HOURS: int = 24

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")
