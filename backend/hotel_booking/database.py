"""
数据库配置 - 持久化层
引擎与会话工厂由 Database 对象持有，每个应用实例一份
"""
import logging
from typing import Iterator, Optional
from fastapi import Request
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker, declarative_base
from sqlalchemy.pool import StaticPool

logger = logging.getLogger(__name__)

Base = declarative_base()


class Database:
    """引擎 + 会话工厂"""

    def __init__(self, url: str, isolation_level: Optional[str] = None, echo: bool = False):
        kwargs = {"echo": echo}
        if url.startswith("sqlite"):
            kwargs["connect_args"] = {"check_same_thread": False}
            # 内存库必须共享同一连接，否则每个会话看到的是空库
            if ":memory:" in url or url in ("sqlite://", "sqlite:///"):
                kwargs["poolclass"] = StaticPool
        if isolation_level:
            kwargs["isolation_level"] = isolation_level

        self.url = url
        self.engine = create_engine(url, **kwargs)
        self.session_factory = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)

    def create_all(self) -> None:
        """初始化数据库表"""
        from hotel_booking.models import entities  # noqa
        Base.metadata.create_all(bind=self.engine)
        logger.info(f"Database tables ensured on {self.engine.url.render_as_string(hide_password=True)}")

    def session(self) -> Session:
        return self.session_factory()


def get_db(request: Request) -> Iterator[Session]:
    """依赖注入：获取数据库会话"""
    db = request.app.state.database.session()
    try:
        yield db
    finally:
        db.close()
