"""
应用入口
create_app 显式组装配置、数据库、房间锁表和路由
"""
import logging
from contextlib import asynccontextmanager
from typing import Optional
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from hotel_booking import __version__
from hotel_booking.config import Settings
from hotel_booking.database import Database
from hotel_booking.exceptions import register_exception_handlers
from hotel_booking.routers import auth, hotels, bookings, reviews
from hotel_booking.services.room_locks import RoomLockRegistry

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """应用生命周期管理"""
    app.state.database.create_all()
    logger.info(f"{app.state.settings.APP_NAME} started")
    yield
    app.state.database.engine.dispose()


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or Settings()
    configure_logging(settings)

    app = FastAPI(
        title=settings.APP_NAME,
        description="酒店预订后端：注册登录、酒店与房间、预订、评价",
        version=__version__,
        debug=settings.DEBUG,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.database = Database(
        settings.DATABASE_URL,
        isolation_level=settings.DATABASE_ISOLATION_LEVEL,
        echo=settings.DEBUG,
    )
    app.state.room_locks = RoomLockRegistry()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)

    app.include_router(auth.router)
    app.include_router(hotels.router)
    app.include_router(bookings.router)
    app.include_router(reviews.router)

    @app.get("/health")
    def health_check():
        """健康检查"""
        return {"status": "ok"}

    return app


app = create_app()
