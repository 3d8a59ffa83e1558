"""
Pytest 配置和共享 fixtures
"""
import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from datetime import date, timedelta
from decimal import Decimal
from fastapi.testclient import TestClient

from hotel_booking.config import Settings
from hotel_booking.database import Base, get_db
from hotel_booking.main import create_app
from hotel_booking.models import entities  # noqa
from hotel_booking.models.entities import User, UserRole, Hotel, Room, Booking, BookingStatus
from hotel_booking.security.auth import get_password_hash, create_access_token
from hotel_booking.services.room_locks import RoomLockRegistry


@pytest.fixture
def settings():
    """测试配置（低成本 bcrypt）"""
    return Settings(
        DATABASE_URL="sqlite:///:memory:",
        SECRET_KEY="test-secret-key",
        BCRYPT_ROUNDS=4,
        LOG_LEVEL="WARNING",
    )


@pytest.fixture(scope="function")
def db_engine():
    """创建内存数据库引擎"""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def db_session(db_engine):
    """创建数据库会话"""
    SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)
    session = SessionLocal()
    yield session
    session.close()


@pytest.fixture
def room_locks():
    return RoomLockRegistry()


@pytest.fixture(scope="function")
def client(db_session, settings):
    """创建测试客户端"""
    app = create_app(settings)

    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


# ============== 用户相关 Fixtures ==============

def _make_user(db, settings, email, role, name="测试用户"):
    user = User(
        name=name,
        email=email,
        password_hash=get_password_hash("123456", settings.BCRYPT_ROUNDS),
        role=role,
        phone="13800138000",
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture
def owner(db_session, settings):
    """酒店业主"""
    return _make_user(db_session, settings, "owner@example.com", UserRole.OWNER, "业主老王")


@pytest.fixture
def other_owner(db_session, settings):
    return _make_user(db_session, settings, "owner2@example.com", UserRole.OWNER, "业主老李")


@pytest.fixture
def customer(db_session, settings):
    """顾客"""
    return _make_user(db_session, settings, "customer@example.com", UserRole.CUSTOMER, "张三")


@pytest.fixture
def other_customer(db_session, settings):
    return _make_user(db_session, settings, "customer2@example.com", UserRole.CUSTOMER, "李四")


@pytest.fixture
def owner_headers(owner, settings):
    return {"Authorization": f"Bearer {create_access_token(owner, settings)}"}


@pytest.fixture
def other_owner_headers(other_owner, settings):
    return {"Authorization": f"Bearer {create_access_token(other_owner, settings)}"}


@pytest.fixture
def customer_headers(customer, settings):
    return {"Authorization": f"Bearer {create_access_token(customer, settings)}"}


@pytest.fixture
def other_customer_headers(other_customer, settings):
    return {"Authorization": f"Bearer {create_access_token(other_customer, settings)}"}


# ============== 实体相关 Fixtures ==============

@pytest.fixture
def sample_hotel(db_session, owner):
    """创建测试酒店"""
    hotel = Hotel(
        owner_id=owner.id,
        name="海景酒店",
        description="Seaside hotel",
        city="Goa",
        country="India",
        amenities=["wifi", "pool"],
        rating=0.0,
        total_reviews=0,
    )
    db_session.add(hotel)
    db_session.commit()
    db_session.refresh(hotel)
    return hotel


@pytest.fixture
def sample_room(db_session, sample_hotel):
    """创建测试房间：每晚 100，最多 2 人"""
    room = Room(
        hotel_id=sample_hotel.id,
        room_number="101",
        room_type="deluxe",
        price_per_night=Decimal("100.00"),
        max_occupancy=2,
    )
    db_session.add(room)
    db_session.commit()
    db_session.refresh(room)
    return room


@pytest.fixture
def make_booking(db_session):
    """直接写入预订记录（绕过规则，用于构造历史数据）"""
    def _make(user, room, check_in, check_out, status=BookingStatus.CONFIRMED, guests=1):
        nights = (check_out - check_in).days
        booking = Booking(
            user_id=user.id,
            room_id=room.id,
            hotel_id=room.hotel_id,
            check_in_date=check_in,
            check_out_date=check_out,
            guests=guests,
            total_price=Decimal(str(room.price_per_night)) * nights,
            status=status,
        )
        db_session.add(booking)
        db_session.commit()
        db_session.refresh(booking)
        return booking
    return _make


@pytest.fixture
def past_booking(make_booking, customer, sample_room):
    """已离店的预订"""
    today = date.today()
    return make_booking(customer, sample_room, today - timedelta(days=5), today - timedelta(days=2))
