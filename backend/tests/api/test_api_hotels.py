"""
酒店 API 单元测试
覆盖 /api/hotels 端点：创建酒店、添加房间、搜索、详情
"""
from fastapi.testclient import TestClient


HOTEL = {
    "name": "Sunset Resort",
    "description": "Beachfront",
    "city": "Goa",
    "country": "India",
    "amenities": ["wifi", "spa"],
}

ROOM = {
    "roomNumber": "201",
    "roomType": "suite",
    "pricePerNight": 150,
    "maxOccupancy": 3,
}


class TestCreateHotel:
    """创建酒店测试"""

    def test_owner_creates_hotel(self, client: TestClient, owner, owner_headers):
        response = client.post("/api/hotels", json=HOTEL, headers=owner_headers)

        assert response.status_code == 201
        data = response.json()["data"]
        assert data["ownerId"] == owner.id
        assert data["rating"] == 0
        assert data["totalReviews"] == 0
        assert data["amenities"] == ["wifi", "spa"]

    def test_customer_forbidden(self, client: TestClient, customer_headers):
        response = client.post("/api/hotels", json=HOTEL, headers=customer_headers)
        assert response.status_code == 403
        assert response.json()["error"] == "FORBIDDEN"

    def test_requires_auth(self, client: TestClient):
        response = client.post("/api/hotels", json=HOTEL)
        assert response.status_code == 401

    def test_missing_city(self, client: TestClient, owner_headers):
        payload = {k: v for k, v in HOTEL.items() if k != "city"}
        response = client.post("/api/hotels", json=payload, headers=owner_headers)
        assert response.status_code == 400
        assert response.json()["error"] == "INVALID_REQUEST"


class TestAddRoom:
    """添加房间测试"""

    def test_add_room(self, client: TestClient, sample_hotel, owner_headers):
        response = client.post(f"/api/hotels/{sample_hotel.id}/rooms", json=ROOM, headers=owner_headers)

        assert response.status_code == 201
        data = response.json()["data"]
        assert data["hotelId"] == sample_hotel.id
        assert data["roomNumber"] == "201"
        assert data["pricePerNight"] == 150.0
        assert data["maxOccupancy"] == 3

    def test_duplicate_room_number(self, client: TestClient, sample_room, owner_headers):
        payload = {**ROOM, "roomNumber": "101"}
        response = client.post(f"/api/hotels/{sample_room.hotel_id}/rooms", json=payload, headers=owner_headers)
        assert response.status_code == 400
        assert response.json()["error"] == "ROOM_ALREADY_EXISTS"

    def test_other_owner_forbidden(self, client: TestClient, sample_hotel, other_owner_headers):
        response = client.post(f"/api/hotels/{sample_hotel.id}/rooms", json=ROOM, headers=other_owner_headers)
        assert response.status_code == 403

    def test_unknown_hotel(self, client: TestClient, owner_headers):
        response = client.post("/api/hotels/999/rooms", json=ROOM, headers=owner_headers)
        assert response.status_code == 404
        assert response.json()["error"] == "HOTEL_NOT_FOUND"

    def test_non_positive_price(self, client: TestClient, sample_hotel, owner_headers):
        response = client.post(f"/api/hotels/{sample_hotel.id}/rooms",
                               json={**ROOM, "pricePerNight": 0}, headers=owner_headers)
        assert response.status_code == 400
        assert response.json()["error"] == "INVALID_REQUEST"


class TestSearchAndDetail:
    """搜索与详情测试"""

    def test_search_by_city(self, client: TestClient, sample_room, customer_headers):
        response = client.get("/api/hotels", params={"city": "goa"}, headers=customer_headers)

        assert response.status_code == 200
        items = response.json()["data"]
        assert len(items) == 1
        assert items[0]["minPricePerNight"] == 100.0
        assert items[0]["totalReviews"] == 0

    def test_search_price_filter(self, client: TestClient, sample_room, customer_headers):
        response = client.get("/api/hotels", params={"minPrice": 150}, headers=customer_headers)
        assert response.json()["data"] == []

        response = client.get("/api/hotels", params={"maxPrice": 150}, headers=customer_headers)
        assert len(response.json()["data"]) == 1

    def test_search_rating_out_of_range(self, client: TestClient, customer_headers):
        response = client.get("/api/hotels", params={"minRating": 7}, headers=customer_headers)
        assert response.status_code == 400
        assert response.json()["error"] == "INVALID_REQUEST"

    def test_hotel_detail(self, client: TestClient, sample_room, customer_headers):
        response = client.get(f"/api/hotels/{sample_room.hotel_id}", headers=customer_headers)

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["city"] == "Goa"
        assert [r["roomNumber"] for r in data["rooms"]] == ["101"]

    def test_hotel_not_found(self, client: TestClient, customer_headers):
        response = client.get("/api/hotels/999", headers=customer_headers)
        assert response.status_code == 404
        assert response.json() == {"success": False, "data": None, "error": "HOTEL_NOT_FOUND"}
