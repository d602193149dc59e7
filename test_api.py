"""
HTTP API tests through FastAPI's TestClient.
"""
import pytest
from fastapi.testclient import TestClient
from PIL import Image

from conftest import make_image
from showcase.data_client import get_data_client
from showcase.errors import STORE_UNAVAILABLE_MESSAGE
from showcase.main import app, UNEXPECTED_ERROR_MESSAGE
from showcase.models.models import PhotoSlot


def create_vehicle(api, **fields):
    body = {
        "stock_number": "P1001",
        "year": 2020,
        "make": "Toyota",
        "model": "Camry",
        "price": 21995,
        "assigned_salesperson": "Maria Lopez",
    }
    body.update(fields)
    response = api.post("/api/vehicles", json=body)
    assert response.status_code == 201, response.text
    return response.json()


def upload(api, vehicle_id, slot, data, filename="photo.jpg", content_type="image/jpeg"):
    return api.post(
        f"/api/vehicles/{vehicle_id}/photos/{slot}",
        files={"file": (filename, data, content_type)},
    )


def test_health_and_root(api):
    assert api.get("/health").json() == {"status": "healthy"}
    assert "vehicles" in api.get("/").json()["endpoints"]


def test_store_unavailable_answers_refresh_message(api_without_store):
    for method, path in [
        ("get", "/api/vehicles"),
        ("get", "/api/vehicles/abc"),
        ("get", "/api/admin/inquiries"),
        ("delete", "/api/photos/abc"),
    ]:
        response = getattr(api_without_store, method)(path)
        assert response.status_code == 503
        assert response.json() == {"detail": STORE_UNAVAILABLE_MESSAGE}


def test_store_unavailable_still_serves_static_endpoints(api_without_store):
    assert api_without_store.get("/health").status_code == 200
    assert len(api_without_store.get("/api/photo-slots").json()) == 9


def test_unexpected_error_answers_reload_message():
    def broken_store():
        raise RuntimeError("connection pool exhausted")

    app.dependency_overrides[get_data_client] = broken_store
    try:
        with TestClient(app, raise_server_exceptions=False) as client:
            response = client.get("/api/vehicles")
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == 500
    assert response.json() == {"detail": UNEXPECTED_ERROR_MESSAGE}
    assert UNEXPECTED_ERROR_MESSAGE == "Something went wrong. Please reload the page."


class TestVehicles:
    def test_create_and_get_detail(self, api):
        vehicle = create_vehicle(api, features=["Sunroof", " ", "Navigation "])
        assert vehicle["status"] == "active"
        assert vehicle["features"] == ["Sunroof", "Navigation"]

        detail = api.get(f"/api/vehicles/{vehicle['id']}").json()
        assert detail["vehicle"]["stock_number"] == "P1001"
        assert detail["photos"] == []
        assert detail["missing_required_slots"] == [s.value for s in PhotoSlot][:6]

    def test_unknown_vehicle(self, api):
        response = api.get("/api/vehicles/does-not-exist")
        assert response.status_code == 404
        assert response.json()["detail"] == "Vehicle not found"

    def test_grid_filters(self, api):
        create_vehicle(api, stock_number="A1", make="Toyota", model="Corolla", year=2018, price=14500)
        create_vehicle(api, stock_number="B2", make="Lexus", model="RX 350", year=2021, price=46900)
        create_vehicle(api, stock_number="C3", make="Toyota", model="RAV4", year=2020, price=24750)

        def stock_numbers(**params):
            response = api.get("/api/vehicles", params=params)
            assert response.status_code == 200
            return sorted(v["stock_number"] for v in response.json())

        assert stock_numbers() == ["A1", "B2", "C3"]
        assert stock_numbers(search="toyota") == ["A1", "C3"]
        assert stock_numbers(search="2021") == ["B2"]
        assert stock_numbers(price_bracket="15k-25k") == ["C3"]
        assert stock_numbers(min_price=14500, max_price=24750) == ["A1", "C3"]
        assert stock_numbers(search="toyota", price_bracket="under-15k") == ["A1"]
        assert api.get("/api/vehicles", params={"price_bracket": "cheap"}).status_code == 400

    def test_grid_hides_sold_vehicles(self, api):
        keep = create_vehicle(api, stock_number="K1")
        sold = create_vehicle(api, stock_number="S1")
        assert api.post(f"/api/vehicles/{sold['id']}/sold").json()["status"] == "sold"

        assert [v["id"] for v in api.get("/api/vehicles").json()] == [keep["id"]]
        assert len(api.get("/api/admin/vehicles").json()) == 2

    def test_duplicate_stock_number(self, api):
        first = create_vehicle(api)
        response = api.post("/api/vehicles", json={"stock_number": "P1001", "year": 2019, "make": "Toyota", "model": "Prius"})
        assert response.status_code == 400
        assert response.json()["detail"] == "A vehicle with stock number P1001 already exists"

        check = api.get("/api/vehicles/stock-number-check", params={"stock_number": "P1001"}).json()
        assert check == {"stock_number": "P1001", "available": False, "conflicting_vehicle_id": first["id"]}
        own = api.get(
            "/api/vehicles/stock-number-check", params={"stock_number": "P1001", "exclude_id": first["id"]}
        ).json()
        assert own["available"] is True

    def test_full_update(self, api):
        vehicle = create_vehicle(api)
        body = {**vehicle, "model": "Camry Hybrid", "mileage": 12000}
        response = api.put(f"/api/vehicles/{vehicle['id']}", json=body)
        assert response.status_code == 200
        assert response.json()["model"] == "Camry Hybrid"
        assert response.json()["mileage"] == 12000

    def test_validation_errors(self, api):
        response = api.post("/api/vehicles", json={"stock_number": "X", "year": 2020, "make": "Toyota", "model": " "})
        assert response.status_code == 422
        assert "Model is required" in response.json()["detail"]

    def test_price_update(self, api):
        vehicle = create_vehicle(api, price=0)
        response = api.patch(f"/api/vehicles/{vehicle['id']}/price", json={"price": 18500})
        assert response.json()["price"] == 18500

        bad = api.patch(f"/api/vehicles/{vehicle['id']}/price", json={"price": None})
        assert bad.status_code == 422
        assert bad.json()["detail"] == "Please enter a valid price"

    def test_delete_vehicle(self, api):
        vehicle = create_vehicle(api)
        assert api.delete(f"/api/vehicles/{vehicle['id']}").status_code == 204
        assert api.get(f"/api/vehicles/{vehicle['id']}").status_code == 404
        assert api.delete(f"/api/vehicles/{vehicle['id']}").status_code == 404


class TestPhotos:
    def test_photo_slots(self, api):
        slots = api.get("/api/photo-slots").json()
        assert [s["slot"] for s in slots] == [s.value for s in PhotoSlot]
        assert [s["required"] for s in slots] == [True] * 6 + [False] * 3
        assert slots[1]["label"] == "Driver's Front Corner"

    def test_upload_is_downscaled_and_replaces_previous(self, api, data_client, storage_dir):
        vehicle = create_vehicle(api)

        first = upload(api, vehicle["id"], "front_corner", make_image(5000, 4000), "first.jpg")
        assert first.status_code == 201, first.text
        stored = storage_dir / "vehicle-photos" / data_client.object_name(first.json()["photo_url"])
        with Image.open(stored) as img:
            assert img.size == (1500, 1200)

        second = upload(api, vehicle["id"], "front_corner", make_image(1024, 768), "second.jpg")
        assert second.status_code == 201

        photos = api.get(f"/api/vehicles/{vehicle['id']}/photos").json()
        assert len(photos) == 1
        assert photos[0]["photo_url"] == second.json()["photo_url"]
        assert photos[0]["sort_order"] == 0

        # Only the second file remains in the bucket
        remaining = list((storage_dir / "vehicle-photos" / vehicle["id"]).iterdir())
        assert len(remaining) == 1
        assert remaining[0] == storage_dir / "vehicle-photos" / data_client.object_name(photos[0]["photo_url"])

    def test_grid_shows_front_corner_photo(self, api):
        vehicle = create_vehicle(api)
        assert api.get("/api/vehicles").json()[0]["primary_photo_url"] is None
        photo = upload(api, vehicle["id"], "front_corner", make_image(64, 48)).json()
        assert api.get("/api/vehicles").json()[0]["primary_photo_url"] == photo["photo_url"]

    def test_non_image_rejected(self, api):
        vehicle = create_vehicle(api)
        response = upload(api, vehicle["id"], "damage", b"plain text", "notes.txt", "text/plain")
        assert response.status_code == 422
        assert response.json()["detail"] == "Please select an image file"

    def test_unknown_slot(self, api):
        vehicle = create_vehicle(api)
        assert upload(api, vehicle["id"], "roof", make_image(10, 10)).status_code == 422

    def test_delete_photo(self, api):
        vehicle = create_vehicle(api)
        photo = upload(api, vehicle["id"], "additional", make_image(10, 10)).json()
        assert api.delete(f"/api/photos/{photo['id']}").status_code == 204
        assert api.get(f"/api/vehicles/{vehicle['id']}/photos").json() == []
        assert api.delete(f"/api/photos/{photo['id']}").status_code == 404


class TestInquiries:
    def test_jane_doe_inquiry_end_to_end(self, api, notification_recorder):
        vehicle = create_vehicle(api, exterior_color="Celestial Silver")
        response = api.post("/api/inquiries", json={
            "vehicle_id": vehicle["id"],
            "customer_name": "Jane Doe",
            "customer_email": "jane@example.com",
            "customer_phone": "",
            "message": "Interested",
        })
        assert response.status_code == 201
        inquiry = response.json()
        assert inquiry["customer_name"] == "Jane Doe"
        assert inquiry["customer_phone"] == ""
        assert inquiry["message"] == "Interested"
        assert inquiry["assigned_salesperson"] == "Maria Lopez"

        assert len(notification_recorder.calls) == 1
        sent = notification_recorder.calls[0]["json"]
        assert sent["inquiry"]["customer_email"] == "jane@example.com"
        assert sent["vehicle"]["stock_number"] == "P1001"
        assert sent["vehicle"]["exterior_color"] == "Celestial Silver"

        entries = api.get("/api/admin/inquiries").json()
        assert entries[0]["inquiry"]["id"] == inquiry["id"]
        assert entries[0]["vehicle"]["stock_number"] == "P1001"

    def test_notification_failure_does_not_fail_submission(self, api, notification_recorder):
        notification_recorder.fail = True
        vehicle = create_vehicle(api)
        response = api.post("/api/inquiries", json={
            "vehicle_id": vehicle["id"],
            "customer_name": "Jane Doe",
            "customer_email": "jane@example.com",
        })
        assert response.status_code == 201
        assert len(notification_recorder.calls) == 1
        assert len(api.get("/api/admin/inquiries").json()) == 1

    def test_missing_email_rejected(self, api, notification_recorder):
        vehicle = create_vehicle(api)
        response = api.post("/api/inquiries", json={
            "vehicle_id": vehicle["id"],
            "customer_name": "Jane Doe",
            "customer_email": "",
        })
        assert response.status_code == 422
        assert notification_recorder.calls == []


class TestSalespersonSignIn:
    def test_valid_code(self, api):
        response = api.post("/api/salesperson/sign-in", json={"name": "Dan", "code": "upload123"})
        assert response.status_code == 200
        assert response.json() == {"authenticated": True, "salesperson_name": "Dan"}

    @pytest.mark.parametrize("name, code", [("Dan", "wrong"), ("", "upload123")])
    def test_rejected(self, api, name, code):
        response = api.post("/api/salesperson/sign-in", json={"name": name, "code": code})
        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid code or missing name. Please try again."
