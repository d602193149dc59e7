"""
Shared pytest fixtures.

Every test gets its own in-memory SQLite store and a temporary photo bucket
directory, wired into the FastAPI app through a dependency override.
"""
import io
import os

# Must be set before showcase modules read their settings
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")
os.environ.setdefault("LOG_LEVEL", "WARNING")

import httpx
import pytest
from fastapi.testclient import TestClient
from PIL import Image

from showcase.config import get_settings
from showcase.data_client import DataClient, get_data_client
from showcase.database import Base, create_session_factory
from showcase.events.handlers import notifications
from showcase.main import app
from showcase.storage.backend import LocalStorageBackend

PUBLIC_BASE_URL = "http://testserver/storage"


def make_image(width: int, height: int, color=(200, 30, 30), fmt: str = "JPEG", mode: str = "RGB") -> bytes:
    """Encode a solid-color test image."""
    img = Image.new(mode, (width, height), color)
    output = io.BytesIO()
    img.save(output, format=fmt)
    return output.getvalue()


@pytest.fixture
def storage_dir(tmp_path):
    return tmp_path / "storage"


@pytest.fixture
def data_client(storage_dir):
    session_factory = create_session_factory("sqlite://")
    Base.metadata.create_all(bind=session_factory.kw["bind"])
    return DataClient(
        session_factory=session_factory,
        storage=LocalStorageBackend(str(storage_dir)),
        public_base_url=PUBLIC_BASE_URL,
        bucket="vehicle-photos",
    )


@pytest.fixture
def api(data_client):
    """TestClient bound to the per-test store."""
    app.dependency_overrides[get_data_client] = lambda: data_client
    with TestClient(app) as client:
        yield client
    app.dependency_overrides.clear()


@pytest.fixture
def api_without_store():
    """TestClient for a deployment whose store credentials are missing."""
    app.dependency_overrides[get_data_client] = lambda: None
    with TestClient(app) as client:
        yield client
    app.dependency_overrides.clear()


@pytest.fixture
def sample_vehicle(data_client):
    return data_client.insert("vehicles", {
        "stock_number": "T1234",
        "year": 2020,
        "make": "Toyota",
        "model": "Camry",
        "trim": "SE",
        "mileage": 38500,
        "price": 21995,
        "exterior_color": "Silver",
        "features": ["Backup Camera"],
        "assigned_salesperson": "Maria Lopez",
    })


class NotificationRecorder:
    """Stands in for httpx.AsyncClient and records every POST."""

    def __init__(self):
        self.calls = []
        self.fail = False
        self.status_code = 200

    def client_factory(self, timeout=None, **kwargs):
        recorder = self

        class _Client:
            async def __aenter__(self):
                return self

            async def __aexit__(self, *exc):
                return False

            async def post(self, url, json=None, headers=None):
                recorder.calls.append({"url": url, "json": json, "headers": headers, "timeout": timeout})
                if recorder.fail:
                    raise httpx.ConnectError("notification endpoint unreachable")
                return httpx.Response(recorder.status_code)

        return _Client()


@pytest.fixture
def notification_recorder(monkeypatch):
    recorder = NotificationRecorder()
    settings = get_settings()
    monkeypatch.setattr(settings, "notification_url", "http://notify.test/send-inquiry-email")
    monkeypatch.setattr(settings, "notification_token", "anon-key")
    monkeypatch.setattr(notifications.httpx, "AsyncClient", recorder.client_factory)
    return recorder
