#!/usr/bin/env python3
"""
Smoke test suite for the Pre-Owned Vehicle Showcase.
Run with: python test_app.py  (or through pytest)
"""
from showcase.config import Settings
from showcase.errors import (
    ShowcaseError, StoreUnavailableError, StorageUploadError, PhotoRecordError,
    DuplicateStockNumberError, STORE_UNAVAILABLE_MESSAGE,
)
from showcase.storage.validation import FileValidator


def test_settings():
    """Test the store credential pair and defaults."""
    print("\n⚙ Testing Settings")
    print("-" * 70)

    settings = Settings(_env_file=None)
    assert settings.upload_code == "upload123"
    assert settings.photo_bucket == "vehicle-photos"
    assert settings.upload_bypass_code is None

    half = Settings(_env_file=None, database_url="sqlite://", storage_public_url=None)
    assert not half.store_configured

    full = Settings(_env_file=None, database_url="sqlite://", storage_public_url="http://localhost/storage")
    assert full.store_configured
    assert Settings(_env_file=None, cors_origins="http://a.test, http://b.test").cors_origins_list == [
        "http://a.test", "http://b.test"
    ]

    print("✓ Store is absent unless both DATABASE_URL and STORAGE_PUBLIC_URL are set")
    print("✓ Settings test PASSED")


def test_error_messages():
    """Test user-facing error messages and status codes."""
    print("\n⚠ Testing Error Messages")
    print("-" * 70)

    assert StoreUnavailableError().message == STORE_UNAVAILABLE_MESSAGE
    assert StoreUnavailableError().status_code == 503
    assert StorageUploadError("bucket missing").message == "Storage upload failed: bucket missing"
    assert PhotoRecordError("constraint").message == "Database error: constraint"
    assert DuplicateStockNumberError("P1").status_code == 400
    assert ShowcaseError("teapot", status_code=418).status_code == 418

    print("✓ Error messages match")
    print("✓ Error message test PASSED")


def test_file_validation():
    """Test image type resolution and filename sanitizing."""
    print("\n🖼 Testing File Validation")
    print("-" * 70)

    jpeg = b"\xff\xd8\xff\xe0" + b"\x00" * 16
    assert FileValidator.resolve_image_type(jpeg, "image/heic") == "image/heic"
    assert FileValidator.resolve_image_type(jpeg, None) == "image/jpeg"
    assert FileValidator.resolve_image_type(jpeg, "application/octet-stream") == "image/jpeg"
    assert FileValidator.resolve_image_type(b"hello", "") is None
    assert FileValidator.resolve_image_type(jpeg, "text/plain") is None

    assert FileValidator.sanitize_filename("../../etc/passwd") == "passwd"
    assert FileValidator.sanitize_filename("my car (1).jpg") == "my_car_1_.jpg"
    assert FileValidator.sanitize_filename("...") == "photo.jpg"

    valid, _ = FileValidator.validate_file_size(100 * 1024 * 1024)
    assert valid
    valid, error = FileValidator.validate_file_size(100 * 1024 * 1024 + 1)
    assert not valid and error == "File is too large. Maximum size is 100MB."

    print("✓ Image types resolved, filenames sanitized")
    print("✓ File validation test PASSED")


def test_database_models():
    """Test database models with SQLite."""
    print("\n💾 Testing Database Models")
    print("-" * 70)

    from showcase.database import Base, create_session_factory
    from showcase.models.models import Vehicle, VehiclePhoto, CustomerInquiry, PhotoSlot, VehicleStatus

    SessionLocal = create_session_factory("sqlite://")
    Base.metadata.create_all(bind=SessionLocal.kw["bind"])
    db = SessionLocal()

    vehicle = Vehicle(stock_number="T100", year=2021, make="Toyota", model="Corolla", assigned_salesperson="Dan")
    db.add(vehicle)
    db.commit()
    db.refresh(vehicle)

    assert len(vehicle.id) == 36
    assert vehicle.status == VehicleStatus.ACTIVE
    assert vehicle.price == 0
    assert vehicle.features == []
    print(f"✓ Vehicle created: {vehicle.year} {vehicle.make} {vehicle.model}")

    db.add(VehiclePhoto(
        vehicle_id=vehicle.id,
        photo_type=PhotoSlot.REAR_CORNER,
        photo_url="http://localhost/storage/vehicle-photos/x.jpg",
        sort_order=PhotoSlot.REAR_CORNER.position,
    ))
    db.add(CustomerInquiry(
        vehicle_id=vehicle.id, customer_name="Jane Doe", customer_email="jane@example.com",
    ))
    db.commit()

    db.delete(vehicle)
    db.commit()
    assert db.query(VehiclePhoto).count() == 0
    inquiry = db.query(CustomerInquiry).one()
    assert inquiry.vehicle_id is None
    print("✓ Photos cascade with the vehicle, inquiries are kept")

    db.close()
    print("✓ Database model tests PASSED")


def test_photo_slots():
    """Test slot order, labels and required flags."""
    from showcase.models.models import PhotoSlot, REQUIRED_SLOTS

    assert [s.position for s in PhotoSlot] == list(range(9))
    assert PhotoSlot.FRONT_CORNER.label == "Passenger Front Corner"
    assert PhotoSlot.INTERIOR_REAR.required
    assert not PhotoSlot.DAMAGE.required
    assert len(REQUIRED_SLOTS) == 6
    print("✓ Photo slot test PASSED")


def test_setup_helpers():
    """Test the deployment setup checks."""
    import tempfile
    from pathlib import Path
    from setup_db import missing_settings, prepare_bucket

    print("\n🛠 Testing Setup Helpers")
    print("-" * 70)

    none_set = Settings(_env_file=None, database_url=None, storage_public_url=None)
    assert missing_settings(none_set) == ["DATABASE_URL", "STORAGE_PUBLIC_URL"]
    half = Settings(_env_file=None, database_url="sqlite://", storage_public_url=None)
    assert missing_settings(half) == ["STORAGE_PUBLIC_URL"]
    full = Settings(_env_file=None, database_url="sqlite://", storage_public_url="http://localhost/storage")
    assert missing_settings(full) == []

    with tempfile.TemporaryDirectory() as tmp:
        local = Settings(_env_file=None, storage_local_path=tmp, photo_bucket="vehicle-photos")
        bucket = prepare_bucket(local)
        assert bucket == Path(tmp) / "vehicle-photos"
        assert bucket.is_dir()

    print("✓ Missing settings reported, bucket directory created")
    print("✓ Setup helper test PASSED")


def test_setup_stops_before_migrating_without_store(monkeypatch, capsys):
    import setup_db

    def unexpected_upgrade(*args, **kwargs):
        raise AssertionError("migrations ran without a configured store")

    monkeypatch.setattr(setup_db, "get_settings", lambda: Settings(_env_file=None, database_url=None))
    monkeypatch.setattr(setup_db.command, "upgrade", unexpected_upgrade)

    assert setup_db.main([]) == 1
    assert "Missing settings: DATABASE_URL" in capsys.readouterr().out


def run_all_tests():
    """Run all tests."""
    print("=" * 70)
    print(" Pre-Owned Vehicle Showcase - Test Suite".center(70))
    print("=" * 70)

    try:
        test_settings()
        test_error_messages()
        test_file_validation()
        test_database_models()
        test_photo_slots()
        test_setup_helpers()

        print("\n" + "=" * 70)
        print("✅ ALL TESTS PASSED!".center(70))
        print("=" * 70)
        print()

    except AssertionError as e:
        print(f"\n❌ Test failed: {e}")
        return 1
    except Exception as e:
        print(f"\n❌ Unexpected error: {e}")
        import traceback
        traceback.print_exc()
        return 1

    return 0


if __name__ == "__main__":
    import sys
    sys.exit(run_all_tests())
