#!/usr/bin/env python3
"""
Prepare a showcase deployment: check the store settings, create the local
photo bucket, migrate the schema and (unless --no-seed) add sample vehicles.
"""
from pathlib import Path
from typing import List, Optional
import sys

from alembic import command
from alembic.config import Config

from showcase.config import Settings, get_settings

PROJECT_ROOT = Path(__file__).resolve().parent


def missing_settings(settings: Settings) -> List[str]:
    """Names of the store credential pair entries that are not set."""
    missing = []
    if not settings.database_url:
        missing.append("DATABASE_URL")
    if not settings.storage_public_url:
        missing.append("STORAGE_PUBLIC_URL")
    return missing


def prepare_bucket(settings: Settings) -> Optional[Path]:
    """Create the photo bucket directory for the local backend."""
    if settings.storage_backend != "local":
        return None
    bucket = Path(settings.storage_local_path) / settings.photo_bucket
    bucket.mkdir(parents=True, exist_ok=True)
    return bucket


def alembic_config() -> Config:
    # Resolve paths from the project root so the script runs from any cwd
    cfg = Config(str(PROJECT_ROOT / "alembic.ini"))
    cfg.set_main_option("script_location", str(PROJECT_ROOT / "alembic"))
    return cfg


def main(argv: List[str]) -> int:
    seed = "--no-seed" not in argv
    settings = get_settings()

    print("=" * 60)
    print(" Showcase Setup".center(60))
    print("=" * 60)

    missing = missing_settings(settings)
    if missing:
        print(f"\n✗ Missing settings: {', '.join(missing)}")
        print("  Set them in the environment or in .env (see .env.example).")
        return 1
    print(f"\n✓ Store configured, photos served from {settings.storage_public_url}")

    bucket = prepare_bucket(settings)
    if bucket is not None:
        print(f"✓ Photo bucket ready at {bucket.resolve()}")

    print("\nMigrating schema to head...")
    try:
        command.upgrade(alembic_config(), "head")
    except Exception as e:
        print(f"✗ Migration failed: {e}")
        return 1
    print("✓ Schema is current")

    if seed:
        print("\nAdding sample inventory...")
        from seed_vehicles import seed_vehicles
        seed_vehicles()

    print("\nStart the API:    python -m uvicorn showcase.main:app --reload")
    print("Open the client:  python showcase_client.py")
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
