#!/usr/bin/env python3
"""
Seed script to populate the store with sample pre-owned vehicles.
Run this after setting DATABASE_URL / STORAGE_PUBLIC_URL and running migrations.
"""
from showcase.data_client import get_data_client
from showcase.errors import ShowcaseError, DuplicateStockNumberError
from showcase.services.vehicle_editor import VehicleDraft, save_vehicle


SAMPLE_VEHICLES = [
    {
        "stock_number": "P1001",
        "year": 2020,
        "make": "Toyota",
        "model": "Camry",
        "trim": "SE",
        "mileage": 38500,
        "price": 21995,
        "exterior_color": "Celestial Silver",
        "interior_color": "Black",
        "transmission": "Automatic",
        "engine": "2.5L 4-Cylinder",
        "features": ["Backup Camera", "Apple CarPlay", "Lane Departure Alert"],
        "description": "One owner, clean history, recent service.",
        "assigned_salesperson": "Maria Lopez",
    },
    {
        "stock_number": "P1002",
        "year": 2019,
        "make": "Toyota",
        "model": "RAV4",
        "trim": "XLE AWD",
        "mileage": 52100,
        "price": 24750,
        "exterior_color": "Magnetic Gray",
        "interior_color": "Ash",
        "transmission": "Automatic",
        "engine": "2.5L 4-Cylinder",
        "features": ["All-Wheel Drive", "Sunroof", "Blind Spot Monitor"],
        "description": "",
        "assigned_salesperson": "Dan Okafor",
    },
    {
        "stock_number": "P1003",
        "year": 2021,
        "make": "Lexus",
        "model": "RX 350",
        "trim": "F Sport",
        "mileage": 21400,
        "price": 46900,
        "exterior_color": "Ultra White",
        "interior_color": "Rioja Red",
        "transmission": "Automatic",
        "engine": "3.5L V6",
        "features": ["Heated Seats", "Navigation", "Mark Levinson Audio"],
        "description": "Certified pre-owned.",
        "assigned_salesperson": "Maria Lopez",
    },
    {
        "stock_number": "P1004",
        "year": 2016,
        "make": "Honda",
        "model": "Civic",
        "trim": "LX",
        "mileage": 88200,
        "price": 13400,
        "exterior_color": "Aegean Blue",
        "interior_color": "Gray",
        "transmission": "CVT",
        "engine": "2.0L 4-Cylinder",
        "features": ["Bluetooth"],
        "description": "",
        "assigned_salesperson": "",
    },
    {
        "stock_number": "P1005",
        "year": 2022,
        "make": "Toyota",
        "model": "Tundra",
        "trim": "Limited",
        "mileage": 15800,
        "price": 0,
        "exterior_color": "Lunar Rock",
        "interior_color": "Black",
        "transmission": "Automatic",
        "engine": "3.5L Twin-Turbo V6",
        "features": ["Tow Package", "Bed Liner"],
        "description": "Price to be set after reconditioning.",
        "assigned_salesperson": "Dan Okafor",
    },
]


def seed_vehicles():
    """Add the sample vehicles, skipping stock numbers that already exist."""
    client = get_data_client()
    if client is None:
        print("✗ Error: DATABASE_URL and STORAGE_PUBLIC_URL must be set")
        return

    added_count = 0
    skipped_count = 0

    for vehicle_data in SAMPLE_VEHICLES:
        try:
            vehicle = save_vehicle(client, VehicleDraft.model_validate(vehicle_data))
        except DuplicateStockNumberError:
            print(f"⚠ Skipped: {vehicle_data['make']} {vehicle_data['model']} (stock #{vehicle_data['stock_number']} already exists)")
            skipped_count += 1
            continue
        except ShowcaseError as e:
            print(f"✗ Error: {e.message}")
            continue

        print(f"✓ Added: {vehicle.year} {vehicle.make} {vehicle.model} (ID: {vehicle.id}, Stock #{vehicle.stock_number})")
        added_count += 1

    print(f"\n{'='*60}")
    print(f"Seed complete! Added {added_count} vehicles, skipped {skipped_count} existing.")
    print(f"{'='*60}")


if __name__ == "__main__":
    print("=" * 60)
    print(" Seeding Sample Vehicles".center(60))
    print("=" * 60)
    print()

    seed_vehicles()
