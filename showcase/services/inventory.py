"""
Inventory queries and the customer-facing grid filter.
"""
from typing import Dict, Iterable, List, Optional, Tuple
import logging

from showcase.data_client import DataClient, require_client
from showcase.errors import NotFoundError, StoreError
from showcase.models.models import PhotoSlot, Vehicle, VehicleStatus

logger = logging.getLogger(__name__)

# (min, max) inclusive; None on either side means unbounded
PriceRange = Tuple[Optional[float], Optional[float]]

PRICE_BRACKETS: Dict[str, Optional[PriceRange]] = {
    "all": None,
    "under-15k": (0, 15000),
    "15k-25k": (15000, 25000),
    "25k-35k": (25000, 35000),
    "35k-50k": (35000, 50000),
    "over-50k": (50000, None),
}


def fetch_active(client: Optional[DataClient]) -> List[Vehicle]:
    """Active vehicles, newest listing first."""
    client = require_client(client)
    return client.select(
        "vehicles",
        filters={"status": VehicleStatus.ACTIVE},
        order_by="created_at",
        descending=True,
    )


def fetch_all(client: Optional[DataClient]) -> List[Vehicle]:
    """Every vehicle regardless of status (admin dashboard)."""
    client = require_client(client)
    return client.select("vehicles", order_by="created_at", descending=True)


def get_vehicle(client: Optional[DataClient], vehicle_id: str) -> Vehicle:
    client = require_client(client)
    vehicle = client.get("vehicles", vehicle_id)
    if vehicle is None:
        raise NotFoundError("Vehicle not found")
    return vehicle


def matches_search(vehicle: Vehicle, search_term: str) -> bool:
    if not search_term:
        return True
    term = search_term.lower()
    return (
        term in (vehicle.make or "").lower()
        or term in (vehicle.model or "").lower()
        or term in (vehicle.stock_number or "").lower()
        or search_term in str(vehicle.year)
    )


def matches_price(vehicle: Vehicle, price_range: Optional[PriceRange]) -> bool:
    if price_range is None:
        return True
    low, high = price_range
    if low is not None and vehicle.price < low:
        return False
    if high is not None and vehicle.price > high:
        return False
    return True


def filter_vehicles(
    vehicles: Iterable[Vehicle],
    search_term: str = "",
    price_range: Optional[PriceRange] = None,
) -> List[Vehicle]:
    """
    Narrow a vehicle list by free text and price.

    The text matches make, model or stock number case-insensitively, or the
    digits of the year. Price bounds are inclusive. Input order is kept.
    """
    search_term = (search_term or "").strip()
    return [
        v for v in vehicles
        if matches_search(v, search_term) and matches_price(v, price_range)
    ]


def price_range_for(
    bracket: Optional[str] = None,
    min_price: Optional[float] = None,
    max_price: Optional[float] = None,
) -> Optional[PriceRange]:
    """Resolve a named bracket or explicit bounds into a price range."""
    if bracket:
        if bracket not in PRICE_BRACKETS:
            raise ValueError(f"Unknown price bracket: {bracket}")
        return PRICE_BRACKETS[bracket]
    if min_price is None and max_price is None:
        return None
    return (min_price, max_price)


def primary_photo_urls(client: Optional[DataClient], vehicle_ids: List[str]) -> Dict[str, str]:
    """Front-corner photo URL per vehicle for the grid cards."""
    client = require_client(client)
    if not vehicle_ids:
        return {}
    try:
        rows = client.select(
            "vehicle_photos",
            filters={"vehicle_id": vehicle_ids, "photo_type": PhotoSlot.FRONT_CORNER},
            order_by="created_at",
        )
    except StoreError as e:
        logger.error(f"Error fetching primary photos: {e.message}")
        return {}
    return {row.vehicle_id: row.photo_url for row in rows}
