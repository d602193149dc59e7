"""
Vehicle Record Editor.

Form state is an immutable ``VehicleDraft``; every edit returns a new draft.
Saving validates the draft, checks for a duplicate stock number and then
inserts or fully overwrites the vehicle row.

The duplicate check is advisory. Two saves racing on the same stock number
can both pass it; the unique constraint on ``vehicles.stock_number`` is what
actually decides, and its violation surfaces as a ``StoreError``.
"""
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple
import logging

from fastapi.concurrency import run_in_threadpool
from pydantic import BaseModel, ConfigDict, Field

from showcase.data_client import DataClient, require_client
from showcase.errors import (
    DuplicateStockNumberError, NotFoundError, StoreError, ValidationFailedError,
)
from showcase.models.models import Vehicle, VehicleStatus

logger = logging.getLogger(__name__)

MIN_YEAR = 1900
INVALID_PRICE_MESSAGE = "Please enter a valid price"


def _current_year() -> int:
    return datetime.now().year


class VehicleDraft(BaseModel):
    """Editable vehicle fields. Frozen: use the ``with_*`` helpers to change it."""
    model_config = ConfigDict(frozen=True)

    stock_number: str = ""
    year: int = Field(default_factory=_current_year)
    make: str = "Toyota"
    model: str = ""
    trim: str = ""
    mileage: int = 0
    price: Optional[float] = 0
    exterior_color: str = ""
    interior_color: str = ""
    transmission: str = ""
    engine: str = ""
    features: Tuple[str, ...] = ()
    description: str = ""
    assigned_salesperson: str = ""

    def with_field(self, name: str, value: Any) -> "VehicleDraft":
        if name not in type(self).model_fields:
            raise ValueError(f"Unknown vehicle field: {name}")
        data = self.model_dump()
        data[name] = value
        return type(self).model_validate(data)

    def add_feature(self, feature: str) -> "VehicleDraft":
        """Append a trimmed feature tag; blank input is ignored."""
        feature = (feature or "").strip()
        if not feature:
            return self
        return self.with_field("features", self.features + (feature,))

    def remove_feature(self, index: int) -> "VehicleDraft":
        if not 0 <= index < len(self.features):
            return self
        return self.with_field("features", self.features[:index] + self.features[index + 1:])

    @classmethod
    def from_vehicle(cls, vehicle: Vehicle) -> "VehicleDraft":
        data = {name: getattr(vehicle, name) for name in cls.model_fields}
        data["features"] = tuple(vehicle.features or ())
        return cls.model_validate(data)

    def to_record(self) -> Dict[str, Any]:
        record = self.model_dump()
        record["stock_number"] = self.stock_number.strip()
        record["features"] = list(self.features)
        return record


def validate_draft(draft: VehicleDraft) -> List[str]:
    """Messages for every missing or out-of-range required field."""
    errors = []
    if not draft.stock_number.strip():
        errors.append("Stock number is required")
    if not MIN_YEAR <= draft.year <= _current_year() + 1:
        errors.append(f"Year must be between {MIN_YEAR} and {_current_year() + 1}")
    if not draft.make.strip():
        errors.append("Make is required")
    if not draft.model.strip():
        errors.append("Model is required")
    if draft.price is None or draft.price < 0:
        errors.append(INVALID_PRICE_MESSAGE)
    if draft.mileage < 0:
        errors.append("Mileage cannot be negative")
    return errors


def find_stock_number_conflict(
    client: Optional[DataClient],
    stock_number: str,
    exclude_id: Optional[str] = None,
) -> Optional[Vehicle]:
    """Another vehicle already holding this stock number, ignoring ``exclude_id``."""
    client = require_client(client)
    exclude = {"id": exclude_id} if exclude_id else None
    rows = client.select("vehicles", filters={"stock_number": stock_number.strip()}, exclude=exclude, limit=1)
    return rows[0] if rows else None


def save_vehicle(
    client: Optional[DataClient],
    draft: VehicleDraft,
    vehicle_id: Optional[str] = None,
) -> Vehicle:
    """
    Create a vehicle, or overwrite every editable field of an existing one.

    Raises:
        ValidationFailedError: required fields missing
        DuplicateStockNumberError: another vehicle holds the stock number
        NotFoundError: ``vehicle_id`` does not exist
        StoreError: the store rejected the write
    """
    client = require_client(client)

    errors = validate_draft(draft)
    if errors:
        raise ValidationFailedError("; ".join(errors))

    if find_stock_number_conflict(client, draft.stock_number, exclude_id=vehicle_id):
        raise DuplicateStockNumberError(draft.stock_number.strip())

    record = draft.to_record()
    if vehicle_id is None:
        vehicle = client.insert("vehicles", record)
        logger.info(f"Created vehicle {vehicle.id} (stock #{vehicle.stock_number})")
        return vehicle

    vehicle = client.update("vehicles", vehicle_id, record)
    if vehicle is None:
        raise NotFoundError("Vehicle not found")
    logger.info(f"Updated vehicle {vehicle_id} (stock #{vehicle.stock_number})")
    return vehicle


def update_price(client: Optional[DataClient], vehicle_id: str, price: Optional[float]) -> Vehicle:
    """Set the price only. 0 means "not yet priced"."""
    client = require_client(client)
    if price is None or price < 0:
        raise ValidationFailedError(INVALID_PRICE_MESSAGE)
    vehicle = client.update("vehicles", vehicle_id, {"price": price})
    if vehicle is None:
        raise NotFoundError("Vehicle not found")
    logger.info(f"Price for vehicle {vehicle_id} set to {price}")
    return vehicle


def mark_sold(client: Optional[DataClient], vehicle_id: str) -> Vehicle:
    client = require_client(client)
    vehicle = client.update("vehicles", vehicle_id, {"status": VehicleStatus.SOLD})
    if vehicle is None:
        raise NotFoundError("Vehicle not found")
    logger.info(f"Vehicle {vehicle_id} marked as sold")
    return vehicle


async def delete_vehicle(client: Optional[DataClient], vehicle_id: str) -> None:
    """
    Delete a vehicle and its photo records, then its stored photos.

    Inquiries about the vehicle are kept with their vehicle reference cleared.
    Storage cleanup is best-effort.
    """
    client = require_client(client)
    photos = await run_in_threadpool(client.select, "vehicle_photos", filters={"vehicle_id": vehicle_id})
    if not await run_in_threadpool(client.delete, "vehicles", vehicle_id):
        raise NotFoundError("Vehicle not found")

    names = [client.object_name(p.photo_url) for p in photos]
    if names:
        try:
            await client.remove(names)
        except StoreError as e:
            logger.warning(f"Could not remove photos for deleted vehicle {vehicle_id}: {e.message}")
    logger.info(f"Deleted vehicle {vehicle_id} and {len(photos)} photo(s)")
