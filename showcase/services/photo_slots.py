"""
Photo Slot Manager.

Each vehicle has nine named photo slots. A slot holds at most one photo at
rest; uploading into an occupied slot replaces the previous occupant.

Replace ordering:
    1. store the new object
    2. insert the new record (on failure, delete the object just stored)
    3. delete the previous records for the slot (failure is logged only)
    4. best-effort delete of the previous objects

A failure at any step leaves at worst a duplicate record for the slot, never
an empty one. ``list_photos`` collapses duplicates to the newest upload.
"""
from typing import Callable, Dict, List, Optional
import logging
import time

from fastapi.concurrency import run_in_threadpool

from showcase.data_client import DataClient, require_client
from showcase.errors import (
    NotFoundError, PhotoRecordError, StorageUploadError, StoreError, ValidationFailedError,
)
from showcase.images.preprocessor import ImagePreprocessor
from showcase.models.models import PhotoSlot, REQUIRED_SLOTS, VehiclePhoto
from showcase.storage.validation import FileValidator

logger = logging.getLogger(__name__)

NOT_AN_IMAGE_MESSAGE = "Please select an image file"
DELETE_FAILED_MESSAGE = "Error deleting photo. Please try again."


def parse_slot(value: str) -> PhotoSlot:
    try:
        return PhotoSlot(value)
    except ValueError:
        raise ValidationFailedError(f"Unknown photo slot: {value}")


def storage_name(vehicle_id: str, slot: PhotoSlot, timestamp_ms: int) -> str:
    """Object name for an upload: ``{vehicle_id}/{slot}_{epoch_ms}.jpg``."""
    return f"{vehicle_id}/{slot.value}_{timestamp_ms}.jpg"


def missing_required_slots(photos: List[VehiclePhoto]) -> List[PhotoSlot]:
    """Required slots with no photo. Advisory only, never blocks a listing."""
    filled = {PhotoSlot(p.photo_type) for p in photos}
    return [slot for slot in REQUIRED_SLOTS if slot not in filled]


class PhotoSlotManager:
    def __init__(
        self,
        client: Optional[DataClient],
        preprocessor: Optional[ImagePreprocessor] = None,
        clock: Callable[[], float] = time.time,
    ):
        self.client = client
        self.preprocessor = preprocessor or ImagePreprocessor()
        self.clock = clock

    def list_photos(self, vehicle_id: str) -> List[VehiclePhoto]:
        """
        Photos for a vehicle ordered by slot position.

        When a slot transiently holds more than one record the most recent
        upload wins. Read failures degrade to an empty list.
        """
        client = require_client(self.client)
        try:
            rows = client.select("vehicle_photos", filters={"vehicle_id": vehicle_id}, order_by="created_at")
        except StoreError as e:
            logger.error(f"Error fetching photos for vehicle {vehicle_id}: {e.message}")
            return []

        # Oldest first, so a later upload overwrites an earlier one
        newest: Dict[PhotoSlot, VehiclePhoto] = {}
        for row in rows:
            newest[PhotoSlot(row.photo_type)] = row
        return sorted(newest.values(), key=lambda p: PhotoSlot(p.photo_type).position)

    async def upload_to_slot(
        self,
        vehicle_id: str,
        slot: PhotoSlot | str,
        data: bytes,
        filename: str = "photo.jpg",
        content_type: Optional[str] = None,
    ) -> VehiclePhoto:
        """
        Store an image into a slot, replacing any previous occupant.

        Raises:
            StoreUnavailableError: no data client
            NotFoundError: unknown vehicle
            ValidationFailedError: unknown slot, non-image, or above 100MB
            StorageUploadError: the object upload failed (nothing changed)
            PhotoRecordError: the record insert failed (new object removed)
        """
        client = require_client(self.client)
        slot = parse_slot(slot) if isinstance(slot, str) else slot

        if await run_in_threadpool(client.get, "vehicles", vehicle_id) is None:
            raise NotFoundError("Vehicle not found")

        image_type = FileValidator.resolve_image_type(data, content_type)
        if image_type is None:
            raise ValidationFailedError(NOT_AN_IMAGE_MESSAGE)

        filename = FileValidator.sanitize_filename(filename or "photo.jpg")
        # Decode, resize and re-encode happen off the event loop
        processed = await run_in_threadpool(self.preprocessor.process, data, filename, content_type=image_type)

        name = storage_name(vehicle_id, slot, int(self.clock() * 1000))
        try:
            await client.upload(name, processed.data)
        except StoreError as e:
            raise StorageUploadError(e.message) from e
        photo_url = client.public_url(name)

        try:
            previous = await run_in_threadpool(
                client.select,
                "vehicle_photos",
                filters={"vehicle_id": vehicle_id, "photo_type": slot},
            )
        except StoreError as e:
            logger.warning(f"Could not read previous {slot.value} photos for {vehicle_id}: {e.message}")
            previous = []

        try:
            photo = await run_in_threadpool(client.insert, "vehicle_photos", {
                "vehicle_id": vehicle_id,
                "photo_type": slot,
                "photo_url": photo_url,
                "sort_order": slot.position,
            })
        except StoreError as e:
            logger.error(f"Photo record insert failed for {vehicle_id}/{slot.value}, removing {name}")
            try:
                await client.remove([name])
            except StoreError as cleanup_error:
                logger.warning(f"Could not remove orphaned object {name}: {cleanup_error.message}")
            raise PhotoRecordError(e.message) from e

        stale_names = []
        for old in previous:
            try:
                await run_in_threadpool(client.delete, "vehicle_photos", old.id)
            except StoreError as e:
                logger.warning(f"Could not delete previous photo record {old.id}: {e.message}")
                continue
            old_name = client.object_name(old.photo_url)
            if old_name != name:
                stale_names.append(old_name)

        if stale_names:
            try:
                await client.remove(stale_names)
            except StoreError as e:
                logger.warning(f"Could not remove replaced objects {stale_names}: {e.message}")

        logger.info(f"Uploaded {slot.value} photo for vehicle {vehicle_id} ({len(processed.data)} bytes)")
        return photo

    async def delete_photo(self, photo_id: str, photo_url: Optional[str] = None) -> None:
        """Delete the stored object, then the record."""
        client = require_client(self.client)
        try:
            if photo_url is None:
                row = await run_in_threadpool(client.get, "vehicle_photos", photo_id)
                if row is None:
                    raise NotFoundError("Photo not found")
                photo_url = row.photo_url
            await client.remove([client.object_name(photo_url)])
            await run_in_threadpool(client.delete, "vehicle_photos", photo_id)
        except StoreError as e:
            logger.error(f"Error deleting photo {photo_id}: {e.message}")
            raise StoreError(DELETE_FAILED_MESSAGE) from e
        logger.info(f"Deleted photo {photo_id}")
