"""
Vehicle photo endpoints.

Photos are uploaded into one of nine named slots; uploading into an occupied
slot replaces the previous photo.
"""
from fastapi import APIRouter, Depends, UploadFile, File, status
from typing import List, Optional
from showcase.data_client import DataClient, get_data_client
from showcase.models.models import PhotoSlot
from showcase.models.schemas import PhotoResponse, PhotoSlotInfo
from showcase.services import inventory
from showcase.services.photo_slots import PhotoSlotManager
import logging

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/photo-slots", response_model=List[PhotoSlotInfo])
def list_photo_slots():
    """The fixed slot list in display order. The first six are required."""
    return [
        PhotoSlotInfo(slot=slot, label=slot.label, position=slot.position, required=slot.required)
        for slot in PhotoSlot
    ]


@router.get("/vehicles/{vehicle_id}/photos", response_model=List[PhotoResponse])
def list_vehicle_photos(
    vehicle_id: str,
    client: Optional[DataClient] = Depends(get_data_client)
):
    inventory.get_vehicle(client, vehicle_id)
    return PhotoSlotManager(client).list_photos(vehicle_id)


@router.post(
    "/vehicles/{vehicle_id}/photos/{slot}",
    response_model=PhotoResponse,
    status_code=status.HTTP_201_CREATED,
)
async def upload_vehicle_photo(
    vehicle_id: str,
    slot: PhotoSlot,
    file: UploadFile = File(...),
    client: Optional[DataClient] = Depends(get_data_client)
):
    """
    Upload a photo into a slot.

    The image is downscaled to fit 1600x1200 and re-encoded as JPEG before
    it is stored.
    """
    data = await file.read()
    return await PhotoSlotManager(client).upload_to_slot(
        vehicle_id,
        slot,
        data,
        filename=file.filename or "photo.jpg",
        content_type=file.content_type,
    )


@router.delete("/photos/{photo_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_vehicle_photo(
    photo_id: str,
    client: Optional[DataClient] = Depends(get_data_client)
):
    await PhotoSlotManager(client).delete_photo(photo_id)
