from fastapi import APIRouter, Depends, HTTPException, status
from typing import List, Optional
from showcase.data_client import DataClient, get_data_client
from showcase.models.schemas import (
    VehicleCreate, VehicleResponse, VehicleListItem, VehicleDetailResponse,
    PhotoResponse, PriceUpdate, StockNumberCheck,
)
from showcase.services import inventory
from showcase.services.photo_slots import PhotoSlotManager, missing_required_slots
from showcase.services.vehicle_editor import (
    VehicleDraft, save_vehicle, update_price, mark_sold, delete_vehicle,
    find_stock_number_conflict,
)
import logging

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/vehicles", response_model=List[VehicleListItem])
def list_vehicles(
    search: str = "",
    min_price: Optional[float] = None,
    max_price: Optional[float] = None,
    price_bracket: Optional[str] = None,
    client: Optional[DataClient] = Depends(get_data_client)
):
    """
    Customer inventory grid: active vehicles, newest first.

    Args:
        search: Matches make, model, stock number or year
        min_price / max_price: Inclusive bounds
        price_bracket: Named bracket (all, under-15k, 15k-25k, 25k-35k, 35k-50k, over-50k);
            takes precedence over explicit bounds
    """
    try:
        price_range = inventory.price_range_for(price_bracket, min_price, max_price)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    vehicles = inventory.filter_vehicles(inventory.fetch_active(client), search, price_range)
    photo_urls = inventory.primary_photo_urls(client, [v.id for v in vehicles])

    return [
        VehicleListItem(
            **VehicleResponse.model_validate(v).model_dump(),
            primary_photo_url=photo_urls.get(v.id),
        )
        for v in vehicles
    ]


@router.get("/vehicles/stock-number-check", response_model=StockNumberCheck)
def check_stock_number(
    stock_number: str,
    exclude_id: Optional[str] = None,
    client: Optional[DataClient] = Depends(get_data_client)
):
    """Advisory duplicate check used while the vehicle form is being filled in."""
    conflict = find_stock_number_conflict(client, stock_number, exclude_id=exclude_id)
    return StockNumberCheck(
        stock_number=stock_number.strip(),
        available=conflict is None,
        conflicting_vehicle_id=conflict.id if conflict else None,
    )


@router.get("/vehicles/{vehicle_id}", response_model=VehicleDetailResponse)
def get_vehicle(
    vehicle_id: str,
    client: Optional[DataClient] = Depends(get_data_client)
):
    """Vehicle detail page: the vehicle, its photos in slot order, and missing required slots."""
    vehicle = inventory.get_vehicle(client, vehicle_id)
    photos = PhotoSlotManager(client).list_photos(vehicle_id)
    return VehicleDetailResponse(
        vehicle=VehicleResponse.model_validate(vehicle),
        photos=[PhotoResponse.model_validate(p) for p in photos],
        missing_required_slots=missing_required_slots(photos),
    )


@router.post("/vehicles", response_model=VehicleResponse, status_code=status.HTTP_201_CREATED)
def create_vehicle(
    vehicle: VehicleCreate,
    client: Optional[DataClient] = Depends(get_data_client)
):
    """Create a new vehicle listing (status active)."""
    return save_vehicle(client, VehicleDraft.model_validate(vehicle.model_dump()))


@router.put("/vehicles/{vehicle_id}", response_model=VehicleResponse)
def replace_vehicle(
    vehicle_id: str,
    vehicle: VehicleCreate,
    client: Optional[DataClient] = Depends(get_data_client)
):
    """Overwrite every editable field of a vehicle."""
    return save_vehicle(client, VehicleDraft.model_validate(vehicle.model_dump()), vehicle_id=vehicle_id)


@router.patch("/vehicles/{vehicle_id}/price", response_model=VehicleResponse)
def set_price(
    vehicle_id: str,
    body: PriceUpdate,
    client: Optional[DataClient] = Depends(get_data_client)
):
    """Salesperson price update."""
    return update_price(client, vehicle_id, body.price)


@router.post("/vehicles/{vehicle_id}/sold", response_model=VehicleResponse)
def sell_vehicle(
    vehicle_id: str,
    client: Optional[DataClient] = Depends(get_data_client)
):
    return mark_sold(client, vehicle_id)


@router.delete("/vehicles/{vehicle_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_vehicle(
    vehicle_id: str,
    client: Optional[DataClient] = Depends(get_data_client)
):
    """Delete a vehicle with its photos. Inquiries are kept."""
    await delete_vehicle(client, vehicle_id)
