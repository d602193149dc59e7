from fastapi import APIRouter, Depends
from typing import List, Optional
from showcase.data_client import DataClient, get_data_client
from showcase.models.schemas import VehicleResponse, InquiryResponse, AdminInquiryResponse
from showcase.services import inventory
from showcase.services.inquiries import list_inquiries

router = APIRouter()


@router.get("/admin/vehicles", response_model=List[VehicleResponse])
def list_all_vehicles(client: Optional[DataClient] = Depends(get_data_client)):
    """Every vehicle regardless of status, newest first."""
    return inventory.fetch_all(client)


@router.get("/admin/inquiries", response_model=List[AdminInquiryResponse])
def list_all_inquiries(client: Optional[DataClient] = Depends(get_data_client)):
    """Customer inquiries, newest first, with the vehicle they were about."""
    return [
        AdminInquiryResponse(
            inquiry=InquiryResponse.model_validate(entry["inquiry"]),
            vehicle=entry["vehicle"],
        )
        for entry in list_inquiries(client)
    ]
