from fastapi import APIRouter, BackgroundTasks, Depends, Request, status
from typing import Optional
from showcase.data_client import DataClient, get_data_client
from showcase.events.bus import event_bus
from showcase.models.schemas import InquiryCreate, InquiryResponse
from showcase.services.inquiries import submit_inquiry
from showcase.utils.rate_limit import limiter
import logging

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/inquiries", response_model=InquiryResponse, status_code=status.HTTP_201_CREATED)
@limiter.limit("5/minute")  # Rate limit: 5 inquiries per minute per IP
def create_inquiry(
    request: Request,
    inquiry: InquiryCreate,
    background_tasks: BackgroundTasks,
    client: Optional[DataClient] = Depends(get_data_client)
):
    """
    Submit a customer inquiry about a vehicle.

    The e-mail notification is queued after the inquiry is stored; its outcome
    never changes this response.
    """
    saved, payload = submit_inquiry(
        client,
        inquiry.vehicle_id,
        inquiry.customer_name,
        inquiry.customer_email,
        inquiry.customer_phone,
        inquiry.message,
    )
    background_tasks.add_task(event_bus.emit, "inquiry.created", payload)
    return saved
