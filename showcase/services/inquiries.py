"""
Inquiry Intake.

An inquiry is persisted first; the e-mail notification is a side channel
raised afterwards on the event bus and never affects the submission result.
"""
from typing import Any, Dict, List, Optional
import logging
import re

from showcase.data_client import DataClient, require_client
from showcase.errors import NotFoundError, StoreError, ValidationFailedError
from showcase.models.models import CustomerInquiry, Vehicle

logger = logging.getLogger(__name__)

SUBMIT_FAILED_MESSAGE = "There was an error submitting your inquiry. Please try again."

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def validate_contact(name: str, email: str) -> List[str]:
    errors = []
    if not (name or "").strip():
        errors.append("Name is required")
    if not (email or "").strip():
        errors.append("Email is required")
    elif not EMAIL_PATTERN.match(email.strip()):
        errors.append("Please enter a valid email address")
    return errors


def build_notification_payload(inquiry: CustomerInquiry, vehicle: Vehicle) -> Dict[str, Any]:
    """Body POSTed to the notification endpoint."""
    return {
        "inquiry": {
            "customer_name": inquiry.customer_name,
            "customer_email": inquiry.customer_email,
            "customer_phone": inquiry.customer_phone,
            "message": inquiry.message,
        },
        "vehicle": {
            "year": vehicle.year,
            "make": vehicle.make,
            "model": vehicle.model,
            "trim": vehicle.trim,
            "stock_number": vehicle.stock_number,
            "price": vehicle.price,
            "mileage": vehicle.mileage,
            "exterior_color": vehicle.exterior_color,
        },
    }


def submit_inquiry(
    client: Optional[DataClient],
    vehicle_id: str,
    customer_name: str,
    customer_email: str,
    customer_phone: str = "",
    message: str = "",
) -> tuple[CustomerInquiry, Dict[str, Any]]:
    """
    Persist an inquiry about a vehicle.

    ``assigned_salesperson`` is copied from the vehicle at submission time.

    Returns:
        (inquiry, notification payload). The caller decides when to send the
        notification; persistence has already succeeded by then.
    """
    client = require_client(client)

    errors = validate_contact(customer_name, customer_email)
    if errors:
        raise ValidationFailedError("; ".join(errors))

    vehicle = client.get("vehicles", vehicle_id)
    if vehicle is None:
        raise NotFoundError("Vehicle not found")

    try:
        inquiry = client.insert("customer_inquiries", {
            "vehicle_id": vehicle_id,
            "customer_name": customer_name.strip(),
            "customer_email": customer_email.strip(),
            "customer_phone": (customer_phone or "").strip(),
            "message": message or "",
            "assigned_salesperson": vehicle.assigned_salesperson or "",
        })
    except StoreError as e:
        logger.error(f"Error submitting inquiry for vehicle {vehicle_id}: {e.message}")
        raise StoreError(SUBMIT_FAILED_MESSAGE) from e

    logger.info(f"Inquiry {inquiry.id} received for vehicle {vehicle_id}")
    return inquiry, build_notification_payload(inquiry, vehicle)


def list_inquiries(client: Optional[DataClient]) -> List[Dict[str, Any]]:
    """
    Every inquiry, newest first, each with a summary of its vehicle.

    Read failures degrade to an empty list.
    """
    client = require_client(client)
    try:
        inquiries = client.select("customer_inquiries", order_by="created_at", descending=True)
        vehicle_ids = list({i.vehicle_id for i in inquiries if i.vehicle_id})
        vehicles = {v.id: v for v in client.select("vehicles", filters={"id": vehicle_ids})} if vehicle_ids else {}
    except StoreError as e:
        logger.error(f"Error fetching inquiries: {e.message}")
        return []

    results = []
    for inquiry in inquiries:
        vehicle = vehicles.get(inquiry.vehicle_id)
        results.append({
            "inquiry": inquiry,
            "vehicle": {
                "year": vehicle.year,
                "make": vehicle.make,
                "model": vehicle.model,
                "stock_number": vehicle.stock_number,
            } if vehicle else None,
        })
    return results
