from pydantic import BaseModel, field_validator
from datetime import datetime
from typing import Optional, List
from showcase.models.models import VehicleStatus, PhotoSlot


# Vehicle schemas
class VehicleCreate(BaseModel):
    """Full vehicle form. Used for both create (POST) and overwrite (PUT)."""
    stock_number: str
    year: int
    make: str = "Toyota"
    model: str
    trim: str = ""
    mileage: int = 0
    price: Optional[float] = 0
    exterior_color: str = ""
    interior_color: str = ""
    transmission: str = ""
    engine: str = ""
    features: List[str] = []
    description: str = ""
    assigned_salesperson: str = ""

    @field_validator('stock_number', 'make', 'model')
    @classmethod
    def strip_text(cls, v: str) -> str:
        return v.strip()

    @field_validator('features')
    @classmethod
    def drop_blank_features(cls, v: List[str]) -> List[str]:
        """Trim feature tags and discard empty ones."""
        return [f.strip() for f in v if f and f.strip()]


class VehicleResponse(BaseModel):
    id: str
    stock_number: str
    year: int
    make: str
    model: str
    trim: str
    mileage: int
    price: float
    exterior_color: str
    interior_color: str
    transmission: str
    engine: str
    features: List[str]
    description: str
    status: VehicleStatus
    assigned_salesperson: str
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class VehicleListItem(VehicleResponse):
    """Grid card: vehicle plus its front-corner photo, if any."""
    primary_photo_url: Optional[str] = None


class PriceUpdate(BaseModel):
    price: Optional[float] = None


class StockNumberCheck(BaseModel):
    stock_number: str
    available: bool
    conflicting_vehicle_id: Optional[str] = None


# Photo schemas
class PhotoResponse(BaseModel):
    id: str
    vehicle_id: str
    photo_type: PhotoSlot
    photo_url: str
    sort_order: int
    created_at: datetime

    class Config:
        from_attributes = True


class PhotoSlotInfo(BaseModel):
    """One entry of the fixed slot list, in display order."""
    slot: PhotoSlot
    label: str
    position: int
    required: bool


class VehicleDetailResponse(BaseModel):
    vehicle: VehicleResponse
    photos: List[PhotoResponse]
    missing_required_slots: List[PhotoSlot]


# Inquiry schemas
class InquiryCreate(BaseModel):
    vehicle_id: str
    customer_name: str
    customer_email: str
    customer_phone: str = ""
    message: str = ""


class InquiryResponse(BaseModel):
    id: str
    vehicle_id: Optional[str] = None
    customer_name: str
    customer_email: str
    customer_phone: str
    message: str
    assigned_salesperson: str
    created_at: datetime

    class Config:
        from_attributes = True


class InquiryVehicleSummary(BaseModel):
    year: int
    make: str
    model: str
    stock_number: str


class AdminInquiryResponse(BaseModel):
    inquiry: InquiryResponse
    vehicle: Optional[InquiryVehicleSummary] = None


# Salesperson gate schemas
class SalespersonSignIn(BaseModel):
    name: str
    code: str


class SalespersonSignInResponse(BaseModel):
    authenticated: bool
    salesperson_name: str
