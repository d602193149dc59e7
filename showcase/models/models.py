from sqlalchemy import Integer, String, DateTime, ForeignKey, Text, Float, JSON, Enum as SQLEnum
from sqlalchemy.orm import relationship, Mapped, mapped_column
from datetime import datetime
from showcase.database import Base
import enum
import uuid
from typing import List as TypingList, Optional


def _new_id() -> str:
    return str(uuid.uuid4())


class VehicleStatus(str, enum.Enum):
    """Listing lifecycle status"""
    ACTIVE = "active"
    SOLD = "sold"
    REMOVED = "removed"


class PhotoSlot(str, enum.Enum):
    """
    Named photo positions for a listing.

    Declaration order is the display order and the photo sort order.
    The first six are required for a complete listing (advisory only).
    """
    FRONT_CORNER = "front_corner"
    DRIVER_SIDE = "driver_side"
    REAR_CORNER = "rear_corner"
    PASSENGER_SIDE = "passenger_side"
    INTERIOR_FRONT = "interior_front"
    INTERIOR_REAR = "interior_rear"
    DAMAGE = "damage"
    UNDERCARRIAGE = "undercarriage"
    ADDITIONAL = "additional"

    @property
    def position(self) -> int:
        return list(PhotoSlot).index(self)

    @property
    def label(self) -> str:
        return SLOT_LABELS[self]

    @property
    def required(self) -> bool:
        return self in REQUIRED_SLOTS


SLOT_LABELS = {
    PhotoSlot.FRONT_CORNER: "Passenger Front Corner",
    PhotoSlot.DRIVER_SIDE: "Driver's Front Corner",
    PhotoSlot.REAR_CORNER: "Driver's Rear Corner",
    PhotoSlot.PASSENGER_SIDE: "Passenger's Rear Corner",
    PhotoSlot.INTERIOR_FRONT: "Interior - Front Seats",
    PhotoSlot.INTERIOR_REAR: "Interior - Rear Seats",
    PhotoSlot.DAMAGE: "Damage/Scratches/Wear",
    PhotoSlot.UNDERCARRIAGE: "Undercarriage",
    PhotoSlot.ADDITIONAL: "Additional",
}

REQUIRED_SLOTS = tuple(list(PhotoSlot)[:6])


class Vehicle(Base):
    __tablename__ = "vehicles"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    stock_number: Mapped[str] = mapped_column(String(50), unique=True, index=True, nullable=False)  # Dealership stock #
    year: Mapped[int] = mapped_column(Integer, nullable=False)
    make: Mapped[str] = mapped_column(String(50), nullable=False)  # e.g., Toyota, Lexus
    model: Mapped[str] = mapped_column(String(50), nullable=False)  # e.g., Camry, RAV4
    trim: Mapped[str] = mapped_column(String(100), default="", nullable=False)
    mileage: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    price: Mapped[float] = mapped_column(Float, default=0, nullable=False)  # 0 = not yet priced
    exterior_color: Mapped[str] = mapped_column(String(50), default="", nullable=False)
    interior_color: Mapped[str] = mapped_column(String(50), default="", nullable=False)
    transmission: Mapped[str] = mapped_column(String(50), default="", nullable=False)
    engine: Mapped[str] = mapped_column(String(100), default="", nullable=False)
    features: Mapped[TypingList[str]] = mapped_column(JSON, default=list, nullable=False)
    description: Mapped[str] = mapped_column(Text, default="", nullable=False)
    status: Mapped[VehicleStatus] = mapped_column(SQLEnum(VehicleStatus, values_callable=lambda x: [e.value for e in x]), default=VehicleStatus.ACTIVE, nullable=False, index=True)
    assigned_salesperson: Mapped[str] = mapped_column(String(100), default="", nullable=False)  # Display name only
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    photos: Mapped[TypingList["VehiclePhoto"]] = relationship("VehiclePhoto", back_populates="vehicle", cascade="all, delete-orphan")
    inquiries: Mapped[TypingList["CustomerInquiry"]] = relationship("CustomerInquiry", back_populates="vehicle")


class VehiclePhoto(Base):
    """
    One stored image bound to a (vehicle, slot) pair.

    At rest there is at most one row per pair; an upload to an occupied slot
    inserts the new row first and then removes the previous occupant.
    """
    __tablename__ = "vehicle_photos"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    vehicle_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("vehicles.id", ondelete="CASCADE"), nullable=False, index=True
    )
    photo_type: Mapped[PhotoSlot] = mapped_column(SQLEnum(PhotoSlot, values_callable=lambda x: [e.value for e in x]), nullable=False, index=True)
    photo_url: Mapped[str] = mapped_column(String(1000), nullable=False)  # Public URL in the photo bucket
    sort_order: Mapped[int] = mapped_column(Integer, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)

    vehicle: Mapped["Vehicle"] = relationship("Vehicle", back_populates="photos")


class CustomerInquiry(Base):
    """Contact request from a customer. Never updated or deleted."""
    __tablename__ = "customer_inquiries"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    vehicle_id: Mapped[Optional[str]] = mapped_column(
        String(36), ForeignKey("vehicles.id", ondelete="SET NULL"), nullable=True, index=True
    )
    customer_name: Mapped[str] = mapped_column(String(120), nullable=False)
    customer_email: Mapped[str] = mapped_column(String(255), nullable=False)
    customer_phone: Mapped[str] = mapped_column(String(40), default="", nullable=False)
    message: Mapped[str] = mapped_column(Text, default="", nullable=False)
    assigned_salesperson: Mapped[str] = mapped_column(String(100), default="", nullable=False)  # Copied from the vehicle
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)

    vehicle: Mapped[Optional["Vehicle"]] = relationship("Vehicle", back_populates="inquiries")
