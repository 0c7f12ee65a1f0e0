"""Domain Entities - Aggregates"""
from pydantic import BaseModel, Field
from datetime import datetime, date, timezone
from typing import Optional, List, Dict
from decimal import Decimal
import logging

from domain.enums import BookingStatus
from domain.lifecycle import BookingLifecycle
from domain.pricing import PricingEngine
from domain.value_objects import StayPeriod
from domain import quantity_codec

logger = logging.getLogger(__name__)


class Room(BaseModel):
    """Catalog Room"""
    room_id: Optional[int] = None
    room_number: Optional[int] = None
    room_type: Optional[str] = None
    price_per_night: Optional[Decimal] = None
    available: bool = True

    class Config:
        from_attributes = True


class FoodItem(BaseModel):
    """Catalog Food Item"""
    food_item_id: Optional[int] = None
    name: Optional[str] = None
    cuisine: Optional[str] = None
    price: Optional[Decimal] = None
    image_url: Optional[str] = None

    class Config:
        from_attributes = True


class Booking(BaseModel):
    """Booking Aggregate Root Entity"""

    # Identity
    booking_id: Optional[int] = None

    # References
    user_id: int
    rooms: List[Room] = []
    food_items: List[FoodItem] = []

    # Encoded {"food_item_id": quantity} selection
    food_quantities: Optional[str] = None

    check_in_date: Optional[date] = None
    check_out_date: Optional[date] = None

    total_amount: Optional[Decimal] = None
    status: BookingStatus = BookingStatus.PENDING

    # Metadata
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True

    # ==================== FACTORY METHOD ====================
    @staticmethod
    def create(
        user_id: int,
        rooms: List[Room],
        food_items: List[FoodItem],
        food_quantities: Optional[str],
        check_in_date: Optional[date],
        check_out_date: Optional[date]
    ) -> "Booking":
        """Create a new booking with a server-side total and initial status"""
        booking = Booking(
            user_id=user_id,
            rooms=rooms,
            food_items=food_items,
            food_quantities=food_quantities,
            check_in_date=check_in_date,
            check_out_date=check_out_date
        )
        booking.recalculate_total()
        BookingLifecycle.apply_initial_status(booking)
        return booking

    # ==================== PRICING ====================
    def quantities(self) -> Dict[int, int]:
        return quantity_codec.decode(self.food_quantities)

    def stay(self) -> StayPeriod:
        return StayPeriod(check_in=self.check_in_date, check_out=self.check_out_date)

    def nights(self) -> Optional[int]:
        return self.stay().nights()

    def compute_total(self) -> Decimal:
        return PricingEngine.compute(
            self.rooms,
            self.check_in_date,
            self.check_out_date,
            self.food_items,
            self.quantities()
        )

    def recalculate_total(self) -> Decimal:
        self.total_amount = self.compute_total()
        return self.total_amount

    def needs_recalculation(self) -> bool:
        return self.total_amount is None or self.total_amount == 0

    # ==================== PERSISTENCE HOOKS ====================
    def after_load(self) -> None:
        """Heal a missing or zero stored total from current catalog prices"""
        if self.needs_recalculation():
            total = self.recalculate_total()
            if total:
                logger.info("Recomputed total for booking %s: %s", self.booking_id, total)

    def before_save(self) -> None:
        now = datetime.now(timezone.utc)
        if self.created_at is None:
            self.created_at = now
        self.updated_at = now

    # ==================== STATUS ====================
    def change_status(self, status: BookingStatus) -> None:
        BookingLifecycle.override_status(self, status)
