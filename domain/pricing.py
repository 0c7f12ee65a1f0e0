"""Booking pricing"""
from datetime import date
from decimal import Decimal
from typing import TYPE_CHECKING, Iterable, Mapping, Optional

from domain.quantity_codec import quantity_for
from domain.value_objects import StayPeriod

if TYPE_CHECKING:
    from domain.entities import FoodItem, Room


class PricingEngine:
    """Computes booking totals with exact decimal arithmetic.

    Missing prices count as zero and missing dates zero out the room
    charge; nothing here raises for absent input.
    """

    @staticmethod
    def nights(check_in: Optional[date], check_out: Optional[date]) -> Optional[int]:
        """Nights between the dates floored to 1, None if either is missing"""
        return StayPeriod(check_in=check_in, check_out=check_out).nights()

    @staticmethod
    def room_charge(
        rooms: Iterable["Room"],
        check_in: Optional[date],
        check_out: Optional[date]
    ) -> Decimal:
        nights = PricingEngine.nights(check_in, check_out)
        if nights is None:
            return Decimal("0")

        total = Decimal("0")
        for room in rooms:
            if room is None or room.price_per_night is None:
                continue
            total += room.price_per_night * nights
        return total

    @staticmethod
    def food_charge(
        food_items: Iterable["FoodItem"],
        quantities: Optional[Mapping[int, int]] = None
    ) -> Decimal:
        quantities = quantities or {}
        total = Decimal("0")
        for item in food_items:
            if item is None or item.price is None:
                continue
            total += item.price * quantity_for(quantities, item.food_item_id)
        return total

    @staticmethod
    def compute(
        rooms: Iterable["Room"],
        check_in: Optional[date],
        check_out: Optional[date],
        food_items: Iterable["FoodItem"],
        quantities: Optional[Mapping[int, int]] = None
    ) -> Decimal:
        """Total = sum(room price * nights) + sum(food price * quantity)"""
        return (
            PricingEngine.room_charge(rooms, check_in, check_out)
            + PricingEngine.food_charge(food_items, quantities)
        )
