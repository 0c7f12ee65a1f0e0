"""Domain Value Objects"""
from pydantic import BaseModel, Field
from datetime import date
from typing import Optional


class StayPeriod(BaseModel):
    """Value Object for a requested stay; either date may be absent"""
    check_in: Optional[date] = None
    check_out: Optional[date] = None

    def is_complete(self) -> bool:
        return self.check_in is not None and self.check_out is not None

    def nights(self) -> Optional[int]:
        """Number of nights floored to 1, or None when a date is missing"""
        if not self.is_complete():
            return None
        return max(1, (self.check_out - self.check_in).days)

    class Config:
        frozen = True


class FoodSelection(BaseModel):
    """Value Object for one ordered food item; quantity None means the default"""
    food_item_id: Optional[int] = None
    quantity: Optional[int] = Field(default=None, ge=1)

    class Config:
        frozen = True
