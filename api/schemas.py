"""API Schemas - Request and Response DTOs"""
from pydantic import BaseModel, EmailStr, Field, PlainSerializer
from pydantic.alias_generators import to_camel
from datetime import date, datetime
from decimal import Decimal
from typing import Annotated, List, Optional

from domain.enums import BookingStatus, UserRole

# Decimal inside the app, a JSON number on the wire
Money = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]


class CamelModel(BaseModel):
    """Base DTO exchanging camelCase field names on the wire"""

    class Config:
        alias_generator = to_camel
        populate_by_name = True


# ============================================================================
# BOOKING SCHEMAS
# ============================================================================

class FoodItemQuantityRequest(CamelModel):
    """One food item and how many of it"""
    food_item_id: Optional[int] = None
    quantity: Optional[int] = Field(default=None, ge=1)


class CreateBookingRequest(CamelModel):
    """Create booking request DTO"""
    room_ids: Optional[List[int]] = None
    food_item_ids: Optional[List[int]] = None
    food_items: Optional[List[FoodItemQuantityRequest]] = None
    food_quantities: Optional[str] = None
    # accepted for compatibility, the server always computes the total
    total_amount: Optional[Decimal] = None
    check_in_date: Optional[date] = None
    check_out_date: Optional[date] = None


class CreateBookingResponse(BaseModel):
    """Create booking response DTO"""
    id: int
    status: BookingStatus
    total: Money


class BookingResponse(CamelModel):
    """Booking response DTO"""
    id: int
    user_id: int
    room_ids: List[int]
    food_items: List[FoodItemQuantityRequest]
    food_quantities: Optional[str] = None
    check_in_date: Optional[date] = None
    check_out_date: Optional[date] = None
    nights: Optional[int] = None
    total_amount: Money
    status: BookingStatus
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


# ============================================================================
# CATALOG SCHEMAS
# ============================================================================

class RoomRequest(CamelModel):
    """Create/update room request DTO"""
    room_number: Optional[int] = None
    room_type: Optional[str] = None
    price_per_night: Optional[Decimal] = Field(default=None, ge=0)
    available: bool = True


class RoomPriceRequest(CamelModel):
    """Room price update request DTO"""
    price_per_night: Optional[Decimal] = Field(default=None, ge=0)


class RoomResponse(CamelModel):
    """Room response DTO"""
    id: int
    room_number: Optional[int] = None
    room_type: Optional[str] = None
    price_per_night: Optional[Money] = None
    available: bool


class FoodItemRequest(CamelModel):
    """Create/update food item request DTO"""
    name: Optional[str] = None
    cuisine: Optional[str] = None
    price: Optional[Decimal] = Field(default=None, ge=0)
    image_url: Optional[str] = None


class FoodItemResponse(CamelModel):
    """Food item response DTO"""
    id: int
    name: Optional[str] = None
    cuisine: Optional[str] = None
    price: Optional[Money] = None
    image_url: Optional[str] = None


# ============================================================================
# ADMIN SCHEMAS
# ============================================================================

class StatsResponse(CamelModel):
    """Dashboard statistics DTO"""
    total_users: int
    total_rooms: int
    available_rooms: int
    booked_rooms: int
    total_food_items: int
    total_bookings: int
    pending_bookings: int
    confirmed_bookings: int
    cancelled_bookings: int
    completed_bookings: int
    total_revenue: Money


# ============================================================================
# AUTH SCHEMAS
# ============================================================================

class Token(BaseModel):
    """Token response DTO"""
    access_token: str
    token_type: str


class TokenData(BaseModel):
    """Token payload DTO"""
    email: Optional[str] = None
    role: Optional[str] = None


class RegisterRequest(CamelModel):
    """Register request DTO"""
    email: EmailStr
    password: str = Field(min_length=6)
    full_name: Optional[str] = None


class UserResponse(CamelModel):
    """User response DTO"""
    id: int
    email: str
    full_name: Optional[str] = None
    role: UserRole
    disabled: bool = False
    created_at: Optional[datetime] = None


class UserDetailsResponse(CamelModel):
    """User with booking history DTO"""
    user: UserResponse
    bookings: List[BookingResponse]
    total_bookings: int
    total_spent: Money
