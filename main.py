import logging
from fastapi import FastAPI, HTTPException, Depends, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.security import OAuth2PasswordRequestForm
from datetime import timedelta
from typing import List

from api.schemas import (
    # Bookings
    CreateBookingRequest, CreateBookingResponse, BookingResponse, FoodItemQuantityRequest,
    # Catalog
    RoomRequest, RoomPriceRequest, RoomResponse, FoodItemRequest, FoodItemResponse,
    # Admin
    StatsResponse, UserDetailsResponse,
    # Auth
    Token, RegisterRequest, UserResponse
)
from api.dependencies import (
    get_booking_service, get_catalog_service, get_auth_service, get_stats_service,
    get_current_principal, get_current_active_user, get_current_admin_user
)
from application.services import BookingService, CatalogService, AuthService, StatsService
from domain import quantity_codec
from domain.auth import User
from domain.entities import Booking
from domain.enums import BookingStatus
from domain.exceptions import UserNotFound, UnknownStatus, NotFoundException, EmailAlreadyRegistered
from domain.value_objects import FoodSelection
from infrastructure.config import settings
from infrastructure.security import create_user_token, ACCESS_TOKEN_EXPIRE_MINUTES

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s"
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.APP_NAME,
    description="Hotel booking API: rooms, food items and server-priced bookings",
    version="1.0.0",
    debug=settings.DEBUG
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["Authorization", "Content-Type"],
)

# ============================================================================
# ERROR MAPPING
# ============================================================================

@app.exception_handler(UserNotFound)
async def user_not_found_handler(request: Request, exc: UserNotFound):
    logger.info("Rejected request for unknown user %s", exc.email)
    return JSONResponse(status_code=403, content={"detail": "User not found or not authenticated"})

@app.exception_handler(UnknownStatus)
async def unknown_status_handler(request: Request, exc: UnknownStatus):
    return JSONResponse(status_code=400, content={"detail": str(exc)})

@app.exception_handler(NotFoundException)
async def not_found_handler(request: Request, exc: NotFoundException):
    return JSONResponse(status_code=404, content={"detail": str(exc)})

@app.exception_handler(EmailAlreadyRegistered)
async def email_registered_handler(request: Request, exc: EmailAlreadyRegistered):
    return JSONResponse(status_code=400, content={"detail": str(exc)})

# ============================================================================
# HEALTH & ENUM REFERENCE ENDPOINTS
# ============================================================================

@app.get("/api/health", tags=["Health"])
async def health_check():
    """Health check endpoint"""
    return {"status": "healthy", "message": "API is running"}

@app.get("/api/enums/booking-status", tags=["Enum Reference"])
async def get_booking_statuses():
    """Get all BookingStatus enum values"""
    return {
        "values": [item.name for item in BookingStatus],
        "description": "Booking status values: PENDING, CONFIRMED, CANCELLED, COMPLETED"
    }

# ============================================================================
# AUTH ENDPOINTS
# ============================================================================

@app.post("/token", response_model=Token, tags=["Auth"])
async def login_for_access_token(
    form_data: OAuth2PasswordRequestForm = Depends(),
    service: AuthService = Depends(get_auth_service)
):
    user = await service.authenticate(form_data.username, form_data.password)
    if not user:
        raise HTTPException(
            status_code=401,
            detail="Incorrect email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )
    access_token = create_user_token(
        user.email, user.role.value, expires_delta=timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES)
    )
    return {"access_token": access_token, "token_type": "bearer"}

@app.post("/api/auth/register", response_model=UserResponse, status_code=201, tags=["Auth"])
async def register(request: RegisterRequest, service: AuthService = Depends(get_auth_service)):
    """Create a guest account"""
    user = await service.register(request.email, request.password, request.full_name)
    return _user_to_response(user)

@app.get("/users/me", response_model=UserResponse, tags=["Auth"])
async def read_users_me(current_user: User = Depends(get_current_active_user)):
    return _user_to_response(current_user)

# ============================================================================
# BOOKING ENDPOINTS
# ============================================================================

@app.post("/api/bookings", response_model=CreateBookingResponse, tags=["Bookings"])
async def create_booking(
    request: CreateBookingRequest,
    service: BookingService = Depends(get_booking_service),
    principal: str = Depends(get_current_principal)
):
    """Create booking; the total is always computed server-side"""
    selections = None
    if request.food_items:
        selections = [
            FoodSelection(food_item_id=f.food_item_id, quantity=f.quantity)
            for f in request.food_items
        ]

    booking = await service.create_booking(
        user_email=principal,
        room_ids=request.room_ids,
        food_item_ids=request.food_item_ids,
        food_selections=selections,
        food_quantities=request.food_quantities,
        check_in=request.check_in_date,
        check_out=request.check_out_date
    )
    return CreateBookingResponse(id=booking.booking_id, status=booking.status, total=booking.total_amount)

@app.get("/api/bookings/me", response_model=List[BookingResponse], tags=["Bookings"])
async def get_my_bookings(
    service: BookingService = Depends(get_booking_service),
    current_user: User = Depends(get_current_active_user)
):
    """Get the caller's bookings"""
    bookings = await service.get_bookings_for_user(current_user.user_id)
    return [_booking_to_response(b) for b in bookings]

@app.get("/api/bookings/{booking_id}", response_model=BookingResponse, tags=["Bookings"])
async def get_booking(
    booking_id: int,
    service: BookingService = Depends(get_booking_service),
    current_user: User = Depends(get_current_active_user)
):
    """Get booking by ID"""
    booking = await service.get_booking(booking_id)
    if not booking or (booking.user_id != current_user.user_id and not current_user.is_admin()):
        raise HTTPException(status_code=404, detail="Booking not found")
    return _booking_to_response(booking)

# ============================================================================
# CATALOG ENDPOINTS
# ============================================================================

@app.get("/api/rooms", response_model=List[RoomResponse], tags=["Catalog"])
async def list_rooms(service: CatalogService = Depends(get_catalog_service)):
    rooms = await service.list_rooms()
    return [_room_to_response(r) for r in rooms]

@app.get("/api/food-items", response_model=List[FoodItemResponse], tags=["Catalog"])
async def list_food_items(service: CatalogService = Depends(get_catalog_service)):
    food_items = await service.list_food_items()
    return [_food_item_to_response(f) for f in food_items]

# ============================================================================
# ADMIN ENDPOINTS
# ============================================================================

@app.get("/api/admin/users", response_model=List[UserResponse], tags=["Admin"])
async def admin_list_users(
    service: AuthService = Depends(get_auth_service),
    admin: User = Depends(get_current_admin_user)
):
    users = await service.list_users()
    return [_user_to_response(u) for u in users]

@app.get("/api/admin/users/{user_id}", response_model=UserDetailsResponse, tags=["Admin"])
async def admin_get_user(
    user_id: int,
    service: AuthService = Depends(get_auth_service),
    admin: User = Depends(get_current_admin_user)
):
    """User with booking history"""
    details = await service.get_user_details(user_id)
    return UserDetailsResponse(
        user=_user_to_response(details["user"]),
        bookings=[_booking_to_response(b) for b in details["bookings"]],
        total_bookings=details["total_bookings"],
        total_spent=details["total_spent"]
    )

@app.delete("/api/admin/users/{user_id}", status_code=204, tags=["Admin"])
async def admin_delete_user(
    user_id: int,
    service: AuthService = Depends(get_auth_service),
    admin: User = Depends(get_current_admin_user)
):
    """Delete a user and their bookings"""
    await service.delete_user(user_id)

@app.get("/api/admin/rooms", response_model=List[RoomResponse], tags=["Admin"])
async def admin_list_rooms(
    service: CatalogService = Depends(get_catalog_service),
    admin: User = Depends(get_current_admin_user)
):
    rooms = await service.list_rooms()
    return [_room_to_response(r) for r in rooms]

@app.post("/api/admin/rooms", response_model=RoomResponse, status_code=201, tags=["Admin"])
async def admin_create_room(
    request: RoomRequest,
    service: CatalogService = Depends(get_catalog_service),
    admin: User = Depends(get_current_admin_user)
):
    room = await service.create_room(
        room_number=request.room_number,
        room_type=request.room_type,
        price_per_night=request.price_per_night,
        available=request.available
    )
    return _room_to_response(room)

@app.put("/api/admin/rooms/{room_id}", response_model=RoomResponse, tags=["Admin"])
async def admin_update_room(
    room_id: int,
    request: RoomRequest,
    service: CatalogService = Depends(get_catalog_service),
    admin: User = Depends(get_current_admin_user)
):
    room = await service.update_room(
        room_id=room_id,
        room_number=request.room_number,
        room_type=request.room_type,
        price_per_night=request.price_per_night,
        available=request.available
    )
    return _room_to_response(room)

@app.put("/api/admin/rooms/{room_id}/price", tags=["Admin"])
async def admin_update_room_price(
    room_id: int,
    request: RoomPriceRequest,
    service: CatalogService = Depends(get_catalog_service),
    admin: User = Depends(get_current_admin_user)
):
    """Change a room's nightly price; existing booking totals are untouched"""
    room = await service.update_room_price(room_id, request.price_per_night)
    return {
        "id": room.room_id,
        "roomNumber": room.room_number,
        "pricePerNight": room.price_per_night,
        "message": "Price updated successfully"
    }

@app.put("/api/admin/rooms/{room_id}/availability", response_model=RoomResponse, tags=["Admin"])
async def admin_update_room_availability(
    room_id: int,
    available: bool,
    service: CatalogService = Depends(get_catalog_service),
    admin: User = Depends(get_current_admin_user)
):
    room = await service.set_room_availability(room_id, available)
    return _room_to_response(room)

@app.delete("/api/admin/rooms/{room_id}", status_code=204, tags=["Admin"])
async def admin_delete_room(
    room_id: int,
    service: CatalogService = Depends(get_catalog_service),
    admin: User = Depends(get_current_admin_user)
):
    await service.delete_room(room_id)

@app.get("/api/admin/food-items", response_model=List[FoodItemResponse], tags=["Admin"])
async def admin_list_food_items(
    service: CatalogService = Depends(get_catalog_service),
    admin: User = Depends(get_current_admin_user)
):
    food_items = await service.list_food_items()
    return [_food_item_to_response(f) for f in food_items]

@app.post("/api/admin/food-items", response_model=FoodItemResponse, status_code=201, tags=["Admin"])
async def admin_create_food_item(
    request: FoodItemRequest,
    service: CatalogService = Depends(get_catalog_service),
    admin: User = Depends(get_current_admin_user)
):
    food_item = await service.create_food_item(
        name=request.name,
        cuisine=request.cuisine,
        price=request.price,
        image_url=request.image_url
    )
    return _food_item_to_response(food_item)

@app.put("/api/admin/food-items/{food_item_id}", response_model=FoodItemResponse, tags=["Admin"])
async def admin_update_food_item(
    food_item_id: int,
    request: FoodItemRequest,
    service: CatalogService = Depends(get_catalog_service),
    admin: User = Depends(get_current_admin_user)
):
    food_item = await service.update_food_item(
        food_item_id=food_item_id,
        name=request.name,
        cuisine=request.cuisine,
        price=request.price
    )
    return _food_item_to_response(food_item)

@app.delete("/api/admin/food-items/{food_item_id}", status_code=204, tags=["Admin"])
async def admin_delete_food_item(
    food_item_id: int,
    service: CatalogService = Depends(get_catalog_service),
    admin: User = Depends(get_current_admin_user)
):
    await service.delete_food_item(food_item_id)

@app.get("/api/admin/bookings", response_model=List[BookingResponse], tags=["Admin"])
async def admin_list_bookings(
    service: BookingService = Depends(get_booking_service),
    admin: User = Depends(get_current_admin_user)
):
    bookings = await service.get_all_bookings()
    return [_booking_to_response(b) for b in bookings]

@app.put("/api/admin/bookings/{booking_id}/status", response_model=BookingResponse, tags=["Admin"])
async def admin_update_booking_status(
    booking_id: int,
    status: str,
    service: BookingService = Depends(get_booking_service),
    admin: User = Depends(get_current_admin_user)
):
    """Set any status; the name is matched case-insensitively"""
    booking = await service.update_status(booking_id, status)
    return _booking_to_response(booking)

@app.delete("/api/admin/bookings/{booking_id}", status_code=204, tags=["Admin"])
async def admin_delete_booking(
    booking_id: int,
    service: BookingService = Depends(get_booking_service),
    admin: User = Depends(get_current_admin_user)
):
    await service.delete_booking(booking_id)

@app.get("/api/admin/stats", response_model=StatsResponse, tags=["Admin"])
async def admin_stats(
    service: StatsService = Depends(get_stats_service),
    admin: User = Depends(get_current_admin_user)
):
    return StatsResponse(**await service.get_stats())

# ============================================================================
# RESPONSE MAPPERS
# ============================================================================

def _booking_to_response(booking: Booking) -> BookingResponse:
    """Convert Booking entity to BookingResponse"""
    quantities = booking.quantities()
    return BookingResponse(
        id=booking.booking_id,
        user_id=booking.user_id,
        room_ids=[r.room_id for r in booking.rooms],
        food_items=[
            FoodItemQuantityRequest(
                food_item_id=f.food_item_id,
                quantity=quantity_codec.quantity_for(quantities, f.food_item_id)
            )
            for f in booking.food_items
        ],
        food_quantities=booking.food_quantities,
        check_in_date=booking.check_in_date,
        check_out_date=booking.check_out_date,
        nights=booking.nights(),
        total_amount=booking.total_amount,
        status=booking.status,
        created_at=booking.created_at,
        updated_at=booking.updated_at
    )

def _room_to_response(room) -> RoomResponse:
    """Convert Room entity to RoomResponse"""
    return RoomResponse(
        id=room.room_id,
        room_number=room.room_number,
        room_type=room.room_type,
        price_per_night=room.price_per_night,
        available=room.available
    )

def _food_item_to_response(food_item) -> FoodItemResponse:
    """Convert FoodItem entity to FoodItemResponse"""
    return FoodItemResponse(
        id=food_item.food_item_id,
        name=food_item.name,
        cuisine=food_item.cuisine,
        price=food_item.price,
        image_url=food_item.image_url
    )

def _user_to_response(user) -> UserResponse:
    """Convert User entity to UserResponse"""
    return UserResponse(
        id=user.user_id,
        email=user.email,
        full_name=user.full_name,
        role=user.role,
        disabled=user.disabled,
        created_at=user.created_at
    )

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
