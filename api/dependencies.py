"""API Dependencies - Stores, Services and Authentication"""
from datetime import datetime, timezone
from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError

from application.services import BookingService, CatalogService, AuthService, StatsService
from domain.auth import User, UserInDB
from domain.enums import UserRole
from domain.repositories import UserRepository, RoomRepository, FoodItemRepository, BookingRepository
from infrastructure.config import settings
from infrastructure.notifications import BookingNotifier, build_notifier
from infrastructure.repositories.in_memory_repositories import (
    InMemoryUserRepository, InMemoryRoomRepository, InMemoryFoodItemRepository, InMemoryBookingRepository
)
from infrastructure.security import decode_access_token, get_password_hash
from api.schemas import TokenData

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="token")


def bootstrap_admin() -> UserInDB:
    """Administrator account seeded from settings"""
    return UserInDB(
        email=settings.ADMIN_EMAIL,
        full_name=settings.ADMIN_FULL_NAME,
        role=UserRole.ADMIN,
        hashed_password=get_password_hash(settings.ADMIN_PASSWORD),
        created_at=datetime.now(timezone.utc)
    )


# Initialize repositories
user_repo = InMemoryUserRepository(initial_users=[bootstrap_admin()])
room_repo = InMemoryRoomRepository()
food_item_repo = InMemoryFoodItemRepository()
booking_repo = InMemoryBookingRepository(room_repo, food_item_repo)
notifier = build_notifier(settings)


def get_user_repository() -> UserRepository:
    return user_repo

def get_room_repository() -> RoomRepository:
    return room_repo

def get_food_item_repository() -> FoodItemRepository:
    return food_item_repo

def get_booking_repository() -> BookingRepository:
    return booking_repo

def get_notifier() -> BookingNotifier:
    return notifier


def get_booking_service(
    bookings: BookingRepository = Depends(get_booking_repository),
    users: UserRepository = Depends(get_user_repository),
    rooms: RoomRepository = Depends(get_room_repository),
    food_items: FoodItemRepository = Depends(get_food_item_repository),
    booking_notifier: BookingNotifier = Depends(get_notifier)
) -> BookingService:
    return BookingService(bookings, users, rooms, food_items, booking_notifier)

def get_catalog_service(
    rooms: RoomRepository = Depends(get_room_repository),
    food_items: FoodItemRepository = Depends(get_food_item_repository)
) -> CatalogService:
    return CatalogService(rooms, food_items)

def get_auth_service(
    users: UserRepository = Depends(get_user_repository),
    bookings: BookingRepository = Depends(get_booking_repository)
) -> AuthService:
    return AuthService(users, bookings)

def get_stats_service(
    users: UserRepository = Depends(get_user_repository),
    rooms: RoomRepository = Depends(get_room_repository),
    food_items: FoodItemRepository = Depends(get_food_item_repository),
    bookings: BookingRepository = Depends(get_booking_repository)
) -> StatsService:
    return StatsService(users, rooms, food_items, bookings)


# ============================================================================
# AUTHENTICATION
# ============================================================================

credentials_exception = HTTPException(
    status_code=status.HTTP_401_UNAUTHORIZED,
    detail="Could not validate credentials",
    headers={"WWW-Authenticate": "Bearer"},
)


async def get_token_data(token: str = Depends(oauth2_scheme)) -> TokenData:
    try:
        payload = decode_access_token(token)
    except JWTError:
        raise credentials_exception
    email = payload.get("sub")
    if email is None:
        raise credentials_exception
    return TokenData(email=email, role=payload.get("role"))

async def get_current_principal(token_data: TokenData = Depends(get_token_data)) -> str:
    """Email of the authenticated caller, without a directory lookup"""
    return token_data.email

async def get_current_user(
    token_data: TokenData = Depends(get_token_data),
    users: UserRepository = Depends(get_user_repository)
) -> UserInDB:
    user = await users.find_by_email(token_data.email)
    if user is None:
        raise credentials_exception
    return user

async def get_current_active_user(current_user: User = Depends(get_current_user)):
    if current_user.disabled:
        raise HTTPException(status_code=400, detail="Inactive user")
    return current_user

async def get_current_admin_user(current_user: User = Depends(get_current_active_user)):
    if not current_user.is_admin():
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Admin role required")
    return current_user
