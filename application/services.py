"""Application Services - Business use cases"""
import asyncio
import logging
from datetime import date, datetime, timezone
from decimal import Decimal
from typing import List, Optional, Dict, Any

from domain import quantity_codec
from domain.auth import UserInDB
from domain.entities import Booking, Room, FoodItem
from domain.enums import BookingStatus, UserRole
from domain.exceptions import UserNotFound, NotFoundException, EmailAlreadyRegistered
from domain.lifecycle import BookingLifecycle
from domain.repositories import UserRepository, RoomRepository, FoodItemRepository, BookingRepository
from domain.value_objects import FoodSelection
from infrastructure.notifications import BookingNotifier
from infrastructure.security import get_password_hash, verify_password

logger = logging.getLogger(__name__)


class BookingService:
    """Service for Booking use cases.

    There is no availability check and no lock on rooms: overlapping
    bookings for the same room and dates are all accepted.
    """

    def __init__(self,
                 repository: BookingRepository,
                 user_repo: UserRepository,
                 room_repo: RoomRepository,
                 food_item_repo: FoodItemRepository,
                 notifier: Optional[BookingNotifier] = None):
        self.repository = repository
        self.user_repo = user_repo
        self.room_repo = room_repo
        self.food_item_repo = food_item_repo
        self.notifier = notifier

    async def create_booking(
        self,
        user_email: str,
        room_ids: Optional[List[int]] = None,
        food_item_ids: Optional[List[int]] = None,
        food_selections: Optional[List[FoodSelection]] = None,
        food_quantities: Optional[str] = None,
        check_in: Optional[date] = None,
        check_out: Optional[date] = None
    ) -> Booking:
        """Create and store a booking priced from current catalog prices"""
        user = await self.user_repo.find_by_email(user_email)
        if user is None:
            raise UserNotFound(user_email)

        rooms = await self.room_repo.find_all_by_ids(room_ids or [])
        self._log_misses("room", room_ids, [r.room_id for r in rooms])

        # the itemized shape wins over the flat id list
        if food_selections:
            requested_food_ids = [s.food_item_id for s in food_selections if s.food_item_id is not None]
            quantities = {
                s.food_item_id: s.quantity
                for s in food_selections
                if s.food_item_id is not None and s.quantity is not None
            }
        else:
            requested_food_ids = food_item_ids or []
            quantities = quantity_codec.decode(food_quantities)

        food_items = await self.food_item_repo.find_all_by_ids(requested_food_ids)
        self._log_misses("food item", requested_food_ids, [f.food_item_id for f in food_items])

        booking = Booking.create(
            user_id=user.user_id,
            rooms=rooms,
            food_items=food_items,
            food_quantities=quantity_codec.encode(quantities) if quantities else None,
            check_in_date=check_in,
            check_out_date=check_out
        )
        booking = await self.repository.save(booking)
        logger.info(
            "Booking %s created for %s with total %s",
            booking.booking_id, user.email, booking.total_amount
        )

        await self._notify(booking, user)
        return booking

    async def _notify(self, booking: Booking, user: UserInDB) -> None:
        if self.notifier is None:
            return
        try:
            await asyncio.to_thread(self.notifier.send_booking_confirmation, booking, user)
        except Exception as e:
            logger.warning("Confirmation for booking %s not sent: %s", booking.booking_id, e)

    @staticmethod
    def _log_misses(resource: str, requested: Optional[List[int]], found: List[int]) -> None:
        missing = [i for i in (requested or []) if i not in found]
        if missing:
            logger.info("Dropping unknown %s ids %s", resource, missing)

    async def get_booking(self, booking_id: int) -> Optional[Booking]:
        """Get booking by ID"""
        return await self.repository.find_by_id(booking_id)

    async def get_bookings_for_user(self, user_id: int) -> List[Booking]:
        """Get all bookings owned by a user"""
        return await self.repository.find_by_user_id(user_id)

    async def get_all_bookings(self) -> List[Booking]:
        """Get all bookings"""
        return await self.repository.find_all()

    async def update_status(self, booking_id: int, status: str) -> Booking:
        """Administrative status override"""
        booking = await self.repository.find_by_id(booking_id)
        if not booking:
            raise NotFoundException("booking", booking_id)

        booking.change_status(BookingLifecycle.parse_status(status))
        return await self.repository.update(booking)

    async def delete_booking(self, booking_id: int) -> bool:
        """Delete booking"""
        return await self.repository.delete(booking_id)


class CatalogService:
    """Service for rooms and food items.

    Price edits only touch the catalog; stored booking totals are left as
    they are.
    """

    def __init__(self, room_repo: RoomRepository, food_item_repo: FoodItemRepository):
        self.room_repo = room_repo
        self.food_item_repo = food_item_repo

    # ==================== ROOMS ====================
    async def list_rooms(self) -> List[Room]:
        return await self.room_repo.find_all()

    async def get_room(self, room_id: int) -> Room:
        room = await self.room_repo.find_by_id(room_id)
        if not room:
            raise NotFoundException("room", room_id)
        return room

    async def create_room(
        self,
        room_number: Optional[int],
        room_type: Optional[str],
        price_per_night: Optional[Decimal],
        available: bool = True
    ) -> Room:
        room = Room(
            room_number=room_number,
            room_type=room_type,
            price_per_night=price_per_night,
            available=available
        )
        return await self.room_repo.save(room)

    async def update_room(
        self,
        room_id: int,
        room_number: Optional[int],
        room_type: Optional[str],
        price_per_night: Optional[Decimal],
        available: bool
    ) -> Room:
        room = await self.get_room(room_id)
        room.room_number = room_number
        room.room_type = room_type
        room.price_per_night = price_per_night
        room.available = available
        return await self.room_repo.save(room)

    async def update_room_price(self, room_id: int, price_per_night: Optional[Decimal]) -> Room:
        room = await self.get_room(room_id)
        if price_per_night is not None:
            room.price_per_night = price_per_night
            await self.room_repo.save(room)
            logger.info("Room %s price set to %s", room_id, price_per_night)
        return room

    async def set_room_availability(self, room_id: int, available: bool) -> Room:
        room = await self.get_room(room_id)
        room.available = available
        return await self.room_repo.save(room)

    async def delete_room(self, room_id: int) -> bool:
        return await self.room_repo.delete(room_id)

    # ==================== FOOD ITEMS ====================
    async def list_food_items(self) -> List[FoodItem]:
        return await self.food_item_repo.find_all()

    async def get_food_item(self, food_item_id: int) -> FoodItem:
        food_item = await self.food_item_repo.find_by_id(food_item_id)
        if not food_item:
            raise NotFoundException("food item", food_item_id)
        return food_item

    async def create_food_item(
        self,
        name: Optional[str],
        cuisine: Optional[str],
        price: Optional[Decimal],
        image_url: Optional[str] = None
    ) -> FoodItem:
        food_item = FoodItem(name=name, cuisine=cuisine, price=price, image_url=image_url)
        return await self.food_item_repo.save(food_item)

    async def update_food_item(
        self,
        food_item_id: int,
        name: Optional[str],
        cuisine: Optional[str],
        price: Optional[Decimal]
    ) -> FoodItem:
        food_item = await self.get_food_item(food_item_id)
        food_item.name = name
        food_item.cuisine = cuisine
        food_item.price = price
        return await self.food_item_repo.save(food_item)

    async def delete_food_item(self, food_item_id: int) -> bool:
        return await self.food_item_repo.delete(food_item_id)


class AuthService:
    """Service for accounts"""

    def __init__(self, user_repo: UserRepository, booking_repo: Optional[BookingRepository] = None):
        self.user_repo = user_repo
        self.booking_repo = booking_repo

    async def register(self, email: str, password: str, full_name: Optional[str] = None) -> UserInDB:
        if await self.user_repo.find_by_email(email):
            raise EmailAlreadyRegistered(email)
        user = UserInDB(
            email=email,
            full_name=full_name,
            role=UserRole.USER,
            hashed_password=get_password_hash(password),
            created_at=datetime.now(timezone.utc)
        )
        return await self.user_repo.save(user)

    async def authenticate(self, email: str, password: str) -> Optional[UserInDB]:
        user = await self.user_repo.find_by_email(email)
        if not user or not verify_password(password, user.hashed_password):
            logger.info("Failed login for %s", email)
            return None
        return user

    async def list_users(self) -> List[UserInDB]:
        return await self.user_repo.find_all()

    async def get_user_details(self, user_id: int) -> Dict[str, Any]:
        """User with booking history and total spent"""
        user = await self.user_repo.find_by_id(user_id)
        if not user:
            raise NotFoundException("user", user_id)
        bookings = await self.booking_repo.find_by_user_id(user_id) if self.booking_repo else []
        return {
            "user": user,
            "bookings": bookings,
            "total_bookings": len(bookings),
            "total_spent": sum((b.total_amount or Decimal("0") for b in bookings), Decimal("0")),
        }

    async def delete_user(self, user_id: int) -> bool:
        """Delete a user together with their bookings"""
        user = await self.user_repo.find_by_id(user_id)
        if not user:
            raise NotFoundException("user", user_id)
        if self.booking_repo:
            for booking in await self.booking_repo.find_by_user_id(user_id):
                await self.booking_repo.delete(booking.booking_id)
        deleted = await self.user_repo.delete(user_id)
        logger.info("User %s deleted with their bookings", user.email)
        return deleted


class StatsService:
    """Admin dashboard figures"""

    def __init__(self,
                 user_repo: UserRepository,
                 room_repo: RoomRepository,
                 food_item_repo: FoodItemRepository,
                 booking_repo: BookingRepository):
        self.user_repo = user_repo
        self.room_repo = room_repo
        self.food_item_repo = food_item_repo
        self.booking_repo = booking_repo

    async def get_stats(self) -> Dict[str, Any]:
        users = await self.user_repo.find_all()
        rooms = await self.room_repo.find_all()
        food_items = await self.food_item_repo.find_all()
        bookings = await self.booking_repo.find_all()

        available_rooms = len([r for r in rooms if r.available])
        stats: Dict[str, Any] = {
            "total_users": len(users),
            "total_rooms": len(rooms),
            "available_rooms": available_rooms,
            "booked_rooms": len(rooms) - available_rooms,
            "total_food_items": len(food_items),
            "total_bookings": len(bookings),
        }
        for status in BookingStatus:
            stats[f"{status.value.lower()}_bookings"] = len([b for b in bookings if b.status == status])
        stats["total_revenue"] = sum((b.total_amount or Decimal("0") for b in bookings), Decimal("0"))
        return stats
