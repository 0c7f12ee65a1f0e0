"""In-Memory Repository Implementations"""
from itertools import count
from typing import Optional, List, Dict, Iterable, Any

from domain.repositories import UserRepository, RoomRepository, FoodItemRepository, BookingRepository
from domain.auth import UserInDB
from domain.entities import Booking, Room, FoodItem


def _unique(ids: Iterable[int]) -> List[int]:
    seen = []
    for item_id in ids:
        if item_id not in seen:
            seen.append(item_id)
    return seen


class InMemoryUserRepository(UserRepository):
    """In-memory implementation of UserRepository"""

    def __init__(self, initial_users: Optional[List[UserInDB]] = None):
        self._storage: Dict[int, UserInDB] = {}
        self._ids = count(1)
        for user in initial_users or []:
            self._store(user)

    def _store(self, user: UserInDB) -> UserInDB:
        if user.user_id is None:
            user.user_id = next(self._ids)
        self._storage[user.user_id] = user.model_copy()
        return user

    async def save(self, user: UserInDB) -> UserInDB:
        """Save user to memory"""
        return self._store(user)

    async def find_by_id(self, user_id: int) -> Optional[UserInDB]:
        """Find user by ID"""
        user = self._storage.get(user_id)
        return user.model_copy() if user else None

    async def find_by_email(self, email: str) -> Optional[UserInDB]:
        """Find user by email"""
        for user in self._storage.values():
            if user.email.lower() == email.lower():
                return user.model_copy()
        return None

    async def find_all(self) -> List[UserInDB]:
        """Find all users"""
        return [u.model_copy() for u in self._storage.values()]

    async def delete(self, user_id: int) -> bool:
        """Delete user"""
        if user_id in self._storage:
            del self._storage[user_id]
            return True
        return False


class InMemoryRoomRepository(RoomRepository):
    """In-memory implementation of RoomRepository"""

    def __init__(self):
        self._storage: Dict[int, Room] = {}
        self._ids = count(1)

    async def save(self, room: Room) -> Room:
        """Save room to memory"""
        if room.room_id is None:
            room.room_id = next(self._ids)
        self._storage[room.room_id] = room.model_copy()
        return room

    async def find_by_id(self, room_id: int) -> Optional[Room]:
        """Find room by ID"""
        room = self._storage.get(room_id)
        return room.model_copy() if room else None

    async def find_all_by_ids(self, room_ids: Iterable[int]) -> List[Room]:
        """Find the rooms that exist among the given IDs"""
        return [
            self._storage[room_id].model_copy()
            for room_id in _unique(room_ids)
            if room_id in self._storage
        ]

    async def find_all(self) -> List[Room]:
        """Find all rooms"""
        return [r.model_copy() for r in self._storage.values()]

    async def delete(self, room_id: int) -> bool:
        """Delete room"""
        if room_id in self._storage:
            del self._storage[room_id]
            return True
        return False


class InMemoryFoodItemRepository(FoodItemRepository):
    """In-memory implementation of FoodItemRepository"""

    def __init__(self):
        self._storage: Dict[int, FoodItem] = {}
        self._ids = count(1)

    async def save(self, food_item: FoodItem) -> FoodItem:
        """Save food item to memory"""
        if food_item.food_item_id is None:
            food_item.food_item_id = next(self._ids)
        self._storage[food_item.food_item_id] = food_item.model_copy()
        return food_item

    async def find_by_id(self, food_item_id: int) -> Optional[FoodItem]:
        """Find food item by ID"""
        item = self._storage.get(food_item_id)
        return item.model_copy() if item else None

    async def find_all_by_ids(self, food_item_ids: Iterable[int]) -> List[FoodItem]:
        """Find the food items that exist among the given IDs"""
        return [
            self._storage[item_id].model_copy()
            for item_id in _unique(food_item_ids)
            if item_id in self._storage
        ]

    async def find_all(self) -> List[FoodItem]:
        """Find all food items"""
        return [f.model_copy() for f in self._storage.values()]

    async def delete(self, food_item_id: int) -> bool:
        """Delete food item"""
        if food_item_id in self._storage:
            del self._storage[food_item_id]
            return True
        return False


class InMemoryBookingRepository(BookingRepository):
    """In-memory implementation of BookingRepository.

    A booking is kept as a row of scalar fields plus its room and food item
    memberships, the way join tables would hold them. Reads resolve the
    memberships against the catalog repositories, dropping ids that no
    longer exist, before running the booking's ``after_load`` hook.
    """

    def __init__(self, room_repo: RoomRepository, food_item_repo: FoodItemRepository):
        self.room_repo = room_repo
        self.food_item_repo = food_item_repo
        self._storage: Dict[int, Dict[str, Any]] = {}
        self._ids = count(1)

    @staticmethod
    def _to_record(booking: Booking) -> Dict[str, Any]:
        return {
            "row": booking.model_dump(exclude={"rooms", "food_items"}),
            "room_ids": [r.room_id for r in booking.rooms],
            "food_item_ids": [f.food_item_id for f in booking.food_items],
        }

    async def _materialize(self, record: Dict[str, Any]) -> Booking:
        booking = Booking(
            **record["row"],
            rooms=await self.room_repo.find_all_by_ids(record["room_ids"]),
            food_items=await self.food_item_repo.find_all_by_ids(record["food_item_ids"])
        )
        booking.after_load()
        return booking

    def _write(self, booking: Booking) -> None:
        booking.before_save()
        # row and memberships are replaced in one assignment
        self._storage[booking.booking_id] = self._to_record(booking)

    async def save(self, booking: Booking) -> Booking:
        """Save booking to memory"""
        if booking.booking_id is None:
            booking.booking_id = next(self._ids)
        self._write(booking)
        return booking

    async def find_by_id(self, booking_id: int) -> Optional[Booking]:
        """Find booking by ID"""
        record = self._storage.get(booking_id)
        if record is None:
            return None
        return await self._materialize(record)

    async def find_by_user_id(self, user_id: int) -> List[Booking]:
        """Find bookings owned by a user"""
        return [
            await self._materialize(record)
            for record in list(self._storage.values())
            if record["row"]["user_id"] == user_id
        ]

    async def find_all(self) -> List[Booking]:
        """Find all bookings"""
        return [await self._materialize(record) for record in list(self._storage.values())]

    async def update(self, booking: Booking) -> Booking:
        """Update booking"""
        if booking.booking_id in self._storage:
            self._write(booking)
            return booking
        raise ValueError("Booking not found")

    async def delete(self, booking_id: int) -> bool:
        """Delete booking"""
        if booking_id in self._storage:
            del self._storage[booking_id]
            return True
        return False
