"""Domain Repository Interfaces"""
from abc import ABC, abstractmethod
from typing import Optional, List, Iterable

from domain.auth import UserInDB
from domain.entities import Booking, Room, FoodItem


class UserRepository(ABC):
    """Repository interface for Users (the user directory)"""

    @abstractmethod
    async def save(self, user: UserInDB) -> UserInDB:
        """Save user"""
        pass

    @abstractmethod
    async def find_by_id(self, user_id: int) -> Optional[UserInDB]:
        """Find user by ID"""
        pass

    @abstractmethod
    async def find_by_email(self, email: str) -> Optional[UserInDB]:
        """Find user by email"""
        pass

    @abstractmethod
    async def find_all(self) -> List[UserInDB]:
        """Find all users"""
        pass

    @abstractmethod
    async def delete(self, user_id: int) -> bool:
        """Delete user"""
        pass


class RoomRepository(ABC):
    """Repository interface for catalog Rooms"""

    @abstractmethod
    async def save(self, room: Room) -> Room:
        """Save room, assigning an ID if it has none"""
        pass

    @abstractmethod
    async def find_by_id(self, room_id: int) -> Optional[Room]:
        """Find room by ID"""
        pass

    @abstractmethod
    async def find_all_by_ids(self, room_ids: Iterable[int]) -> List[Room]:
        """Find the rooms that exist among the given IDs"""
        pass

    @abstractmethod
    async def find_all(self) -> List[Room]:
        """Find all rooms"""
        pass

    @abstractmethod
    async def delete(self, room_id: int) -> bool:
        """Delete room"""
        pass


class FoodItemRepository(ABC):
    """Repository interface for catalog Food Items"""

    @abstractmethod
    async def save(self, food_item: FoodItem) -> FoodItem:
        """Save food item, assigning an ID if it has none"""
        pass

    @abstractmethod
    async def find_by_id(self, food_item_id: int) -> Optional[FoodItem]:
        """Find food item by ID"""
        pass

    @abstractmethod
    async def find_all_by_ids(self, food_item_ids: Iterable[int]) -> List[FoodItem]:
        """Find the food items that exist among the given IDs"""
        pass

    @abstractmethod
    async def find_all(self) -> List[FoodItem]:
        """Find all food items"""
        pass

    @abstractmethod
    async def delete(self, food_item_id: int) -> bool:
        """Delete food item"""
        pass


class BookingRepository(ABC):
    """Repository interface for Booking Aggregate.

    Implementations return fully materialized bookings with ``after_load``
    already applied, and call ``before_save`` ahead of every write.
    """

    @abstractmethod
    async def save(self, booking: Booking) -> Booking:
        """Save new booking"""
        pass

    @abstractmethod
    async def find_by_id(self, booking_id: int) -> Optional[Booking]:
        """Find booking by ID"""
        pass

    @abstractmethod
    async def find_by_user_id(self, user_id: int) -> List[Booking]:
        """Find bookings owned by a user"""
        pass

    @abstractmethod
    async def find_all(self) -> List[Booking]:
        """Find all bookings"""
        pass

    @abstractmethod
    async def update(self, booking: Booking) -> Booking:
        """Update booking"""
        pass

    @abstractmethod
    async def delete(self, booking_id: int) -> bool:
        """Delete booking"""
        pass
