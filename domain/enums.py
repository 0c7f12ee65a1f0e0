"""Domain Enums"""
from enum import Enum


class BookingStatus(str, Enum):
    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    CANCELLED = "CANCELLED"
    COMPLETED = "COMPLETED"


class UserRole(str, Enum):
    USER = "USER"
    ADMIN = "ADMIN"
