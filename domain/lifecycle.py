"""Booking status lifecycle.

Status changes are unguarded: creation assigns CONFIRMED directly and an
administrator may move any booking to any status. All status writes go
through this class.
"""
import logging
from typing import TYPE_CHECKING, Optional

from domain.enums import BookingStatus
from domain.exceptions import UnknownStatus

if TYPE_CHECKING:
    from domain.entities import Booking

logger = logging.getLogger(__name__)


class BookingLifecycle:

    @staticmethod
    def initial_status() -> BookingStatus:
        # TODO: switch to PENDING once a payment step gates confirmation
        return BookingStatus.CONFIRMED

    @staticmethod
    def parse_status(value: Optional[str]) -> BookingStatus:
        """Case-insensitive match against the BookingStatus names"""
        if value is None:
            raise UnknownStatus(value)
        try:
            return BookingStatus[value.strip().upper()]
        except KeyError:
            raise UnknownStatus(value)

    @staticmethod
    def apply_initial_status(booking: "Booking") -> None:
        booking.status = BookingLifecycle.initial_status()

    @staticmethod
    def override_status(booking: "Booking", status: BookingStatus) -> None:
        """Set any status unconditionally"""
        if booking.status != status:
            logger.info(
                "Booking %s status %s -> %s",
                booking.booking_id, booking.status.value, status.value
            )
        booking.status = status
