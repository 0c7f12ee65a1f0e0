"""Booking confirmation notifiers"""
import logging
import smtplib
from abc import ABC, abstractmethod
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText

from domain.auth import User
from domain.entities import Booking
from infrastructure.config import Settings

logger = logging.getLogger(__name__)


class BookingNotifier(ABC):
    """Sends a best-effort confirmation once a booking is stored"""

    @abstractmethod
    def send_booking_confirmation(self, booking: Booking, user: User) -> None:
        pass


class LoggingBookingNotifier(BookingNotifier):
    """Notifier used when no mail server is configured"""

    def send_booking_confirmation(self, booking: Booking, user: User) -> None:
        logger.info(
            "Booking %s confirmation for %s (total %s)",
            booking.booking_id, user.email, booking.total_amount
        )


class EmailBookingNotifier(BookingNotifier):
    """SMTP confirmation emails"""

    def __init__(
        self,
        smtp_host: str,
        smtp_port: int = 587,
        smtp_user: str = "",
        smtp_password: str = "",
        sender_email: str = "",
        use_tls: bool = True,
    ):
        self.smtp_host = smtp_host
        self.smtp_port = smtp_port
        self.smtp_user = smtp_user
        self.smtp_password = smtp_password
        self.sender_email = sender_email or smtp_user
        self.use_tls = use_tls

    @staticmethod
    def render(booking: Booking, user: User) -> str:
        name = user.full_name or user.email
        check_in = booking.check_in_date.isoformat() if booking.check_in_date else "-"
        check_out = booking.check_out_date.isoformat() if booking.check_out_date else "-"
        return (
            f"Hello {name},\n\n"
            f"Your booking #{booking.booking_id} is {booking.status.value}.\n\n"
            f"Check-in: {check_in}\n"
            f"Check-out: {check_out}\n"
            f"Rooms: {len(booking.rooms)}\n"
            f"Food items: {len(booking.food_items)}\n"
            f"Total Amount: {booking.total_amount}\n\n"
            f"Thank you for staying with us.\n"
        )

    def send_booking_confirmation(self, booking: Booking, user: User) -> None:
        msg = MIMEMultipart()
        msg["From"] = self.sender_email
        msg["To"] = user.email
        msg["Subject"] = f"Booking Confirmation #{booking.booking_id}"
        msg.attach(MIMEText(self.render(booking, user), "plain", "utf-8"))

        with smtplib.SMTP(self.smtp_host, self.smtp_port) as server:
            if self.use_tls:
                server.starttls()
            if self.smtp_user:
                server.login(self.smtp_user, self.smtp_password)
            server.send_message(msg)

        logger.info("Confirmation email sent to %s for booking %s", user.email, booking.booking_id)


def build_notifier(settings: Settings) -> BookingNotifier:
    if not settings.SMTP_HOST:
        return LoggingBookingNotifier()
    return EmailBookingNotifier(
        smtp_host=settings.SMTP_HOST,
        smtp_port=settings.SMTP_PORT,
        smtp_user=settings.SMTP_USER,
        smtp_password=settings.SMTP_PASSWORD,
        sender_email=settings.MAIL_SENDER,
        use_tls=settings.SMTP_USE_TLS,
    )
