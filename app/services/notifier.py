"""
Outbound booking notifications (email / SMS).

Delivery is fire-and-forget: routers schedule ``dispatch_*`` as FastAPI
background tasks after the booking transaction has committed, and any
failure in the backend is logged and dropped. A notifier can never roll back
or fail a booking.
"""
import logging

from app.core.config import settings
from app.core.exceptions import NotificationError
from app.schemas.booking import BookingNotice

logger = logging.getLogger(__name__)


class Notifier:
    """Backend interface. Implementations raise NotificationError on failure."""

    def send_booking_confirmation(self, notice: BookingNotice) -> None:
        raise NotImplementedError

    def send_booking_cancellation(self, notice: BookingNotice) -> None:
        raise NotImplementedError


class MockNotifier(Notifier):
    """Development backend: writes the email and SMS it would send to the log."""

    def _send_email(self, to: str, subject: str, body: str) -> None:
        logger.info("[MOCK EMAIL] To: %s | Subject: %s | Body: %s", to, subject, body)

    def _send_sms(self, mobile: str, body: str) -> None:
        if mobile:
            logger.info("[MOCK SMS] To: %s | %s", mobile, body)

    def send_booking_confirmation(self, notice: BookingNotice) -> None:
        body = (
            f"Booking Confirmed! Movie: {notice.movie_title} | "
            f"Time: {notice.start_time:%Y-%m-%d %H:%M} | "
            f"Seats: {', '.join(notice.seat_labels)} | "
            f"Booking ID: #{notice.booking_id}"
        )
        self._send_email(notice.user_email, "Booking Confirmed!", body)
        self._send_sms(notice.user_mobile, body)

    def send_booking_cancellation(self, notice: BookingNotice) -> None:
        body = (
            f"Your booking #{notice.booking_id} for {notice.movie_title} "
            f"({notice.ticket_count} tickets) has been cancelled."
        )
        self._send_email(notice.user_email, "Booking Cancelled", body)
        self._send_sms(notice.user_mobile, body)


_notifier: Notifier = MockNotifier()


def get_notifier() -> Notifier:
    """FastAPI dependency; override it to plug in a real backend."""
    return _notifier


def dispatch_booking_confirmation(notifier: Notifier, notice: BookingNotice) -> None:
    if not settings.NOTIFICATIONS_ENABLED:
        return
    try:
        notifier.send_booking_confirmation(notice)
    except NotificationError as exc:
        logger.warning("Confirmation for booking %s not delivered: %s", notice.booking_id, exc)
    except Exception:
        logger.exception("Notifier crashed on booking %s confirmation.", notice.booking_id)


def dispatch_booking_cancellation(notifier: Notifier, notice: BookingNotice) -> None:
    if not settings.NOTIFICATIONS_ENABLED:
        return
    try:
        notifier.send_booking_cancellation(notice)
    except NotificationError as exc:
        logger.warning("Cancellation for booking %s not delivered: %s", notice.booking_id, exc)
    except Exception:
        logger.exception("Notifier crashed on booking %s cancellation.", notice.booking_id)
