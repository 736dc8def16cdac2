"""
services/pickup_service.py
--------------------------
Sends reminders for upcoming food pickups and marks them as sent.
"""

from dataclasses import dataclass, field
from datetime import date, time

from models.notification import PICKUP_REMINDER, Notification
from models.pickup import PickupReminder
from repositories.notification_repo import NotificationRepository
from repositories.pickup_repo import PickupRepository
from utils.exceptions import PickupFetchError
from utils.logger import get_logger

logger = get_logger(__name__)


def format_pickup_date(value: date) -> str:
    """e.g. 'Saturday, March 2, 2024'."""
    return f"{value:%A}, {value:%B} {value.day}, {value.year}"


def format_pickup_time(value: time | None) -> str:
    """e.g. '3:30 PM', or 'TBD' when no time was agreed."""
    if value is None:
        return "TBD"
    hour = value.hour % 12 or 12
    suffix = "AM" if value.hour < 12 else "PM"
    return f"{hour}:{value.minute:02d} {suffix}"


@dataclass
class PickupRunResult:
    processed: int = 0
    reminders_created: int = 0
    errors: list[str] = field(default_factory=list)

    def to_response(self) -> dict:
        return {
            "success": True,
            "processed": self.processed,
            "results": {
                "remindersCreated": self.reminders_created,
                "errors": list(self.errors),
            },
        }


class PickupReminderService:
    """
    Notifies claimers about their upcoming pickup.

    Workflow:
        1. Ask the database which claims need a reminder now.
        2. Insert a pickup_reminder notification for each claimer.
        3. Mark the claim so the reminder is not repeated.
    """

    def __init__(self, pickup_repo=None, notification_repo=None):
        self.pickup_repo = pickup_repo or PickupRepository()
        self.notification_repo = notification_repo or NotificationRepository()

    def process(self) -> PickupRunResult:
        """
        Raises:
            PickupFetchError: If the pending pickups could not be listed.
        """
        try:
            pickups = self.pickup_repo.get_needing_reminders()
        except Exception as e:
            raise PickupFetchError(f"Failed to fetch pickups needing reminders: {e}") from e

        result = PickupRunResult(processed=len(pickups))
        for pickup in pickups:
            try:
                self.notification_repo.add(self._build_reminder(pickup))
                self.pickup_repo.mark_reminder_sent(pickup.claim_id)
                result.reminders_created += 1
            except Exception as e:
                logger.error(f"Error processing pickup {pickup.claim_id}: {e}")
                result.errors.append(f"Error processing pickup {pickup.claim_id}: {e}")

        logger.info(
            f"Processed {result.processed} pickups: "
            f"{result.reminders_created} reminders, {len(result.errors)} errors"
        )
        return result

    @staticmethod
    def _build_reminder(pickup: PickupReminder) -> Notification:
        when = f"{format_pickup_date(pickup.pickup_date)} at {format_pickup_time(pickup.pickup_time)}"
        place = f" at {pickup.pickup_place}" if pickup.pickup_place else ""
        return Notification(
            user_id=pickup.claimer_id,
            type=PICKUP_REMINDER,
            title="Pickup Reminder",
            message=f"Don't forget! Your food pickup is scheduled for {when}{place}.",
            data={
                "claim_id": pickup.claim_id,
                "food_id": pickup.food_id,
                "pickup_date": pickup.pickup_date.isoformat(),
                "pickup_time": pickup.pickup_time.isoformat() if pickup.pickup_time else None,
                "pickup_place": pickup.pickup_place,
            },
        )
