"""
services/schedule_service.py
----------------------------
Recurring donation processing: reminders and rolling schedules forward.

Called once per day by the external scheduler through the
/process-donation-schedules endpoint.
"""

from concurrent.futures import ThreadPoolExecutor, wait
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta, timezone
from typing import Optional

from dateutil.relativedelta import relativedelta

from config import CURRENCY_SYMBOL, JOB_DEADLINE_SECONDS, JOB_MAX_WORKERS
from models.donation_schedule import FREQUENCIES, DonationSchedule
from models.notification import DONATION_REMINDER, Notification
from repositories.notification_repo import NotificationRepository
from repositories.schedule_repo import ScheduleRepository
from utils.exceptions import InvalidScheduleError, ScheduleFetchError
from utils.logger import get_logger

logger = get_logger(__name__)

_STEPS = {
    "daily": timedelta(days=1),
    "weekly": timedelta(weeks=1),
    "monthly": relativedelta(months=1),
    "yearly": relativedelta(years=1),
}


def calculate_next_date(current: date, frequency: str) -> date:
    """
    Advance a due date by one cadence step.

    Months and years are calendar steps; a day that does not exist in the
    target month is clamped to its last day (Jan 31 -> Feb 28/29,
    Feb 29 -> Feb 28 of the next year).

    Raises:
        InvalidScheduleError: If the frequency is unknown.
    """
    step = _STEPS.get(frequency)
    if step is None:
        raise InvalidScheduleError(f"Unknown frequency '{frequency}'")
    return current + step


def days_until(due: date, today: date) -> int:
    """Whole calendar days from `today` to `due` (negative when overdue)."""
    return (due - today).days


@dataclass
class ScheduleError:
    """A failure while processing one schedule."""
    schedule_id: str
    message: str

    def __str__(self) -> str:
        return f"Error processing schedule {self.schedule_id}: {self.message}"


@dataclass
class ScheduleRunResult:
    """Summary of one pass over the active schedules."""
    schedules_scanned: int = 0
    reminders_created: int = 0
    schedules_advanced: int = 0
    errors: list[ScheduleError] = field(default_factory=list)

    def to_response(self) -> dict:
        """Shape the result as the JSON body returned to the trigger."""
        return {
            "success": True,
            "processed": self.schedules_scanned,
            "results": {
                "remindersCreated": self.reminders_created,
                "donationsProcessed": self.schedules_advanced,
                "errors": [str(e) for e in self.errors],
            },
        }


@dataclass
class _Outcome:
    reminded: bool = False
    advanced: bool = False
    error: Optional[str] = None


class ScheduleService:
    """
    Processes every active donation schedule for a given day.

    Responsibilities:
        - Emit a reminder when a schedule is exactly `reminder_days_before`
          days away.
        - Roll due (or overdue) schedules forward by one cadence step and
          append a pending history entry.
        - Keep going when a single schedule fails; only a failure to list
          schedules aborts the run.
    """

    def __init__(
        self,
        schedule_repo=None,
        notification_repo=None,
        max_workers: int = JOB_MAX_WORKERS,
        deadline_seconds: float = JOB_DEADLINE_SECONDS,
    ):
        self.schedule_repo = schedule_repo or ScheduleRepository()
        self.notification_repo = notification_repo or NotificationRepository()
        self.max_workers = max(1, max_workers)
        self.deadline_seconds = deadline_seconds
        self._executors: list[ThreadPoolExecutor] = []

    def process(self, today: Optional[date] = None) -> ScheduleRunResult:
        """
        Run one pass.

        Args:
            today: The run date. Defaults to the current UTC date.

        Returns:
            ScheduleRunResult with counts and per-schedule errors.

        Raises:
            ScheduleFetchError: If the active schedules could not be listed.
        """
        processed_at = datetime.now(timezone.utc)
        today = today or processed_at.date()
        try:
            schedules = [s for s in self.schedule_repo.get_active() if s.is_active()]
        except Exception as e:
            raise ScheduleFetchError(f"Failed to fetch schedules: {e}") from e

        result = ScheduleRunResult(schedules_scanned=len(schedules))
        if not schedules:
            return result

        timeout = self.deadline_seconds if self.deadline_seconds > 0 else None

        executor = ThreadPoolExecutor(max_workers=self.max_workers)
        self._executors.append(executor)
        try:
            futures = {
                executor.submit(self._apply, schedule, today, processed_at): schedule
                for schedule in schedules
            }
            done, _ = wait(futures, timeout=timeout)
        finally:
            executor.shutdown(wait=False, cancel_futures=True)

        for future, schedule in futures.items():
            if future not in done:
                logger.error(f"Schedule {schedule.id} not processed before the run deadline")
                result.errors.append(ScheduleError(schedule.id, "deadline exceeded"))
                continue
            outcome = future.result()
            result.reminders_created += outcome.reminded
            result.schedules_advanced += outcome.advanced
            if outcome.error is not None:
                result.errors.append(ScheduleError(schedule.id, outcome.error))

        logger.info(
            f"Processed {result.schedules_scanned} schedules for {today}: "
            f"{result.reminders_created} reminders, "
            f"{result.schedules_advanced} advanced, {len(result.errors)} errors"
        )
        return result

    def close(self) -> None:
        """Wait for workers still running past the deadline to finish."""
        while self._executors:
            self._executors.pop().shutdown(wait=True)

    def _apply(self, schedule: DonationSchedule, today: date, processed_at: datetime) -> _Outcome:
        """Reminder check, then due check, for a single schedule."""
        outcome = _Outcome()
        try:
            self._validate(schedule)
            remaining = days_until(schedule.next_donation_date, today)

            if schedule.reminder_enabled and remaining == schedule.reminder_days_before:
                self.notification_repo.add(self._build_reminder(schedule))
                outcome.reminded = True

            if remaining <= 0:
                next_date = calculate_next_date(schedule.next_donation_date, schedule.frequency)
                entry = self.schedule_repo.advance(schedule, next_date, processed_at)
                if entry is not None:
                    outcome.advanced = True
                    logger.info(
                        f"Advanced schedule {schedule.id} from "
                        f"{schedule.next_donation_date} to {next_date}"
                    )
        except Exception as e:
            logger.error(f"Error processing schedule {schedule.id}: {e}")
            outcome.error = str(e)
        return outcome

    @staticmethod
    def _validate(schedule: DonationSchedule) -> None:
        if schedule.frequency not in FREQUENCIES:
            raise InvalidScheduleError(f"Unknown frequency '{schedule.frequency}'")
        if schedule.amount <= 0:
            raise InvalidScheduleError(f"Amount must be positive, got {schedule.amount}")
        if schedule.next_donation_date is None:
            raise InvalidScheduleError("Missing next_donation_date")

    @staticmethod
    def _build_reminder(schedule: DonationSchedule) -> Notification:
        return Notification(
            user_id=schedule.user_id,
            type=DONATION_REMINDER,
            title="Upcoming Donation",
            message=(
                f"Your donation of {CURRENCY_SYMBOL}{schedule.amount:.2f} "
                f"for \"{schedule.title}\" is scheduled for "
                f"{schedule.next_donation_date.isoformat()}"
            ),
        )
