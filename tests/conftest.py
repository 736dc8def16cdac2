from datetime import date
from decimal import Decimal

import pytest

from models.donation_schedule import DonationHistoryEntry, DonationSchedule


class FakeScheduleRepository:
    """In-memory stand-in for ScheduleRepository."""

    def __init__(self, schedules=None, fail_listing=False, fail_advance_for=()):
        self.schedules = {s.id: s for s in (schedules or [])}
        self.history: list[DonationHistoryEntry] = []
        self.fail_listing = fail_listing
        self.fail_advance_for = set(fail_advance_for)
        self.listed = False

    def get_active(self):
        if self.fail_listing:
            raise RuntimeError("connection refused")
        self.listed = True
        return [s for s in self.schedules.values() if s.status == "active"]

    def advance(self, schedule, next_date, processed_at):
        if schedule.id in self.fail_advance_for:
            raise RuntimeError("update failed")
        stored = self.schedules[schedule.id]
        if stored.next_donation_date != schedule.next_donation_date:
            return None
        entry = DonationHistoryEntry(
            schedule_id=schedule.id,
            user_id=schedule.user_id,
            amount=schedule.amount,
            due_date=schedule.next_donation_date,
            processed_at=processed_at,
        )
        stored.next_donation_date = next_date
        stored.last_processed_at = processed_at
        stored.total_donated += schedule.amount
        stored.donation_count += 1
        self.history.append(entry)
        return entry


class FakeNotificationRepository:
    def __init__(self, fail_for_users=()):
        self.notifications = []
        self.fail_for_users = set(fail_for_users)

    def add(self, notification):
        if notification.user_id in self.fail_for_users:
            raise RuntimeError("insert failed")
        notification.id = len(self.notifications) + 1
        self.notifications.append(notification)
        return notification


def make_schedule(**overrides) -> DonationSchedule:
    fields = dict(
        id="sched-1",
        user_id="user-1",
        title="Weekly pantry gift",
        amount=Decimal("50.00"),
        frequency="weekly",
        next_donation_date=date(2024, 3, 1),
        reminder_enabled=True,
        reminder_days_before=1,
        status="active",
    )
    fields.update(overrides)
    return DonationSchedule(**fields)


@pytest.fixture
def today():
    return date(2024, 3, 1)


@pytest.fixture
def notification_repo():
    return FakeNotificationRepository()
