"""
models/donation_schedule.py
---------------------------
Domain model for recurring donation schedules.
"""

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

FREQUENCIES = ("daily", "weekly", "monthly", "yearly")
ACTIVE = "active"


@dataclass
class DonationSchedule:
    """
    Represents a donor's recurring donation commitment.

    Schedules are created and edited by the web app. The job service only
    reads active ones and rolls them forward.

    Attributes:
        id: Database primary key (uuid string).
        user_id: Owner of the schedule.
        title: Friendly name shown in reminders (e.g., 'Weekly pantry gift').
        amount: Value of each recurrence.
        frequency: How often ('daily', 'weekly', 'monthly', 'yearly').
        next_donation_date: The next unprocessed occurrence.
        reminder_enabled: Whether reminder notifications are wanted.
        reminder_days_before: How many days before the due date to remind.
        status: Only 'active' schedules are processed.
        total_donated: Running sum of processed donations.
        donation_count: Running count of processed donations.
        last_processed_at: When the schedule was last rolled forward.
    """
    id: str
    user_id: str
    amount: Decimal
    frequency: str  # 'daily' | 'weekly' | 'monthly' | 'yearly'
    next_donation_date: date
    title: str = ""
    reminder_enabled: bool = True
    reminder_days_before: int = 1
    status: str = ACTIVE
    total_donated: Decimal = Decimal("0")
    donation_count: int = 0
    last_processed_at: Optional[datetime] = None

    def is_active(self) -> bool:
        return self.status == ACTIVE


@dataclass
class DonationHistoryEntry:
    """
    One row of the append-only donation ledger.

    `due_date` is the occurrence that was processed; together with
    `schedule_id` it identifies the entry, so a schedule's occurrence is
    never recorded twice.
    """
    schedule_id: str
    user_id: str
    amount: Decimal
    due_date: date
    processed_at: datetime
    status: str = "pending"
    id: Optional[int] = None
