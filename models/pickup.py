"""
models/pickup.py
----------------
Read model for food pickups that are due for a reminder.
"""

from dataclasses import dataclass
from datetime import date, time
from typing import Optional


@dataclass
class PickupReminder:
    """A claimed food pickup, as returned by get_pickups_needing_reminders()."""
    claim_id: str
    claimer_id: str
    food_id: str
    pickup_date: date
    pickup_time: Optional[time] = None
    pickup_place: Optional[str] = None
    reminder_hours_before: int = 24
